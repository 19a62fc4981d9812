"""Main CLI application."""

import typer

from solvelt.cli.commands import config, explain, init

app = typer.Typer(
    name="solvelt",
    help="Solvelt - step-by-step explanations for homework photos",
    no_args_is_help=True,
)

explain.register(app)
config.register(app)
init.register(app)


def main() -> None:
    app()


if __name__ == "__main__":
    main()
