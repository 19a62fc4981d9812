"""Explain command: the terminal front end for an explain session."""

import asyncio
import logging
from pathlib import Path
from typing import Annotated

import typer
from rich.markdown import Markdown
from rich.markup import escape
from rich.panel import Panel

from solvelt.cli.console import console, dim, error
from solvelt.config import ConfigError, SolveltConfig
from solvelt.explain import ExplanationPipeline
from solvelt.session import ExplainSession, Phase

logger = logging.getLogger(__name__)

TAGLINE = "Take a photo of a homework problem and get a step-by-step explanation."


def _build_pipeline(config: SolveltConfig) -> ExplanationPipeline:
    return ExplanationPipeline(config)


async def _run_explain(image_data: bytes, config: SolveltConfig) -> ExplainSession:
    session = ExplainSession(
        _build_pipeline(config),
        drop_stale_responses=config.session.drop_stale_responses,
    )
    if not session.pick_bytes(image_data):
        return session

    with console.status("Explaining this problem..."):
        await session.submit()
    return session


def register(app: typer.Typer) -> None:
    """Register the explain command."""

    @app.command()
    def explain(
        image: Annotated[
            Path,
            typer.Argument(help="Photo of the homework problem"),
        ],
        config_path: Annotated[
            Path | None,
            typer.Option(
                "--config",
                "-c",
                help="Path to configuration file",
            ),
        ] = None,
        verbose: Annotated[
            bool,
            typer.Option(
                "--verbose",
                "-v",
                help="Enable debug logging",
            ),
        ] = False,
    ) -> None:
        """Explain the homework problem in IMAGE step by step.

        Examples:
            solvelt explain worksheet.jpg
            solvelt explain ~/Pictures/calc.png --verbose
        """
        import tomllib

        from pydantic import ValidationError

        from solvelt.config import load_config
        from solvelt.logging import configure_logging

        configure_logging(level="DEBUG" if verbose else None, use_rich=True)

        try:
            config = load_config(config_path)
        except FileNotFoundError as e:
            error(escape(str(e)))
            raise typer.Exit(1) from None
        except tomllib.TOMLDecodeError as e:
            error(escape(f"Invalid TOML in config file: {e}"))
            raise typer.Exit(1) from None
        except ValidationError as e:
            error(f"Invalid configuration: {e.error_count()} error(s)")
            console.print("Run 'solvelt config validate' for details")
            raise typer.Exit(1) from None

        try:
            image_data = image.expanduser().read_bytes()
        except OSError as e:
            error(escape(f"Could not read {image}: {e.strerror or e}"))
            raise typer.Exit(1) from None
        logger.debug("Read %d bytes from %s", len(image_data), image)

        dim(TAGLINE)
        try:
            session = asyncio.run(_run_explain(image_data, config))
        except ConfigError as e:
            error(escape(str(e)))
            raise typer.Exit(1) from None

        state = session.state
        if state.image is None:
            error(escape(f"No image selected yet: {image} is not a readable image."))
            raise typer.Exit(1)

        if state.phase is Phase.FAILED:
            error(escape(state.result_text))
            raise typer.Exit(1)

        console.print(
            Panel(
                Markdown(state.result_text or "Your explanation will appear here."),
                title="Explanation",
                title_align="left",
            )
        )
