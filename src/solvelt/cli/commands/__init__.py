"""CLI command modules."""

from solvelt.cli.commands import config, explain, init

__all__ = ["config", "explain", "init"]
