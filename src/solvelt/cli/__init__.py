"""Command-line interface."""

from solvelt.cli.app import app

__all__ = ["app"]
