"""CLI interface module."""

from .recommend import cli, run

__all__ = ["cli", "run"]
