"""CLI package for sdclean.

This package contains the Typer application and all subcommands.
"""

from sdclean.cli.main import app

__all__ = ["app"]
