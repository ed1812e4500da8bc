"""CLI commands for sdclean.

This package contains all subcommand implementations.
"""

from sdclean.cli.commands import init, jobs, run

__all__ = ["init", "jobs", "run"]
