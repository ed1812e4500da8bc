"""Main CLI application entry point.

Defines the Typer application and global options.
"""

import logging
import sys
from typing import Annotated

import typer

from sdclean import __version__
from sdclean.cli.commands import init, jobs, run

# Create main Typer app
app = typer.Typer(
    name="sdclean",
    help="Guarded cache and junk cleanup for Android shared storage.",
    no_args_is_help=True,
    rich_markup_mode="rich",
    context_settings={"help_option_names": ["-h", "--help"]},
)


def version_callback(value: bool) -> None:
    """Print version and exit."""
    if value:
        typer.echo(f"sdclean version {__version__}")
        raise typer.Exit()


def _configure_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
        handlers=[logging.StreamHandler(sys.stderr)],
        force=True,
    )


@app.callback()
def main(
    ctx: typer.Context,
    version: Annotated[
        bool | None,
        typer.Option(
            "--version",
            "-V",
            callback=version_callback,
            is_eager=True,
            help="Show version and exit.",
        ),
    ] = None,
    verbose: Annotated[
        bool,
        typer.Option(
            "--verbose",
            "-v",
            help="Log every decision to stderr.",
        ),
    ] = False,
) -> None:
    """sdclean - Guarded cache and junk cleanup for Android shared storage.

    Removes cache folders and temporary files while never touching
    photos, videos, documents, or any other protected folder.
    """
    _configure_logging(verbose)
    ctx.ensure_object(dict)
    ctx.obj["verbose"] = verbose


# Register commands
app.command(name="jobs")(jobs.list_jobs)
app.command(name="run")(run.run_jobs_command)
app.command(name="init")(init.init_config)


if __name__ == "__main__":
    app()
