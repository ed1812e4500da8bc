"""Jobs command implementation.

Lists the named cleanup jobs and the roots they cover.
"""

from pathlib import Path
from typing import Annotated

import typer
from rich.markup import escape
from rich.table import Table

from sdclean.cleanup.errors import ConfigError
from sdclean.core.config import load_config_or_default
from sdclean.jobs import ALL_JOBS, job_specs
from sdclean.utils.formatting import console, print_error


def list_jobs(
    config_path: Annotated[
        Path | None,
        typer.Option("--config", "-c", help="Config file to read roots from."),
    ] = None,
) -> None:
    """List available cleanup jobs."""
    try:
        config = load_config_or_default(config_path)
    except ConfigError as e:
        print_error(escape(str(e)))
        raise typer.Exit(code=2) from e

    table = Table(
        title="Cleanup Jobs",
        show_header=True,
        header_style="bold_header",
        border_style="border",
    )
    table.add_column("Job", style="bold", no_wrap=True)
    table.add_column("Description")
    table.add_column("Roots", style="muted")

    for spec in job_specs(config):
        table.add_row(spec.name, spec.description, escape("\n".join(spec.roots)))
    table.add_row(ALL_JOBS, "Every job above, in order", "")

    console.print(table)
