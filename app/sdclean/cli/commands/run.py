"""Run command implementation.

Runs one or more named cleanup jobs and reports their outcomes.
"""

import json
from enum import Enum
from pathlib import Path
from typing import Annotated, Any

import typer
from rich.markup import escape
from rich.table import Table

from sdclean.cleanup.errors import ConfigError, GuardViolation
from sdclean.cleanup.events import JsonlEventSink, ListEventSink
from sdclean.cleanup.job import RunResult, run_jobs
from sdclean.cleanup.models import OutcomeKind
from sdclean.core.config import load_config_or_default
from sdclean.core.paths import get_events_path
from sdclean.jobs import build_jobs
from sdclean.utils.formatting import (
    console,
    format_size,
    print_error,
    print_info,
    print_success,
    print_warning,
)


class OutputFormat(str, Enum):
    """Output format options for run results."""

    TABLE = "table"
    JSON = "json"


def run_jobs_command(
    job_names: Annotated[
        list[str],
        typer.Argument(metavar="JOB...", help="Jobs to run (see 'sdclean jobs')."),
    ],
    dry_run: Annotated[
        bool | None,
        typer.Option(
            "--dry-run/--live",
            envvar="DRY_RUN",
            help="Preview without deleting. Defaults to the config's dry_run.",
        ),
    ] = None,
    config_path: Annotated[
        Path | None,
        typer.Option("--config", "-c", help="Config file to use."),
    ] = None,
    limit: Annotated[
        int | None,
        typer.Option(
            "--limit",
            "-l",
            envvar="REPORT_LINES",
            min=1,
            help="Rows per job in the table. Defaults to the config's report_limit.",
        ),
    ] = None,
    output_format: Annotated[
        OutputFormat,
        typer.Option("--format", "-f", help="Output format.", case_sensitive=False),
    ] = OutputFormat.TABLE,
    no_log: Annotated[
        bool,
        typer.Option("--no-log", help="Do not append events to the event log."),
    ] = False,
) -> None:
    """Run cleanup jobs."""
    try:
        config = load_config_or_default(config_path)
    except ConfigError as e:
        print_error(escape(str(e)))
        raise typer.Exit(code=2) from e

    effective_dry_run = config.dry_run if dry_run is None else dry_run
    report_limit = limit or config.report_limit
    sink = ListEventSink()

    try:
        jobs = build_jobs(job_names, config, sink)
        results = run_jobs(jobs, dry_run=effective_dry_run)
    except GuardViolation as e:
        print_error(f"Aborted: {escape(str(e))}")
        raise typer.Exit(code=2) from e
    except ConfigError as e:
        print_error(escape(str(e)))
        raise typer.Exit(code=2) from e

    if not no_log and sink.events:
        _record_events(sink, get_events_path())

    if output_format == OutputFormat.JSON:
        console.print_json(json.dumps([_result_to_dict(r) for r in results]))
    else:
        for result in results:
            _print_result(result, report_limit)

    if any(r.failures for r in results):
        raise typer.Exit(code=1)


# === Private helper functions ===


def _record_events(sink: ListEventSink, path: Path) -> None:
    """Append collected events to the event log, warning on failure."""
    log = JsonlEventSink(path)
    try:
        for event in sink.events:
            log.emit(event)
    except OSError as e:
        print_warning(f"Could not write event log: {escape(str(e))}")


def _result_to_dict(result: RunResult) -> dict[str, Any]:
    return {
        "job": result.job_name,
        "dry_run": result.dry_run,
        "started_at": result.started_at.isoformat(),
        "finished_at": result.finished_at.isoformat(),
        "entries": result.entries,
        "bytes": result.bytes,
        "failures": result.failures,
        "failure_reasons": result.failure_reasons,
        "read_errors": [str(e) for e in result.read_errors],
        "cancelled": result.cancelled,
        "outcomes": [
            {
                "path": o.path,
                "outcome": o.kind.value,
                "bytes": o.bytes,
                "reason": o.reason.value if o.reason else None,
                "error": o.error,
            }
            for o in result.outcomes
        ],
    }


def _print_result(result: RunResult, limit: int) -> None:
    """Display one job's outcomes as a table followed by a summary."""
    title = f"{result.job_name} (dry-run)" if result.dry_run else result.job_name
    rows = [o for o in result.outcomes if o.kind != OutcomeKind.SKIPPED]

    if rows:
        table = Table(
            title=title,
            show_header=True,
            header_style="bold_header",
            border_style="border",
        )
        table.add_column("Status", width=10)
        table.add_column("Path", style="bold")
        table.add_column("Size", justify="right", width=10)
        table.add_column("Details", style="muted")

        for outcome in rows[:limit]:
            if outcome.kind == OutcomeKind.PREVIEWED:
                status = "[previewed]dry-run[/]"
                detail = "Would delete"
            elif outcome.kind == OutcomeKind.DELETED:
                status = "[deleted]deleted[/]"
                detail = ""
            else:
                status = "[error]failed[/]"
                detail = outcome.error or "Unknown error"
            table.add_row(status, escape(outcome.path), format_size(outcome.bytes), escape(detail))

        console.print(table)
        if len(rows) > limit:
            console.print(f"[dim](showing {limit} of {len(rows)}, limited to {limit})[/dim]")
    else:
        print_info(f"{title}: nothing to clean.")

    for error in result.read_errors:
        print_warning(escape(str(error)))

    size_str = format_size(result.bytes)
    if result.dry_run:
        print_info(f"Dry-run: {result.entries} entries ({size_str}) would be deleted.")
    elif result.failures:
        print_warning(f"{result.entries} deleted ({size_str}), {result.failures} failed")
    else:
        print_success(f"{result.entries} entries deleted ({size_str} freed).")

    if result.skipped:
        console.print(f"[skipped]{len(result.skipped)} entries kept (protected or vetoed).[/]")
