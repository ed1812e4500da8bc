"""Init command implementation.

Writes a config file holding the default settings.
"""

from pathlib import Path
from typing import Annotated

import typer
from rich.markup import escape

from sdclean.cleanup.errors import ConfigError
from sdclean.core.config import CleanerConfig, save_config
from sdclean.core.paths import get_config_path
from sdclean.utils.formatting import print_error, print_info, print_success


def init_config(
    config_path: Annotated[
        Path | None,
        typer.Option("--config", "-c", help="Where to write the config file."),
    ] = None,
    force: Annotated[
        bool,
        typer.Option("--force", "-f", help="Overwrite an existing config file."),
    ] = False,
) -> None:
    """Initialize a config file with the default settings."""
    path = config_path or get_config_path()

    if path.exists() and not force:
        print_error(f"Config already exists: {escape(str(path))}")
        print_info("Use --force to overwrite it.")
        raise typer.Exit(code=1)

    try:
        saved = save_config(CleanerConfig(), path)
    except ConfigError as e:
        print_error(escape(str(e)))
        raise typer.Exit(code=1) from e

    print_success(f"Config written to {escape(str(saved))}")
    print_info("Add folders to 'protected_paths' to keep them safe from every job.")
