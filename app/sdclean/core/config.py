"""Cleaner configuration model and TOML file I/O.

The configuration extends, and never replaces, the built-in protected
folders. Everything it produces (guard, rules, vetoes) is immutable and
built fresh for each job.
"""

import os
import tomllib
from pathlib import Path
from typing import Annotated, Any

import tomli_w
from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from sdclean.cleanup.decision import Veto, min_age_veto, min_size_veto
from sdclean.cleanup.errors import ConfigError
from sdclean.cleanup.guard import DEFAULT_STORAGE_ROOT, PathGuard
from sdclean.cleanup.rules import DEFAULT_JUNK_DIR_NAMES, DEFAULT_JUNK_GLOBS, RuleSet
from sdclean.core.paths import get_config_path

DEFAULT_TERMUX_PREFIX = "/data/data/com.termux/files/usr"


class ConfigNotFoundError(ConfigError):
    """Raised when the config file is not found."""


class ConfigParseError(ConfigError):
    """Raised when the config file cannot be parsed."""


class ConfigValidationError(ConfigError):
    """Raised when config content is invalid."""


class CleanerConfig(BaseModel):
    """User configuration for cleanup jobs.

    Attributes:
        dry_run: Preview instead of deleting by default.
        report_limit: Maximum rows a report shows (caller-side only).
        storage_root: Absolute path of shared storage.
        termux_prefix: Termux $PREFIX; falls back to the environment.
        protected_paths: Extra protected paths, added to the defaults.
        junk_globs: Filename globs for junk files.
        junk_dir_names: Directory names marking junk subtrees.
        empty_dir_keep: Paths whose empty subdirectories are preserved.
        min_age_days: Skip entries modified more recently than this.
        min_size_bytes: Skip entries smaller than this.
    """

    model_config = ConfigDict(extra="forbid")

    dry_run: Annotated[bool, Field(description="Preview instead of deleting")] = False
    report_limit: Annotated[int, Field(ge=1, description="Rows shown in reports")] = 30
    storage_root: Annotated[str, Field(description="Shared storage root")] = DEFAULT_STORAGE_ROOT
    termux_prefix: Annotated[str | None, Field(description="Termux $PREFIX")] = None
    protected_paths: Annotated[
        list[str],
        Field(default_factory=list, description="Extra protected paths"),
    ]
    junk_globs: Annotated[
        list[str],
        Field(default_factory=lambda: list(DEFAULT_JUNK_GLOBS), description="Junk file globs"),
    ]
    junk_dir_names: Annotated[
        list[str],
        Field(
            default_factory=lambda: list(DEFAULT_JUNK_DIR_NAMES),
            description="Junk directory names",
        ),
    ]
    empty_dir_keep: Annotated[
        list[str],
        Field(default_factory=list, description="Paths whose empty dirs are kept"),
    ]
    min_age_days: Annotated[float | None, Field(ge=0, description="Minimum entry age")] = None
    min_size_bytes: Annotated[int | None, Field(ge=0, description="Minimum entry size")] = None

    @field_validator("storage_root", "termux_prefix")
    @classmethod
    def validate_absolute(cls, v: str | None) -> str | None:
        """Validate that root paths are absolute."""
        if v is not None and not os.path.isabs(v):
            msg = f"path must be absolute, got {v!r}"
            raise ValueError(msg)
        return v

    @field_validator("protected_paths", "empty_dir_keep")
    @classmethod
    def validate_absolute_list(cls, v: list[str]) -> list[str]:
        """Validate that every listed path is absolute."""
        for path in v:
            if not os.path.isabs(path):
                msg = f"path must be absolute, got {path!r}"
                raise ValueError(msg)
        return v

    def guard(self) -> PathGuard:
        """Build the protected path guard: defaults plus configured extras."""
        return PathGuard.default(self.storage_root).extended(self.protected_paths)

    def rule_set(self, **overrides: Any) -> RuleSet:
        """Build a RuleSet from the configured patterns.

        Args:
            **overrides: RuleSet fields to replace (e.g., max_depth=3).
        """
        fields: dict[str, Any] = {
            "junk_globs": tuple(self.junk_globs),
            "junk_dir_names": tuple(self.junk_dir_names),
            "empty_dir_keep": tuple(self.empty_dir_keep),
        }
        fields.update(overrides)
        return RuleSet(**fields)

    def vetoes(self) -> list[Veto]:
        """Build the age and size vetoes that are configured."""
        vetoes: list[Veto] = []
        if self.min_age_days is not None:
            vetoes.append(min_age_veto(self.min_age_days * 86400))
        if self.min_size_bytes is not None:
            vetoes.append(min_size_veto(self.min_size_bytes))
        return vetoes

    def resolved_termux_prefix(self) -> str:
        """Termux prefix from config, then $PREFIX, then the stock location."""
        if self.termux_prefix:
            return self.termux_prefix
        env_prefix = os.environ.get("PREFIX")
        if env_prefix and os.path.isabs(env_prefix):
            return env_prefix
        return DEFAULT_TERMUX_PREFIX


def load_config(path: Path | None = None) -> CleanerConfig:
    """Load and validate a config from a TOML file.

    Args:
        path: Path to the config file. If None, uses the default path.

    Returns:
        Validated CleanerConfig.

    Raises:
        ConfigNotFoundError: If the config file doesn't exist.
        ConfigParseError: If the TOML syntax is invalid.
        ConfigValidationError: If the content doesn't match the schema.
    """
    config_path = path or get_config_path()

    if not config_path.exists():
        raise ConfigNotFoundError(f"Config not found: {config_path}")

    try:
        with open(config_path, "rb") as f:
            data = tomllib.load(f)
    except tomllib.TOMLDecodeError as e:
        raise ConfigParseError(f"Invalid TOML syntax: {e}") from e
    except OSError as e:
        raise ConfigError(f"Failed to read config: {e}") from e

    try:
        return CleanerConfig.model_validate(data)
    except ValidationError as e:
        raise ConfigValidationError(f"Invalid config content: {e}") from e


def load_config_or_default(path: Path | None = None) -> CleanerConfig:
    """Load the config file, or return defaults when there is none.

    Raises:
        ConfigParseError: If the file exists but is not valid TOML.
        ConfigValidationError: If the file exists but is invalid.
    """
    try:
        return load_config(path)
    except ConfigNotFoundError:
        return CleanerConfig()


def save_config(config: CleanerConfig, path: Path | None = None) -> Path:
    """Save a config to a TOML file.

    The file is written atomically via a temporary file in the same
    directory and os.replace().

    Args:
        config: The config to save.
        path: Destination. If None, uses the default path.

    Returns:
        Path where the config was saved.

    Raises:
        ConfigError: If the file cannot be written.
    """
    from tempfile import NamedTemporaryFile

    config_path = path or get_config_path()
    # tomli_w cannot encode None
    data = config.model_dump(exclude_none=True)

    tmp_path: Path | None = None
    try:
        config_path.parent.mkdir(parents=True, exist_ok=True)
        with NamedTemporaryFile(
            mode="wb",
            dir=config_path.parent,
            delete=False,
            suffix=".tmp",
        ) as f:
            tmp_path = Path(f.name)
            tomli_w.dump(data, f)
        os.replace(str(tmp_path), str(config_path))
    except OSError as e:
        if tmp_path is not None and tmp_path.exists():
            tmp_path.unlink()
        raise ConfigError(f"Failed to write config: {e}") from e

    return config_path
