"""Named cleanup jobs.

Each named job pairs a set of scope roots with a rule set, built from
the user's configuration. Callers (CLI, schedulers) pick jobs by name.
"""

import os
from collections.abc import Callable, Sequence
from dataclasses import dataclass

from sdclean.cleanup.errors import ConfigError
from sdclean.cleanup.events import EventSink
from sdclean.cleanup.job import CleanupJob
from sdclean.cleanup.rules import RuleSet
from sdclean.core.config import CleanerConfig

# Depth limit of the Downloads pass: the user's own folders below it are left alone.
DOWNLOADS_MAX_DEPTH = 3


@dataclass(frozen=True, slots=True)
class JobSpec:
    """Roots and rules of a named job.

    Attributes:
        name: Job name.
        description: One-line summary for listings.
        roots: Absolute scope roots.
        rules: Junk selection rules.
    """

    name: str
    description: str
    roots: tuple[str, ...]
    rules: RuleSet


def _termux_caches(config: CleanerConfig) -> JobSpec:
    prefix = config.resolved_termux_prefix()
    return JobSpec(
        name="termux-caches",
        description="Termux package caches, logs, and temp files",
        roots=(
            os.path.join(prefix, "var", "cache"),
            os.path.join(prefix, "var", "log"),
            os.path.join(prefix, "tmp"),
        ),
        rules=RuleSet(junk_globs=("*",), junk_dir_names=(), remove_empty_dirs=True),
    )


def _external_caches(config: CleanerConfig) -> JobSpec:
    storage = config.storage_root
    return JobSpec(
        name="external-caches",
        description="App cache folders and temp files in shared storage",
        roots=(
            os.path.join(storage, "Android", "data"),
            os.path.join(storage, "Android", "media"),
            storage,
        ),
        rules=config.rule_set(),
    )


def _downloads_junk(config: CleanerConfig) -> JobSpec:
    return JobSpec(
        name="downloads-junk",
        description="Partial and temp files in Download (3 levels deep)",
        roots=(os.path.join(config.storage_root, "Download"),),
        rules=config.rule_set(junk_dir_names=(), max_depth=DOWNLOADS_MAX_DEPTH),
    )


def _empty_dirs(config: CleanerConfig) -> JobSpec:
    return JobSpec(
        name="empty-dirs",
        description="Empty folders left behind by apps",
        roots=(config.storage_root,),
        rules=config.rule_set(junk_globs=(), junk_dir_names=(), remove_empty_dirs=True),
    )


_BUILDERS: dict[str, Callable[[CleanerConfig], JobSpec]] = {
    "termux-caches": _termux_caches,
    "external-caches": _external_caches,
    "downloads-junk": _downloads_junk,
    "empty-dirs": _empty_dirs,
}

ALL_JOBS = "all"

JOB_NAMES: tuple[str, ...] = (*_BUILDERS, ALL_JOBS)


def job_specs(config: CleanerConfig) -> list[JobSpec]:
    """Build every named job spec (excluding the "all" alias)."""
    return [build(config) for build in _BUILDERS.values()]


def build_job(name: str, config: CleanerConfig, sink: EventSink | None = None) -> CleanupJob:
    """Build a ready-to-run job by name.

    Args:
        name: One of the names in JOB_NAMES other than "all".
        config: User configuration.
        sink: Receiver for cleanup events.

    Returns:
        Validated CleanupJob.

    Raises:
        ConfigError: If the name is unknown or the job is invalid.
    """
    builder = _BUILDERS.get(name)
    if builder is None:
        msg = f"Unknown job {name!r}. Available: {', '.join(JOB_NAMES)}"
        raise ConfigError(msg)

    spec = builder(config)
    return CleanupJob(
        spec.name,
        spec.roots,
        spec.rules,
        guard=config.guard(),
        vetoes=config.vetoes(),
        sink=sink,
    )


def build_jobs(
    names: Sequence[str], config: CleanerConfig, sink: EventSink | None = None
) -> list[CleanupJob]:
    """Build jobs by name, expanding "all" and dropping repeats.

    Raises:
        ConfigError: If no names are given or any job is invalid.
    """
    if not names:
        msg = "No jobs selected"
        raise ConfigError(msg)

    expanded: list[str] = []
    for name in names:
        expanded.extend(_BUILDERS if name == ALL_JOBS else [name])

    return [build_job(name, config, sink) for name in dict.fromkeys(expanded)]
