"""Cleanup job orchestration.

Composes Walker, DecisionEngine, and Executor over one or more scope
roots and aggregates the outcomes into a RunResult.
"""

import logging
import threading
from collections.abc import Callable, Iterable, Sequence
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass
from datetime import UTC, datetime

from sdclean.cleanup.decision import DecisionEngine, Veto
from sdclean.cleanup.errors import ConfigError, ReadError
from sdclean.cleanup.events import CleanupEvent, EventAction, EventSink, NullEventSink
from sdclean.cleanup.executor import Executor
from sdclean.cleanup.guard import PathGuard, normalize_path, path_segments
from sdclean.cleanup.models import Outcome, OutcomeKind
from sdclean.cleanup.rules import RuleSet
from sdclean.cleanup.walker import Walker

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class RunResult:
    """Aggregate result of one cleanup job.

    Attributes:
        job_name: Name of the job.
        dry_run: Whether entries were previewed rather than deleted.
        started_at: When the job started (UTC).
        finished_at: When the job finished (UTC).
        outcomes: One outcome per candidate, in walk order.
        read_errors: Directories that could not be read.
        cancelled: Whether the job was stopped before finishing its walk.
    """

    job_name: str
    dry_run: bool
    started_at: datetime
    finished_at: datetime
    outcomes: tuple[Outcome, ...] = ()
    read_errors: tuple[ReadError, ...] = ()
    cancelled: bool = False

    @property
    def completed(self) -> tuple[Outcome, ...]:
        """Outcomes that were previewed or deleted."""
        return tuple(
            o for o in self.outcomes if o.kind in (OutcomeKind.PREVIEWED, OutcomeKind.DELETED)
        )

    @property
    def entries(self) -> int:
        return len(self.completed)

    @property
    def bytes(self) -> int:
        return sum(o.bytes for o in self.completed)

    @property
    def failures(self) -> int:
        return sum(1 for o in self.outcomes if o.failed)

    @property
    def failure_reasons(self) -> list[str]:
        return [f"{o.path}: {o.error}" for o in self.outcomes if o.failed]

    @property
    def skipped(self) -> tuple[Outcome, ...]:
        return tuple(o for o in self.outcomes if o.kind == OutcomeKind.SKIPPED)

    @property
    def previewed_paths(self) -> list[str]:
        return [o.path for o in self.outcomes if o.kind == OutcomeKind.PREVIEWED]

    @property
    def deleted_paths(self) -> list[str]:
        return [o.path for o in self.outcomes if o.kind == OutcomeKind.DELETED]


def _dedupe_roots(roots: Iterable[str], *, case_sensitive: bool) -> tuple[str, ...]:
    """Drop duplicate roots and roots nested inside another root.

    Roots are compared with the guard's case rule. Order of the surviving
    roots is preserved.
    """
    unique: dict[tuple[str, ...], str] = {}
    for root in roots:
        unique.setdefault(path_segments(root, case_sensitive=case_sensitive), root)
    kept: list[str] = []
    for parts, root in unique.items():
        nested = any(other != parts and parts[: len(other)] == other for other in unique)
        if nested:
            logger.debug("Root %s is covered by another root, skipping", root)
            continue
        kept.append(root)
    return tuple(kept)


class CleanupJob:
    """Named cleanup operation over one or more scope roots.

    All configuration is validated on construction, before any
    filesystem access. ``cancel()`` may be called from another thread
    to stop the walk early; outcomes gathered so far are kept.

    Args:
        name: Job name reported in results and events.
        roots: Absolute directories to clean.
        rules: Junk selection rules.
        guard: Protected path guard. Defaults to the standard media folders.
        vetoes: Additional rejection predicates for the DecisionEngine.
        sink: Receiver for cleanup events.
        should_stop: Optional callable polled during the walk.

    Raises:
        ConfigError: If the name, roots, or rules are invalid.
    """

    def __init__(
        self,
        name: str,
        roots: Sequence[str],
        rules: RuleSet,
        *,
        guard: PathGuard | None = None,
        vetoes: Iterable[Veto] = (),
        sink: EventSink | None = None,
        should_stop: Callable[[], bool] | None = None,
    ) -> None:
        if not name or not name.strip():
            msg = "Job name cannot be empty"
            raise ConfigError(msg)
        if isinstance(roots, str):
            msg = "Roots must be a sequence of paths, not a single string"
            raise ConfigError(msg)
        if not roots:
            msg = f"Job {name!r} has no scope roots"
            raise ConfigError(msg)

        self._guard = guard if guard is not None else PathGuard.default()
        normalized = [normalize_path(root) for root in roots]
        for root in normalized:
            if self._guard.is_protected(root):
                msg = f"Scope root is a protected path: {root}"
                raise ConfigError(msg)
        rules.validate()

        self._name = name
        self._roots = _dedupe_roots(normalized, case_sensitive=self._guard.case_sensitive)
        self._rules = rules
        self._vetoes = tuple(vetoes)
        self._sink: EventSink = sink if sink is not None else NullEventSink()
        self._should_stop = should_stop
        self._stop = threading.Event()

    @property
    def name(self) -> str:
        return self._name

    @property
    def roots(self) -> tuple[str, ...]:
        return self._roots

    @property
    def rules(self) -> RuleSet:
        return self._rules

    @property
    def guard(self) -> PathGuard:
        return self._guard

    def cancel(self) -> None:
        """Ask a running job to stop at the next entry."""
        self._stop.set()

    def run(self, *, dry_run: bool) -> RunResult:
        """Walk every root, decide on each candidate, and apply the decision.

        Args:
            dry_run: If True, preview only. Applies to the whole run.

        Returns:
            Finalized RunResult.

        Raises:
            GuardViolation: If a protected path was about to be deleted.
        """
        started_at = datetime.now(UTC)
        mode = "dry-run" if dry_run else "live"
        logger.info("Starting %s job %s over %s", mode, self._name, ", ".join(self._roots))

        walker = Walker(
            self._guard,
            self._rules,
            should_stop=self._stopped,
            on_read_error=self._emit_read_error,
        )
        engine = DecisionEngine(self._guard, self._rules, self._vetoes)
        executor = Executor(self._guard, dry_run=dry_run, sink=self._sink, job=self._name)

        outcomes: list[Outcome] = []
        cancelled = False
        for root in self._roots:
            if self._stopped():
                cancelled = True
                break
            for candidate in walker.walk(root):
                outcome = executor.apply(engine.decide(candidate))
                if outcome.kind in (OutcomeKind.SKIPPED, OutcomeKind.FAILED):
                    walker.mark_kept(candidate.path)
                outcomes.append(outcome)

        result = RunResult(
            job_name=self._name,
            dry_run=dry_run,
            started_at=started_at,
            finished_at=datetime.now(UTC),
            outcomes=tuple(outcomes),
            read_errors=tuple(walker.read_errors),
            cancelled=cancelled or walker.interrupted,
        )
        logger.info(
            "Finished job %s: %d entries, %d bytes, %d failures",
            self._name,
            result.entries,
            result.bytes,
            result.failures,
        )
        return result

    def _stopped(self) -> bool:
        if self._stop.is_set():
            return True
        return self._should_stop is not None and self._should_stop()

    def _emit_read_error(self, error: ReadError) -> None:
        self._sink.emit(
            CleanupEvent(
                path=error.path,
                action=EventAction.READ_ERROR,
                error=error.cause,
                job=self._name,
            )
        )


def run_cleanup(
    job_name: str,
    roots: Sequence[str],
    rule_set: RuleSet,
    dry_run: bool,
    *,
    guard: PathGuard | None = None,
    vetoes: Iterable[Veto] = (),
    sink: EventSink | None = None,
    should_stop: Callable[[], bool] | None = None,
) -> RunResult:
    """Run one cleanup job.

    Args:
        job_name: Name reported in results and events.
        roots: Absolute directories to clean.
        rule_set: Junk selection rules.
        dry_run: If True, preview only.
        guard: Protected path guard. Defaults to the standard media folders.
        vetoes: Additional rejection predicates.
        sink: Receiver for cleanup events.
        should_stop: Optional callable polled during the walk.

    Returns:
        Finalized RunResult.

    Raises:
        ConfigError: If the job is misconfigured (nothing is touched).
        GuardViolation: If a protected path was about to be deleted.
    """
    job = CleanupJob(
        job_name,
        roots,
        rule_set,
        guard=guard,
        vetoes=vetoes,
        sink=sink,
        should_stop=should_stop,
    )
    return job.run(dry_run=dry_run)


def _check_disjoint(jobs: Sequence[CleanupJob]) -> None:
    # One case-insensitive guard is enough to make differently cased roots collide.
    case_sensitive = all(job.guard.case_sensitive for job in jobs)
    seen: list[tuple[str, tuple[str, ...]]] = []
    for job in jobs:
        job_parts = [path_segments(root, case_sensitive=case_sensitive) for root in job.roots]
        for parts in job_parts:
            for other_job, other in seen:
                shorter = min(len(parts), len(other))
                if parts[:shorter] == other[:shorter]:
                    msg = (
                        f"Jobs {other_job!r} and {job.name!r} have overlapping roots "
                        "and cannot run in parallel"
                    )
                    raise ConfigError(msg)
        seen.extend((job.name, parts) for parts in job_parts)


def run_jobs(
    jobs: Sequence[CleanupJob],
    *,
    dry_run: bool,
    parallel: bool = False,
    max_workers: int | None = None,
) -> list[RunResult]:
    """Run several jobs in the same mode.

    Sequential by default. With ``parallel=True`` every job must have
    roots disjoint from every other job.

    Args:
        jobs: Jobs to run, in order.
        dry_run: If True, preview only.
        parallel: Run jobs concurrently in a thread pool.
        max_workers: Thread pool size for parallel runs.

    Returns:
        One RunResult per job, in input order.

    Raises:
        ConfigError: If parallel jobs have overlapping roots.
        GuardViolation: If any job was about to delete a protected path.
    """
    if not parallel:
        return [job.run(dry_run=dry_run) for job in jobs]

    _check_disjoint(jobs)
    with ThreadPoolExecutor(max_workers=max_workers) as pool:
        futures = [pool.submit(job.run, dry_run=dry_run) for job in jobs]
        return [future.result() for future in futures]
