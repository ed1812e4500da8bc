"""Applies cleanup decisions to the filesystem.

Handles dry-run previews, single-file removal, whole-subtree removal,
and per-entry failure isolation.
"""

import logging
import os
import shutil

from sdclean.cleanup.errors import DeleteError, GuardViolation
from sdclean.cleanup.events import CleanupEvent, EventSink, NullEventSink
from sdclean.cleanup.guard import PathGuard
from sdclean.cleanup.models import Candidate, CandidateKind, Decision, Outcome, OutcomeKind

logger = logging.getLogger(__name__)


class Executor:
    """Performs or previews accepted decisions.

    In dry-run mode nothing is opened for writing and nothing is
    removed; entries are only stat'ed to report their size. The mode is
    fixed at construction so one executor never mixes the two.

    Args:
        guard: Protected path guard, checked once more before acting.
        dry_run: If True, report what would be deleted without deleting.
        sink: Receiver for one event per applied decision.
        job: Job name attached to emitted events.
    """

    def __init__(
        self,
        guard: PathGuard,
        *,
        dry_run: bool,
        sink: EventSink | None = None,
        job: str | None = None,
    ) -> None:
        self._guard = guard
        self._dry_run = dry_run
        self._sink: EventSink = sink if sink is not None else NullEventSink()
        self._job = job

    @property
    def dry_run(self) -> bool:
        return self._dry_run

    def apply(self, decision: Decision) -> Outcome:
        """Apply a single decision.

        Args:
            decision: Decision from the DecisionEngine.

        Returns:
            Outcome describing what happened.

        Raises:
            GuardViolation: If an accepted decision targets a protected path.
        """
        candidate = decision.candidate

        if not decision.accepted:
            outcome = Outcome(path=candidate.path, kind=OutcomeKind.SKIPPED, reason=decision.reason)
        else:
            self._check_guard(candidate)
            if self._dry_run:
                outcome = self._preview(decision)
            else:
                outcome = self._delete(decision)

        self._sink.emit(CleanupEvent.from_outcome(outcome, job=self._job))
        return outcome

    def _check_guard(self, candidate: Candidate) -> None:
        if self._guard.is_protected(candidate.path):
            raise GuardViolation(candidate.path)
        if candidate.kind != CandidateKind.FILE and self._guard.encloses_protected(
            candidate.path
        ):
            raise GuardViolation(candidate.path)

    def _preview(self, decision: Decision) -> Outcome:
        candidate = decision.candidate
        size = candidate.size or 0
        logger.info("Dry-run: would delete %s (%d bytes)", candidate.path, size)
        return Outcome(
            path=candidate.path,
            kind=OutcomeKind.PREVIEWED,
            bytes=size,
            reason=decision.reason,
        )

    def _delete(self, decision: Decision) -> Outcome:
        """Remove a candidate from disk.

        Dispatches on the candidate kind:
        - Files and symlinks: os.unlink (the link target is never touched)
        - Junk subtrees: shutil.rmtree
        - Empty directory chains: os.rmdir, deepest first (fails if content
          appeared since the scan)
        """
        candidate = decision.candidate
        size = candidate.size or 0

        try:
            if candidate.kind == CandidateKind.FILE:
                os.unlink(candidate.path)
            elif candidate.kind == CandidateKind.DIRECTORY:
                shutil.rmtree(candidate.path)
            else:
                _remove_empty_tree(candidate.path)
        except OSError as e:
            error = DeleteError(candidate.path, e.strerror or str(e))
            logger.warning("%s", error)
            return Outcome(
                path=candidate.path,
                kind=OutcomeKind.FAILED,
                reason=decision.reason,
                error=error.cause,
            )

        logger.info("Deleted %s (%d bytes)", candidate.path, size)
        return Outcome(
            path=candidate.path,
            kind=OutcomeKind.DELETED,
            bytes=size,
            reason=decision.reason,
        )


def _remove_empty_tree(path: str) -> None:
    """Remove a directory and its empty subdirectories, deepest first.

    Only directories are removed. Any file left in the chain makes the
    enclosing os.rmdir raise.
    """
    for dirpath, _dirnames, _filenames in os.walk(path, topdown=False, onerror=_reraise):
        os.rmdir(dirpath)


def _reraise(error: OSError) -> None:
    raise error
