"""Accept/reject decisions for walker candidates.

The engine repeats the protected-path check the walker already made
and lets callers add their own vetoes (age, size) without touching
the walker.
"""

import logging
import os
import time
from collections.abc import Callable, Iterable
from dataclasses import dataclass

from sdclean.cleanup.guard import PathGuard
from sdclean.cleanup.models import Candidate, CandidateKind, Decision, DecisionReason
from sdclean.cleanup.rules import RuleSet

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class Veto:
    """Named predicate that rejects a candidate when it returns True.

    Attributes:
        name: Short identifier reported in the decision detail.
        check: Predicate called with each candidate.
    """

    name: str
    check: Callable[[Candidate], bool]


def min_age_veto(seconds: float, *, clock: Callable[[], float] = time.time) -> Veto:
    """Reject entries modified less than ``seconds`` ago.

    Entries whose modification time cannot be read are rejected too.

    Args:
        seconds: Minimum age in seconds.
        clock: Source of the current time.

    Returns:
        Veto named "min-age".
    """

    def _too_young(candidate: Candidate) -> bool:
        try:
            mtime = os.lstat(candidate.path).st_mtime
        except OSError:
            return True
        return clock() - mtime < seconds

    return Veto(name="min-age", check=_too_young)


def min_size_veto(min_bytes: int) -> Veto:
    """Reject entries smaller than ``min_bytes`` (or of unknown size)."""

    def _too_small(candidate: Candidate) -> bool:
        size = candidate.size
        return size is None or size < min_bytes

    return Veto(name="min-size", check=_too_small)


class DecisionEngine:
    """Turns candidates into decisions.

    Checks in order:
    1. Protected path (the candidate, or anything inside a subtree)
    2. Junk rule match
    3. Caller-supplied vetoes

    Args:
        guard: Protected path guard.
        rules: Junk selection rules the candidate must match.
        vetoes: Additional rejection predicates.
    """

    def __init__(self, guard: PathGuard, rules: RuleSet, vetoes: Iterable[Veto] = ()) -> None:
        self._guard = guard
        self._rules = rules
        self._vetoes = tuple(vetoes)

    def decide(self, candidate: Candidate) -> Decision:
        """Decide whether a candidate may be deleted.

        Args:
            candidate: Candidate produced by a walker.

        Returns:
            Decision with verdict and reason.
        """
        if self._guard.is_protected(candidate.path):
            logger.debug("Rejected protected path: %s", candidate.path)
            return Decision.reject(candidate, DecisionReason.PROTECTED_PATH)

        if candidate.kind != CandidateKind.FILE and self._guard.encloses_protected(
            candidate.path
        ):
            logger.debug("Rejected subtree containing a protected path: %s", candidate.path)
            return Decision.reject(
                candidate, DecisionReason.PROTECTED_PATH, "contains a protected path"
            )

        if not self._rules.matches_junk(candidate):
            return Decision.reject(candidate, DecisionReason.NO_MATCH)

        for veto in self._vetoes:
            if veto.check(candidate):
                logger.debug("Rejected by %s veto: %s", veto.name, candidate.path)
                return Decision.reject(candidate, DecisionReason.VETOED, veto.name)

        return Decision.accept(candidate)
