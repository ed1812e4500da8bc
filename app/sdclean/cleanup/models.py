"""Cleanup domain models.

This module defines the in-memory records that flow through one
cleanup job: candidates found by the walker, decisions made about
them, and the outcome of applying each decision.
"""

import os
from dataclasses import dataclass
from enum import Enum
from functools import cached_property


class CandidateKind(str, Enum):
    """Kind of entry yielded by the walker.

    Attributes:
        FILE: Single file or symlink matched by a junk glob.
        DIRECTORY: Whole junk directory subtree, deleted as one unit.
        EMPTY_DIRECTORY: Directory chain holding nothing once the other
            candidates of the walk are gone.
    """

    FILE = "file"
    DIRECTORY = "directory"
    EMPTY_DIRECTORY = "empty_directory"


class Verdict(str, Enum):
    """Decision verdict for a candidate."""

    ACCEPT = "accept"
    REJECT = "reject"


class DecisionReason(str, Enum):
    """Why a verdict was reached.

    Attributes:
        MATCHES_JUNK_PATTERN: Candidate matched a junk rule and passed all vetoes.
        PROTECTED_PATH: Candidate is, or encloses, a protected path.
        NO_MATCH: Candidate does not match any junk rule.
        VETOED: A caller-supplied veto rejected the candidate.
    """

    MATCHES_JUNK_PATTERN = "matches-junk-pattern"
    PROTECTED_PATH = "protected-path"
    NO_MATCH = "no-match"
    VETOED = "vetoed"


class OutcomeKind(str, Enum):
    """Result of applying a decision."""

    SKIPPED = "skipped"
    PREVIEWED = "previewed"
    DELETED = "deleted"
    FAILED = "failed"


@dataclass(frozen=True)
class Candidate:
    """Filesystem entry proposed for deletion.

    The size is computed lazily on first access and never follows
    symlinks.

    Attributes:
        path: Normalized absolute path.
        kind: What the walker found at this path.
        root: Scope root the walker was confined to.
    """

    path: str
    kind: CandidateKind
    root: str

    def __post_init__(self) -> None:
        """Validate candidate data after initialization."""
        if not self.path:
            msg = "Path cannot be empty"
            raise ValueError(msg)

    @property
    def name(self) -> str:
        return os.path.basename(self.path)

    @cached_property
    def size(self) -> int | None:
        """Size in bytes (recursive for subtrees), None if unavailable."""
        try:
            if self.kind == CandidateKind.FILE:
                return os.lstat(self.path).st_size
            if self.kind == CandidateKind.EMPTY_DIRECTORY:
                return 0
            return _tree_size(self.path)
        except OSError:
            return None


def _tree_size(path: str) -> int:
    total = 0
    stack = [path]
    while stack:
        current = stack.pop()
        try:
            with os.scandir(current) as entries:
                for entry in entries:
                    try:
                        if entry.is_dir(follow_symlinks=False):
                            stack.append(entry.path)
                        else:
                            total += entry.stat(follow_symlinks=False).st_size
                    except OSError:
                        continue
        except OSError:
            if current == path:
                raise
    return total


@dataclass(frozen=True, slots=True)
class Decision:
    """Verdict reached for a single candidate.

    Attributes:
        candidate: Candidate the decision is about.
        verdict: ACCEPT or REJECT.
        reason: Why the verdict was reached.
        detail: Optional extra context (e.g., the name of a veto).
    """

    candidate: Candidate
    verdict: Verdict
    reason: DecisionReason
    detail: str | None = None

    @property
    def accepted(self) -> bool:
        return self.verdict == Verdict.ACCEPT

    @classmethod
    def accept(cls, candidate: Candidate) -> "Decision":
        return cls(candidate, Verdict.ACCEPT, DecisionReason.MATCHES_JUNK_PATTERN)

    @classmethod
    def reject(
        cls, candidate: Candidate, reason: DecisionReason, detail: str | None = None
    ) -> "Decision":
        return cls(candidate, Verdict.REJECT, reason, detail)


@dataclass(frozen=True, slots=True)
class Outcome:
    """Result of applying one decision.

    Attributes:
        path: Path the decision was about.
        kind: SKIPPED, PREVIEWED, DELETED, or FAILED.
        bytes: Bytes previewed or freed (0 when unknown or skipped).
        reason: Decision reason that led here.
        error: Error message for FAILED outcomes, None otherwise.
    """

    path: str
    kind: OutcomeKind
    bytes: int = 0
    reason: DecisionReason | None = None
    error: str | None = None

    @property
    def failed(self) -> bool:
        return self.kind == OutcomeKind.FAILED
