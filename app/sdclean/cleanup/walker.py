"""Storage tree walker for junk candidates.

Traverses a scope root depth-first, pruning at junk directories and
never entering protected directories or following symlinks.
"""

import logging
import os
from collections.abc import Callable, Generator, Iterator
from enum import Enum

from sdclean.cleanup.errors import ReadError
from sdclean.cleanup.guard import PathGuard, normalize_path
from sdclean.cleanup.models import Candidate, CandidateKind
from sdclean.cleanup.rules import RuleSet

logger = logging.getLogger(__name__)


class _Fate(Enum):
    """What becomes of a subdirectory once its candidates are applied."""

    KEPT = "kept"
    REMOVED = "removed"
    EMPTY = "empty"


class Walker:
    """Yields junk candidates found under a scope root.

    For each directory below the root:
    - junk-looking and unprotected: yielded as one DIRECTORY candidate,
      not descended into
    - protected (junk-looking or not): left alone entirely
    - otherwise: descended into; files whose basename matches a junk
      glob are yielded as FILE candidates

    With empty-directory removal on, a directory left with nothing but
    empty subdirectories and yielded candidates is yielded once as an
    EMPTY_DIRECTORY candidate, after everything inside it. Consumers
    report candidates that stay on disk through ``mark_kept()``.

    Unreadable directories are recorded in ``read_errors`` and skipped.
    A walk is a single pass; call ``walk()`` again to rescan.

    Args:
        guard: Protected path guard.
        rules: Junk selection rules.
        should_stop: Optional callable polled before each entry; when it
            returns True the walk ends early.
        on_read_error: Optional callback invoked for each read error.
    """

    def __init__(
        self,
        guard: PathGuard,
        rules: RuleSet,
        *,
        should_stop: Callable[[], bool] | None = None,
        on_read_error: Callable[[ReadError], None] | None = None,
    ) -> None:
        self._guard = guard
        self._rules = rules
        self._should_stop = should_stop
        self._on_read_error = on_read_error
        self._cancelled = False
        self._interrupted = False
        self._kept: set[str] = set()
        self._keep = (
            PathGuard(rules.empty_dir_keep, case_sensitive=guard.case_sensitive)
            if rules.empty_dir_keep
            else None
        )
        self.read_errors: list[ReadError] = []

    def cancel(self) -> None:
        """Stop yielding candidates at the next entry."""
        self._cancelled = True

    @property
    def stopped(self) -> bool:
        if self._cancelled:
            return True
        return self._should_stop is not None and self._should_stop()

    @property
    def interrupted(self) -> bool:
        """Whether a walk ended early because it was stopped."""
        return self._interrupted

    def mark_kept(self, path: str) -> None:
        """Record that a yielded candidate is staying on disk.

        A directory holding a kept entry is no longer empty, so it is
        not offered for removal. Call this before resuming the walk.
        """
        self._kept.add(path)

    def walk(self, root: str) -> Iterator[Candidate]:
        """Walk a scope root and yield candidates in pre-order.

        Empty directory chains are the exception: they are yielded once,
        at the top of the chain, after the candidates inside them.

        Args:
            root: Absolute directory to confine the walk to.

        Yields:
            Candidate for each junk file, junk subtree, or empty directory.
        """
        root = normalize_path(root)

        if self._guard.is_protected(root):
            logger.warning("Scope root is protected, skipping: %s", root)
            return

        # The root itself may be a symlink (/sdcard usually is).
        if not os.path.isdir(root):
            self._record_read_error(root, "No such directory")
            return

        yield from self._walk_dir(root, root, depth=1)

    def _walk_dir(
        self, root: str, directory: str, depth: int
    ) -> Generator[Candidate, None, bool]:
        """List a directory and handle its entries.

        Args:
            root: Scope root of the walk.
            directory: Directory to list.
            depth: Depth of the directory's children below the root.

        Returns:
            True if the directory will be empty once the yielded candidates
            are gone and may itself be removed. The caller then covers it
            with its own candidate; otherwise its empty subdirectories are
            yielded here.
        """
        try:
            with os.scandir(directory) as it:
                entries = sorted(it, key=lambda e: e.name)
        except OSError as e:
            self._record_read_error(directory, e.strerror or str(e))
            return False

        emptied = True
        empty_children: list[str] = []
        for entry in entries:
            if self.stopped:
                logger.info("Walk of %s stopped early", root)
                self._interrupted = True
                return False

            path = os.path.join(directory, entry.name)
            try:
                is_dir = entry.is_dir(follow_symlinks=False)
            except OSError:
                is_dir = False

            if is_dir:
                fate = yield from self._visit_dir(root, path, depth)
                if fate == _Fate.EMPTY:
                    empty_children.append(path)
                elif fate == _Fate.KEPT:
                    emptied = False
                continue

            if not self._rules.matches_file(entry.name):
                emptied = False
                continue
            if self._guard.is_protected(path):
                logger.debug("Protected file skipped: %s", path)
                emptied = False
                continue
            yield Candidate(path=path, kind=CandidateKind.FILE, root=root)
            if path in self._kept:
                emptied = False

        if emptied and self._is_removable_empty_dir(root, directory):
            return True
        for path in empty_children:
            if self.stopped:
                self._interrupted = True
                return False
            yield Candidate(path=path, kind=CandidateKind.EMPTY_DIRECTORY, root=root)
        return False

    def _visit_dir(self, root: str, path: str, depth: int) -> Generator[Candidate, None, _Fate]:
        if self._rules.matches_dir(path):
            if self._guard.is_protected(path):
                logger.debug("Protected junk directory left alone: %s", path)
                return _Fate.KEPT
            yield Candidate(path=path, kind=CandidateKind.DIRECTORY, root=root)
            return _Fate.KEPT if path in self._kept else _Fate.REMOVED

        if self._guard.is_protected(path):
            logger.debug("Protected directory not entered: %s", path)
            return _Fate.KEPT

        max_depth = self._rules.max_depth
        if max_depth is not None and depth >= max_depth:
            return _Fate.KEPT

        empty = yield from self._walk_dir(root, path, depth + 1)
        return _Fate.EMPTY if empty else _Fate.KEPT

    def _is_removable_empty_dir(self, root: str, directory: str) -> bool:
        if not self._rules.remove_empty_dirs or directory == root:
            return False
        if self._keep is not None and self._keep.is_protected(directory):
            return False
        return not self._guard.is_protected(directory)

    def _record_read_error(self, path: str, cause: str) -> None:
        error = ReadError(path, cause)
        logger.warning("Cannot read directory %s: %s", path, cause)
        self.read_errors.append(error)
        if self._on_read_error is not None:
            self._on_read_error(error)
