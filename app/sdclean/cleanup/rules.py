"""Declarative junk selection rules.

A RuleSet names which files and directories count as disposable:
filename globs for individual files and directory-name heuristics for
whole cache-like subtrees.
"""

import fnmatch
import os
from dataclasses import dataclass

from sdclean.cleanup.errors import ConfigError
from sdclean.cleanup.models import Candidate, CandidateKind

# Filename globs for temporary and partial files. Matching is case-sensitive.
DEFAULT_JUNK_GLOBS: tuple[str, ...] = (
    "*.tmp",
    "*.temp",
    "*.log",
    "*.old",
    "*.bak",
    "*.partial",
    "*.crdownload",
)

# Directory basenames (case-insensitive, exact or suffix) that hold disposable data.
DEFAULT_JUNK_DIR_NAMES: tuple[str, ...] = ("cache", "caches", "tmp", "temp")


@dataclass(frozen=True, slots=True)
class RuleSet:
    """What counts as junk for one cleanup job.

    Attributes:
        junk_globs: Filename globs matched against file basenames.
        junk_dir_names: Directory basenames that mark a whole subtree as junk.
        max_depth: Deepest level (1 = direct child of the root) at which
            files are considered. None means unlimited.
        remove_empty_dirs: Also propose directories that are already empty.
        empty_dir_keep: Absolute paths whose empty subdirectories are kept.
    """

    junk_globs: tuple[str, ...] = DEFAULT_JUNK_GLOBS
    junk_dir_names: tuple[str, ...] = DEFAULT_JUNK_DIR_NAMES
    max_depth: int | None = None
    remove_empty_dirs: bool = False
    empty_dir_keep: tuple[str, ...] = ()

    def validate(self) -> None:
        """Check the rule set before any filesystem access.

        Raises:
            ConfigError: If a pattern is malformed or nothing can match.
        """
        for glob in self.junk_globs:
            if not glob or not glob.strip():
                msg = "Junk glob cannot be empty"
                raise ConfigError(msg)
            if "/" in glob:
                msg = f"Junk glob must match a basename, not a path: {glob!r}"
                raise ConfigError(msg)
        for name in self.junk_dir_names:
            if not name or not name.strip():
                msg = "Junk directory name cannot be empty"
                raise ConfigError(msg)
            if "/" in name:
                msg = f"Junk directory name must not contain '/': {name!r}"
                raise ConfigError(msg)
        if self.max_depth is not None and self.max_depth < 1:
            msg = f"max_depth must be at least 1, got {self.max_depth}"
            raise ConfigError(msg)
        for path in self.empty_dir_keep:
            if not os.path.isabs(path):
                msg = f"Empty-directory keep path must be absolute: {path!r}"
                raise ConfigError(msg)
        if not (self.junk_globs or self.junk_dir_names or self.remove_empty_dirs):
            msg = "Rule set matches nothing: add junk globs, directory names, or empty-dir removal"
            raise ConfigError(msg)

    def matches_file(self, name: str) -> bool:
        """Check a file basename against the junk globs (case-sensitive)."""
        return any(fnmatch.fnmatchcase(name, glob) for glob in self.junk_globs)

    def matches_dir(self, path: str) -> bool:
        """Check a directory against the junk directory heuristics.

        A directory matches when its basename equals or ends with one of
        the junk names (ignoring case), or when it is a ``temp*`` folder
        directly inside a ``files`` folder.

        Args:
            path: Absolute directory path.

        Returns:
            True if the directory is a junk subtree.
        """
        if not self.junk_dir_names:
            return False
        name = os.path.basename(path)
        lowered = name.lower()
        for junk in self.junk_dir_names:
            if lowered.endswith(junk.lower()):
                return True
        parent = os.path.basename(os.path.dirname(path))
        return parent == "files" and name.startswith("temp")

    def matches_junk(self, candidate: Candidate) -> bool:
        """Check whether a candidate is covered by this rule set."""
        if candidate.kind == CandidateKind.FILE:
            return self.matches_file(candidate.name)
        if candidate.kind == CandidateKind.DIRECTORY:
            return self.matches_dir(candidate.path)
        return self.remove_empty_dirs
