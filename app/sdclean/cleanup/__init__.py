"""Guarded junk cleanup core.

This module provides protected path checking, junk selection rules,
the storage walker, the decision engine, the deletion executor, and
job orchestration.
"""

from sdclean.cleanup.decision import DecisionEngine, Veto, min_age_veto, min_size_veto
from sdclean.cleanup.errors import (
    CleanupError,
    ConfigError,
    DeleteError,
    GuardViolation,
    ReadError,
)
from sdclean.cleanup.events import (
    CleanupEvent,
    EventAction,
    EventSink,
    JsonlEventSink,
    ListEventSink,
)
from sdclean.cleanup.executor import Executor
from sdclean.cleanup.guard import (
    DEFAULT_PROTECTED_DIRS,
    PathGuard,
    default_protected_paths,
    normalize_path,
)
from sdclean.cleanup.job import CleanupJob, RunResult, run_cleanup, run_jobs
from sdclean.cleanup.models import (
    Candidate,
    CandidateKind,
    Decision,
    DecisionReason,
    Outcome,
    OutcomeKind,
    Verdict,
)
from sdclean.cleanup.rules import DEFAULT_JUNK_DIR_NAMES, DEFAULT_JUNK_GLOBS, RuleSet
from sdclean.cleanup.walker import Walker

__all__ = [
    "DEFAULT_JUNK_DIR_NAMES",
    "DEFAULT_JUNK_GLOBS",
    "DEFAULT_PROTECTED_DIRS",
    "Candidate",
    "CandidateKind",
    "CleanupError",
    "CleanupEvent",
    "CleanupJob",
    "ConfigError",
    "Decision",
    "DecisionEngine",
    "DecisionReason",
    "DeleteError",
    "EventAction",
    "EventSink",
    "Executor",
    "GuardViolation",
    "JsonlEventSink",
    "ListEventSink",
    "Outcome",
    "OutcomeKind",
    "PathGuard",
    "ReadError",
    "RuleSet",
    "RunResult",
    "Veto",
    "Verdict",
    "Walker",
    "default_protected_paths",
    "min_age_veto",
    "min_size_veto",
    "normalize_path",
    "run_cleanup",
    "run_jobs",
]
