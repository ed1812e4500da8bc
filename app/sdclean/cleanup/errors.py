"""Error taxonomy for cleanup jobs.

Per-entry errors (ReadError, DeleteError) are recorded and the job
continues. Job-level errors (ConfigError, GuardViolation) abort the job.
"""


class CleanupError(Exception):
    """Base exception for cleanup-related errors."""


class ReadError(CleanupError):
    """Raised when a directory cannot be listed during a walk.

    Attributes:
        path: Directory that could not be read.
        cause: Human-readable reason from the underlying OSError.
    """

    def __init__(self, path: str, cause: str) -> None:
        self.path = path
        self.cause = cause
        super().__init__(f"Cannot read {path}: {cause}")


class DeleteError(CleanupError):
    """Raised when a single entry cannot be removed.

    Attributes:
        path: Entry that could not be removed.
        cause: Human-readable reason from the underlying OSError.
    """

    def __init__(self, path: str, cause: str) -> None:
        self.path = path
        self.cause = cause
        super().__init__(f"Cannot delete {path}: {cause}")


class ConfigError(CleanupError):
    """Raised when a job is configured with invalid roots or rules."""


class GuardViolation(CleanupError):
    """Raised when a protected path is about to be deleted.

    This is an internal invariant failure. The whole job is aborted.
    """

    def __init__(self, path: str) -> None:
        self.path = path
        super().__init__(f"Refusing to delete protected path: {path}")
