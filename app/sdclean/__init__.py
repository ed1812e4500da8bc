"""sdclean - Guarded junk-file cleanup for Android shared storage."""

__version__ = "0.1.0"
