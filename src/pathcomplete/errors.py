"""Exception hierarchy for path completion."""

from __future__ import annotations


class PathCompleteError(Exception):
    """Base class for errors raised inside the completion core."""


class DirectoryReadError(PathCompleteError):
    """Raised when a resolved directory cannot be listed (missing, unreadable)."""

    def __init__(self, path: str, reason: str = "") -> None:
        self.path = path
        self.reason = reason
        super().__init__(f"Cannot read directory {path}: {reason}" if reason else f"Cannot read directory {path}")


class StatError(PathCompleteError):
    """Raised when a single directory entry cannot be inspected (broken link, permissions)."""

    def __init__(self, path: str, reason: str = "") -> None:
        self.path = path
        self.reason = reason
        super().__init__(f"Cannot stat {path}: {reason}" if reason else f"Cannot stat {path}")
