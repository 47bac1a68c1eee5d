"""Filesystem access: the collaborator protocol, a local implementation and the entry lister."""

from __future__ import annotations

import asyncio
import logging
import os
import stat
from typing import Protocol, runtime_checkable

from pathcomplete.errors import DirectoryReadError, StatError
from pathcomplete.models import FileEntry

logger = logging.getLogger(__name__)

__all__ = [
    "DirectoryReadError",
    "FileSystem",
    "LocalFileSystem",
    "StatError",
    "list_entries",
    "make_entry",
]


@runtime_checkable
class FileSystem(Protocol):
    """Protocol for the filesystem the completion core reads from."""

    def exists(self, path: str) -> bool:
        """Return True if something exists at path."""
        ...

    def is_directory(self, path: str) -> bool:
        """Return True if path is an existing directory (symlinks not followed)."""
        ...

    async def read_directory(self, path: str) -> list[str]:
        """Return the entry names in path. Raises DirectoryReadError."""
        ...

    def stat_entry(self, path: str) -> bool:
        """Return True if path is a directory. Raises StatError."""
        ...


class LocalFileSystem:
    """FileSystem backed by the local disk."""

    def exists(self, path: str) -> bool:
        return os.path.exists(path)

    def is_directory(self, path: str) -> bool:
        try:
            return stat.S_ISDIR(os.lstat(path).st_mode)
        except (OSError, ValueError):
            return False

    async def read_directory(self, path: str) -> list[str]:
        try:
            return await asyncio.to_thread(os.listdir, path)
        except (OSError, ValueError) as e:
            raise DirectoryReadError(path, getattr(e, "strerror", None) or str(e)) from e

    def stat_entry(self, path: str) -> bool:
        try:
            return stat.S_ISDIR(os.stat(path).st_mode)
        except (OSError, ValueError) as e:
            raise StatError(path, getattr(e, "strerror", None) or str(e)) from e


def make_entry(directory: str, name: str, fs: FileSystem) -> FileEntry:
    """Build a FileEntry for name inside directory. Raises StatError."""
    path = os.path.join(directory, name)
    return FileEntry(name=name, path=path, is_directory=fs.stat_entry(path))


async def list_entries(directory: str, fs: FileSystem) -> list[FileEntry]:
    """
    List the entries of directory.

    Raises DirectoryReadError if the directory itself cannot be read. Entries that
    cannot be inspected are logged and dropped.
    """
    names = await fs.read_directory(directory)
    entries: list[FileEntry] = []
    for name in names:
        try:
            entries.append(make_entry(directory, name, fs))
        except StatError as e:
            logger.debug("Skipping %s: %s", e.path, e.reason)
    return entries
