"""Resolve the directory a typed path fragment points to."""

from __future__ import annotations

import logging
import os
import re
from typing import Optional

from pathcomplete.config import PACKAGE_DIR_NAME, Settings
from pathcomplete.filesystem import FileSystem, LocalFileSystem
from pathcomplete.mapping import apply_mapping
from pathcomplete.models import LineContext
from pathcomplete.scanner import extract_fragment

logger = logging.getLogger(__name__)

_DRIVE_RE = re.compile(r"^[a-z]:", re.IGNORECASE)
_PACKAGE_LINE_RE = re.compile(r"require|import")
_PACKAGE_NAME_RE = re.compile(r"^[a-z]", re.IGNORECASE)


def join_path(base: str, *parts: str) -> str:
    """
    Join and normalize path segments.

    Later segments are always appended to base, even when they start with a
    separator (``join_path("/ws", "/src")`` is ``/ws/src``).
    """
    tail = [p.lstrip("/" + os.sep) for p in parts if p]
    return os.path.normpath(os.path.join(base, *tail))


def current_directory(file_name: str, inserted_path: str, settings: Settings) -> str:
    """
    Directory a fragment is relative to when no mapping applies: the active file's
    folder, or the workspace for fragments starting with ``/``.
    """
    current = os.path.dirname(file_name) or "/"
    workspace = settings.workspace_path
    if inserted_path.startswith("/") and workspace:
        current = workspace
    return os.path.abspath(current)


def is_package_reference(inserted_path: str, line: str) -> bool:
    """True if the line mentions require/import and the path starts with a letter."""
    if not _PACKAGE_LINE_RE.search(line):
        return False
    return bool(_PACKAGE_NAME_RE.match(inserted_path))


def locate_package_directory(
    start_dir: str,
    workspace_root: Optional[str],
    fs: FileSystem | None = None,
) -> str:
    """
    Walk upward from start_dir and return the first package directory found.

    Falls back to the package directory under workspace_root (or start_dir when no
    workspace is open), which may not exist.
    """
    fs = fs or LocalFileSystem()
    current = start_dir
    while current != os.path.dirname(current):
        candidate = os.path.join(current, PACKAGE_DIR_NAME)
        if fs.exists(candidate):
            return candidate
        current = os.path.dirname(current)
    return os.path.join(workspace_root or start_dir, PACKAGE_DIR_NAME)


def resolve_directory(
    context: LineContext,
    settings: Settings,
    fs: FileSystem | None = None,
) -> str:
    """
    Return the absolute directory whose entries should be suggested.

    Order: drive-letter paths, then ``~`` paths, then package references, then a
    plain join onto the mapped or default current directory.
    """
    fragment = extract_fragment(context.line, context.cursor)
    mapping = apply_mapping(fragment, settings)
    inserted = mapping.inserted_path
    current = mapping.current_dir or current_directory(context.file_name, inserted, settings)

    if _DRIVE_RE.match(inserted):
        return os.path.abspath(inserted)

    if inserted.startswith("~"):
        return join_path(settings.home_directory, inserted[1:])

    if is_package_reference(inserted, context.line):
        package_dir = locate_package_directory(current, settings.workspace_path, fs)
        return join_path(package_dir, inserted)

    return join_path(current, inserted)
