"""Completion orchestration: gate, resolve, list, filter and format candidates."""

from __future__ import annotations

import logging

from pathcomplete.cancellation import CancellationToken
from pathcomplete.config import Settings
from pathcomplete.errors import DirectoryReadError
from pathcomplete.filesystem import FileSystem, LocalFileSystem, list_entries
from pathcomplete.formatting import compute_insert_text, is_excluded
from pathcomplete.models import PARENT_CANDIDATE, Candidate, Document, FileEntry, LineContext, Position
from pathcomplete.resolver import resolve_directory
from pathcomplete.scanner import should_trigger

logger = logging.getLogger(__name__)

# Typed by the host after inserting a folder so completion opens again inside it
FOLDER_TRIGGER_TEXT = "/"


def build_candidate(entry: FileEntry, settings: Settings) -> Candidate:
    """Convert a listed entry into a candidate (label, insertion text, ordering)."""
    insert_text = compute_insert_text(entry, settings)
    if not entry.is_directory:
        return Candidate(label=entry.name, insert_text=insert_text, is_directory=False, sort_key="f")
    retrigger = settings.enable_folder_trailing_slash
    return Candidate(
        label=entry.name + "/",
        insert_text=insert_text,
        is_directory=True,
        sort_key="d",
        retrigger_on_insert=retrigger,
        trigger_text=FOLDER_TRIGGER_TEXT if retrigger else None,
    )


class PathCompletionProvider:
    """
    Produces path candidates for a cursor position.

    Holds no per-request state: settings arrive with each call, so concurrent
    requests on one provider do not interfere.
    """

    def __init__(self, fs: FileSystem | None = None) -> None:
        self.fs = fs or LocalFileSystem()

    async def get_candidates(
        self,
        document: Document,
        position: Position,
        settings: Settings,
        token: CancellationToken | None = None,
    ) -> list[Candidate]:
        """
        Return candidates for the path typed at position, ``..`` first.

        Returns [] when completion is gated out, the directory is missing or
        unreadable, or the request was cancelled while listing.
        """
        context = LineContext.from_document(document, position)
        return await self.candidates_for(context, settings, token)

    async def candidates_for(
        self,
        context: LineContext,
        settings: Settings,
        token: CancellationToken | None = None,
    ) -> list[Candidate]:
        if not should_trigger(context.line, context.cursor, settings):
            logger.debug("Not triggering at column %d: outside quotes", context.cursor)
            return []

        directory = resolve_directory(context, settings, self.fs)
        if not self.fs.is_directory(directory):
            logger.debug("No directory at %s", directory)
            return []

        try:
            entries = await list_entries(directory, self.fs)
        except DirectoryReadError as e:
            logger.warning("Cannot list %s: %s", e.path, e.reason)
            return []

        if token is not None and token.is_cancelled:
            logger.debug("Request for %s cancelled; dropping %d entries", directory, len(entries))
            return []

        candidates = [
            build_candidate(entry, settings)
            for entry in entries
            if not is_excluded(entry, context.file_name, settings)
        ]
        candidates.sort(key=lambda c: (c.sort_key, c.label))
        return [PARENT_CANDIDATE, *candidates]


async def get_candidates(
    document: Document,
    position: Position,
    settings: Settings,
    fs: FileSystem | None = None,
    token: CancellationToken | None = None,
) -> list[Candidate]:
    """One-shot helper: get_candidates on a fresh PathCompletionProvider."""
    return await PathCompletionProvider(fs).get_candidates(document, position, settings, token)
