"""Data models for a completion request (line context, entries, candidates)."""

from __future__ import annotations

import os
from dataclasses import dataclass
from typing import Optional


@dataclass(frozen=True)
class Position:
    """Zero-based cursor position inside a document."""

    line: int
    character: int


@dataclass(frozen=True)
class Document:
    """The document being edited: its path on disk and its full text."""

    file_name: str
    text: str = ""

    def line_at(self, line: int) -> str:
        # Editors break lines on \n (optionally \r\n) only
        lines = self.text.split("\n")
        if 0 <= line < len(lines):
            return lines[line].removesuffix("\r")
        return ""


@dataclass(frozen=True)
class LineContext:
    """One completion request: the current line, the cursor column and the active file."""

    line: str
    cursor: int  # Character offset into line
    file_name: str

    @classmethod
    def from_document(cls, document: Document, position: Position) -> LineContext:
        return cls(
            line=document.line_at(position.line),
            cursor=position.character,
            file_name=document.file_name,
        )


@dataclass(frozen=True)
class MappingResult:
    """A fragment after applying at most one path mapping."""

    current_dir: Optional[str]  # None when no mapping matched
    inserted_path: str


@dataclass(frozen=True)
class FileEntry:
    """A single directory entry found while listing a resolved directory."""

    name: str
    path: str  # Absolute path
    is_directory: bool

    @property
    def stem(self) -> str:
        """Name without its last extension (``index.ts`` -> ``index``)."""
        root, _ = os.path.splitext(self.name)
        return root


@dataclass(frozen=True)
class Candidate:
    """A completion suggestion ready for the host to render."""

    label: str
    insert_text: str
    is_directory: bool
    sort_key: str  # 'd' for directories, 'f' for files
    retrigger_on_insert: bool = False
    trigger_text: Optional[str] = None  # Text the host types after insertion to retrigger
    kind: str = "file"


PARENT_CANDIDATE = Candidate(label="..", insert_text="..", is_directory=True, sort_key="d")
