"""Unit tests for directory resolution and the package directory walk."""

from __future__ import annotations

import os
from pathlib import Path

import pytest

from pathcomplete.config import PACKAGE_DIR_NAME, settings_from_dict
from pathcomplete.models import LineContext
from pathcomplete.resolver import (
    current_directory,
    is_package_reference,
    join_path,
    locate_package_directory,
    resolve_directory,
)


class RecordingFS:
    """FileSystem stub where only the given paths exist; records exists() calls."""

    def __init__(self, existing: set[str] | None = None) -> None:
        self.existing = existing or set()
        self.exists_calls: list[str] = []

    def exists(self, path: str) -> bool:
        self.exists_calls.append(path)
        return path in self.existing

    def is_directory(self, path: str) -> bool:
        return path in self.existing

    async def read_directory(self, path: str) -> list[str]:
        return []

    def stat_entry(self, path: str) -> bool:
        return True


def _context(line: str, file_name: str = "/ws/src/app.js") -> LineContext:
    return LineContext(line=line, cursor=len(line), file_name=file_name)


@pytest.fixture
def settings():
    return settings_from_dict({"homeDirectory": "/home/me", "workspaceFolderPath": "/ws"})


# --- join_path ---


def test_join_path_keeps_base_for_absolute_parts() -> None:
    assert join_path("/ws/src", "/util") == "/ws/src/util"


def test_join_path_normalizes() -> None:
    assert join_path("/ws/src", "../lib/") == "/ws/lib"
    assert join_path("/ws", "") == "/ws"
    assert join_path("/", "/etc") == "/etc"


# --- current_directory ---


def test_current_directory_is_file_parent(settings) -> None:
    assert current_directory("/ws/src/app.js", "./x", settings) == "/ws/src"


def test_current_directory_workspace_for_slash(settings) -> None:
    assert current_directory("/ws/src/app.js", "/x", settings) == "/ws"


def test_current_directory_slash_without_workspace() -> None:
    settings = settings_from_dict({"homeDirectory": "/home/me"})
    assert current_directory("/ws/src/app.js", "/x", settings) == "/ws/src"


# --- is_package_reference ---


def test_package_reference_requires_keyword() -> None:
    assert is_package_reference("lodash/", "require('lodash/") is True
    assert is_package_reference("react", "import x from 'react") is True
    assert is_package_reference("lodash/", "load('lodash/") is False


def test_package_reference_requires_leading_letter() -> None:
    assert is_package_reference("./lib", "import './lib") is False
    assert is_package_reference("@scope/pkg", "import '@scope/pkg") is False


def test_package_reference_matches_inside_words() -> None:
    assert is_package_reference("data", "const imported = 'data") is True


# --- locate_package_directory ---


def test_locate_finds_nearest_ancestor(tmp_path: Path) -> None:
    (tmp_path / PACKAGE_DIR_NAME).mkdir()
    (tmp_path / "a" / PACKAGE_DIR_NAME).mkdir(parents=True)
    deep = tmp_path / "a" / "b" / "c"
    deep.mkdir(parents=True)
    found = locate_package_directory(str(deep), str(tmp_path))
    assert found == str(tmp_path / "a" / PACKAGE_DIR_NAME)


def test_locate_falls_back_to_workspace() -> None:
    fs = RecordingFS()
    found = locate_package_directory("/x/y", "/ws", fs)
    assert found == os.path.join("/ws", PACKAGE_DIR_NAME)
    assert fs.exists_calls == ["/x/y/node_modules", "/x/node_modules"]


def test_locate_without_workspace_falls_back_to_start() -> None:
    found = locate_package_directory("/x/y", None, RecordingFS())
    assert found == "/x/y/node_modules"


# --- resolve_directory ---


def test_resolve_relative(settings) -> None:
    assert resolve_directory(_context("'./lib/"), settings, RecordingFS()) == "/ws/src/lib"


def test_resolve_parent_relative(settings) -> None:
    assert resolve_directory(_context('"../assets/'), settings, RecordingFS()) == "/ws/assets"


def test_resolve_workspace_absolute(settings) -> None:
    assert resolve_directory(_context("'/public/"), settings, RecordingFS()) == "/ws/public"


def test_resolve_home(settings) -> None:
    assert resolve_directory(_context("'~/notes/"), settings, RecordingFS()) == "/home/me/notes"
    assert resolve_directory(_context("'~"), settings, RecordingFS()) == "/home/me"


def test_resolve_home_overrides_mapping_directory() -> None:
    settings = settings_from_dict({"homeDirectory": "/home/me", "pathMappings": {"$root": "/public"}})
    assert resolve_directory(_context("'~/x"), settings, RecordingFS()) == "/home/me/x"


def test_resolve_drive_letter_ignores_current_dir(settings) -> None:
    assert resolve_directory(_context("'c:/tmp"), settings, RecordingFS()) == os.path.abspath("c:/tmp")


def test_resolve_mapping(settings) -> None:
    settings = settings_from_dict({"homeDirectory": "/home/me", "workspaceRootPath": "/ws", "pathMappings": {"@app": "${workspace}/src"}})
    assert resolve_directory(_context("'@app/util"), settings, RecordingFS()) == "/ws/src/util"


def test_resolve_package_reference(settings) -> None:
    fs = RecordingFS({"/ws/node_modules"})
    context = _context("const _ = require('lodash/fp")
    assert resolve_directory(context, settings, fs) == "/ws/node_modules/lodash/fp"


def test_resolve_without_keyword_never_walks_packages(settings) -> None:
    fs = RecordingFS({"/ws/node_modules"})
    assert resolve_directory(_context("src = 'lodash/fp"), settings, fs) == "/ws/src/lodash/fp"
    assert fs.exists_calls == []


def test_resolve_relative_import_is_not_package(settings) -> None:
    fs = RecordingFS({"/ws/node_modules"})
    assert resolve_directory(_context("import x from './comp"), settings, fs) == "/ws/src/comp"
    assert fs.exists_calls == []
