"""Configuration: default settings, in-memory merging, and the immutable Settings object."""

from __future__ import annotations

import copy
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Optional

# Mapping key that matches every fragment regardless of its prefix
ROOT_MAPPING_KEY = "$root"

# Directory where imported/required packages are installed
PACKAGE_DIR_NAME = "node_modules"


def default_settings() -> dict[str, Any]:
    """Default settings in the same camelCase shape hosts send."""
    return {
        "homeDirectory": str(Path.home()),
        "workspaceRootPath": None,
        "workspaceFolderPath": None,
        "pathMappings": {},
        "transformations": [],
        "excludedItems": {},
        "withExtension": False,
        "triggerOutsideStrings": False,
        "enableFolderTrailingSlash": True,
        "logging": {
            "level": "INFO",
            "file": None,
        },
    }


def _deep_merge(base: dict[str, Any], override: dict[str, Any]) -> dict[str, Any]:
    """Merge override into base recursively. Mutates base; returns base."""
    for key, value in override.items():
        if key in base and isinstance(base[key], dict) and isinstance(value, dict):
            _deep_merge(base[key], value)
        else:
            base[key] = value
    return base


@dataclass(frozen=True)
class Transformation:
    """A rule rewriting the insertion text of matching entries."""

    type: str
    parameters: tuple[str, ...] = ()
    when_file_name: Optional[str] = None  # Regex searched in the entry name

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> Transformation:
        when = data.get("when") or {}
        return cls(
            type=str(data.get("type") or ""),
            parameters=tuple(str(p) for p in (data.get("parameters") or [])),
            when_file_name=when.get("fileName") or None,
        )


@dataclass(frozen=True)
class ExclusionRule:
    """Hide entries whose path matches ``pattern`` while editing files matching ``when``."""

    pattern: str  # Glob matched against the entry's absolute path
    when: str  # Glob matched against the active file's path


@dataclass(frozen=True)
class Settings:
    """Resolved settings for one completion request. Build with settings_from_dict()."""

    home_directory: str
    workspace_root_path: Optional[str] = None
    workspace_folder_path: Optional[str] = None
    path_mappings: dict[str, str] = field(default_factory=dict)  # Declaration order matters
    transformations: tuple[Transformation, ...] = ()
    excluded_items: tuple[ExclusionRule, ...] = ()
    with_extension: bool = False
    trigger_outside_strings: bool = False
    enable_folder_trailing_slash: bool = True
    log_level: str = "INFO"
    log_file: Optional[str] = None

    @property
    def workspace_path(self) -> Optional[str]:
        """Folder of the active document, else the workspace root."""
        return self.workspace_folder_path or self.workspace_root_path


def _excluded_items(raw: Any) -> tuple[ExclusionRule, ...]:
    if not isinstance(raw, dict):
        return ()
    rules: list[ExclusionRule] = []
    for pattern, rule in raw.items():
        when = rule.get("when") if isinstance(rule, dict) else None
        if not when:
            continue
        rules.append(ExclusionRule(pattern=pattern, when=when))
    return tuple(rules)


def settings_from_dict(data: dict[str, Any] | None = None) -> Settings:
    """
    Build Settings from a host-provided dict merged over default_settings().

    Unknown keys are ignored. Malformed transformations (not a dict) are dropped.
    """
    merged = _deep_merge(default_settings(), copy.deepcopy(data or {}))
    log_cfg = merged.get("logging") or {}
    transformations = tuple(
        Transformation.from_dict(t) for t in (merged.get("transformations") or []) if isinstance(t, dict)
    )
    return Settings(
        home_directory=str(merged.get("homeDirectory") or Path.home()),
        workspace_root_path=merged.get("workspaceRootPath") or None,
        workspace_folder_path=merged.get("workspaceFolderPath") or None,
        path_mappings=dict(merged.get("pathMappings") or {}),
        transformations=transformations,
        excluded_items=_excluded_items(merged.get("excludedItems")),
        with_extension=bool(merged.get("withExtension")),
        trigger_outside_strings=bool(merged.get("triggerOutsideStrings")),
        enable_folder_trailing_slash=bool(merged.get("enableFolderTrailingSlash")),
        log_level=str(log_cfg.get("level") or "INFO").upper(),
        log_file=log_cfg.get("file") or None,
    )
