"""Virtual path mappings (e.g. ``@app`` -> ``${workspace}/src``)."""

from __future__ import annotations

from pathcomplete.config import ROOT_MAPPING_KEY, Settings
from pathcomplete.models import MappingResult


def expand_placeholders(template: str, settings: Settings) -> str:
    """
    Substitute ${workspace}, ${folder} and ${home} in a mapping target.

    Only the first occurrence of each placeholder is replaced. Workspace placeholders
    stay literal when no workspace is open; unknown placeholders always stay literal.
    """
    target = template
    if settings.workspace_root_path:
        target = target.replace("${workspace}", settings.workspace_root_path, 1)
    if settings.workspace_folder_path:
        target = target.replace("${folder}", settings.workspace_folder_path, 1)
    return target.replace("${home}", settings.home_directory, 1)


def apply_mapping(fragment: str, settings: Settings) -> MappingResult:
    """
    Apply the first mapping (in declaration order) whose key prefixes the fragment.

    The ``$root`` key matches any fragment. On a match the first occurrence of the
    key text is removed from the fragment, wherever it appears.
    """
    for key, template in settings.path_mappings.items():
        if fragment.startswith(key) or key == ROOT_MAPPING_KEY:
            return MappingResult(
                current_dir=expand_placeholders(template, settings),
                inserted_path=fragment.replace(key, "", 1),
            )
    return MappingResult(current_dir=None, inserted_path=fragment)
