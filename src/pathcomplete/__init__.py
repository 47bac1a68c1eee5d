"""Context-sensitive path completion: fragment extraction, mapping, resolution, candidates."""

from pathcomplete.config import Settings, default_settings, settings_from_dict
from pathcomplete.models import Candidate, Document, FileEntry, LineContext, Position
from pathcomplete.provider import PathCompletionProvider, get_candidates

__version__ = "0.3.0"

__all__ = [
    "Candidate",
    "Document",
    "FileEntry",
    "LineContext",
    "PathCompletionProvider",
    "Position",
    "Settings",
    "__version__",
    "default_settings",
    "get_candidates",
    "settings_from_dict",
]
