"""Insertion text (extension handling, transformations) and exclusion filtering."""

from __future__ import annotations

import logging
import re
from functools import reduce
from pathlib import PurePath
from typing import Callable

from wcmatch import glob

from pathcomplete.config import Settings, Transformation
from pathcomplete.models import FileEntry

logger = logging.getLogger(__name__)

# $$, $&, $1..$99 and $<name> in replacement text
_REPLACEMENT_TOKEN_RE = re.compile(r"\$(\$|&|\d{1,2}|<[^>]*>)")

# Unescaped "(?<" that opens a named group, not a lookbehind
_NAMED_GROUP_RE = re.compile(r"(?<!\\)\(\?<(?![=!])")


def expand_replacement(template: str, match: re.Match[str]) -> str:
    """Expand ``$&``, ``$n``, ``$<name>`` and ``$$`` in template against match."""

    def token(m: re.Match[str]) -> str:
        ref = m.group(1)
        if ref == "$":
            return "$"
        if ref == "&":
            return match.group(0)
        if ref.startswith("<"):
            name = ref[1:-1]
            if name in match.groupdict():
                return match.group(name) or ""
            return m.group(0)
        index = int(ref)
        if index > match.re.groups and len(ref) == 2:
            # $12 with a single group means $1 followed by "2"
            index, rest = int(ref[0]), ref[1]
        else:
            rest = ""
        if 0 < index <= match.re.groups:
            return (match.group(index) or "") + rest
        return m.group(0)

    return _REPLACEMENT_TOKEN_RE.sub(token, template)


def compile_rule_pattern(pattern: str) -> re.Pattern[str]:
    """Compile a rule regex, accepting ``(?<name>...)`` groups as ``(?P<name>...)``."""
    return re.compile(_NAMED_GROUP_RE.sub("(?P<", pattern))


def _replace_rule(pattern: str, replacement: str) -> Callable[[str], str]:
    regex = compile_rule_pattern(pattern)
    return lambda text: regex.sub(lambda m: expand_replacement(replacement, m), text, count=1)


def _rule_applies(rule: Transformation, entry: FileEntry) -> bool:
    if not rule.when_file_name:
        return True
    try:
        return compile_rule_pattern(rule.when_file_name).search(entry.name) is not None
    except re.error as e:
        logger.warning("Invalid fileName pattern %r in transformation: %s", rule.when_file_name, e)
        return False


def transformation_steps(entry: FileEntry, settings: Settings) -> list[Callable[[str], str]]:
    """Return the transformations that apply to entry, in declaration order."""
    steps: list[Callable[[str], str]] = []
    for rule in settings.transformations:
        if rule.type != "replace" or not rule.parameters or not rule.parameters[0]:
            continue
        if not _rule_applies(rule, entry):
            continue
        replacement = rule.parameters[1] if len(rule.parameters) > 1 else ""
        try:
            steps.append(_replace_rule(rule.parameters[0], replacement))
        except re.error as e:
            logger.warning("Invalid replace pattern %r in transformation: %s", rule.parameters[0], e)
    return steps


def apply_transformations(text: str, entry: FileEntry, settings: Settings) -> str:
    """Fold the applicable transformations over text, left to right."""
    return reduce(lambda acc, step: step(acc), transformation_steps(entry, settings), text)


def compute_insert_text(entry: FileEntry, settings: Settings) -> str:
    """
    Text inserted when the candidate is accepted.

    Directories and withExtension keep the full name; files otherwise lose their
    extension. Transformations run afterwards.
    """
    if settings.with_extension or entry.is_directory:
        text = entry.name
    else:
        text = entry.stem
    return apply_transformations(text, entry, settings)


# Globstar, braces and extglobs on; dotfiles only match an explicit dot
_GLOB_FLAGS = glob.GLOBSTAR | glob.BRACE | glob.EXTGLOB | glob.FORCEUNIX


def glob_matches(path: str, pattern: str) -> bool:
    """
    Match a whole path against a minimatch-style glob.

    ``**`` crosses directories, ``*`` stays within one segment, and a matched
    directory does not match its contents. Leading slashes are ignored on both
    sides so ``/ws/src/*`` and ``**/*.js`` apply to absolute paths.
    """
    rel = PurePath(path).as_posix().lstrip("/")
    return glob.globmatch(rel, pattern.lstrip("/"), flags=_GLOB_FLAGS)


def is_excluded(entry: FileEntry, active_file: str, settings: Settings) -> bool:
    """True if any exclusion rule matches both the active file and the entry path."""
    for rule in settings.excluded_items:
        if glob_matches(active_file, rule.when) and glob_matches(entry.path, rule.pattern):
            return True
    return False
