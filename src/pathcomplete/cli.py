"""CLI entry point: print path candidates for a position in a file (debugging aid for hosts)."""

from __future__ import annotations

import argparse
import asyncio
import json
import logging
import sys
from pathlib import Path

from pathcomplete import __version__
from pathcomplete.config import Settings, settings_from_dict
from pathcomplete.models import Document, Position
from pathcomplete.provider import get_candidates


def setup_logging(settings: Settings, verbose: bool = False, quiet: bool = False) -> None:
    """
    Configure the pathcomplete logger: level from --verbose/--quiet or settings,
    console handler, optional file handler from settings.
    """
    if verbose:
        level_name = "DEBUG"
    elif quiet:
        level_name = "ERROR"
    else:
        level_name = settings.log_level
    level = getattr(logging, level_name, logging.INFO)
    root = logging.getLogger("pathcomplete")
    root.setLevel(level)
    if not root.handlers:
        fmt = logging.Formatter("%(asctime)s %(levelname)s [%(name)s] %(message)s")
        console = logging.StreamHandler(sys.stderr)
        console.setFormatter(fmt)
        root.addHandler(console)
        if settings.log_file:
            try:
                fh = logging.FileHandler(settings.log_file, encoding="utf-8")
                fh.setFormatter(fmt)
                root.addHandler(fh)
            except OSError as e:
                root.warning("Cannot open log file %s: %s", settings.log_file, e)


def load_settings_file(path: Path | None) -> dict:
    """Read one JSON settings object; {} when no path is given. Exits on bad input."""
    if path is None:
        return {}
    try:
        data = json.loads(path.read_text(encoding="utf-8"))
    except (json.JSONDecodeError, OSError) as e:
        print(f"Cannot read settings from {path}: {e}", file=sys.stderr)
        sys.exit(1)
    if not isinstance(data, dict):
        print(f"Settings in {path} must be a JSON object.", file=sys.stderr)
        sys.exit(1)
    return data


def main(argv: list[str] | None = None) -> None:
    parser = argparse.ArgumentParser(
        prog="pathcomplete",
        description="Show the path completions offered at a position in a file.",
    )
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    parser.add_argument("file", type=Path, help="File being edited (paths are resolved relative to it).")
    parser.add_argument("--line", "-l", type=int, default=0, help="Zero-based line number (default: 0).")
    parser.add_argument(
        "--column",
        "-c",
        type=int,
        help="Zero-based cursor column (default: end of line).",
    )
    parser.add_argument("--text", "-t", help="Use TEXT as the current line instead of reading the file.")
    parser.add_argument("--settings", "-s", type=Path, help="JSON file with completion settings.")
    log_group = parser.add_mutually_exclusive_group()
    log_group.add_argument("-v", "--verbose", action="store_true", help="Verbose (DEBUG) output.")
    log_group.add_argument("-q", "--quiet", action="store_true", help="Quiet (errors only).")
    args = parser.parse_args(argv)

    settings = settings_from_dict(load_settings_file(args.settings))
    setup_logging(settings, verbose=args.verbose, quiet=args.quiet)

    file_name = str(args.file.resolve())
    if args.text is not None:
        document = Document(file_name=file_name, text=args.text)
        line_no = 0
    else:
        try:
            text = args.file.read_text(encoding="utf-8")
        except OSError as e:
            print(f"Cannot read {args.file}: {e}", file=sys.stderr)
            sys.exit(1)
        document = Document(file_name=file_name, text=text)
        line_no = args.line

    line = document.line_at(line_no)
    column = len(line) if args.column is None else args.column
    candidates = asyncio.run(get_candidates(document, Position(line_no, column), settings))
    for candidate in candidates:
        print(f"{candidate.label}\t{candidate.insert_text}")
