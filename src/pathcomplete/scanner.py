"""Line scanning: quote context and the path fragment typed before the cursor."""

from __future__ import annotations

import logging

from pathcomplete.config import Settings

logger = logging.getLogger(__name__)

QUOTES = ("'", '"', "`")
SEPARATORS = (" ", "\t", "(", "{", "[")
ESCAPE = "\\"


def is_inside_quotes(line: str, cursor: int) -> bool:
    """
    Return True if the cursor sits inside an open single, double or backtick quote.

    Each quote kind is toggled independently. A quote directly after a backslash
    does not toggle, even when the backslash is itself escaped.
    """
    open_quotes = dict.fromkeys(QUOTES, False)
    for i, c in enumerate(line[:cursor]):
        if c in open_quotes and (i == 0 or line[i - 1] != ESCAPE):
            open_quotes[c] = not open_quotes[c]
    return any(open_quotes.values())


def should_trigger(line: str, cursor: int, settings: Settings) -> bool:
    """Completion runs anywhere when triggerOutsideStrings is set, else only inside quotes."""
    if settings.trigger_outside_strings:
        return True
    return is_inside_quotes(line, cursor)


def extract_fragment(line: str, cursor: int) -> str:
    """
    Return the path the user is typing: text after the last quote, or the last
    separator when no quote precedes the cursor. Escaped characters never delimit.
    """
    last_quote = -1
    last_separator = -1
    i = 0
    while i < cursor and i < len(line):
        c = line[i]
        if c == ESCAPE:
            i += 2
            continue
        if c in SEPARATORS:
            last_separator = i
        elif c in QUOTES:
            last_quote = i
        i += 1

    start = last_quote if last_quote != -1 else last_separator
    fragment = line[start + 1 : cursor]
    logger.debug("Fragment %r (start=%d, cursor=%d)", fragment, start, cursor)
    return fragment
