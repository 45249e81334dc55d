"""Plain marker text parser.

Reads one marker per line::

    00:00:00:00 Intro
    00:01:12:15 First topic
    # comment lines and blank lines are ignored

The first whitespace-delimited token is the timecode (frame or decimal
form); the rest of the line is the label. A dash, pipe or colon between
timecode and label, as in ``0:00 - Intro``, is dropped.
"""

import re

from chaptermark.data.models import FormatKind, ParseResult, RawMarkerEntry, clean_label
from chaptermark.data.timecodes import is_timecode_token
from chaptermark.utils.constants import COMMENT_PREFIXES
from chaptermark.utils.exceptions import StructurallyInvalidError
from chaptermark.utils.logger import get_logger

logger = get_logger(__name__)

LABEL_SEPARATOR_PATTERN = re.compile("^[-\u2013\u2014|:]\\s+")


def is_comment(line: str) -> bool:
    """Check whether a stripped line is a comment."""
    return line.startswith(COMMENT_PREFIXES)


def has_timecode_lines(text: str) -> bool:
    """Check for at least one line starting with a timecode token."""
    for line in text.splitlines():
        stripped = line.strip().lstrip("\ufeff")
        if not stripped or is_comment(stripped):
            continue
        if is_timecode_token(stripped.split(maxsplit=1)[0]):
            return True
    return False


def split_marker_line(line: str) -> tuple[str, str]:
    """Split a marker line into timecode text and label.

    Example:
        >>> split_marker_line("00:01:05:00 - Guest interview")
        ('00:01:05:00', 'Guest interview')
    """
    parts = line.split(maxsplit=1)
    timecode_text = parts[0]
    label = parts[1] if len(parts) > 1 else ""
    label = LABEL_SEPARATOR_PATTERN.sub("", label)
    return timecode_text, clean_label(label)


def parse_marker_text(text: str, frame_rate: float) -> ParseResult:
    """Parse plain ``timecode label`` lines.

    Timecodes are not validated here. A line whose first token is not a
    timecode still produces an entry, and the normalizer drops it with a
    warning, so every rejected line is reported in one place.

    Args:
        text: Marker text
        frame_rate: Unused; kept for the common parser signature

    Returns:
        ParseResult with one entry per non-blank, non-comment line

    Raises:
        StructurallyInvalidError: If the text is empty
    """
    if not text or not text.strip():
        raise StructurallyInvalidError("Marker text is empty")

    result = ParseResult(FormatKind.PREMIERE_MARKER_TEXT)

    for line_number, raw_line in enumerate(text.splitlines(), start=1):
        line = raw_line.strip().lstrip("\ufeff")
        if not line or is_comment(line):
            continue

        timecode_text, label = split_marker_line(line)
        result.entries.append(RawMarkerEntry(timecode_text, label, line_number))

    logger.info(f"Read {len(result.entries)} marker lines")
    return result
