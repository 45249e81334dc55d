"""Parser registry keyed by input format.

Every parser is a plain function ``(text, frame_rate) -> ParseResult``.
The registry maps each FormatKind to its function, so callers dispatch on
the detected format without a class hierarchy.
"""

from collections.abc import Callable

from chaptermark.data.csv_parser import parse_marker_csv
from chaptermark.data.detector import detect_format
from chaptermark.data.edl_parser import parse_davinci_edl, parse_premiere_edl
from chaptermark.data.models import FormatKind, ParseResult
from chaptermark.data.text_parser import parse_marker_text
from chaptermark.utils.constants import DEFAULT_FRAME_RATE
from chaptermark.utils.logger import get_logger

logger = get_logger(__name__)

Parser = Callable[[str, float], ParseResult]

PARSERS: dict[FormatKind, Parser] = {
    FormatKind.DAVINCI_RESOLVE_EDL: parse_davinci_edl,
    FormatKind.PREMIERE_EDL: parse_premiere_edl,
    FormatKind.PREMIERE_MARKER_TEXT: parse_marker_text,
    FormatKind.PREMIERE_MARKER_CSV: parse_marker_csv,
}


def get_parser(format_kind: FormatKind) -> Parser:
    """Return the parser function for a format."""
    return PARSERS[format_kind]


def parse_markers(
    text: str,
    frame_rate: float = DEFAULT_FRAME_RATE,
    format_kind: FormatKind | None = None,
) -> ParseResult:
    """Detect the format of ``text`` (unless given) and parse it.

    Args:
        text: Whole input text
        frame_rate: Frames per second for frame-based timecodes
        format_kind: Skip detection and use this format

    Returns:
        ParseResult with entries and per-record warnings

    Raises:
        StructurallyInvalidError: If the text is empty or structurally unusable
        UnrecognizedFormatError: If detection finds no matching format
    """
    if format_kind is None:
        format_kind = detect_format(text)
    else:
        logger.info(f"Using requested input format: {format_kind.display_name}")

    result = get_parser(format_kind)(text, frame_rate)

    for warning in result.warnings:
        logger.warning(str(warning))

    return result
