"""Input format detection.

The format is decided from the text itself, never from a file name. Each
format has a structural signature; the signatures are tried in priority
order and the first match wins. Detection fails closed: text matching no
signature is rejected rather than guessed at.
"""

from collections.abc import Callable

from chaptermark.data.csv_parser import has_csv_header
from chaptermark.data.edl_parser import has_davinci_markers, has_edl_header, has_premiere_markers
from chaptermark.data.models import FormatKind
from chaptermark.data.text_parser import has_timecode_lines
from chaptermark.utils.exceptions import StructurallyInvalidError, UnrecognizedFormatError
from chaptermark.utils.logger import get_logger

logger = get_logger(__name__)


def _is_davinci_edl(text: str) -> bool:
    return has_edl_header(text) and has_davinci_markers(text)


def _is_premiere_edl(text: str) -> bool:
    return has_edl_header(text) and has_premiere_markers(text)


# Most specific signatures first: an EDL also contains timecode lines,
# and a CSV header would otherwise be skipped as a text label line.
DETECTION_ORDER: tuple[tuple[FormatKind, Callable[[str], bool]], ...] = (
    (FormatKind.DAVINCI_RESOLVE_EDL, _is_davinci_edl),
    (FormatKind.PREMIERE_EDL, _is_premiere_edl),
    (FormatKind.PREMIERE_MARKER_CSV, has_csv_header),
    (FormatKind.PREMIERE_MARKER_TEXT, has_timecode_lines),
)


def detect_format(text: str) -> FormatKind:
    """Identify the marker export format of a text.

    Args:
        text: Whole input text

    Returns:
        The detected FormatKind

    Raises:
        StructurallyInvalidError: If the text is empty
        UnrecognizedFormatError: If no format signature matches

    Example:
        >>> detect_format("00:00:00 Intro\\n00:01:30 Topic")
        <FormatKind.PREMIERE_MARKER_TEXT: 'marker-text'>
    """
    if not text or not text.strip():
        raise StructurallyInvalidError("Input is empty")

    for kind, matches in DETECTION_ORDER:
        if matches(text):
            logger.info(f"Detected input format: {kind.display_name}")
            return kind

    raise UnrecognizedFormatError(
        "Input is not a recognized marker export "
        "(expected an EDL, a marker CSV, or 'timecode label' lines)"
    )
