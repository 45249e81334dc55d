"""
EDL marker parsers for DaVinci Resolve and Premiere exports.

Both editors write CMX3600-style edit decision lists. They differ in where
marker names live:

- DaVinci Resolve ("Timeline Markers to EDL") follows each event line
  with ``|C:<color> |M:<name> |D:<duration>``.
- Premiere writes ``* LOC: <tc> <COLOR> <comment>`` locator comments for
  sequence markers and ``* FROM CLIP NAME: <name>`` under each event.

Event lines look like::

    001  001      V     C        01:00:05:00 01:00:05:01 01:00:05:00 01:00:05:01

The record-in timecode (third) is the marker's position on the timeline.
Lines that cannot be read are skipped with a warning; the rest of the
file is still used.
"""

import re
from dataclasses import dataclass

from chaptermark.data.models import FormatKind, ParseResult, RawMarkerEntry, clean_label
from chaptermark.data.timecodes import is_frame_timecode
from chaptermark.utils.exceptions import StructurallyInvalidError
from chaptermark.utils.logger import get_logger

logger = get_logger(__name__)

_TC = r"\d{1,3}:\d{1,2}:\d{1,2}[:;]\d{1,2}"

# [event#] [reel] [channel] [transition] [trans_op] [src_in] [src_out] [rec_in] [rec_out]
EDL_EVENT_PATTERN = re.compile(
    rf"^(?P<event>\d+)\s+(?P<reel>\S+)\s+(?P<channel>\S+)\s+(?P<transition>\S+)"
    rf"(?:\s+(?P<duration>\S+))?\s+"
    rf"(?P<source_in>{_TC})\s+(?P<source_out>{_TC})\s+"
    rf"(?P<record_in>{_TC})\s+(?P<record_out>{_TC})\s*$"
)
EVENT_NUMBER_PATTERN = re.compile(r"^\d+\s")
EDL_HEADER_PATTERN = re.compile(r"^(TITLE|FCM):", re.IGNORECASE)
DROP_FRAME_PATTERN = re.compile(r"^FCM:\s*DROP FRAME", re.IGNORECASE)

DAVINCI_MARKER_PATTERN = re.compile(r"\|M:(?P<name>.*?)\s*(?:\|D:\S*\s*)?$")
CLIP_NAME_PATTERN = re.compile(r"^\*\s*FROM CLIP NAME:\s*(?P<name>.*)$", re.IGNORECASE)
LOCATOR_PATTERN = re.compile(
    r"^\*\s*LOC:\s*(?P<timecode>\S+)"
    r"(?:\s+(?P<color>WHITE|RED|GREEN|BLUE|CYAN|MAGENTA|YELLOW|BLACK|ORANGE|PURPLE))?"
    r"(?:\s+(?P<comment>.*))?$",
    re.IGNORECASE,
)

MEDIA_EXTENSIONS = (".mov", ".mp4", ".mxf", ".m4v", ".avi", ".mkv", ".wav", ".mp3", ".braw", ".r3d")


@dataclass
class _Event:
    """Record-in position of the most recent event line."""

    record_in: str
    line_number: int


def has_edl_header(text: str) -> bool:
    """Check for a TITLE:/FCM: header or a CMX event line."""
    for line in text.splitlines():
        stripped = line.strip()
        if EDL_HEADER_PATTERN.match(stripped) or EDL_EVENT_PATTERN.match(stripped):
            return True
    return False


def has_davinci_markers(text: str) -> bool:
    """Check for at least one Resolve ``|M:`` marker field."""
    return any(DAVINCI_MARKER_PATTERN.search(line) for line in text.splitlines())


def has_premiere_markers(text: str) -> bool:
    """Check for FROM CLIP NAME or LOC comment fields."""
    for line in text.splitlines():
        stripped = line.strip()
        if CLIP_NAME_PATTERN.match(stripped) or LOCATOR_PATTERN.match(stripped):
            return True
    return False


def _check_header(line: str, line_number: int, result: ParseResult) -> None:
    if DROP_FRAME_PATTERN.match(line):
        result.warn(
            "Drop-frame timecode is read as non-drop; times may run early on long timelines",
            line_number,
            line,
        )


def _require_text(text: str) -> None:
    if not text or not text.strip():
        raise StructurallyInvalidError("EDL is empty")


def parse_davinci_edl(text: str, frame_rate: float) -> ParseResult:
    """
    Parse a DaVinci Resolve marker EDL.

    Each event line followed by a ``|M:`` marker line yields one entry.
    Events without a marker line are ordinary edits and are ignored.

    Args:
        text: Full EDL text
        frame_rate: Unused here; timecodes are validated by the normalizer

    Returns:
        ParseResult with one entry per marker

    Raises:
        StructurallyInvalidError: If the text is empty
    """
    _require_text(text)
    result = ParseResult(FormatKind.DAVINCI_RESOLVE_EDL)
    pending = None

    for line_number, raw_line in enumerate(text.splitlines(), start=1):
        line = raw_line.strip()
        if not line:
            continue

        if EDL_HEADER_PATTERN.match(line):
            _check_header(line, line_number, result)
            continue

        event = EDL_EVENT_PATTERN.match(line)
        if event:
            pending = _Event(event.group("record_in"), line_number)
            continue

        if EVENT_NUMBER_PATTERN.match(line):
            result.warn("Malformed EDL event line skipped", line_number, line)
            pending = None
            continue

        marker = DAVINCI_MARKER_PATTERN.search(line)
        if marker:
            if pending is None:
                result.warn("Marker field without a preceding event skipped", line_number, line)
                continue
            result.entries.append(
                RawMarkerEntry(pending.record_in, clean_label(marker.group("name")), pending.line_number)
            )
            logger.debug(f"Line {pending.line_number}: marker at {pending.record_in}")
            # One marker per event
            pending = None

    logger.info(f"Found {len(result.entries)} markers in DaVinci Resolve EDL")
    return result


def _strip_media_extension(name: str) -> str:
    lowered = name.lower()
    for extension in MEDIA_EXTENSIONS:
        if lowered.endswith(extension) and len(name) > len(extension):
            return name[: -len(extension)]
    return name


def parse_premiere_edl(text: str, frame_rate: float) -> ParseResult:
    """
    Parse a Premiere EDL.

    Sequence markers (``* LOC:`` lines) are preferred. When the file has
    none, every event with a ``* FROM CLIP NAME:`` comment becomes an entry
    at its record-in, named after the clip.

    Args:
        text: Full EDL text
        frame_rate: Unused here; timecodes are validated by the normalizer

    Returns:
        ParseResult with locator or clip entries

    Raises:
        StructurallyInvalidError: If the text is empty
    """
    _require_text(text)
    result = ParseResult(FormatKind.PREMIERE_EDL)
    locators: list[RawMarkerEntry] = []
    clips: list[RawMarkerEntry] = []
    pending = None

    for line_number, raw_line in enumerate(text.splitlines(), start=1):
        line = raw_line.strip()
        if not line:
            continue

        if EDL_HEADER_PATTERN.match(line):
            _check_header(line, line_number, result)
            continue

        event = EDL_EVENT_PATTERN.match(line)
        if event:
            pending = _Event(event.group("record_in"), line_number)
            continue

        if EVENT_NUMBER_PATTERN.match(line):
            result.warn("Malformed EDL event line skipped", line_number, line)
            pending = None
            continue

        locator = LOCATOR_PATTERN.match(line)
        if locator:
            timecode_text = locator.group("timecode")
            if not is_frame_timecode(timecode_text):
                result.warn(f"Locator has invalid timecode '{timecode_text}'", line_number, line)
                continue
            locators.append(RawMarkerEntry(timecode_text, clean_label(locator.group("comment")), line_number))
            continue

        clip = CLIP_NAME_PATTERN.match(line)
        if clip:
            if pending is None:
                result.warn("Clip name without a preceding event skipped", line_number, line)
                continue
            name = _strip_media_extension(clean_label(clip.group("name")))
            clips.append(RawMarkerEntry(pending.record_in, name, pending.line_number))
            pending = None

    if locators:
        result.entries = locators
        logger.info(f"Found {len(locators)} locator markers in Premiere EDL")
    else:
        result.entries = clips
        logger.info(f"No locators in Premiere EDL, using {len(clips)} clip events")

    return result
