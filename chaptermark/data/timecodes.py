"""Timecode model for chapter conversion.

Chapter times are kept as whole milliseconds from the start of the video.
This module converts between that value and the two textual forms found in
marker exports:

- frame-based ``HH:MM:SS:FF`` (EDLs, Premiere marker lists), which needs a
  frame rate to interpret the ``FF`` field;
- decimal ``HH:MM:SS.mmm`` or ``HH:MM:SS`` (plain marker text, existing
  chapter lists).

Drop-frame timecode (``HH:MM:SS;FF``) is read exactly like non-drop. For
29.97 and 59.94 fps material this places late markers a few frames early
per ten minutes of timeline.
"""

import re
from dataclasses import dataclass

from timecode import Timecode as FrameTimecode

from chaptermark.utils.constants import (
    MS_PER_SECOND,
    SECONDS_PER_HOUR,
    SECONDS_PER_MINUTE,
)
from chaptermark.utils.exceptions import InvalidTimecodeError

FRAME_TIMECODE_PATTERN = re.compile(r"^(\d+):(\d{1,2}):(\d{1,2})[:;](\d{1,3})$")
DECIMAL_TIMECODE_PATTERN = re.compile(r"^(?:(\d+):)?(\d+):(\d{1,2})(?:\.(\d{1,3}))?$")

# Token test used by format detection; no range validation
TIMECODE_TOKEN_PATTERN = re.compile(r"^\d+:\d{1,2}(?::\d{1,2})?(?:[:;]\d{1,3}|\.\d{1,3})?$")


@dataclass(frozen=True, order=True)
class Timecode:
    """A non-negative time offset in whole milliseconds.

    Attributes:
        ms: Milliseconds from the reference start

    Example:
        >>> Timecode(5000).to_display_string()
        '00:00:05'
    """

    ms: int

    def __post_init__(self) -> None:
        """Validate the value."""
        if self.ms < 0:
            raise ValueError(f"Timecode cannot be negative, got {self.ms} ms")

    def to_display_string(self) -> str:
        return to_display_string(self)

    def shift(self, offset_ms: int) -> "Timecode":
        return shift(self, offset_ms)

    def __str__(self) -> str:
        return to_decimal_string(self)


def is_timecode_token(text: str) -> bool:
    """Check whether text looks like a timecode of either form."""
    return bool(TIMECODE_TOKEN_PATTERN.match(text.strip()))


def is_frame_timecode(text: str) -> bool:
    """Check whether text has the four-field frame layout."""
    return bool(FRAME_TIMECODE_PATTERN.match(text.strip()))


def parse_frame_timecode(text: str, frame_rate: float) -> Timecode:
    """Parse an ``HH:MM:SS:FF`` timecode.

    The ``;`` drop-frame separator is accepted and treated as ``:``.

    Args:
        text: Timecode string
        frame_rate: Frames per second used to interpret ``FF``

    Returns:
        Timecode rounded to the nearest millisecond

    Raises:
        InvalidTimecodeError: If the text is malformed or a field is out of range

    Example:
        >>> parse_frame_timecode("00:00:01:12", 24).ms
        1500
    """
    if frame_rate <= 0:
        raise InvalidTimecodeError("Frame rate must be positive", text, frame_rate)

    match = FRAME_TIMECODE_PATTERN.match(text.strip())
    if not match:
        raise InvalidTimecodeError("Expected HH:MM:SS:FF", text, frame_rate)

    hours, minutes, seconds, frames = (int(group) for group in match.groups())

    _check_clock_fields(text, minutes, seconds)
    if frames >= frame_rate:
        raise InvalidTimecodeError(
            f"Frame field {frames} is not below the frame rate", text, frame_rate
        )

    total_seconds = hours * SECONDS_PER_HOUR + minutes * SECONDS_PER_MINUTE + seconds
    ms = (total_seconds * frame_rate + frames) * MS_PER_SECOND / frame_rate
    return Timecode(round(ms))


def parse_decimal_timecode(text: str) -> Timecode:
    """Parse an ``HH:MM:SS.mmm`` or ``HH:MM:SS`` timecode.

    ``MM:SS`` and ``MM:SS.mmm`` are also accepted, so an existing chapter
    list can be pasted back in. Fractions of one to three digits are read
    as decimal seconds (``.5`` is 500 ms).

    Args:
        text: Timecode string

    Returns:
        Exact Timecode

    Raises:
        InvalidTimecodeError: If the text is malformed or a field is out of range
    """
    match = DECIMAL_TIMECODE_PATTERN.match(text.strip())
    if not match:
        raise InvalidTimecodeError("Expected HH:MM:SS.mmm or HH:MM:SS", text)

    hours_text, minutes_text, seconds_text, fraction = match.groups()
    hours = int(hours_text) if hours_text is not None else 0
    minutes = int(minutes_text)
    seconds = int(seconds_text)

    # Without an hours field the minutes may run past 59 (e.g. "75:30")
    if hours_text is not None:
        _check_clock_fields(text, minutes, seconds)
    elif seconds >= SECONDS_PER_MINUTE:
        raise InvalidTimecodeError("Seconds must be below 60", text)

    millis = int(fraction.ljust(3, "0")) if fraction else 0
    total_seconds = hours * SECONDS_PER_HOUR + minutes * SECONDS_PER_MINUTE + seconds
    return Timecode(total_seconds * MS_PER_SECOND + millis)


def parse_timecode(text: str, frame_rate: float) -> Timecode:
    """Parse either timecode form, choosing by layout.

    Four fields are read as frames; anything else as decimal.
    """
    if is_frame_timecode(text):
        return parse_frame_timecode(text, frame_rate)
    return parse_decimal_timecode(text)


def _check_clock_fields(text: str, minutes: int, seconds: int) -> None:
    if minutes >= SECONDS_PER_MINUTE:
        raise InvalidTimecodeError("Minutes must be below 60", text)
    if seconds >= SECONDS_PER_MINUTE:
        raise InvalidTimecodeError("Seconds must be below 60", text)


def _split_clock(ms: int) -> tuple[int, int, int, int]:
    total_seconds, millis = divmod(ms, MS_PER_SECOND)
    hours, remainder = divmod(total_seconds, SECONDS_PER_HOUR)
    minutes, seconds = divmod(remainder, SECONDS_PER_MINUTE)
    return hours, minutes, seconds, millis


def to_display_string(value: Timecode) -> str:
    """Format as ``HH:MM:SS``, dropping the sub-second part.

    Hours grow past two digits for very long videos.

    Example:
        >>> to_display_string(Timecode(3_723_999))
        '01:02:03'
    """
    hours, minutes, seconds, _ = _split_clock(value.ms)
    return f"{hours:02d}:{minutes:02d}:{seconds:02d}"


def to_decimal_string(value: Timecode) -> str:
    """Format as ``HH:MM:SS.mmm``."""
    hours, minutes, seconds, millis = _split_clock(value.ms)
    return f"{hours:02d}:{minutes:02d}:{seconds:02d}.{millis:03d}"


def to_frame_string(value: Timecode, frame_rate: float) -> str:
    """Format as non-drop ``HH:MM:SS:FF`` at the given frame rate.

    Frame labels count at the nominal integer rate (24 for 23.976), the
    same way parse_frame_timecode reads them back.

    Args:
        value: Time to format
        frame_rate: Frames per second

    Returns:
        Frame-based timecode string

    Example:
        >>> to_frame_string(Timecode(1500), 24)
        '00:00:01:12'
    """
    nominal_rate = max(1, round(frame_rate))
    seconds, millis = divmod(value.ms, MS_PER_SECOND)
    frames = min(nominal_rate - 1, round(millis * frame_rate / MS_PER_SECOND))
    frame_count = seconds * nominal_rate + frames

    # The timecode library counts frames from 1
    tc = FrameTimecode(str(nominal_rate), frames=frame_count + 1, force_non_drop_frame=True)
    return str(tc)


def shift(value: Timecode, offset_ms: int) -> Timecode:
    """Move a timecode by ``offset_ms``, clamping at zero."""
    return Timecode(max(0, value.ms + offset_ms))
