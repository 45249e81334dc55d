"""Tests for the timecode model."""

from __future__ import annotations

import pytest

from chaptermark.data.timecodes import (
    Timecode,
    is_frame_timecode,
    is_timecode_token,
    parse_decimal_timecode,
    parse_frame_timecode,
    parse_timecode,
    shift,
    to_decimal_string,
    to_display_string,
    to_frame_string,
)
from chaptermark.utils.exceptions import InvalidTimecodeError


class TestTimecode:
    """Tests for the Timecode value."""

    def test_negative_rejected(self) -> None:
        """Negative values raise ValueError."""
        with pytest.raises(ValueError):
            Timecode(-1)

    def test_ordering(self) -> None:
        """Timecodes compare by milliseconds."""
        assert Timecode(1000) < Timecode(2000)
        assert sorted([Timecode(5), Timecode(1)]) == [Timecode(1), Timecode(5)]

    def test_hashable(self) -> None:
        """Equal timecodes hash equally."""
        assert len({Timecode(1500), Timecode(1500)}) == 1

    def test_str_is_decimal(self) -> None:
        """str() gives the millisecond form."""
        assert str(Timecode(61_250)) == "00:01:01.250"


class TestParseFrameTimecode:
    """Tests for HH:MM:SS:FF parsing."""

    def test_whole_seconds(self) -> None:
        """Zero frames converts to whole seconds."""
        assert parse_frame_timecode("00:00:05:00", 30).ms == 5000

    def test_frames_at_24(self) -> None:
        """Twelve frames at 24 fps is half a second."""
        assert parse_frame_timecode("00:00:01:12", 24).ms == 1500

    def test_rounds_to_nearest_ms(self) -> None:
        """One frame at 30 fps rounds to 33 ms."""
        assert parse_frame_timecode("00:00:00:01", 30).ms == 33

    def test_hours(self) -> None:
        """Hours count toward the total."""
        assert parse_frame_timecode("01:00:00:00", 25).ms == 3_600_000

    def test_long_hours(self) -> None:
        """Hours may run past two digits."""
        assert parse_frame_timecode("100:00:00:00", 25).ms == 360_000_000

    def test_drop_frame_separator(self) -> None:
        """The ; separator reads like non-drop."""
        assert parse_frame_timecode("00:01:00;02", 30) == parse_frame_timecode("00:01:00:02", 30)

    def test_fractional_rate(self) -> None:
        """Fractional rates use the exact rate for the frame part."""
        assert parse_frame_timecode("00:00:10:00", 23.976).ms == 10_000

    @pytest.mark.parametrize(
        "text",
        ["00:60:00:00", "00:00:60:00", "00:00:00:30", "00:00:00", "aa:bb:cc:dd", ""],
    )
    def test_invalid(self, text: str) -> None:
        """Out-of-range fields and bad layouts raise InvalidTimecodeError."""
        with pytest.raises(InvalidTimecodeError):
            parse_frame_timecode(text, 30)

    def test_error_carries_context(self) -> None:
        """The error keeps the text and the frame rate."""
        with pytest.raises(InvalidTimecodeError) as exc_info:
            parse_frame_timecode("00:00:00:25", 25)
        assert exc_info.value.timecode_text == "00:00:00:25"
        assert exc_info.value.frame_rate == 25
        assert exc_info.value.code == "InvalidTimecode"


class TestParseDecimalTimecode:
    """Tests for HH:MM:SS.mmm parsing."""

    def test_whole_seconds(self) -> None:
        """HH:MM:SS without a fraction."""
        assert parse_decimal_timecode("00:01:30").ms == 90_000

    def test_milliseconds(self) -> None:
        """Three fraction digits are milliseconds."""
        assert parse_decimal_timecode("00:00:01.234").ms == 1234

    def test_short_fraction_is_scaled(self) -> None:
        """One fraction digit is tenths of a second."""
        assert parse_decimal_timecode("00:00:01.5").ms == 1500

    def test_minutes_seconds(self) -> None:
        """MM:SS is accepted."""
        assert parse_decimal_timecode("2:05").ms == 125_000

    def test_long_minutes(self) -> None:
        """Without hours, minutes may exceed 59."""
        assert parse_decimal_timecode("75:30").ms == 4_530_000

    @pytest.mark.parametrize("text", ["00:61:00", "00:00:61", "1:75", "00:00:01.2345", "intro"])
    def test_invalid(self, text: str) -> None:
        """Malformed decimal timecodes raise InvalidTimecodeError."""
        with pytest.raises(InvalidTimecodeError):
            parse_decimal_timecode(text)


class TestParseTimecode:
    """Tests for layout dispatch."""

    def test_four_fields_use_frames(self) -> None:
        """Four fields are read as frames."""
        assert parse_timecode("00:00:01:15", 30).ms == 1500

    def test_three_fields_use_decimal(self) -> None:
        """Three fields are read as seconds."""
        assert parse_timecode("00:00:01", 30).ms == 1000

    def test_token_checks(self) -> None:
        """Token helpers recognize both layouts."""
        assert is_timecode_token("00:00:01:15")
        assert is_timecode_token("1:30")
        assert not is_timecode_token("Intro")
        assert is_frame_timecode("00:00:01;15")
        assert not is_frame_timecode("00:00:01.500")


class TestFormatting:
    """Tests for timecode output."""

    def test_display_truncates(self) -> None:
        """Sub-second remainder is dropped, not rounded."""
        assert to_display_string(Timecode(5999)) == "00:00:05"

    def test_display_hours(self) -> None:
        """Hours, minutes and seconds are zero-padded."""
        assert to_display_string(Timecode(3_723_000)) == "01:02:03"

    def test_display_long_hours(self) -> None:
        """Hours may exceed two digits."""
        assert to_display_string(Timecode(100 * 3_600_000)) == "100:00:00"

    def test_decimal(self) -> None:
        """Decimal form keeps milliseconds."""
        assert to_decimal_string(Timecode(1234)) == "00:00:01.234"

    def test_frame_string(self) -> None:
        """Frame form reads back to the same time."""
        assert to_frame_string(Timecode(1500), 24) == "00:00:01:12"
        assert to_frame_string(Timecode(0), 30) == "00:00:00:00"
        assert to_frame_string(Timecode(65_000), 25) == "00:01:05:00"


class TestShift:
    """Tests for shifting."""

    def test_shift_forward(self) -> None:
        """Positive offsets move later."""
        assert shift(Timecode(1000), 500).ms == 1500

    def test_shift_clamps(self) -> None:
        """Shifting below zero clamps at zero."""
        assert shift(Timecode(1000), -5000).ms == 0
        assert Timecode(1000).shift(-5000) == Timecode(0)
