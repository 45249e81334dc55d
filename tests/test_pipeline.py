"""End-to-end tests for the conversion pipeline."""

from __future__ import annotations

import pytest

from chaptermark.config.models import ChapterConfig
from chaptermark.data.models import FormatKind
from chaptermark.processing.pipeline import convert, load_chapters
from chaptermark.utils.exceptions import (
    NoValidChaptersError,
    StructurallyInvalidError,
    TooFewChaptersError,
    UnrecognizedFormatError,
)


class TestConvert:
    """Tests for convert."""

    def test_davinci_edl(self, davinci_edl: str) -> None:
        """Resolve markers at 1h offset start at 00:00:00."""
        result = convert(davinci_edl)

        assert result.text == "00:00:00 Intro\n00:00:05 Main topic\n00:00:13 Wrap up"
        assert result.normalization.format_kind == FormatKind.DAVINCI_RESOLVE_EDL
        assert result.normalization.origin_offset_ms == 3_602_000

    def test_premiere_locators(self, premiere_locator_edl: str) -> None:
        """Locator comments become chapter labels."""
        result = convert(premiere_locator_edl)
        assert result.text.splitlines() == [
            "00:00:00 Cold open",
            "00:00:12 Guest introduction",
            "00:00:45 Closing thoughts",
        ]

    def test_premiere_clips(self, premiere_clip_edl: str) -> None:
        """Clip events become chapters named after the clip."""
        assert convert(premiere_clip_edl).text.splitlines() == [
            "00:00:00 opening_titles",
            "00:00:10 interview_a",
            "00:00:30 b_roll",
        ]

    def test_marker_text(self, marker_text: str) -> None:
        """Marker text converts line for line."""
        assert convert(marker_text).text == "00:00:00 Intro\n00:00:05 Body\n00:00:12 Outro"

    def test_marker_csv(self, marker_csv: str) -> None:
        """CSV markers convert with description fallback."""
        assert convert(marker_csv).text.splitlines() == [
            "00:00:00 Intro",
            "00:00:20 Guest arrives",
            "00:01:00 Questions",
        ]

    @pytest.mark.parametrize(
        "fixture_name",
        ["davinci_edl", "premiere_locator_edl", "premiere_clip_edl", "marker_text", "marker_csv"],
    )
    def test_output_is_ascending(self, fixture_name: str, request: pytest.FixtureRequest) -> None:
        """Every format renders strictly ascending lines starting at zero."""
        lines = convert(request.getfixturevalue(fixture_name)).text.splitlines()
        times = [line.split(" ", 1)[0] for line in lines]

        assert times[0] == "00:00:00"
        assert times == sorted(set(times))

    def test_frame_rate_applies(self) -> None:
        """Frame fields are read at the configured rate."""
        text = "00:00:00:00 A\n00:00:10:24 B\n"
        assert convert(text, ChapterConfig(frame_rate=25)).normalization.chapters.times == [0, 10960]

    def test_forced_format(self, marker_text: str) -> None:
        """A forced format that does not fit yields no chapters."""
        config = ChapterConfig(format_kind="premiere-edl")
        with pytest.raises(NoValidChaptersError):
            convert(marker_text, config)

    def test_single_chapter(self) -> None:
        """One chapter cannot be rendered."""
        with pytest.raises(TooFewChaptersError):
            convert("00:00:00 Only\n")

    def test_warnings_exposed(self) -> None:
        """Skipped lines are reported on the result."""
        result = convert("00:00:00 A\nsoon B\n00:00:30 C\n")
        assert [w.line_number for w in result.warnings] == [2]


class TestLoadChapters:
    """Tests for load_chapters."""

    def test_returns_editable_list(self, marker_text: str) -> None:
        """The loaded list can be edited directly."""
        chapters = load_chapters(marker_text).chapters
        chapters.add(8000, "Demo")
        assert chapters.labels == ["Intro", "Body", "Demo", "Outro"]

    def test_single_chapter_loads(self) -> None:
        """Loading does not apply the rendering minimum."""
        assert len(load_chapters("00:00:00 Only\n").chapters) == 1

    def test_empty(self) -> None:
        """Empty input is structurally invalid."""
        with pytest.raises(StructurallyInvalidError):
            load_chapters("")

    def test_unrecognized(self) -> None:
        """Unrecognized input is rejected."""
        with pytest.raises(UnrecognizedFormatError):
            load_chapters("just some words\n")
