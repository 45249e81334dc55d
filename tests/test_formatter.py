"""Tests for chapter list rendering."""

from __future__ import annotations

import pytest

from chaptermark.data.models import Chapter
from chaptermark.data.parsers import parse_markers
from chaptermark.processing.chapter_list import ChapterList
from chaptermark.processing.normalizer import ChapterNormalizer
from chaptermark.rendering.formatter import check_platform_rules, render, render_marker_text
from chaptermark.utils.exceptions import TooFewChaptersError


@pytest.fixture
def chapters() -> ChapterList:
    """Intro at 0s, Body at 5s, Outro at 12s."""
    return ChapterList.from_pairs([(0, "Intro"), (5000, "Body"), (12000, "Outro")])


class TestRender:
    """Tests for render."""

    def test_lines(self, chapters: ChapterList) -> None:
        """Each chapter renders as HH:MM:SS Label."""
        assert render(chapters) == "00:00:00 Intro\n00:00:05 Body\n00:00:12 Outro"

    def test_no_trailing_newline(self, chapters: ChapterList) -> None:
        """Output ends with the last label."""
        assert not render(chapters).endswith("\n")

    def test_sub_second_truncated(self) -> None:
        """Sub-second starts are truncated."""
        chapter_list = ChapterList.from_pairs([(0, "A"), (1999, "B")])
        assert render(chapter_list).splitlines()[1] == "00:00:01 B"

    def test_too_few(self) -> None:
        """A single chapter cannot be published."""
        with pytest.raises(TooFewChaptersError) as exc_info:
            render([Chapter("ch-1", 0, "Only")])
        assert exc_info.value.count == 1
        assert exc_info.value.minimum == 2
        assert exc_info.value.code == "TooFewChapters"

    def test_custom_minimum(self) -> None:
        """The minimum is configurable."""
        assert render([Chapter("ch-1", 0, "Only")], min_chapters=1) == "00:00:00 Only"


class TestRenderMarkerText:
    """Tests for frame-based marker text output."""

    def test_lines(self, chapters: ChapterList) -> None:
        """Chapters render with frame timecodes."""
        assert render_marker_text(chapters, 25).splitlines() == [
            "00:00:00:00 Intro",
            "00:00:05:00 Body",
            "00:00:12:00 Outro",
        ]

    def test_reads_back(self, chapters: ChapterList) -> None:
        """Marker text output parses back to the same chapters."""
        text = render_marker_text(chapters, 30)
        reparsed = ChapterNormalizer().normalize(parse_markers(text, 30)).chapters

        assert reparsed.times == chapters.times
        assert reparsed.labels == chapters.labels


class TestCheckPlatformRules:
    """Tests for advisory platform checks."""

    def test_long_chapters_pass(self) -> None:
        """Chapters of 10s or more give no messages."""
        chapter_list = ChapterList.from_pairs([(0, "A"), (10000, "B"), (20000, "C")])
        assert check_platform_rules(chapter_list) == []

    def test_short_chapter_flagged(self, chapters: ChapterList) -> None:
        """Chapters under the minimum are reported."""
        messages = check_platform_rules(chapters)

        assert len(messages) == 2
        assert "'Intro'" in messages[0]
        assert "5s long" in messages[0]

    def test_last_chapter_not_flagged(self) -> None:
        """The last chapter's length is unknown and never flagged."""
        chapter_list = ChapterList.from_pairs([(0, "A"), (60000, "B")])
        assert check_platform_rules(chapter_list, min_chapter_seconds=30) == []
