"""Render chapter lists as text.

The main output is the plain chapter list video platforms read from a
description: one ``HH:MM:SS Label`` line per chapter.
"""

from collections.abc import Iterable

from chaptermark.data.models import Chapter
from chaptermark.data.timecodes import Timecode, to_display_string, to_frame_string
from chaptermark.utils.constants import MIN_CHAPTER_SECONDS, MIN_CHAPTERS, MS_PER_SECOND
from chaptermark.utils.exceptions import TooFewChaptersError
from chaptermark.utils.logger import get_logger

logger = get_logger(__name__)


def render(chapters: Iterable[Chapter], min_chapters: int = MIN_CHAPTERS) -> str:
    """Render chapters as ``HH:MM:SS Label`` lines.

    Args:
        chapters: Chapters in order (usually a ChapterList)
        min_chapters: Fewest chapters a platform will accept

    Returns:
        Newline-separated lines without a trailing newline

    Raises:
        TooFewChaptersError: If there are fewer than min_chapters chapters

    Example:
        >>> print(render(chapter_list))
        00:00:00 Intro
        00:00:05 Body
        00:00:12 Outro
    """
    chapters = list(chapters)
    if len(chapters) < min_chapters:
        raise TooFewChaptersError(len(chapters), min_chapters)

    lines = [f"{to_display_string(Timecode(chapter.start_ms))} {chapter.label}" for chapter in chapters]
    logger.debug(f"Rendered {len(lines)} chapter lines")
    return "\n".join(lines)


def render_marker_text(chapters: Iterable[Chapter], frame_rate: float) -> str:
    """Render chapters as frame-based marker text.

    The output reads back through the marker text parser, so a chapter
    list can be handed to an editor as markers.
    """
    return "\n".join(
        f"{to_frame_string(Timecode(chapter.start_ms), frame_rate)} {chapter.label}"
        for chapter in chapters
    )


def check_platform_rules(
    chapters: Iterable[Chapter], min_chapter_seconds: int = MIN_CHAPTER_SECONDS
) -> list[str]:
    """Collect advisory messages for chapters that are too short.

    Platforms usually ignore chapter lists where any chapter lasts less
    than ``min_chapter_seconds``. The last chapter runs to the end of the
    video, whose length is unknown here, so it is never flagged.

    Returns:
        One message per short chapter (empty if none)
    """
    chapters = list(chapters)
    minimum_ms = min_chapter_seconds * MS_PER_SECOND
    messages = []

    for current, following in zip(chapters, chapters[1:]):
        length_ms = following.start_ms - current.start_ms
        if length_ms < minimum_ms:
            messages.append(
                f"Chapter '{current.label}' at {to_display_string(Timecode(current.start_ms))} "
                f"is {length_ms / MS_PER_SECOND:g}s long (platforms expect at least "
                f"{min_chapter_seconds}s)"
            )

    return messages
