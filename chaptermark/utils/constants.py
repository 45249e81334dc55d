"""Constants for marker-to-chapter conversion.

This module gathers the defaults, limits and header aliases used across
the package, so they are named and changed in one place.
"""

from typing import Final

# Frame rate used when the input does not declare one (EDLs rarely do)
DEFAULT_FRAME_RATE: Final[float] = 30.0
MIN_FRAME_RATE: Final[float] = 1.0
MAX_FRAME_RATE: Final[float] = 120.0

MS_PER_SECOND: Final[int] = 1000
SECONDS_PER_MINUTE: Final[int] = 60
SECONDS_PER_HOUR: Final[int] = 3600

# Platform rules for published chapter lists
MIN_CHAPTERS: Final[int] = 2
MIN_CHAPTER_SECONDS: Final[int] = 10

# Label handling
PLACEHOLDER_LABEL: Final[str] = "Chapter {n}"
COMBINE_SEPARATOR: Final[str] = " | "

# Duplicate handling policies
DUPLICATE_FIRST: Final[str] = "first"
DUPLICATE_COMBINE: Final[str] = "combine"
DUPLICATE_POLICIES: Final[tuple[str, ...]] = (DUPLICATE_FIRST, DUPLICATE_COMBINE)

# Chapter identifier prefix
CHAPTER_ID_PREFIX: Final[str] = "ch-"

# Marker text comment prefixes
COMMENT_PREFIXES: Final[tuple[str, ...]] = ("#", "//")

# CSV header aliases, compared case-insensitively after stripping
CSV_TIMECODE_COLUMNS: Final[tuple[str, ...]] = (
    "in",
    "timecode",
    "timecode in",
    "record in",
    "start",
    "start time",
    "time",
    "source in",
)
CSV_NAME_COLUMNS: Final[tuple[str, ...]] = (
    "marker name",
    "name",
    "title",
    "label",
    "chapter",
)
CSV_DESCRIPTION_COLUMNS: Final[tuple[str, ...]] = (
    "description",
    "comment",
    "comments",
    "notes",
)
CSV_DELIMITERS: Final[tuple[str, ...]] = (",", "\t", ";")

# Encoding detection
ENCODING_SAMPLE_BYTES: Final[int] = 65536
ENCODING_MIN_CONFIDENCE: Final[float] = 0.7
DEFAULT_ENCODING: Final[str] = "utf-8"

# Input path meaning standard input
STDIN_MARKER: Final[str] = "-"
