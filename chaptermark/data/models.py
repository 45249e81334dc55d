"""Data models for parsed markers and chapters.

This module defines the dataclasses passed between the parsers, the
normalizer and the chapter list.
"""

from dataclasses import dataclass, field
from enum import Enum

from chaptermark.utils.constants import MS_PER_SECOND


class FormatKind(Enum):
    """Input formats recognized by the detector."""

    DAVINCI_RESOLVE_EDL = "davinci-edl"
    PREMIERE_EDL = "premiere-edl"
    PREMIERE_MARKER_TEXT = "marker-text"
    PREMIERE_MARKER_CSV = "marker-csv"

    @property
    def is_edl(self) -> bool:
        """Check if the format carries frame-based EDL timecodes."""
        return self in (FormatKind.DAVINCI_RESOLVE_EDL, FormatKind.PREMIERE_EDL)

    @property
    def display_name(self) -> str:
        """Human-readable format name for logs and CLI output."""
        return _DISPLAY_NAMES[self]

    @classmethod
    def from_name(cls, name: str) -> "FormatKind":
        """Look up a format by its value or enum name.

        Args:
            name: Format value (e.g. "davinci-edl") or name (e.g. "PREMIERE_EDL")

        Returns:
            Matching FormatKind

        Raises:
            ValueError: If the name matches no format

        Example:
            >>> FormatKind.from_name("marker-csv")
            <FormatKind.PREMIERE_MARKER_CSV: 'marker-csv'>
        """
        key = name.strip()
        for kind in cls:
            if key.lower() == kind.value or key.upper() == kind.name:
                return kind
        valid = ", ".join(kind.value for kind in cls)
        raise ValueError(f"Unknown format '{name}', must be one of: {valid}")


_DISPLAY_NAMES = {
    FormatKind.DAVINCI_RESOLVE_EDL: "DaVinci Resolve EDL",
    FormatKind.PREMIERE_EDL: "Premiere EDL",
    FormatKind.PREMIERE_MARKER_TEXT: "Marker text",
    FormatKind.PREMIERE_MARKER_CSV: "Marker CSV",
}


@dataclass(frozen=True)
class RawMarkerEntry:
    """A (timecode, label) pair as found in the source text.

    Attributes:
        timecode_text: Unparsed timecode string
        label: Label text, possibly empty
        source_line_number: 1-based line in the input text
    """

    timecode_text: str
    label: str
    source_line_number: int


@dataclass(frozen=True)
class ParseWarning:
    """A recoverable problem with one record of the input.

    Attributes:
        message: What went wrong
        line_number: 1-based source line, if known
        source_text: The offending line or cell, if available
    """

    message: str
    line_number: int | None = None
    source_text: str = ""

    def __str__(self) -> str:
        if self.line_number is None:
            return self.message
        return f"Line {self.line_number}: {self.message}"


@dataclass
class ParseResult:
    """Output of a single parser run.

    Attributes:
        format_kind: Format the parser handled
        entries: Raw marker entries in source order
        warnings: Per-record problems that were skipped
    """

    format_kind: FormatKind
    entries: list[RawMarkerEntry] = field(default_factory=list)
    warnings: list[ParseWarning] = field(default_factory=list)

    def warn(self, message: str, line_number: int | None = None, source_text: str = "") -> None:
        """Record a warning for a skipped record."""
        self.warnings.append(ParseWarning(message, line_number, source_text))


def clean_label(text: str | None) -> str:
    """Reduce a label to a single trimmed line.

    Tabs and line breaks would split one chapter into several lines of
    output, so they become spaces and runs of whitespace collapse.

    Args:
        text: Raw label text (None is treated as empty)

    Returns:
        Sanitized label, possibly empty

    Example:
        >>> clean_label("  Intro\\n  part one ")
        'Intro part one'
    """
    if not text:
        return ""
    return " ".join(str(text).split())


@dataclass(frozen=True)
class Chapter:
    """One entry of a chapter list.

    Chapters are immutable; the chapter list replaces them on edit while
    keeping ``id`` so a UI can follow a chapter across re-sorts.

    Attributes:
        id: Stable identifier, unique within its list
        start_ms: Start time in milliseconds from the video start
        label: Non-empty single-line title

    Example:
        >>> Chapter(id="ch-1", start_ms=0, label="Intro")
    """

    id: str
    start_ms: int
    label: str

    def __post_init__(self) -> None:
        """Validate start time and label."""
        if self.start_ms < 0:
            raise ValueError(f"Chapter start cannot be negative, got {self.start_ms}")
        if not self.label.strip():
            raise ValueError(f"Chapter '{self.id}' must have a non-empty label")

    @property
    def start_seconds(self) -> float:
        """Start time in seconds."""
        return self.start_ms / MS_PER_SECOND
