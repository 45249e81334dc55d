"""Turn raw parsed markers into a valid chapter list.

The normalizer runs the same steps for every input format:

1. resolve each timecode to milliseconds, dropping unparsable ones
2. stable sort by time
3. shift everything so the first chapter starts at 0
4. collapse entries sharing a start time
5. build the ChapterList, filling empty labels with placeholders
"""

from dataclasses import dataclass, field

from chaptermark.config.models import ChapterConfig
from chaptermark.data.models import (
    FormatKind,
    ParseResult,
    ParseWarning,
    RawMarkerEntry,
    clean_label,
)
from chaptermark.data.timecodes import (
    Timecode,
    parse_frame_timecode,
    parse_timecode,
    to_decimal_string,
)
from chaptermark.processing.chapter_list import ChapterList
from chaptermark.processing.ordering import correct_origin, deduplicate, sort_by_time
from chaptermark.utils.exceptions import InvalidTimecodeError, NoValidChaptersError
from chaptermark.utils.logger import get_logger

logger = get_logger(__name__)


@dataclass
class NormalizationResult:
    """Outcome of normalizing one parse result.

    Attributes:
        chapters: The valid chapter list
        warnings: Parser warnings followed by normalizer warnings
        format_kind: Format the entries came from
        origin_offset_ms: Time subtracted so the list starts at 0
        duplicates_removed: Entries collapsed into an earlier one
    """

    chapters: ChapterList
    format_kind: FormatKind
    warnings: list[ParseWarning] = field(default_factory=list)
    origin_offset_ms: int = 0
    duplicates_removed: int = 0


@dataclass(frozen=True)
class _ResolvedEntry:
    start_ms: int
    label: str
    source_line_number: int


class ChapterNormalizer:
    """Normalize parser output into chapters.

    Example:
        >>> normalizer = ChapterNormalizer(ChapterConfig(frame_rate=24))
        >>> result = normalizer.normalize(parse_result)
        >>> result.chapters.times
        [0, 5000, 13000]
    """

    def __init__(self, config: ChapterConfig | None = None) -> None:
        """
        Initialize normalizer.

        Args:
            config: Frame rate, duplicate policy and label settings
        """
        self.config = config or ChapterConfig()

    def resolve_timecode(self, timecode_text: str, format_kind: FormatKind) -> Timecode:
        """Parse one timecode the way its source format writes them.

        EDL timecodes are always frame-based. Marker text and CSV may use
        either form.

        Raises:
            InvalidTimecodeError: If the text cannot be parsed
        """
        if format_kind.is_edl:
            return parse_frame_timecode(timecode_text, self.config.frame_rate)
        return parse_timecode(timecode_text, self.config.frame_rate)

    def resolve(
        self, entries: list[RawMarkerEntry], format_kind: FormatKind
    ) -> tuple[list[_ResolvedEntry], list[ParseWarning]]:
        """Resolve every entry's timecode, collecting failures as warnings."""
        resolved = []
        warnings = []

        for entry in entries:
            try:
                timecode = self.resolve_timecode(entry.timecode_text, format_kind)
            except InvalidTimecodeError as e:
                warnings.append(ParseWarning(str(e), entry.source_line_number, entry.timecode_text))
                continue

            resolved.append(_ResolvedEntry(timecode.ms, clean_label(entry.label), entry.source_line_number))

            if self.config.debug:
                logger.debug(
                    f"Line {entry.source_line_number}: {entry.timecode_text} -> "
                    f"{to_decimal_string(timecode)} '{entry.label}'"
                )

        return resolved, warnings

    def normalize(self, parse_result: ParseResult) -> NormalizationResult:
        """
        Normalize a parse result.

        Args:
            parse_result: Output of one of the parsers

        Returns:
            NormalizationResult with a valid ChapterList

        Raises:
            NoValidChaptersError: If no entry has a usable timecode
        """
        resolved, warnings = self.resolve(parse_result.entries, parse_result.format_kind)

        for warning in warnings:
            logger.warning(str(warning))

        if not resolved:
            raise NoValidChaptersError("No markers with valid timecodes found", dropped=len(warnings))

        offset, shifted = correct_origin(sort_by_time(resolved))
        if offset:
            logger.info(f"Shifted chapters by {offset} ms so the first starts at 00:00:00")

        kept, removed = deduplicate(
            shifted, self.config.duplicate_policy, self.config.combine_separator
        )
        if removed:
            logger.info(
                f"Collapsed {removed} markers sharing a start time "
                f"(policy: {self.config.duplicate_policy})"
            )

        chapters = ChapterList.from_pairs(((entry.start_ms, entry.label) for entry in kept), self.config)
        logger.info(f"Normalized {len(chapters)} chapters from {parse_result.format_kind.display_name}")

        return NormalizationResult(
            chapters=chapters,
            format_kind=parse_result.format_kind,
            warnings=list(parse_result.warnings) + warnings,
            origin_offset_ms=offset,
            duplicates_removed=removed,
        )


def normalize_entries(parse_result: ParseResult, config: ChapterConfig | None = None) -> NormalizationResult:
    """Normalize with a one-off ChapterNormalizer."""
    return ChapterNormalizer(config).normalize(parse_result)
