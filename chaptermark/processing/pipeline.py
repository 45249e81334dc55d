"""End-to-end conversion from marker text to chapter text."""

from dataclasses import dataclass

from chaptermark.config.models import ChapterConfig
from chaptermark.data.models import ParseWarning
from chaptermark.data.parsers import parse_markers
from chaptermark.processing.normalizer import ChapterNormalizer, NormalizationResult
from chaptermark.rendering.formatter import render
from chaptermark.utils.logger import get_logger

logger = get_logger(__name__)


@dataclass
class ConversionResult:
    """Rendered chapter text plus the normalization it came from.

    Attributes:
        text: ``HH:MM:SS Label`` lines
        normalization: Chapters, warnings and offsets
    """

    text: str
    normalization: NormalizationResult

    @property
    def warnings(self) -> list[ParseWarning]:
        return self.normalization.warnings


def load_chapters(text: str, config: ChapterConfig | None = None) -> NormalizationResult:
    """Detect, parse and normalize marker text.

    Args:
        text: Whole marker file contents
        config: Conversion settings (defaults if None)

    Returns:
        NormalizationResult whose ChapterList is ready for editing

    Raises:
        StructurallyInvalidError: If the input is empty or unusable
        UnrecognizedFormatError: If no format matches
        NoValidChaptersError: If no marker has a valid timecode
    """
    config = config or ChapterConfig()

    parse_result = parse_markers(text, config.frame_rate, config.input_format)
    logger.info(
        f"Parsed {len(parse_result.entries)} markers as {parse_result.format_kind.display_name}"
    )

    return ChapterNormalizer(config).normalize(parse_result)


def convert(text: str, config: ChapterConfig | None = None) -> ConversionResult:
    """Convert marker text straight to chapter text.

    Raises:
        TooFewChaptersError: If fewer than ``config.min_chapters`` remain,
            plus everything load_chapters raises
    """
    config = config or ChapterConfig()
    normalization = load_chapters(text, config)
    return ConversionResult(render(normalization.chapters, config.min_chapters), normalization)
