"""Convert editor marker exports into video chapter lists."""

from .config.models import ChapterConfig
from .data.models import Chapter, FormatKind, ParseResult, ParseWarning, RawMarkerEntry
from .data.parsers import parse_markers
from .processing.chapter_list import ChapterList
from .processing.normalizer import ChapterNormalizer, NormalizationResult
from .processing.pipeline import ConversionResult, convert, load_chapters
from .rendering.formatter import check_platform_rules, render, render_marker_text
from .utils.exceptions import ChapterMarkException

__version__ = "1.0.0"

__all__ = [
    'ChapterConfig',
    'Chapter',
    'ChapterList',
    'ChapterMarkException',
    'ChapterNormalizer',
    'ConversionResult',
    'FormatKind',
    'NormalizationResult',
    'ParseResult',
    'ParseWarning',
    'RawMarkerEntry',
    'check_platform_rules',
    'convert',
    'load_chapters',
    'parse_markers',
    'render',
    'render_marker_text',
]
