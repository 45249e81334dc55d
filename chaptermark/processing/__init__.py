"""Normalization and editing of chapter lists."""

from .chapter_list import ChapterList
from .normalizer import ChapterNormalizer, NormalizationResult
from .pipeline import ConversionResult, convert, load_chapters

__all__ = [
    'ChapterList',
    'ChapterNormalizer',
    'ConversionResult',
    'NormalizationResult',
    'convert',
    'load_chapters',
]
