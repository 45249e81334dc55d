"""Timecodes, format detection and marker parsers."""

from .detector import detect_format
from .models import Chapter, FormatKind, ParseResult, ParseWarning, RawMarkerEntry
from .parsers import PARSERS, get_parser, parse_markers
from .timecodes import Timecode, parse_decimal_timecode, parse_frame_timecode, parse_timecode

__all__ = [
    'Chapter',
    'FormatKind',
    'PARSERS',
    'ParseResult',
    'ParseWarning',
    'RawMarkerEntry',
    'Timecode',
    'detect_format',
    'get_parser',
    'parse_decimal_timecode',
    'parse_frame_timecode',
    'parse_markers',
    'parse_timecode',
]
