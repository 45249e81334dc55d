"""File I/O for marker and chapter text."""

from .text_files import decode_text, detect_encoding, read_text, write_text

__all__ = ['read_text', 'write_text', 'decode_text', 'detect_encoding']
