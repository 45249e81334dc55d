"""Reading and writing marker and chapter text files.

Marker exports come from several editors on several platforms, so input
files may be UTF-8 (with or without a BOM), UTF-16 or a legacy 8-bit
encoding. The core works on str only; this module does the decoding.
"""

import codecs
import sys
from pathlib import Path

import chardet

from chaptermark.utils.constants import (
    DEFAULT_ENCODING,
    ENCODING_MIN_CONFIDENCE,
    ENCODING_SAMPLE_BYTES,
    STDIN_MARKER,
)
from chaptermark.utils.exceptions import StructurallyInvalidError
from chaptermark.utils.logger import get_logger

logger = get_logger(__name__)

_BOMS = (
    (codecs.BOM_UTF8, "utf-8-sig"),
    (codecs.BOM_UTF16_LE, "utf-16"),
    (codecs.BOM_UTF16_BE, "utf-16"),
)


def detect_encoding(raw_data: bytes) -> str:
    """Guess the encoding of raw file contents.

    A byte-order mark wins. Otherwise chardet looks at the first
    ``ENCODING_SAMPLE_BYTES`` bytes; a low-confidence guess falls back
    to UTF-8.

    Args:
        raw_data: File contents

    Returns:
        Codec name usable with bytes.decode
    """
    for bom, encoding in _BOMS:
        if raw_data.startswith(bom):
            logger.debug(f"Byte-order mark found, decoding as {encoding}")
            return encoding

    if not raw_data:
        return DEFAULT_ENCODING

    result = chardet.detect(raw_data[:ENCODING_SAMPLE_BYTES])
    encoding = result["encoding"] or DEFAULT_ENCODING
    confidence = result["confidence"] or 0.0

    if confidence < ENCODING_MIN_CONFIDENCE:
        logger.debug(
            f"Low confidence ({confidence:.2f}) in detected encoding {encoding}. "
            f"Fallback to {DEFAULT_ENCODING}."
        )
        return DEFAULT_ENCODING

    # ASCII is a subset of UTF-8; decoding as UTF-8 is never worse
    if encoding.lower() == "ascii":
        return DEFAULT_ENCODING

    logger.debug(f"Detected encoding {encoding} (confidence {confidence:.2f})")
    return encoding


def decode_text(raw_data: bytes, encoding: str | None = None) -> str:
    """Decode file contents to str.

    Args:
        raw_data: File contents
        encoding: Codec to use (None = detect)

    Returns:
        Decoded text without a byte-order mark

    Raises:
        StructurallyInvalidError: If the bytes do not decode
    """
    encoding = encoding or detect_encoding(raw_data)

    try:
        text = raw_data.decode(encoding)
    except (UnicodeDecodeError, LookupError) as e:
        raise StructurallyInvalidError(f"Could not decode input as {encoding}: {e}") from e

    return text.lstrip("\ufeff")


def read_text(path: str | Path, encoding: str | None = None) -> str:
    """Read a marker file, or standard input for ``-``.

    Args:
        path: File path or ``-``
        encoding: Codec to use (None = detect)

    Returns:
        Decoded file contents
    """
    if str(path) == STDIN_MARKER:
        logger.debug("Reading markers from standard input")
        raw_data = sys.stdin.buffer.read()
    else:
        logger.debug(f"Reading markers from {path}")
        raw_data = Path(path).read_bytes()

    return decode_text(raw_data, encoding)


def write_text(path: str | Path, text: str) -> Path:
    """Write chapter text as UTF-8 with a trailing newline.

    Returns:
        Path that was written
    """
    path = Path(path)
    with open(path, "w", encoding="utf-8", newline="\n") as f:
        f.write(text)
        if text and not text.endswith("\n"):
            f.write("\n")

    logger.info(f"Wrote chapters to {path}")
    return path
