"""Tests for reading and writing text files."""

from __future__ import annotations

import io
import sys
from pathlib import Path

import pytest

from chaptermark.io.text_files import decode_text, detect_encoding, read_text, write_text
from chaptermark.utils.exceptions import StructurallyInvalidError


class TestDetectEncoding:
    """Tests for encoding detection."""

    def test_utf8_bom(self) -> None:
        """A UTF-8 BOM selects utf-8-sig."""
        assert detect_encoding(b"\xef\xbb\xbf00:00:00 Intro") == "utf-8-sig"

    def test_utf16_bom(self) -> None:
        """A UTF-16 BOM selects utf-16."""
        assert detect_encoding("00:00:00 Intro".encode("utf-16")) == "utf-16"

    def test_ascii_reads_as_utf8(self) -> None:
        """Plain ASCII decodes as UTF-8."""
        assert detect_encoding(b"00:00:00 Intro\n00:00:10 Next\n") == "utf-8"

    def test_empty(self) -> None:
        """Empty data falls back to UTF-8."""
        assert detect_encoding(b"") == "utf-8"


class TestDecodeText:
    """Tests for decoding."""

    def test_bom_stripped(self) -> None:
        """The decoded text has no BOM."""
        text = decode_text("00:00:00 Intro".encode("utf-8-sig"))
        assert text == "00:00:00 Intro"

    def test_utf16(self) -> None:
        """UTF-16 exports decode to the same text."""
        assert decode_text("00:00:00 Café".encode("utf-16")) == "00:00:00 Café"

    def test_explicit_encoding(self) -> None:
        """A given encoding is used as is."""
        assert decode_text("Café".encode("latin-1"), encoding="latin-1") == "Café"

    def test_undecodable(self) -> None:
        """Bytes that do not decode raise StructurallyInvalidError."""
        with pytest.raises(StructurallyInvalidError):
            decode_text(b"\xff\xfe\xfa", encoding="utf-8")

    def test_unknown_codec(self) -> None:
        """An unknown codec name raises StructurallyInvalidError."""
        with pytest.raises(StructurallyInvalidError):
            decode_text(b"abc", encoding="no-such-codec")


class TestReadWrite:
    """Tests for file reading and writing."""

    def test_read_file(self, tmp_path: Path) -> None:
        """Files are read and decoded."""
        path = tmp_path / "markers.txt"
        path.write_bytes("00:00:00 Intro\n".encode("utf-16"))

        assert read_text(path) == "00:00:00 Intro\n"

    def test_read_stdin(self, monkeypatch: pytest.MonkeyPatch) -> None:
        """'-' reads standard input."""
        fake_stdin = io.TextIOWrapper(io.BytesIO(b"00:00:00 Intro\n"), encoding="utf-8")
        monkeypatch.setattr(sys, "stdin", fake_stdin)

        assert read_text("-") == "00:00:00 Intro\n"

    def test_write_adds_newline(self, tmp_path: Path) -> None:
        """Written files end with a newline."""
        path = write_text(tmp_path / "chapters.txt", "00:00:00 Intro\n00:00:05 Body")
        assert path.read_bytes() == b"00:00:00 Intro\n00:00:05 Body\n"
