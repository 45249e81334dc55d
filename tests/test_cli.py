"""Tests for the markers_to_chapters command-line entry point."""

from __future__ import annotations

from pathlib import Path

import pytest

from markers_to_chapters import main


class TestMain:
    """Tests for main()."""

    def test_stdout(self, tmp_path: Path, marker_text: str, capsys: pytest.CaptureFixture) -> None:
        """Chapters go to stdout; everything else to stderr."""
        path = tmp_path / "markers.txt"
        path.write_text(marker_text, encoding="utf-8")

        assert main([str(path), "--min-chapter-seconds", "0"]) == 0

        captured = capsys.readouterr()
        assert captured.out == "00:00:00 Intro\n00:00:05 Body\n00:00:12 Outro\n"
        assert "Markers to Chapters" in captured.err

    def test_output_file(self, tmp_path: Path, davinci_edl: str) -> None:
        """-o writes the chapters to a file."""
        source = tmp_path / "timeline.edl"
        source.write_text(davinci_edl, encoding="utf-8")
        target = tmp_path / "out" / "chapters.txt"

        assert main([str(source), "-o", str(target), "--quiet"]) == 0
        assert target.read_text(encoding="utf-8") == (
            "00:00:00 Intro\n00:00:05 Main topic\n00:00:13 Wrap up\n"
        )

    def test_marker_text_output(self, tmp_path: Path, marker_csv: str, capsys: pytest.CaptureFixture) -> None:
        """--marker-text writes frame timecodes."""
        path = tmp_path / "markers.csv"
        path.write_text(marker_csv, encoding="utf-8")

        assert main([str(path), "--marker-text", "--frame-rate", "25", "--quiet"]) == 0
        assert capsys.readouterr().out.splitlines()[1] == "00:00:20:00 Guest arrives"

    def test_short_chapter_note(self, tmp_path: Path, marker_text: str, capsys: pytest.CaptureFixture) -> None:
        """Short chapters produce advisory notes on stderr."""
        path = tmp_path / "markers.txt"
        path.write_text(marker_text, encoding="utf-8")

        assert main([str(path)]) == 0
        assert "Note: Chapter 'Intro'" in capsys.readouterr().err

    def test_warnings_reported(self, tmp_path: Path, capsys: pytest.CaptureFixture) -> None:
        """Skipped lines are reported but do not fail the run."""
        path = tmp_path / "markers.txt"
        path.write_text("00:00:00 A\nsoon B\n00:00:30 C\n", encoding="utf-8")

        assert main([str(path), "--quiet"]) == 0
        assert "Warning: Line 2" in capsys.readouterr().err

    def test_missing_file(self, tmp_path: Path, capsys: pytest.CaptureFixture) -> None:
        """A missing input file exits with 1."""
        assert main([str(tmp_path / "missing.edl")]) == 1
        assert "ConfigurationError" in capsys.readouterr().err

    def test_too_few_chapters(self, tmp_path: Path, capsys: pytest.CaptureFixture) -> None:
        """A single chapter exits with 1 and names the failure."""
        path = tmp_path / "markers.txt"
        path.write_text("00:00:00 Only\n", encoding="utf-8")

        assert main([str(path)]) == 1
        assert "TooFewChapters" in capsys.readouterr().err

    def test_unrecognized(self, tmp_path: Path, capsys: pytest.CaptureFixture) -> None:
        """Unrecognized input exits with 1."""
        path = tmp_path / "notes.txt"
        path.write_text("nothing useful here\n", encoding="utf-8")

        assert main([str(path)]) == 1
        assert "UnrecognizedFormat" in capsys.readouterr().err

    def test_save_config(self, tmp_path: Path) -> None:
        """--save-config writes the effective settings and exits."""
        target = tmp_path / "settings.json"

        assert main(["--frame-rate", "24", "--save-config", str(target)]) == 0
        assert '"frame_rate": 24.0' in target.read_text(encoding="utf-8")

    def test_bad_config_file(self, tmp_path: Path, capsys: pytest.CaptureFixture) -> None:
        """A malformed --config file exits with 1."""
        path = tmp_path / "settings.json"
        path.write_text("{not json", encoding="utf-8")

        assert main(["--config", str(path)]) == 1
        assert "Error" in capsys.readouterr().err

    def test_non_numeric_config_value(self, tmp_path: Path, capsys: pytest.CaptureFixture) -> None:
        """A --config file with a text frame rate exits with 1 and names the setting."""
        path = tmp_path / "settings.json"
        path.write_text('{"frame_rate": "abc"}', encoding="utf-8")

        assert main(["--config", str(path)]) == 1
        assert "frame_rate must be a number" in capsys.readouterr().err
