"""Command-line argument parser for the marker-to-chapter converter.

This module turns command-line arguments into a ChapterConfig plus the
run options (input, output, mode) that are not part of the configuration.
"""

import argparse
from typing import Any

from chaptermark.config.models import ChapterConfig
from chaptermark.data.models import FormatKind
from chaptermark.utils.constants import DUPLICATE_POLICIES
from chaptermark.utils.logger import get_logger

logger = get_logger(__name__)


class ConfigParser:
    """Parser for command-line arguments.

    Options left off the command line keep the value from ``--config``
    (or the ChapterConfig default), so a settings file and overrides can
    be combined.

    Example:
        >>> parser = ConfigParser()
        >>> config, extra = parser.parse_args(["markers.edl", "--frame-rate", "25"])
    """

    def __init__(self) -> None:
        """Initialize the argument parser."""
        self.parser = self._create_parser()

    def _create_parser(self) -> argparse.ArgumentParser:
        """Create the argument parser with all options.

        Returns:
            Configured ArgumentParser
        """
        parser = argparse.ArgumentParser(
            description="Convert editor marker exports into a video chapter list.",
            formatter_class=argparse.RawDescriptionHelpFormatter,
            epilog=self._get_epilog(),
        )

        parser.add_argument(
            "input_file",
            nargs="?",
            default="-",
            help="Marker file (EDL, marker text or CSV); '-' or omitted reads standard input",
        )
        parser.add_argument(
            "-o",
            "--output",
            type=str,
            default=None,
            help="Write chapters to this file instead of standard output",
        )
        parser.add_argument(
            "--config",
            type=str,
            help="Load settings from JSON configuration file",
        )

        # Input
        input_group = parser.add_argument_group("Input")
        input_group.add_argument(
            "--frame-rate",
            type=float,
            default=None,
            help="Frames per second for HH:MM:SS:FF timecodes (default: 30)",
        )
        input_group.add_argument(
            "--format",
            dest="format_kind",
            choices=[kind.value for kind in FormatKind],
            default=None,
            help="Skip detection and read the input as this format",
        )
        input_group.add_argument(
            "--encoding",
            type=str,
            default=None,
            help="Input text encoding (default: detect)",
        )

        # Chapters
        chapter_group = parser.add_argument_group("Chapters")
        chapter_group.add_argument(
            "--duplicates",
            dest="duplicate_policy",
            choices=list(DUPLICATE_POLICIES),
            default=None,
            help="Markers at the same time: keep the first label or combine them (default: first)",
        )
        chapter_group.add_argument(
            "--separator",
            dest="combine_separator",
            type=str,
            default=None,
            help="Separator for combined labels (default: ' | ')",
        )
        chapter_group.add_argument(
            "--placeholder",
            dest="placeholder_label",
            type=str,
            default=None,
            help="Label for markers without a name; {n} is the chapter number (default: 'Chapter {n}')",
        )
        chapter_group.add_argument(
            "--min-chapters",
            type=int,
            default=None,
            help="Fewest chapters to output (default: 2)",
        )
        chapter_group.add_argument(
            "--min-chapter-seconds",
            type=int,
            default=None,
            help="Warn about chapters shorter than this (default: 10)",
        )

        # Output
        output_group = parser.add_argument_group("Output")
        output_group.add_argument(
            "--marker-text",
            action="store_true",
            help="Output frame-based marker text instead of a chapter list",
        )
        output_group.add_argument(
            "--save-config",
            type=str,
            metavar="OUTPUT_FILE",
            default=None,
            help="Save the effective settings as JSON and exit",
        )

        # Modes and logging
        mode_group = parser.add_argument_group("Modes and Logging")
        mode_group.add_argument(
            "--debug",
            action="store_true",
            help="Show every resolved marker",
        )
        mode_group.add_argument(
            "--verbose",
            action="store_true",
            help="Enable verbose logging output",
        )
        mode_group.add_argument(
            "--quiet",
            action="store_true",
            help="Only show warnings and errors",
        )
        mode_group.add_argument(
            "--log-file",
            type=str,
            default=None,
            help="Write log output to file",
        )

        return parser

    def _get_epilog(self) -> str:
        """Get epilog text for help message.

        Returns:
            Epilog text
        """
        return """
Supported inputs (detected from the content, not the extension):
  - DaVinci Resolve marker EDL (|M: marker lines)
  - Premiere EDL (* LOC: locators, or FROM CLIP NAME events)
  - Marker text: one "HH:MM:SS:FF Label" or "HH:MM:SS.mmm Label" per line
  - Marker CSV with a timecode column (In, Timecode, Start, ...) and
    optional Marker Name / Description columns

Examples:
  Basic usage:
    python markers_to_chapters.py timeline.edl

  25 fps EDL, written to a file:
    python markers_to_chapters.py timeline.edl --frame-rate 25 -o chapters.txt

  Combine labels of markers at the same time:
    python markers_to_chapters.py markers.csv --duplicates combine

  From the clipboard (macOS):
    pbpaste | python markers_to_chapters.py -

  Using configuration file:
    python markers_to_chapters.py timeline.edl --config settings.json
"""

    def parse_args(self, args: list[str] | None = None) -> tuple[ChapterConfig, dict[str, Any]]:
        """Parse command-line arguments.

        Args:
            args: Arguments to parse (None = use sys.argv)

        Returns:
            Tuple of (config, extra_args) where extra_args contains
            input_file, output_file, encoding, marker_text and save_config
        """
        parsed = self.parser.parse_args(args)

        # Load base config from file if specified
        if parsed.config:
            logger.info(f"Loading configuration from {parsed.config}")
            config = ChapterConfig.from_json(parsed.config)
        else:
            config = ChapterConfig()

        # Override with command-line arguments
        self._apply_args_to_config(config, parsed)

        # Extra arguments not in ChapterConfig
        extra_args = {
            "input_file": parsed.input_file,
            "output_file": parsed.output,
            "encoding": parsed.encoding,
            "marker_text": parsed.marker_text,
            "save_config": parsed.save_config,
        }

        return config, extra_args

    def _apply_args_to_config(self, config: ChapterConfig, args: argparse.Namespace) -> None:
        """Apply parsed arguments to configuration object.

        Args:
            config: Configuration to modify
            args: Parsed arguments
        """
        for key in (
            "frame_rate",
            "format_kind",
            "duplicate_policy",
            "combine_separator",
            "placeholder_label",
            "min_chapters",
            "min_chapter_seconds",
            "log_file",
        ):
            value = getattr(args, key)
            if value is not None:
                setattr(config, key, value)

        # Logging
        if args.quiet:
            config.log_level = "WARNING"
        elif args.verbose or args.debug:
            config.log_level = "DEBUG"

        if args.debug:
            config.debug = True
