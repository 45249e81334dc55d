#!/usr/bin/env python3
"""
Markers to Chapters - CLI

Convert marker exports from video editors into the chapter list that video
platforms read from a description.

SUPPORTED INPUTS (detected from the content):
- DaVinci Resolve marker EDL
- Premiere EDL (sequence markers, or clip events)
- Marker text: "HH:MM:SS:FF Label" or "HH:MM:SS.mmm Label" per line
- Marker CSV with a timecode column

OUTPUT:
    00:00:00 Intro
    00:01:30 Part one
    ...

USAGE:
    python markers_to_chapters.py markers.edl [options]

For full help:
    python markers_to_chapters.py --help
"""

import sys

from chaptermark import __version__
from chaptermark.config.parser import ConfigParser
from chaptermark.config.validator import ConfigValidator
from chaptermark.io.text_files import read_text, write_text
from chaptermark.processing.pipeline import load_chapters
from chaptermark.rendering.formatter import check_platform_rules, render, render_marker_text
from chaptermark.utils.exceptions import ChapterMarkException
from chaptermark.utils.logger import get_logger, setup_logging


def _print_banner() -> None:
    # stdout carries the chapter text
    print("=" * 80, file=sys.stderr)
    print(f"Markers to Chapters v{__version__}".center(80), file=sys.stderr)
    print("=" * 80, file=sys.stderr)


def main(argv: list[str] | None = None) -> int:
    """Main entry point for the CLI.

    Args:
        argv: Arguments to parse (None = use sys.argv)

    Returns:
        Exit code (0 for success, 1 for error)
    """
    debug = "--debug" in (sys.argv if argv is None else argv)

    try:
        # Parse arguments
        parser = ConfigParser()
        config, extra_args = parser.parse_args(argv)

        setup_logging(level=config.log_level, log_file=config.log_file, verbose=config.debug)
        logger = get_logger(__name__)

        # Validate configuration
        ConfigValidator.validate(config, extra_args["input_file"])

        if extra_args["save_config"]:
            config.to_json(extra_args["save_config"])
            print(f"Saved settings to {extra_args['save_config']}", file=sys.stderr)
            return 0

        if config.log_level != "WARNING":
            _print_banner()

        # Load and normalize
        text = read_text(extra_args["input_file"], encoding=extra_args["encoding"])
        normalization = load_chapters(text, config)
        chapters = normalization.chapters

        for warning in normalization.warnings:
            print(f"Warning: {warning}", file=sys.stderr)

        if normalization.origin_offset_ms:
            logger.info(
                f"First marker was at {normalization.origin_offset_ms} ms; "
                "all chapters shifted to start at 00:00:00"
            )

        # Render
        if extra_args["marker_text"]:
            output = render_marker_text(chapters, config.frame_rate)
        else:
            output = render(chapters, config.min_chapters)
            for message in check_platform_rules(chapters, config.min_chapter_seconds):
                print(f"Note: {message}", file=sys.stderr)

        # Write
        if extra_args["output_file"]:
            path = ConfigValidator.validate_output_file(extra_args["output_file"])
            write_text(path, output)
            print(f"✓ {len(chapters)} chapters written to {path.absolute()}", file=sys.stderr)
        else:
            print(output)

        return 0

    except ChapterMarkException as e:
        print(f"\nError [{e.code}]: {e}", file=sys.stderr)
        if debug:
            import traceback
            traceback.print_exc()
        return 1

    except (OSError, ValueError) as e:
        # Unreadable files and malformed --config JSON
        print(f"\nError: {e}", file=sys.stderr)
        return 1

    except KeyboardInterrupt:
        print("\n\nInterrupted by user.", file=sys.stderr)
        return 1


if __name__ == "__main__":
    sys.exit(main())
