"""Configuration data model for chapter conversion.

This module defines the settings dataclass handed to the normalizer, the
chapter list and the formatter. It supports:
- JSON serialization/deserialization
- Validation
- Default values

Configuration is always passed in explicitly; no module keeps a global
debug or frame-rate setting.
"""

import json
from dataclasses import asdict, dataclass, fields
from pathlib import Path
from typing import Any

from chaptermark.data.models import FormatKind
from chaptermark.utils.constants import (
    COMBINE_SEPARATOR,
    DEFAULT_FRAME_RATE,
    DUPLICATE_FIRST,
    DUPLICATE_POLICIES,
    MIN_CHAPTER_SECONDS,
    MIN_CHAPTERS,
    PLACEHOLDER_LABEL,
)
from chaptermark.utils.logger import get_logger

logger = get_logger(__name__)


def _coerce(value: Any, kind: type, name: str) -> Any:
    if isinstance(value, bool):
        raise ValueError(f"{name} must be a number, got {value!r}")
    try:
        return kind(value)
    except (TypeError, ValueError) as e:
        raise ValueError(f"{name} must be a number, got {value!r}") from e


@dataclass
class ChapterConfig:
    """Settings for one conversion run or editing session.

    Attributes:
        frame_rate: Frames per second for ``HH:MM:SS:FF`` timecodes
        format_kind: Force an input format by name (None = detect)
        duplicate_policy: "first" keeps the first label at a repeated time,
            "combine" joins the distinct labels
        combine_separator: Separator for combined and merged labels
        placeholder_label: Template for missing labels; ``{n}`` is the
            1-based chapter position
        min_chapters: Fewest chapters the formatter will render
        min_chapter_seconds: Shortest chapter before an advisory warning
        debug: Log every resolved entry
        log_level: Logging level (DEBUG, INFO, WARNING, ERROR)
        log_file: Optional log file path

    Example:
        >>> config = ChapterConfig(frame_rate=24, duplicate_policy="combine")
    """

    frame_rate: float = DEFAULT_FRAME_RATE
    format_kind: str | None = None
    duplicate_policy: str = DUPLICATE_FIRST
    combine_separator: str = COMBINE_SEPARATOR
    placeholder_label: str = PLACEHOLDER_LABEL
    min_chapters: int = MIN_CHAPTERS
    min_chapter_seconds: int = MIN_CHAPTER_SECONDS
    debug: bool = False
    log_level: str = "INFO"
    log_file: str | None = None

    def __post_init__(self) -> None:
        """Validate configuration."""
        # JSON settings may carry numbers as strings
        self.frame_rate = _coerce(self.frame_rate, float, "frame_rate")
        self.min_chapters = _coerce(self.min_chapters, int, "min_chapters")
        self.min_chapter_seconds = _coerce(self.min_chapter_seconds, int, "min_chapter_seconds")

        if self.frame_rate <= 0:
            raise ValueError(f"Frame rate must be positive, got {self.frame_rate}")
        if self.duplicate_policy not in DUPLICATE_POLICIES:
            raise ValueError(
                f"Invalid duplicate_policy '{self.duplicate_policy}', "
                f"must be one of {DUPLICATE_POLICIES}"
            )
        if self.format_kind is not None:
            # Raises ValueError for unknown names
            FormatKind.from_name(self.format_kind)

    @property
    def input_format(self) -> FormatKind | None:
        """The forced input format, or None to detect."""
        if self.format_kind is None:
            return None
        return FormatKind.from_name(self.format_kind)

    def placeholder_for(self, position: int) -> str:
        """Build the placeholder label for a 1-based chapter position.

        Example:
            >>> ChapterConfig().placeholder_for(3)
            'Chapter 3'
        """
        return self.placeholder_label.format(n=position)

    def to_dict(self) -> dict[str, Any]:
        """Convert configuration to dictionary."""
        return asdict(self)

    def to_json(self, filepath: str | Path) -> None:
        """Save configuration to JSON file.

        Args:
            filepath: Path to JSON file
        """
        path = Path(filepath)
        path.parent.mkdir(parents=True, exist_ok=True)

        with open(path, "w", encoding="utf-8") as f:
            json.dump(self.to_dict(), f, indent=2)

        logger.info(f"Saved configuration to {path}")

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "ChapterConfig":
        """Create configuration from dictionary.

        Unknown keys are ignored with a warning, so a settings file from a
        newer version still loads.

        Args:
            data: Dictionary with configuration data

        Returns:
            ChapterConfig instance

        Example:
            >>> config = ChapterConfig.from_dict({"frame_rate": 25})
        """
        known = {f.name for f in fields(cls)}
        unknown = sorted(set(data) - known)
        if unknown:
            logger.warning(f"Ignoring unknown configuration keys: {', '.join(unknown)}")

        return cls(**{key: value for key, value in data.items() if key in known})

    @classmethod
    def from_json(cls, filepath: str | Path) -> "ChapterConfig":
        """Load configuration from JSON file.

        Args:
            filepath: Path to JSON file

        Returns:
            ChapterConfig instance
        """
        path = Path(filepath)

        with open(path, "r", encoding="utf-8") as f:
            data = json.load(f)

        if not isinstance(data, dict):
            raise ValueError(f"Configuration file must contain a JSON object: {path}")

        logger.info(f"Loaded configuration from {path}")
        return cls.from_dict(data)
