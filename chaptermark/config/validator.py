"""Configuration validation utilities.

Command-line overrides are applied to a ChapterConfig after construction,
so its own ``__post_init__`` checks no longer cover the final values. The
validator re-checks the assembled configuration before a run.
"""

from pathlib import Path

from chaptermark.config.models import ChapterConfig
from chaptermark.data.models import FormatKind
from chaptermark.utils.constants import (
    DUPLICATE_POLICIES,
    MAX_FRAME_RATE,
    MIN_FRAME_RATE,
    STDIN_MARKER,
)
from chaptermark.utils.exceptions import ConfigurationError
from chaptermark.utils.logger import get_logger

logger = get_logger(__name__)


class ConfigValidator:
    """Validator for configuration objects.

    Example:
        >>> config = ChapterConfig()
        >>> ConfigValidator.validate(config)
        >>> # Raises ConfigurationError if invalid
    """

    @classmethod
    def validate(cls, config: ChapterConfig, input_file: str | None = None) -> None:
        """Validate entire configuration.

        Args:
            config: Configuration to validate
            input_file: Optional input file path to check

        Raises:
            ConfigurationError: If configuration is invalid
        """
        cls.validate_frame_rate(config)
        cls.validate_format(config)
        cls.validate_duplicates(config)
        cls.validate_labels(config)
        cls.validate_limits(config)

        if input_file:
            cls.validate_input_file(input_file)

    @classmethod
    def validate_frame_rate(cls, config: ChapterConfig) -> None:
        """Validate the frame rate range.

        Raises:
            ConfigurationError: If the frame rate is outside the supported range
        """
        if not MIN_FRAME_RATE <= config.frame_rate <= MAX_FRAME_RATE:
            raise ConfigurationError(
                f"Frame rate must be between {MIN_FRAME_RATE:g} and {MAX_FRAME_RATE:g} fps",
                config_key="frame_rate",
                invalid_value=config.frame_rate,
            )

        if config.frame_rate != round(config.frame_rate):
            logger.debug(
                f"Fractional frame rate {config.frame_rate:g}: frame labels count at "
                f"{round(config.frame_rate)} per second"
            )

    @classmethod
    def validate_format(cls, config: ChapterConfig) -> None:
        if config.format_kind is None:
            return
        try:
            FormatKind.from_name(config.format_kind)
        except ValueError as e:
            raise ConfigurationError(
                str(e), config_key="format_kind", invalid_value=config.format_kind
            ) from e

    @classmethod
    def validate_duplicates(cls, config: ChapterConfig) -> None:
        if config.duplicate_policy not in DUPLICATE_POLICIES:
            raise ConfigurationError(
                f"Duplicate policy must be one of {', '.join(DUPLICATE_POLICIES)}",
                config_key="duplicate_policy",
                invalid_value=config.duplicate_policy,
            )

    @classmethod
    def validate_labels(cls, config: ChapterConfig) -> None:
        """Validate the placeholder template and separator.

        Raises:
            ConfigurationError: If the template cannot be formatted or yields
                an empty label
        """
        try:
            sample = config.placeholder_for(1)
        except (KeyError, IndexError, ValueError) as e:
            raise ConfigurationError(
                "Placeholder label must only use the {n} field",
                config_key="placeholder_label",
                invalid_value=config.placeholder_label,
            ) from e

        if not sample.strip():
            raise ConfigurationError(
                "Placeholder label cannot be empty",
                config_key="placeholder_label",
                invalid_value=config.placeholder_label,
            )

        if "\n" in config.combine_separator or "\r" in config.combine_separator:
            raise ConfigurationError(
                "Combine separator cannot contain line breaks",
                config_key="combine_separator",
                invalid_value=config.combine_separator,
            )

    @classmethod
    def validate_limits(cls, config: ChapterConfig) -> None:
        if config.min_chapters < 1:
            raise ConfigurationError(
                "Minimum chapter count must be at least 1",
                config_key="min_chapters",
                invalid_value=config.min_chapters,
            )

        if config.min_chapter_seconds < 0:
            raise ConfigurationError(
                "Minimum chapter length cannot be negative",
                config_key="min_chapter_seconds",
                invalid_value=config.min_chapter_seconds,
            )

    @staticmethod
    def validate_input_file(input_file: str | Path) -> None:
        """Validate that the input file exists.

        ``-`` stands for standard input and is always accepted.

        Raises:
            ConfigurationError: If the file is missing or not a file
        """
        if str(input_file) == STDIN_MARKER:
            return

        path = Path(input_file)

        if not path.exists():
            raise ConfigurationError(
                "Input file not found",
                config_key="input_file",
                invalid_value=str(path),
            )

        if not path.is_file():
            raise ConfigurationError(
                "Input path is not a file",
                config_key="input_file",
                invalid_value=str(path),
            )

        logger.debug(f"Input file validated: {path}")

    @staticmethod
    def validate_output_file(output_file: str | Path, create_dirs: bool = True) -> Path:
        """Validate an output file path, creating its directory if asked.

        Args:
            output_file: Path to validate
            create_dirs: Create missing parent directories

        Returns:
            Path object for the output file

        Raises:
            ConfigurationError: If the parent is missing or not a directory
        """
        path = Path(output_file)
        parent = path.parent

        if not parent.exists():
            if not create_dirs:
                raise ConfigurationError(
                    "Output directory does not exist",
                    config_key="output_file",
                    invalid_value=str(parent),
                )
            parent.mkdir(parents=True, exist_ok=True)
            logger.info(f"Created output directory: {parent}")

        if not parent.is_dir():
            raise ConfigurationError(
                "Output parent path is not a directory",
                config_key="output_file",
                invalid_value=str(parent),
            )

        if path.is_dir():
            raise ConfigurationError(
                "Output path is a directory",
                config_key="output_file",
                invalid_value=str(path),
            )

        return path
