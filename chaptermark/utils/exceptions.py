"""Custom exception classes for the chaptermark package.

This module defines a hierarchy of exceptions for the conversion pipeline.
Each family maps to one stage: parsing, normalization, chapter list
operations and rendering. Every exception carries a stable ``code`` so a
front end can branch on the failure kind without string matching.

Per-record problems (one bad EDL line, one bad CSV row) are not raised;
parsers collect them as warnings. Only failures that make a whole stage
unusable reach the caller as exceptions.
"""


class ChapterMarkException(Exception):
    """Base exception for all chaptermark-related errors.

    All custom exceptions in the chaptermark package inherit from this base
    class, making it easy to catch all package-specific errors.
    """

    code = "ChapterMarkError"


# ============================================================================
# Parsing
# ============================================================================


class ParseError(ChapterMarkException):
    """Raised when input text cannot be parsed.

    Attributes:
        line_number: Optional 1-based source line where the error occurred
    """

    code = "ParseError"

    def __init__(self, message: str, line_number: int | None = None) -> None:
        """Initialize with error details.

        Args:
            message: Description of the error
            line_number: Source line where the error occurred (1-based)
        """
        self.line_number = line_number

        error_parts = [message]
        if line_number is not None:
            error_parts.append(f"at line {line_number}")

        super().__init__(" ".join(error_parts))


class UnrecognizedFormatError(ParseError):
    """Raised when no format signature matches the input text."""

    code = "UnrecognizedFormat"


class StructurallyInvalidError(ParseError):
    """Raised when input is empty or lacks a required structure.

    This exception is raised when:
    - The input text is empty or whitespace only
    - A CSV has no header row or no timecode column
    """

    code = "EmptyOrStructurallyInvalid"


class InvalidTimecodeError(ParseError):
    """Raised when a single timecode string cannot be parsed.

    Parsers and the normalizer catch this per record and turn it into a
    warning, so it only escapes when a timecode is parsed directly.

    Attributes:
        timecode_text: The text that failed to parse
        frame_rate: Frame rate in effect, if any
    """

    code = "InvalidTimecode"

    def __init__(
        self,
        message: str,
        timecode_text: str | None = None,
        frame_rate: float | None = None,
        line_number: int | None = None,
    ) -> None:
        """Initialize with timecode details.

        Args:
            message: Description of the error
            timecode_text: Timecode string that was provided
            frame_rate: Frame rate used for validation
            line_number: Source line where the timecode appeared
        """
        self.timecode_text = timecode_text
        self.frame_rate = frame_rate

        error_parts = [message]
        if timecode_text is not None:
            error_parts.append(f"for timecode '{timecode_text}'")
        if frame_rate is not None:
            error_parts.append(f"(at {frame_rate:g} fps)")

        super().__init__(" ".join(error_parts), line_number=line_number)


# ============================================================================
# Normalization
# ============================================================================


class NormalizationError(ChapterMarkException):
    """Raised when raw entries cannot be turned into a chapter list."""

    code = "NormalizationError"


class NoValidChaptersError(NormalizationError):
    """Raised when no entry survives timecode resolution.

    Attributes:
        dropped: Number of entries dropped during resolution
    """

    code = "NoValidChapters"

    def __init__(self, message: str, dropped: int = 0) -> None:
        self.dropped = dropped

        error_parts = [message]
        if dropped:
            error_parts.append(f"({dropped} entries had invalid timecodes)")

        super().__init__(" ".join(error_parts))


# ============================================================================
# Chapter list operations
# ============================================================================


class OperationError(ChapterMarkException):
    """Raised when a chapter list operation is rejected.

    The chapter list is left unchanged whenever this is raised.
    """

    code = "OperationError"


class ChapterNotFoundError(OperationError):
    """Raised when a chapter id does not exist in the list.

    Attributes:
        chapter_id: The id that was looked up
    """

    code = "NotFound"

    def __init__(self, chapter_id: str) -> None:
        self.chapter_id = chapter_id
        super().__init__(f"No chapter with id '{chapter_id}'")


class DuplicateTimeError(OperationError):
    """Raised when an operation would place two chapters at the same time.

    Attributes:
        start_ms: The colliding start time in milliseconds
        existing_id: Id of the chapter already at that time
    """

    code = "DuplicateTime"

    def __init__(self, start_ms: int, existing_id: str | None = None) -> None:
        self.start_ms = start_ms
        self.existing_id = existing_id

        error_parts = [f"A chapter already starts at {start_ms} ms"]
        if existing_id:
            error_parts.append(f"(chapter '{existing_id}')")

        super().__init__(" ".join(error_parts))


# ============================================================================
# Rendering
# ============================================================================


class FormatError(ChapterMarkException):
    """Raised when a chapter list cannot be rendered."""

    code = "FormatError"


class TooFewChaptersError(FormatError):
    """Raised when the list is shorter than the platform minimum.

    Attributes:
        count: Number of chapters in the list
        minimum: Required minimum
    """

    code = "TooFewChapters"

    def __init__(self, count: int, minimum: int) -> None:
        self.count = count
        self.minimum = minimum
        super().__init__(
            f"At least {minimum} chapters are required to publish chapters, got {count}"
        )


# ============================================================================
# Configuration
# ============================================================================


class ConfigurationError(ChapterMarkException):
    """Raised when configuration is invalid.

    This exception is raised when:
    - Config file is malformed
    - Values are out of valid range
    - An unknown format or policy name is given

    Attributes:
        config_key: Configuration key that has an issue
        invalid_value: The invalid value (if applicable)
    """

    code = "ConfigurationError"

    def __init__(
        self,
        message: str,
        config_key: str | None = None,
        invalid_value: object = None,
    ) -> None:
        """Initialize with configuration error details.

        Args:
            message: Description of the error
            config_key: Configuration key with issue
            invalid_value: The value that was invalid
        """
        self.config_key = config_key
        self.invalid_value = invalid_value

        error_parts = [message]
        if config_key:
            error_parts.append(f"for setting '{config_key}'")
        if invalid_value is not None:
            error_parts.append(f"(value: {invalid_value!r})")

        super().__init__(" ".join(error_parts))
