"""Marker CSV parser.

Premiere exports its marker panel as a delimited table::

    Marker Name,Description,In,Out,Duration,Marker Type
    Intro,,00:00:00:00,00:00:00:00,00:00:00:00,Comment

Columns are located by header name, not position, so exports from other
tools with a ``Timecode`` / ``Name`` layout (or columns in another order)
read the same way. The table is loaded with pandas.
"""

import csv
from io import StringIO

import pandas as pd

from chaptermark.data.models import FormatKind, ParseResult, RawMarkerEntry, clean_label
from chaptermark.data.timecodes import is_timecode_token, parse_timecode
from chaptermark.utils.constants import (
    CSV_DELIMITERS,
    CSV_DESCRIPTION_COLUMNS,
    CSV_NAME_COLUMNS,
    CSV_TIMECODE_COLUMNS,
)
from chaptermark.utils.exceptions import InvalidTimecodeError, StructurallyInvalidError
from chaptermark.utils.logger import get_logger

logger = get_logger(__name__)

KNOWN_COLUMNS = frozenset(CSV_TIMECODE_COLUMNS + CSV_NAME_COLUMNS + CSV_DESCRIPTION_COLUMNS)


def _normalize_header(name: object) -> str:
    return str(name).strip().strip('"').strip().lstrip("\ufeff").lower()


def _first_line(text: str) -> tuple[int, str] | None:
    for line_number, line in enumerate(text.splitlines(), start=1):
        if line.strip():
            return line_number, line
    return None


def _starts_with_timecode(field: str) -> bool:
    tokens = field.split(maxsplit=1)
    return bool(tokens) and is_timecode_token(tokens[0])


def find_header_delimiter(line: str) -> str | None:
    """Find the delimiter that splits a line into a marker header row.

    A header row has at least two fields, none of them starting with a
    timecode, and at least one known marker column name. The timecode check
    keeps marker text such as ``00:00:00 Intro, Title`` out of the CSV path.

    Args:
        line: Candidate header line

    Returns:
        The delimiter, or None if the line is not a marker header

    Example:
        >>> find_header_delimiter("Marker Name\\tDescription\\tIn")
        '\\t'
        >>> find_header_delimiter("00:00:00 Intro, Title") is None
        True
    """
    if _starts_with_timecode(line.strip().lstrip("\ufeff")):
        return None

    for delimiter in CSV_DELIMITERS:
        fields = [_normalize_header(field) for field in line.split(delimiter)]
        if len(fields) < 2:
            continue
        if any(_starts_with_timecode(field) for field in fields):
            continue
        if KNOWN_COLUMNS.intersection(fields):
            return delimiter
    return None


def has_csv_header(text: str) -> bool:
    """Check whether the first non-blank line is a marker CSV header."""
    first = _first_line(text)
    return first is not None and find_header_delimiter(first[1]) is not None


def _find_column(columns: dict[str, str], aliases: tuple[str, ...]) -> str | None:
    """Return the actual column name for the first alias present."""
    for alias in aliases:
        if alias in columns:
            return columns[alias]
    return None


def _cell(row: pd.Series, column: str | None) -> str:
    if column is None:
        return ""
    value = row[column]
    if pd.isna(value):
        return ""
    return str(value).strip()


def _data_line_numbers(
    text: str, header_line_number: int, delimiter: str, field_count: int
) -> list[int]:
    """Source line of each table row pandas keeps, in order.

    Blank lines and rows with more fields than the header are dropped the
    same way read_csv drops them. A quoted field spanning several lines
    numbers its row by the line it starts on.
    """
    reader = csv.reader(text.splitlines()[header_line_number:], delimiter=delimiter)
    line_numbers = []
    consumed = 0

    for fields in reader:
        start = header_line_number + consumed + 1
        consumed = reader.line_num
        if not fields or (len(fields) == 1 and not fields[0].strip()):
            continue
        if len(fields) > field_count:
            continue
        line_numbers.append(start)

    return line_numbers


def parse_marker_csv(text: str, frame_rate: float) -> ParseResult:
    """Parse a marker CSV into raw entries.

    The timecode column is required. The label comes from the name column,
    falling back to the description column when the name is blank; with
    neither, the normalizer assigns a placeholder.

    Rows with a missing or unparsable timecode, and rows with the wrong
    number of fields, are skipped with a warning.

    Args:
        text: Full CSV text
        frame_rate: Frame rate for validating frame-based timecodes

    Returns:
        ParseResult with one entry per valid row

    Raises:
        StructurallyInvalidError: If the text is empty, has no header row,
            or has no timecode column
    """
    first = _first_line(text) if text else None
    if first is None:
        raise StructurallyInvalidError("Marker CSV is empty")

    header_line_number, header = first
    delimiter = find_header_delimiter(header)
    if delimiter is None:
        raise StructurallyInvalidError("Marker CSV has no header row", line_number=header_line_number)

    result = ParseResult(FormatKind.PREMIERE_MARKER_CSV)

    def skip_bad_line(fields: list[str]) -> None:
        result.warn(f"Row with {len(fields)} fields skipped", source_text=delimiter.join(fields))
        return None

    try:
        data = pd.read_csv(
            StringIO(text.lstrip("\ufeff")),
            sep=delimiter,
            dtype=str,
            keep_default_na=False,
            skip_blank_lines=True,
            engine="python",
            on_bad_lines=skip_bad_line,
        )
    except (pd.errors.ParserError, pd.errors.EmptyDataError) as e:
        raise StructurallyInvalidError(f"Could not read marker CSV: {e}") from e

    columns = {_normalize_header(column): column for column in data.columns}
    logger.debug(f"CSV columns: {list(data.columns)}")

    timecode_column = _find_column(columns, CSV_TIMECODE_COLUMNS)
    if timecode_column is None:
        raise StructurallyInvalidError(
            "Marker CSV has no timecode column "
            f"(expected one of: {', '.join(CSV_TIMECODE_COLUMNS)})",
            line_number=header_line_number,
        )

    name_column = _find_column(columns, CSV_NAME_COLUMNS)
    description_column = _find_column(columns, CSV_DESCRIPTION_COLUMNS)

    line_numbers = _data_line_numbers(text, header_line_number, delimiter, len(data.columns))

    for position, (_, row) in enumerate(data.iterrows()):
        line_number = line_numbers[position] if position < len(line_numbers) else None
        timecode_text = _cell(row, timecode_column)

        if not timecode_text:
            result.warn("Row has no timecode", line_number)
            continue

        try:
            parse_timecode(timecode_text, frame_rate)
        except InvalidTimecodeError as e:
            result.warn(str(e), line_number, timecode_text)
            continue

        label = _cell(row, name_column) or _cell(row, description_column)
        result.entries.append(RawMarkerEntry(timecode_text, clean_label(label), line_number))

    logger.info(f"Read {len(result.entries)} markers from {len(data)} CSV rows")
    return result
