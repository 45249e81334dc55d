"""Ordering steps shared by the normalizer and the chapter list.

These functions work on any frozen dataclass with ``start_ms`` and
``label`` fields, so the normalizer can run them on resolved entries and
the chapter list on its chapters. Each returns new objects and leaves its
input untouched.
"""

from collections.abc import Sequence
from dataclasses import replace
from typing import TypeVar

from chaptermark.utils.constants import COMBINE_SEPARATOR, DUPLICATE_COMBINE, DUPLICATE_FIRST

T = TypeVar("T")


def sort_by_time(items: Sequence[T]) -> list[T]:
    """Sort by start time; equal times keep their input order."""
    return sorted(items, key=lambda item: item.start_ms)


def correct_origin(items: Sequence[T]) -> tuple[int, list[T]]:
    """Shift sorted items so the first starts at zero.

    Args:
        items: Items sorted by start time

    Returns:
        Tuple of (offset_ms, shifted_items); offset is 0 when no shift was needed

    Example:
        >>> offset, shifted = correct_origin(entries)  # starts [2000, 7000]
        >>> offset, [e.start_ms for e in shifted]
        (2000, [0, 5000])
    """
    if not items:
        return 0, []

    offset = items[0].start_ms
    if offset == 0:
        return 0, list(items)

    return offset, [replace(item, start_ms=item.start_ms - offset) for item in items]


def deduplicate(
    items: Sequence[T],
    policy: str = DUPLICATE_FIRST,
    separator: str = COMBINE_SEPARATOR,
) -> tuple[list[T], int]:
    """Collapse items sharing a start time into the first of them.

    With the "first" policy later labels are discarded. With "combine",
    distinct non-empty labels are joined onto the kept item.

    Args:
        items: Items sorted by start time
        policy: "first" or "combine"
        separator: Join string for the combine policy

    Returns:
        Tuple of (kept_items, removed_count)
    """
    kept: list[T] = []
    removed = 0

    for item in items:
        if not kept or kept[-1].start_ms != item.start_ms:
            kept.append(item)
            continue

        removed += 1
        if policy != DUPLICATE_COMBINE or not item.label:
            continue

        previous = kept[-1]
        if not previous.label:
            kept[-1] = replace(previous, label=item.label)
        elif item.label not in previous.label.split(separator):
            kept[-1] = replace(previous, label=f"{previous.label}{separator}{item.label}")

    return kept, removed
