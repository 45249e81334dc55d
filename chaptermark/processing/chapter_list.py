"""Editable chapter list.

The ChapterList is the state of one editing session. Every mutation goes
through its methods, and each method keeps these invariants:

- chapters are sorted by start time;
- the first chapter starts at 0;
- no two chapters share a start time;
- every label is non-empty.

Failed operations raise before anything is changed, so the list is never
left half-edited. Chapter ids come from a per-list counter and survive
re-sorting, which lets a UI follow a row after its time changes.
"""

import itertools
from collections.abc import Iterable, Iterator
from dataclasses import dataclass, replace

from chaptermark.config.models import ChapterConfig
from chaptermark.data.models import Chapter, clean_label
from chaptermark.processing.ordering import correct_origin, deduplicate, sort_by_time
from chaptermark.utils.constants import CHAPTER_ID_PREFIX
from chaptermark.utils.exceptions import ChapterNotFoundError, DuplicateTimeError
from chaptermark.utils.logger import get_logger

logger = get_logger(__name__)


@dataclass(frozen=True)
class _Draft:
    start_ms: int
    label: str


class ChapterList:
    """Ordered chapters with add/edit/remove/merge operations.

    Attributes:
        config: Settings for placeholders and duplicate handling

    Example:
        >>> chapters = ChapterList.from_pairs([(0, "Intro"), (5000, "Body")])
        >>> chapters.add(12000, "Outro").id
        'ch-3'
    """

    def __init__(self, config: ChapterConfig | None = None) -> None:
        """Create an empty chapter list.

        Args:
            config: Label and duplicate settings (defaults if None)
        """
        self.config = config or ChapterConfig()
        self._chapters: list[Chapter] = []
        self._ids = itertools.count(1)

    @classmethod
    def from_pairs(
        cls,
        pairs: Iterable[tuple[int, str]],
        config: ChapterConfig | None = None,
    ) -> "ChapterList":
        """Build a list from (start_ms, label) pairs.

        The pairs are sorted, shifted to start at 0 and de-duplicated, so
        any input yields a valid list. Empty labels get placeholders.

        Args:
            pairs: Start times in milliseconds with labels
            config: Label and duplicate settings

        Returns:
            New ChapterList
        """
        chapter_list = cls(config)
        settings = chapter_list.config

        drafts = sort_by_time([_Draft(start_ms, clean_label(label)) for start_ms, label in pairs])
        kept, _ = deduplicate(drafts, settings.duplicate_policy, settings.combine_separator)
        _, zeroed = correct_origin(kept)

        chapter_list._chapters = [
            Chapter(
                chapter_list._next_id(),
                draft.start_ms,
                draft.label or settings.placeholder_for(position),
            )
            for position, draft in enumerate(zeroed, start=1)
        ]
        chapter_list.validate()
        return chapter_list

    # ------------------------------------------------------------------
    # Read access
    # ------------------------------------------------------------------

    def __len__(self) -> int:
        return len(self._chapters)

    def __iter__(self) -> Iterator[Chapter]:
        return iter(self._chapters)

    def __getitem__(self, index: int) -> Chapter:
        return self._chapters[index]

    def __contains__(self, chapter_id: object) -> bool:
        return any(chapter.id == chapter_id for chapter in self._chapters)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, ChapterList):
            return NotImplemented
        return self._chapters == other._chapters

    def __repr__(self) -> str:
        return f"ChapterList({len(self._chapters)} chapters)"

    @property
    def chapters(self) -> tuple[Chapter, ...]:
        """Snapshot of the chapters in order."""
        return tuple(self._chapters)

    @property
    def times(self) -> list[int]:
        """Start times in milliseconds, in order."""
        return [chapter.start_ms for chapter in self._chapters]

    @property
    def labels(self) -> list[str]:
        return [chapter.label for chapter in self._chapters]

    def get(self, chapter_id: str) -> Chapter:
        """Look up a chapter by id.

        Raises:
            ChapterNotFoundError: If no chapter has this id
        """
        return self._chapters[self.index_of(chapter_id)]

    def index_of(self, chapter_id: str) -> int:
        """Position of a chapter in the list.

        Raises:
            ChapterNotFoundError: If no chapter has this id
        """
        for index, chapter in enumerate(self._chapters):
            if chapter.id == chapter_id:
                return index
        raise ChapterNotFoundError(chapter_id)

    # ------------------------------------------------------------------
    # Operations
    # ------------------------------------------------------------------

    def add(self, at_ms: int, label: str = "") -> Chapter:
        """Insert a chapter at its sorted position.

        A chapter added to an empty list starts at 0.

        Args:
            at_ms: Start time in milliseconds
            label: Chapter title; empty gets a placeholder

        Returns:
            The new chapter

        Raises:
            ValueError: If at_ms is negative
            DuplicateTimeError: If a chapter already starts at at_ms
        """
        if at_ms < 0:
            raise ValueError(f"Chapter start cannot be negative, got {at_ms}")
        self._check_time_free(at_ms)

        position = sum(1 for chapter in self._chapters if chapter.start_ms < at_ms) + 1
        chapter = Chapter(self._next_id(), at_ms, self._label_or_placeholder(label, position))

        self._commit(self._chapters + [chapter])
        logger.debug(f"Added chapter {chapter.id} at {at_ms} ms")
        return self.get(chapter.id)

    def edit(
        self,
        chapter_id: str,
        new_time_ms: int | None = None,
        new_label: str | None = None,
    ) -> Chapter:
        """Change a chapter's start time and/or label.

        A new time re-sorts the list. If the edit moves the first chapter
        later, the whole list is shifted so the new first chapter starts at 0.

        Args:
            chapter_id: Chapter to change
            new_time_ms: New start time (None = unchanged)
            new_label: New label (None = unchanged, empty = placeholder)

        Returns:
            The updated chapter

        Raises:
            ChapterNotFoundError: If no chapter has this id
            DuplicateTimeError: If another chapter starts at new_time_ms
            ValueError: If new_time_ms is negative
        """
        index = self.index_of(chapter_id)
        updated = self._chapters[index]

        if new_time_ms is not None:
            if new_time_ms < 0:
                raise ValueError(f"Chapter start cannot be negative, got {new_time_ms}")
            self._check_time_free(new_time_ms, ignore_id=chapter_id)
            updated = replace(updated, start_ms=new_time_ms)

        if new_label is not None:
            # Placeholder numbers follow the position after re-sorting
            position = 1 + sum(
                1 for chapter in self._chapters
                if chapter.id != chapter_id and chapter.start_ms < updated.start_ms
            )
            updated = replace(updated, label=self._label_or_placeholder(new_label, position))

        chapters = list(self._chapters)
        chapters[index] = updated
        self._commit(chapters)

        logger.debug(f"Edited chapter {chapter_id}")
        return self.get(chapter_id)

    def remove(self, chapter_id: str) -> None:
        """Delete a chapter.

        Removing the first chapter shifts the rest so the new first
        chapter starts at 0.

        Raises:
            ChapterNotFoundError: If no chapter has this id
        """
        index = self.index_of(chapter_id)
        chapters = self._chapters[:index] + self._chapters[index + 1:]
        self._commit(chapters)
        logger.debug(f"Removed chapter {chapter_id}")

    def merge(self, first_id: str, second_id: str) -> Chapter:
        """Fold the later of two chapters into the earlier one.

        The earlier chapter keeps its id and start time; the labels are
        joined with the configured separator and the later chapter is
        removed.

        Args:
            first_id: One of the chapters
            second_id: The other chapter

        Returns:
            The merged chapter

        Raises:
            ChapterNotFoundError: If either id is unknown
            ValueError: If both ids are the same
        """
        if first_id == second_id:
            raise ValueError(f"Cannot merge chapter '{first_id}' with itself")

        earlier, later = sorted((self.get(first_id), self.get(second_id)), key=lambda c: c.start_ms)
        merged = replace(earlier, label=f"{earlier.label}{self.config.combine_separator}{later.label}")

        chapters = [merged if c.id == earlier.id else c for c in self._chapters if c.id != later.id]
        self._commit(chapters)

        logger.debug(f"Merged chapter {later.id} into {earlier.id}")
        return self.get(earlier.id)

    def normalize(self) -> int:
        """Re-sort, de-duplicate and re-zero the list.

        Returns:
            Number of duplicate chapters removed
        """
        kept, removed = deduplicate(
            sort_by_time(self._chapters),
            self.config.duplicate_policy,
            self.config.combine_separator,
        )
        self._commit(kept)

        if removed:
            logger.info(f"Removed {removed} duplicate chapters")
        return removed

    # ------------------------------------------------------------------
    # Internals
    # ------------------------------------------------------------------

    def validate(self) -> None:
        """Check the list invariants.

        Raises:
            ValueError: If an invariant is broken
        """
        if not self._chapters:
            return

        if self._chapters[0].start_ms != 0:
            raise ValueError(f"First chapter starts at {self._chapters[0].start_ms} ms, not 0")

        for previous, current in zip(self._chapters, self._chapters[1:]):
            if current.start_ms <= previous.start_ms:
                raise ValueError(
                    f"Chapters '{previous.id}' and '{current.id}' are not in strictly "
                    "increasing time order"
                )

        ids = [chapter.id for chapter in self._chapters]
        if len(set(ids)) != len(ids):
            raise ValueError("Chapter ids are not unique")

    def _next_id(self) -> str:
        return f"{CHAPTER_ID_PREFIX}{next(self._ids)}"

    def _label_or_placeholder(self, label: str | None, position: int) -> str:
        return clean_label(label) or self.config.placeholder_for(position)

    def _check_time_free(self, start_ms: int, ignore_id: str | None = None) -> None:
        for chapter in self._chapters:
            if chapter.start_ms == start_ms and chapter.id != ignore_id:
                raise DuplicateTimeError(start_ms, chapter.id)

    def _commit(self, chapters: list[Chapter]) -> None:
        _, zeroed = correct_origin(sort_by_time(chapters))
        self._chapters = zeroed
        self.validate()
