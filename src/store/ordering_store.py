# src/store/ordering_store.py - v1
"""Source ordering store: the single owner of the ordered document sequence.

Every mutation builds a new list and swaps it in, so a snapshot handed to
the merge pipeline is never affected by later edits. While frozen (a merge
is running) all mutating operations are rejected and return False.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable, Iterator

from pdffusion.core.models import FileHandle, InputDocument
from pdffusion.core.natural_sort import natural_sort_key

logger = logging.getLogger(__name__)


class SourceOrderingStore:
    """Ordered, user-controlled sequence of InputDocument.

    Invariants:
        - each document id appears at most once
        - reordering operations never change membership or count
    """

    def __init__(self) -> None:
        self._documents: tuple[InputDocument, ...] = ()
        self._frozen = False

    # --- Read access ---

    @property
    def documents(self) -> tuple[InputDocument, ...]:
        """Immutable snapshot of the current order."""
        return self._documents

    @property
    def names(self) -> list[str]:
        return [d.display_name for d in self._documents]

    @property
    def frozen(self) -> bool:
        return self._frozen

    def __len__(self) -> int:
        return len(self._documents)

    def __iter__(self) -> Iterator[InputDocument]:
        return iter(self._documents)

    def find(self, document_id: str) -> InputDocument | None:
        return next((d for d in self._documents if d.id == document_id), None)

    # --- Freeze control (owned by the merge session) ---

    def freeze(self) -> None:
        self._frozen = True

    def unfreeze(self) -> None:
        self._frozen = False

    def _reject_if_frozen(self, operation: str) -> bool:
        if self._frozen:
            logger.warning("Ignoring %s: a merge is in progress", operation)
            return True
        return False

    # --- Mutations ---

    def add(self, handles: Iterable[FileHandle]) -> list[InputDocument]:
        """Append handles in input order, each under a fresh id.

        Returns the created documents (empty if the store is frozen).
        """
        if self._reject_if_frozen("add"):
            return []
        created = [InputDocument.from_handle(h) for h in handles]
        if created:
            self._documents = (*self._documents, *created)
            logger.debug("Added %d document(s), %d queued", len(created), len(self))
        return created

    def remove(self, document_id: str) -> bool:
        """Delete the document with this id. No-op if absent."""
        if self._reject_if_frozen("remove"):
            return False
        remaining = tuple(d for d in self._documents if d.id != document_id)
        if len(remaining) == len(self._documents):
            return False
        self._documents = remaining
        return True

    def move_up(self, index: int) -> bool:
        """Swap the entry at index with its predecessor. No-op at index 0."""
        if self._reject_if_frozen("move_up"):
            return False
        if not 0 < index < len(self._documents):
            return False
        return self._swap(index - 1, index)

    def move_down(self, index: int) -> bool:
        """Swap the entry at index with its successor. No-op at the last index."""
        if self._reject_if_frozen("move_down"):
            return False
        if not 0 <= index < len(self._documents) - 1:
            return False
        return self._swap(index, index + 1)

    def reorder(self, from_index: int, to_index: int) -> bool:
        """Move the entry at from_index so it ends up at to_index.

        List splice semantics: the entry is removed first, then reinserted
        at to_index of the shortened list. Out-of-range indices are rejected.
        """
        if self._reject_if_frozen("reorder"):
            return False
        size = len(self._documents)
        if not (0 <= from_index < size and 0 <= to_index < size):
            logger.warning(
                "Rejected reorder %d -> %d on %d document(s)", from_index, to_index, size,
            )
            return False
        if from_index == to_index:
            return False
        docs = list(self._documents)
        moved = docs.pop(from_index)
        docs.insert(to_index, moved)
        self._documents = tuple(docs)
        return True

    def sort_by_name(self) -> bool:
        """Stable natural sort on display names."""
        if self._reject_if_frozen("sort_by_name"):
            return False
        ordered = tuple(
            sorted(self._documents, key=lambda d: natural_sort_key(d.display_name))
        )
        changed = [d.id for d in ordered] != [d.id for d in self._documents]
        self._documents = ordered
        return changed

    def clear(self) -> bool:
        """Drop every document (full reset)."""
        if self._reject_if_frozen("clear"):
            return False
        self._documents = ()
        return True

    def _swap(self, i: int, j: int) -> bool:
        docs = list(self._documents)
        docs[i], docs[j] = docs[j], docs[i]
        self._documents = tuple(docs)
        return True
