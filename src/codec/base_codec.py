# src/codec/base_codec.py - v1
"""Abstract document codec: the only PDF capability the merge pipeline relies on.

Handles are opaque to callers. A PageRef points at one page of a loaded
source document and can be appended to another document without re-rendering.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Any


@dataclass(frozen=True)
class DocumentHandle:
    """Opaque wrapper around a backend document object."""

    backend: str
    native: Any


@dataclass(frozen=True)
class PageRef:
    """Reference to one page (0-based index) of a loaded source document."""

    source: DocumentHandle
    index: int


class BaseDocumentCodec(ABC):
    """Unified interface for PDF backends."""

    @property
    @abstractmethod
    def name(self) -> str:
        """Backend name used in settings (e.g. 'pymupdf')."""

    @abstractmethod
    def load(self, data: bytes) -> DocumentHandle:
        """Parse raw bytes into a document.

        Raises:
            DocumentLoadError: Malformed, truncated, encrypted or non-PDF content.
        """

    @abstractmethod
    def new_document(self) -> DocumentHandle:
        """Create an empty output document."""

    @abstractmethod
    def page_count(self, handle: DocumentHandle) -> int:
        """Number of pages in the document."""

    @abstractmethod
    def append_pages(self, target: DocumentHandle, pages: list[PageRef]) -> None:
        """Append pages to target, in the given order."""

    @abstractmethod
    def serialize(self, target: DocumentHandle) -> bytes:
        """Encode the document to a contiguous byte string.

        Raises:
            SerializationError: If the backend cannot write the document.
        """

    def copy_pages(self, source: DocumentHandle, indices: list[int]) -> list[PageRef]:
        """Reference pages of source for a later append_pages call."""
        count = self.page_count(source)
        for i in indices:
            if not 0 <= i < count:
                raise IndexError(f"Page index {i} out of range (0..{count - 1})")
        return [PageRef(source=source, index=i) for i in indices]

    def close(self, handle: DocumentHandle) -> None:
        """Release backend resources. Default: nothing to release."""
