# src/core/errors.py - v1
"""Error hierarchy shared by intake, codecs, pipeline and session.

Every merge-time error collapses into a single generic failure outcome
at the session boundary. The specific exception is kept for logging.
"""

from __future__ import annotations


class PdfFusionError(Exception):
    """Base class for all pdffusion errors."""


class IntakeRejectedError(PdfFusionError):
    """A supplied file handle does not declare a PDF media type."""

    def __init__(self, name: str, media_type: str) -> None:
        self.name = name
        self.media_type = media_type
        super().__init__(f"Rejected {name!r}: media type {media_type!r} is not PDF")


class DocumentLoadError(PdfFusionError):
    """Document bytes could not be parsed (corrupt, encrypted, truncated, not a PDF)."""

    def __init__(
        self,
        message: str,
        document_id: str | None = None,
        document_name: str | None = None,
    ) -> None:
        self.document_id = document_id
        self.document_name = document_name
        super().__init__(message)

    def for_document(self, document_id: str, document_name: str) -> DocumentLoadError:
        """Return a copy of this error tagged with the offending document."""
        return DocumentLoadError(
            f"{document_name}: {self}", document_id=document_id, document_name=document_name,
        )


class SerializationError(PdfFusionError):
    """The assembled output document could not be encoded to bytes."""


class NotEnoughDocumentsError(PdfFusionError):
    """Merge was requested with fewer documents than the configured minimum."""

    def __init__(self, count: int, minimum: int) -> None:
        self.count = count
        self.minimum = minimum
        super().__init__(f"Need at least {minimum} documents to merge, got {count}")


class MergeInProgressError(PdfFusionError):
    """A merge is already running for this session."""
