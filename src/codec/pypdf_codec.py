# src/codec/pypdf_codec.py - v1
"""Document codec backed by pypdf (pure Python).

Requires the 'pypdf' package.
"""

from __future__ import annotations

import io
import logging

from pdffusion.codec.base_codec import BaseDocumentCodec, DocumentHandle, PageRef
from pdffusion.core.errors import DocumentLoadError, SerializationError

logger = logging.getLogger(__name__)

BACKEND_NAME = "pypdf"


class PyPdfCodec(BaseDocumentCodec):
    """PDF codec using pypdf's PdfReader / PdfWriter."""

    def __init__(self) -> None:
        try:
            import pypdf
        except ImportError as e:
            raise ImportError(
                "pypdf package required for the pypdf codec: pip install pypdf"
            ) from e
        self._pypdf = pypdf

    @property
    def name(self) -> str:
        return BACKEND_NAME

    def load(self, data: bytes) -> DocumentHandle:
        if not data:
            raise DocumentLoadError("Document is empty")
        errors = self._pypdf.errors
        try:
            reader = self._pypdf.PdfReader(io.BytesIO(data))
            if reader.is_encrypted:
                raise DocumentLoadError("Document is encrypted")
            # PdfReader parses lazily; force the page tree now so that
            # truncation surfaces as a load failure.
            count = len(reader.pages)
        except DocumentLoadError:
            raise
        except (errors.FileNotDecryptedError, errors.DependencyError) as exc:
            raise DocumentLoadError(f"Document is encrypted: {exc}") from exc
        except Exception as exc:
            raise DocumentLoadError(f"Not a readable PDF: {exc}") from exc

        logger.debug("Loaded PDF with %d page(s)", count)
        return DocumentHandle(backend=BACKEND_NAME, native=reader)

    def new_document(self) -> DocumentHandle:
        return DocumentHandle(backend=BACKEND_NAME, native=self._pypdf.PdfWriter())

    def page_count(self, handle: DocumentHandle) -> int:
        return len(handle.native.pages)

    def append_pages(self, target: DocumentHandle, pages: list[PageRef]) -> None:
        writer = target.native
        for page in pages:
            writer.add_page(page.source.native.pages[page.index])

    def serialize(self, target: DocumentHandle) -> bytes:
        buffer = io.BytesIO()
        try:
            target.native.write(buffer)
        except Exception as exc:
            raise SerializationError(f"pypdf could not write output: {exc}") from exc
        return buffer.getvalue()
