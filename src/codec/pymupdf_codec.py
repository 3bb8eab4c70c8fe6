# src/codec/pymupdf_codec.py - v1
"""Document codec backed by PyMuPDF (fitz).

Pages are copied with Document.insert_pdf, which transfers page objects and
their resources structurally rather than re-rendering them.
Requires the 'pymupdf' package.
"""

from __future__ import annotations

import logging

from pdffusion.codec.base_codec import BaseDocumentCodec, DocumentHandle, PageRef
from pdffusion.core.errors import DocumentLoadError, SerializationError

logger = logging.getLogger(__name__)

BACKEND_NAME = "pymupdf"


class PyMuPdfCodec(BaseDocumentCodec):
    """PDF codec using PyMuPDF."""

    def __init__(self) -> None:
        try:
            import fitz  # PyMuPDF
        except ImportError as e:
            raise ImportError(
                "pymupdf package required for the pymupdf codec: pip install pymupdf"
            ) from e
        self._fitz = fitz

    @property
    def name(self) -> str:
        return BACKEND_NAME

    def load(self, data: bytes) -> DocumentHandle:
        if not data:
            raise DocumentLoadError("Document is empty")
        try:
            doc = self._fitz.open(stream=data, filetype="pdf")
        except Exception as exc:
            raise DocumentLoadError(f"Not a readable PDF: {exc}") from exc

        if doc.needs_pass:
            doc.close()
            raise DocumentLoadError("Document is password protected")
        # Owner-password-only files open without a prompt but stay encrypted.
        if doc.is_encrypted or (doc.metadata or {}).get("encryption"):
            doc.close()
            raise DocumentLoadError("Document is encrypted")
        # MuPDF rebuilds a broken xref silently; a rebuilt file may have lost pages.
        if doc.is_repaired:
            doc.close()
            raise DocumentLoadError("Document is damaged or truncated")
        logger.debug("Loaded PDF with %d page(s)", doc.page_count)
        return DocumentHandle(backend=BACKEND_NAME, native=doc)

    def new_document(self) -> DocumentHandle:
        return DocumentHandle(backend=BACKEND_NAME, native=self._fitz.open())

    def page_count(self, handle: DocumentHandle) -> int:
        return handle.native.page_count

    def append_pages(self, target: DocumentHandle, pages: list[PageRef]) -> None:
        # insert_pdf works on contiguous page ranges; batch consecutive refs
        # to the same source into one call.
        runs: list[tuple[DocumentHandle, int, int]] = []
        for page in pages:
            if runs and runs[-1][0] is page.source and runs[-1][2] == page.index - 1:
                src, start, _ = runs[-1]
                runs[-1] = (src, start, page.index)
            else:
                runs.append((page.source, page.index, page.index))

        for src, start, end in runs:
            target.native.insert_pdf(src.native, from_page=start, to_page=end)

    def serialize(self, target: DocumentHandle) -> bytes:
        try:
            return target.native.tobytes()
        except Exception as exc:
            raise SerializationError(f"PyMuPDF could not write output: {exc}") from exc

    def close(self, handle: DocumentHandle) -> None:
        handle.native.close()
