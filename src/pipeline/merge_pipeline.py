# src/pipeline/merge_pipeline.py - v1
"""Ordered merge: read, load, copy pages, serialize.

Usage:
    pipeline = MergePipeline(create_codec("pymupdf"))
    result = await pipeline.merge(store.documents)

The merge is all-or-nothing. Any load failure aborts before an output
document exists; any copy or write failure discards the output. Byte reads
may overlap, but results are always collected by input position.
"""

from __future__ import annotations

import asyncio
import logging
import uuid
from collections.abc import Callable, Sequence
from datetime import datetime, timezone

from pdffusion.codec.base_codec import BaseDocumentCodec, DocumentHandle
from pdffusion.config.settings import Settings
from pdffusion.core.errors import (
    DocumentLoadError,
    NotEnoughDocumentsError,
    PdfFusionError,
    SerializationError,
)
from pdffusion.core.models import InputDocument, MergeResult
from pdffusion.logging.context import set_document_context, set_merge_context

logger = logging.getLogger(__name__)


def _utc_now() -> datetime:
    return datetime.now(timezone.utc)


def build_output_name(prefix: str, extension: str, when: datetime) -> str:
    """'merged_document_' + '2024-05-01' + '.pdf'."""
    return f"{prefix}{when.strftime('%Y-%m-%d')}{extension}"


class MergePipeline:
    """Merge an ordered sequence of documents into one PDF byte string."""

    def __init__(
        self,
        codec: BaseDocumentCodec,
        settings: Settings | None = None,
        clock: Callable[[], datetime] = _utc_now,
    ) -> None:
        self._codec = codec
        self._settings = settings or Settings()
        self._clock = clock

    @property
    def codec(self) -> BaseDocumentCodec:
        return self._codec

    async def merge(self, documents: Sequence[InputDocument]) -> MergeResult:
        """Merge documents in the given order.

        Args:
            documents: Ordered snapshot; it is read, never modified.

        Returns:
            MergeResult with the serialized output and its generated name.

        Raises:
            NotEnoughDocumentsError: Fewer than settings.min_documents inputs.
            DocumentLoadError: An input could not be read or parsed.
            SerializationError: The output could not be assembled or written.
        """
        docs = tuple(documents)
        if len(docs) < self._settings.min_documents:
            raise NotEnoughDocumentsError(len(docs), self._settings.min_documents)

        merge_id = uuid.uuid4().hex
        set_merge_context(merge_id)
        try:
            logger.info(
                "Merging %d documents with %s codec", len(docs), self._codec.name,
            )
            payloads = await self._read_all(docs)
            result = await asyncio.to_thread(self._assemble, docs, payloads)
        finally:
            set_merge_context(None)

        logger.info(
            "Merge complete: %s, %d pages, %d bytes",
            result.output_name, result.page_count, result.output_size_bytes,
        )
        return result

    async def _read_all(self, docs: tuple[InputDocument, ...]) -> list[bytes]:
        """Read every handle concurrently; the result list follows input order."""
        semaphore = asyncio.Semaphore(self._settings.max_concurrent_reads)

        async def read_one(doc: InputDocument) -> bytes:
            async with semaphore:
                set_document_context(doc.display_name)
                try:
                    return await asyncio.to_thread(doc.handle.read_bytes)
                except OSError as exc:
                    raise DocumentLoadError(
                        f"{doc.display_name}: cannot read file: {exc}",
                        document_id=doc.id,
                        document_name=doc.display_name,
                    ) from exc

        return list(await asyncio.gather(*(read_one(d) for d in docs)))

    def _assemble(
        self, docs: tuple[InputDocument, ...], payloads: list[bytes],
    ) -> MergeResult:
        """Blocking part of the merge, run in a worker thread."""
        codec = self._codec
        loaded: list[DocumentHandle] = []
        output: DocumentHandle | None = None
        try:
            for doc, data in zip(docs, payloads):
                set_document_context(doc.display_name)
                try:
                    loaded.append(codec.load(data))
                except DocumentLoadError as exc:
                    raise exc.for_document(doc.id, doc.display_name) from exc
            set_document_context(None)

            counts = [codec.page_count(handle) for handle in loaded]
            for doc, count in zip(docs, counts):
                if count == 0:
                    logger.info("%s has no pages, nothing to copy", doc.display_name)
            expected_pages = sum(counts)
            if expected_pages == 0:
                raise SerializationError("Every input document has zero pages")

            output = codec.new_document()
            try:
                for handle, count in zip(loaded, counts):
                    codec.append_pages(output, codec.copy_pages(handle, list(range(count))))
            except PdfFusionError:
                raise
            except Exception as exc:
                raise SerializationError(f"Could not copy pages: {exc}") from exc

            actual_pages = codec.page_count(output)
            if actual_pages != expected_pages:
                raise SerializationError(
                    f"Output has {actual_pages} pages, expected {expected_pages}"
                )

            data = codec.serialize(output)
            if not data:
                raise SerializationError("Codec produced an empty output")
        finally:
            set_document_context(None)
            for handle in loaded:
                codec.close(handle)
            if output is not None:
                codec.close(output)

        now = self._clock()
        return MergeResult(
            output_bytes=data,
            output_name=build_output_name(
                self._settings.output_name_prefix, self._settings.output_extension, now,
            ),
            output_size_bytes=len(data),
            page_count=expected_pages,
            source_count=len(docs),
            created_at=now,
        )
