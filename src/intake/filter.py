# src/intake/filter.py - v1
"""Intake gate: only handles declaring a PDF media type reach the ordering store.

Content is not sniffed here. A disguised non-PDF passes intake and fails
later at load time.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable

from pdffusion.core.errors import IntakeRejectedError
from pdffusion.core.models import PDF_MEDIA_TYPE, FileHandle, IntakeReport

logger = logging.getLogger(__name__)

REJECTED_BATCH_NOTICE = "Please drop PDF files only."


def _normalize_media_type(media_type: str) -> str:
    """'Application/PDF; charset=binary' -> 'application/pdf'."""
    return media_type.split(";", 1)[0].strip().lower()


def check_handle(
    handle: FileHandle,
    accepted_media_types: Iterable[str] = (PDF_MEDIA_TYPE,),
) -> FileHandle:
    """Return the handle if its declared type is accepted.

    Raises:
        IntakeRejectedError: If the media type is not in accepted_media_types.
    """
    if _normalize_media_type(handle.media_type) not in set(accepted_media_types):
        raise IntakeRejectedError(handle.name, handle.media_type)
    return handle


def accept_pdf_handles(
    handles: Iterable[FileHandle],
    accepted_media_types: Iterable[str] = (PDF_MEDIA_TYPE,),
) -> IntakeReport:
    """Split a batch into accepted and rejected handles, preserving order.

    A notice is attached only when a non-empty batch is rejected entirely.
    """
    accepted_types = {_normalize_media_type(t) for t in accepted_media_types}
    report = IntakeReport()

    for handle in handles:
        try:
            report.accepted.append(check_handle(handle, accepted_types))
        except IntakeRejectedError as exc:
            logger.info("%s", exc)
            report.rejected.append(handle)

    if report.rejected and not report.accepted:
        report.notice = REJECTED_BATCH_NOTICE
        logger.warning("Rejected whole intake batch of %d file(s)", len(report.rejected))

    return report
