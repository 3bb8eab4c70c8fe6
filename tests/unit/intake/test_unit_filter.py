# tests/unit/intake/test_unit_filter.py - v1
"""Tests for intake/filter.py: PDF-only acceptance."""

from __future__ import annotations

import pytest

from pdffusion.core.errors import IntakeRejectedError
from pdffusion.core.models import FileHandle
from pdffusion.intake.filter import REJECTED_BATCH_NOTICE, accept_pdf_handles, check_handle


def _handle(name: str, media_type: str) -> FileHandle:
    return FileHandle.from_bytes(name, b"data", media_type=media_type)


class TestCheckHandle:
    def test_accepts_pdf(self):
        h = _handle("a.pdf", "application/pdf")
        assert check_handle(h) is h

    def test_normalizes_case_and_parameters(self):
        h = _handle("a.pdf", "Application/PDF; charset=binary")
        assert check_handle(h) is h

    def test_rejects_other_types(self):
        with pytest.raises(IntakeRejectedError):
            check_handle(_handle("a.png", "image/png"))

    def test_rejects_missing_type(self):
        with pytest.raises(IntakeRejectedError):
            check_handle(_handle("a.pdf", ""))


class TestAcceptPdfHandles:
    def test_mixed_batch_keeps_order(self):
        batch = [
            _handle("1.pdf", "application/pdf"),
            _handle("notes.txt", "text/plain"),
            _handle("2.pdf", "application/pdf"),
        ]
        report = accept_pdf_handles(batch)
        assert [h.name for h in report.accepted] == ["1.pdf", "2.pdf"]
        assert [h.name for h in report.rejected] == ["notes.txt"]
        assert report.notice is None

    def test_whole_batch_rejected_sets_notice(self):
        report = accept_pdf_handles([_handle("a.png", "image/png")])
        assert report.accepted == []
        assert report.notice == REJECTED_BATCH_NOTICE

    def test_empty_batch_has_no_notice(self):
        report = accept_pdf_handles([])
        assert report.notice is None

    def test_custom_accepted_types(self):
        report = accept_pdf_handles(
            [_handle("a.pdf", "application/x-pdf")],
            accepted_media_types=["application/pdf", "application/x-pdf"],
        )
        assert len(report.accepted) == 1

    def test_disguised_content_is_not_sniffed(self):
        h = FileHandle.from_bytes("fake.pdf", b"plain text", media_type="application/pdf")
        assert accept_pdf_handles([h]).accepted == [h]
