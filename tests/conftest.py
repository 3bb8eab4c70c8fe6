# tests/conftest.py - v1
"""Shared test fixtures for all unit and integration tests.

PDFs are generated in memory with PyMuPDF. Every page carries one text
label ("A1", "A2", ...) so page order in a merged output can be read back.
"""

from __future__ import annotations

import io
from pathlib import Path

import fitz
import pytest
from pypdf import PdfWriter

from pdffusion.config.settings import Settings
from pdffusion.core.models import FileHandle
from pdffusion.logging.context import clear_context


# === HELPERS ===


def make_pdf(labels: list[str]) -> bytes:
    """Build a PDF with one page per label, the label written on the page."""
    doc = fitz.open()
    for label in labels:
        page = doc.new_page()
        page.insert_text((72, 72), label)
    data = doc.tobytes()
    doc.close()
    return data


def make_encrypted_pdf(labels: list[str]) -> bytes:
    """Build a PDF that requires a user password to open."""
    doc = fitz.open()
    for label in labels:
        doc.new_page().insert_text((72, 72), label)
    data = doc.tobytes(
        encryption=fitz.PDF_ENCRYPT_AES_256, user_pw="secret", owner_pw="owner",
    )
    doc.close()
    return data


def make_owner_encrypted_pdf(labels: list[str]) -> bytes:
    """Build an encrypted PDF that opens without a password (owner password only)."""
    doc = fitz.open()
    for label in labels:
        doc.new_page().insert_text((72, 72), label)
    data = doc.tobytes(
        encryption=fitz.PDF_ENCRYPT_AES_256, user_pw="", owner_pw="owner",
    )
    doc.close()
    return data


def make_truncated_pdf(labels: list[str]) -> bytes:
    """A valid PDF cut to two thirds of its bytes (xref and trailer lost)."""
    data = make_pdf(labels)
    return data[: len(data) * 2 // 3]


def make_empty_pdf() -> bytes:
    """A well-formed PDF with zero pages."""
    buffer = io.BytesIO()
    PdfWriter().write(buffer)
    return buffer.getvalue()


def page_labels(data: bytes) -> list[str]:
    """Read back the label of every page of a PDF byte string."""
    doc = fitz.open(stream=data, filetype="pdf")
    try:
        return [page.get_text().strip() for page in doc]
    finally:
        doc.close()


def pdf_handle(name: str, labels: list[str]) -> FileHandle:
    return FileHandle.from_bytes(name, make_pdf(labels))


# === FIXTURES: Sample data ===


@pytest.fixture(autouse=True)
def _reset_log_context():
    clear_context()
    yield
    clear_context()


@pytest.fixture
def settings() -> Settings:
    """Default settings, isolated from any local .env file."""
    return Settings(_env_file=None)


@pytest.fixture
def handle_a() -> FileHandle:
    """A.pdf with 3 pages."""
    return pdf_handle("A.pdf", ["A1", "A2", "A3"])


@pytest.fixture
def handle_b() -> FileHandle:
    """B.pdf with 1 page."""
    return pdf_handle("B.pdf", ["B1"])


@pytest.fixture
def handle_c() -> FileHandle:
    """C.pdf with 2 pages."""
    return pdf_handle("C.pdf", ["C1", "C2"])


@pytest.fixture
def disguised_handle() -> FileHandle:
    """Plain text declared as application/pdf."""
    return FileHandle.from_bytes("fake.pdf", b"this is definitely not a pdf document")


@pytest.fixture
def encrypted_handle() -> FileHandle:
    return FileHandle.from_bytes("locked.pdf", make_encrypted_pdf(["L1"]))


@pytest.fixture
def pdf_files(tmp_path: Path) -> dict[str, Path]:
    """A.pdf, B.pdf, C.pdf written to tmp_path."""
    files = {}
    for name, labels in [
        ("A.pdf", ["A1", "A2", "A3"]),
        ("B.pdf", ["B1"]),
        ("C.pdf", ["C1", "C2"]),
    ]:
        p = tmp_path / name
        p.write_bytes(make_pdf(labels))
        files[name] = p
    return files


@pytest.fixture
def build_pdf():
    """Factory fixture: build_pdf(["X1", "X2"]) -> PDF bytes."""
    return make_pdf


@pytest.fixture
def read_labels():
    """read_labels(pdf_bytes) -> ["X1", "X2"]."""
    return page_labels


@pytest.fixture
def owner_locked_handle() -> FileHandle:
    """Encrypted with an owner password only; opens without prompting."""
    return FileHandle.from_bytes("owner-locked.pdf", make_owner_encrypted_pdf(["O1"]))


@pytest.fixture
def truncated_handle() -> FileHandle:
    """T.pdf: a 3-page PDF cut short."""
    return FileHandle.from_bytes("T.pdf", make_truncated_pdf(["T1", "T2", "T3"]))


@pytest.fixture
def empty_handle() -> FileHandle:
    """empty.pdf: valid, zero pages."""
    return FileHandle.from_bytes("empty.pdf", make_empty_pdf())
