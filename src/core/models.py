# src/core/models.py - v1
"""Shared Pydantic domain models used across modules.

No module redefines these types; all imports come from core.models.
"""

from __future__ import annotations

import mimetypes
import uuid
from datetime import datetime, timezone
from pathlib import Path
from typing import Annotated, Literal, Union

from pydantic import BaseModel, ConfigDict, Field, model_validator

PDF_MEDIA_TYPE = "application/pdf"

GENERIC_FAILURE_MESSAGE = (
    "Unable to merge the files. Make sure they are valid PDF documents."
)


# === INTAKE ===


class FileHandle(BaseModel):
    """Raw file supplied by the intake collaborator.

    Backed either by in-memory bytes or by a filesystem path. The declared
    media type is what intake filters on; content is never sniffed.
    """

    model_config = ConfigDict(frozen=True)

    name: str
    media_type: str = ""
    data: bytes | None = Field(default=None, repr=False)
    path: Path | None = None

    @model_validator(mode="after")
    def _check_source(self) -> FileHandle:
        if (self.data is None) == (self.path is None):
            raise ValueError("FileHandle needs exactly one of 'data' or 'path'")
        return self

    @classmethod
    def from_path(cls, path: str | Path, media_type: str | None = None) -> FileHandle:
        """Build a handle for a file on disk, guessing the media type from its name."""
        p = Path(path)
        if media_type is None:
            media_type = mimetypes.guess_type(p.name)[0] or ""
        return cls(name=p.name, media_type=media_type, path=p)

    @classmethod
    def from_bytes(
        cls, name: str, data: bytes, media_type: str = PDF_MEDIA_TYPE,
    ) -> FileHandle:
        return cls(name=name, media_type=media_type, data=data)

    @property
    def size_bytes(self) -> int:
        if self.data is not None:
            return len(self.data)
        return self.path.stat().st_size  # type: ignore[union-attr]

    def read_bytes(self) -> bytes:
        """Return the raw file content."""
        if self.data is not None:
            return self.data
        return self.path.read_bytes()  # type: ignore[union-attr]


class InputDocument(BaseModel):
    """A document accepted into the ordering store. Identity is independent of position."""

    model_config = ConfigDict(frozen=True)

    id: str
    handle: FileHandle
    display_name: str
    size_bytes: int = Field(ge=0)

    @classmethod
    def from_handle(cls, handle: FileHandle) -> InputDocument:
        """Wrap a handle with a fresh unique id."""
        return cls(
            id=uuid.uuid4().hex,
            handle=handle,
            display_name=handle.name,
            size_bytes=handle.size_bytes,
        )


class IntakeReport(BaseModel):
    """Outcome of filtering one intake batch."""

    accepted: list[FileHandle] = Field(default_factory=list)
    rejected: list[FileHandle] = Field(default_factory=list)
    notice: str | None = None


# === MERGE RESULT ===


class MergeResult(BaseModel):
    """Serialized output of a successful merge."""

    model_config = ConfigDict(frozen=True)

    output_bytes: bytes = Field(repr=False)
    output_name: str
    output_size_bytes: int = Field(ge=0)
    page_count: int = Field(ge=0)
    source_count: int = Field(ge=0)
    created_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))


# === MERGE OUTCOME (tagged union on "status") ===


class IdleOutcome(BaseModel):
    model_config = ConfigDict(frozen=True)

    status: Literal["idle"] = "idle"


class RunningOutcome(BaseModel):
    model_config = ConfigDict(frozen=True)

    status: Literal["running"] = "running"
    document_count: int = 0
    started_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))


class SuccessOutcome(BaseModel):
    model_config = ConfigDict(frozen=True)

    status: Literal["success"] = "success"
    result: MergeResult


class FailureOutcome(BaseModel):
    """Terminal failure. `message` is the user-facing text; `detail` is for logs."""

    model_config = ConfigDict(frozen=True)

    status: Literal["failure"] = "failure"
    reason: Literal["load_failure", "serialization_failure", "unexpected"]
    message: str = GENERIC_FAILURE_MESSAGE
    detail: str = ""
    failed_document_id: str | None = None
    failed_document_name: str | None = None


MergeOutcome = Annotated[
    Union[IdleOutcome, RunningOutcome, SuccessOutcome, FailureOutcome],
    Field(discriminator="status"),
]
