# src/status/projection.py - v1
"""Map the active MergeOutcome to what a presentation layer should show.

Idle -> intake, Running -> indeterminate progress, Success -> download plus
"new session", Failure -> generic error plus "retry".
"""

from __future__ import annotations

from typing import Literal

from pydantic import BaseModel, Field

from pdffusion.core.models import (
    PDF_MEDIA_TYPE,
    FailureOutcome,
    IdleOutcome,
    MergeOutcome,
    RunningOutcome,
    SuccessOutcome,
)
from pdffusion.status.formatting import format_file_size

Action = Literal["add", "merge", "download", "new_session", "retry"]

MERGING_MESSAGE = "Merging your documents..."
NEED_MORE_FILES_MESSAGE = "Add at least one more file to start merging."
NO_FILES_MESSAGE = "No file selected."


class DownloadDescriptor(BaseModel):
    """Everything needed to offer the merged PDF for download."""

    file_name: str
    size_bytes: int
    size_label: str
    content_type: str = PDF_MEDIA_TYPE
    data: bytes = Field(repr=False)


class StatusView(BaseModel):
    """Presentation-ready projection of the session state."""

    view: Literal["intake", "progress", "download", "error"]
    message: str = ""
    progress_indeterminate: bool = False
    download: DownloadDescriptor | None = None
    actions: list[Action] = Field(default_factory=list)


def _queued_message(queued: int, min_documents: int) -> str:
    if queued == 0:
        return NO_FILES_MESSAGE
    if queued < min_documents:
        return NEED_MORE_FILES_MESSAGE
    return f"{queued} files ready to merge."


def project_outcome(
    outcome: MergeOutcome,
    queued: int = 0,
    min_documents: int = 2,
) -> StatusView:
    """Project an outcome to a StatusView.

    Args:
        outcome: The session's active outcome.
        queued: Number of documents currently in the ordering store.
        min_documents: Merge gate; "merge" is offered only at or above it.
    """
    if isinstance(outcome, RunningOutcome):
        return StatusView(
            view="progress", message=MERGING_MESSAGE, progress_indeterminate=True,
        )

    if isinstance(outcome, SuccessOutcome):
        result = outcome.result
        size_label = format_file_size(result.output_size_bytes)
        return StatusView(
            view="download",
            message=f"{result.output_name} is ready ({size_label}).",
            download=DownloadDescriptor(
                file_name=result.output_name,
                size_bytes=result.output_size_bytes,
                size_label=size_label,
                data=result.output_bytes,
            ),
            actions=["download", "new_session"],
        )

    if isinstance(outcome, FailureOutcome):
        return StatusView(view="error", message=outcome.message, actions=["retry"])

    if isinstance(outcome, IdleOutcome):
        actions: list[Action] = ["add"]
        if queued >= min_documents:
            actions.append("merge")
        return StatusView(
            view="intake", message=_queued_message(queued, min_documents), actions=actions,
        )

    raise TypeError(f"Unknown merge outcome: {outcome!r}")
