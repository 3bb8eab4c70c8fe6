# src/logging/context.py - v1
"""Contextual logging support: attach session_id, merge_id, document to log records."""

from __future__ import annotations

import contextvars
from dataclasses import dataclass
from typing import Any

# Context variables for structured logging, set per session and per merge.
_session_id: contextvars.ContextVar[str | None] = contextvars.ContextVar(
    "session_id", default=None
)
_merge_id: contextvars.ContextVar[str | None] = contextvars.ContextVar(
    "merge_id", default=None
)
_document: contextvars.ContextVar[str | None] = contextvars.ContextVar(
    "document", default=None
)


@dataclass
class LogContext:
    """Immutable snapshot of current logging context."""

    session_id: str | None = None
    merge_id: str | None = None
    document: str | None = None

    def as_dict(self) -> dict[str, Any]:
        """Return non-None fields as dict for JSON log injection."""
        return {k: v for k, v in self.__dict__.items() if v is not None}


def get_context() -> LogContext:
    """Snapshot current context variables."""
    return LogContext(
        session_id=_session_id.get(),
        merge_id=_merge_id.get(),
        document=_document.get(),
    )


def set_session_context(session_id: str) -> None:
    _session_id.set(session_id)


def set_merge_context(merge_id: str | None) -> None:
    """Set merge-level context (called once per merge attempt)."""
    _merge_id.set(merge_id)


def set_document_context(document: str | None) -> None:
    """Set the document currently being read or loaded."""
    _document.set(document)


def clear_context() -> None:
    """Reset all context variables."""
    _session_id.set(None)
    _merge_id.set(None)
    _document.set(None)
