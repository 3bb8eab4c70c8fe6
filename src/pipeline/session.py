# src/pipeline/session.py - v1
"""Merge session: ordering store + merge pipeline + the single active outcome.

Transitions:
    Idle -> Running                 run_merge() starts
    Running -> Success | Failure    pipeline completes
    Success | Failure -> Idle       retry(), reset(), or add_files()

The store is frozen for the whole Running phase. Pipeline errors never
escape run_merge(); they become a FailureOutcome with a generic message,
and the specific cause goes to the log.
"""

from __future__ import annotations

import asyncio
import logging
import uuid
from collections.abc import Iterable

from pdffusion.codec.codec_factory import create_codec
from pdffusion.config.settings import Settings
from pdffusion.core.errors import (
    DocumentLoadError,
    MergeInProgressError,
    NotEnoughDocumentsError,
    SerializationError,
)
from pdffusion.core.models import (
    FailureOutcome,
    FileHandle,
    IdleOutcome,
    InputDocument,
    IntakeReport,
    MergeOutcome,
    RunningOutcome,
    SuccessOutcome,
)
from pdffusion.intake.filter import accept_pdf_handles
from pdffusion.logging.context import set_session_context
from pdffusion.pipeline.merge_pipeline import MergePipeline
from pdffusion.status.projection import StatusView, project_outcome
from pdffusion.store.ordering_store import SourceOrderingStore

logger = logging.getLogger(__name__)

MERGE_IN_PROGRESS_NOTICE = "A merge is in progress. Add files once it has finished."


class MergeSession:
    """One user session: an ordered file list and at most one merge at a time."""

    def __init__(
        self,
        pipeline: MergePipeline,
        store: SourceOrderingStore | None = None,
        settings: Settings | None = None,
        session_id: str | None = None,
    ) -> None:
        self._pipeline = pipeline
        self._store = store if store is not None else SourceOrderingStore()
        self._settings = settings or Settings()
        self._outcome: MergeOutcome = IdleOutcome()
        self.session_id = session_id or uuid.uuid4().hex

    @classmethod
    def from_settings(cls, settings: Settings | None = None) -> MergeSession:
        """Build a session with the codec selected by settings.codec_backend."""
        settings = settings or Settings()
        codec = create_codec(settings.codec_backend)
        return cls(MergePipeline(codec, settings), settings=settings)

    # --- State ---

    @property
    def store(self) -> SourceOrderingStore:
        return self._store

    @property
    def documents(self) -> tuple[InputDocument, ...]:
        return self._store.documents

    @property
    def outcome(self) -> MergeOutcome:
        return self._outcome

    @property
    def is_running(self) -> bool:
        return isinstance(self._outcome, RunningOutcome)

    @property
    def can_merge(self) -> bool:
        return not self.is_running and len(self._store) >= self._settings.min_documents

    def view(self) -> StatusView:
        return project_outcome(
            self._outcome, queued=len(self._store), min_documents=self._settings.min_documents,
        )

    def _set_outcome(self, outcome: MergeOutcome) -> None:
        logger.debug("Outcome %s -> %s", self._outcome.status, outcome.status)
        self._outcome = outcome

    # --- Intake ---

    def add_files(self, handles: Iterable[FileHandle]) -> IntakeReport:
        """Filter a batch and append the PDFs to the store.

        A completed or failed attempt is cleared back to Idle once new files
        arrive. While a merge runs the whole batch is refused.
        """
        if self.is_running:
            logger.warning("Refusing intake batch: merge in progress")
            return IntakeReport(notice=MERGE_IN_PROGRESS_NOTICE)

        report = accept_pdf_handles(handles, self._settings.accepted_media_types_list)
        if report.accepted:
            self._store.add(report.accepted)
            if isinstance(self._outcome, (SuccessOutcome, FailureOutcome)):
                self._set_outcome(IdleOutcome())
        return report

    # --- Ordering (delegated to the store, which rejects edits while frozen) ---

    def remove(self, document_id: str) -> bool:
        return self._store.remove(document_id)

    def move_up(self, index: int) -> bool:
        return self._store.move_up(index)

    def move_down(self, index: int) -> bool:
        return self._store.move_down(index)

    def reorder(self, from_index: int, to_index: int) -> bool:
        return self._store.reorder(from_index, to_index)

    def sort_by_name(self) -> bool:
        return self._store.sort_by_name()

    # --- Merge lifecycle ---

    async def run_merge(self) -> MergeOutcome:
        """Merge the current sequence and return the terminal outcome.

        Raises:
            MergeInProgressError: A merge is already running.
            NotEnoughDocumentsError: Fewer documents than settings.min_documents.
        """
        if self.is_running:
            raise MergeInProgressError("A merge is already running for this session")
        if len(self._store) < self._settings.min_documents:
            raise NotEnoughDocumentsError(len(self._store), self._settings.min_documents)

        set_session_context(self.session_id)
        snapshot = self._store.documents
        self._set_outcome(RunningOutcome(document_count=len(snapshot)))
        self._store.freeze()

        outcome: MergeOutcome
        try:
            result = await self._pipeline.merge(snapshot)
        except DocumentLoadError as exc:
            logger.warning("Merge failed, could not load input: %s", exc)
            outcome = FailureOutcome(
                reason="load_failure",
                detail=str(exc),
                failed_document_id=exc.document_id,
                failed_document_name=exc.document_name,
            )
        except SerializationError as exc:
            logger.warning("Merge failed, could not write output: %s", exc)
            outcome = FailureOutcome(reason="serialization_failure", detail=str(exc))
        except asyncio.CancelledError:
            logger.info("Merge cancelled")
            self._set_outcome(IdleOutcome())
            raise
        except Exception as exc:
            logger.exception("Unexpected error during merge")
            outcome = FailureOutcome(reason="unexpected", detail=str(exc))
        else:
            outcome = SuccessOutcome(result=result)
        finally:
            self._store.unfreeze()

        self._set_outcome(outcome)
        return outcome

    def retry(self) -> bool:
        """Failure -> Idle, keeping the ordered sequence for another attempt."""
        if not isinstance(self._outcome, FailureOutcome):
            return False
        self._set_outcome(IdleOutcome())
        return True

    def reset(self) -> bool:
        """Start over: clear the sequence and drop any result. Refused while running."""
        if self.is_running:
            logger.warning("Refusing reset: merge in progress")
            return False
        self._store.clear()
        self._set_outcome(IdleOutcome())
        return True
