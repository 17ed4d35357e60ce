"""Copy the scraped dataset into the database and fill in missing summaries."""
from __future__ import annotations

from dataclasses import dataclass
from threading import Event
from typing import Callable, Literal, Optional, Sequence
import logging

from ..database import Storage
from ..sources import TABLE_NAMES, MissingTableError, RowSource, typed_rows
from ..summarization import Summarizer, generate_missing_summaries

LOGGER = logging.getLogger(__name__)

PipelineEventKind = Literal[
    "start",
    "table",
    "stored",
    "summaries",
    "progress",
    "finished",
    "cancelled",
    "error",
]


@dataclass(slots=True)
class PipelineEvent:
    """Progress notification emitted by :class:`ImportPipeline`."""

    kind: PipelineEventKind
    processed: int
    table: str | None = None
    message: str | None = None
    row_count: int | None = None
    summary_count: int | None = None


ProgressCallback = Callable[[PipelineEvent], None]


class ImportPipeline:
    """Import every dataset table from a row source into :class:`Storage`."""

    def __init__(
        self,
        *,
        source: RowSource,
        storage: Storage,
        summarizer: Optional[Summarizer] = None,
        summary_model: Optional[str] = None,
    ) -> None:
        self._source = source
        self._storage = storage
        self._summarizer = summarizer
        self._summary_model = summary_model

    def run(
        self,
        *,
        tables: Optional[Sequence[str]] = None,
        summary_limit: Optional[int] = None,
        progress_callback: Optional[ProgressCallback] = None,
        cancel_event: Optional[Event] = None,
    ) -> int:
        """Import ``tables`` (all known tables by default); return how many were stored."""

        processed = 0
        cancelled = False
        had_error = False
        current: str | None = None
        self._storage.ensure_schema()
        self._notify(progress_callback, PipelineEvent(kind="start", processed=0, message="Import started"))
        try:
            for name in tables or TABLE_NAMES:
                if cancel_event and cancel_event.is_set():
                    cancelled = True
                    break
                current = name
                self._notify(
                    progress_callback,
                    PipelineEvent(kind="table", processed=processed, table=name, message=f"Reading table {name}"),
                )
                try:
                    rows = typed_rows(name, self._source.read_table(name))
                except MissingTableError:
                    LOGGER.warning("Table %s missing from source, skipping", name)
                    continue
                if name == "summaries":
                    # Summaries generated by earlier imports are kept.
                    count = self._storage.merge_summaries(rows)
                else:
                    count = self._storage.replace_rows(name, rows)
                LOGGER.info("Stored %s rows in %s", count, name)
                self._notify(
                    progress_callback,
                    PipelineEvent(
                        kind="stored",
                        processed=processed,
                        table=name,
                        message=f"Stored {count} rows",
                        row_count=count,
                    ),
                )
                processed += 1
                self._notify(
                    progress_callback,
                    PipelineEvent(kind="progress", processed=processed, table=name, message=f"Imported {name}"),
                )
            if not cancelled and self._summarizer is not None:
                summary_count = generate_missing_summaries(
                    self._source,
                    self._storage,
                    self._summarizer,
                    model=self._summary_model,
                    limit=summary_limit,
                    cancel_event=cancel_event,
                )
                if summary_count:
                    self._notify(
                        progress_callback,
                        PipelineEvent(
                            kind="summaries",
                            processed=processed,
                            message=f"Generated {summary_count} summaries",
                            summary_count=summary_count,
                        ),
                    )
            if cancel_event and cancel_event.is_set():
                cancelled = True
        except Exception as exc:
            had_error = True
            LOGGER.exception("Import pipeline failed: %s", exc)
            self._notify(
                progress_callback,
                PipelineEvent(kind="error", processed=processed, table=current, message=str(exc)),
            )
            raise
        finally:
            if cancelled:
                self._notify(
                    progress_callback,
                    PipelineEvent(kind="cancelled", processed=processed, table=current, message="Import cancelled"),
                )
            elif not had_error:
                self._notify(
                    progress_callback,
                    PipelineEvent(kind="finished", processed=processed, table=current, message="Import finished"),
                )
        return processed

    @staticmethod
    def _notify(callback: Optional[ProgressCallback], event: PipelineEvent) -> None:
        if callback:
            callback(event)


__all__ = ["ImportPipeline", "PipelineEvent", "ProgressCallback"]
