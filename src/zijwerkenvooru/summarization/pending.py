"""Discover which texts still need a summary and generate them."""
from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, Iterable, List, Optional, Protocol
import logging
import threading

from ..core.values import content_hash
from ..database import Storage
from ..joins.common import BAD_SESSION_ID
from ..sources import MissingTableError, RowSource, read_tables
from ..sources.schema import PropositionRow, QuestionRow
from .gemini import SummaryKind

LOGGER = logging.getLogger(__name__)


class Summarizer(Protocol):
    def summarize(self, text: str, kind: SummaryKind = "topics") -> str:
        ...


@dataclass(slots=True, frozen=True)
class SummaryInput:
    """A text as it will be hashed when the site is built."""

    kind: SummaryKind
    text: str
    input_hash: str


def summary_inputs(
    question_rows: Iterable[QuestionRow],
    commission_question_rows: Iterable[QuestionRow],
    proposition_rows: Iterable[PropositionRow],
) -> List[SummaryInput]:
    """Texts the site looks summaries up for, deduplicated by hash.

    Question topics are only summarised when they list several topics. A
    proposition title is hashed with a trailing period, matching the lookup
    done when propositions are joined.
    """

    found: Dict[str, SummaryInput] = {}

    def add(kind: SummaryKind, text: str) -> None:
        digest = content_hash(text)
        found.setdefault(digest, SummaryInput(kind=kind, text=text, input_hash=digest))

    for row in question_rows:
        if row.topics_nl and ";" in row.topics_nl:
            add("topics", row.topics_nl)
    for row in commission_question_rows:
        if row.session_id == BAD_SESSION_ID:
            continue
        if row.topics_nl and ";" in row.topics_nl:
            add("topics", row.topics_nl)
    for row in proposition_rows:
        if row.title_nl:
            add("title", f"{row.title_nl}.")
    return list(found.values())


def _optional_tables(source: RowSource, names: List[str]) -> Dict[str, List[tuple]]:
    tables: Dict[str, List[tuple]] = {}
    for name in names:
        try:
            tables.update(read_tables(source, [name]))
        except MissingTableError:
            LOGGER.info("Table %s not available, no summaries needed for it", name)
            tables[name] = []
    return tables


def generate_missing_summaries(
    source: RowSource,
    storage: Storage,
    summarizer: Summarizer,
    *,
    model: Optional[str] = None,
    limit: Optional[int] = None,
    cancel_event: Optional[threading.Event] = None,
) -> int:
    """Summarise every input without a stored summary; return how many were stored.

    Each summary is stored as soon as it is generated, so a failing request
    keeps everything summarised before it.
    """

    tables = _optional_tables(source, ["questions", "commission_questions", "propositions"])
    known = storage.summary_hashes()
    pending = [
        item
        for item in summary_inputs(tables["questions"], tables["commission_questions"], tables["propositions"])
        if item.input_hash not in known
    ]
    if limit is not None:
        pending = pending[: max(0, limit)]
    LOGGER.info("%d texts need a summary", len(pending))

    stored = 0
    for item in pending:
        if cancel_event is not None and cancel_event.is_set():
            LOGGER.info("Summary generation cancelled after %d summaries", stored)
            break
        summary = summarizer.summarize(item.text, item.kind)
        storage.add_summary(item.input_hash, original=item.text, summary=summary, model=model)
        stored += 1
    return stored


__all__ = ["SummaryInput", "Summarizer", "generate_missing_summaries", "summary_inputs"]
