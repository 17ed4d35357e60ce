"""Pinned column layouts of the scraped dataset tables.

Column order matches the Parquet files written by the scrapers. Rows are
positional, so every table gets a row type whose field order is the column
order.
"""

from __future__ import annotations

from typing import Dict, Iterable, List, NamedTuple, Optional, Sequence, Tuple, Type, TypeVar

from .errors import SchemaError, UnknownTableError


class MemberRow(NamedTuple):
    member_id: Optional[str]
    session_id: Optional[str]
    first_name: Optional[str]
    last_name: Optional[str]
    gender: Optional[str]
    date_of_birth: Optional[str]
    place_of_birth: Optional[str]
    language: Optional[str]
    constituency: Optional[str]
    party: Optional[str]
    fraction: Optional[str]
    email: Optional[str]
    active: Optional[str]
    start: Optional[str]


class MeetingRow(NamedTuple):
    session_id: Optional[str]
    meeting_id: Optional[str]
    date: Optional[str]
    time_of_day: Optional[str]
    start_time: Optional[str]
    end_time: Optional[str]


class CommissionRow(NamedTuple):
    session_id: Optional[str]
    commission_id: Optional[str]
    date: Optional[str]
    time_of_day: Optional[str]
    start_time: Optional[str]
    end_time: Optional[str]
    commission: Optional[str]
    chair: Optional[str]


class VoteRow(NamedTuple):
    vote_id: Optional[str]
    session_id: Optional[str]
    meeting_id: Optional[str]
    date: Optional[str]
    title_nl: Optional[str]
    title_fr: Optional[str]
    yes: Optional[str]
    no: Optional[str]
    abstain: Optional[str]
    members_yes: Optional[str]
    members_no: Optional[str]
    members_abstain: Optional[str]
    dossier_id: Optional[str]
    document_id: Optional[str]
    motion_id: Optional[str]


class QuestionRow(NamedTuple):
    question_id: Optional[str]
    session_id: Optional[str]
    meeting_id: Optional[str]
    questioners: Optional[str]
    respondents: Optional[str]
    topics_nl: Optional[str]
    topics_fr: Optional[str]
    discussion: Optional[str]
    dossier_ids: Optional[str]


class PropositionRow(NamedTuple):
    proposition_id: Optional[str]
    session_id: Optional[str]
    meeting_id: Optional[str]
    title_nl: Optional[str]
    title_fr: Optional[str]
    dossier_id: Optional[str]
    document_id: Optional[str]


class DossierRow(NamedTuple):
    session_id: Optional[str]
    dossier_id: Optional[str]
    title: Optional[str]
    authors: Optional[str]
    submission_date: Optional[str]
    end_date: Optional[str]
    vote_date: Optional[str]
    document_type: Optional[str]
    status: Optional[str]


class SubdocumentRow(NamedTuple):
    dossier_id: Optional[str]
    subdocument_id: Optional[str]
    date: Optional[str]
    type: Optional[str]
    authors: Optional[str]


class RemunerationRow(NamedTuple):
    first_name: Optional[str]
    last_name: Optional[str]
    year: Optional[str]
    mandate: Optional[str]
    institute: Optional[str]
    remuneration_min: Optional[str]
    remuneration_max: Optional[str]


class SummaryRow(NamedTuple):
    input_hash: Optional[str]
    original: Optional[str]
    summary: Optional[str]
    model: Optional[str]


class LobbyRow(NamedTuple):
    name: Optional[str]
    contacts: Optional[str]
    interests: Optional[str]
    url: Optional[str]


ROW_TYPES: Dict[str, Type[tuple]] = {
    "members": MemberRow,
    "meetings": MeetingRow,
    "commissions": CommissionRow,
    "votes": VoteRow,
    "questions": QuestionRow,
    "commission_questions": QuestionRow,
    "propositions": PropositionRow,
    "dossiers": DossierRow,
    "subdocuments": SubdocumentRow,
    "remunerations": RemunerationRow,
    "summaries": SummaryRow,
    "lobby": LobbyRow,
}

TABLE_NAMES: Tuple[str, ...] = tuple(ROW_TYPES)

R = TypeVar("R", bound=tuple)


def table_columns(name: str) -> Tuple[str, ...]:
    """Return the pinned column names of table ``name``."""

    try:
        return ROW_TYPES[name]._fields  # type: ignore[attr-defined]
    except KeyError:
        raise UnknownTableError(f"Unknown table {name!r}") from None


def typed_rows(name: str, rows: Iterable[Sequence[object]]) -> List[tuple]:
    """Convert positional rows of table ``name`` into its row type.

    Values are passed through unchanged except that non-string scalars are
    turned into strings, because every scraped column is textual.
    """

    row_type = ROW_TYPES.get(name)
    if row_type is None:
        raise UnknownTableError(f"Unknown table {name!r}")
    width = len(row_type._fields)  # type: ignore[attr-defined]
    converted: List[tuple] = []
    for index, row in enumerate(rows):
        if len(row) != width:
            raise SchemaError(f"Row {index} of table {name!r} has {len(row)} columns, expected {width}")
        converted.append(row_type._make(_as_text(value) for value in row))  # type: ignore[attr-defined]
    return converted


def _as_text(value: object) -> Optional[str]:
    if value is None or isinstance(value, str):
        return value
    return str(value)


__all__ = [
    "CommissionRow",
    "DossierRow",
    "LobbyRow",
    "MeetingRow",
    "MemberRow",
    "PropositionRow",
    "QuestionRow",
    "ROW_TYPES",
    "RemunerationRow",
    "SubdocumentRow",
    "SummaryRow",
    "TABLE_NAMES",
    "VoteRow",
    "table_columns",
    "typed_rows",
]
