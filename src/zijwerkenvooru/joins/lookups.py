"""Single purpose maps built from raw rows before any join runs."""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, Iterable, Optional, Sequence

from ..core.names import full_name, normalize_name, split_names
from ..core.types import DossierSummary, MeetingKey
from ..sources.schema import CommissionRow, DossierRow, MeetingRow, MemberRow, SummaryRow
from .common import BAD_SESSION_ID, convert_date


def date_by_meeting_key(rows: Iterable[MeetingRow | CommissionRow]) -> Dict[MeetingKey, Optional[str]]:
    """Map ``(session_id, meeting_id)`` to the meeting date.

    Plenary and commission tables are separate id spaces; build one map per
    table. Commission rows use ``commission_id`` as their meeting id.
    """

    dates: Dict[MeetingKey, Optional[str]] = {}
    for row in rows:
        session_id = row.session_id or ""
        if isinstance(row, CommissionRow):
            if session_id == BAD_SESSION_ID:
                continue
            meeting_id = row.commission_id or ""
        else:
            meeting_id = row.meeting_id or ""
        dates[MeetingKey(session_id, meeting_id)] = row.date or None
    return dates


def party_by_name(rows: Iterable[MemberRow]) -> Dict[str, str]:
    """Map normalised full name to party, later rows overwriting earlier ones."""

    parties: Dict[str, str] = {}
    for row in rows:
        key = normalize_name(full_name(row.first_name, row.last_name))
        if key and row.party:
            parties[key] = row.party
    return parties


def dossier_by_id(rows: Iterable[DossierRow]) -> Dict[str, DossierSummary]:
    dossiers: Dict[str, DossierSummary] = {}
    for row in rows:
        if not row.dossier_id:
            continue
        dossiers[row.dossier_id] = DossierSummary(
            title=row.title,
            authors=split_names(row.authors),
            document_type=row.document_type or None,
            status=row.status or None,
            vote_date=convert_date(row.vote_date),
        )
    return dossiers


def summary_by_content_hash(rows: Iterable[SummaryRow]) -> Dict[str, str]:
    return {row.input_hash: row.summary for row in rows if row.input_hash and row.summary}


@dataclass(slots=True, frozen=True)
class Lookups:
    """Every lookup a generation run needs, built once and passed to the joiners."""

    party_by_name: Dict[str, str] = field(default_factory=dict)
    plenary_dates: Dict[MeetingKey, Optional[str]] = field(default_factory=dict)
    commission_dates: Dict[MeetingKey, Optional[str]] = field(default_factory=dict)
    dossiers: Dict[str, DossierSummary] = field(default_factory=dict)
    summaries: Dict[str, str] = field(default_factory=dict)


def build_lookups(
    *,
    members: Sequence[MemberRow] = (),
    meetings: Sequence[MeetingRow] = (),
    commissions: Sequence[CommissionRow] = (),
    dossiers: Sequence[DossierRow] = (),
    summaries: Sequence[SummaryRow] = (),
) -> Lookups:
    return Lookups(
        party_by_name=party_by_name(members),
        plenary_dates=date_by_meeting_key(meetings),
        commission_dates=date_by_meeting_key(commissions),
        dossiers=dossier_by_id(dossiers),
        summaries=summary_by_content_hash(summaries),
    )


__all__ = [
    "Lookups",
    "build_lookups",
    "date_by_meeting_key",
    "dossier_by_id",
    "party_by_name",
    "summary_by_content_hash",
]
