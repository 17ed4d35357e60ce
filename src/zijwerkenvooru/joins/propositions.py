"""Propositions enriched with dossier data, authors and summaries."""
from __future__ import annotations

from dataclasses import replace
from typing import Dict, Iterable, List, Sequence

from ..core.types import MeetingKey, PartyMember, Proposition, PropositionKey, Vote
from ..sources.schema import PropositionRow
from .common import content_hash, resolve_party
from .lookups import Lookups


def proposition_summary_hash(title_nl: str) -> str:
    """Summaries of proposition titles are keyed on the title plus a trailing period."""

    return content_hash(f"{title_nl}.")


def build_proposition(row: PropositionRow, lookups: Lookups) -> Proposition:
    session_id = row.session_id or ""
    meeting_id = row.meeting_id or ""
    dossier = lookups.dossiers.get(row.dossier_id or "")
    authors: List[PartyMember] = []
    if dossier is not None:
        authors = [PartyMember(name=name, party=resolve_party(name, lookups.party_by_name)) for name in dossier.authors]
    summary = lookups.summaries.get(proposition_summary_hash(row.title_nl)) if row.title_nl is not None else None
    return Proposition(
        proposition_id=row.proposition_id or "",
        session_id=session_id,
        meeting_id=meeting_id,
        date=lookups.plenary_dates.get(MeetingKey(session_id, meeting_id)),
        title_nl=row.title_nl,
        title_fr=row.title_fr,
        title_summary_nl=summary,
        dossier_id=row.dossier_id or None,
        document_id=row.document_id or None,
        authors=authors,
        document_type=dossier.document_type if dossier else None,
        status=dossier.status if dossier else None,
        vote_date=dossier.vote_date if dossier else None,
    )


def build_propositions(rows: Iterable[PropositionRow], lookups: Lookups) -> List[Proposition]:
    return [build_proposition(row, lookups) for row in rows]


def proposition_index(propositions: Sequence[Proposition]) -> Dict[PropositionKey, int]:
    """Map ``(session_id, dossier_id)`` to the position of its proposition.

    When several propositions share a dossier within a session the last one
    wins, so every vote attaches to exactly one proposition.
    """

    index: Dict[PropositionKey, int] = {}
    for position, proposition in enumerate(propositions):
        if proposition.dossier_id:
            index[PropositionKey(proposition.session_id, proposition.dossier_id)] = position
    return index


def attach_votes(propositions: Sequence[Proposition], votes: Iterable[Vote]) -> List[Proposition]:
    """Return copies of ``propositions`` carrying the votes on their dossier."""

    index = proposition_index(propositions)
    attached: Dict[int, List[Vote]] = {}
    for vote in votes:
        if not vote.dossier_id:
            continue
        position = index.get(PropositionKey(vote.session_id, vote.dossier_id))
        if position is not None:
            attached.setdefault(position, []).append(vote)
    return [
        replace(proposition, votes=attached.get(position, []))
        for position, proposition in enumerate(propositions)
    ]


__all__ = [
    "attach_votes",
    "build_proposition",
    "build_propositions",
    "proposition_index",
    "proposition_summary_hash",
]
