"""Plenary votes with their member lists resolved to parties."""
from __future__ import annotations

from typing import Dict, Iterable, List, Mapping, Optional, Tuple

from ..core.types import UNKNOWN_PARTY, MeetingKey, PartyMember, PropositionKey, Vote
from ..sources.schema import VoteRow
from .common import parse_count, with_parties
from .lookups import Lookups


def _votes_by_party(
    yes: List[PartyMember], no: List[PartyMember], abstain: List[PartyMember]
) -> Tuple[Dict[str, Dict[str, int]], Dict[str, Dict[str, List[PartyMember]]]]:
    """Per party, the number of members and the members themselves for each choice."""

    counts: Dict[str, Dict[str, int]] = {}
    grouped: Dict[str, Dict[str, List[PartyMember]]] = {}
    for choice, members in (("yes", yes), ("no", no), ("abstain", abstain)):
        for member in members:
            party = member.party or UNKNOWN_PARTY
            counts.setdefault(party, {"yes": 0, "no": 0, "abstain": 0})[choice] += 1
            grouped.setdefault(party, {"yes": [], "no": [], "abstain": []})[choice].append(member)
    return counts, grouped


def build_vote(
    row: VoteRow,
    lookups: Lookups,
    proposition_ids: Optional[Mapping[PropositionKey, str]] = None,
) -> Vote:
    session_id = row.session_id or ""
    meeting_id = row.meeting_id or ""
    yes = with_parties(row.members_yes, lookups.party_by_name)
    no = with_parties(row.members_no, lookups.party_by_name)
    abstain = with_parties(row.members_abstain, lookups.party_by_name)
    votes_by_party, grouped_votes_by_party = _votes_by_party(yes, no, abstain)
    proposition_id = None
    if proposition_ids is not None and row.dossier_id:
        proposition_id = proposition_ids.get(PropositionKey(session_id, row.dossier_id))
    return Vote(
        vote_id=row.vote_id or "",
        session_id=session_id,
        meeting_id=meeting_id,
        date=lookups.plenary_dates.get(MeetingKey(session_id, meeting_id)) or row.date or None,
        title_nl=row.title_nl,
        title_fr=row.title_fr,
        yes_count=parse_count(row.yes),
        no_count=parse_count(row.no),
        abstain_count=parse_count(row.abstain),
        yes_members=yes,
        no_members=no,
        abstain_members=abstain,
        votes_by_party=votes_by_party,
        grouped_votes_by_party=grouped_votes_by_party,
        dossier_id=row.dossier_id or None,
        document_id=row.document_id or None,
        proposition_id=proposition_id,
    )


def build_votes(
    rows: Iterable[VoteRow],
    lookups: Lookups,
    proposition_ids: Optional[Mapping[PropositionKey, str]] = None,
) -> List[Vote]:
    return [build_vote(row, lookups, proposition_ids) for row in rows]


__all__ = ["build_vote", "build_votes"]
