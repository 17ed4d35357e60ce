"""Parties with their members, propositions and questions."""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, Iterable, List, Mapping, Sequence, Set

from ..core.types import UNKNOWN_PARTY, Member, Party, PartyProfile, Proposition, Question, QuestionMention
from .common import party_color
from .questions import mentions


@dataclass
class _Draft:
    name: str
    seats: int = 0
    members: List[PartyProfile] = field(default_factory=list)
    propositions: List[Proposition] = field(default_factory=list)
    proposition_ids: Set[str] = field(default_factory=set)
    questions: List[QuestionMention] = field(default_factory=list)


def _profile(member: Member) -> PartyProfile:
    return PartyProfile(
        first_name=member.first_name,
        last_name=member.last_name,
        active=member.active,
        date_of_birth=member.date_of_birth,
        place_of_birth=member.place_of_birth,
        language=member.language,
        constituency=member.constituency,
    )


def build_parties(
    members: Sequence[Member],
    questions: Iterable[Question],
    propositions: Iterable[Proposition],
    colors: Mapping[str, Any],
) -> List[Party]:
    """Group members, questions and propositions per party.

    A member is listed under every party they were observed in. A question is
    listed once per questioner, under that questioner's party, carrying the
    questioner's own topic. A proposition is listed under every party one of
    its authors belongs to, so multi-party propositions appear more than once.
    Names that resolve to no known party are not grouped.
    """

    drafts: Dict[str, _Draft] = {}
    for member in members:
        for party in member.parties:
            draft = drafts.setdefault(party, _Draft(name=party))
            draft.members.append(_profile(member))
            if member.active:
                draft.seats += 1

    for question in questions:
        for position, (_, mention) in enumerate(mentions(question)):
            if mention.as_respondent:
                break
            draft = drafts.get(question.questioners[position].party)
            if draft is not None:
                draft.questions.append(mention)

    for proposition in propositions:
        for author in proposition.authors:
            if author.party == UNKNOWN_PARTY:
                continue
            draft = drafts.get(author.party)
            if draft is None or proposition.proposition_id in draft.proposition_ids:
                continue
            draft.proposition_ids.add(proposition.proposition_id)
            draft.propositions.append(proposition)

    return [
        Party(
            name=draft.name,
            color=party_color(colors, draft.name),
            seats=draft.seats,
            members=draft.members,
            propositions=draft.propositions,
            questions=draft.questions,
        )
        for draft in drafts.values()
    ]


__all__ = ["build_parties"]
