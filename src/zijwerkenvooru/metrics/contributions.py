"""Most active members per topic."""
from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, List, Literal, Optional, Sequence

from ..core.types import Contributor, Member
from ..topics import TopicMatcher

DEFAULT_LIMIT = 5


@dataclass
class _Tally:
    party: str
    questions: int = 0
    propositions: int = 0

    @property
    def total(self) -> int:
        return self.questions + self.propositions


def top_contributors(
    members: Sequence[Member],
    matcher: TopicMatcher,
    *,
    limit: int = DEFAULT_LIMIT,
) -> Dict[str, List[Contributor]]:
    """Rank members per topic and subtopic by matching questions plus propositions.

    Counts are registered under the exact (sub)topic a keyword belongs to.
    Only plenary questions are counted, using the member's own topic for the
    question; propositions are matched on their Dutch title.
    """

    counts: Dict[str, Dict[str, _Tally]] = {}

    def register(text: Optional[str], member: Member, kind: Literal["questions", "propositions"]) -> None:
        for key in matcher.contribution_keys(text):
            tally = counts.setdefault(key, {}).setdefault(member.full_name, _Tally(party=member.party))
            setattr(tally, kind, getattr(tally, kind) + 1)

    for member in members:
        for question in member.questions:
            register(question.topic_nl, member, "questions")
        for proposition in member.propositions:
            register(proposition.title_nl, member, "propositions")

    ranking: Dict[str, List[Contributor]] = {}
    for key, tallies in counts.items():
        ordered = sorted(tallies.items(), key=lambda item: item[1].total, reverse=True)[:limit]
        ranking[key] = [
            Contributor(
                name=name,
                party=tally.party,
                total=tally.total,
                questions=tally.questions,
                propositions=tally.propositions,
            )
            for name, tally in ordered
        ]
    return ranking


__all__ = ["DEFAULT_LIMIT", "top_contributors"]
