"""Party majorities and the per-member conformity score."""
from __future__ import annotations

from typing import Dict, Mapping, Sequence
import math

from ..core.types import MemberVote, VoteChoice

CHOICES: Sequence[VoteChoice] = ("yes", "no", "abstain")


def majority_choice(counts: Mapping[str, int]) -> VoteChoice:
    """Strict plurality among yes/no/abstain; any tie resolves to abstain."""

    yes = counts.get("yes", 0)
    no = counts.get("no", 0)
    abstain = counts.get("abstain", 0)
    if yes > no and yes > abstain:
        return "yes"
    if no > yes and no > abstain:
        return "no"
    return "abstain"


def party_majorities(choices: Mapping[str, VoteChoice], party_of: Mapping[str, str]) -> Dict[str, VoteChoice]:
    """Majority choice per party on one vote.

    ``choices`` maps member key to the member's choice, ``party_of`` maps
    member key to party. Members without a party are not counted.
    """

    tallies: Dict[str, Dict[str, int]] = {}
    for member_key, choice in choices.items():
        party = party_of.get(member_key)
        if not party:
            continue
        tally = tallies.setdefault(party, {"yes": 0, "no": 0, "abstain": 0})
        tally[choice] += 1
    return {party: majority_choice(tally) for party, tally in tallies.items()}


def outlier_score(votes: Sequence[MemberVote]) -> float:
    """Conformity percentage with one decimal: 100 minus the share of outlier votes.

    A member without votes scores 100.
    """

    if not votes:
        return 100.0
    outliers = sum(1 for vote in votes if vote.outlier)
    # Half-up rounding to one decimal.
    return 100 - math.floor((outliers / len(votes)) * 1000 + 0.5) / 10


__all__ = ["CHOICES", "majority_choice", "outlier_score", "party_majorities"]
