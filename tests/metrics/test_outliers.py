from __future__ import annotations

import pytest

from zijwerkenvooru.core.types import MemberVote
from zijwerkenvooru.metrics import majority_choice, outlier_score, party_majorities


def _vote(vote_id: str, outlier: bool) -> MemberVote:
    return MemberVote(vote_id, "55", "1", "2024-01-10", None, None, "yes", outlier)


@pytest.mark.parametrize(
    ("counts", "expected"),
    [
        ({"yes": 3, "no": 1, "abstain": 0}, "yes"),
        ({"yes": 0, "no": 2, "abstain": 1}, "no"),
        ({"yes": 0, "no": 0, "abstain": 4}, "abstain"),
        ({"yes": 1, "no": 1, "abstain": 1}, "abstain"),
        ({"yes": 2, "no": 2, "abstain": 0}, "abstain"),
        ({}, "abstain"),
    ],
)
def test_majority_choice(counts, expected):
    assert majority_choice(counts) == expected


def test_three_way_tie_makes_only_the_abstainer_conform():
    choices = {"a": "yes", "b": "no", "c": "abstain"}
    majorities = party_majorities(choices, {"a": "Green", "b": "Green", "c": "Green"})

    assert majorities == {"Green": "abstain"}
    assert [key for key, choice in choices.items() if choice != majorities["Green"]] == ["a", "b"]


def test_members_without_party_are_not_counted():
    majorities = party_majorities({"a": "yes", "b": "no", "c": "no"}, {"a": "Green", "b": "Green"})

    assert majorities == {"Green": "abstain"}


def test_outlier_score_without_votes_is_perfect():
    assert outlier_score([]) == 100.0


@pytest.mark.parametrize(
    ("outliers", "total", "expected"),
    [(0, 4, 100.0), (1, 4, 75.0), (1, 3, 66.7), (2, 3, 33.3), (1, 8, 87.5), (1, 4000, 100.0), (1, 1000, 99.9)],
)
def test_outlier_score_rounds_half_up(outliers, total, expected):
    votes = [_vote(str(i), i < outliers) for i in range(total)]

    assert outlier_score(votes) == pytest.approx(expected)
