from __future__ import annotations

import math

import pytest

from zijwerkenvooru.core.types import Member, MemberVote
from zijwerkenvooru.metrics import PairwiseCosine, cosine_similarity, similarity_graph, vote_vectors


def _member(member_id: str, party: str, votes, active: bool = True) -> Member:
    return Member(
        key=member_id,
        member_id=member_id,
        first_name=member_id.upper(),
        last_name="Test",
        gender=None,
        date_of_birth=None,
        place_of_birth=None,
        language=None,
        constituency=None,
        email=None,
        active=active,
        start_date=None,
        age=None,
        sessions=["55"],
        parties=[party],
        fractions=[],
        remunerations={},
        propositions=[],
        subdocuments=[],
        questions=[],
        commission_questions=[],
        votes=[MemberVote(vote_id, "55", "1", None, None, None, choice, False) for vote_id, choice in votes],
    )


def test_cosine_similarity_basics():
    assert cosine_similarity([1, -1, 0], [1, -1, 0]) == pytest.approx(1.0)
    assert cosine_similarity([1, -1], [-1, 1]) == pytest.approx(-1.0)
    assert cosine_similarity([1, 0], [0, 1]) == 0.0
    assert cosine_similarity([0, 0], [1, 1]) == 0.0


def test_cosine_similarity_is_symmetric_and_skips_missing_positions():
    a = [1, None, -1, 1]
    b = [1, 1, None, -1]

    assert cosine_similarity(a, b) == cosine_similarity(b, a)
    assert cosine_similarity(a, b) == pytest.approx(0.0)
    assert cosine_similarity([1, None], [1, -1]) == pytest.approx(1.0)


def test_vote_vectors_cover_every_vote_cast():
    members = [_member("a", "Green", [("1", "yes"), ("2", "no")]), _member("b", "Blue", [("3", "abstain")])]

    assert vote_vectors(members) == [[1, -1, None], [None, None, 0]]


def test_graph_links_members_above_threshold():
    members = [
        _member("a", "Green", [("1", "yes"), ("2", "no"), ("3", "yes")]),
        _member("b", "Green", [("1", "yes"), ("2", "no"), ("3", "yes")]),
        _member("c", "Blue", [("1", "no"), ("2", "yes"), ("3", "yes")]),
        _member("d", "Blue", [("1", "yes")], active=False),
    ]

    graph = similarity_graph(members, {"green": {"primary": "#0a0"}}, threshold=0.9)

    assert [node.id for node in graph.nodes] == ["a", "b", "c"]
    assert [node.color for node in graph.nodes] == ["#0a0", "#0a0", "gray"]
    assert [(link.source, link.target) for link in graph.links] == [("a", "b")]
    assert graph.links[0].weight == pytest.approx(1.0)


def test_threshold_is_exclusive():
    vectors = [[1, 1], [1, 0]]
    similarity = cosine_similarity(*vectors)

    assert similarity == pytest.approx(1 / math.sqrt(2))
    assert PairwiseCosine().similar_pairs(vectors, similarity) == []
    assert len(PairwiseCosine().similar_pairs(vectors, similarity - 0.01)) == 1


def test_custom_strategy_is_used():
    class Everything:
        def similar_pairs(self, vectors, threshold):
            return [(0, 1, 0.5)]

    members = [_member("a", "Green", []), _member("b", "Blue", [])]

    graph = similarity_graph(members, {}, strategy=Everything())

    assert [(link.source, link.target, link.weight) for link in graph.links] == [("a", "b", 0.5)]
