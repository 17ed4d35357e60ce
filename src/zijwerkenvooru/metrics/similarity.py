"""Voting similarity between active members.

The graph is computed by comparing every pair of members, which is
``O(members**2 * votes)``. That is fine for a chamber of a few hundred
members; larger inputs need another :class:`SimilarityStrategy`.
"""

from __future__ import annotations

from typing import Any, Dict, List, Mapping, Optional, Protocol, Sequence, Tuple
import math

from ..core.types import GraphEdge, GraphNode, Member, SimilarityGraph, VoteKey
from ..core.values import party_color

VOTE_VALUES: Mapping[str, int] = {"yes": 1, "no": -1, "abstain": 0}
DEFAULT_THRESHOLD = 0.9

Vector = Sequence[Optional[int]]


def cosine_similarity(a: Vector, b: Vector) -> float:
    """Cosine similarity over the positions both vectors have a value for.

    Positions where either side is ``None`` are left out of the dot product
    and of both magnitudes. Without any shared non-zero value the result is 0.
    """

    dot = mag_a = mag_b = 0
    for left, right in zip(a, b):
        if left is None or right is None:
            continue
        dot += left * right
        mag_a += left * left
        mag_b += right * right
    denominator = math.sqrt(mag_a) * math.sqrt(mag_b)
    if not denominator:
        return 0.0
    return dot / denominator


def vote_vectors(members: Sequence[Member]) -> List[List[Optional[int]]]:
    """One vector per member over every vote any of them cast."""

    universe: Dict[VoteKey, int] = {}
    for member in members:
        for vote in member.votes:
            universe.setdefault(vote.key, len(universe))
    vectors: List[List[Optional[int]]] = []
    for member in members:
        vector: List[Optional[int]] = [None] * len(universe)
        for vote in member.votes:
            vector[universe[vote.key]] = VOTE_VALUES[vote.vote]
        vectors.append(vector)
    return vectors


class SimilarityStrategy(Protocol):
    def similar_pairs(self, vectors: Sequence[Vector], threshold: float) -> List[Tuple[int, int, float]]:
        """Return ``(i, j, similarity)`` for every pair ``i < j`` above ``threshold``."""


class PairwiseCosine:
    """Exact all-pairs comparison."""

    def similar_pairs(self, vectors: Sequence[Vector], threshold: float) -> List[Tuple[int, int, float]]:
        pairs: List[Tuple[int, int, float]] = []
        for i in range(len(vectors)):
            for j in range(i + 1, len(vectors)):
                similarity = cosine_similarity(vectors[i], vectors[j])
                if similarity > threshold:
                    pairs.append((i, j, similarity))
        return pairs


def similarity_graph(
    members: Sequence[Member],
    colors: Mapping[str, Any],
    *,
    threshold: float = DEFAULT_THRESHOLD,
    strategy: Optional[SimilarityStrategy] = None,
) -> SimilarityGraph:
    """Graph of active members linked when their votes are more than ``threshold`` alike.

    ``colors`` is the party colour configuration.
    """

    active = [member for member in members if member.active]
    nodes = [
        GraphNode(
            id=member.member_id,
            name=member.full_name,
            party=member.party,
            color=party_color(colors, member.party),
        )
        for member in active
    ]
    pairs = (strategy or PairwiseCosine()).similar_pairs(vote_vectors(active), threshold)
    links = [
        GraphEdge(source=active[i].member_id, target=active[j].member_id, weight=weight)
        for i, j, weight in pairs
    ]
    return SimilarityGraph(nodes=nodes, links=links)


__all__ = [
    "DEFAULT_THRESHOLD",
    "PairwiseCosine",
    "SimilarityStrategy",
    "cosine_similarity",
    "similarity_graph",
    "vote_vectors",
]
