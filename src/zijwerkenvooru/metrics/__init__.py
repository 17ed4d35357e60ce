"""Derived metrics computed over already joined records."""
from __future__ import annotations

from .attendance import CHAMBER_SIZE, meeting_attendance, member_attendance
from .contributions import top_contributors
from .outliers import majority_choice, outlier_score, party_majorities
from .similarity import (
    DEFAULT_THRESHOLD,
    PairwiseCosine,
    SimilarityStrategy,
    cosine_similarity,
    similarity_graph,
    vote_vectors,
)

__all__ = [
    "CHAMBER_SIZE",
    "DEFAULT_THRESHOLD",
    "PairwiseCosine",
    "SimilarityStrategy",
    "cosine_similarity",
    "majority_choice",
    "meeting_attendance",
    "member_attendance",
    "outlier_score",
    "party_majorities",
    "similarity_graph",
    "top_contributors",
    "vote_vectors",
]
