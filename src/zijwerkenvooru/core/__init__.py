"""Core records, composite keys and name handling."""
from __future__ import annotations

from .names import full_name, normalize_name, split_names, split_topics
from .types import (
    UNKNOWN_PARTY,
    Attendance,
    CommissionSitting,
    Contributor,
    DiscussionTurn,
    Dossier,
    DossierSummary,
    GraphEdge,
    GraphNode,
    LobbyRecord,
    Meeting,
    MeetingKey,
    Member,
    MemberProposition,
    MemberSubdocument,
    MemberVote,
    Party,
    PartyMember,
    PartyProfile,
    PartySeats,
    Proposition,
    PropositionKey,
    Question,
    QuestionMention,
    Remuneration,
    RemunerationYear,
    SimilarityGraph,
    Subdocument,
    SubdocumentKey,
    SubdocumentVote,
    Vote,
    VoteKey,
)

__all__ = [
    "Attendance",
    "CommissionSitting",
    "Contributor",
    "DiscussionTurn",
    "Dossier",
    "DossierSummary",
    "GraphEdge",
    "GraphNode",
    "LobbyRecord",
    "Meeting",
    "MeetingKey",
    "Member",
    "MemberProposition",
    "MemberSubdocument",
    "MemberVote",
    "Party",
    "PartyMember",
    "PartyProfile",
    "PartySeats",
    "Proposition",
    "PropositionKey",
    "Question",
    "QuestionMention",
    "Remuneration",
    "RemunerationYear",
    "SimilarityGraph",
    "Subdocument",
    "SubdocumentKey",
    "SubdocumentVote",
    "UNKNOWN_PARTY",
    "Vote",
    "VoteKey",
    "full_name",
    "normalize_name",
    "split_names",
    "split_topics",
]
