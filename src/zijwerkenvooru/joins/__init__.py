"""Lookup builders and entity joiners."""
from __future__ import annotations

from .commissions import build_commissions, build_lobby, vote_index
from .dossiers import build_dossiers
from .lookups import Lookups, build_lookups
from .meetings import MeetingsData, build_meetings, meeting_duration
from .members import MembersData, active_members, build_members, build_members_data
from .parties import build_parties
from .propositions import attach_votes, build_propositions
from .questions import build_questions
from .votes import build_votes

__all__ = [
    "Lookups",
    "MeetingsData",
    "MembersData",
    "active_members",
    "attach_votes",
    "build_commissions",
    "build_dossiers",
    "build_lobby",
    "build_lookups",
    "build_meetings",
    "build_members",
    "build_members_data",
    "build_parties",
    "build_propositions",
    "build_questions",
    "build_votes",
    "meeting_duration",
    "vote_index",
]
