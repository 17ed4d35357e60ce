"""Attendance figures for meetings and members."""
from __future__ import annotations

from datetime import date
from typing import Iterable, List, Optional, Sequence, Set, Tuple

from ..core.names import normalize_name
from ..core.types import Attendance, MemberVote, PartyMember, Vote
from ..core.values import parse_iso_date

CHAMBER_SIZE = 150


def meeting_attendance(
    all_votes: Sequence[Vote],
    active_members: Iterable[PartyMember],
    *,
    chamber_size: int = CHAMBER_SIZE,
) -> Tuple[Attendance, List[PartyMember]]:
    """Attendance and absentees of a meeting, sampled from its first vote.

    The count is ``yes + no + abstain`` of the first vote only. The ratio is
    not clamped, so counts above the chamber size stay visible. Absentees are
    the active members missing from every member list of that vote, sorted by
    party.
    """

    if not all_votes:
        return Attendance(count=0, ratio=0.0), []
    first = all_votes[0]
    count = first.total
    present: Set[str] = {
        normalize_name(member.name)
        for member in (*first.yes_members, *first.no_members, *first.abstain_members)
    }
    absentees = sorted(
        (member for member in active_members if normalize_name(member.name) not in present),
        key=lambda member: member.party,
    )
    return Attendance(count=count, ratio=count / chamber_size if chamber_size else 0.0), absentees


def _eligible(vote_dates: Sequence[Optional[date]], start: Optional[date]) -> List[date]:
    if start is None:
        return [vote_date for vote_date in vote_dates if vote_date is not None]
    return [vote_date for vote_date in vote_dates if vote_date is not None and vote_date >= start]


def member_attendance(
    member_votes: Sequence[MemberVote],
    vote_dates: Sequence[Optional[date]],
    start: Optional[date],
) -> Tuple[float, float]:
    """Return ``(attendance, normalized_attendance)`` for one member.

    ``vote_dates`` holds the date of every vote of the chamber. Attendance is
    votes cast over eligible votes (dated on or after ``start``); the
    normalised figure compares distinct voting days instead, so several votes
    on one day count once. Both are 0 when nothing was eligible.
    """

    eligible = _eligible(vote_dates, start)
    attendance = len(member_votes) / len(eligible) if eligible else 0.0
    eligible_days = set(eligible)
    attended_days = {parse_iso_date(vote.date) for vote in member_votes} - {None}
    normalized = len(attended_days) / len(eligible_days) if eligible_days else 0.0
    return attendance, normalized


__all__ = ["CHAMBER_SIZE", "meeting_attendance", "member_attendance"]
