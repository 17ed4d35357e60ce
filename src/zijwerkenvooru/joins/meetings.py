"""Plenary and commission meetings with their questions, propositions and votes."""
from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date
from typing import Dict, Iterable, List, Optional, Sequence, Tuple
import logging
import re

from ..core.types import MeetingKey, MeetingType, Meeting, PartyMember, Proposition, Question, Vote
from ..metrics.attendance import CHAMBER_SIZE, meeting_attendance
from ..sources.schema import CommissionRow, MeetingRow, PropositionRow, QuestionRow, VoteRow
from ..topics import TopicMatcher
from .common import BAD_SESSION_ID, parse_iso_date, with_parties
from .lookups import Lookups
from .propositions import attach_votes, build_propositions, proposition_index
from .questions import iter_questions
from .votes import build_votes

LOGGER = logging.getLogger(__name__)

_TIME_OF_DAY_ORDER = {"evening": 0, "afternoon": 1, "morning": 2}
_CLOCK = re.compile(r"^\s*(\d{1,2})\s*[h:]\s*(\d{2})\s*$")

MeetingRef = Tuple[MeetingType, MeetingKey]


@dataclass
class _Draft:
    type: MeetingType
    commission_type: Optional[str]
    session_id: str
    meeting_id: str
    date: Optional[str]
    start_time: Optional[str]
    end_time: Optional[str]
    time_of_day: Optional[str]
    chairs: List[PartyMember] = field(default_factory=list)
    questions: List[Question] = field(default_factory=list)
    propositions: List[Proposition] = field(default_factory=list)
    votes: List[Vote] = field(default_factory=list)
    all_votes: List[Vote] = field(default_factory=list)


@dataclass(slots=True, frozen=True)
class MeetingsData:
    meetings: List[Meeting] = field(default_factory=list)
    durations: List[Optional[int]] = field(default_factory=list)


def _drafts(
    meeting_rows: Iterable[MeetingRow],
    commission_rows: Iterable[CommissionRow],
    lookups: Lookups,
) -> Dict[MeetingRef, _Draft]:
    drafts: Dict[MeetingRef, _Draft] = {}
    for row in meeting_rows:
        key = MeetingKey(row.session_id or "", row.meeting_id or "")
        drafts[("plenary", key)] = _Draft(
            type="plenary",
            commission_type=None,
            session_id=key.session_id,
            meeting_id=key.meeting_id,
            date=row.date or None,
            start_time=row.start_time or None,
            end_time=row.end_time or None,
            time_of_day=row.time_of_day or None,
        )
    for row in commission_rows:
        if (row.session_id or "") == BAD_SESSION_ID:
            continue
        key = MeetingKey(row.session_id or "", row.commission_id or "")
        drafts[("commission", key)] = _Draft(
            type="commission",
            commission_type=row.commission or None,
            session_id=key.session_id,
            meeting_id=key.meeting_id,
            date=row.date or None,
            start_time=row.start_time or None,
            end_time=row.end_time or None,
            time_of_day=row.time_of_day or None,
            chairs=with_parties(row.chair, lookups.party_by_name),
        )
    return drafts


def build_meetings(
    *,
    meeting_rows: Sequence[MeetingRow],
    commission_rows: Sequence[CommissionRow],
    question_rows: Sequence[QuestionRow],
    commission_question_rows: Sequence[QuestionRow],
    proposition_rows: Sequence[PropositionRow],
    vote_rows: Sequence[VoteRow],
    lookups: Lookups,
    active_members: Sequence[PartyMember],
    matcher: Optional[TopicMatcher] = None,
    chamber_size: int = CHAMBER_SIZE,
) -> MeetingsData:
    """Join every meeting table into :class:`Meeting` records.

    Questions attach on ``(type, session_id, meeting_id)`` so commission and
    plenary id spaces never mix. Propositions and votes are plenary data. A
    vote goes to the proposition sharing its ``(session_id, dossier_id)``;
    otherwise it stays on its meeting as an orphan. Every vote is also listed
    in the meeting's ``all_votes``.
    """

    drafts = _drafts(meeting_rows, commission_rows, lookups)

    for question in iter_questions(question_rows, commission_question_rows, lookups, matcher):
        draft = drafts.get((question.type, MeetingKey(question.session_id, question.meeting_id)))
        if draft is not None:
            draft.questions.append(question)

    # Only propositions placed on a meeting claim votes.
    propositions = [
        proposition
        for proposition in build_propositions(proposition_rows, lookups)
        if ("plenary", MeetingKey(proposition.session_id, proposition.meeting_id)) in drafts
    ]
    proposition_ids = {key: propositions[position].proposition_id for key, position in proposition_index(propositions).items()}

    placed_votes: List[Vote] = []
    for vote in build_votes(vote_rows, lookups, proposition_ids):
        draft = drafts.get(("plenary", MeetingKey(vote.session_id, vote.meeting_id)))
        if draft is None:
            LOGGER.debug("Vote %s refers to unknown meeting %s/%s", vote.vote_id, vote.session_id, vote.meeting_id)
            continue
        placed_votes.append(vote)
        draft.all_votes.append(vote)
        if vote.proposition_id is None:
            draft.votes.append(vote)

    for proposition in attach_votes(propositions, placed_votes):
        drafts[("plenary", MeetingKey(proposition.session_id, proposition.meeting_id))].propositions.append(proposition)

    meetings = [_freeze(draft, active_members, chamber_size) for draft in drafts.values()]
    meetings.sort(key=_time_of_day_rank)
    meetings.sort(key=_date_rank, reverse=True)
    return MeetingsData(meetings=meetings, durations=[meeting_duration(m.start_time, m.end_time) for m in meetings])


def _freeze(draft: _Draft, active_members: Sequence[PartyMember], chamber_size: int) -> Meeting:
    attendance, absentees = meeting_attendance(draft.all_votes, active_members, chamber_size=chamber_size)
    return Meeting(
        type=draft.type,
        commission_type=draft.commission_type,
        session_id=draft.session_id,
        meeting_id=draft.meeting_id,
        date=draft.date,
        start_time=draft.start_time,
        end_time=draft.end_time,
        time_of_day=draft.time_of_day,
        chairs=draft.chairs,
        questions=draft.questions,
        propositions=draft.propositions,
        votes=draft.votes,
        all_votes=draft.all_votes,
        attendance=attendance,
        absentees=absentees,
    )


def _date_rank(meeting: Meeting) -> date:
    # Undated meetings sort last when ordering newest first.
    return parse_iso_date(meeting.date) or date.min


def _time_of_day_rank(meeting: Meeting) -> int:
    return _TIME_OF_DAY_ORDER.get(meeting.time_of_day or "", 999)


def _minutes(clock: Optional[str]) -> Optional[int]:
    match = _CLOCK.match(clock or "")
    if not match:
        return None
    hours, minutes = int(match.group(1)), int(match.group(2))
    if hours > 23 or minutes > 59:
        return None
    return hours * 60 + minutes


def meeting_duration(start_time: Optional[str], end_time: Optional[str]) -> Optional[int]:
    """Duration in minutes between ``14h19`` style clock times.

    Meetings ending after midnight wrap around; unparseable times give ``None``.
    """

    start = _minutes(start_time)
    end = _minutes(end_time)
    if start is None or end is None:
        return None
    duration = end - start
    if duration < 0:
        duration += 24 * 60
    return duration


__all__ = ["MeetingsData", "build_meetings", "meeting_duration"]
