"""Members with everything they authored, asked, answered, voted and earned."""
from __future__ import annotations

from dataclasses import dataclass, field, replace
from datetime import date
from typing import Any, Dict, Iterable, List, Mapping, Optional, Sequence, Set
import logging

from ..core.names import full_name, normalize_name, split_names
from ..core.types import (
    UNKNOWN_PARTY,
    Contributor,
    Member,
    MemberProposition,
    MemberSubdocument,
    MemberVote,
    PartyMember,
    PartySeats,
    QuestionMention,
    Remuneration,
    RemunerationYear,
    SimilarityGraph,
    VoteChoice,
)
from ..metrics.attendance import member_attendance
from ..metrics.contributions import DEFAULT_LIMIT, top_contributors
from ..metrics.outliers import outlier_score, party_majorities
from ..metrics.similarity import DEFAULT_THRESHOLD, SimilarityStrategy, similarity_graph
from ..sources.schema import MemberRow, PropositionRow, QuestionRow, RemunerationRow, SubdocumentRow, VoteRow
from ..topics import TopicMatcher
from .common import convert_date, is_active, parse_amount, parse_iso_date, party_color
from .lookups import Lookups
from .questions import iter_questions, mentions

LOGGER = logging.getLogger(__name__)


@dataclass
class _Draft:
    key: str
    row: MemberRow
    language: Optional[str]
    sessions: Dict[str, None] = field(default_factory=dict)
    parties: Dict[str, None] = field(default_factory=dict)
    fractions: Dict[str, None] = field(default_factory=dict)
    remunerations: Dict[str, List[Remuneration]] = field(default_factory=dict)
    propositions: List[MemberProposition] = field(default_factory=list)
    subdocuments: List[MemberSubdocument] = field(default_factory=list)
    questions: List[QuestionMention] = field(default_factory=list)
    commission_questions: List[QuestionMention] = field(default_factory=list)
    votes: List[MemberVote] = field(default_factory=list)


def active_members(rows: Iterable[MemberRow]) -> List[PartyMember]:
    """Members flagged active, one entry per person, with the party of their row."""

    seen: Set[str] = set()
    active: List[PartyMember] = []
    for row in rows:
        if not is_active(row.active):
            continue
        name = full_name(row.first_name, row.last_name)
        key = normalize_name(name)
        if not key or key in seen:
            continue
        seen.add(key)
        active.append(PartyMember(name=name, party=row.party or UNKNOWN_PARTY))
    return active


def age_on(birth_date: Optional[str], today: date) -> Optional[int]:
    born = parse_iso_date(birth_date)
    if born is None:
        return None
    age = today.year - born.year
    if (today.month, today.day) < (born.month, born.day):
        age -= 1
    return age


def _drafts(rows: Iterable[MemberRow]) -> Dict[str, _Draft]:
    drafts: Dict[str, _Draft] = {}
    for row in rows:
        key = normalize_name(full_name(row.first_name, row.last_name))
        if not key:
            continue
        draft = drafts.get(key)
        if draft is None:
            draft = drafts[key] = _Draft(key=key, row=row, language=row.language or None)
        elif draft.language is None:
            draft.language = row.language or None
        for target, value in ((draft.sessions, row.session_id), (draft.parties, row.party), (draft.fractions, row.fraction)):
            if value:
                target.setdefault(value, None)
    return drafts


def _add_propositions(drafts: Dict[str, _Draft], rows: Iterable[PropositionRow], lookups: Lookups) -> None:
    for row in rows:
        dossier = lookups.dossiers.get(row.dossier_id or "")
        if dossier is None:
            continue
        proposition = MemberProposition(
            proposition_id=row.proposition_id or "",
            session_id=row.session_id or "",
            meeting_id=row.meeting_id or "",
            title_nl=row.title_nl,
            title_fr=row.title_fr,
            dossier_id=row.dossier_id or None,
            document_id=row.document_id or None,
            dossier_title=dossier.title,
            document_type=dossier.document_type,
            status=dossier.status,
            vote_date=dossier.vote_date,
        )
        for author in dossier.authors:
            draft = drafts.get(normalize_name(author))
            if draft is not None:
                draft.propositions.append(proposition)


def _add_subdocuments(drafts: Dict[str, _Draft], rows: Iterable[SubdocumentRow]) -> None:
    for row in rows:
        subdocument = MemberSubdocument(date=convert_date(row.date), type=row.type or None)
        for author in split_names(row.authors):
            draft = drafts.get(normalize_name(author))
            if draft is not None:
                draft.subdocuments.append(subdocument)


def _add_remunerations(drafts: Dict[str, _Draft], rows: Iterable[RemunerationRow]) -> None:
    for row in rows:
        draft = drafts.get(normalize_name(full_name(row.first_name, row.last_name)))
        if draft is None:
            continue
        draft.remunerations.setdefault(row.year or "", []).append(
            Remuneration(
                mandate=row.mandate,
                institute=row.institute,
                remuneration_min=parse_amount(row.remuneration_min),
                remuneration_max=parse_amount(row.remuneration_max),
            )
        )


def _choices(row: VoteRow) -> Dict[str, VoteChoice]:
    # A name listed twice keeps its first classification (yes, then no, then abstain).
    choices: Dict[str, VoteChoice] = {}
    for choice, raw in (("yes", row.members_yes), ("no", row.members_no), ("abstain", row.members_abstain)):
        for name in split_names(raw):
            choices.setdefault(normalize_name(name), choice)
    return choices


def _add_votes(drafts: Dict[str, _Draft], rows: Iterable[VoteRow], lookups: Lookups) -> None:
    """Attach every vote to the members listed on it, flagging outliers.

    Party majorities group members by their latest party from the party
    lookup, not by the first party in ``Member.parties``, so a member who
    switched parties is compared with their current party.
    """

    for row in rows:
        choices = _choices(row)
        majorities = party_majorities(choices, lookups.party_by_name)
        for key, choice in choices.items():
            draft = drafts.get(key)
            if draft is None:
                continue
            majority = majorities.get(lookups.party_by_name.get(key, ""))
            draft.votes.append(
                MemberVote(
                    vote_id=row.vote_id or "",
                    session_id=row.session_id or "",
                    meeting_id=row.meeting_id or "",
                    date=row.date or None,
                    title_nl=row.title_nl,
                    title_fr=row.title_fr,
                    vote=choice,
                    outlier=majority is not None and choice != majority,
                )
            )


def _freeze(draft: _Draft, today: date) -> Member:
    row = draft.row
    remunerations = {
        year: RemunerationYear(
            entries=entries,
            total_min=sum(entry.remuneration_min for entry in entries),
            total_max=sum(entry.remuneration_max for entry in entries),
        )
        for year, entries in draft.remunerations.items()
    }
    return Member(
        key=draft.key,
        member_id=row.member_id or "",
        first_name=(row.first_name or "").strip(),
        last_name=(row.last_name or "").strip(),
        gender=row.gender or None,
        date_of_birth=row.date_of_birth or None,
        place_of_birth=row.place_of_birth or None,
        language=draft.language,
        constituency=row.constituency or None,
        email=row.email or None,
        active=is_active(row.active),
        start_date=row.start or None,
        age=age_on(row.date_of_birth, today),
        sessions=list(draft.sessions),
        parties=list(draft.parties),
        fractions=list(draft.fractions),
        remunerations=remunerations,
        propositions=draft.propositions,
        subdocuments=draft.subdocuments,
        questions=draft.questions,
        commission_questions=draft.commission_questions,
        votes=draft.votes,
    )


def build_members(
    *,
    member_rows: Sequence[MemberRow],
    proposition_rows: Sequence[PropositionRow] = (),
    subdocument_rows: Sequence[SubdocumentRow] = (),
    remuneration_rows: Sequence[RemunerationRow] = (),
    question_rows: Sequence[QuestionRow] = (),
    commission_question_rows: Sequence[QuestionRow] = (),
    vote_rows: Sequence[VoteRow] = (),
    lookups: Lookups,
    today: Optional[date] = None,
) -> List[Member]:
    """Join every member table into one :class:`Member` per person.

    Members are keyed by normalised full name, in order of first appearance.
    Child records whose names do not resolve to a known member are dropped
    from that member's collections. Attendance, normalised attendance and the
    outlier score are computed once all votes are attached.
    """

    today = today or date.today()
    drafts = _drafts(member_rows)
    _add_propositions(drafts, proposition_rows, lookups)
    _add_subdocuments(drafts, subdocument_rows)
    _add_remunerations(drafts, remuneration_rows)

    for question in iter_questions(question_rows, commission_question_rows, lookups):
        for key, mention in mentions(question):
            draft = drafts.get(key)
            if draft is None:
                continue
            if question.type == "plenary":
                draft.questions.append(mention)
            else:
                draft.commission_questions.append(mention)

    _add_votes(drafts, vote_rows, lookups)

    vote_dates = [parse_iso_date(row.date) for row in vote_rows]
    members: List[Member] = []
    for draft in drafts.values():
        member = _freeze(draft, today)
        attendance, normalized = member_attendance(member.votes, vote_dates, parse_iso_date(member.start_date))
        members.append(
            replace(
                member,
                attendance=attendance,
                normalized_attendance=normalized,
                outlier=outlier_score(member.votes),
            )
        )
    return members


@dataclass(slots=True, frozen=True)
class MembersData:
    member_count: int = 0
    members: List[Member] = field(default_factory=list)
    ages: List[Optional[int]] = field(default_factory=list)
    incomes: List[float] = field(default_factory=list)
    parties: List[PartySeats] = field(default_factory=list)
    graph: SimilarityGraph = field(default_factory=SimilarityGraph)
    top_contributors_by_topic: Dict[str, List[Contributor]] = field(default_factory=dict)


def party_seats(members: Iterable[Member], colors: Mapping[str, Any]) -> List[PartySeats]:
    """Active members per party, most seats first."""

    seats: Dict[str, int] = {}
    for member in members:
        if not member.active:
            continue
        for party in member.parties:
            seats[party] = seats.get(party, 0) + 1
    ordered = sorted(seats.items(), key=lambda item: item[1], reverse=True)
    return [PartySeats(name=name, seats=count, color=party_color(colors, name)) for name, count in ordered]


def income(member: Member, year: str) -> float:
    """Midpoint of the declared remuneration range for ``year``, 0 when none was declared."""

    declared = member.remunerations.get(year)
    if declared is None:
        return 0.0
    return (declared.total_min + declared.total_max) / 2


def build_members_data(
    members: Sequence[Member],
    *,
    member_row_count: int,
    colors: Mapping[str, Any],
    matcher: TopicMatcher,
    income_year: str,
    similarity_threshold: float = DEFAULT_THRESHOLD,
    similarity_strategy: Optional[SimilarityStrategy] = None,
    contributors_per_topic: int = DEFAULT_LIMIT,
) -> MembersData:
    LOGGER.debug("Computing member aggregates for %d members", len(members))
    return MembersData(
        member_count=member_row_count,
        members=list(members),
        ages=[member.age for member in members],
        incomes=[income(member, income_year) for member in members],
        parties=party_seats(members, colors),
        graph=similarity_graph(members, colors, threshold=similarity_threshold, strategy=similarity_strategy),
        top_contributors_by_topic=top_contributors(members, matcher, limit=contributors_per_topic),
    )


__all__ = [
    "MembersData",
    "active_members",
    "age_on",
    "build_members",
    "build_members_data",
    "income",
    "party_seats",
]
