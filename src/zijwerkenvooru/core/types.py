"""Typed view-models produced by the joiners and the metrics engine.

Every record is built once per generation run and never patched afterwards.
Back references are stored as copied identifiers, so all records serialise to
plain JSON trees without cycles.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, List, Literal, NamedTuple, Optional

UNKNOWN_PARTY = "Unknown"

MeetingType = Literal["plenary", "commission"]
VoteChoice = Literal["yes", "no", "abstain"]


class MeetingKey(NamedTuple):
    session_id: str
    meeting_id: str


class PropositionKey(NamedTuple):
    session_id: str
    dossier_id: str


class SubdocumentKey(NamedTuple):
    dossier_id: str
    subdocument_id: str


class VoteKey(NamedTuple):
    session_id: str
    meeting_id: str
    vote_id: str


@dataclass(slots=True, frozen=True)
class PartyMember:
    """A name as it appears in the source, annotated with its party."""

    name: str
    party: str = UNKNOWN_PARTY


@dataclass(slots=True, frozen=True)
class DiscussionTurn:
    speaker: PartyMember
    text: str


@dataclass(slots=True, frozen=True)
class DossierSummary:
    """Dossier fields needed by propositions and members."""

    title: Optional[str]
    authors: List[str]
    document_type: Optional[str]
    status: Optional[str]
    vote_date: Optional[str]


@dataclass(slots=True, frozen=True)
class Question:
    type: MeetingType
    question_id: str
    session_id: str
    meeting_id: str
    date: Optional[str]
    questioners: List[PartyMember]
    respondents: List[PartyMember]
    topics_nl: List[str]
    topics_fr: List[str]
    topics_summary_nl: Optional[str]
    topics_summary_fr: Optional[str]
    discussion: List[DiscussionTurn]
    dossier_ids: List[str]
    topic_tags: List[str] = field(default_factory=list)


@dataclass(slots=True, frozen=True)
class QuestionMention:
    """A question as seen from one of its participants."""

    type: MeetingType
    question_id: str
    session_id: str
    meeting_id: str
    date: Optional[str]
    topic_nl: Optional[str]
    topic_fr: Optional[str]
    questioners: List[PartyMember]
    respondents: List[PartyMember]
    discussion: List[DiscussionTurn]
    as_respondent: bool = False


@dataclass(slots=True, frozen=True)
class Vote:
    vote_id: str
    session_id: str
    meeting_id: str
    date: Optional[str]
    title_nl: Optional[str]
    title_fr: Optional[str]
    yes_count: int
    no_count: int
    abstain_count: int
    yes_members: List[PartyMember]
    no_members: List[PartyMember]
    abstain_members: List[PartyMember]
    votes_by_party: Dict[str, Dict[str, int]]
    grouped_votes_by_party: Dict[str, Dict[str, List[PartyMember]]]
    dossier_id: Optional[str]
    document_id: Optional[str]
    proposition_id: Optional[str] = None

    @property
    def key(self) -> VoteKey:
        return VoteKey(self.session_id, self.meeting_id, self.vote_id)

    @property
    def total(self) -> int:
        return self.yes_count + self.no_count + self.abstain_count


@dataclass(slots=True, frozen=True)
class Proposition:
    proposition_id: str
    session_id: str
    meeting_id: str
    date: Optional[str]
    title_nl: Optional[str]
    title_fr: Optional[str]
    title_summary_nl: Optional[str]
    dossier_id: Optional[str]
    document_id: Optional[str]
    authors: List[PartyMember]
    document_type: Optional[str]
    status: Optional[str]
    vote_date: Optional[str]
    votes: List[Vote] = field(default_factory=list)


@dataclass(slots=True, frozen=True)
class Attendance:
    count: int = 0
    ratio: float = 0.0


@dataclass(slots=True, frozen=True)
class Meeting:
    type: MeetingType
    commission_type: Optional[str]
    session_id: str
    meeting_id: str
    date: Optional[str]
    start_time: Optional[str]
    end_time: Optional[str]
    time_of_day: Optional[str]
    chairs: List[PartyMember]
    questions: List[Question]
    propositions: List[Proposition]
    votes: List[Vote]
    all_votes: List[Vote]
    attendance: Attendance
    absentees: List[PartyMember]

    @property
    def key(self) -> MeetingKey:
        return MeetingKey(self.session_id, self.meeting_id)


@dataclass(slots=True, frozen=True)
class SubdocumentVote:
    vote_id: str
    session_id: str
    meeting_id: str
    yes_count: int
    no_count: int
    abstain_count: int
    dossier_id: Optional[str]
    document_id: Optional[str]


@dataclass(slots=True, frozen=True)
class Subdocument:
    id: str
    date: Optional[str]
    type: Optional[str]
    authors: List[PartyMember]
    votes: List[SubdocumentVote]


@dataclass(slots=True, frozen=True)
class Dossier:
    dossier_id: str
    session_id: str
    title: Optional[str]
    authors: List[PartyMember]
    submission_date: Optional[str]
    end_date: Optional[str]
    vote_date: Optional[str]
    document_type: Optional[str]
    status: Optional[str]
    subdocuments: List[Subdocument]


@dataclass(slots=True, frozen=True)
class MemberProposition:
    proposition_id: str
    session_id: str
    meeting_id: str
    title_nl: Optional[str]
    title_fr: Optional[str]
    dossier_id: Optional[str]
    document_id: Optional[str]
    dossier_title: Optional[str]
    document_type: Optional[str]
    status: Optional[str]
    vote_date: Optional[str]


@dataclass(slots=True, frozen=True)
class MemberSubdocument:
    date: Optional[str]
    type: Optional[str]


@dataclass(slots=True, frozen=True)
class MemberVote:
    vote_id: str
    session_id: str
    meeting_id: str
    date: Optional[str]
    title_nl: Optional[str]
    title_fr: Optional[str]
    vote: VoteChoice
    outlier: bool

    @property
    def key(self) -> VoteKey:
        return VoteKey(self.session_id, self.meeting_id, self.vote_id)


@dataclass(slots=True, frozen=True)
class Remuneration:
    mandate: Optional[str]
    institute: Optional[str]
    remuneration_min: float
    remuneration_max: float


@dataclass(slots=True, frozen=True)
class RemunerationYear:
    entries: List[Remuneration]
    total_min: float
    total_max: float


@dataclass(slots=True, frozen=True)
class Member:
    key: str
    member_id: str
    first_name: str
    last_name: str
    gender: Optional[str]
    date_of_birth: Optional[str]
    place_of_birth: Optional[str]
    language: Optional[str]
    constituency: Optional[str]
    email: Optional[str]
    active: bool
    start_date: Optional[str]
    age: Optional[int]
    sessions: List[str]
    parties: List[str]
    fractions: List[str]
    remunerations: Dict[str, RemunerationYear]
    propositions: List[MemberProposition]
    subdocuments: List[MemberSubdocument]
    questions: List[QuestionMention]
    commission_questions: List[QuestionMention]
    votes: List[MemberVote]
    attendance: float = 0.0
    normalized_attendance: float = 0.0
    outlier: float = 100.0

    @property
    def full_name(self) -> str:
        return f"{self.first_name} {self.last_name}"

    @property
    def party(self) -> str:
        """First observed party, used for display annotation."""

        return self.parties[0] if self.parties else UNKNOWN_PARTY


@dataclass(slots=True, frozen=True)
class PartyProfile:
    first_name: str
    last_name: str
    active: bool
    date_of_birth: Optional[str]
    place_of_birth: Optional[str]
    language: Optional[str]
    constituency: Optional[str]


@dataclass(slots=True, frozen=True)
class Party:
    name: str
    color: str
    seats: int
    members: List[PartyProfile]
    propositions: List[Proposition]
    questions: List[QuestionMention]


@dataclass(slots=True, frozen=True)
class PartySeats:
    name: str
    seats: int
    color: str


@dataclass(slots=True, frozen=True)
class GraphNode:
    id: str
    name: str
    party: str
    color: str


@dataclass(slots=True, frozen=True)
class GraphEdge:
    source: str
    target: str
    weight: float


@dataclass(slots=True, frozen=True)
class SimilarityGraph:
    nodes: List[GraphNode] = field(default_factory=list)
    links: List[GraphEdge] = field(default_factory=list)


@dataclass(slots=True, frozen=True)
class Contributor:
    name: str
    party: str
    total: int
    questions: int
    propositions: int


@dataclass(slots=True, frozen=True)
class CommissionSitting:
    session_id: str
    commission_id: str
    date: Optional[str]
    time_of_day: Optional[str]
    start_time: Optional[str]
    end_time: Optional[str]
    commission: Optional[str]
    chairs: List[PartyMember]


@dataclass(slots=True, frozen=True)
class LobbyRecord:
    name: str
    contacts: Optional[str]
    interests: Optional[str]
    url: Optional[str]


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
    "MeetingType",
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
    "VoteChoice",
    "VoteKey",
]
