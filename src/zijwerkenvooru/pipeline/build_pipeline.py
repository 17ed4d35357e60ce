"""Build every view-model of the site from a row source."""
from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date
from pathlib import Path
from typing import Any, Callable, Dict, List, Literal, Mapping, Optional, Sequence, Tuple, Union
import logging

from ..core.types import CommissionSitting, Dossier, LobbyRecord, Member, Party, Proposition, Question
from ..export import write_json
from ..joins import (
    Lookups,
    MeetingsData,
    MembersData,
    active_members,
    build_commissions,
    build_dossiers,
    build_lobby,
    build_lookups,
    build_meetings,
    build_members,
    build_members_data,
    build_parties,
    build_propositions,
    build_questions,
    vote_index,
)
from ..metrics import CHAMBER_SIZE, DEFAULT_THRESHOLD
from ..metrics.contributions import DEFAULT_LIMIT
from ..sources import MissingTableError, RowSource, read_tables
from ..topics import TopicMatcher

LOGGER = logging.getLogger(__name__)

_FALLBACKS: Dict[str, Callable[[], Any]] = {
    "meetings": MeetingsData,
    "members": MembersData,
    "parties": list,
    "propositions": list,
    "questions": list,
    "dossiers": list,
    "commissions": list,
    "lobby": list,
    "votes": list,
}

UNITS: Tuple[str, ...] = tuple(_FALLBACKS)


@dataclass(slots=True, frozen=True)
class BuildOptions:
    income_year: str = "2023"
    chamber_size: int = CHAMBER_SIZE
    similarity_threshold: float = DEFAULT_THRESHOLD
    contributors_per_topic: int = DEFAULT_LIMIT
    max_workers: int = 4
    today: Optional[date] = None


@dataclass(slots=True)
class SiteData:
    """Every unit of the site, empty where its unit failed."""

    meetings: MeetingsData = field(default_factory=MeetingsData)
    members: MembersData = field(default_factory=MembersData)
    parties: List[Party] = field(default_factory=list)
    propositions: List[Proposition] = field(default_factory=list)
    questions: List[Question] = field(default_factory=list)
    dossiers: List[Dossier] = field(default_factory=list)
    commissions: List[CommissionSitting] = field(default_factory=list)
    lobby: List[LobbyRecord] = field(default_factory=list)
    votes: List[str] = field(default_factory=list)
    failed: List[str] = field(default_factory=list)

    def document(self, unit: str) -> Any:
        """JSON document written for ``unit``."""

        value = getattr(self, unit)
        if isinstance(value, list):
            return {unit: value}
        return value


class SiteBuilder:
    """Run the joiners and metrics for one generation run.

    Tables are read once and shared between units, and lookups are built once
    and passed to every joiner. Each unit is guarded on its own: an exception
    is logged and the unit gets its empty value while the others still build.
    """

    def __init__(
        self,
        source: RowSource,
        *,
        taxonomy: Optional[Mapping[str, Mapping[str, Any]]] = None,
        party_colors: Optional[Mapping[str, Any]] = None,
        options: Optional[BuildOptions] = None,
    ) -> None:
        self._source = source
        self._matcher = TopicMatcher(taxonomy or {})
        self._colors = party_colors or {}
        self._options = options or BuildOptions()
        self._tables: Dict[str, List[tuple]] = {}
        self._lookups: Optional[Lookups] = None
        self._members: Optional[List[Member]] = None

    def tables(self, *names: str) -> List[List[tuple]]:
        """Rows of ``names``, read concurrently on first use."""

        missing = [name for name in names if name not in self._tables]
        if missing:
            self._tables.update(read_tables(self._source, missing, max_workers=self._options.max_workers))
        return [self._tables[name] for name in names]

    def _optional_table(self, name: str) -> List[tuple]:
        try:
            (rows,) = self.tables(name)
        except MissingTableError:
            LOGGER.warning("Table %s not available, lookups built without it", name)
            return []
        return rows

    @property
    def lookups(self) -> Lookups:
        if self._lookups is None:
            self._lookups = build_lookups(
                members=self._optional_table("members"),
                meetings=self._optional_table("meetings"),
                commissions=self._optional_table("commissions"),
                dossiers=self._optional_table("dossiers"),
                summaries=self._optional_table("summaries"),
            )
        return self._lookups

    def build_meetings(self) -> MeetingsData:
        members, meetings, commissions, questions, commission_questions, propositions, votes = self.tables(
            "members", "meetings", "commissions", "questions", "commission_questions", "propositions", "votes"
        )
        return build_meetings(
            meeting_rows=meetings,
            commission_rows=commissions,
            question_rows=questions,
            commission_question_rows=commission_questions,
            proposition_rows=propositions,
            vote_rows=votes,
            lookups=self.lookups,
            active_members=active_members(members),
            matcher=self._matcher,
            chamber_size=self._options.chamber_size,
        )

    def member_records(self) -> List[Member]:
        if self._members is None:
            members, propositions, subdocuments, remunerations, questions, commission_questions, votes = self.tables(
                "members",
                "propositions",
                "subdocuments",
                "remunerations",
                "questions",
                "commission_questions",
                "votes",
            )
            self._members = build_members(
                member_rows=members,
                proposition_rows=propositions,
                subdocument_rows=subdocuments,
                remuneration_rows=remunerations,
                question_rows=questions,
                commission_question_rows=commission_questions,
                vote_rows=votes,
                lookups=self.lookups,
                today=self._options.today,
            )
        return self._members

    def build_members(self) -> MembersData:
        (member_rows,) = self.tables("members")
        return build_members_data(
            self.member_records(),
            member_row_count=len(member_rows),
            colors=self._colors,
            matcher=self._matcher,
            income_year=self._options.income_year,
            similarity_threshold=self._options.similarity_threshold,
            contributors_per_topic=self._options.contributors_per_topic,
        )

    def build_propositions(self) -> List[Proposition]:
        (rows,) = self.tables("propositions")
        return build_propositions(rows, self.lookups)

    def build_questions(self) -> List[Question]:
        questions, commission_questions = self.tables("questions", "commission_questions")
        return build_questions(questions, commission_questions, self.lookups, self._matcher)

    def build_parties(self) -> List[Party]:
        questions, propositions = self.tables("questions", "propositions")
        return build_parties(
            self.member_records(),
            build_questions(questions, (), self.lookups),
            build_propositions(propositions, self.lookups),
            self._colors,
        )

    def build_dossiers(self) -> List[Dossier]:
        dossiers, subdocuments, votes = self.tables("dossiers", "subdocuments", "votes")
        return build_dossiers(dossiers, subdocuments, votes, self.lookups.party_by_name)

    def build_commissions(self) -> List[CommissionSitting]:
        (rows,) = self.tables("commissions")
        return build_commissions(rows, self.lookups.party_by_name)

    def build_lobby(self) -> List[LobbyRecord]:
        (rows,) = self.tables("lobby")
        return build_lobby(rows)

    def build_votes(self) -> List[str]:
        (rows,) = self.tables("votes")
        return vote_index(rows)

    def build_unit(self, unit: str) -> Tuple[Any, bool]:
        """Build ``unit``; on failure log it and return ``(empty value, False)``."""

        if unit not in _FALLBACKS:
            raise ValueError(f"Unknown unit {unit!r}")
        builder: Callable[[], Any] = getattr(self, f"build_{unit}")
        try:
            return builder(), True
        except Exception:
            LOGGER.exception("Building %s failed, using an empty fallback", unit)
            return _FALLBACKS[unit](), False

    def build(self, units: Sequence[str] = UNITS) -> SiteData:
        data = SiteData()
        for unit in units:
            value, ok = self.build_unit(unit)
            setattr(data, unit, value)
            if not ok:
                data.failed.append(unit)
        return data


SiteEventKind = Literal["start", "built", "fallback", "written", "finished"]


@dataclass(slots=True)
class SiteEvent:
    kind: SiteEventKind
    unit: str | None = None
    message: str | None = None
    path: Path | None = None


SiteProgressCallback = Callable[[SiteEvent], None]


class SiteBuildPipeline:
    """Build the site data and write one JSON document per unit."""

    def __init__(self, builder: SiteBuilder) -> None:
        self._builder = builder

    def run(
        self,
        output_dir: Union[str, Path],
        *,
        units: Sequence[str] = UNITS,
        progress_callback: Optional[SiteProgressCallback] = None,
    ) -> SiteData:
        target = Path(output_dir)
        self._notify(progress_callback, SiteEvent(kind="start", message=f"Building {len(units)} units"))
        data = SiteData()
        for unit in units:
            value, ok = self._builder.build_unit(unit)
            setattr(data, unit, value)
            if ok:
                self._notify(progress_callback, SiteEvent(kind="built", unit=unit))
            else:
                data.failed.append(unit)
                self._notify(progress_callback, SiteEvent(kind="fallback", unit=unit, message="Using empty fallback"))
            path = write_json(target / f"{unit}.json", data.document(unit))
            self._notify(progress_callback, SiteEvent(kind="written", unit=unit, path=path))
        LOGGER.info("Site data written to %s (%d units failed)", target, len(data.failed))
        self._notify(
            progress_callback,
            SiteEvent(kind="finished", message=f"{len(units) - len(data.failed)} of {len(units)} units built"),
        )
        return data

    @staticmethod
    def _notify(callback: Optional[SiteProgressCallback], event: SiteEvent) -> None:
        if callback:
            callback(event)


__all__ = [
    "BuildOptions",
    "SiteBuildPipeline",
    "SiteBuilder",
    "SiteData",
    "SiteEvent",
    "UNITS",
]
