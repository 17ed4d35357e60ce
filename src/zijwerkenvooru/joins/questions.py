"""Plenary and commission questions."""
from __future__ import annotations

from typing import Iterable, Iterator, List, Optional, Tuple

from ..core.names import normalize_name, split_names, split_topics
from ..core.types import MeetingKey, MeetingType, Question, QuestionMention
from ..sources.schema import QuestionRow
from ..topics import TopicMatcher
from .common import BAD_SESSION_ID, content_hash, parse_discussion, with_parties
from .lookups import Lookups


def build_question(
    row: QuestionRow,
    kind: MeetingType,
    lookups: Lookups,
    matcher: Optional[TopicMatcher] = None,
) -> Question:
    session_id = row.session_id or ""
    meeting_id = row.meeting_id or ""
    dates = lookups.plenary_dates if kind == "plenary" else lookups.commission_dates
    summary = lookups.summaries.get(content_hash(row.topics_nl)) if row.topics_nl else None
    return Question(
        type=kind,
        question_id=row.question_id or "",
        session_id=session_id,
        meeting_id=meeting_id,
        date=dates.get(MeetingKey(session_id, meeting_id)),
        questioners=with_parties(row.questioners, lookups.party_by_name),
        respondents=with_parties(row.respondents, lookups.party_by_name),
        topics_nl=split_topics(row.topics_nl),
        topics_fr=split_topics(row.topics_fr),
        topics_summary_nl=summary,
        # Only Dutch summaries are generated; both languages show the same text.
        topics_summary_fr=summary,
        discussion=parse_discussion(row.discussion, row.question_id, lookups.party_by_name),
        dossier_ids=split_names(row.dossier_ids),
        topic_tags=matcher.tags(row.topics_nl) if matcher else [],
    )


def iter_questions(
    plenary_rows: Iterable[QuestionRow],
    commission_rows: Iterable[QuestionRow],
    lookups: Lookups,
    matcher: Optional[TopicMatcher] = None,
) -> Iterator[Question]:
    for row in plenary_rows:
        yield build_question(row, "plenary", lookups, matcher)
    for row in commission_rows:
        if (row.session_id or "") == BAD_SESSION_ID:
            continue
        yield build_question(row, "commission", lookups, matcher)


def build_questions(
    plenary_rows: Iterable[QuestionRow],
    commission_rows: Iterable[QuestionRow],
    lookups: Lookups,
    matcher: Optional[TopicMatcher] = None,
) -> List[Question]:
    return list(iter_questions(plenary_rows, commission_rows, lookups, matcher))


def _topic_at(topics: List[str], index: int) -> Optional[str]:
    if index < len(topics) and topics[index]:
        return topics[index]
    return None


def mentions(question: Question) -> Iterator[Tuple[str, QuestionMention]]:
    """Yield ``(member key, mention)`` for every participant of ``question``.

    A questioner is paired with the topic at their own position in the topic
    list; respondents are paired with the first topic.
    """

    def mention(topic_index: int, as_respondent: bool) -> QuestionMention:
        return QuestionMention(
            type=question.type,
            question_id=question.question_id,
            session_id=question.session_id,
            meeting_id=question.meeting_id,
            date=question.date,
            topic_nl=_topic_at(question.topics_nl, topic_index),
            topic_fr=_topic_at(question.topics_fr, topic_index),
            questioners=question.questioners,
            respondents=question.respondents,
            discussion=question.discussion,
            as_respondent=as_respondent,
        )

    for index, questioner in enumerate(question.questioners):
        yield normalize_name(questioner.name), mention(index, False)
    for respondent in question.respondents:
        yield normalize_name(respondent.name), mention(0, True)


__all__ = ["build_question", "build_questions", "iter_questions", "mentions"]
