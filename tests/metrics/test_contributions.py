from __future__ import annotations

from dataclasses import replace
from datetime import date

from zijwerkenvooru.joins import build_members
from zijwerkenvooru.metrics import top_contributors
from zijwerkenvooru.topics import TopicMatcher


def _members(tables, lookups):
    return build_members(
        member_rows=tables["members"],
        proposition_rows=tables["propositions"],
        question_rows=tables["questions"],
        commission_question_rows=tables["commission_questions"],
        lookups=lookups,
        today=date(2024, 6, 1),
    )


def test_questions_and_propositions_are_counted_per_topic(tables, lookups, taxonomy):
    ranking = top_contributors(_members(tables, lookups), TopicMatcher(taxonomy))

    assert set(ranking) == {"climate", "pensions"}
    (jane,) = ranking["climate"]
    assert (jane.name, jane.party, jane.questions, jane.propositions, jane.total) == ("Jane Doe", "Green", 1, 1, 2)
    (john,) = ranking["pensions"]
    assert (john.name, john.total) == ("John Smith", 1)


def test_subtopic_hits_are_ranked_under_the_subtopic(tables, lookups, taxonomy):
    members = _members(tables, lookups)
    jane = members[0]
    members[0] = replace(
        jane,
        questions=[replace(jane.questions[0], topic_nl="kernenergie")],
        propositions=[],
    )

    ranking = top_contributors(members, TopicMatcher(taxonomy))

    assert [c.name for c in ranking["energy"]] == ["Jane Doe"]
    assert "climate" not in ranking


def test_ranking_is_limited_and_stable(tables, lookups, taxonomy):
    jane, john, ann = _members(tables, lookups)
    john = replace(john, questions=[jane.questions[0]])
    ann = replace(ann, questions=[jane.questions[0]] * 2)

    ranking = top_contributors([jane, john, ann], TopicMatcher(taxonomy), limit=2)

    assert [(c.name, c.total) for c in ranking["climate"]] == [("Jane Doe", 2), ("Ann Lee", 2)]
