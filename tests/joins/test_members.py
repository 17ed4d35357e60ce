from __future__ import annotations

from datetime import date

import pytest

from zijwerkenvooru.core.types import PartySeats
from zijwerkenvooru.joins import active_members, build_members, build_members_data
from zijwerkenvooru.joins.members import age_on, income
from zijwerkenvooru.sources import typed_rows
from zijwerkenvooru.topics import TopicMatcher


@pytest.fixture()
def members(tables, lookups):
    return build_members(
        member_rows=tables["members"],
        proposition_rows=tables["propositions"],
        subdocument_rows=tables["subdocuments"],
        remuneration_rows=tables["remunerations"],
        question_rows=tables["questions"],
        commission_question_rows=tables["commission_questions"],
        vote_rows=tables["votes"],
        lookups=lookups,
        today=date(2024, 6, 1),
    )


def _by_key(members):
    return {member.key: member for member in members}


def test_one_member_per_person_in_first_seen_order(members):
    assert [member.key for member in members] == ["jane-doe", "john-smith", "ann-lee"]
    ann = _by_key(members)["ann-lee"]
    assert ann.sessions == ["55", "56"]
    assert ann.parties == ["Green", "Red"]
    assert ann.party == "Green"
    assert ann.active is False
    assert ann.age == 33


def test_member_collections(members):
    jane = _by_key(members)["jane-doe"]

    assert [p.proposition_id for p in jane.propositions] == ["p1"]
    assert jane.propositions[0].vote_date == "2024-01-15"
    assert [(s.date, s.type) for s in jane.subdocuments] == [("2024-01-02", "Amendement")]
    assert [q.topic_nl for q in jane.questions] == ["klimaat"]
    assert jane.commission_questions == []
    year = jane.remunerations["2023"]
    assert len(year.entries) == 2
    assert year.total_min == 1000
    assert year.total_max == pytest.approx(5999.5)


def test_questions_and_commission_questions_are_split(members):
    john = _by_key(members)["john-smith"]

    assert [q.topic_nl for q in john.questions] == ["pensioen"]
    assert [q.topic_nl for q in john.commission_questions] == ["begroting"]


def test_member_votes_and_metrics(members):
    jane, john, ann = members

    assert [(vote.vote_id, vote.vote) for vote in jane.votes] == [("1", "yes"), ("2", "abstain")]
    assert [(vote.vote_id, vote.vote) for vote in john.votes] == [("1", "no"), ("2", "yes"), ("3", "yes")]
    assert len(ann.votes) == 1
    assert not any(vote.outlier for member in members for vote in member.votes)
    assert jane.attendance == pytest.approx(2 / 3)
    assert jane.normalized_attendance == pytest.approx(2 / 3)
    assert john.attendance == pytest.approx(1.0)
    assert jane.outlier == 100.0
    assert (jane.age, john.age) == (44, 49)


def test_member_voting_against_party_is_an_outlier(lookups):
    member_rows = typed_rows(
        "members",
        [
            ("a", "55", "Jane", "Doe", "", "", "", "nl", "", "Green", "", "", "true", "NA"),
            ("b", "55", "Bo", "Bee", "", "", "", "nl", "", "Green", "", "", "true", "NA"),
            ("c", "55", "Cy", "Cee", "", "", "", "nl", "", "Green", "", "", "true", "NA"),
        ],
    )
    vote_rows = typed_rows(
        "votes",
        [("1", "55", "1", "2024-01-10", "", "", "2", "1", "0", "Bo Bee,Cy Cee", "Jane Doe", "", "", "", "")],
    )
    lookups.party_by_name.update({"bo-bee": "Green", "cy-cee": "Green"})

    jane, bo, _ = build_members(member_rows=member_rows, vote_rows=vote_rows, lookups=lookups, today=date(2024, 6, 1))

    assert jane.votes[0].outlier is True
    assert jane.outlier == 0.0
    assert bo.votes[0].outlier is False
    assert bo.outlier == 100.0


def test_member_listed_twice_keeps_first_choice(lookups):
    member_rows = typed_rows("members", [("a", "55", "Jane", "Doe", "", "", "", "nl", "", "Green", "", "", "true", "NA")])
    vote_rows = typed_rows(
        "votes", [("1", "55", "1", "2024-01-10", "", "", "1", "1", "0", "Jane Doe", "Jane Doe", "", "", "", "")]
    )

    (jane,) = build_members(member_rows=member_rows, vote_rows=vote_rows, lookups=lookups)

    assert [vote.vote for vote in jane.votes] == ["yes"]


def test_members_data_aggregates(members, tables, taxonomy, party_colors):
    data = build_members_data(
        members,
        member_row_count=len(tables["members"]),
        colors=party_colors,
        matcher=TopicMatcher(taxonomy),
        income_year="2023",
    )

    assert data.member_count == 4
    assert data.ages == [44, 49, 33]
    assert data.incomes == [pytest.approx(3499.75), 0.0, 0.0]
    assert data.parties == [PartySeats("Green", 1, "#00aa00"), PartySeats("Blue", 1, "#0000aa")]
    assert [node.id for node in data.graph.nodes] == ["m1", "m2"]
    assert data.graph.links == []
    climate = data.top_contributors_by_topic["climate"]
    assert [(c.name, c.total, c.questions, c.propositions) for c in climate] == [("Jane Doe", 2, 1, 1)]
    assert [c.name for c in data.top_contributors_by_topic["pensions"]] == ["John Smith"]


def test_income_without_declaration_is_zero(members):
    assert income(members[0], "1999") == 0.0


def test_active_members_use_row_party(tables):
    assert [(m.name, m.party) for m in active_members(tables["members"])] == [
        ("Jane Doe", "Green"),
        ("John Smith", "Blue"),
    ]


@pytest.mark.parametrize(
    ("birth", "expected"),
    [("1980-06-01", 44), ("1980-06-02", 43), ("", None), ("unknown", None)],
)
def test_age_on(birth, expected):
    assert age_on(birth, date(2024, 6, 1)) == expected


def test_party_switcher_is_compared_with_latest_party(tables, lookups):
    vote_rows = typed_rows(
        "votes", [("1", "55", "1", "2024-01-10", "", "", "1", "1", "0", "Ann Lee", "Jane Doe", "", "", "", "")]
    )

    members = build_members(member_rows=tables["members"], vote_rows=vote_rows, lookups=lookups)

    ann = _by_key(members)["ann-lee"]
    assert ann.parties == ["Green", "Red"]
    assert ann.votes[0].outlier is False
    assert _by_key(members)["jane-doe"].votes[0].outlier is False
