from __future__ import annotations

from dataclasses import replace
from datetime import date

from zijwerkenvooru.core.types import PartyMember
from zijwerkenvooru.joins import build_members, build_parties, build_propositions, build_questions


def _parties(tables, lookups, party_colors, propositions=None):
    members = build_members(
        member_rows=tables["members"],
        vote_rows=tables["votes"],
        lookups=lookups,
        today=date(2024, 6, 1),
    )
    questions = build_questions(tables["questions"], (), lookups)
    if propositions is None:
        propositions = build_propositions(tables["propositions"], lookups)
    return {party.name: party for party in build_parties(members, questions, propositions, party_colors)}


def test_parties_in_first_seen_order_with_seats(tables, lookups, party_colors):
    parties = _parties(tables, lookups, party_colors)

    assert list(parties) == ["Green", "Blue", "Red"]
    assert (parties["Green"].seats, parties["Blue"].seats, parties["Red"].seats) == (1, 1, 0)
    assert [m.first_name for m in parties["Green"].members] == ["Jane", "Ann"]
    assert parties["Green"].color == "#00aa00"
    assert parties["Red"].color == "gray"


def test_questions_listed_under_each_questioner_party(tables, lookups, party_colors):
    parties = _parties(tables, lookups, party_colors)

    assert [q.topic_nl for q in parties["Green"].questions] == ["klimaat"]
    assert [q.topic_nl for q in parties["Blue"].questions] == ["pensioen"]
    assert parties["Red"].questions == []


def test_propositions_listed_once_per_party(tables, lookups, party_colors):
    (proposition,) = build_propositions(tables["propositions"], lookups)
    shared = replace(
        proposition,
        proposition_id="p2",
        authors=[PartyMember("Jane Doe", "Green"), PartyMember("Ann Lee", "Green"), PartyMember("John Smith", "Blue")],
    )

    parties = _parties(tables, lookups, party_colors, propositions=[proposition, shared])

    assert [p.proposition_id for p in parties["Green"].propositions] == ["p1", "p2"]
    assert [p.proposition_id for p in parties["Blue"].propositions] == ["p2"]
    assert parties["Red"].propositions == []
