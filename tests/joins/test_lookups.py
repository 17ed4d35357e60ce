from __future__ import annotations

from zijwerkenvooru.core.types import MeetingKey
from zijwerkenvooru.joins.lookups import date_by_meeting_key, dossier_by_id, party_by_name


def test_party_lookup_keeps_latest_party(tables):
    parties = party_by_name(tables["members"])

    assert parties == {"jane-doe": "Green", "john-smith": "Blue", "ann-lee": "Red"}


def test_meeting_dates_are_separate_per_table(tables):
    plenary = date_by_meeting_key(tables["meetings"])
    commission = date_by_meeting_key(tables["commissions"])

    assert plenary[MeetingKey("55", "2")] == "2024-01-11"
    assert commission == {MeetingKey("55", "1"): "2024-01-10"}


def test_dossier_lookup_converts_vote_date(tables):
    dossier = dossier_by_id(tables["dossiers"])["D1"]

    assert dossier.authors == ["Jane Doe", "John Roe"]
    assert dossier.vote_date == "2024-01-15"
    assert dossier.document_type == "Wetsontwerp"


def test_lookups_bundle(lookups):
    assert len(lookups.summaries) == 2
    assert MeetingKey("404", "9") not in lookups.commission_dates
