from __future__ import annotations

import hashlib
import json
from typing import Dict, List

import pytest

from zijwerkenvooru.joins import Lookups, build_lookups
from zijwerkenvooru.sources import typed_rows


def _hash(text: str) -> str:
    return hashlib.sha256(text.encode("utf8")).hexdigest()


DISCUSSION = json.dumps(
    [
        {"speaker": "Jane Doe", "text": "Wat doet de regering?"},
        {"speaker": "Minister Peeters", "text": "We werken eraan."},
    ]
)


@pytest.fixture()
def raw_tables() -> Dict[str, List[tuple]]:
    return {
        "members": [
            ("m1", "55", "Jane", "Doe", "F", "1980-05-20", "Gent", "nl", "Oost-Vlaanderen", "Green", "Green", "jane@example.org", "true", "2024-01-01"),
            ("m2", "55", "John", "Smith", "M", "1975-01-01", "Luik", "fr", "Luik", "Blue", "Blue", "john@example.org", "true", "NA"),
            ("m3", "55", "Ann", "Lee", "F", "1990-12-31", "Brugge", "nl", "West-Vlaanderen", "Green", "Green", "ann@example.org", "false", "2019-06-01"),
            ("m3", "56", "Ann", "Lee", "F", "1990-12-31", "Brugge", "nl", "West-Vlaanderen", "Red", "Red", "ann@example.org", "false", "2019-06-01"),
        ],
        "meetings": [
            ("55", "1", "2024-01-10", "morning", "14h00", "17h30"),
            ("55", "2", "2024-01-11", "evening", "20h00", "01h15"),
        ],
        "commissions": [
            ("55", "1", "2024-01-10", "afternoon", "10h00", "12h00", "Financiën", "Jane Doe"),
            ("404", "9", "2024-01-10", "", "", "", "Onbekend", "Nobody"),
        ],
        "votes": [
            ("1", "55", "1", "2024-01-10", "Stemming klimaat", "Vote climat", "2", "1", "0", "Jane Doe,Ann Lee", "John Smith", "", "D1", "55K0001/002", ""),
            ("2", "55", "2", "2024-01-11", "Stemming pensioen", "Vote pension", "1", "0", "1", "John Smith", "", "Jane Doe", "D9", "55K0009/001", ""),
            ("3", "55", "7", "2024-01-12", "Verloren stemming", "Vote perdu", "1", "0", "0", "John Smith", "", "", "D1", "55K0001/003", ""),
        ],
        "questions": [
            ("q1", "55", "1", "Jane Doe,John Smith", "Minister Peeters", "klimaat;pensioen", "climat;pension", DISCUSSION, "D1"),
        ],
        "commission_questions": [
            ("cq1", "55", "1", "John Smith", "Minister Peeters", "begroting", "budget", "[]", ""),
            ("cq2", "404", "9", "Jane Doe", "Minister Peeters", "iets", "quelque chose", "[]", ""),
        ],
        "propositions": [
            ("p1", "55", "1", "Wetsontwerp klimaat", "Projet climat", "D1", "55K0001/001"),
        ],
        "dossiers": [
            ("55", "D1", "Wetsontwerp klimaat", "Jane Doe,John Roe", "01/01/2024", "", "15/01/2024", "Wetsontwerp", "Aangenomen"),
        ],
        "subdocuments": [
            ("D1", "002", "02/01/2024", "Amendement", "Jane Doe"),
        ],
        "remunerations": [
            ("Jane", "Doe", "2023", "Bestuurder", "Intercommunale", "1000", "5000"),
            ("Jane", "Doe", "2023", "Voorzitter", "Vzw", "0", "999,5"),
        ],
        "summaries": [
            (_hash("klimaat;pensioen"), "klimaat;pensioen", "Klimaat en pensioenen", "gemini-2.5-flash"),
            (_hash("Wetsontwerp klimaat."), "Wetsontwerp klimaat.", "Wet over klimaat", "gemini-2.5-flash"),
        ],
        "lobby": [
            ("Lobby BV", "Jane Doe", "Energie", "https://example.org/lobby"),
        ],
    }


@pytest.fixture()
def tables(raw_tables) -> Dict[str, List[tuple]]:
    return {name: typed_rows(name, rows) for name, rows in raw_tables.items()}


@pytest.fixture()
def lookups(tables) -> Lookups:
    return build_lookups(
        members=tables["members"],
        meetings=tables["meetings"],
        commissions=tables["commissions"],
        dossiers=tables["dossiers"],
        summaries=tables["summaries"],
    )


@pytest.fixture()
def taxonomy() -> Dict[str, dict]:
    return {
        "climate": {
            "nl": "Klimaat",
            "icon": "leaf",
            "keywords": ["klimaat"],
            "subtopics": {"energy": ["energie", "kernenergie"]},
        },
        "pensions": {
            "nl": "Pensioenen",
            "icon": "cane",
            "keywords": ["pensioen"],
            "subtopics": {},
        },
    }


@pytest.fixture()
def party_colors() -> Dict[str, dict]:
    return {"green": {"primary": "#00aa00"}, "blue": {"primary": "#0000aa"}}
