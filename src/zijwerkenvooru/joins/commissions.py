"""Flat listings: commission sittings, lobby registrations and vote ids."""
from __future__ import annotations

from typing import Iterable, List, Mapping

from ..core.types import CommissionSitting, LobbyRecord
from ..sources.schema import CommissionRow, LobbyRow, VoteRow
from .common import BAD_SESSION_ID, with_parties


def build_commissions(rows: Iterable[CommissionRow], party_by_name: Mapping[str, str]) -> List[CommissionSitting]:
    return [
        CommissionSitting(
            session_id=row.session_id or "",
            commission_id=row.commission_id or "",
            date=row.date or None,
            time_of_day=row.time_of_day or None,
            start_time=row.start_time or None,
            end_time=row.end_time or None,
            commission=row.commission or None,
            chairs=with_parties(row.chair, party_by_name),
        )
        for row in rows
        if (row.session_id or "") != BAD_SESSION_ID
    ]


def build_lobby(rows: Iterable[LobbyRow]) -> List[LobbyRecord]:
    return [
        LobbyRecord(name=row.name or "", contacts=row.contacts, interests=row.interests, url=row.url)
        for row in rows
    ]


def vote_index(rows: Iterable[VoteRow]) -> List[str]:
    """Every vote id in source order, used to generate one page per vote."""

    return [row.vote_id for row in rows if row.vote_id]


__all__ = ["build_commissions", "build_lobby", "vote_index"]
