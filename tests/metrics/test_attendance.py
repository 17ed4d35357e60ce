from __future__ import annotations

from datetime import date

import pytest

from zijwerkenvooru.core.types import MemberVote
from zijwerkenvooru.metrics import member_attendance


def _votes(*dates):
    return [MemberVote(str(i), "55", "1", day, None, None, "yes", False) for i, day in enumerate(dates)]


VOTE_DATES = [date(2024, 1, 10), date(2024, 1, 10), date(2024, 1, 11), date(2024, 2, 1), None]


def test_attendance_counts_votes_on_or_after_start():
    attendance, normalized = member_attendance(_votes("2024-01-11", "2024-02-01"), VOTE_DATES, date(2024, 1, 11))

    assert attendance == pytest.approx(1.0)
    assert normalized == pytest.approx(1.0)


def test_unknown_start_makes_every_dated_vote_eligible():
    attendance, normalized = member_attendance(_votes("2024-01-10", "2024-01-10"), VOTE_DATES, None)

    assert attendance == pytest.approx(2 / 4)
    assert normalized == pytest.approx(1 / 3)


def test_no_eligible_votes_gives_zero():
    assert member_attendance(_votes("2024-01-10"), VOTE_DATES, date(2030, 1, 1)) == (0.0, 0.0)
    assert member_attendance([], [], None) == (0.0, 0.0)
