"""Dossiers with their subdocuments and the votes on each subdocument."""
from __future__ import annotations

from typing import Dict, Iterable, List, Mapping, Optional
import re

from ..core.types import Dossier, Subdocument, SubdocumentKey, SubdocumentVote
from ..sources.schema import DossierRow, SubdocumentRow, VoteRow
from .common import convert_date, parse_count, with_parties

_TRAILING_NUMBER = re.compile(r"(\d+)$")


def subdocument_number(document_id: Optional[str]) -> Optional[str]:
    """Trailing number of a document id, zero padded to three digits.

    ``"55K1234/004"`` becomes ``"004"`` and ``"7"`` becomes ``"007"``; ids
    without a trailing number give ``None``.
    """

    match = _TRAILING_NUMBER.search(str(document_id or "").strip())
    if not match:
        return None
    return match.group(1).zfill(3)


def votes_by_subdocument(rows: Iterable[VoteRow]) -> Dict[SubdocumentKey, List[SubdocumentVote]]:
    votes: Dict[SubdocumentKey, List[SubdocumentVote]] = {}
    for row in rows:
        number = subdocument_number(row.document_id)
        if number is None:
            continue
        votes.setdefault(SubdocumentKey(row.dossier_id or "", number), []).append(
            SubdocumentVote(
                vote_id=row.vote_id or "",
                session_id=row.session_id or "",
                meeting_id=row.meeting_id or "",
                yes_count=parse_count(row.yes),
                no_count=parse_count(row.no),
                abstain_count=parse_count(row.abstain),
                dossier_id=row.dossier_id or None,
                document_id=row.document_id or None,
            )
        )
    return votes


def build_dossiers(
    dossier_rows: Iterable[DossierRow],
    subdocument_rows: Iterable[SubdocumentRow],
    vote_rows: Iterable[VoteRow],
    party_by_name: Mapping[str, str],
) -> List[Dossier]:
    """Dossiers grouped by session in order of first appearance.

    Subdocuments keep their source order within a dossier. Votes attach to a
    subdocument when their dossier id matches and the trailing number of
    their document id equals the subdocument id.
    """

    votes = votes_by_subdocument(vote_rows)
    subdocuments: Dict[str, List[Subdocument]] = {}
    for row in subdocument_rows:
        dossier_id = row.dossier_id or ""
        subdocument_id = row.subdocument_id or ""
        subdocuments.setdefault(dossier_id, []).append(
            Subdocument(
                id=subdocument_id,
                date=convert_date(row.date),
                type=row.type or None,
                authors=with_parties(row.authors, party_by_name),
                votes=votes.get(SubdocumentKey(dossier_id, subdocument_id), []),
            )
        )

    by_session: Dict[str, List[Dossier]] = {}
    for row in dossier_rows:
        dossier_id = row.dossier_id or ""
        session_id = row.session_id or ""
        by_session.setdefault(session_id, []).append(
            Dossier(
                dossier_id=dossier_id,
                session_id=session_id,
                title=row.title,
                authors=with_parties(row.authors, party_by_name),
                submission_date=convert_date(row.submission_date),
                end_date=convert_date(row.end_date),
                vote_date=convert_date(row.vote_date),
                document_type=row.document_type or None,
                status=row.status or None,
                subdocuments=subdocuments.get(dossier_id, []),
            )
        )
    return [dossier for dossiers in by_session.values() for dossier in dossiers]


__all__ = ["build_dossiers", "subdocument_number", "votes_by_subdocument"]
