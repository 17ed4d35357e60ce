"""Small helpers shared by the entity joiners."""
from __future__ import annotations

from typing import Any, List, Mapping, Optional
import json
import logging

from ..core.names import normalize_name, split_names
from ..core.types import UNKNOWN_PARTY, DiscussionTurn, PartyMember
from ..core.values import (
    content_hash,
    convert_date,
    is_active,
    parse_amount,
    parse_count,
    parse_iso_date,
    party_color,
)

LOGGER = logging.getLogger(__name__)

#: Sentinel session id the commission scraper writes for pages it could not resolve.
BAD_SESSION_ID = "404"


def resolve_party(name: str, party_by_name: Mapping[str, str]) -> str:
    return party_by_name.get(normalize_name(name)) or UNKNOWN_PARTY


def with_parties(raw: Optional[str], party_by_name: Mapping[str, str]) -> List[PartyMember]:
    """Split a comma separated name list and annotate every name with its party.

    Unresolved names keep the ``Unknown`` party; they are never dropped.
    """

    return [PartyMember(name=name, party=resolve_party(name, party_by_name)) for name in split_names(raw)]


def parse_discussion(raw: Any, record_id: Optional[str], party_by_name: Mapping[str, str]) -> List[DiscussionTurn]:
    """Parse a serialised discussion transcript.

    A transcript that is not valid JSON or not a list is replaced by an empty
    one and a warning naming ``record_id`` is logged.
    """

    if raw is None or raw == "":
        return []
    try:
        parsed = json.loads(raw) if isinstance(raw, str) else raw
    except (TypeError, ValueError) as exc:
        LOGGER.warning("Question %s: cannot parse discussion (%s)", record_id, exc)
        return []
    if not isinstance(parsed, list):
        LOGGER.warning("Question %s: discussion is not a list, skipping", record_id)
        return []
    turns: List[DiscussionTurn] = []
    for item in parsed:
        if not isinstance(item, Mapping):
            LOGGER.warning("Question %s: ignoring malformed discussion entry %r", record_id, item)
            continue
        speaker = str(item.get("speaker") or "").strip()
        turns.append(
            DiscussionTurn(
                speaker=PartyMember(name=speaker, party=resolve_party(speaker, party_by_name)),
                text=str(item.get("text") or ""),
            )
        )
    return turns


__all__ = [
    "BAD_SESSION_ID",
    "content_hash",
    "convert_date",
    "is_active",
    "parse_amount",
    "parse_count",
    "parse_discussion",
    "parse_iso_date",
    "party_color",
    "resolve_party",
    "with_parties",
]
