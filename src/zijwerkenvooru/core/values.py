"""Parsers for the loosely typed scalar columns of the dataset."""
from __future__ import annotations

from datetime import date
from typing import Any, Mapping, Optional
import hashlib


def convert_date(raw: Optional[str]) -> Optional[str]:
    """Convert a ``DD/MM/YYYY`` date to ISO format, or return ``None``."""

    if not raw or not isinstance(raw, str):
        return None
    parts = raw.strip().split("/")
    if len(parts) != 3 or not all(part.strip() for part in parts):
        return None
    day, month, year = (part.strip() for part in parts)
    try:
        return date(int(year), int(month), int(day)).isoformat()
    except ValueError:
        return None


def parse_iso_date(raw: Optional[str]) -> Optional[date]:
    if not raw:
        return None
    try:
        return date.fromisoformat(raw.strip()[:10])
    except ValueError:
        return None


def parse_count(raw: Optional[str]) -> int:
    if raw is None:
        return 0
    try:
        return int(str(raw).strip())
    except ValueError:
        return 0


def parse_amount(raw: Optional[str]) -> float:
    """Parse an amount written with a decimal comma and optional thousands dots; unparseable text gives 0."""

    if raw is None:
        return 0.0
    text = str(raw).strip()
    if "," in text:
        text = text.replace(".", "").replace(",", ".")
    try:
        return float(text)
    except ValueError:
        return 0.0


def content_hash(text: str) -> str:
    """SHA-256 hex digest of ``text`` as used for summary lookups."""

    return hashlib.sha256(text.encode("utf8")).hexdigest()


def party_color(colors: Mapping[str, Any], party: Optional[str], default: str = "gray") -> str:
    entry = colors.get((party or "").lower())
    if isinstance(entry, Mapping) and entry.get("primary"):
        return str(entry["primary"])
    return default


def is_active(raw: Optional[str]) -> bool:
    return (raw or "").strip().lower() == "true"


__all__ = [
    "content_hash",
    "convert_date",
    "is_active",
    "parse_amount",
    "parse_count",
    "parse_iso_date",
    "party_color",
]
