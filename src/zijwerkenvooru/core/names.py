"""Canonical lookup keys for member names."""
from __future__ import annotations

from typing import List, Optional
import re

_WHITESPACE = re.compile(r"\s+")


def normalize_name(name: Optional[str]) -> str:
    """Return the lookup key for a display name.

    Surrounding whitespace is dropped, the name is lowercased and every run of
    inner whitespace becomes a single hyphen (``"Jane  Doe" -> "jane-doe"``).
    Applying the function to an existing key returns the key unchanged.
    """

    if not name:
        return ""
    return _WHITESPACE.sub("-", name.strip().lower())


def full_name(first_name: Optional[str], last_name: Optional[str]) -> str:
    return " ".join(part.strip() for part in (first_name or "", last_name or "") if part and part.strip())


def split_names(raw: Optional[str]) -> List[str]:
    """Split a comma separated name list, dropping empty entries."""

    if not raw:
        return []
    return [name.strip() for name in raw.split(",") if name.strip()]


def split_topics(raw: Optional[str]) -> List[str]:
    if not raw:
        return []
    return [topic.strip() for topic in raw.split(";")]


__all__ = ["full_name", "normalize_name", "split_names", "split_topics"]
