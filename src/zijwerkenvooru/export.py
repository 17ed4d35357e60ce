"""JSON serialisation of the joined view-models for the page templates."""
from __future__ import annotations

from dataclasses import asdict, is_dataclass
from pathlib import Path
from typing import Any, Mapping, Union
import json
import logging

LOGGER = logging.getLogger(__name__)


def to_jsonable(value: Any) -> Any:
    """Turn records, lists and mappings into plain JSON compatible values."""

    if is_dataclass(value) and not isinstance(value, type):
        return asdict(value)
    if isinstance(value, Mapping):
        return {str(key): to_jsonable(item) for key, item in value.items()}
    if isinstance(value, (list, tuple)):
        return [to_jsonable(item) for item in value]
    return value


def write_json(path: Union[str, Path], value: Any) -> Path:
    target = Path(path)
    target.parent.mkdir(parents=True, exist_ok=True)
    with target.open("w", encoding="utf8") as fh:
        json.dump(to_jsonable(value), fh, ensure_ascii=False, indent=2)
        fh.write("\n")
    LOGGER.debug("Wrote %s", target)
    return target


__all__ = ["to_jsonable", "write_json"]
