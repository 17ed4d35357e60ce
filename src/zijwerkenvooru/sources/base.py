"""Row source contract and helpers shared by all implementations."""
from __future__ import annotations

from concurrent.futures import ThreadPoolExecutor
from typing import Dict, List, Mapping, Protocol, Sequence, runtime_checkable
import logging

from .errors import MissingTableError, UnknownTableError
from .schema import ROW_TYPES, typed_rows

LOGGER = logging.getLogger(__name__)


@runtime_checkable
class RowSource(Protocol):
    """Anything able to return all rows of a dataset table in source order."""

    def read_table(self, name: str) -> List[tuple]:
        ...


class MemoryRowSource:
    """Row source backed by in-memory sequences, keyed by table name."""

    def __init__(self, tables: Mapping[str, Sequence[Sequence[object]]]) -> None:
        unknown = [name for name in tables if name not in ROW_TYPES]
        if unknown:
            raise UnknownTableError(f"Unknown tables: {', '.join(sorted(unknown))}")
        self._tables = {name: [tuple(row) for row in rows] for name, rows in tables.items()}

    def read_table(self, name: str) -> List[tuple]:
        if name not in ROW_TYPES:
            raise UnknownTableError(f"Unknown table {name!r}")
        try:
            return list(self._tables[name])
        except KeyError:
            raise MissingTableError(f"Table {name!r} is not available") from None


def read_tables(source: RowSource, names: Sequence[str], *, max_workers: int = 4) -> Dict[str, List[tuple]]:
    """Read ``names`` concurrently and return their typed rows.

    The reads are independent, so they run on a small thread pool. The first
    failure is re-raised once every read has finished.
    """

    unique = list(dict.fromkeys(names))
    if not unique:
        return {}
    workers = max(1, min(max_workers, len(unique)))
    with ThreadPoolExecutor(max_workers=workers, thread_name_prefix="row-source") as executor:
        futures = {name: executor.submit(source.read_table, name) for name in unique}
    result: Dict[str, List[tuple]] = {}
    for name, future in futures.items():
        rows = future.result()
        result[name] = typed_rows(name, rows)
        LOGGER.debug("Read %s rows from table %s", len(rows), name)
    return result


__all__ = ["MemoryRowSource", "RowSource", "read_tables"]
