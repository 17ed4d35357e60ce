"""Row source reading dataset tables through SQLAlchemy."""
from __future__ import annotations

from typing import List
import logging

from sqlalchemy import inspect, select
from sqlalchemy.engine import Engine

from ..sources.errors import MissingTableError, UnknownTableError
from ..sources.schema import table_columns
from .models import DATASET_TABLES

LOGGER = logging.getLogger(__name__)


class SQLRowSource:
    """Reads tables created by :class:`~zijwerkenvooru.database.Storage`."""

    def __init__(self, engine: Engine) -> None:
        self._engine = engine

    def read_table(self, name: str) -> List[tuple]:
        table = DATASET_TABLES.get(name)
        if table is None:
            raise UnknownTableError(f"Unknown table {name!r}")
        if not inspect(self._engine).has_table(name):
            raise MissingTableError(f"Table {name!r} does not exist in the database")
        columns = [table.c[column] for column in table_columns(name)]
        stmt = select(*columns).order_by(table.c.row_id)
        with self._engine.connect() as connection:
            rows = [tuple(row) for row in connection.execute(stmt)]
        LOGGER.debug("Loaded %s rows from database table %s", len(rows), name)
        return rows


__all__ = ["SQLRowSource"]
