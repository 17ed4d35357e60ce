"""Persistence helpers built on SQLAlchemy."""

from __future__ import annotations

from contextlib import contextmanager
from dataclasses import dataclass
from typing import Iterator, List, Sequence, Set

from sqlalchemy import create_engine, delete, func, insert, select
from sqlalchemy.engine import Engine
from sqlalchemy.orm import Session, sessionmaker

from ..sources.errors import UnknownTableError
from ..sources.schema import table_columns
from .models import DATASET_TABLES, Base, SummaryModel


@dataclass(slots=True)
class TableOverview:
    """Row count of one stored dataset table."""

    name: str
    row_count: int


class Storage:
    """Wrapper around SQLAlchemy holding a copy of the dataset tables."""

    def __init__(self, engine: Engine) -> None:
        self._engine = engine
        self._session_factory = sessionmaker(bind=engine, expire_on_commit=False)

    @property
    def engine(self) -> Engine:
        return self._engine

    @contextmanager
    def session(self) -> Iterator[Session]:
        session = self._session_factory()
        try:
            yield session
            session.commit()
        except Exception:
            session.rollback()
            raise
        finally:
            session.close()

    def ensure_schema(self) -> None:
        Base.metadata.create_all(self._engine)

    def replace_rows(self, name: str, rows: Sequence[Sequence[object]]) -> int:
        """Replace the content of table ``name`` with ``rows`` (pinned column order)."""

        table = DATASET_TABLES.get(name)
        if table is None:
            raise UnknownTableError(f"Unknown table {name!r}")
        columns = table_columns(name)
        records = [dict(zip(columns, row)) for row in rows]
        if name == SummaryModel.__tablename__:
            records = _unique_by_hash(records)
        with self.session() as session:
            session.execute(delete(table))
            if records:
                session.execute(insert(table), records)
        return len(records)

    def merge_summaries(self, rows: Sequence[Sequence[object]]) -> int:
        """Upsert summary rows by ``input_hash``; summaries not in ``rows`` are kept."""

        columns = table_columns(SummaryModel.__tablename__)
        records = _unique_by_hash([dict(zip(columns, row)) for row in rows])
        with self.session() as session:
            existing = {
                model.input_hash: model
                for model in session.scalars(
                    select(SummaryModel).where(SummaryModel.input_hash.in_([r["input_hash"] for r in records]))
                )
            }
            for record in records:
                model = existing.get(record["input_hash"])
                if model is None:
                    session.add(SummaryModel(**record))
                    continue
                model.original = record["original"]
                model.summary = record["summary"]
                model.model = record["model"]
        return len(records)

    def summary_hashes(self) -> Set[str]:
        with self.session() as session:
            return set(session.scalars(select(SummaryModel.input_hash)))

    def add_summary(self, input_hash: str, *, original: str, summary: str, model: str | None = None) -> None:
        with self.session() as session:
            existing = session.scalars(
                select(SummaryModel).where(SummaryModel.input_hash == input_hash)
            ).first()
            if existing is None:
                session.add(SummaryModel(input_hash=input_hash, original=original, summary=summary, model=model))
            else:
                existing.original = original
                existing.summary = summary
                existing.model = model

    def table_counts(self) -> List[TableOverview]:
        """Return the number of stored rows per dataset table."""

        with self.session() as session:
            return [
                TableOverview(
                    name=name,
                    row_count=session.execute(select(func.count()).select_from(table)).scalar_one(),
                )
                for name, table in DATASET_TABLES.items()
            ]

    def dispose(self) -> None:
        """Dispose the underlying SQLAlchemy engine."""

        self._engine.dispose()


def _unique_by_hash(records: List[dict]) -> List[dict]:
    seen: Set[object] = set()
    unique = []
    for record in records:
        if record["input_hash"] in seen:
            continue
        seen.add(record["input_hash"])
        unique.append(record)
    return unique


def create_storage(database_url: str, *, echo: bool = False) -> Storage:
    engine = create_engine(database_url, echo=echo, future=True)
    storage = Storage(engine)
    storage.ensure_schema()
    return storage


__all__ = ["Storage", "TableOverview", "create_storage"]
