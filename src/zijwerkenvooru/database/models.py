"""SQLAlchemy tables mirroring the scraped dataset."""
from __future__ import annotations

from datetime import datetime
from typing import Dict, Optional

from sqlalchemy import Column, DateTime, Integer, String, Table, Text, func
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column

from ..sources.schema import ROW_TYPES


class Base(DeclarativeBase):
    """Declarative SQLAlchemy base class."""


class SummaryModel(Base):
    """Generated summary of a question topic string or proposition title."""

    __tablename__ = "summaries"

    row_id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    input_hash: Mapped[str] = mapped_column(String(64), index=True, unique=True)
    original: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    summary: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    model: Mapped[Optional[str]] = mapped_column(String(128), nullable=True)
    created_at: Mapped[datetime] = mapped_column(DateTime, server_default=func.now())


def _dataset_table(name: str) -> Table:
    columns = ROW_TYPES[name]._fields  # type: ignore[attr-defined]
    return Table(
        name,
        Base.metadata,
        Column("row_id", Integer, primary_key=True, autoincrement=True),
        *(Column(column, Text, nullable=True) for column in columns),
    )


DATASET_TABLES: Dict[str, Table] = {
    name: _dataset_table(name) for name in ROW_TYPES if name != SummaryModel.__tablename__
}
DATASET_TABLES[SummaryModel.__tablename__] = SummaryModel.__table__  # type: ignore[assignment]


__all__ = ["Base", "DATASET_TABLES", "SummaryModel"]
