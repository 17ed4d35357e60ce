"""Row sources supplying the positional dataset tables."""
from __future__ import annotations

from .base import MemoryRowSource, RowSource, read_tables
from .errors import MissingTableError, SchemaError, SourceError, UnknownTableError
from .parquet import ParquetRowSource
from .schema import ROW_TYPES, TABLE_NAMES, table_columns, typed_rows

__all__ = [
    "MemoryRowSource",
    "MissingTableError",
    "ParquetRowSource",
    "ROW_TYPES",
    "RowSource",
    "SchemaError",
    "SourceError",
    "TABLE_NAMES",
    "UnknownTableError",
    "read_tables",
    "table_columns",
    "typed_rows",
]
