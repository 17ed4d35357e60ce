"""Row source reading the scraped Parquet files."""
from __future__ import annotations

from pathlib import Path
from typing import List, Union
import logging

import pyarrow.parquet as pq

from .errors import MissingTableError, SchemaError
from .schema import table_columns

LOGGER = logging.getLogger(__name__)


class ParquetRowSource:
    """Reads ``<directory>/<table>.parquet`` files in pinned column order."""

    def __init__(self, directory: Union[str, Path]) -> None:
        self._directory = Path(directory)

    @property
    def directory(self) -> Path:
        return self._directory

    def path_for(self, name: str) -> Path:
        return self._directory / f"{name}.parquet"

    def has_table(self, name: str) -> bool:
        table_columns(name)
        return self.path_for(name).exists()

    def read_table(self, name: str) -> List[tuple]:
        columns = table_columns(name)
        path = self.path_for(name)
        if not path.exists():
            raise MissingTableError(f"Parquet file {path} not found")
        table = pq.read_table(path)
        if table.num_columns != len(columns):
            raise SchemaError(
                f"Parquet file {path} has {table.num_columns} columns, expected {len(columns)}"
            )
        # Columns are positional: the file's own names are not trusted.
        values = [table.column(index).to_pylist() for index in range(table.num_columns)]
        LOGGER.debug("Loaded %s rows from %s", table.num_rows, path)
        return list(zip(*values)) if values else []


__all__ = ["ParquetRowSource"]
