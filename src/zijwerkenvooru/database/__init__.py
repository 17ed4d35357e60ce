"""Database integration components."""
from __future__ import annotations

from .models import DATASET_TABLES, Base, SummaryModel
from .source import SQLRowSource
from .storage import Storage, TableOverview, create_storage

__all__ = [
    "Base",
    "DATASET_TABLES",
    "SQLRowSource",
    "Storage",
    "SummaryModel",
    "TableOverview",
    "create_storage",
]
