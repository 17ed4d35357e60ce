"""Errors raised while reading dataset tables."""
from __future__ import annotations


class SourceError(RuntimeError):
    """Base class for row source failures."""


class UnknownTableError(SourceError):
    """Raised for a table name that is not part of the dataset schema."""


class MissingTableError(SourceError):
    """Raised when the data for a known table is not available."""


class SchemaError(SourceError):
    """Raised when rows do not match the pinned column layout of their table."""


__all__ = ["MissingTableError", "SchemaError", "SourceError", "UnknownTableError"]
