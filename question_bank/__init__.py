"""SQLite-backed persistence for quiz questions."""
from __future__ import annotations

from .errors import SchemaError, StorageError, StoreError
from .models import Question
from .schema import QUESTIONS, Column, TableSchema

__all__ = [
    "Column",
    "QUESTIONS",
    "Question",
    "SchemaError",
    "StorageError",
    "StoreError",
    "TableSchema",
]
