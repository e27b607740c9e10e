from __future__ import annotations


class StoreError(RuntimeError):
    """Base exception for question_bank storage operations."""


class SchemaError(StoreError):
    """Raised when a table-creation statement fails (e.g. the table already exists)."""


class StorageError(StoreError):
    """Raised when a row write fails (e.g. missing table, closed connection)."""
