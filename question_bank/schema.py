"""Table definitions as plain values.

A TableSchema only describes a table; executing its DDL is the job of
repository.table_repo, so the entity classes never carry SQL themselves.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Tuple


@dataclass(frozen=True)
class Column:
    name: str
    type: str
    primary_key: bool = False

    def ddl(self) -> str:
        out = f"{self.name} {self.type}"
        if self.primary_key:
            out += " PRIMARY KEY"
        return out


@dataclass(frozen=True)
class TableSchema:
    name: str
    columns: Tuple[Column, ...]

    @property
    def primary_key(self) -> Column:
        for c in self.columns:
            if c.primary_key:
                return c
        raise ValueError(f"table {self.name} has no primary key column")

    @property
    def value_columns(self) -> Tuple[str, ...]:
        """Columns the caller supplies on insert (everything but the generated key)."""
        return tuple(c.name for c in self.columns if not c.primary_key)

    def create_sql(self) -> str:
        body = ",\n".join(f"  {c.ddl()}" for c in self.columns)
        return f"CREATE TABLE {self.name} (\n{body}\n)"


QUESTIONS = TableSchema(
    name="questions",
    columns=(
        Column("id", "INTEGER", primary_key=True),
        Column("content", "TEXT"),
    ),
)
