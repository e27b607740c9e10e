from __future__ import annotations

from sqlite3 import Connection
from typing import Any, Dict, Mapping, Optional

from ..schema import TableSchema


def create_table(conn: Connection, schema: TableSchema):
    # No IF NOT EXISTS: creating an existing table must fail.
    conn.execute(schema.create_sql())


def drop_table(conn: Connection, schema: TableSchema):
    conn.execute(f"DROP TABLE IF EXISTS {schema.name}")


def table_info(conn: Connection, name: str) -> Optional[Dict[str, Any]]:
    row = conn.execute(
        "SELECT * FROM sqlite_master WHERE type = 'table' AND name = ?",
        (name,),
    ).fetchone()
    return dict(row) if row else None


def insert_row(conn: Connection, schema: TableSchema, values: Mapping[str, Any]) -> int:
    """Insert one row and return the primary key generated for this statement."""
    cols = [c for c in schema.value_columns if c in values]
    pk = schema.primary_key.name
    if cols:
        sql = "INSERT INTO {}({}) VALUES({}) RETURNING {}".format(
            schema.name, ", ".join(cols), ", ".join(["?"] * len(cols)), pk
        )
    else:
        sql = f"INSERT INTO {schema.name} DEFAULT VALUES RETURNING {pk}"
    cur = conn.execute(sql, [values[c] for c in cols])
    try:
        rows = cur.fetchall()
    finally:
        cur.close()
    return rows[0][0]
