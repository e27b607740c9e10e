"""
Gateway tests with an entity type other than Question, to check the SQL side
only goes through to_row / set_id.
"""
from __future__ import annotations

import asyncio
from dataclasses import dataclass
from typing import Optional

import pytest

from question_bank.errors import SchemaError, StorageError
from question_bank.logs import LogContext, ensure_log_schema, search_logs
from question_bank.schema import Column, TableSchema
from question_bank.services.gateway import Gateway

NOTES = TableSchema(
    name="notes",
    columns=(
        Column("note_id", "INTEGER", primary_key=True),
        Column("title", "TEXT"),
        Column("body", "TEXT"),
    ),
)


@dataclass
class Note:
    title: str
    body: str = ""
    key: Optional[int] = None


def _set_key(n: Note, new_id: int):
    n.key = new_id


@pytest.fixture()
def notes(conn):
    gw = Gateway(NOTES, lambda n: {"title": n.title, "body": n.body}, _set_key, entity_type="note")
    asyncio.run(gw.drop_table(conn))
    asyncio.run(gw.create_table(conn))
    yield gw
    asyncio.run(gw.drop_table(conn))


def test_insert_uses_entity_callables(conn, notes):
    n = asyncio.run(notes.insert(conn, Note("hello", "world")))

    assert n.key is not None
    row = conn.execute("SELECT * FROM notes WHERE note_id = ?", (n.key,)).fetchone()
    assert row["title"] == "hello"
    assert row["body"] == "world"


def test_create_table_returns_schema_and_rejects_duplicate(conn, notes):
    info = asyncio.run(notes.table_info(conn))
    assert info["name"] == "notes"
    assert "note_id INTEGER PRIMARY KEY" in info["sql"]

    with pytest.raises(SchemaError):
        asyncio.run(notes.create_table(conn))


def test_drop_table_is_safe_when_missing(conn, notes):
    asyncio.run(notes.drop_table(conn))
    asyncio.run(notes.drop_table(conn))
    assert asyncio.run(notes.table_info(conn)) is None


def test_insert_failure_is_not_swallowed(conn, notes):
    asyncio.run(notes.drop_table(conn))
    n = Note("lost")

    with pytest.raises(StorageError) as exc_info:
        asyncio.run(notes.insert(conn, n))

    assert "no such table" in str(exc_info.value.__cause__)
    assert n.key is None


def test_operation_log_records_ok_and_error(conn, notes):
    ensure_log_schema(conn)

    n = asyncio.run(notes.insert(conn, Note("logged"), LogContext("NOTE_CREATE")))
    with pytest.raises(SchemaError):
        asyncio.run(notes.create_table(conn, LogContext("NOTE_TABLE_CREATE")))

    created = search_logs(conn, action="NOTE_CREATE")
    assert len(created) == 1
    assert created[0]["result"] == "OK"
    assert created[0]["entity_type"] == "note"
    assert created[0]["entity_id"] == str(n.key)
    assert '"logged"' in created[0]["payload_json"]

    failed = search_logs(conn, action="NOTE_TABLE_CREATE")
    assert failed[0]["result"] == "ERROR"
    assert "already exists" in failed[0]["err_msg"]

    assert [r["action"] for r in search_logs(conn)] == ["NOTE_TABLE_CREATE", "NOTE_CREATE"]


def test_log_write_failure_keeps_error_types(conn, notes):
    # no ensure_log_schema(): every audit write fails
    with pytest.raises(SchemaError):
        asyncio.run(notes.create_table(conn, LogContext("NOTE_TABLE_CREATE")))

    n = asyncio.run(notes.insert(conn, Note("kept"), LogContext("NOTE_CREATE")))
    assert n.key is not None

    asyncio.run(notes.drop_table(conn))
    with pytest.raises(StorageError):
        asyncio.run(notes.insert(conn, Note("lost"), LogContext("NOTE_CREATE")))
