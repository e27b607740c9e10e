"""
Async table gateway.

Binds a TableSchema to an entity type through two callables, so the SQL
side never depends on how the entity is shaped in memory:

- to_row(entity) -> mapping of column name to value
- set_id(entity, generated_key)

Each operation makes one hop onto a worker thread; the connection is
passed in by the caller on every call.
"""
from __future__ import annotations

import asyncio
import logging
import sqlite3
from sqlite3 import Connection
from typing import Any, Awaitable, Callable, Dict, Generic, Mapping, Optional, TypeVar

from ..errors import SchemaError, StorageError
from ..logs import LogContext
from ..repository import table_repo
from ..schema import TableSchema

logger = logging.getLogger(__name__)

T = TypeVar("T")


class Gateway(Generic[T]):
    def __init__(
        self,
        schema: TableSchema,
        to_row: Callable[[T], Mapping[str, Any]],
        set_id: Callable[[T, int], None],
        entity_type: Optional[str] = None,
    ):
        self.schema = schema
        self.to_row = to_row
        self.set_id = set_id
        self.entity_type = entity_type or schema.name

    async def create_table(self, conn: Connection, log: Optional[LogContext] = None) -> TableSchema:
        """Create the backing table. Fails with SchemaError if it already exists."""
        await asyncio.to_thread(self._create_table_sync, conn, log)
        return self.schema

    def _create_table_sync(self, conn: Connection, log: Optional[LogContext]):
        if log is not None:
            log.set_entity("table", self.schema.name)
        try:
            table_repo.create_table(conn, self.schema)
        except sqlite3.Error as e:
            logger.warning("create table %s failed: %s", self.schema.name, e)
            self._write_log(conn, log, "ERROR", str(e))
            raise SchemaError(f"cannot create table {self.schema.name}: {e}") from e
        logger.debug("table %s created", self.schema.name)
        self._write_log(conn, log, "OK")

    def _write_log(self, conn: Connection, log: Optional[LogContext], result: str, err: Optional[str] = None):
        # The audit row never changes the outcome of the operation it describes.
        if log is None:
            return
        try:
            log.write(conn, result, err)
        except sqlite3.Error as e:
            logger.warning("operation log write for %s failed: %s", log.action, e)

    async def drop_table(self, conn: Connection):
        await asyncio.to_thread(table_repo.drop_table, conn, self.schema)

    async def table_info(self, conn: Connection) -> Optional[Dict[str, Any]]:
        return await asyncio.to_thread(table_repo.table_info, conn, self.schema.name)

    def insert(self, conn: Connection, entity: T, log: Optional[LogContext] = None) -> Awaitable[T]:
        """
        Insert entity as one new row and assign its generated key.

        Column values are read here, when insert() is called, so mutating
        the entity before or while the returned awaitable runs does not
        change what is written. Resolves with the same entity object; on
        failure raises StorageError and the entity's key is left untouched.
        An entity that already has a key is inserted again as a new row.
        """
        row = dict(self.to_row(entity))

        async def run() -> T:
            new_id = await asyncio.to_thread(self._insert_sync, conn, row, log)
            self.set_id(entity, new_id)
            return entity

        return run()

    def _insert_sync(self, conn: Connection, row: Dict[str, Any], log: Optional[LogContext]) -> int:
        if log is not None:
            log.set_payload(row)
        try:
            new_id = table_repo.insert_row(conn, self.schema, row)
        except sqlite3.Error as e:
            logger.warning("insert into %s failed: %s", self.schema.name, e)
            if log is not None:
                log.set_entity(self.entity_type, None)
            self._write_log(conn, log, "ERROR", str(e))
            raise StorageError(f"cannot insert into {self.schema.name}: {e}") from e
        if log is not None:
            log.set_entity(self.entity_type, new_id)
        self._write_log(conn, log, "OK")
        return new_id
