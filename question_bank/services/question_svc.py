from __future__ import annotations

from sqlite3 import Connection
from typing import Any, Awaitable, Dict, Optional

from ..logs import LogContext
from ..models import Question
from ..schema import QUESTIONS, TableSchema
from .gateway import Gateway


def _to_row(q: Question) -> Dict[str, Any]:
    return {"content": q.content}


def _set_id(q: Question, new_id: int):
    q.assign_id(new_id)


gateway: Gateway[Question] = Gateway(QUESTIONS, _to_row, _set_id, entity_type="question")


async def create_table(conn: Connection, log: Optional[LogContext] = None) -> TableSchema:
    return await gateway.create_table(conn, log)


async def drop_table(conn: Connection):
    await gateway.drop_table(conn)


async def table_info(conn: Connection) -> Optional[Dict[str, Any]]:
    return await gateway.table_info(conn)


def insert(conn: Connection, question: Question, log: Optional[LogContext] = None) -> Awaitable[Question]:
    return gateway.insert(conn, question, log)
