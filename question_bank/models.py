from __future__ import annotations

from sqlite3 import Connection
from typing import Any, Awaitable, Optional

from pydantic import BaseModel

from .logs import LogContext
from .schema import TableSchema


class Question(BaseModel):
    """
    One row of the questions table.

    ``id`` stays None until insert() succeeds. Plain assignment cannot change
    it once set; only a new insert (which writes a new row) replaces it.
    ``content`` is not validated beyond its type.
    """

    id: Optional[int] = None
    content: Optional[str] = None

    def __init__(self, content: Optional[str] = None, **data: Any):
        super().__init__(content=content, **data)

    def __setattr__(self, name: str, value: Any):
        if name == "id" and self.id is not None:
            raise AttributeError(f"Question.id is already assigned ({self.id})")
        super().__setattr__(name, value)

    def assign_id(self, new_id: int):
        """Record the key generated for the row this question was just written to."""
        BaseModel.__setattr__(self, "id", new_id)

    @property
    def persisted(self) -> bool:
        return self.id is not None

    @staticmethod
    async def create_table(conn: Connection, log: Optional[LogContext] = None) -> TableSchema:
        from .services import question_svc
        return await question_svc.create_table(conn, log)

    def insert(self, conn: Connection, log: Optional[LogContext] = None) -> Awaitable["Question"]:
        # content is captured now; the returned awaitable does the write.
        from .services import question_svc
        return question_svc.insert(conn, self, log)
