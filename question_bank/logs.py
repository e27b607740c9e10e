import json, time, uuid, datetime as dt
from sqlite3 import Connection
from typing import Optional, List, Dict, Any

DDL = """
CREATE TABLE IF NOT EXISTS operation_log (
  id INTEGER PRIMARY KEY AUTOINCREMENT,
  ts TEXT NOT NULL,
  user TEXT NOT NULL,
  action TEXT NOT NULL,
  entity_type TEXT,
  entity_id TEXT,
  request_id TEXT,
  payload_json TEXT,
  result TEXT,
  err_msg TEXT,
  latency_ms INTEGER
);
CREATE INDEX IF NOT EXISTS idx_log_action ON operation_log(action);
"""

def ensure_log_schema(conn: Connection):
    conn.executescript(DDL)

class LogContext:
    def __init__(self, action: str, user: str = "owner"):
        self.action = action
        self.user = user
        self.request_id = str(uuid.uuid4())
        self.start = time.perf_counter()
        self.payload = None
        self.entity_type = None
        self.entity_id = None

    def set_entity(self, etype: str, eid):
        self.entity_type = etype
        self.entity_id = None if eid is None else str(eid)

    def set_payload(self, obj): self.payload = obj

    def write(self, conn: Connection, result: str = "OK", err: Optional[str] = None):
        elapsed_ms = int((time.perf_counter() - self.start) * 1000)
        rec = {
            "ts": dt.datetime.now(dt.timezone.utc).isoformat(),
            "user": self.user,
            "action": self.action,
            "entity_type": self.entity_type,
            "entity_id": self.entity_id,
            "request_id": self.request_id,
            "payload_json": json.dumps(self.payload, ensure_ascii=False) if self.payload is not None else None,
            "result": result,
            "err_msg": err,
            "latency_ms": elapsed_ms,
        }
        conn.execute(
            """INSERT INTO operation_log
            (ts,user,action,entity_type,entity_id,request_id,payload_json,result,err_msg,latency_ms)
            VALUES(:ts,:user,:action,:entity_type,:entity_id,:request_id,:payload_json,:result,:err_msg,:latency_ms)""",
            rec
        )

def search_logs(conn: Connection, action: Optional[str] = None, limit: int = 50) -> List[Dict[str, Any]]:
    sql = "SELECT * FROM operation_log"
    params: dict = {"limit": limit}
    if action:
        sql += " WHERE action = :action"
        params["action"] = action
    sql += " ORDER BY id DESC LIMIT :limit"
    return [dict(r) for r in conn.execute(sql, params).fetchall()]
