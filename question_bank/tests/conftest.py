import asyncio
import os
import sys
import pytest
from pathlib import Path

# Ensure project root on sys.path
_THIS_DIR = Path(__file__).resolve().parent
_PROJECT_ROOT = _THIS_DIR.parent.parent
if str(_PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(_PROJECT_ROOT))


@pytest.fixture(scope="session")
def tmp_db_path(tmp_path_factory):
    path = tmp_path_factory.mktemp("db") / "question_bank_test.db"
    # Point question_bank.db to this temp DB
    os.environ["QBANK_DB_PATH"] = str(path)
    return str(path)


@pytest.fixture()
def conn(tmp_db_path):
    """Shared connection with no questions table, reset before and after each test."""
    from question_bank.db import open_conn
    from question_bank.repository import table_repo
    from question_bank.schema import QUESTIONS

    # Safety: only ever drop tables in the temp DB
    assert os.environ.get("QBANK_DB_PATH") == tmp_db_path, "Refusing to reset non-temp DB"
    c = open_conn(tmp_db_path)
    table_repo.drop_table(c, QUESTIONS)
    c.execute("DROP TABLE IF EXISTS operation_log")
    try:
        yield c
    finally:
        table_repo.drop_table(c, QUESTIONS)
        c.execute("DROP TABLE IF EXISTS operation_log")
        c.close()


@pytest.fixture()
def qdb(conn):
    """Connection with a freshly created questions table."""
    from question_bank.models import Question

    asyncio.run(Question.create_table(conn))
    return conn
