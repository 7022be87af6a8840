import logging
import re
import sqlite3
from contextlib import contextmanager
from pathlib import Path
from typing import Any, Iterator, Sequence

from sqlalchemy import create_engine, event, text
from sqlalchemy.engine import Connection, Engine
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from fastapi import Request

from jobly.config import settings
from jobly.errors import ConstraintViolationError, StorageError

logger = logging.getLogger(__name__)

_PLACEHOLDER_RE = re.compile(r"\$(\d+)")


def _set_sqlite_pragmas(dbapi_conn, connection_record):
    cursor = dbapi_conn.cursor()
    cursor.execute("PRAGMA journal_mode=WAL")
    cursor.execute("PRAGMA foreign_keys=ON")
    cursor.close()


def get_engine(db_path: Path | None = None) -> Engine:
    path = db_path or settings.db_path
    engine = create_engine(
        f"sqlite:///{path}",
        connect_args={"check_same_thread": False},
    )
    event.listen(engine, "connect", _set_sqlite_pragmas)
    return engine


def bind_positional(sql: str, values: Sequence[Any]) -> tuple[str, dict[str, Any]]:
    """Rewrite ``$N`` placeholders as named binds and pair them with ``values``.

    ``$1`` binds ``values[0]``, ``$2`` binds ``values[1]`` and so on. A placeholder
    with no matching value is a programming error in the statement.
    """
    params = {f"p{idx}": value for idx, value in enumerate(values, start=1)}

    def _named(match: re.Match) -> str:
        key = f"p{match.group(1)}"
        if key not in params:
            raise StorageError(f"No value bound for placeholder ${match.group(1)}")
        return f":{key}"

    return _PLACEHOLDER_RE.sub(_named, sql), params


class Transaction:
    def __init__(self, conn: Connection):
        self.conn = conn

    def query(self, sql: str, values: Sequence[Any] = ()) -> list[dict[str, Any]]:
        statement, params = bind_positional(sql, values)
        try:
            result = self.conn.execute(text(statement), params)
            if not result.returns_rows:
                return []
            return [dict(row) for row in result.mappings()]
        except IntegrityError as exc:
            raise ConstraintViolationError(str(exc.orig)) from exc
        except SQLAlchemyError as exc:
            logger.error("Storage failure: %s", exc)
            raise StorageError("Internal storage error") from exc


class Database:
    """Storage client handed to the repositories.

    Statements are written with ``$N`` positional placeholders. Driver failures come
    back as ``ConstraintViolationError`` or ``StorageError``.
    """

    def __init__(self, engine: Engine):
        self.engine = engine

    @classmethod
    def from_path(cls, db_path: Path | None = None) -> "Database":
        return cls(get_engine(db_path))

    @contextmanager
    def transaction(self) -> Iterator[Transaction]:
        try:
            with self.engine.begin() as conn:
                yield Transaction(conn)
        except IntegrityError as exc:
            raise ConstraintViolationError(str(exc.orig)) from exc
        except SQLAlchemyError as exc:
            logger.error("Storage failure: %s", exc)
            raise StorageError("Internal storage error") from exc

    def query(self, sql: str, values: Sequence[Any] = ()) -> list[dict[str, Any]]:
        with self.transaction() as tx:
            return tx.query(sql, values)

    def dispose(self):
        self.engine.dispose()


def get_db(request: Request) -> Database:
    return request.app.state.db


SCHEMA_SQL = """\
-- ============================================================
-- COMPANIES
-- ============================================================
CREATE TABLE IF NOT EXISTS companies (
    handle        TEXT PRIMARY KEY,
    name          TEXT NOT NULL UNIQUE,
    num_employees INTEGER CHECK(num_employees >= 0),
    description   TEXT NOT NULL,
    logo_url      TEXT
);

-- ============================================================
-- JOBS
-- ============================================================
CREATE TABLE IF NOT EXISTS jobs (
    id             INTEGER PRIMARY KEY AUTOINCREMENT,
    title          TEXT NOT NULL,
    salary         INTEGER CHECK(salary >= 0),
    -- exact decimal string in [0, 1]
    equity         TEXT CHECK(equity IS NULL OR CAST(equity AS REAL) BETWEEN 0 AND 1),
    company_handle TEXT NOT NULL REFERENCES companies(handle) ON DELETE CASCADE
);

CREATE INDEX IF NOT EXISTS idx_jobs_company ON jobs(company_handle);

-- ============================================================
-- USERS
-- ============================================================
CREATE TABLE IF NOT EXISTS users (
    username TEXT PRIMARY KEY,
    password TEXT NOT NULL,
    is_admin INTEGER NOT NULL DEFAULT 0 CHECK(is_admin IN (0, 1))
);
"""


def init_db(db_path: Path | None = None):
    path = db_path or settings.db_path
    path.parent.mkdir(parents=True, exist_ok=True)
    conn = sqlite3.connect(str(path))
    conn.executescript(SCHEMA_SQL)
    conn.close()


def integrity_check(db_path: Path | None = None) -> str | None:
    path = db_path or settings.db_path
    conn = sqlite3.connect(str(path))
    try:
        result = conn.execute("PRAGMA integrity_check").fetchone()
    finally:
        conn.close()
    return result[0] if result else None
