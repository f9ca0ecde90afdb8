"""Centralized SQLAlchemy engine/session helpers for the workspace.

Usage
-----
from db.client import get_engine, get_session, session_scope, read_only_scope

with session_scope() as s:
    s.execute(...)

with read_only_scope() as s:
    # every statement in this block observes the same snapshot
    s.execute(...)
"""

from __future__ import annotations

import os
from collections.abc import Iterator
from contextlib import contextmanager

from sqlalchemy import create_engine, event
from sqlalchemy.engine import Engine
from sqlalchemy.orm import Session, sessionmaker

_ENGINE: Engine | None = None
_SESSION_MAKER: sessionmaker[Session] | None = None
_DB_URL: str | None = None


def _database_url(override: str | None = None) -> str:
    url = override or os.getenv("DATABASE_URL")
    if not url:
        raise RuntimeError("DATABASE_URL is not set; cannot initialize database client")
    return url


def _emit_sqlite_begin(engine: Engine) -> None:
    """Make every SQLite transaction start with an explicit ``BEGIN``.

    pysqlite only opens a transaction before the first write, so consecutive
    SELECTs in one session would otherwise each see the latest commit.
    """

    @event.listens_for(engine, "connect")
    def _on_connect(dbapi_conn, _):
        dbapi_conn.isolation_level = None

    @event.listens_for(engine, "begin")
    def _on_begin(conn):
        conn.exec_driver_sql("BEGIN")


def get_engine(*, database_url: str | None = None) -> Engine:
    """Return a shared SQLAlchemy engine, creating it on first use."""

    global _ENGINE, _SESSION_MAKER
    url = _database_url(database_url)
    if _ENGINE is None:
        # Default isolation level is fine; echo disabled.
        engine = create_engine(url, pool_pre_ping=True)
        if engine.dialect.name == "sqlite":
            _emit_sqlite_begin(engine)
        _SESSION_MAKER = sessionmaker(bind=engine, expire_on_commit=False, class_=Session)
        _ENGINE = engine
        global _DB_URL
        _DB_URL = url
        return engine
    # Engine already initialized; guard against cross-environment misuse.
    if _DB_URL is not None and url != _DB_URL:
        raise RuntimeError(
            "get_engine() already initialized with a different DATABASE_URL; "
            "call reset_engine() first or avoid passing a different URL"
        )
    return _ENGINE


def reset_engine() -> None:
    """Dispose the shared engine so the next ``get_engine`` call starts fresh.

    Intended for tests that bootstrap a new database per test case.
    """

    global _ENGINE, _SESSION_MAKER, _DB_URL
    if _ENGINE is not None:
        _ENGINE.dispose()
    _ENGINE = None
    _SESSION_MAKER = None
    _DB_URL = None


def get_session(*, database_url: str | None = None) -> Session:
    """Return a new SQLAlchemy session bound to the shared engine."""

    get_engine(database_url=database_url)
    assert _SESSION_MAKER is not None  # bound by get_engine
    return _SESSION_MAKER()


@contextmanager
def session_scope(*, database_url: str | None = None) -> Iterator[Session]:
    """Provide a transactional scope around a series of operations."""

    session = get_session(database_url=database_url)
    try:
        yield session
        session.commit()
    except Exception:
        session.rollback()
        raise
    finally:
        session.close()


@contextmanager
def read_only_scope(*, database_url: str | None = None) -> Iterator[Session]:
    """Provide a single read transaction shared by every query in the block.

    On PostgreSQL the transaction runs at ``REPEATABLE READ`` and read-only so
    all statements see one snapshot. On SQLite the engine opens the
    transaction with an explicit ``BEGIN`` (see ``get_engine``), so the first
    SELECT pins the snapshot until the block exits. Nothing is committed: the transaction is rolled back on exit.
    """

    session = get_session(database_url=database_url)
    try:
        bind = session.get_bind()
        if bind.dialect.name == "postgresql":
            # Must be applied before the transaction's first statement.
            session.connection(
                execution_options={
                    "isolation_level": "REPEATABLE READ",
                    "postgresql_readonly": True,
                }
            )
        yield session
    finally:
        session.rollback()
        session.close()


__all__ = [
    "get_engine",
    "get_session",
    "reset_engine",
    "session_scope",
    "read_only_scope",
]
