"""
Database engine and session handling.

One process-wide ``DatabaseManager`` (``db``) owns the engine. Every unit of
work goes through ``db.session()``, which commits when the block exits
normally and rolls back when it raises. A student's recomputation is one
such block, so its recommendation upserts and its flag clear land together.

Usage:
    from admissions_match.db import db

    db.initialize()
    with db.session() as session:
        student = session.get(StudentProfile, 1)
"""

import time
from collections.abc import Iterator
from contextlib import contextmanager
from typing import Any, Optional

from sqlalchemy import Engine, create_engine, event, text
from sqlalchemy.orm import DeclarativeBase, Session, sessionmaker
from sqlalchemy.pool import QueuePool, StaticPool

from .config import Settings, get_settings


class Base(DeclarativeBase):
    pass


def _engine_options(url: str, settings: Settings) -> dict[str, Any]:
    # In-memory SQLite only survives on a single shared connection.
    if url.startswith("sqlite"):
        return {
            "poolclass": StaticPool,
            "connect_args": {"check_same_thread": False},
        }
    return {
        "poolclass": QueuePool,
        "pool_size": settings.db_pool_size,
        "max_overflow": settings.db_max_overflow,
        "pool_pre_ping": settings.db_pool_pre_ping,
    }


def _enable_sqlite_foreign_keys(engine: Engine) -> None:
    @event.listens_for(engine, "connect")
    def _on_connect(dbapi_connection, connection_record):
        cursor = dbapi_connection.cursor()
        cursor.execute("PRAGMA foreign_keys=ON")
        cursor.close()


class DatabaseManager:
    """Process-wide engine and session factory."""

    _instance: Optional["DatabaseManager"] = None

    def __new__(cls) -> "DatabaseManager":
        if cls._instance is None:
            instance = super().__new__(cls)
            instance.engine = None
            instance._sessions = None
            cls._instance = instance
        return cls._instance

    @property
    def is_initialized(self) -> bool:
        return self._sessions is not None

    def initialize(self, database_url: str | None = None) -> None:
        """
        Create the engine. Later calls are no-ops until ``reset()``.

        Args:
            database_url: Overrides ``DATABASE_URL`` from settings.
        """
        if self.is_initialized:
            return

        settings = get_settings()
        url = database_url or settings.database_url
        self.engine = create_engine(url, echo=settings.debug, **_engine_options(url, settings))
        if url.startswith("sqlite"):
            _enable_sqlite_foreign_keys(self.engine)

        self._sessions = sessionmaker(bind=self.engine, autoflush=False, expire_on_commit=False)

    def reset(self) -> None:
        """Dispose of the engine so the next ``initialize()`` starts fresh."""
        if self.engine is not None:
            self.engine.dispose()
        self.engine = None
        self._sessions = None

    def _require_initialized(self) -> None:
        if not self.is_initialized:
            raise RuntimeError("DatabaseManager not initialized. Call initialize() first.")

    def create_all_tables(self) -> None:
        """Create every mapped table (tests and ``init-db``; use alembic elsewhere)."""
        self._require_initialized()
        from . import models  # noqa: F401

        Base.metadata.create_all(bind=self.engine)

    def drop_all_tables(self) -> None:
        self._require_initialized()
        Base.metadata.drop_all(bind=self.engine)

    @contextmanager
    def session(self) -> Iterator[Session]:
        """Yield a session inside one transaction: commit on success, roll back on error."""
        self._require_initialized()
        with self._sessions.begin() as session:
            yield session

    def get_session(self) -> Session:
        """A bare session; the caller commits, rolls back and closes it."""
        self._require_initialized()
        return self._sessions()

    def health_check(self) -> dict:
        """
        Round-trip ``SELECT 1``.

        Returns:
            ``{"healthy": bool, "latency_ms": float, "error": str | None}``
        """
        if not self.is_initialized:
            return {"healthy": False, "latency_ms": 0.0, "error": "Database not initialized"}

        started = time.perf_counter()
        error = None
        try:
            with self.engine.connect() as connection:
                connection.execute(text("SELECT 1"))
        except Exception as exc:
            error = str(exc)
        latency_ms = round((time.perf_counter() - started) * 1000, 2)
        return {"healthy": error is None, "latency_ms": latency_ms, "error": error}


db = DatabaseManager()


__all__ = ["Base", "DatabaseManager", "db"]
