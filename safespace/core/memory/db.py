"""
Database connection and session management for the SQL record store.

All sessions are created via `db_session()` and live for one unit of work.
"""
import logging
from contextlib import contextmanager
from typing import Generator

from sqlalchemy import create_engine, event
from sqlalchemy.engine import Engine
from sqlalchemy.orm import Session, sessionmaker
from sqlalchemy.pool import StaticPool

from safespace.core.config import settings
from safespace.core.memory.models import Base

logger = logging.getLogger(__name__)


def create_db_engine(database_url: str) -> Engine:
    """
    Create an engine for `database_url`.

    In-memory SQLite ("sqlite://") shares one connection across threads so every
    session sees the same database for the lifetime of the process.
    """
    kwargs = {"echo": settings.database_echo}
    if database_url.startswith("sqlite"):
        kwargs["connect_args"] = {"check_same_thread": False}
        if database_url in ("sqlite://", "sqlite:///:memory:"):
            kwargs["poolclass"] = StaticPool
    engine = create_engine(database_url, **kwargs)
    if database_url.startswith("sqlite"):
        event.listen(engine, "connect", _set_sqlite_pragma)
    return engine


def _set_sqlite_pragma(dbapi_conn, connection_record) -> None:
    cursor = dbapi_conn.cursor()
    cursor.execute("PRAGMA busy_timeout=30000")
    cursor.close()


def init_db(engine: Engine) -> None:
    """Create missing tables."""
    try:
        Base.metadata.create_all(bind=engine)
        logger.info("Database schema initialized")
    except Exception as e:
        logger.error("Failed to initialize database: %s", e, exc_info=True)
        raise


def create_session_factory(database_url: str) -> sessionmaker:
    """Engine + schema + session factory in one call."""
    engine = create_db_engine(database_url)
    init_db(engine)
    return sessionmaker(autocommit=False, autoflush=False, bind=engine, expire_on_commit=False)


@contextmanager
def db_session(factory: sessionmaker) -> Generator[Session, None, None]:
    """
    Context manager for database sessions.

    Commits on success, rolls back on error, always closes.
    """
    db = factory()
    try:
        yield db
        db.commit()
    except Exception:
        db.rollback()
        raise
    finally:
        db.close()
