"""Notes database engine and session management."""

from __future__ import annotations

import logging
from collections.abc import Generator
from contextlib import contextmanager
from pathlib import Path

from sqlalchemy import create_engine, event, text
from sqlalchemy.engine import Engine
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session, sessionmaker

from notez.exceptions import DatabaseConnectionError, DatabaseNotFoundError
from notez.store.models import StoreBase

MEMORY_DATABASE = ":memory:"

log = logging.getLogger(__name__)


def _enable_foreign_keys(dbapi_connection, connection_record) -> None:
    cursor = dbapi_connection.cursor()
    cursor.execute("PRAGMA foreign_keys=ON")
    cursor.close()


def get_engine(db_path: Path | str) -> Engine:
    """Create SQLAlchemy engine for the notes database.

    Args:
        db_path: Path to the SQLite file, or ``":memory:"``.

    Returns:
        SQLAlchemy engine for the notes database.
    """
    if str(db_path) == MEMORY_DATABASE:
        url = "sqlite://"
    else:
        url = f"sqlite:///{db_path}"
    engine = create_engine(
        url,
        connect_args={
            "timeout": 30,
            "check_same_thread": False,
        },
    )
    event.listen(engine, "connect", _enable_foreign_keys)
    return engine


@contextmanager
def get_session(db_path: Path | str, *, create: bool = True) -> Generator[Session, None, None]:
    """Open a session on the notes database.

    Creates missing tables on first use.

    Args:
        db_path: Path to the SQLite file, or ``":memory:"``.
        create: When False, a missing database file raises instead of
            being created.

    Yields:
        SQLAlchemy Session for the notes database.

    Raises:
        DatabaseNotFoundError: If ``create`` is False and the file is missing.
        DatabaseConnectionError: If the database cannot be opened.
    """
    if str(db_path) != MEMORY_DATABASE:
        db_path = Path(db_path)
        if not db_path.exists():
            if not create:
                raise DatabaseNotFoundError(db_path)
            db_path.parent.mkdir(parents=True, exist_ok=True)
            log.info("Creating notes database: %s", db_path)

    engine = get_engine(db_path)
    try:
        StoreBase.metadata.create_all(engine)
        if str(db_path) != MEMORY_DATABASE:
            with engine.connect() as conn:
                conn.execute(text("PRAGMA journal_mode=WAL"))
                conn.commit()
    except SQLAlchemyError as e:
        engine.dispose()
        raise DatabaseConnectionError(f"Cannot open database {db_path}: {e}") from e

    session_factory = sessionmaker(bind=engine)
    session = session_factory()

    try:
        yield session
        session.commit()
    except Exception:
        session.rollback()
        raise
    finally:
        session.close()
        engine.dispose()
