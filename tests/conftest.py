"""Shared pytest fixtures."""

from __future__ import annotations

import shutil
import tempfile
from datetime import datetime
from pathlib import Path
from typing import TYPE_CHECKING

import pytest
from sqlalchemy.orm import Session, sessionmaker

from notez.store.models import Folder, Note, StoreBase, Tag
from notez.store.session import get_engine

if TYPE_CHECKING:
    from collections.abc import Generator

    from notez.config import Config


@pytest.fixture
def temp_dir() -> Generator[Path, None, None]:
    """Create a temporary directory for test files."""
    path = Path(tempfile.mkdtemp())
    try:
        yield path
    finally:
        shutil.rmtree(path, ignore_errors=True)


@pytest.fixture
def sample_config(temp_dir: Path) -> Path:
    """Create a sample config file."""
    config_path = temp_dir / "config.toml"
    config_path.write_text("""[paths]
database = "/tmp/test_notez.db"

[display]
colored_output = true
snippet_length = 60

[search]
chip_logic = "or"
limit = 25
""")
    return config_path


def seed_notes(session: Session) -> dict[str, Note]:
    """Insert the standard sample notes and return them by key.

    ``n1``-``n3`` are the three-note scenario (work/Projects, pinned work,
    untagged Personal); the rest exercise text search and the trash.
    """
    projects = Folder(name="Projects")
    personal = Folder(name="Personal")
    archive = Folder(name="Archive")
    work = Tag(name="work")
    coop = Tag(name="Co Op")
    urgent = Tag(name="URGENT")
    session.add_all([projects, personal, archive, work, coop, urgent])
    session.flush()

    notes = {
        "n1": Note(
            title="Quarterly plan",
            body="Draft the **roadmap** for Q3.",
            folder=projects,
            is_pinned=False,
            modified_at=datetime(2024, 3, 1, 9, 0),
            tags=[work],
        ),
        "n2": Note(
            title="Standup notes",
            body="Blocked on review.",
            folder=None,
            is_pinned=True,
            modified_at=datetime(2024, 2, 1, 9, 0),
            tags=[work, urgent],
        ),
        "n3": Note(
            title="Groceries",
            body="Milk, eggs, 100% rye bread",
            folder=personal,
            is_pinned=False,
            modified_at=datetime(2024, 4, 1, 9, 0),
            tags=[],
        ),
        "n4": Note(
            title="Old ideas",
            body="Android app sketch",
            folder=archive,
            is_pinned=False,
            modified_at=datetime(2023, 1, 1, 9, 0),
            tags=[coop],
        ),
        "trashed": Note(
            title="Deleted work item",
            body="gone",
            folder=projects,
            is_pinned=True,
            modified_at=datetime(2024, 5, 1, 9, 0),
            deleted_at=datetime(2024, 5, 2, 9, 0),
            tags=[work],
        ),
    }
    session.add_all(notes.values())
    session.commit()
    return notes


@pytest.fixture
def notes_session() -> Generator[Session, None, None]:
    """In-memory database session with the sample notes."""
    engine = get_engine(":memory:")
    StoreBase.metadata.create_all(engine)
    session = sessionmaker(bind=engine)()
    seed_notes(session)
    try:
        yield session
    finally:
        session.close()
        engine.dispose()


@pytest.fixture
def sample_notes(notes_session: Session) -> dict[str, Note]:
    """Sample notes keyed by name, loaded from ``notes_session``."""
    by_title = {note.title: note for note in notes_session.query(Note).all()}
    return {
        "n1": by_title["Quarterly plan"],
        "n2": by_title["Standup notes"],
        "n3": by_title["Groceries"],
        "n4": by_title["Old ideas"],
        "trashed": by_title["Deleted work item"],
    }


@pytest.fixture
def notes_db(temp_dir: Path) -> Path:
    """File-backed notes database with the sample notes."""
    db_path = temp_dir / "notez.db"
    engine = get_engine(db_path)
    StoreBase.metadata.create_all(engine)
    session = sessionmaker(bind=engine)()
    try:
        seed_notes(session)
    finally:
        session.close()
        engine.dispose()
    return db_path


@pytest.fixture
def mock_config(notes_db: Path) -> Config:
    """Create a Config object pointing at ``notes_db``."""
    from notez.config import Config

    return Config(database=notes_db, colored_output=False)
