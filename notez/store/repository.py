"""Read access to notes for search.

:class:`NoteStore` is the boundary the search subsystem talks to. It
always hides trashed notes and returns results pinned-first, then most
recently modified first.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import datetime
from typing import TYPE_CHECKING

from sqlalchemy import func, select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import selectinload

from notez.exceptions import DatabaseConnectionError
from notez.store.models import Folder, Note, Tag
from notez.utils.snippet import DEFAULT_MAX_LENGTH, generate_snippet

if TYPE_CHECKING:
    from sqlalchemy import Select
    from sqlalchemy.orm import Session

    from notez.search.compiler import Predicate

log = logging.getLogger(__name__)


@dataclass(frozen=True)
class NoteWithTags:
    """A note with its folder name and tag names resolved."""

    id: int
    title: str
    body: str
    pinned: bool
    folder_name: str | None
    tag_names: frozenset[str]
    created_at: datetime
    modified_at: datetime
    deleted_at: datetime | None = None

    def snippet(self, max_length: int = DEFAULT_MAX_LENGTH) -> str:
        """Plain-text preview of the body."""
        return generate_snippet(self.body, max_length)

    @classmethod
    def from_note(cls, note: Note) -> NoteWithTags:
        return cls(
            id=note.id,
            title=note.title,
            body=note.body,
            pinned=note.is_pinned,
            folder_name=note.folder.name if note.folder is not None else None,
            tag_names=frozenset(tag.name for tag in note.tags),
            created_at=note.created_at,
            modified_at=note.modified_at,
            deleted_at=note.deleted_at,
        )


class NoteStore:
    """Query notes from a SQLAlchemy session."""

    def __init__(self, session: Session) -> None:
        self.session = session

    def _active_notes(self) -> Select:
        return (
            select(Note)
            .options(selectinload(Note.folder), selectinload(Note.tags))
            .where(Note.deleted_at.is_(None))
            .order_by(Note.is_pinned.desc(), Note.modified_at.desc(), Note.id.desc())
        )

    def _run(self, stmt: Select) -> list[NoteWithTags]:
        try:
            notes = self.session.scalars(stmt).all()
            return [NoteWithTags.from_note(note) for note in notes]
        except SQLAlchemyError as e:
            log.warning("Note query failed: %s", e)
            raise DatabaseConnectionError(f"Failed to read notes: {e}") from e

    def fetch_all(self) -> list[NoteWithTags]:
        """Return every note that is not in the trash."""
        results = self._run(self._active_notes())
        log.debug("fetch_all returned %d notes", len(results))
        return results

    def fetch_matching(self, predicate: Predicate) -> list[NoteWithTags]:
        """Return non-trashed notes satisfying ``predicate``, filtered in SQL."""
        if predicate.clause is None:
            return self.fetch_all()

        if log.isEnabledFor(logging.DEBUG):
            sql, params = predicate.to_sql()
            log.debug("Search condition: %s %r", sql, params)

        results = self._run(self._active_notes().where(predicate.clause))
        log.debug("fetch_matching returned %d notes", len(results))
        return results

    def fetch_matching_in_memory(self, predicate: Predicate) -> list[NoteWithTags]:
        """Same result as :meth:`fetch_matching`, filtered in Python."""
        return [note for note in self.fetch_all() if predicate(note)]

    def list_tags(self) -> list[str]:
        """Tag names sorted case-insensitively."""
        stmt = select(Tag.name).order_by(func.lower(Tag.name), Tag.name)
        try:
            return list(self.session.scalars(stmt).all())
        except SQLAlchemyError as e:
            raise DatabaseConnectionError(f"Failed to read tags: {e}") from e

    def list_folders(self) -> list[str]:
        """Folder names sorted case-insensitively."""
        stmt = select(Folder.name).order_by(func.lower(Folder.name), Folder.name)
        try:
            return list(self.session.scalars(stmt).all())
        except SQLAlchemyError as e:
            raise DatabaseConnectionError(f"Failed to read folders: {e}") from e
