"""Lower a search expression into a predicate over notes.

A :class:`Predicate` carries the same condition in two forms:

- ``clause``: a SQLAlchemy boolean expression with its values bound as
  parameters, pushed into the note query by
  :meth:`~notez.store.repository.NoteStore.fetch_matching`;
- ``evaluate``: a Python callable over
  :class:`~notez.store.repository.NoteWithTags`, for filtering notes
  already in memory.

Both forms select the same notes. SQLite's ``lower()`` only folds ASCII
letters, so the Python side folds the same way.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any, Protocol

from sqlalchemy import and_, exists, false, func, not_, or_, select, true
from sqlalchemy.dialects import sqlite

from notez.search.ast_nodes import (
    And,
    Folder,
    Not,
    Or,
    Pinned,
    SearchExpression,
    Tag,
    Text,
)
from notez.store import models

if TYPE_CHECKING:
    from sqlalchemy.engine import Dialect
    from sqlalchemy.sql.elements import ColumnElement

    from notez.store.repository import NoteWithTags

log = logging.getLogger(__name__)

_ASCII_LOWER = str.maketrans(
    "ABCDEFGHIJKLMNOPQRSTUVWXYZ",
    "abcdefghijklmnopqrstuvwxyz",
)


def fold_case(value: str) -> str:
    """Lower-case ASCII letters only, as SQLite ``lower()`` does."""
    return value.translate(_ASCII_LOWER)


@dataclass(frozen=True)
class Predicate:
    """A compiled search condition.

    ``clause`` is None for the match-everything predicate.
    """

    clause: ColumnElement[bool] | None
    evaluate: Callable[[NoteWithTags], bool]

    def __call__(self, note: NoteWithTags) -> bool:
        return self.evaluate(note)

    @property
    def matches_everything(self) -> bool:
        return self.clause is None

    def __and__(self, other: Predicate) -> Predicate:
        if self.clause is None:
            return other
        if other.clause is None:
            return self
        left, right = self.evaluate, other.evaluate
        return Predicate(and_(self.clause, other.clause), lambda note: left(note) and right(note))

    def __or__(self, other: Predicate) -> Predicate:
        if self.clause is None or other.clause is None:
            return MATCH_ALL
        left, right = self.evaluate, other.evaluate
        return Predicate(or_(self.clause, other.clause), lambda note: left(note) or right(note))

    def __invert__(self) -> Predicate:
        if self.clause is None:
            return Predicate(false(), lambda note: False)
        inner = self.evaluate
        return Predicate(not_(self.clause), lambda note: not inner(note))

    def to_sql(self, dialect: Dialect | None = None) -> tuple[str, dict[str, Any]]:
        """Render the condition as SQL text plus bound parameter values.

        Args:
            dialect: Target dialect; SQLite when omitted.

        Returns:
            Tuple of (SQL fragment, parameter values by name).
        """
        clause = true() if self.clause is None else self.clause
        compiled = clause.compile(dialect=dialect or sqlite.dialect())
        return str(compiled), dict(compiled.params)


MATCH_ALL = Predicate(None, lambda note: True)


def _tag_predicate(name: str) -> Predicate:
    wanted = fold_case(name)
    clause = exists(
        select(models.NoteTag.note_id)
        .join(models.Tag, models.Tag.id == models.NoteTag.tag_id)
        .where(
            models.NoteTag.note_id == models.Note.id,
            func.lower(models.Tag.name) == func.lower(name),
        )
    )
    return Predicate(
        clause, lambda note: any(fold_case(tag) == wanted for tag in note.tag_names)
    )


def _folder_predicate(name: str) -> Predicate:
    wanted = fold_case(name)
    # EXISTS keeps notes without a folder at false rather than NULL under NOT
    clause = exists(
        select(models.Folder.id).where(
            models.Folder.id == models.Note.folder_id,
            func.lower(models.Folder.name) == func.lower(name),
        )
    )
    return Predicate(
        clause,
        lambda note: note.folder_name is not None and fold_case(note.folder_name) == wanted,
    )


def _text_predicate(term: str) -> Predicate:
    wanted = fold_case(term)
    clause = or_(
        models.Note.title.icontains(term, autoescape=True),
        models.Note.body.icontains(term, autoescape=True),
    )
    return Predicate(
        clause,
        lambda note: wanted in fold_case(note.title) or wanted in fold_case(note.body),
    )


def _pinned_predicate(flag: bool) -> Predicate:
    return Predicate(models.Note.is_pinned == flag, lambda note: note.pinned == flag)


def compile_expression(expression: SearchExpression | None) -> Predicate:
    """Compile an expression tree into a :class:`Predicate`.

    Args:
        expression: Parsed or chip-built expression; None means no filter.

    Returns:
        The predicate. :data:`MATCH_ALL` for None.
    """
    if expression is None:
        return MATCH_ALL
    if isinstance(expression, Tag):
        return _tag_predicate(expression.name)
    if isinstance(expression, Folder):
        return _folder_predicate(expression.name)
    if isinstance(expression, Text):
        return _text_predicate(expression.term)
    if isinstance(expression, Pinned):
        return _pinned_predicate(expression.flag)
    if isinstance(expression, And):
        return compile_expression(expression.left) & compile_expression(expression.right)
    if isinstance(expression, Or):
        return compile_expression(expression.left) | compile_expression(expression.right)
    if isinstance(expression, Not):
        return ~compile_expression(expression.inner)
    raise TypeError(f"Not a search expression: {expression!r}")


class NoteSource(Protocol):
    """Anything that can hand out notes for a search."""

    def fetch_all(self) -> list[NoteWithTags]: ...

    def fetch_matching(self, predicate: Predicate) -> list[NoteWithTags]: ...


def execute_search(
    source: NoteSource, expression: SearchExpression | None
) -> list[NoteWithTags]:
    """Run an expression against a note source.

    Issues exactly one read: ``fetch_all`` without an expression,
    ``fetch_matching`` otherwise.

    Args:
        source: The note store.
        expression: Expression to apply, or None for all notes.

    Returns:
        Matching notes, pinned first then most recently modified.
    """
    if expression is None:
        return source.fetch_all()
    predicate = compile_expression(expression)
    results = source.fetch_matching(predicate)
    log.debug("Search returned %d notes", len(results))
    return results
