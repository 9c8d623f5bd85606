"""Local SQLite note store."""

from notez.store.models import Folder, Note, NoteTag, StoreBase, Tag
from notez.store.repository import NoteStore, NoteWithTags
from notez.store.session import get_engine, get_session

__all__ = [
    "Folder",
    "Note",
    "NoteStore",
    "NoteTag",
    "NoteWithTags",
    "StoreBase",
    "Tag",
    "get_engine",
    "get_session",
]
