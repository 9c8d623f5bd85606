"""SQLAlchemy ORM models for the notes database."""

from __future__ import annotations

from datetime import datetime

from sqlalchemy import Boolean, DateTime, ForeignKey, Index, Integer, String, Text
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column, relationship


class StoreBase(DeclarativeBase):
    """Base class for note store ORM models."""

    pass


class Folder(StoreBase):
    """A (possibly nested) folder holding notes."""

    __tablename__ = "folder"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    name: Mapped[str] = mapped_column(String(256), nullable=False)
    parent_folder_id: Mapped[int | None] = mapped_column(
        Integer, ForeignKey("folder.id", ondelete="CASCADE"), nullable=True
    )
    color: Mapped[str | None] = mapped_column(String(32), nullable=True)
    created_at: Mapped[datetime] = mapped_column(DateTime, nullable=False, default=datetime.now)
    modified_at: Mapped[datetime] = mapped_column(DateTime, nullable=False, default=datetime.now)

    __table_args__ = (Index("ix_folder_name", "name"),)

    def __repr__(self) -> str:
        return f"<Folder(id={self.id}, name='{self.name}')>"


class Tag(StoreBase):
    """A label that can be attached to any number of notes."""

    __tablename__ = "tag"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    name: Mapped[str] = mapped_column(String(256), nullable=False)
    color: Mapped[str | None] = mapped_column(String(32), nullable=True)
    created_at: Mapped[datetime] = mapped_column(DateTime, nullable=False, default=datetime.now)

    __table_args__ = (Index("ix_tag_name", "name"),)

    def __repr__(self) -> str:
        return f"<Tag(id={self.id}, name='{self.name}')>"


class Note(StoreBase):
    """A Markdown note. Notes with ``deleted_at`` set are in the trash."""

    __tablename__ = "note"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    title: Mapped[str] = mapped_column(Text, nullable=False, default="")
    body: Mapped[str] = mapped_column(Text, nullable=False, default="")
    folder_id: Mapped[int | None] = mapped_column(
        Integer, ForeignKey("folder.id", ondelete="SET NULL"), nullable=True
    )
    is_pinned: Mapped[bool] = mapped_column(
        Boolean, nullable=False, default=False, server_default="0"
    )
    created_at: Mapped[datetime] = mapped_column(DateTime, nullable=False, default=datetime.now)
    modified_at: Mapped[datetime] = mapped_column(DateTime, nullable=False, default=datetime.now)
    deleted_at: Mapped[datetime | None] = mapped_column(DateTime, nullable=True)

    folder: Mapped[Folder | None] = relationship(Folder)
    tags: Mapped[list[Tag]] = relationship(Tag, secondary="note_tag", order_by=Tag.name)

    __table_args__ = (
        Index("ix_note_folder_id", "folder_id"),
        Index("ix_note_pinned_modified", "is_pinned", "modified_at"),
        Index("ix_note_deleted_at", "deleted_at"),
    )

    def __repr__(self) -> str:
        return f"<Note(id={self.id}, title='{self.title[:30]}')>"


class NoteTag(StoreBase):
    """Many-to-many association between notes and tags."""

    __tablename__ = "note_tag"

    note_id: Mapped[int] = mapped_column(
        Integer, ForeignKey("note.id", ondelete="CASCADE"), primary_key=True
    )
    tag_id: Mapped[int] = mapped_column(
        Integer, ForeignKey("tag.id", ondelete="CASCADE"), primary_key=True
    )

    __table_args__ = (Index("ix_note_tag_tag_id", "tag_id"),)

    def __repr__(self) -> str:
        return f"<NoteTag(note={self.note_id}, tag={self.tag_id})>"
