"""Database models. Importing this package registers every table on Base.metadata."""

from notebook.models.base import Base, TimestampMixin
from notebook.models.note import BLOCKED, NOT_BLOCKED, Note
from notebook.models.tag import NoteTag, Tag

__all__ = [
    "BLOCKED",
    "Base",
    "NOT_BLOCKED",
    "Note",
    "NoteTag",
    "Tag",
    "TimestampMixin",
]
