"""
Tag Models.

Tags are created lazily from hashtags; NoteTag links a note to a tag and
records which author created the link.
"""

from datetime import datetime

from sqlalchemy import DateTime, ForeignKey, String
from sqlalchemy.orm import Mapped, mapped_column

from notebook.core.colors import DEFAULT_TAG_COLOR
from notebook.core.utils import utc_now
from notebook.models.base import Base


class Tag(Base):
    """Tag database model. Names are unique and stored lowercase."""

    __tablename__ = "tags"

    id: Mapped[int] = mapped_column(primary_key=True, autoincrement=True)
    name: Mapped[str] = mapped_column(String(100), unique=True, nullable=False)
    color: Mapped[str] = mapped_column(
        String(7),
        default=DEFAULT_TAG_COLOR,
        nullable=True,
    )
    created_at: Mapped[datetime] = mapped_column(
        DateTime,
        default=utc_now,
        nullable=False,
    )

    def __repr__(self) -> str:
        return f"<Tag(id={self.id}, name={self.name!r})>"


class NoteTag(Base):
    """Association between a note and a tag."""

    __tablename__ = "note_tags"

    note_id: Mapped[int] = mapped_column(
        ForeignKey("notes.id", ondelete="CASCADE"),
        primary_key=True,
    )
    tag_id: Mapped[int] = mapped_column(
        ForeignKey("tags.id", ondelete="CASCADE"),
        primary_key=True,
    )
    author: Mapped[str | None] = mapped_column(String(155), nullable=True, index=True)
