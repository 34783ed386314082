"""
Note Model.

A free-text note owned by an author. Title and tags are derived from the
content; deletion only flips the `blocked` marker.
"""

from typing import TYPE_CHECKING

from sqlalchemy import String, Text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from notebook.models.base import Base, TimestampMixin

if TYPE_CHECKING:
    from notebook.models.tag import Tag

BLOCKED = "true"
NOT_BLOCKED = "false"


class Note(TimestampMixin, Base):
    """Note database model."""

    __tablename__ = "notes"

    id: Mapped[int] = mapped_column(primary_key=True, autoincrement=True)
    title: Mapped[str | None] = mapped_column(String(255), nullable=True)
    content: Mapped[str | None] = mapped_column(Text, nullable=True)
    is_favorite: Mapped[bool] = mapped_column(default=False, nullable=False)
    is_archived: Mapped[bool] = mapped_column(default=False, nullable=False)
    is_processed: Mapped[bool] = mapped_column(default=False, nullable=False)
    blocked: Mapped[str] = mapped_column(
        String(10),
        default=NOT_BLOCKED,
        nullable=False,
    )
    author: Mapped[str | None] = mapped_column(String(155), nullable=True, index=True)
    shared_with: Mapped[str | None] = mapped_column(String(500), nullable=True)

    tags: Mapped[list["Tag"]] = relationship(
        secondary="note_tags",
        order_by="Tag.name",
        viewonly=True,
    )

    def __repr__(self) -> str:
        return f"<Note(id={self.id}, title={self.title!r})>"
