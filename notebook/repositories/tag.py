"""
Tag Repository.

Data access for tags and the note/tag links.
"""

from typing import Any

from sqlalchemy import delete, func, insert, select
from sqlalchemy.dialects import postgresql, sqlite
from sqlalchemy.ext.asyncio import AsyncSession

from notebook.models.tag import NoteTag, Tag
from notebook.repositories.base import BaseRepository


class TagRepository(BaseRepository[Tag]):
    """Repository for Tag model."""

    model = Tag

    def _insert_if_absent(self) -> Any:
        """Build an INSERT on tags that skips rows whose name already exists."""
        dialect = self.session.get_bind().dialect.name
        if dialect == "postgresql":
            return postgresql.insert(Tag).on_conflict_do_nothing(index_elements=[Tag.name])
        if dialect == "sqlite":
            return sqlite.insert(Tag).on_conflict_do_nothing(index_elements=[Tag.name])
        # MySQL / MariaDB
        return insert(Tag).prefix_with("IGNORE")

    async def ensure(self, name: str, color: str) -> None:
        """
        Insert a tag unless one with the same name exists.

        An existing tag keeps its original color.
        """
        await self.session.execute(
            self._insert_if_absent().values(name=name, color=color)
        )

    async def get_id_by_name(self, name: str) -> int:
        """Resolve the id of an existing tag."""
        result = await self.session.execute(select(Tag.id).where(Tag.name == name))
        return result.scalar_one()

    async def list_for_author(self, author: str) -> list[tuple[Tag, int]]:
        """
        Get tags linked by an author, with how many links each has.

        Tags without a link by the author are left out.

        Returns:
            (tag, note_count) pairs, most used first, then by name
        """
        note_count = func.count(NoteTag.note_id).label("note_count")
        result = await self.session.execute(
            select(Tag, note_count)
            .join(NoteTag, NoteTag.tag_id == Tag.id)
            .where(NoteTag.author == author)
            .group_by(Tag.id, Tag.name, Tag.color, Tag.created_at)
            .order_by(note_count.desc(), Tag.name.asc())
        )
        return [(tag, count) for tag, count in result.all()]


class NoteTagRepository:
    """Repository for the note_tags association table."""

    def __init__(self, session: AsyncSession) -> None:
        self.session = session

    async def link(self, note_id: int, tag_id: int, author: str) -> None:
        """Link a note to a tag on behalf of an author."""
        await self.session.execute(
            insert(NoteTag).values(note_id=note_id, tag_id=tag_id, author=author)
        )

    async def unlink_all(self, note_id: int) -> None:
        """Remove every tag link of a note."""
        await self.session.execute(delete(NoteTag).where(NoteTag.note_id == note_id))
