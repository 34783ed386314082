"""
Note Repository.

Data access layer for notes. Every query is a parameterized SQLAlchemy
statement; user input never reaches the SQL text.
"""

from sqlalchemy import or_, select, update
from sqlalchemy.orm import selectinload

from notebook.core.utils import utc_now
from notebook.models.note import BLOCKED, NOT_BLOCKED, Note
from notebook.models.tag import Tag
from notebook.repositories.base import BaseRepository


class NoteRepository(BaseRepository[Note]):
    """
    Repository for Note model.

    Inherits create/get from BaseRepository and adds note-specific queries.
    """

    model = Note

    async def list_for_author(
        self,
        author: str,
        tag: str | None = None,
        search: str | None = None,
    ) -> list[Note]:
        """
        Get the visible notes of an author, newest update first.

        Args:
            author: Author whose notes are listed
            tag: Only notes linked to this tag name
            search: Only notes whose title or content contains this text

        Returns:
            Notes with their tags loaded
        """
        stmt = (
            select(Note)
            .options(selectinload(Note.tags))
            .where(Note.author == author)
            .where(Note.blocked == NOT_BLOCKED)
        )

        if tag:
            stmt = stmt.where(Note.tags.any(Tag.name == tag))

        if search:
            stmt = stmt.where(
                or_(
                    Note.title.icontains(search, autoescape=True),
                    Note.content.icontains(search, autoescape=True),
                )
            )

        # Rows may have been rewritten by Core UPDATEs earlier in the session
        stmt = (
            stmt.order_by(Note.updated_at.desc(), Note.id.desc())
            .execution_options(populate_existing=True)
        )
        result = await self.session.execute(stmt)
        return list(result.scalars().all())

    async def update_content(self, id: int, title: str, content: str) -> bool:
        """
        Overwrite title and content of a note, leaving its flags alone.

        Returns:
            True if a row was updated, False if the note does not exist
        """
        result = await self.session.execute(
            update(Note)
            .where(Note.id == id)
            .values(title=title, content=content, updated_at=utc_now())
            .execution_options(synchronize_session=False)
        )
        return result.rowcount > 0

    async def mark_blocked(self, id: int) -> None:
        """Soft-delete a note by setting its blocked marker."""
        await self.session.execute(
            update(Note)
            .where(Note.id == id)
            .values(blocked=BLOCKED, updated_at=utc_now())
            .execution_options(synchronize_session=False)
        )
