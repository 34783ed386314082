"""
Note Service.

Business logic for notes. Derives titles and tags from content, keeps the
note/tag links in step with the hashtags of each note, and wraps every
multi-statement write in a single transaction.
"""

from sqlalchemy.ext.asyncio import AsyncSession

from notebook.core.colors import color_for
from notebook.core.text import derive_title, extract_hashtags
from notebook.repositories.note import NoteRepository
from notebook.repositories.tag import NoteTagRepository, TagRepository
from notebook.schemas.note import NoteSummary, NoteWithTags
from notebook.schemas.tag import TagWithCount
from notebook.services.base import BaseService


def normalize_author(author: str | None) -> str:
    """Treat a missing or blank author as the empty author."""
    if author is None or not author.strip():
        return ""
    return author


class NoteService(BaseService):
    """
    Service for note business logic.

    Handles note creation, updates, soft deletion and listing of notes
    and tags.
    """

    def __init__(self, session: AsyncSession) -> None:
        super().__init__(session)
        self.notes = NoteRepository(session)
        self.tags = TagRepository(session)
        self.links = NoteTagRepository(session)

    async def _link_hashtags(self, note_id: int, hashtags: list[str], author: str) -> None:
        """Create missing tags and link each of them to the note."""
        for name in hashtags:
            await self.tags.ensure(name, color=color_for(name))
            tag_id = await self.tags.get_id_by_name(name)
            await self.links.link(note_id, tag_id, author)

    async def list_notes(
        self,
        author: str,
        tag: str | None = None,
        search: str | None = None,
    ) -> list[NoteWithTags]:
        """
        List the visible notes of an author.

        Args:
            author: Author whose notes are listed
            tag: Only notes carrying this tag (matched case-insensitively)
            search: Only notes whose title or content contains this text

        Returns:
            Notes with their tag names, most recently updated first
        """
        self._log_debug("Listing notes", author=author, tag=tag, search=search)
        notes = await self._execute_db_operation(
            "list_notes",
            self.notes.list_for_author(
                author,
                tag=tag.lower() if tag else None,
                search=search,
            ),
        )
        return [NoteWithTags.model_validate(note) for note in notes]

    async def list_tags(self, author: str) -> list[TagWithCount]:
        """
        List the tags an author has linked, with link counts.

        Returns:
            Tags ordered by count descending, then name
        """
        rows = await self._execute_db_operation(
            "list_tags",
            self.tags.list_for_author(author),
        )
        return [
            TagWithCount(
                id=tag.id,
                name=tag.name,
                color=tag.color,
                created_at=tag.created_at,
                note_count=count,
            )
            for tag, count in rows
        ]

    async def create_note(self, content: str | None, author: str | None) -> NoteSummary:
        """
        Create a note and tag it from its hashtags.

        Args:
            content: Note text, must not be blank
            author: Author of the note; blank becomes ""

        Returns:
            Id, derived title, content and hashtags of the new note

        Raises:
            ValidationError: If content is missing or blank
        """
        self._validate_required({"content": content}, ["content"])
        author = normalize_author(author)
        title = derive_title(content)
        hashtags = extract_hashtags(content)

        self._log_operation("Creating note", author=author, tags=hashtags)

        async def work() -> int:
            note = await self.notes.create(title=title, content=content, author=author)
            await self._link_hashtags(note.id, hashtags, author)
            return note.id

        note_id = await self._execute_in_transaction("create_note", work)

        self._log_debug("Note created", note_id=note_id)
        return NoteSummary(id=note_id, title=title, content=content, tags=hashtags)

    async def update_note(
        self,
        note_id: int,
        content: str | None,
        author: str | None,
    ) -> NoteSummary:
        """
        Replace the content of a note and re-derive its title and tags.

        Flags are left untouched. Updating an id that does not exist
        changes nothing and still returns the echoed payload.

        Raises:
            ValidationError: If content is missing or blank
        """
        self._validate_required({"content": content}, ["content"])
        author = normalize_author(author)
        title = derive_title(content)
        hashtags = extract_hashtags(content)

        self._log_operation("Updating note", note_id=note_id, tags=hashtags)

        async def work() -> None:
            updated = await self.notes.update_content(note_id, title=title, content=content)
            if not updated:
                self._log_debug("No note to update", note_id=note_id)
                return
            await self.links.unlink_all(note_id)
            await self._link_hashtags(note_id, hashtags, author)

        await self._execute_in_transaction("update_note", work)
        return NoteSummary(id=note_id, title=title, content=content, tags=hashtags)

    async def delete_note(self, note_id: int) -> None:
        """Soft-delete a note. Unknown ids are accepted silently."""
        self._log_operation("Deleting note", note_id=note_id)
        await self._execute_in_transaction(
            "delete_note",
            lambda: self.notes.mark_blocked(note_id),
        )
