"""
Notes API Endpoints.

JSON endpoints used by the notebook web app. Listing endpoints take their
filters in a POST body.
"""

from fastapi import APIRouter, Path

from notebook.core.dependencies import NoteServiceDep
from notebook.schemas.base import MessageResponse
from notebook.schemas.note import NoteContentRequest, NoteListRequest, NoteSummary, NoteWithTags
from notebook.schemas.tag import TagListRequest, TagWithCount

router = APIRouter()


@router.post(
    "/notes",
    response_model=list[NoteWithTags],
    summary="List notes",
    description="List an author's notes, optionally filtered by tag and search text.",
)
async def list_notes(
    data: NoteListRequest,
    service: NoteServiceDep,
) -> list[NoteWithTags]:
    """List notes with their tags."""
    return await service.list_notes(data.author, tag=data.tag, search=data.search)


@router.post(
    "/tags",
    response_model=list[TagWithCount],
    summary="List tags",
    description="List the tags an author uses, most used first.",
)
async def list_tags(
    data: TagListRequest,
    service: NoteServiceDep,
) -> list[TagWithCount]:
    """List tags with note counts."""
    return await service.list_tags(data.author)


@router.post(
    "/notes/create",
    response_model=NoteSummary,
    status_code=201,
    summary="Create a note",
    description="Create a note; the title and tags are derived from its content.",
)
async def create_note(
    data: NoteContentRequest,
    service: NoteServiceDep,
) -> NoteSummary:
    """Create a new note."""
    return await service.create_note(data.content, data.author)


@router.put(
    "/notes/{note_id}",
    response_model=NoteSummary,
    summary="Update a note",
    description="Replace the content of a note and re-derive its title and tags.",
)
async def update_note(
    data: NoteContentRequest,
    service: NoteServiceDep,
    note_id: int = Path(..., description="Note ID"),
) -> NoteSummary:
    """Update a note."""
    return await service.update_note(note_id, data.content, data.author)


@router.delete(
    "/notes/{note_id}",
    response_model=MessageResponse,
    summary="Delete a note",
    description="Hide a note from listings. The row itself is kept.",
)
async def delete_note(
    service: NoteServiceDep,
    note_id: int = Path(..., description="Note ID"),
) -> MessageResponse:
    """Soft-delete a note."""
    await service.delete_note(note_id)
    return MessageResponse(message="Note deleted successfully")
