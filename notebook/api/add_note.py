"""
Add-Note Integration Endpoint.

`/addNote` lets scripts and bookmarklets drop a note in with a single
request. GET reads the note from the query string, POST from a JSON body;
both feed the same create operation. Access requires a bearer token
(checked by AccessControlMiddleware).
"""

from fastapi import APIRouter, Depends, Query

from notebook.core.dependencies import NoteServiceDep
from notebook.schemas.note import AddNoteRequest, AddNoteResponse, NoteDraft

router = APIRouter()


def draft_from_query(
    note: str | None = Query(default=None, description="Note text"),
    author: str | None = Query(default=None, description="Author of the note"),
) -> NoteDraft:
    """Read the note from query parameters."""
    return NoteDraft(content=note, author=author)


def draft_from_body(data: AddNoteRequest) -> NoteDraft:
    """Read the note from a JSON body."""
    return NoteDraft(content=data.note, author=data.author)


async def _add_note(draft: NoteDraft, service: NoteServiceDep) -> AddNoteResponse:
    summary = await service.create_note(draft.content, draft.author)
    return AddNoteResponse(
        id=summary.id,
        title=summary.title,
        note=summary.content,
        tags=summary.tags,
    )


@router.get(
    "/addNote",
    response_model=AddNoteResponse,
    summary="Add a note (query string)",
)
async def add_note_from_query(
    service: NoteServiceDep,
    draft: NoteDraft = Depends(draft_from_query),
) -> AddNoteResponse:
    """Create a note from `?note=...&author=...`."""
    return await _add_note(draft, service)


@router.post(
    "/addNote",
    response_model=AddNoteResponse,
    summary="Add a note (JSON body)",
)
async def add_note_from_body(
    service: NoteServiceDep,
    draft: NoteDraft = Depends(draft_from_body),
) -> AddNoteResponse:
    """Create a note from `{"note": ..., "author": ...}`."""
    return await _add_note(draft, service)
