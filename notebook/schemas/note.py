"""
Note Schemas.

Pydantic schemas for note API request/response validation.
"""

from datetime import datetime
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator


class NoteListRequest(BaseModel):
    """Filters for listing an author's notes."""

    author: str = Field(default="", description="Author whose notes are listed")
    tag: str | None = Field(default=None, description="Only notes carrying this tag")
    search: str | None = Field(
        default=None,
        description="Only notes whose title or content contains this text",
    )


class NoteContentRequest(BaseModel):
    """Body for creating or updating a note."""

    content: str | None = Field(
        default=None,
        description="Note text; hashtags become tags",
        examples=["Buy milk #groceries #today"],
    )
    author: str | None = Field(default=None, description="Author of the note")


class AddNoteRequest(BaseModel):
    """Body for the /addNote integration endpoint."""

    note: str | None = Field(default=None, description="Note text")
    author: str | None = Field(default=None, description="Author of the note")


class NoteDraft(BaseModel):
    """Note text and author pulled out of a request, whatever its shape."""

    content: str | None = None
    author: str | None = None


class NoteSummary(BaseModel):
    """Result of creating or updating a note."""

    id: int
    title: str
    content: str
    tags: list[str]


class AddNoteResponse(BaseModel):
    """Result of /addNote; echoes the text back as `note`."""

    id: int
    title: str
    note: str
    tags: list[str]


class NoteWithTags(BaseModel):
    """Note in listings, with the names of its tags."""

    id: int
    title: str | None
    content: str | None
    is_favorite: bool
    is_archived: bool
    is_processed: bool
    blocked: str
    author: str | None
    shared_with: str | None
    created_at: datetime
    updated_at: datetime
    tags: list[str] = Field(default_factory=list)

    model_config = ConfigDict(from_attributes=True)

    @field_validator("tags", mode="before")
    @classmethod
    def _tag_names(cls, value: Any) -> list[str]:
        return [getattr(tag, "name", tag) for tag in value or []]
