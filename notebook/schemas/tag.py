"""
Tag Schemas.
"""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field


class TagListRequest(BaseModel):
    """Body for listing the tags an author uses."""

    author: str = Field(default="", description="Author whose tag links are counted")


class TagWithCount(BaseModel):
    """Tag with the number of notes the author linked to it."""

    id: int
    name: str
    color: str | None
    created_at: datetime
    note_count: int

    model_config = ConfigDict(from_attributes=True)
