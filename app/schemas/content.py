"""Request/response schemas for content endpoints."""

from pydantic import BaseModel, Field

from app.models.content import ContentItem


class ContentCreate(BaseModel):
    """
    Fields submitted with an upload.

    Everything is optional at the schema level so that missing fields produce
    the catalog's own 'Missing required fields' error.
    """

    title: str | None = None
    description: str | None = None
    category: str | None = None
    type: str | None = None


class ContentUpdate(BaseModel):
    """Partial update; absent or empty fields keep their current value."""

    title: str | None = Field(default=None, max_length=500)
    description: str | None = None
    category: str | None = None
    type: str | None = Field(default=None, max_length=100)


class ContentResponse(BaseModel):
    """Envelope for a single created or updated item."""

    success: bool = True
    message: str
    data: ContentItem


class MessageResponse(BaseModel):
    success: bool = True
    message: str
