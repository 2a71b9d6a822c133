"""Catalog records: content items grouped into the 'basic' and 'advanced' buckets."""

from datetime import datetime
from typing import Literal

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel

Category = Literal["basic", "advanced"]

# Bucket order is also the serialization order of the catalog file.
CATEGORIES: tuple[str, ...] = ("basic", "advanced")


def normalize_category(value: str | None) -> str | None:
    """Return the lowercased category if it is known, else None."""
    if not value:
        return None
    normalized = value.strip().lower()
    return normalized if normalized in CATEGORIES else None


class ContentItem(BaseModel):
    """One catalog entry. filename/original_name are set only when a file was uploaded."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    id: int
    title: str
    description: str | None = None
    category: Category
    type: str
    filename: str | None = None
    original_name: str | None = None
    upload_date: datetime
    uploaded_by: str | None = None
    updated_at: datetime | None = None
    updated_by: str | None = None

    @field_validator("category", mode="before")
    @classmethod
    def lowercase_category(cls, v: object) -> object:
        return v.strip().lower() if isinstance(v, str) else v


class Catalog(BaseModel):
    """The full catalog; the unit of persistence."""

    basic: list[ContentItem] = Field(default_factory=list)
    advanced: list[ContentItem] = Field(default_factory=list)

    def bucket(self, category: str) -> list[ContentItem]:
        """Return the live list for a normalized category."""
        if category == "basic":
            return self.basic
        if category == "advanced":
            return self.advanced
        raise KeyError(category)
