"""Persisted records: users and catalog content."""

from app.models.content import CATEGORIES, Catalog, Category, ContentItem, normalize_category
from app.models.user import User

__all__ = [
    "CATEGORIES",
    "Catalog",
    "Category",
    "ContentItem",
    "User",
    "normalize_category",
]
