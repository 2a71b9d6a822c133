"""
Content catalog: two ordered buckets ('basic', 'advanced') mirrored to a JSON file.

Each mutation runs under one lock: it edits a copy of the catalog, rewrites the
whole file, and only then swaps the copy in. A failed save leaves both the
in-memory state and the file as they were.
"""

import logging
import threading
import time
from datetime import datetime, timezone
from pathlib import Path

from app.core.errors import (
    CategoryNotFoundError,
    ContentNotFoundError,
    ContentValidationError,
    InvalidCategoryError,
)
from app.models.content import CATEGORIES, Catalog, ContentItem, normalize_category
from app.schemas.content import ContentCreate, ContentUpdate
from app.services.jsonfile import read_json, write_json_atomic
from app.services.storage import StoredFile

logger = logging.getLogger(__name__)


def _present(value: str | None) -> bool:
    return value is not None and value.strip() != ""


def validate_new_content(fields: ContentCreate) -> str:
    """Check required fields and return the normalized category."""
    if not (_present(fields.title) and _present(fields.category) and _present(fields.type)):
        raise ContentValidationError("Missing required fields")
    category = normalize_category(fields.category)
    if category is None:
        raise InvalidCategoryError()
    return category


class ContentCatalog:
    """In-memory catalog with load-or-empty initialization and save on every mutation."""

    def __init__(self, path: Path) -> None:
        self.path = path
        self._lock = threading.Lock()
        self._catalog = Catalog()
        raw = read_json(path)
        if raw is not None:
            self._catalog = Catalog.model_validate(raw)
            logger.info(
                "Loaded catalog from %s (basic=%s, advanced=%s)",
                path,
                len(self._catalog.basic),
                len(self._catalog.advanced),
            )
        else:
            logger.info("No catalog file at %s; starting empty", path)
        self._last_id = max(
            (item.id for c in CATEGORIES for item in self._catalog.bucket(c)),
            default=0,
        )

    def list_all(self) -> Catalog:
        """Snapshot of the whole catalog; callers may not mutate the live buckets."""
        return self._catalog.model_copy(deep=True)

    def list_by_category(self, category: str) -> list[ContentItem]:
        normalized = normalize_category(category)
        if normalized is None:
            raise CategoryNotFoundError()
        return [item.model_copy() for item in self._catalog.bucket(normalized)]

    def get(self, item_id: int) -> ContentItem:
        found = self._find(self._catalog, item_id)
        if found is None:
            raise ContentNotFoundError()
        return found[1].model_copy()

    def create(
        self,
        fields: ContentCreate,
        stored: StoredFile | None = None,
        actor: str | None = None,
    ) -> ContentItem:
        """Validate, append to the category bucket and persist. Returns the new item."""
        category = validate_new_content(fields)
        with self._lock:
            item = ContentItem(
                id=self._next_id(),
                title=fields.title,
                description=fields.description,
                category=category,
                type=fields.type,
                filename=stored.filename if stored else None,
                original_name=stored.original_name if stored else None,
                upload_date=datetime.now(timezone.utc),
                uploaded_by=actor,
            )
            updated = self._catalog.model_copy(deep=True)
            updated.bucket(category).append(item)
            self._commit(updated)
            self._last_id = item.id
        logger.info("Created content id=%s category=%s by=%s", item.id, category, actor)
        return item.model_copy()

    def update(self, item_id: int, changes: ContentUpdate, actor: str | None = None) -> ContentItem:
        """
        Apply the non-empty fields in changes to the item with item_id and persist.

        A category change moves the item to the end of the other bucket.
        """
        with self._lock:
            updated = self._catalog.model_copy(deep=True)
            found = self._find(updated, item_id)
            if found is None:
                raise ContentNotFoundError()
            old_category, item = found

            new_category = None
            if _present(changes.category):
                new_category = normalize_category(changes.category)
                if new_category is None:
                    raise InvalidCategoryError()

            if _present(changes.title):
                item.title = changes.title
            if _present(changes.description):
                item.description = changes.description
            if _present(changes.type):
                item.type = changes.type
            item.updated_at = datetime.now(timezone.utc)
            item.updated_by = actor

            if new_category is not None and new_category != old_category:
                updated.bucket(old_category).remove(item)
                item.category = new_category
                updated.bucket(new_category).append(item)

            self._commit(updated)
        logger.info("Updated content id=%s category=%s by=%s", item_id, item.category, actor)
        return item.model_copy()

    def delete(self, item_id: int) -> ContentItem:
        """Remove the item from whichever bucket holds it and persist. Returns the removed item."""
        with self._lock:
            updated = self._catalog.model_copy(deep=True)
            found = self._find(updated, item_id)
            if found is None:
                raise ContentNotFoundError()
            category, item = found
            updated.bucket(category).remove(item)
            self._commit(updated)
        logger.info("Deleted content id=%s category=%s", item_id, category)
        return item.model_copy()

    def _next_id(self) -> int:
        # Time-derived but strictly increasing; callers hold the lock.
        return max(int(time.time() * 1000), self._last_id + 1)

    @staticmethod
    def _find(catalog: Catalog, item_id: int) -> tuple[str, ContentItem] | None:
        for category in CATEGORIES:
            for item in catalog.bucket(category):
                if item.id == item_id:
                    return category, item
        return None

    def _commit(self, catalog: Catalog) -> None:
        write_json_atomic(self.path, catalog.model_dump(mode="json", by_alias=True))
        self._catalog = catalog
        logger.debug("Saved catalog to %s", self.path)
