"""Catalog endpoints: public listing plus admin-only update and delete."""

import logging
from typing import Annotated

from fastapi import APIRouter, Depends, HTTPException

from app.api.auth import require_admin
from app.api.deps import get_catalog, get_storage
from app.core.errors import ContentNotFoundError, ServiceError
from app.models.content import Catalog, ContentItem
from app.schemas.auth import CurrentUser
from app.schemas.content import ContentResponse, ContentUpdate, MessageResponse
from app.services.catalog import ContentCatalog
from app.services.storage import FileStorage

logger = logging.getLogger(__name__)
router = APIRouter()


def _parse_id(item_id: str) -> int:
    """Ids are integers; any other path segment cannot name an item."""
    try:
        return int(item_id)
    except ValueError as e:
        raise ContentNotFoundError() from e


@router.get("", response_model=Catalog)
def list_content(
    catalog: Annotated[ContentCatalog, Depends(get_catalog)],
) -> Catalog:
    """Return the whole catalog as {basic: [...], advanced: [...]}."""
    return catalog.list_all()


@router.get("/{category}", response_model=list[ContentItem])
def list_category(
    category: str,
    catalog: Annotated[ContentCatalog, Depends(get_catalog)],
) -> list[ContentItem]:
    """Return one bucket; the category is matched case-insensitively."""
    try:
        return catalog.list_by_category(category)
    except ServiceError as e:
        raise HTTPException(status_code=e.status_code, detail=e.message) from e


@router.put("/{item_id}", response_model=ContentResponse)
def update_content(
    item_id: str,
    body: ContentUpdate,
    admin: Annotated[CurrentUser, Depends(require_admin)],
    catalog: Annotated[ContentCatalog, Depends(get_catalog)],
) -> ContentResponse:
    """
    Partially update an item. Fields that are absent or empty keep their value.
    Changing category moves the item to the other bucket.
    """
    try:
        item = catalog.update(_parse_id(item_id), body, actor=admin.username)
    except ServiceError as e:
        raise HTTPException(status_code=e.status_code, detail=e.message) from e
    return ContentResponse(message="Content updated successfully", data=item)


@router.delete("/{item_id}", response_model=MessageResponse)
def delete_content(
    item_id: str,
    admin: Annotated[CurrentUser, Depends(require_admin)],
    catalog: Annotated[ContentCatalog, Depends(get_catalog)],
    storage: Annotated[FileStorage, Depends(get_storage)],
) -> MessageResponse:
    """Delete an item and its stored file, if any."""
    try:
        item = catalog.delete(_parse_id(item_id))
    except ServiceError as e:
        raise HTTPException(status_code=e.status_code, detail=e.message) from e

    if item.filename:
        try:
            storage.remove(item.category, item.filename)
        except OSError:
            # The catalog entry is already gone; the file is left as an orphan.
            logger.warning(
                "Could not remove stored file %s/%s for deleted content id=%s",
                item.category,
                item.filename,
                item_id,
                exc_info=True,
            )
    logger.info("Content id=%s deleted by %s", item_id, admin.username)
    return MessageResponse(message="Content deleted successfully")
