"""Upload endpoint: accept a multipart form with catalog fields and an optional file."""

import logging
from typing import Annotated

from fastapi import APIRouter, Depends, File, Form, HTTPException, UploadFile

from app.api.auth import require_admin
from app.api.deps import get_catalog, get_storage
from app.core.errors import ServiceError
from app.schemas.auth import CurrentUser
from app.schemas.content import ContentCreate, ContentResponse
from app.services.catalog import ContentCatalog, validate_new_content
from app.services.storage import FileStorage, StoredFile

logger = logging.getLogger(__name__)
router = APIRouter()


@router.post("", response_model=ContentResponse)
def upload_content(
    admin: Annotated[CurrentUser, Depends(require_admin)],
    catalog: Annotated[ContentCatalog, Depends(get_catalog)],
    storage: Annotated[FileStorage, Depends(get_storage)],
    title: Annotated[str | None, Form()] = None,
    description: Annotated[str | None, Form()] = None,
    category: Annotated[str | None, Form()] = None,
    content_type: Annotated[str | None, Form(alias="type")] = None,
    file: Annotated[UploadFile | None, File()] = None,
) -> ContentResponse:
    """
    Create a catalog entry, storing the attached file under uploads/<category>/.

    - **title**, **category**, **type** are required; category is "basic" or
      "advanced" in any letter case.
    - **file** is optional; files above MAX_FILE_SIZE are rejected with 413
      and nothing is added to the catalog.
    """
    fields = ContentCreate(
        title=title,
        description=description,
        category=category,
        type=content_type,
    )
    try:
        normalized = validate_new_content(fields)
    except ServiceError as e:
        raise HTTPException(status_code=e.status_code, detail=e.message) from e

    stored: StoredFile | None = None
    if file is not None and file.filename:
        try:
            stored = storage.receive(
                normalized,
                file.file,
                file.filename,
                declared_size=file.size,
            )
        except ServiceError as e:
            raise HTTPException(status_code=e.status_code, detail=e.message) from e

    try:
        item = catalog.create(fields, stored, actor=admin.username)
    except Exception as e:
        if stored is not None:
            try:
                storage.remove(normalized, stored.filename)
            except OSError:
                logger.warning(
                    "Could not remove stored file %s/%s after failed catalog save",
                    normalized,
                    stored.filename,
                    exc_info=True,
                )
        if isinstance(e, ServiceError):
            raise HTTPException(status_code=e.status_code, detail=e.message) from e
        raise
    return ContentResponse(message="Content uploaded successfully", data=item)
