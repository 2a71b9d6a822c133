"""FastAPI dependencies that hand out the objects owned by the application."""

from fastapi import Request

from app.core.config import Settings
from app.services.auth import Authenticator
from app.services.catalog import ContentCatalog
from app.services.storage import FileStorage


def get_app_settings(request: Request) -> Settings:
    return request.app.state.settings


def get_catalog(request: Request) -> ContentCatalog:
    """Dependency: the catalog created in create_app (one per application)."""
    return request.app.state.catalog


def get_storage(request: Request) -> FileStorage:
    return request.app.state.storage


def get_authenticator(request: Request) -> Authenticator:
    return request.app.state.authenticator
