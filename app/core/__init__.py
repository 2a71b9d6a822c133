"""Core app configuration, logging, security and error types."""

from app.core.config import Settings, get_settings
from app.core.logging import configure_logging

__all__ = ["Settings", "configure_logging", "get_settings"]
