"""Application factory: builds the FastAPI app and the objects it owns."""

import logging
import time

from fastapi import FastAPI, Request
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from fastapi.staticfiles import StaticFiles
from starlette.exceptions import HTTPException as StarletteHTTPException

from app.api import router as api_router
from app.core.config import Settings, get_settings
from app.core.logging import configure_logging
from app.services.auth import Authenticator
from app.services.catalog import ContentCatalog
from app.services.storage import FileStorage
from app.services.users import UserStore

logger = logging.getLogger(__name__)

INTERNAL_ERROR_MESSAGE = "Something went wrong!"


def _error(status_code: int, message: str, **extra: object) -> JSONResponse:
    return JSONResponse(
        status_code=status_code,
        content={"success": False, "error": message, **extra},
    )


async def http_exception_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    """Render every HTTPException as {success: false, error}; unmatched routes get one message."""
    message = exc.detail if isinstance(exc.detail, str) else str(exc.detail)
    # Unknown paths and known paths with an unrouted method look the same; no Allow header.
    if exc.status_code == 405 or (exc.status_code == 404 and exc.detail == "Not Found"):
        return _error(404, "Route not found")
    response = _error(exc.status_code, message)
    if exc.headers:
        response.headers.update(exc.headers)
    return response


async def validation_exception_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    return _error(400, "Invalid request", details=jsonable_encoder(exc.errors()))


async def unhandled_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    """Last resort: log the traceback, return a generic 500 without internals."""
    logger.exception("Unhandled error on %s %s", request.method, request.url.path)
    return _error(500, INTERNAL_ERROR_MESSAGE)


def create_app(settings: Settings | None = None) -> FastAPI:
    """
    Build the application.

    The catalog, user store, authenticator and file storage are created here
    and kept on app.state; routes reach them through app.api.deps.
    """
    settings = settings or get_settings()
    configure_logging(settings.LOG_LEVEL)

    app = FastAPI(
        title="Content Catalog API",
        version="0.1.0",
        docs_url="/docs",
        redoc_url="/redoc",
        debug=settings.DEBUG,
    )

    settings.UPLOAD_DIR.mkdir(parents=True, exist_ok=True)
    users = UserStore(settings.users_path)
    app.state.settings = settings
    app.state.started_at = time.monotonic()
    app.state.catalog = ContentCatalog(settings.catalog_path)
    app.state.storage = FileStorage(settings.UPLOAD_DIR, settings.MAX_FILE_SIZE)
    app.state.authenticator = Authenticator(users, settings)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"] if settings.APP_ENV == "dev" else [],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @app.middleware("http")
    async def log_requests(request: Request, call_next):
        start = time.perf_counter()
        response = await call_next(request)
        logger.info(
            "%s %s %s %.1fms",
            request.method,
            request.url.path,
            response.status_code,
            (time.perf_counter() - start) * 1000,
        )
        return response

    app.add_exception_handler(StarletteHTTPException, http_exception_handler)
    app.add_exception_handler(RequestValidationError, validation_exception_handler)
    app.add_exception_handler(Exception, unhandled_exception_handler)

    app.include_router(api_router, prefix=settings.API_PREFIX)
    app.mount(
        settings.UPLOADS_URL_PATH,
        StaticFiles(directory=settings.UPLOAD_DIR, check_dir=False),
        name="uploads",
    )

    @app.get("/", include_in_schema=False)
    def root() -> dict[str, str]:
        """Root route; minimal payload for discovery."""
        return {"message": "Content Catalog API"}

    logger.info(
        "Application ready: env=%s catalog=%s users=%s uploads=%s max_file_size=%s",
        settings.APP_ENV,
        settings.catalog_path,
        settings.users_path,
        settings.UPLOAD_DIR,
        settings.MAX_FILE_SIZE,
    )
    return app
