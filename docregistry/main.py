"""FastAPI application entry point."""

from __future__ import annotations

import logging
import sys
from contextlib import asynccontextmanager
from typing import TYPE_CHECKING

from fastapi import FastAPI, Request
from fastapi.middleware.gzip import GZipMiddleware
from fastapi.responses import JSONResponse

from docregistry.api.health import router as health_router
from docregistry.api.links import router as links_router
from docregistry.api.namespaces import router as namespaces_router
from docregistry.api.pages import router as pages_router
from docregistry.api.registry import router as registry_router
from docregistry.config import Settings
from docregistry.exceptions import NotFoundError, ValidationError
from docregistry.filesystem.content_manager import ContentManager
from docregistry.filesystem.toml_manager import SITE_CONFIG_FILE

if TYPE_CHECKING:
    from collections.abc import AsyncGenerator
    from pathlib import Path

logger = logging.getLogger(__name__)

_DEFAULT_SITE_TOML = (
    '[site]\ntitle = "Documentation"\ndefault_namespace = "v2_0"\n\n'
    '[[namespaces]]\nid = "v2_0"\ntitle = "v2.0"\n'
)


def configure_logging(debug: bool) -> None:
    """Configure application logging."""
    level = logging.DEBUG if debug else logging.INFO
    fmt = "%(asctime)s %(levelname)-8s %(name)s: %(message)s"
    logging.basicConfig(
        level=level,
        format=fmt,
        stream=sys.stdout,
        force=True,
    )
    # Quiet noisy libraries
    logging.getLogger("uvicorn.access").setLevel(logging.WARNING)


def ensure_content_dir(content_dir: Path) -> None:
    """Ensure the content directory and docs.toml exist without overwriting existing files."""
    if content_dir.exists() and not content_dir.is_dir():
        msg = f"Content path exists but is not a directory: {content_dir}"
        raise NotADirectoryError(msg)

    if not content_dir.exists():
        logger.info("Creating default content directory at %s", content_dir)
        content_dir.mkdir(parents=True)

    site_toml = content_dir / SITE_CONFIG_FILE
    if not site_toml.exists():
        site_toml.write_text(_DEFAULT_SITE_TOML, encoding="utf-8")
        logger.info("Created missing content scaffold file: %s", site_toml)


def initialize_state(app: FastAPI, settings: Settings) -> None:
    """Build the content manager and registry and attach them to app state."""
    try:
        ensure_content_dir(settings.content_dir)
    except Exception as exc:
        logger.critical(
            "Failed to initialize content directory at %s: %s.", settings.content_dir, exc
        )
        raise

    content_manager = ContentManager(
        content_dir=settings.content_dir,
        default_namespace=settings.default_namespace,
    )
    app.state.content_manager = content_manager

    try:
        registry = content_manager.build_registry(strict=settings.strict)
    except ValidationError as exc:
        logger.critical("Content failed validation: %s", exc)
        raise
    app.state.registry = registry

    if settings.validate_links_on_load:
        for broken in sorted(registry.validate_links()):
            logger.warning("Broken link in %s: %s", broken.page, broken.reference)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None]:
    """Application lifespan: startup and shutdown."""
    settings: Settings = app.state.settings
    configure_logging(settings.debug)
    logger.info("Starting docregistry (debug=%s)", settings.debug)

    initialize_state(app, settings)
    logger.info("Serving %d pages from %s", len(app.state.registry), settings.content_dir)

    yield

    logger.info("docregistry stopped")


def create_app(settings: Settings | None = None) -> FastAPI:
    """Create and configure the FastAPI application."""
    if settings is None:
        settings = Settings()

    docs_enabled = settings.debug or settings.expose_docs

    app = FastAPI(
        title="docregistry",
        description="Documentation page registry: navigation, tags, aliases and link checks",
        version="0.1.0",
        lifespan=lifespan,
        docs_url="/docs" if docs_enabled else None,
        redoc_url="/redoc" if docs_enabled else None,
        openapi_url="/openapi.json" if docs_enabled else None,
    )
    app.state.settings = settings

    app.add_middleware(GZipMiddleware, minimum_size=500)

    app.include_router(health_router)
    app.include_router(pages_router)
    app.include_router(namespaces_router)
    app.include_router(links_router)
    app.include_router(registry_router)

    @app.exception_handler(NotFoundError)
    async def not_found_handler(request: Request, exc: NotFoundError) -> JSONResponse:
        logger.info("NotFoundError in %s %s: %s", request.method, request.url.path, exc)
        return JSONResponse(
            status_code=404,
            content={"detail": "Page not found", "path": exc.path},
        )

    @app.exception_handler(ValidationError)
    async def validation_error_handler(request: Request, exc: ValidationError) -> JSONResponse:
        logger.error(
            "ValidationError in %s %s: %s", request.method, request.url.path, exc, exc_info=exc
        )
        return JSONResponse(
            status_code=422,
            content={"detail": "Content failed validation", "problems": exc.problems},
        )

    @app.exception_handler(ValueError)
    async def value_error_handler(request: Request, exc: ValueError) -> JSONResponse:
        logger.error("ValueError in %s %s: %s", request.method, request.url.path, exc, exc_info=exc)
        message = str(exc) or "Invalid value"
        return JSONResponse(
            status_code=422,
            content={"detail": message},
        )

    @app.exception_handler(OSError)
    async def os_error_handler(request: Request, exc: OSError) -> JSONResponse:
        logger.error("OSError in %s %s: %s", request.method, request.url.path, exc, exc_info=exc)
        return JSONResponse(
            status_code=500,
            content={"detail": "Storage operation failed"},
        )

    return app
