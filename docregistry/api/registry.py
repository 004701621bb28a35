"""Registry rebuild endpoint."""

from __future__ import annotations

import logging
from typing import Annotated

from fastapi import APIRouter, Depends, Request

from docregistry.api.deps import get_content_manager, get_settings
from docregistry.config import Settings
from docregistry.filesystem.content_manager import ContentManager
from docregistry.schemas.page import ReloadResponse

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/registry", tags=["registry"])


@router.post("/reload", response_model=ReloadResponse)
def reload_registry(
    request: Request,
    settings: Annotated[Settings, Depends(get_settings)],
    content_manager: Annotated[ContentManager, Depends(get_content_manager)],
) -> ReloadResponse:
    """Rebuild the registry from disk.

    The new registry replaces the old one only if it loads cleanly; on a
    ValidationError the previous registry keeps serving.
    """
    content_manager.reload_config()
    registry = content_manager.build_registry(strict=settings.strict)
    request.app.state.registry = registry
    logger.info("Registry reloaded with %d pages", len(registry))
    return ReloadResponse(
        pages=len(registry),
        aliases=len(registry.aliases),
        namespaces=registry.namespaces(),
    )
