"""Page API endpoints."""

from __future__ import annotations

from typing import Annotated

from fastapi import APIRouter, Depends

from docregistry.api.deps import get_content_manager, get_registry
from docregistry.filesystem.content_manager import ContentManager
from docregistry.schemas.page import PageResponse, SiteConfigResponse
from docregistry.services.page_service import get_page, get_site_config
from docregistry.services.registry import DocumentRegistry

router = APIRouter(prefix="/api", tags=["pages"])


@router.get("/site", response_model=SiteConfigResponse)
async def site_config(
    content_manager: Annotated[ContentManager, Depends(get_content_manager)],
) -> SiteConfigResponse:
    """Get site configuration including declared namespaces."""
    return get_site_config(content_manager)


@router.get("/pages/{page_path:path}", response_model=PageResponse)
async def get_page_endpoint(
    page_path: str,
    registry: Annotated[DocumentRegistry, Depends(get_registry)],
) -> PageResponse:
    """Resolve a page by canonical path or alias."""
    return get_page(registry, "/" + page_path)
