"""Navigation and tag API endpoints, scoped by menu namespace."""

from __future__ import annotations

from typing import Annotated

from fastapi import APIRouter, Depends

from docregistry.api.deps import get_registry
from docregistry.schemas.page import (
    BreadcrumbsResponse,
    NavigationResponse,
    TagCountResponse,
    TaggedPagesResponse,
)
from docregistry.services.page_service import (
    get_breadcrumbs,
    get_navigation,
    get_tag_counts,
    get_tagged_pages,
)
from docregistry.services.registry import DocumentRegistry

router = APIRouter(prefix="/api/namespaces", tags=["namespaces"])


@router.get("", response_model=list[str])
async def list_namespaces(
    registry: Annotated[DocumentRegistry, Depends(get_registry)],
) -> list[str]:
    """List namespaces used by any page's menu or tags."""
    return registry.namespaces()


@router.get("/{namespace}/nav", response_model=NavigationResponse)
async def navigation(
    namespace: str,
    registry: Annotated[DocumentRegistry, Depends(get_registry)],
) -> NavigationResponse:
    """Get the ordered navigation tree of a namespace."""
    return get_navigation(registry, namespace)


@router.get("/{namespace}/tags", response_model=list[TagCountResponse])
async def tag_counts(
    namespace: str,
    registry: Annotated[DocumentRegistry, Depends(get_registry)],
) -> list[TagCountResponse]:
    """List tags of a namespace with page counts."""
    return get_tag_counts(registry, namespace)


@router.get("/{namespace}/tags/{tag}", response_model=TaggedPagesResponse)
async def tagged_pages(
    namespace: str,
    tag: str,
    registry: Annotated[DocumentRegistry, Depends(get_registry)],
) -> TaggedPagesResponse:
    """List pages carrying a tag, in path order."""
    return get_tagged_pages(registry, namespace, tag)


@router.get("/{namespace}/breadcrumbs/{page_path:path}", response_model=BreadcrumbsResponse)
async def breadcrumbs(
    namespace: str,
    page_path: str,
    registry: Annotated[DocumentRegistry, Depends(get_registry)],
) -> BreadcrumbsResponse:
    """Get the root-to-page menu chain of a page."""
    return get_breadcrumbs(registry, namespace, "/" + page_path)
