"""Link report endpoint."""

from __future__ import annotations

from typing import Annotated

from fastapi import APIRouter, Depends

from docregistry.api.deps import get_registry
from docregistry.schemas.page import LinkReportResponse
from docregistry.services.page_service import get_link_report
from docregistry.services.registry import DocumentRegistry

router = APIRouter(prefix="/api/links", tags=["links"])


@router.get("/broken", response_model=LinkReportResponse)
def broken_links(
    registry: Annotated[DocumentRegistry, Depends(get_registry)],
) -> LinkReportResponse:
    """Report every cross-reference that resolves to no page."""
    return get_link_report(registry)
