"""Health check endpoint."""

from __future__ import annotations

from typing import Annotated

from fastapi import APIRouter, Depends
from pydantic import BaseModel

from docregistry.api.deps import get_registry
from docregistry.services.registry import DocumentRegistry

router = APIRouter(tags=["health"])


class HealthResponse(BaseModel):
    status: str
    version: str
    pages: int


@router.get("/api/health", response_model=HealthResponse)
async def health_check(
    registry: Annotated[DocumentRegistry, Depends(get_registry)],
) -> HealthResponse:
    """Health check endpoint for monitoring and load balancers."""
    return HealthResponse(status="ok", version="0.1.0", pages=len(registry))
