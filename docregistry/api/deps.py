"""Shared API dependencies: settings, content manager, registry."""

from __future__ import annotations

from fastapi import Request

from docregistry.config import Settings
from docregistry.filesystem.content_manager import ContentManager
from docregistry.services.registry import DocumentRegistry


def get_settings(request: Request) -> Settings:
    """Get application settings from app state."""
    settings: Settings = request.app.state.settings
    return settings


def get_content_manager(request: Request) -> ContentManager:
    """Get content manager from app state."""
    cm: ContentManager = request.app.state.content_manager
    return cm


def get_registry(request: Request) -> DocumentRegistry:
    """Get the current document registry from app state."""
    registry: DocumentRegistry = request.app.state.registry
    return registry
