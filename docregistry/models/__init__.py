"""Domain models for the document registry."""

from docregistry.models.page import MenuPlacement, Page

__all__ = [
    "MenuPlacement",
    "Page",
]
