"""Immutable page model held by the document registry."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from collections.abc import Mapping


@dataclass(frozen=True)
class MenuPlacement:
    """Position of a page in one namespace's navigation menu."""

    name: str
    parent: str | None = None
    weight: int | None = None
    identifier: str | None = None

    @property
    def key(self) -> str:
        """Name other placements use to reference this one as their parent."""
        return self.identifier or self.name


@dataclass(frozen=True)
class Page:
    """One documentation page."""

    path: str
    title: str
    body: str = ""
    seotitle: str | None = None
    description: str = ""
    menu: Mapping[str, MenuPlacement] = field(default_factory=dict, hash=False)
    tags: Mapping[str, frozenset[str]] = field(default_factory=dict, hash=False)
    aliases: frozenset[str] = frozenset()
    file_path: str = ""

    def placement(self, namespace: str) -> MenuPlacement | None:
        return self.menu.get(namespace)

    def tags_for(self, namespace: str) -> frozenset[str]:
        return self.tags.get(namespace, frozenset())
