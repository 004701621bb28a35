"""Navigation tree assembly for one menu namespace."""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

from docregistry.exceptions import ValidationError

if TYPE_CHECKING:
    from collections.abc import Iterator, Mapping

    from docregistry.models.page import MenuPlacement, Page


@dataclass(frozen=True)
class NavNode:
    """A page placed in a navigation tree together with its ordered children."""

    page: Page
    placement: MenuPlacement
    children: tuple[NavNode, ...] = ()

    @property
    def path(self) -> str:
        return self.page.path

    @property
    def title(self) -> str:
        return self.page.title

    @property
    def name(self) -> str:
        return self.placement.name

    @property
    def weight(self) -> int | None:
        return self.placement.weight


def sibling_sort_key(page: Page, placement: MenuPlacement) -> tuple[bool, int, str, str]:
    """Order siblings by weight ascending, unweighted last, ties by title then path."""
    return (placement.weight is None, placement.weight or 0, page.title, page.path)


class NavigationTree:
    """Lazily assembled, restartable navigation tree.

    Iterating yields the root nodes in order; each root's subtree is built
    when that root is reached. Every iteration starts over from the
    registry's immutable indexes, so the tree can be walked any number of
    times with identical results.
    """

    def __init__(
        self,
        namespace: str,
        pages: Mapping[str, Page],
        children: Mapping[str | None, tuple[str, ...]],
    ) -> None:
        self.namespace = namespace
        self._pages = pages
        self._children = children

    def __iter__(self) -> Iterator[NavNode]:
        visited: set[str] = set()
        for path in self._children.get(None, ()):
            yield self._build(path, visited)

    def _build(self, path: str, visited: set[str]) -> NavNode:
        if path in visited:
            raise ValidationError(
                f"Menu parent cycle in namespace '{self.namespace}' reaches {path} twice"
            )
        visited.add(path)
        page = self._pages[path]
        placement = page.placement(self.namespace)
        if placement is None:
            raise ValidationError(
                f"Page {path} is indexed in namespace '{self.namespace}' but has no placement"
            )
        kids = tuple(self._build(child, visited) for child in self._children.get(path, ()))
        return NavNode(page=page, placement=placement, children=kids)

    def walk(self) -> Iterator[tuple[int, NavNode]]:
        """Yield ``(depth, node)`` pairs depth-first, roots at depth 0."""
        stack: list[tuple[int, NavNode]] = [(0, node) for node in reversed(list(self))]
        while stack:
            depth, node = stack.pop()
            yield depth, node
            stack.extend((depth + 1, child) for child in reversed(node.children))

    def flatten(self) -> list[Page]:
        """Pages in depth-first navigation order."""
        return [node.page for _, node in self.walk()]
