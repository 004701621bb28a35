"""Document registry: load, validate and query a set of documentation pages."""

from __future__ import annotations

import logging
from collections import Counter
from types import MappingProxyType
from typing import TYPE_CHECKING, Any

import pydantic

from docregistry.exceptions import NotFoundError, ValidationError
from docregistry.models.page import MenuPlacement, Page
from docregistry.schemas.page import PageRecord
from docregistry.services.dag import find_cycles
from docregistry.services.link_service import BrokenLink, extract_links
from docregistry.services.navigation import NavigationTree, sibling_sort_key
from docregistry.services.path_service import normalize_namespace, normalize_path

if TYPE_CHECKING:
    from collections.abc import Callable, Iterable, Mapping

logger = logging.getLogger(__name__)


def _to_page(record: PageRecord) -> Page:
    menu: dict[str, MenuPlacement] = {}
    for raw_ns, entry in record.menu.items():
        menu[normalize_namespace(raw_ns)] = MenuPlacement(
            name=entry.name,
            parent=entry.parent,
            weight=entry.weight if entry.weight is not None else record.weight,
            identifier=entry.identifier,
        )
    tags: dict[str, frozenset[str]] = {}
    for raw_ns, values in record.tags.items():
        ns = normalize_namespace(raw_ns)
        cleaned = frozenset(v.strip() for v in values if v.strip())
        tags[ns] = tags.get(ns, frozenset()) | cleaned
    path = normalize_path(record.path)
    return Page(
        path=path,
        title=record.title.strip() or path,
        body=record.body,
        seotitle=record.seotitle,
        description=record.description,
        menu=MappingProxyType(menu),
        tags=MappingProxyType(tags),
        aliases=frozenset(normalize_path(a) for a in record.aliases if a.strip()),
        file_path=record.file_path,
    )


class DocumentRegistry:
    """Immutable, validated collection of documentation pages.

    Build one with :meth:`load`. After construction nothing mutates, so any
    number of threads may query a registry concurrently. A changed content
    set is handled by loading a new registry and discarding the old one.
    """

    def __init__(
        self,
        pages: Mapping[str, Page],
        aliases: Mapping[str, str],
        parents: Mapping[str, Mapping[str, str | None]],
        children: Mapping[str, Mapping[str | None, tuple[str, ...]]],
    ) -> None:
        self._pages = MappingProxyType(dict(sorted(pages.items())))
        self._aliases = MappingProxyType(dict(aliases))
        self._parents = MappingProxyType(
            {ns: MappingProxyType(dict(m)) for ns, m in parents.items()}
        )
        self._children = MappingProxyType(
            {ns: MappingProxyType(dict(m)) for ns, m in children.items()}
        )

    @classmethod
    def load(
        cls,
        sources: Iterable[PageRecord | Mapping[str, Any]],
        *,
        strict: bool = True,
    ) -> DocumentRegistry:
        """Build a registry from raw page records.

        Raises ValidationError, listing every problem found, if two records
        share a path, two pages share an alias, or an alias equals a page
        path. In strict mode unresolved, ambiguous and cyclic menu parents are
        rejected too; otherwise unresolved parents are logged and the page is
        treated as a root, and cycles surface from :meth:`navigation_tree`.
        """
        problems: list[str] = []
        pages: dict[str, Page] = {}

        for index, source in enumerate(sources):
            try:
                record = (
                    source if isinstance(source, PageRecord) else PageRecord.model_validate(source)
                )
            except pydantic.ValidationError as exc:
                problems.append(f"Record #{index} is invalid: {exc.errors()[0]['msg']}")
                continue
            page = _to_page(record)
            if page.path in pages:
                problems.append(
                    f"Duplicate path {page.path} "
                    f"({pages[page.path].file_path or 'record'} and {page.file_path or 'record'})"
                )
                continue
            pages[page.path] = page

        aliases: dict[str, str] = {}
        for page in sorted(pages.values(), key=lambda p: p.path):
            for alias in sorted(page.aliases):
                if alias in pages:
                    problems.append(f"Alias {alias} of {page.path} collides with a page path")
                elif alias in aliases:
                    problems.append(
                        f"Alias {alias} is claimed by both {aliases[alias]} and {page.path}"
                    )
                else:
                    aliases[alias] = page.path

        parents = cls._resolve_parents(pages, strict, problems)

        if strict:
            for ns, links in sorted(parents.items()):
                edges = [(child, parent) for child, parent in links.items() if parent is not None]
                for cycle in find_cycles(edges):
                    problems.append(
                        f"Menu parent cycle in namespace '{ns}': {' -> '.join(cycle)}"
                    )

        if problems:
            logger.error("Registry load rejected with %d problem(s)", len(problems))
            raise ValidationError(problems)

        children: dict[str, dict[str | None, tuple[str, ...]]] = {}
        for ns, links in parents.items():
            grouped: dict[str | None, list[Page]] = {}
            for child, parent in links.items():
                grouped.setdefault(parent, []).append(pages[child])
            children[ns] = {
                parent: tuple(
                    p.path
                    for p in sorted(members, key=lambda p: sibling_sort_key(p, p.menu[ns]))
                )
                for parent, members in grouped.items()
            }

        registry = cls(pages, aliases, parents, children)
        logger.info(
            "Loaded %d pages (%d aliases) across %d namespaces",
            len(pages),
            len(aliases),
            len(registry.namespaces()),
        )
        return registry

    @staticmethod
    def _resolve_parents(
        pages: Mapping[str, Page], strict: bool, problems: list[str]
    ) -> dict[str, dict[str, str | None]]:
        """Resolve parent references by menu key into child path -> parent path links."""
        index: dict[str, dict[str, list[str]]] = {}
        for page in sorted(pages.values(), key=lambda p: p.path):
            for ns, placement in page.menu.items():
                index.setdefault(ns, {}).setdefault(placement.key, []).append(page.path)

        parents: dict[str, dict[str, str | None]] = {}
        for page in sorted(pages.values(), key=lambda p: p.path):
            for ns, placement in page.menu.items():
                links = parents.setdefault(ns, {})
                if placement.parent is None:
                    links[page.path] = None
                    continue
                candidates = index[ns].get(placement.parent, [])
                if not candidates:
                    message = (
                        f"Page {page.path} names unknown menu parent "
                        f"'{placement.parent}' in namespace '{ns}'"
                    )
                    if strict:
                        problems.append(message)
                    else:
                        logger.warning("%s; placing it at the root", message)
                    links[page.path] = None
                    continue
                if len(candidates) > 1:
                    message = (
                        f"Menu parent '{placement.parent}' of {page.path} is ambiguous in "
                        f"namespace '{ns}': {', '.join(candidates)}"
                    )
                    if strict:
                        problems.append(message)
                    else:
                        logger.warning("%s; using %s", message, candidates[0])
                links[page.path] = candidates[0]
        return parents

    # -- queries ---------------------------------------------------------

    @property
    def pages(self) -> tuple[Page, ...]:
        """All pages in path order."""
        return tuple(self._pages.values())

    @property
    def aliases(self) -> Mapping[str, str]:
        """Alias -> canonical path."""
        return self._aliases

    def __len__(self) -> int:
        return len(self._pages)

    def __contains__(self, path_or_alias: object) -> bool:
        if not isinstance(path_or_alias, str):
            return False
        key = normalize_path(path_or_alias)
        return key in self._pages or key in self._aliases

    def namespaces(self) -> list[str]:
        """Namespaces that appear in any page's menu or tags, sorted."""
        found: set[str] = set(self._parents)
        for page in self._pages.values():
            found.update(page.tags)
        return sorted(found)

    def resolve(self, path_or_alias: str) -> Page:
        """Return the canonical page for a path or alias.

        Raises NotFoundError if neither a page nor an alias matches.
        """
        key = normalize_path(path_or_alias)
        page = self._pages.get(key)
        if page is not None:
            return page
        target = self._aliases.get(key)
        if target is not None:
            return self._pages[target]
        raise NotFoundError(path_or_alias)

    def navigation_tree(self, namespace: str) -> NavigationTree:
        """Ordered navigation tree of ``namespace``.

        Raises ValidationError if the namespace's parent links contain a
        cycle (including a page that is its own parent). An unknown
        namespace yields an empty tree.
        """
        ns = normalize_namespace(namespace)
        links = self._parents.get(ns, {})
        edges = [(child, parent) for child, parent in links.items() if parent is not None]
        cycles = find_cycles(edges)
        if cycles:
            raise ValidationError(
                [f"Menu parent cycle in namespace '{ns}': {' -> '.join(c)}" for c in cycles]
            )
        return NavigationTree(ns, self._pages, self._children.get(ns, {}))

    def find_by_tag(self, namespace: str, tag: str) -> list[Page]:
        """Pages tagged ``tag`` in ``namespace``, in path order."""
        ns = normalize_namespace(namespace)
        return [page for page in self._pages.values() if tag in page.tags_for(ns)]

    def tags(self, namespace: str) -> dict[str, int]:
        """Tag -> number of pages carrying it in ``namespace``, sorted by tag."""
        ns = normalize_namespace(namespace)
        counts: Counter[str] = Counter()
        for page in self._pages.values():
            counts.update(page.tags_for(ns))
        return dict(sorted(counts.items()))

    def children(self, namespace: str, path: str) -> list[Page]:
        """Ordered menu children of a page in ``namespace``."""
        page = self.resolve(path)
        ns = normalize_namespace(namespace)
        return [self._pages[p] for p in self._children.get(ns, {}).get(page.path, ())]

    def breadcrumbs(self, namespace: str, path: str) -> list[Page]:
        """Root-to-page chain for a page; empty if the page has no placement in ``namespace``.

        Raises ValidationError if the chain runs into a parent cycle.
        """
        page = self.resolve(path)
        ns = normalize_namespace(namespace)
        links = self._parents.get(ns, {})
        if page.path not in links:
            return []
        trail: list[Page] = []
        visited: set[str] = set()
        current: str | None = page.path
        while current is not None:
            if current in visited:
                raise ValidationError(
                    f"Menu parent cycle in namespace '{ns}' reaches {current} twice"
                )
            visited.add(current)
            trail.append(self._pages[current])
            current = links.get(current)
        trail.reverse()
        return trail

    def validate_links(
        self, link_extractor: Callable[[Page], Iterable[str]] = extract_links
    ) -> set[BrokenLink]:
        """Check every reference extracted from every page body.

        Returns all ``(page, reference)`` pairs whose reference does not
        resolve; never stops at the first failure.
        """
        broken: set[BrokenLink] = set()
        for page in self._pages.values():
            for reference in link_extractor(page):
                try:
                    self.resolve(reference)
                except NotFoundError:
                    broken.add(BrokenLink(page=page.path, reference=reference))
        if broken:
            logger.warning("Found %d broken link(s)", len(broken))
        return broken
