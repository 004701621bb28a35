"""Page service: map registry query results onto API response schemas."""

from __future__ import annotations

from typing import TYPE_CHECKING

from docregistry.schemas.page import (
    BreadcrumbsResponse,
    BrokenLinkResponse,
    LinkReportResponse,
    MenuEntryResponse,
    NamespaceConfig,
    NavigationResponse,
    NavNodeResponse,
    PageResponse,
    PageSummary,
    SiteConfigResponse,
    TagCountResponse,
    TaggedPagesResponse,
)
from docregistry.services.path_service import normalize_namespace, normalize_path

if TYPE_CHECKING:
    from docregistry.filesystem.content_manager import ContentManager
    from docregistry.models.page import Page
    from docregistry.services.navigation import NavNode
    from docregistry.services.registry import DocumentRegistry


def get_site_config(content_manager: ContentManager) -> SiteConfigResponse:
    """Get the site configuration for the renderer."""
    cfg = content_manager.site_config
    return SiteConfigResponse(
        title=cfg.title,
        description=cfg.description,
        default_namespace=content_manager.namespace,
        namespaces=[NamespaceConfig(id=ns.id, title=ns.title) for ns in cfg.namespaces],
    )


def summarize(page: Page) -> PageSummary:
    return PageSummary(path=page.path, title=page.title)


def get_page(registry: DocumentRegistry, path_or_alias: str) -> PageResponse:
    """Resolve a path or alias. Raises NotFoundError if absent."""
    page = registry.resolve(path_or_alias)
    return PageResponse(
        path=page.path,
        requested=path_or_alias,
        is_alias=normalize_path(path_or_alias) != page.path,
        title=page.title,
        seotitle=page.seotitle,
        description=page.description,
        menu={
            ns: MenuEntryResponse(
                name=p.name, parent=p.parent, weight=p.weight, identifier=p.identifier
            )
            for ns, p in sorted(page.menu.items())
        },
        tags={ns: sorted(tags) for ns, tags in sorted(page.tags.items())},
        aliases=sorted(page.aliases),
    )


def _node_response(node: NavNode) -> NavNodeResponse:
    return NavNodeResponse(
        path=node.path,
        title=node.title,
        name=node.name,
        weight=node.weight,
        children=[_node_response(child) for child in node.children],
    )


def get_navigation(registry: DocumentRegistry, namespace: str) -> NavigationResponse:
    """Nested navigation tree. Raises ValidationError on parent cycles."""
    tree = registry.navigation_tree(namespace)
    return NavigationResponse(
        namespace=tree.namespace,
        nodes=[_node_response(node) for node in tree],
    )


def get_tag_counts(registry: DocumentRegistry, namespace: str) -> list[TagCountResponse]:
    return [
        TagCountResponse(tag=tag, page_count=count)
        for tag, count in registry.tags(namespace).items()
    ]


def get_tagged_pages(registry: DocumentRegistry, namespace: str, tag: str) -> TaggedPagesResponse:
    return TaggedPagesResponse(
        namespace=normalize_namespace(namespace),
        tag=tag,
        pages=[summarize(page) for page in registry.find_by_tag(namespace, tag)],
    )


def get_breadcrumbs(registry: DocumentRegistry, namespace: str, path: str) -> BreadcrumbsResponse:
    trail = registry.breadcrumbs(namespace, path)
    return BreadcrumbsResponse(
        namespace=normalize_namespace(namespace),
        path=registry.resolve(path).path,
        trail=[summarize(page) for page in trail],
    )


def get_link_report(registry: DocumentRegistry) -> LinkReportResponse:
    """Broken links over all pages, sorted by page then reference."""
    broken = sorted(registry.validate_links())
    return LinkReportResponse(
        checked_pages=len(registry),
        broken=[BrokenLinkResponse(page=b.page, reference=b.reference) for b in broken],
    )
