"""Page-related schemas: raw page records and API responses."""

from __future__ import annotations

from pydantic import BaseModel, Field, field_validator


class MenuEntry(BaseModel):
    """Menu placement as written in front matter."""

    name: str = Field(min_length=1)
    parent: str | None = None
    weight: int | None = None
    identifier: str | None = None

    @field_validator("parent", "identifier")
    @classmethod
    def blank_to_none(cls, v: str | None) -> str | None:
        """Treat empty or whitespace-only references as absent."""
        _ = cls
        if v is None or not v.strip():
            return None
        return v.strip()


class PageRecord(BaseModel):
    """Raw page record handed to ``DocumentRegistry.load``.

    ``menu`` and ``tags`` are keyed by namespace. ``weight`` is the page-level
    default applied to menu entries that carry no weight of their own.
    """

    path: str = Field(min_length=1)
    title: str = ""
    seotitle: str | None = None
    description: str = ""
    menu: dict[str, MenuEntry] = Field(default_factory=dict)
    weight: int | None = None
    tags: dict[str, list[str]] = Field(default_factory=dict)
    aliases: list[str] = Field(default_factory=list)
    body: str = ""
    file_path: str = ""

    @field_validator("path")
    @classmethod
    def path_must_be_nonblank(cls, v: str) -> str:
        """Reject whitespace-only paths."""
        _ = cls
        if not v.strip():
            raise ValueError("Page path must not be empty or whitespace-only")
        return v


class MenuEntryResponse(BaseModel):
    """Menu placement of a page in one namespace."""

    name: str
    parent: str | None = None
    weight: int | None = None
    identifier: str | None = None


class PageResponse(BaseModel):
    """Resolved page metadata."""

    path: str
    requested: str
    is_alias: bool = False
    title: str
    seotitle: str | None = None
    description: str = ""
    menu: dict[str, MenuEntryResponse] = Field(default_factory=dict)
    tags: dict[str, list[str]] = Field(default_factory=dict)
    aliases: list[str] = Field(default_factory=list)


class PageSummary(BaseModel):
    """Short page reference used in listings."""

    path: str
    title: str


class NavNodeResponse(BaseModel):
    """Node of a navigation tree."""

    path: str
    title: str
    name: str
    weight: int | None = None
    children: list[NavNodeResponse] = Field(default_factory=list)


class NavigationResponse(BaseModel):
    """Navigation tree for one namespace."""

    namespace: str
    nodes: list[NavNodeResponse]


class TagCountResponse(BaseModel):
    """Tag with the number of pages carrying it."""

    tag: str
    page_count: int = Field(ge=0)


class TaggedPagesResponse(BaseModel):
    """Pages carrying a tag in a namespace."""

    namespace: str
    tag: str
    pages: list[PageSummary]


class BreadcrumbsResponse(BaseModel):
    """Root-to-page chain of a page in one namespace."""

    namespace: str
    path: str
    trail: list[PageSummary]


class BrokenLinkResponse(BaseModel):
    """Reference in a page body that resolves to no page."""

    page: str
    reference: str


class LinkReportResponse(BaseModel):
    """Broken-link report over all pages."""

    checked_pages: int = Field(ge=0)
    broken: list[BrokenLinkResponse]


class NamespaceConfig(BaseModel):
    """Namespace declared in the site configuration."""

    id: str
    title: str


class SiteConfigResponse(BaseModel):
    """Site configuration response."""

    title: str
    description: str
    default_namespace: str
    namespaces: list[NamespaceConfig]


class ReloadResponse(BaseModel):
    """Result of rebuilding the registry from disk."""

    pages: int = Field(ge=0)
    aliases: int = Field(ge=0)
    namespaces: list[str]
