"""YAML front matter parser for documentation pages."""

from __future__ import annotations

import logging
import re
from typing import Any

import frontmatter

from docregistry.schemas.page import MenuEntry, PageRecord
from docregistry.services.path_service import normalize_namespace, normalize_path

RECOGNIZED_FIELDS: frozenset[str] = frozenset(
    {
        "title",
        "seotitle",
        "description",
        "menu",
        "weight",
        "tags",
        "aliases",
    }
)

_SCOPED_TAGS_SUFFIX = "/tags"

logger = logging.getLogger(__name__)


def extract_title(content: str, file_path: str = "") -> str:
    """Extract title from first # heading in markdown body.

    Falls back to deriving title from the file name, or from the directory
    name for ``_index.md`` section pages.
    """
    for line in content.strip().split("\n"):
        stripped = line.strip()
        if stripped.startswith("# ") and not stripped.startswith("## "):
            return stripped.removeprefix("# ").strip()
    if file_path:
        parts = [p for p in file_path.replace("\\", "/").split("/") if p]
        name = parts[-1].removesuffix(".md") if parts else ""
        if name in {"_index", "index"} and len(parts) > 1:
            name = parts[-2]
        name = re.sub(r"^\d+-", "", name)  # strip ordering prefix
        if name and name not in {"_index", "index"}:
            return name.replace("-", " ").replace("_", " ").title()
    return "Untitled"


def _coerce_weight(raw: object) -> object:
    """Normalize a weight; values that are not integers are left for validation to reject."""
    if isinstance(raw, float) and raw.is_integer():
        return int(raw)
    if isinstance(raw, str):
        return raw.strip() or None
    return raw


def parse_menu(raw_menu: object, title: str) -> dict[str, MenuEntry]:
    """Parse the ``menu`` front matter field.

    Accepts the forms Hugo accepts:

    - ``menu: v2_0``: placed at the root of one namespace under the page title
    - ``menu: [v2_0, cloud]``: same, for several namespaces
    - ``menu: {v2_0: {name: ..., parent: ..., weight: ...}}``: full placement;
      a missing ``name`` defaults to the page title
    """
    if raw_menu is None:
        return {}
    if isinstance(raw_menu, str):
        raw_menu = [raw_menu]
    if isinstance(raw_menu, list):
        return {normalize_namespace(str(ns)): MenuEntry(name=title) for ns in raw_menu if ns}
    if not isinstance(raw_menu, dict):
        return {}

    result: dict[str, MenuEntry] = {}
    for raw_ns, raw_entry in raw_menu.items():
        ns = normalize_namespace(str(raw_ns))
        entry = raw_entry if isinstance(raw_entry, dict) else {}
        name = entry.get("name")
        parent = entry.get("parent")
        identifier = entry.get("identifier")
        result[ns] = MenuEntry(
            name=(str(name).strip() if name else "") or title,
            parent=str(parent) if parent is not None else None,
            weight=_coerce_weight(entry.get("weight")),
            identifier=str(identifier) if identifier is not None else None,
        )
    return result


def _string_list(raw: object) -> list[str]:
    if raw is None:
        return []
    if isinstance(raw, str):
        raw = [raw]
    if not isinstance(raw, list):
        return []
    return [str(item).strip() for item in raw if item is not None and str(item).strip()]


def parse_tags(
    metadata: dict[str, Any],
    namespaces: list[str],
    default_namespace: str,
) -> dict[str, list[str]]:
    """Collect namespace-scoped tags from front matter.

    ``v2.0/tags: [scraper]`` scopes tags to namespace ``v2_0``. A plain
    ``tags`` list applies to every namespace the page is placed in, or to
    ``default_namespace`` when the page has no menu placement.
    """
    result: dict[str, list[str]] = {}
    for key, value in metadata.items():
        if isinstance(key, str) and key.endswith(_SCOPED_TAGS_SUFFIX):
            ns = normalize_namespace(key.removesuffix(_SCOPED_TAGS_SUFFIX))
            if ns:
                result.setdefault(ns, []).extend(_string_list(value))

    unscoped = _string_list(metadata.get("tags"))
    if unscoped:
        for ns in namespaces or [normalize_namespace(default_namespace)]:
            result.setdefault(ns, []).extend(unscoped)

    return {ns: list(dict.fromkeys(values)) for ns, values in result.items()}


def parse_page(
    raw_content: str,
    file_path: str,
    default_namespace: str = "v2_0",
) -> PageRecord:
    """Parse a markdown file with YAML front matter into a PageRecord.

    The page path is derived from ``file_path`` relative to the content
    directory.
    """
    post = frontmatter.loads(raw_content)
    metadata: dict[str, Any] = post.metadata

    ignored = sorted(
        str(key)
        for key in metadata
        if key not in RECOGNIZED_FIELDS and not str(key).endswith(_SCOPED_TAGS_SUFFIX)
    )
    if ignored:
        logger.debug("Ignoring front matter fields in %s: %s", file_path, ", ".join(ignored))

    # Title: prefer front matter (non-empty string), fall back to heading extraction.
    fm_title = post.get("title")
    if fm_title is not None and not isinstance(fm_title, str):
        fm_title = str(fm_title)
    if fm_title and fm_title.strip():
        title = fm_title.strip()
    else:
        title = extract_title(post.content, file_path)

    menu = parse_menu(post.get("menu"), title)
    tags = parse_tags(metadata, list(menu), default_namespace)

    raw_seotitle = post.get("seotitle")
    raw_description = post.get("description")

    return PageRecord(
        path=normalize_path(file_path),
        title=title,
        seotitle=str(raw_seotitle).strip() if raw_seotitle else None,
        description=str(raw_description).strip() if raw_description else "",
        menu=menu,
        weight=_coerce_weight(post.get("weight")),
        tags=tags,
        aliases=_string_list(post.get("aliases")),
        body=post.content,
        file_path=file_path,
    )
