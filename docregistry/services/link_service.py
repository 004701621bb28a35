"""Cross-reference extraction from page bodies."""

from __future__ import annotations

import posixpath
import re
from typing import TYPE_CHECKING, NamedTuple

from docregistry.services.path_service import normalize_path

if TYPE_CHECKING:
    from docregistry.models.page import Page

_FENCE_RE = re.compile(r"^[ \t]*(```|~~~).*?^[ \t]*\1[^\n]*$", re.MULTILINE | re.DOTALL)
_INLINE_CODE_RE = re.compile(r"`[^`\n]*`")
_INLINE_LINK_RE = re.compile(
    r"\]\(\s*<?((?:[^()\s<>]|\([^()\s]*\))+)>?(?:\s+[\"'(][^)]*)?\)"
)
_REFERENCE_DEF_RE = re.compile(r"^[ ]{0,3}\[[^\]]+\]:\s*<?([^\s>]+)>?", re.MULTILINE)
_HREF_RE = re.compile(r"""href\s*=\s*["']([^"']+)["']""", re.IGNORECASE)
_SCHEME_RE = re.compile(r"^[a-zA-Z][a-zA-Z0-9+.-]*:")
_ASSET_SUFFIXES = frozenset(
    {
        ".png", ".jpg", ".jpeg", ".gif", ".svg", ".webp", ".ico", ".pdf", ".zip", ".gz",
        ".tar", ".csv", ".json", ".txt", ".js", ".css", ".xml", ".yaml", ".yml", ".toml",
        ".mp4", ".woff", ".woff2",
    }
)  # fmt: skip


class BrokenLink(NamedTuple):
    """A reference in a page body that resolves to no page."""

    page: str
    reference: str


def strip_code(body: str) -> str:
    """Remove fenced code blocks and inline code spans from markdown."""
    return _INLINE_CODE_RE.sub("", _FENCE_RE.sub("", body))


def _is_internal(target: str) -> bool:
    if not target or target.startswith(("#", "//", "{{")):
        return False
    return _SCHEME_RE.match(target) is None


def resolve_reference(page_path: str, target: str) -> str | None:
    """Turn a link target into a normalized page path, or None if it is not a page link.

    Site-relative targets (``/v2.0/...``) are taken as-is; relative targets
    are joined onto the linking page's path. Static assets (``.png``,
    ``.svg``, ...) are not pages and yield None.
    """
    if not _is_internal(target):
        return None
    target = target.split("#", 1)[0].split("?", 1)[0]
    if not target:
        return None
    _, ext = posixpath.splitext(target.rsplit("/", 1)[-1])
    if ext.lower() in _ASSET_SUFFIXES:
        return None
    if not target.startswith("/"):
        target = posixpath.join(page_path, target)
    return normalize_path(target)


def extract_links(page: Page) -> list[str]:
    """Extract referenced page paths from a page body.

    Looks at markdown inline links and images, reference-style link
    definitions, and HTML ``href`` attributes. Code is ignored. Returns
    normalized paths in order of first appearance.
    """
    text = strip_code(page.body)
    targets: list[tuple[int, str]] = []
    for pattern in (_INLINE_LINK_RE, _REFERENCE_DEF_RE, _HREF_RE):
        targets.extend((m.start(), m.group(1)) for m in pattern.finditer(text))
    targets.sort()

    seen: set[str] = set()
    result: list[str] = []
    for _, target in targets:
        resolved = resolve_reference(page.path, target)
        if resolved is not None and resolved not in seen:
            seen.add(resolved)
            result.append(resolved)
    return result
