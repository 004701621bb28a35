"""Path and namespace normalization for page identities."""

from __future__ import annotations

import posixpath
import re

_PAGE_SUFFIXES = (".md", ".html")
_INDEX_NAMES = frozenset({"_index", "index"})


def normalize_path(raw: str) -> str:
    """Normalize a content path, URL path or alias to a canonical page path.

    - Drop any ``#fragment`` or ``?query``
    - Use forward slashes, collapse repeated slashes, resolve ``.``/``..``
    - Strip a ``.md``/``.html`` suffix and collapse ``index``/``_index``
      to the containing directory
    - Always start and end with ``/``

    ``content/v2.0/write-data/_index.md`` style inputs therefore map to the
    same identity as the ``/v2.0/write-data/`` URL.
    """
    text = raw.strip().split("#", 1)[0].split("?", 1)[0]
    text = text.replace("\\", "/")
    text = re.sub(r"/+", "/", "/" + text)
    text = posixpath.normpath(text)
    for suffix in _PAGE_SUFFIXES:
        if text.endswith(suffix):
            text = text.removesuffix(suffix)
            break
    head, _, name = text.rpartition("/")
    if name in _INDEX_NAMES:
        text = head
    if not text.endswith("/"):
        text += "/"
    return text


def normalize_namespace(raw: str) -> str:
    """Normalize a namespace key: ``v2.0`` and ``v2_0`` denote the same namespace."""
    return raw.strip().replace(".", "_")
