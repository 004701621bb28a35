"""TOML configuration reader/writer for docs.toml."""

from __future__ import annotations

import tomllib
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any

import tomli_w

from docregistry.services.path_service import normalize_namespace

if TYPE_CHECKING:
    from pathlib import Path

SITE_CONFIG_FILE = "docs.toml"


@dataclass
class NamespaceDef:
    """A menu namespace (product version or edition) declared in docs.toml."""

    id: str
    title: str


@dataclass
class SiteConfig:
    """Parsed site configuration from docs.toml."""

    title: str = "Documentation"
    description: str = ""
    default_namespace: str = ""
    namespaces: list[NamespaceDef] = field(default_factory=list)


def parse_site_config(content_dir: Path) -> SiteConfig:
    """Parse docs.toml from the content directory.

    A missing file yields the default configuration.
    """
    config_path = content_dir / SITE_CONFIG_FILE
    if not config_path.exists():
        return SiteConfig()

    data = tomllib.loads(config_path.read_text(encoding="utf-8"))
    site_data = data.get("site", {})

    namespaces: list[NamespaceDef] = []
    for ns_data in data.get("namespaces", []):
        if "id" not in ns_data:
            msg = f"Namespace entry missing required 'id' field: {ns_data}"
            raise ValueError(msg)
        ns_id = normalize_namespace(str(ns_data["id"]))
        namespaces.append(NamespaceDef(id=ns_id, title=ns_data.get("title", ns_id)))

    raw_default = site_data.get("default_namespace", "")
    return SiteConfig(
        title=site_data.get("title", "Documentation"),
        description=site_data.get("description", ""),
        default_namespace=normalize_namespace(raw_default) if raw_default else "",
        namespaces=namespaces,
    )


def write_site_config(content_dir: Path, config: SiteConfig) -> None:
    """Write site configuration back to docs.toml."""
    site_data: dict[str, Any] = {
        "title": config.title,
        "description": config.description,
    }
    if config.default_namespace:
        site_data["default_namespace"] = config.default_namespace

    namespaces_data: list[dict[str, Any]] = [
        {"id": ns.id, "title": ns.title} for ns in config.namespaces
    ]

    config_path = content_dir / SITE_CONFIG_FILE
    config_path.write_bytes(
        tomli_w.dumps({"site": site_data, "namespaces": namespaces_data}).encode("utf-8")
    )
