"""Content directory scanner and registry builder."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import TYPE_CHECKING

import yaml

from docregistry.exceptions import ValidationError
from docregistry.filesystem.frontmatter import parse_page
from docregistry.filesystem.toml_manager import SiteConfig, parse_site_config
from docregistry.services.path_service import normalize_namespace
from docregistry.services.registry import DocumentRegistry

if TYPE_CHECKING:
    from pathlib import Path

    from docregistry.schemas.page import PageRecord

logger = logging.getLogger(__name__)


def discover_pages(content_dir: Path) -> list[Path]:
    """Recursively discover all markdown files, skipping hidden files and directories."""
    if not content_dir.exists():
        return []
    found: list[Path] = []
    for path in content_dir.rglob("*.md"):
        rel_parts = path.relative_to(content_dir).parts
        if any(part.startswith(".") for part in rel_parts):
            continue
        found.append(path)
    return sorted(found)


@dataclass
class ContentManager:
    """Reads a content directory into page records and registries."""

    content_dir: Path
    default_namespace: str = "v2_0"
    _site_config: SiteConfig | None = field(default=None, repr=False)

    @property
    def site_config(self) -> SiteConfig:
        """Get site configuration, loading if needed."""
        if self._site_config is None:
            self._site_config = parse_site_config(self.content_dir)
        return self._site_config

    def reload_config(self) -> None:
        """Reload site configuration from disk."""
        self._site_config = parse_site_config(self.content_dir)

    @property
    def namespace(self) -> str:
        """Namespace that receives unscoped tags: docs.toml wins over the settings default."""
        return self.site_config.default_namespace or normalize_namespace(self.default_namespace)

    def scan_pages(self) -> tuple[list[PageRecord], list[str]]:
        """Parse every page under the content directory.

        Returns the parsed records and a problem message for each file that
        could not be read or parsed.
        """
        records: list[PageRecord] = []
        problems: list[str] = []
        namespace = self.namespace
        for page_path in discover_pages(self.content_dir):
            rel_path = page_path.relative_to(self.content_dir).as_posix()
            try:
                raw_content = page_path.read_text(encoding="utf-8")
                record = parse_page(raw_content, rel_path, default_namespace=namespace)
            except (yaml.YAMLError, ValueError, TypeError, OSError) as exc:
                logger.exception("Failed to parse page %s", rel_path)
                problems.append(f"{rel_path}: {exc}")
                continue
            records.append(record)
        return records, problems

    def build_registry(self, strict: bool = True) -> DocumentRegistry:
        """Build a complete registry from the filesystem.

        In strict mode a file that fails to parse rejects the whole build;
        otherwise it is skipped.
        """
        records, problems = self.scan_pages()
        if problems:
            if strict:
                raise ValidationError(problems)
            logger.warning("Skipped %d unparseable page(s)", len(problems))
        return DocumentRegistry.load(records, strict=strict)
