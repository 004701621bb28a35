"""Shared test fixtures for docregistry."""

from __future__ import annotations

from typing import TYPE_CHECKING

import pytest
from httpx import ASGITransport, AsyncClient

from docregistry.config import Settings
from docregistry.main import create_app, initialize_state

if TYPE_CHECKING:
    from collections.abc import AsyncGenerator
    from pathlib import Path

SITE_TOML = """\
[site]
title = "InfluxDB Docs"
description = "Test documentation"
default_namespace = "v2.0"

[[namespaces]]
id = "v2_0"
title = "InfluxDB v2.0"
"""

CONTENT_PAGES: dict[str, str] = {
    "v2.0/_index.md": """\
---
title: InfluxDB 2.0 documentation
menu:
  v2_0:
    name: Overview
weight: 1
---

Start with [Get started](/v2.0/get-started/).
""",
    "v2.0/get-started.md": """\
---
title: Get started with InfluxDB
seotitle: Get started with InfluxDB 2.0
description: Download, install, and set up InfluxDB.
menu:
  v2_0:
    name: Get started
weight: 2
---

Follow the [dashboards guide](/v2.0/visualize-data/dashboards/).
""",
    "v2.0/write-data/_index.md": """\
---
title: Write data to InfluxDB
menu:
  v2_0:
    name: Write data
weight: 3
---
""",
    "v2.0/write-data/scrape-data.md": """\
---
title: Scrape data
menu:
  v2_0:
    name: Scrape data
    parent: Write data
weight: 301
v2.0/tags: [scraper]
---

```sh
influx write -b example [not a link](/v2.0/nowhere/)
```
""",
    "v2.0/visualize-data/_index.md": """\
---
title: Visualize data
menu:
  v2_0:
    name: Visualize data
weight: 5
v2.0/tags: [dashboards]
---
""",
    "v2.0/visualize-data/dashboards/_index.md": """\
---
title: Manage dashboards
menu:
  v2_0:
    name: Dashboards
    parent: Visualize data
weight: 101
---
""",
    "v2.0/visualize-data/dashboards/create-dashboard.md": """\
---
title: Create a dashboard
menu:
  v2_0:
    name: Create a dashboard
    parent: Dashboards
weight: 201
aliases:
  - /v2.0/dashboards/create/
v2.0/tags: [dashboards]
---

Back to [dashboards](/v2.0/visualize-data/dashboards/).
See [the missing page](/v2.0/missing-page/).
""",
    "v2.0/visualize-data/dashboards/delete-dashboard.md": """\
---
title: Delete a dashboard
menu:
  v2_0:
    name: Delete a dashboard
    parent: Dashboards
weight: 203
---
""",
    "v2.0/visualize-data/dashboards/export-dashboard.md": """\
---
title: Export a dashboard
menu:
  v2_0:
    name: Export a dashboard
    parent: Dashboards
weight: 202
---
""",
}


def write_pages(content_dir: Path, pages: dict[str, str]) -> None:
    """Write markdown files relative to ``content_dir``."""
    for rel_path, text in pages.items():
        target = content_dir / rel_path
        target.parent.mkdir(parents=True, exist_ok=True)
        target.write_text(text, encoding="utf-8")


@pytest.fixture
def tmp_content_dir(tmp_path: Path) -> Path:
    """Create a temporary content directory with a small documentation tree."""
    content = tmp_path / "content"
    content.mkdir()
    (content / "docs.toml").write_text(SITE_TOML, encoding="utf-8")
    write_pages(content, CONTENT_PAGES)
    return content


@pytest.fixture
def test_settings(tmp_content_dir: Path) -> Settings:
    """Create test settings pointing at the temporary content directory."""
    return Settings(debug=True, content_dir=tmp_content_dir)


@pytest.fixture
async def client(test_settings: Settings) -> AsyncGenerator[AsyncClient]:
    """HTTP test client with application state initialized.

    ASGITransport does not run the lifespan, so state is set up directly.
    """
    app = create_app(test_settings)
    initialize_state(app, test_settings)
    async with AsyncClient(
        transport=ASGITransport(app=app),
        base_url="http://test",
    ) as ac:
        yield ac
