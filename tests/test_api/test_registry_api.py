"""Tests for the registry HTTP API."""

from __future__ import annotations

from typing import TYPE_CHECKING

from tests.conftest import write_pages

if TYPE_CHECKING:
    from pathlib import Path

    from httpx import AsyncClient


class TestHealth:
    async def test_health_reports_page_count(self, client: AsyncClient) -> None:
        resp = await client.get("/api/health")
        assert resp.status_code == 200
        assert resp.json() == {"status": "ok", "version": "0.1.0", "pages": 9}


class TestSite:
    async def test_site_config(self, client: AsyncClient) -> None:
        resp = await client.get("/api/site")
        assert resp.status_code == 200
        data = resp.json()
        assert data["title"] == "InfluxDB Docs"
        assert data["default_namespace"] == "v2_0"
        assert data["namespaces"] == [{"id": "v2_0", "title": "InfluxDB v2.0"}]


class TestPages:
    async def test_resolve_path(self, client: AsyncClient) -> None:
        resp = await client.get("/api/pages/v2.0/get-started/")
        assert resp.status_code == 200
        data = resp.json()
        assert data["path"] == "/v2.0/get-started/"
        assert data["is_alias"] is False
        assert data["seotitle"] == "Get started with InfluxDB 2.0"
        assert data["menu"]["v2_0"]["weight"] == 2

    async def test_resolve_alias(self, client: AsyncClient) -> None:
        resp = await client.get("/api/pages/v2.0/dashboards/create/")
        assert resp.status_code == 200
        data = resp.json()
        assert data["path"] == "/v2.0/visualize-data/dashboards/create-dashboard/"
        assert data["is_alias"] is True
        assert data["tags"] == {"v2_0": ["dashboards"]}

    async def test_unknown_page_is_404(self, client: AsyncClient) -> None:
        resp = await client.get("/api/pages/v2.0/nope/")
        assert resp.status_code == 404
        assert resp.json()["detail"] == "Page not found"


class TestNamespaces:
    async def test_list_namespaces(self, client: AsyncClient) -> None:
        resp = await client.get("/api/namespaces")
        assert resp.json() == ["v2_0"]

    async def test_tag_only_namespace_listed(
        self, client: AsyncClient, tmp_content_dir: Path
    ) -> None:
        write_pages(tmp_content_dir, {"cloud/labels.md": "---\ncloud/tags: [labels]\n---\n"})
        assert (await client.post("/api/registry/reload")).status_code == 200
        assert (await client.get("/api/namespaces")).json() == ["cloud", "v2_0"]
        nav = await client.get("/api/namespaces/cloud/nav")
        assert nav.json()["nodes"] == []

    async def test_navigation_tree(self, client: AsyncClient) -> None:
        resp = await client.get("/api/namespaces/v2_0/nav")
        assert resp.status_code == 200
        data = resp.json()
        assert data["namespace"] == "v2_0"
        assert [node["name"] for node in data["nodes"]] == [
            "Overview",
            "Get started",
            "Write data",
            "Visualize data",
        ]
        dashboards = data["nodes"][3]["children"][0]
        assert dashboards["name"] == "Dashboards"
        assert [child["weight"] for child in dashboards["children"]] == [201, 202, 203]

    async def test_dotted_namespace_accepted(self, client: AsyncClient) -> None:
        resp = await client.get("/api/namespaces/v2.0/nav")
        assert resp.status_code == 200
        assert resp.json()["namespace"] == "v2_0"

    async def test_tag_counts(self, client: AsyncClient) -> None:
        resp = await client.get("/api/namespaces/v2_0/tags")
        assert resp.json() == [
            {"tag": "dashboards", "page_count": 2},
            {"tag": "scraper", "page_count": 1},
        ]

    async def test_tagged_pages(self, client: AsyncClient) -> None:
        resp = await client.get("/api/namespaces/v2_0/tags/scraper")
        assert resp.status_code == 200
        assert resp.json()["pages"] == [
            {"path": "/v2.0/write-data/scrape-data/", "title": "Scrape data"}
        ]

    async def test_breadcrumbs(self, client: AsyncClient) -> None:
        resp = await client.get("/api/namespaces/v2_0/breadcrumbs/v2.0/dashboards/create/")
        assert resp.status_code == 200
        data = resp.json()
        assert data["path"] == "/v2.0/visualize-data/dashboards/create-dashboard/"
        assert [crumb["title"] for crumb in data["trail"]] == [
            "Visualize data",
            "Manage dashboards",
            "Create a dashboard",
        ]


class TestLinks:
    async def test_broken_links(self, client: AsyncClient) -> None:
        resp = await client.get("/api/links/broken")
        assert resp.status_code == 200
        assert resp.json() == {
            "checked_pages": 9,
            "broken": [
                {
                    "page": "/v2.0/visualize-data/dashboards/create-dashboard/",
                    "reference": "/v2.0/missing-page/",
                }
            ],
        }


class TestReload:
    async def test_reload_picks_up_new_page(
        self, client: AsyncClient, tmp_content_dir: Path
    ) -> None:
        write_pages(
            tmp_content_dir,
            {
                "v2.0/query-data.md": (
                    "---\ntitle: Query data\nmenu:\n  v2_0:\n    name: Query\n---\n"
                )
            },
        )
        resp = await client.post("/api/registry/reload")
        assert resp.status_code == 200
        assert resp.json()["pages"] == 10
        assert (await client.get("/api/pages/v2.0/query-data/")).status_code == 200

    async def test_failed_reload_keeps_previous_registry(
        self, client: AsyncClient, tmp_content_dir: Path
    ) -> None:
        write_pages(
            tmp_content_dir,
            {
                "v2.0/cycle-a.md": "---\nmenu:\n  v2_0:\n    name: A\n    parent: B\n---\n",
                "v2.0/cycle-b.md": "---\nmenu:\n  v2_0:\n    name: B\n    parent: A\n---\n",
            },
        )
        resp = await client.post("/api/registry/reload")
        assert resp.status_code == 422
        data = resp.json()
        assert data["detail"] == "Content failed validation"
        assert any("cycle" in problem for problem in data["problems"])

        health = await client.get("/api/health")
        assert health.json()["pages"] == 9
