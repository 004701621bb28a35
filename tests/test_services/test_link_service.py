"""Tests for cross-reference extraction from page bodies."""

from __future__ import annotations

from docregistry.models.page import Page
from docregistry.services.link_service import extract_links, resolve_reference, strip_code


def _page(body: str, path: str = "/v2.0/visualize-data/dashboards/") -> Page:
    return Page(path=path, title="Dashboards", body=body)


class TestExtractLinks:
    def test_inline_links(self) -> None:
        body = (
            "Create a [dashboard](/v2.0/visualize-data/dashboards/create/) "
            "or [label](/v2.0/labels)."
        )
        assert extract_links(_page(body)) == [
            "/v2.0/visualize-data/dashboards/create/",
            "/v2.0/labels/",
        ]

    def test_inline_link_with_title_and_fragment(self) -> None:
        body = '[Flux](/v2.0/reference/flux/#functions "Flux reference")'
        assert extract_links(_page(body)) == ["/v2.0/reference/flux/"]

    def test_balanced_parentheses_in_destination(self) -> None:
        body = (
            "Use [count()](/v2.0/reference/flux/aggregates/count_(x)/) "
            '(see [mean](/v2.0/reference/flux/mean_(x)/ "Mean")).'
        )
        assert extract_links(_page(body)) == [
            "/v2.0/reference/flux/aggregates/count_(x)/",
            "/v2.0/reference/flux/mean_(x)/",
        ]

    def test_reference_definitions(self) -> None:
        body = "See [the CLI][cli].\n\n[cli]: /v2.0/reference/cli/influx/\n"
        assert extract_links(_page(body)) == ["/v2.0/reference/cli/influx/"]

    def test_html_href(self) -> None:
        body = '<a class="btn" href="/v2.0/get-started/">Get started</a>'
        assert extract_links(_page(body)) == ["/v2.0/get-started/"]

    def test_external_and_anchor_links_ignored(self) -> None:
        body = (
            "[site](https://www.influxdata.com/) [mail](mailto:docs@example.com) "
            "[proto](//cdn.example.com/x) [anchor](#options)"
        )
        assert extract_links(_page(body)) == []

    def test_assets_ignored(self) -> None:
        body = "![Dashboard](/img/2-0-dashboard.png) [data](/downloads/sample.csv)"
        assert extract_links(_page(body)) == []

    def test_code_ignored(self) -> None:
        body = (
            "Real [link](/v2.0/a/).\n\n"
            "```js\n"
            'from(bucket: "example") // [fake](/v2.0/in-fence/)\n'
            "```\n\n"
            "Inline `[fake](/v2.0/inline/)` code.\n"
        )
        assert extract_links(_page(body)) == ["/v2.0/a/"]

    def test_relative_links_resolved_against_page(self) -> None:
        body = "[create](create/) [up](../) [sibling](../../query-data/)"
        assert extract_links(_page(body)) == [
            "/v2.0/visualize-data/dashboards/create/",
            "/v2.0/visualize-data/",
            "/v2.0/query-data/",
        ]

    def test_duplicates_collapsed_in_order(self) -> None:
        body = "[a](/v2.0/b/) [b](/v2.0/a/) [c](/v2.0/b/#x)"
        assert extract_links(_page(body)) == ["/v2.0/b/", "/v2.0/a/"]

    def test_shortcode_targets_ignored(self) -> None:
        body = '[ref]({{< latest "influxdb" >}}/query-data/)'
        assert extract_links(_page(body)) == []

    def test_version_segment_is_not_an_asset(self) -> None:
        assert extract_links(_page("[v](/v2.0)")) == ["/v2.0/"]


class TestHelpers:
    def test_resolve_reference_none_for_external(self) -> None:
        assert resolve_reference("/a/", "https://example.com/") is None

    def test_resolve_reference_none_for_fragment_only(self) -> None:
        assert resolve_reference("/a/", "#top") is None

    def test_strip_code_removes_tilde_fences(self) -> None:
        assert "inside" not in strip_code("before\n~~~\ninside\n~~~\nafter")
