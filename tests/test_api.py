"""Tests for the FastAPI host routes."""

from __future__ import annotations

import re

import pytest
from fastapi.testclient import TestClient

from searchview.api.main import app
from searchview.documents import SearchDocument, get_document_store


@pytest.fixture
def client():
    with TestClient(app) as test_client:
        yield test_client


def test_health_reports_loaded_definitions(client: TestClient) -> None:
    """Health shows configuration and document counts."""

    response = client.get("/health")

    assert response.status_code == 200
    body = response.json()
    assert body["status"] == "healthy"
    assert body["documents_loaded"] == 3
    assert body["show_fields"] == 9


def test_show_page_renders_document(client: TestClient) -> None:
    """The show page carries title, heading, alternates and fields."""

    response = client.get("/catalog/bk-0001")

    assert response.status_code == 200
    assert response.headers["content-type"].startswith("text/html")
    page = response.text
    assert "<title>The Structure of Scientific Revolutions</title>" in page
    assert "<h1>The Structure of Scientific Revolutions</h1>" in page
    assert (
        '<link rel="alternate" title="json" type="application/json" '
        'href="http://testserver/catalog/bk-0001?format=json" />'
    ) in page
    assert page.count('<link rel="alternate"') == 4
    assert '<span itemprop="name">The Structure of Scientific Revolutions</span>' in page
    assert (
        '<a href="/catalog?f%5Bauthor_facet%5D%5B%5D=Kuhn%2C+Thomas+S.">'
        '<span itemprop="author">Kuhn, Thomas S.</span></a>'
    ) in page
    assert "<em>paradigm shifts</em>" in page
    assert "Second edition, enlarged.<br>Includes bibliographical references &amp; index." in page
    assert '<dt class="field-label-subject">Subjects:</dt>' in page
    assert '<dt class="field-label-isbn">ISBN:</dt>' in page


def test_show_page_separates_subjects_with_semicolons(client: TestClient) -> None:
    """Configured separator options apply to linked values."""

    page = client.get("/catalog/bk-0001").text
    subjects = re.search(r'<dd class="field-value-subject">(.*?)</dd>', page).group(1)

    assert subjects.count("<a href=") == 3
    assert subjects.count("</a>; <a") == 2


def test_show_page_without_title_uses_id(client: TestClient) -> None:
    """Documents without a title are headed by their id; values stay escaped."""

    page = client.get("/catalog/av-0003").text

    assert "<title>av-0003</title>" in page
    assert "<h1>av-0003</h1>" in page
    assert "Subtitled &lt;English&gt;" in page
    assert page.count('<link rel="alternate"') == 1


def test_search_links_round_trip(client: TestClient) -> None:
    """A link-to-search href leads to a search filtered on that value."""

    page = client.get("/catalog/bk-0002").text
    href = re.search(r'<a href="(/catalog\?f%5Blanguage%5D[^"]*)">German</a>', page).group(1)

    response = client.get(href)

    assert response.status_code == 200
    assert response.json() == {"q": None, "filters": {"language": ["German"]}}


def test_search_action_echoes_filters(client: TestClient) -> None:
    """The search action decodes facet filters from the query string."""

    response = client.get("/catalog", params=[("q", "kuhn"), ("f[format][]", "Book"), ("f[format][]", "Video")])

    assert response.json() == {"q": "kuhn", "filters": {"format": ["Book", "Video"]}}


def test_search_action_ignores_malformed_facets(client: TestClient) -> None:
    """Facet parameters without a field name do not break the search action."""

    response = client.get("/catalog", params=[("f", "x"), ("f[]", "y")])

    assert response.status_code == 200
    assert response.json() == {"q": None, "filters": {}}


def test_export_formats(client: TestClient) -> None:
    """?format= serves the export with its content type."""

    xml = client.get("/catalog/bk-0001", params={"format": "xml"})
    as_json = client.get("/catalog/bk-0002", params={"format": "json"})

    assert xml.status_code == 200
    assert xml.headers["content-type"].startswith("text/xml")
    assert "<dc:title>The Structure of Scientific Revolutions</dc:title>" in xml.text
    assert as_json.status_code == 200
    assert as_json.json()["subtitle"] == "An Eternal Golden Braid"


def test_unsupported_export_format_is_404(client: TestClient) -> None:
    """Documents only export the formats they declare."""

    response = client.get("/catalog/bk-0002", params={"format": "xml"})

    assert response.status_code == 404


def test_unknown_document_is_404(client: TestClient) -> None:
    """Unknown ids are not found."""

    assert client.get("/catalog/nope").status_code == 404
    assert client.get("/catalog/nope/index-entry").status_code == 404


def test_index_entry(client: TestClient) -> None:
    """Index fields render with highlight, accessor and links."""

    response = client.get("/catalog/bk-0001/index-entry")

    assert response.status_code == 200
    fields = response.json()
    assert list(fields) == ["title", "author", "format", "published", "language"]
    assert fields["title"] == "The Structure of <em>Scientific</em> Revolutions"
    assert fields["format"] == '<a href="/catalog?f%5Bformat%5D%5B%5D=Book">Book</a>'
    assert fields["published"] == "1962"


def test_render_posted_document(client: TestClient) -> None:
    """Posted documents render without being stored."""

    payload = {
        "document": {
            "fields": {"id": "tmp-1", "title": "Tom & Jerry", "format": "Video", "isbn": None},
            "highlighting": {},
        },
        "view": "show",
    }

    response = client.post("/v1/presenter/render", json=payload)

    assert response.status_code == 200
    body = response.json()
    assert body["document_id"] == "tmp-1"
    assert body["heading"] == "Tom &amp; Jerry"
    assert body["html_title"] == "Tom &amp; Jerry"
    assert body["alternates"].startswith('<link rel="alternate" title="json"')
    fields = {f["name"]: f for f in body["fields"]}
    assert fields["title"]["html"] == '<span itemprop="name">Tom &amp; Jerry</span>'
    assert fields["isbn"]["html"] == ""


def test_render_posted_document_for_index(client: TestClient) -> None:
    """The index view uses index fields and the index title label."""

    payload = {
        "document": {"fields": {"id": "tmp-2", "format": "Map"}},
        "view": "index",
    }

    body = client.post("/v1/presenter/render", json=payload).json()

    assert body["heading"] == "tmp-2"
    # accessor fields always render
    assert [f["name"] for f in body["fields"]] == ["format", "published"]
    assert body["fields"][0]["label"] == "Format"
    assert body["fields"][1]["html"] == ""


def test_render_requires_document_id(client: TestClient) -> None:
    """Documents without an id cannot be linked and are rejected."""

    response = client.post("/v1/presenter/render", json={"document": {"fields": {"title": "x"}}})

    assert response.status_code == 422


def test_list_helpers(client: TestClient) -> None:
    """Registered helper names are listed."""

    assert client.get("/v1/presenter/helpers").json() == {"helpers": ["join_lines", "render_markdown"]}


def test_render_document_with_slash_in_id(client: TestClient) -> None:
    """OAI-style ids with slashes link to their show page."""

    payload = {"document": {"fields": {"id": "oai:lib/42", "title": "Slashed"}}, "view": "show"}

    response = client.post("/v1/presenter/render", json=payload)

    assert response.status_code == 200
    assert 'href="http://testserver/catalog/oai:lib/42?format=json"' in response.json()["alternates"]


def test_render_rejects_empty_document_id(client: TestClient) -> None:
    """An empty id cannot be linked either."""

    response = client.post("/v1/presenter/render", json={"document": {"fields": {"id": "", "title": "x"}}})

    assert response.status_code == 422


def test_catalog_serves_ids_with_slashes(client: TestClient) -> None:
    """Show page, export and index entry resolve ids containing slashes."""

    store = get_document_store()
    store.add(SearchDocument({"id": "oai:lib/42", "title": "Slashed", "format": "Book"}))
    try:
        page = client.get("/catalog/oai:lib/42")
        export = client.get("/catalog/oai:lib/42", params={"format": "json"})
        entry = client.get("/catalog/oai:lib/42/index-entry")
    finally:
        store.reload()

    assert page.status_code == 200
    assert "<h1>Slashed</h1>" in page.text
    assert 'href="http://testserver/catalog/oai:lib/42?format=json"' in page.text
    assert export.json()["id"] == "oai:lib/42"
    assert entry.status_code == 200
    assert entry.json()["format"] == '<a href="/catalog?f%5Bformat%5D%5B%5D=Book">Book</a>'
