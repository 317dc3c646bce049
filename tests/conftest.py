"""Shared fixtures for presenter tests."""

from __future__ import annotations

from typing import Any, Optional
from urllib.parse import urlencode

import pytest
from markupsafe import Markup

from searchview import html
from searchview.config.schemas import SearchConfiguration
from searchview.context.helpers import HelperRegistry, join_lines, render_markdown
from searchview.documents.document import SearchDocument
from searchview.search_state import SearchState


class FakeViewContext:
    """View context with fixed URLs, standing in for a request-bound one."""

    def __init__(
        self,
        configuration: SearchConfiguration,
        helpers: HelperRegistry,
        params: Optional[dict[str, Any]] = None,
    ) -> None:
        self.configuration = configuration
        self.helpers = helpers
        self.search_state = SearchState(params)
        self.helper_calls: list[tuple[str, dict[str, Any]]] = []

    def polymorphic_url(self, document: SearchDocument, format: Optional[str] = None) -> str:
        url = f"http://test/catalog/{document.id}"
        return f"{url}?format={format}" if format else url

    def search_action_path(self, params: dict[str, Any]) -> str:
        return "/catalog?" + urlencode(SearchState.to_query_pairs(params))

    def link_to(self, body: Any, url: str) -> Markup:
        return html.link_to(body, url)

    def call_helper(self, name: str, options: dict[str, Any]) -> Any:
        self.helper_calls.append((name, options))
        return self.helpers.call(name, options)


@pytest.fixture
def helpers() -> HelperRegistry:
    registry = HelperRegistry()
    registry.add("render_markdown", render_markdown)
    registry.add("join_lines", join_lines)
    return registry


@pytest.fixture
def configuration() -> SearchConfiguration:
    config = SearchConfiguration.model_validate(
        {
            "views": {
                "index": {"title_field": "title"},
                "show": {"title_field": ["title", "subtitle"]},
            },
        }
    )
    config.add_index_field("title", highlight=True)
    config.add_index_field("format", link_to_search=True)
    config.add_index_field("author", link_to_search="author_facet")
    config.add_show_field("title", itemprop="name")
    config.add_show_field("author", itemprop="author")
    config.add_show_field("subject", label="Subjects")
    config.add_show_field("isbn", default="n/a")
    return config


@pytest.fixture
def context(configuration: SearchConfiguration, helpers: HelperRegistry) -> FakeViewContext:
    return FakeViewContext(configuration, helpers, params={"q": "science", "page": "3"})


@pytest.fixture
def document() -> SearchDocument:
    return SearchDocument(
        fields={
            "id": "bk-1",
            "title": "Science & Sanity",
            "author": ["Korzybski, Alfred"],
            "format": "Book",
            "subject": ["Semantics", "Logic", "Language"],
            "published": ["1933", "1958"],
        },
        highlighting={"title": ["<em>Science</em> &amp; Sanity"]},
    )
