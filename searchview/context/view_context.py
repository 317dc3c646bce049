"""View contexts - what the presenter needs from the host web framework."""

from typing import Any, Optional, Protocol
from urllib.parse import quote, urlencode

from markupsafe import Markup
from starlette.requests import Request

from searchview import html
from searchview.config.schemas import SearchConfiguration
from searchview.documents.document import SearchDocument
from searchview.search_state import SearchState

from .helpers import HelperRegistry, get_helper_registry


class ViewContext(Protocol):
    """Routing, linking and helper dispatch, provided by the host framework."""

    configuration: SearchConfiguration
    search_state: SearchState

    def polymorphic_url(self, document: SearchDocument, format: Optional[str] = None) -> str:
        ...

    def search_action_path(self, params: dict[str, Any]) -> str:
        ...

    def link_to(self, body: Any, url: str) -> Markup:
        ...

    def call_helper(self, name: str, options: dict[str, Any]) -> Any:
        ...


class RequestViewContext:
    """ViewContext bound to a Starlette/FastAPI request.

    URLs come from ``request.url_for`` using the route names declared in
    the search configuration. The search state is decoded from the
    request's query string.
    """

    def __init__(
        self,
        request: Request,
        configuration: SearchConfiguration,
        helpers: Optional[HelperRegistry] = None,
    ):
        self.request = request
        self.configuration = configuration
        self.helpers = helpers or get_helper_registry()
        self.search_state = SearchState.from_query_pairs(request.query_params.multi_items())

    def polymorphic_url(self, document: SearchDocument, format: Optional[str] = None) -> str:
        """Absolute URL of a document, optionally in an export format."""
        # ids may hold slashes; everything else outside the path alphabet is escaped
        document_id = quote(str(document.id), safe="/:@")
        url = self.request.url_for(self.configuration.document_route, document_id=document_id)
        if format:
            url = url.include_query_params(format=format)
        return str(url)

    def search_action_path(self, params: dict[str, Any]) -> str:
        """Path (no host) of the search action with ``params`` applied."""
        path = self.request.url_for(self.configuration.search_route).path
        query = urlencode(SearchState.to_query_pairs(params))
        return f"{path}?{query}" if query else path

    def link_to(self, body: Any, url: str) -> Markup:
        return html.link_to(body, url)

    def call_helper(self, name: str, options: dict[str, Any]) -> Any:
        return self.helpers.call(name, options)
