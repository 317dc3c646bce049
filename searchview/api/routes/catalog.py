"""Catalog routes - the search UI's document pages.

Endpoints:
    GET /catalog                              Search action (facet filters echoed)
    GET /catalog/{document_id}                Document show page (HTML)
    GET /catalog/{document_id}?format=xml     Document export
    GET /catalog/{document_id}/index-entry    Result-list fields for one document

Searching itself belongs to the search engine; the search action only
decodes the state that link-to-search links point at.

Document ids may contain slashes (OAI identifiers such as ``oai:lib/42``),
so the id segment uses the path convertor and the index-entry route is
declared before the show route.
"""

import logging
from typing import Optional

from fastapi import APIRouter, HTTPException, Query, Request
from fastapi.responses import HTMLResponse, Response

from searchview.config import get_config_registry
from searchview.context import RequestViewContext
from searchview.documents import SearchDocument, get_document_store
from searchview.exceptions import UnsupportedExportFormat
from searchview.presenter import DocumentPresenter, render_fields, render_show_page
from searchview.search_state import SearchState

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/catalog", tags=["catalog"])


def _get_or_404(document_id: str) -> SearchDocument:
    """Get a document by id or raise 404."""
    document = get_document_store().get(document_id)
    if document is None:
        raise HTTPException(status_code=404, detail=f"Document not found: {document_id}")
    return document


def _presenter_for(request: Request, document: SearchDocument) -> DocumentPresenter:
    configuration = get_config_registry().get_configuration()
    return DocumentPresenter(document, RequestViewContext(request, configuration))


@router.get("", name="search_action")
async def search_action(request: Request):
    """Echo the query and facet filters carried by the request."""
    state = SearchState.from_query_pairs(request.query_params.multi_items())
    return {"q": state.query, "filters": state.filters()}


@router.get("/{document_id:path}/index-entry")
async def document_index_entry(request: Request, document_id: str):
    """Rendered result-list fields for one document, keyed by field name."""
    document = _get_or_404(document_id)

    try:
        fields = render_fields(_presenter_for(request, document), "index")
    except Exception as e:
        logger.error(f"Index entry rendering failed for {document_id}: {e}", exc_info=True)
        raise HTTPException(status_code=500, detail=str(e))
    return {field.name: field.html for field in fields}


@router.get("/{document_id:path}", name="solr_document")
async def show_document(
    request: Request,
    document_id: str,
    format: Optional[str] = Query(None, description="Export format short name"),
):
    """Render a document's show page, or its export when ``format`` is given."""
    document = _get_or_404(document_id)

    if format:
        try:
            body = document.export_as(format)
        except UnsupportedExportFormat as e:
            raise HTTPException(status_code=404, detail=str(e))
        content_type = document.export_formats()[format]["content_type"] or "text/plain"
        return Response(content=body, media_type=content_type)

    try:
        page = render_show_page(_presenter_for(request, document))
    except Exception as e:
        logger.error(f"Show page rendering failed for {document_id}: {e}", exc_info=True)
        raise HTTPException(status_code=500, detail=str(e))
    return HTMLResponse(content=str(page))
