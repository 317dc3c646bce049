"""Presenter API routes - render posted documents.

Endpoints:
    POST /v1/presenter/render    Render a document payload for the index or show view
    GET  /v1/presenter/helpers   List registered helper methods
"""

import logging

from fastapi import APIRouter, HTTPException, Request

from searchview.config import get_config_registry
from searchview.context import RequestViewContext, get_helper_registry
from searchview.documents import SearchDocument
from searchview.exceptions import HelperNotFoundError
from searchview.presenter import DocumentPresenter, build_render_response
from searchview.presenter.schemas import RenderRequest, RenderResponse

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/presenter", tags=["presenter"])


@router.post("/render", response_model=RenderResponse)
async def render_document(request: Request, body: RenderRequest):
    """Render a document the same way the catalog pages do.

    The document does not need to be in the store; links to it and to
    searches are built from the catalog routes.
    """
    configuration = get_config_registry().get_configuration()
    document = SearchDocument.from_payload(body.document, unique_key=configuration.unique_key)
    if document.id is None or str(document.id) == "":
        raise HTTPException(
            status_code=422,
            detail=f"Document has no '{configuration.unique_key}' value",
        )

    presenter = DocumentPresenter(document, RequestViewContext(request, configuration))
    try:
        return build_render_response(presenter, body.view)
    except HelperNotFoundError as e:
        logger.error(f"Field configuration references a missing helper: {e}")
        raise HTTPException(status_code=500, detail=str(e))
    except Exception as e:
        logger.error(f"Rendering failed for {document.id}: {e}", exc_info=True)
        raise HTTPException(status_code=500, detail=str(e))


@router.get("/helpers")
async def list_helpers():
    """Helper method names available to field configuration."""
    return {"helpers": get_helper_registry().list_names()}
