"""searchview API - search result presentation service.

Serves the catalog's document pages and a rendering endpoint:
- Document show pages and exports (/catalog/{id})
- Result-list entries (/catalog/{id}/index-entry)
- Rendering of posted documents (/v1/presenter/render)
"""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI

from searchview import __version__
from searchview.api.routes import catalog, presenter
from searchview.config import get_config_registry
from searchview.context import get_helper_registry
from searchview.documents import get_document_store

# Configure logging
logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan handler."""
    # Startup: Pre-load configuration and documents
    logger.info("Loading search configuration...")
    config_stats = get_config_registry().get_stats()
    logger.info(
        f"Loaded {config_stats['index_fields']} index fields, "
        f"{config_stats['show_fields']} show fields"
    )

    logger.info("Loading documents...")
    document_store = get_document_store()
    logger.info(f"Loaded {document_store.count()} documents")

    helper_registry = get_helper_registry()
    logger.info(f"Registered helpers: {', '.join(helper_registry.list_names())}")

    logger.info("searchview API ready")
    yield
    # Shutdown
    logger.info("Shutting down searchview API")


app = FastAPI(
    title="searchview API",
    description="Presentation layer for search result documents.",
    version=__version__,
    lifespan=lifespan,
)

app.include_router(catalog.router)
app.include_router(presenter.router, prefix="/v1")


@app.get("/")
async def root():
    """Root endpoint with API info."""
    return {
        "service": "searchview API",
        "version": __version__,
        "docs": "/docs",
        "endpoints": {
            "catalog": "/catalog",
            "presenter": "/v1/presenter",
        },
    }


@app.get("/health")
async def health():
    """Health check endpoint."""
    config_stats = get_config_registry().get_stats()
    return {
        "status": "healthy",
        "index_fields": config_stats["index_fields"],
        "show_fields": config_stats["show_fields"],
        "documents_loaded": get_document_store().count(),
    }


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "searchview.api.main:app",
        host="0.0.0.0",
        port=8001,
        reload=True,
    )
