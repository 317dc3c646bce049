"""Search-result documents.

A document wraps the field data and highlighting snippets returned for one
search hit, and declares the export formats it can be rendered in.
"""

from .document import MISSING, DublinCoreDocument, SearchDocument
from .schemas import DocumentPayload
from .store import DocumentStore, get_document_store

__all__ = [
    "MISSING",
    "DocumentPayload",
    "DublinCoreDocument",
    "SearchDocument",
    "DocumentStore",
    "get_document_store",
]
