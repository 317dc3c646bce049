"""Document store - serves fixture documents from JSON files.

Follows the same pattern as the configuration registry:
- JSON-per-file in definitions/ directory (or SEARCHVIEW_DOCUMENTS_PATH)
- Lazy loading with _loaded guard
- In-memory dict keyed by document id
- Global singleton via get_document_store()
"""

import json
import logging
import os
from pathlib import Path
from typing import Optional

from .document import SearchDocument
from .schemas import DocumentPayload

logger = logging.getLogger(__name__)


class DocumentStore:
    """In-memory documents loaded from JSON payload files."""

    def __init__(self, definitions_dir: Optional[Path] = None, unique_key: str = "id"):
        if definitions_dir is None:
            env_path = os.environ.get("SEARCHVIEW_DOCUMENTS_PATH")
            definitions_dir = Path(env_path) if env_path else Path(__file__).parent / "definitions"
        self.definitions_dir = Path(definitions_dir)
        self.unique_key = unique_key
        self._documents: dict[str, SearchDocument] = {}
        self._loaded = False

    def load(self) -> None:
        """Load all documents from JSON files."""
        if self._loaded:
            return

        if not self.definitions_dir.exists():
            logger.warning(f"Documents directory not found: {self.definitions_dir}")
            self._loaded = True
            return

        for json_file in sorted(self.definitions_dir.glob("*.json")):
            try:
                with open(json_file, "r") as f:
                    data = json.load(f)
                payload = DocumentPayload.model_validate(data)
                document = SearchDocument.from_payload(payload, unique_key=self.unique_key)
                if document.id is None:
                    logger.error(f"Document in {json_file} has no '{self.unique_key}' field")
                    continue
                self._documents[str(document.id)] = document
                logger.debug(f"Loaded document: {document.id}")
            except Exception as e:
                logger.error(f"Failed to load document from {json_file}: {e}")

        self._loaded = True
        logger.info(f"Loaded {len(self._documents)} documents")

    def get(self, document_id: str) -> Optional[SearchDocument]:
        """Get a document by id."""
        self.load()
        return self._documents.get(str(document_id))

    def add(self, document: SearchDocument) -> None:
        self.load()
        self._documents[str(document.id)] = document

    def list_all(self) -> list[SearchDocument]:
        self.load()
        return list(self._documents.values())

    def count(self) -> int:
        self.load()
        return len(self._documents)

    def reload(self) -> None:
        """Force reload all documents."""
        self._loaded = False
        self._documents.clear()
        self.load()


# Global store instance
_store: Optional[DocumentStore] = None


def get_document_store() -> DocumentStore:
    """Get the global document store instance."""
    global _store
    if _store is None:
        from searchview.config import get_config_registry

        unique_key = get_config_registry().get_configuration().unique_key
        _store = DocumentStore(unique_key=unique_key)
        _store.load()
    return _store
