"""Exceptions raised by the presentation layer."""


class SearchViewError(Exception):
    """Base class for searchview errors."""


class ConfigurationError(SearchViewError):
    """Field or view configuration could not be loaded or is invalid."""


class HelperNotFoundError(SearchViewError, LookupError):
    """A field configuration names a helper method that is not registered."""

    def __init__(self, name: str, available: list[str]):
        self.name = name
        self.available = available
        super().__init__(f"Helper method '{name}' not registered. Available: {available}")


class UnsupportedExportFormat(SearchViewError, ValueError):
    """A document was asked for an export format it does not declare."""

    def __init__(self, document_id, short_name: str):
        self.document_id = document_id
        self.short_name = short_name
        super().__init__(f"Document {document_id} cannot be exported as '{short_name}'")
