"""Field and view configuration for search result presentation.

Declares, per field, how a value is retrieved from a document (highlight,
accessor, plain lookup with default) and how it is rendered (plain text,
link back to a search, or a named helper method).
"""

from .schemas import (
    FieldConfig,
    SearchConfiguration,
    SeparatorOptions,
    ViewConfig,
)
from .registry import ConfigRegistry, get_config_registry

__all__ = [
    "FieldConfig",
    "SearchConfiguration",
    "SeparatorOptions",
    "ViewConfig",
    "ConfigRegistry",
    "get_config_registry",
]
