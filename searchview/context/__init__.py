"""Host view-rendering context.

The presenter never builds URLs or runs helpers itself; it asks the view
context, which is bound to the current web request.
"""

from .helpers import HelperRegistry, get_helper_registry
from .view_context import RequestViewContext, ViewContext

__all__ = [
    "HelperRegistry",
    "get_helper_registry",
    "RequestViewContext",
    "ViewContext",
]
