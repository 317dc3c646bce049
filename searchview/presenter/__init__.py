"""Document presenter - search result documents rendered as HTML fragments."""

from .document_presenter import DocumentPresenter
from .pages import build_render_response, render_fields, render_show_page

__all__ = [
    "DocumentPresenter",
    "build_render_response",
    "render_fields",
    "render_show_page",
]
