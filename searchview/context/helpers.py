"""Helper registry - named rendering helpers referenced by field configuration.

A field configured with ``helper_method: name`` is rendered by the helper
registered under that name. Helpers are called with keyword arguments:
``document``, ``field``, ``config`` and ``value``, plus any options the
caller passed to the presenter.
"""

import logging
from typing import Any, Callable, Optional

import markdown
from markdown.extensions import Extension
from markupsafe import Markup

from searchview.documents.document import as_list
from searchview.exceptions import HelperNotFoundError
from searchview.html import safe_join

logger = logging.getLogger(__name__)

Helper = Callable[..., Any]


class HelperRegistry:
    """Registry of named helper methods."""

    def __init__(self):
        self._helpers: dict[str, Helper] = {}

    def register(self, name: Optional[str] = None) -> Callable[[Helper], Helper]:
        """Decorator registering a helper under ``name`` (default: function name)."""

        def decorator(func: Helper) -> Helper:
            self.add(name or func.__name__, func)
            return func

        return decorator

    def add(self, name: str, func: Helper) -> None:
        if name in self._helpers:
            logger.warning(f"Replacing helper method: {name}")
        self._helpers[name] = func
        logger.debug(f"Registered helper method: {name}")

    def get(self, name: str) -> Helper:
        helper = self._helpers.get(name)
        if helper is None:
            raise HelperNotFoundError(name, self.list_names())
        return helper

    def call(self, name: str, options: dict[str, Any]) -> Any:
        return self.get(name)(**options)

    def list_names(self) -> list[str]:
        return sorted(self._helpers.keys())

    def __contains__(self, name: str) -> bool:
        return name in self._helpers


class EscapeHtmlExtension(Extension):
    """Treat raw HTML in Markdown source as text, so it comes out escaped."""

    def extendMarkdown(self, md):
        md.preprocessors.deregister("html_block")
        md.inlinePatterns.deregister("html")


def render_markdown(value: Any = None, **options: Any) -> Markup:
    """Render each value as Markdown. Raw HTML in the value is escaped."""
    return Markup("").join(
        Markup(markdown.markdown(str(v), extensions=[EscapeHtmlExtension()]))
        for v in as_list(value)
    )


def join_lines(value: Any = None, **options: Any) -> Markup:
    """One value per line."""
    return safe_join(as_list(value), Markup("<br>"))


# Global registry instance
_registry: Optional[HelperRegistry] = None


def get_helper_registry() -> HelperRegistry:
    """Get the global helper registry, with the built-in helpers registered."""
    global _registry
    if _registry is None:
        _registry = HelperRegistry()
        _registry.add("render_markdown", render_markdown)
        _registry.add("join_lines", join_lines)
    return _registry
