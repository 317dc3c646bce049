"""View helpers for composing HTML fragments.

Escaping is markupsafe's: a ``Markup`` value is already safe and passes
through untouched, anything else is escaped on the way in. Every helper
returns ``Markup`` so fragments compose without double escaping.
"""

from typing import Any, Iterable

from markupsafe import Markup, escape


def html_escape(value: Any) -> Markup:
    """Escape a value for HTML output. ``None`` renders as an empty string."""
    if value is None:
        return Markup("")
    return escape(value)


def _attributes(attrs: dict[str, Any]) -> Markup:
    parts = []
    for key, value in attrs.items():
        if value is None or value is False:
            continue
        # class_ / for_ style keywords
        name = key.rstrip("_").replace("_", "-")
        if value is True:
            parts.append(Markup(" {0}").format(name))
        else:
            parts.append(Markup(' {0}="{1}"').format(name, value))
    return Markup("").join(parts)


def tag(name: str, **attrs: Any) -> Markup:
    """Build a void element, e.g. ``<link rel="alternate" ... />``."""
    return Markup("<{0}{1} />").format(name, _attributes(attrs))


def content_tag(name: str, body: Any, **attrs: Any) -> Markup:
    """Build an element wrapping ``body`` (escaped unless already Markup)."""
    return Markup("<{0}{1}>{2}</{0}>").format(name, _attributes(attrs), html_escape(body))


def link_to(body: Any, href: str, **attrs: Any) -> Markup:
    return content_tag("a", body, href=href, **attrs)


def safe_join(values: Iterable[Any], separator: str = "") -> Markup:
    """Join values with a separator, escaping whatever is not already safe."""
    return html_escape(separator).join(html_escape(v) for v in values)


def to_sentence(
    values: list[Any],
    words_connector: str = ", ",
    two_words_connector: str = " and ",
    last_word_connector: str = ", and ",
) -> Markup:
    """Join values as an English list: ``a``, ``a and b``, ``a, b, and c``.

    Values are escaped unless already safe. Connectors come from trusted
    field configuration and are inserted as markup.
    """
    items = [html_escape(v) for v in values]
    if not items:
        return Markup("")
    if len(items) == 1:
        return items[0]
    if len(items) == 2:
        return Markup(two_words_connector).join(items)
    return Markup(words_connector).join(items[:-1]) + Markup(last_word_connector) + items[-1]
