"""Document presenter - turns a document plus field configuration into HTML.

Value retrieval, in order of precedence:
1. highlight   -> the document's highlighting snippets (already markup)
2. accessor    -> an attribute or method call on the document
3. field config -> the configured field, with its default
4. bare name   -> document[field]

Value rendering, in order of precedence:
1. helper_method  -> delegated to a registered helper
2. link_to_search -> each value linked to a search filtered on it
3. otherwise the value is returned as retrieved
"""

import inspect
import logging
from typing import Any, Callable, Iterable, Iterator, Optional, Union

from markupsafe import Markup

from searchview import html
from searchview.config.schemas import FieldConfig, SearchConfiguration
from searchview.context.view_context import ViewContext
from searchview.documents.document import SearchDocument, as_list

logger = logging.getLogger(__name__)

IndexLabel = Union[str, Markup, Callable[[SearchDocument, dict], Any]]


def _takes_arguments(func: Any) -> bool:
    """Whether a callable accepts at least one positional argument."""
    try:
        signature = inspect.signature(func)
    except (TypeError, ValueError):
        return False
    return any(
        p.kind in (p.POSITIONAL_ONLY, p.POSITIONAL_OR_KEYWORD, p.VAR_POSITIONAL)
        for p in signature.parameters.values()
    )


def _send(obj: Any, name: str) -> Any:
    """Read an attribute, calling it when it is a method."""
    attr = getattr(obj, name)
    return attr() if callable(attr) else attr


class DocumentPresenter:
    """Presents one document within a host view context."""

    def __init__(
        self,
        document: SearchDocument,
        context: ViewContext,
        configuration: Optional[SearchConfiguration] = None,
    ):
        self.document = document
        self.context = context
        self.configuration = configuration or context.configuration

    # -- Titles --

    def _first_present_field(self, fields: Union[str, list[str], None]) -> Optional[str]:
        return next((f for f in as_list(fields) if self.document.has(f)), None)

    def document_heading(self) -> Markup:
        """The document's title, or its id when no title field is present."""
        field = self._first_present_field(self.configuration.view_config("show").title_field)
        if field is None:
            return self.render_field_value(self.document.id)
        return self.render_field_value(self.document[field])

    def document_show_html_title(self) -> Markup:
        """Text for the page's <title> element.

        Uses the show view's html_title_field when configured, otherwise the
        document heading.
        """
        html_title_field = self.configuration.view_config("show").html_title_field
        if not html_title_field:
            return self.document_heading()

        field = self._first_present_field(html_title_field)
        if field is None:
            return self.render_field_value(self.document.id)
        return self.render_field_value(self.document[field])

    def link_rel_alternates(self, unique: bool = False, exclude: Iterable[str] = ()) -> Markup:
        """<link rel="alternate"> tags for the document's export formats.

        Args:
            unique: emit at most one link per content type (as Atom requires)
            exclude: format short names to leave out
        """
        exclude = set(exclude)
        seen: set[Optional[str]] = set()
        links = []

        for short_name, spec in self.document.export_formats().items():
            content_type = spec.get("content_type")
            if short_name in exclude or (unique and content_type in seen):
                continue
            seen.add(content_type)
            links.append(
                html.tag(
                    "link",
                    rel="alternate",
                    title=short_name,
                    type=content_type,
                    href=self.context.polymorphic_url(self.document, format=short_name),
                )
            )

        return html.safe_join(links, "\n")

    # -- Value rendering --

    def render_field_value(self, value: Any = None, field_config: Optional[FieldConfig] = None) -> Markup:
        """Render a value (or list of values) from a field."""
        values = [v.decode("utf-8") if isinstance(v, bytes) else v for v in as_list(value)]

        if field_config is not None and field_config.itemprop:
            values = [html.content_tag("span", v, itemprop=field_config.itemprop) for v in values]

        return self.render_values(values, field_config)

    def render_values(self, values: list[Any], field_config: Optional[FieldConfig] = None) -> Markup:
        """Escape each value and join them as a sentence."""
        options = {}
        if field_config is not None and field_config.separator_options is not None:
            options = field_config.separator_options.model_dump()
        return html.to_sentence(values, **options)

    def render_document_index_label(self, field: IndexLabel, opts: Optional[dict] = None) -> Markup:
        """Render the heading of a document in a result list.

        ``field`` may be a callable (called with the document and ``opts``),
        a Markup literal used as-is, or the name of a document field.
        Falls back to the document id.
        """
        opts = opts or {}
        if callable(field):
            label = field(self.document, opts)
        elif isinstance(field, Markup):
            label = field
        elif isinstance(field, str):
            label = self.document[field]
        else:
            label = None

        return self.render_field_value(label if label is not None else self.document.id)

    def render_index_field_value(self, field: str, value: Any = None, **options: Any) -> Markup:
        """Render a result-list field; ``value`` overrides the document's value."""
        field_config = self.configuration.index_fields.get(field)
        if value is None:
            value = self.get_field_values(field, field_config, options)
        return self.render_field_value(value, field_config)

    def render_document_show_field_value(self, field: str, value: Any = None, **options: Any) -> Markup:
        """Render a show-page field; ``value`` overrides the document's value."""
        field_config = self.configuration.show_fields.get(field)
        if value is None:
            value = self.get_field_values(field, field_config, options)
        return self.render_field_value(value, field_config)

    # -- Value retrieval --

    def get_field_values(
        self,
        field: str,
        field_config: Optional[FieldConfig],
        options: Optional[dict[str, Any]] = None,
    ) -> Any:
        """Get a field's value and prepare it for rendering.

        Args:
            field: field name as configured
            field_config: the field's configuration, if any
            options: extra keyword arguments passed through to helper methods
        """
        options = options or {}
        value = self._retrieve_value(field, field_config)

        if field_config is not None and field_config.helper_method:
            logger.debug(f"Rendering {field} with helper {field_config.helper_method}")
            return self.context.call_helper(
                field_config.helper_method,
                {
                    **options,
                    "document": self.document,
                    "field": field,
                    "config": field_config,
                    "value": value,
                },
            )

        if field_config is not None and field_config.link_to_search:
            facet_field = field_config.facet_field
            search_state = self.context.search_state.reset()
            return [
                self.context.link_to(
                    self.render_field_value(v, field_config),
                    self.context.search_action_path(search_state.add_facet_params(facet_field, v)),
                )
                for v in as_list(value)
            ]

        return value

    def _retrieve_value(self, field: str, field_config: Optional[FieldConfig]) -> Any:
        if field_config is not None and field_config.highlight:
            if not self.document.has_highlight_field(field_config.field):
                return None
            return [Markup(snippet) for snippet in self.document.highlight_field(field_config.field)]

        if field_config is not None and field_config.accessor:
            return self._call_accessor(field, field_config.accessor)

        if field_config is not None:
            return self.document.fetch(field_config.field, field_config.default)

        return self.document[field]

    def _call_accessor(self, field: str, accessor: Union[bool, str, list[str]]) -> Any:
        # accessor: true -> attribute named after the field
        if accessor is True:
            return _send(self.document, field)

        # a single method taking arguments gets the field name
        if isinstance(accessor, str):
            method = getattr(self.document, accessor)
            if callable(method) and _takes_arguments(method):
                return method(field)

        # chained attribute walk
        result: Any = self.document
        for name in as_list(accessor):
            result = _send(result, name)
        return result

    # -- Field selection --

    def document_has_value(self, field_config: FieldConfig) -> bool:
        """Whether the document can supply a value for a configured field."""
        return (
            self.document.has(field_config.field)
            or (field_config.highlight and self.document.has_highlight_field(field_config.field))
            or bool(field_config.accessor)
        )

    def fields_to_render(self, view: str) -> Iterator[tuple[str, FieldConfig]]:
        """Yield (name, config) for each ``index`` or ``show`` field this document has."""
        for name, field_config in self.configuration.fields_for(view).items():
            if self.document_has_value(field_config):
                yield name, field_config
