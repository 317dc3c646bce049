"""Configuration schemas - declarative field and view descriptors.

A FieldConfig says: fetch this field this way, render it that way.
SearchConfiguration groups the field configs shown in result lists
(index_fields) and on the single-document page (show_fields), together
with per-view settings such as which field holds the title.
"""

from typing import Any, Optional, Union

from pydantic import BaseModel, Field, field_validator, model_validator


class SeparatorOptions(BaseModel):
    """Connectors used when a field has several values."""

    words_connector: str = Field(
        default=", ",
        description="Placed between values when there are three or more",
    )
    two_words_connector: str = Field(
        default=" and ",
        description="Placed between exactly two values",
    )
    last_word_connector: str = Field(
        default=", and ",
        description="Placed before the last of three or more values",
    )


class FieldConfig(BaseModel):
    """How one document field is retrieved and rendered."""

    # Identity
    key: str = Field(
        ...,
        description="Name the field is configured under (also the facet name for link_to_search=True)",
    )
    field: Optional[str] = Field(
        default=None,
        description="Document field to read; defaults to key",
    )
    label: Optional[str] = Field(
        default=None,
        description="Display label; defaults to a title-cased key",
    )

    # Retrieval
    highlight: bool = Field(
        default=False,
        description="Read the value from the document's highlighting snippets",
    )
    accessor: Union[bool, str, list[str], None] = Field(
        default=None,
        description="True: call the document attribute named after the field. "
        "A name: call that attribute (with the field name when it takes arguments). "
        "A list of names: walk the attribute chain from the document.",
    )
    default: Any = Field(
        default=None,
        description="Value used when the document lacks the field. "
        "A callable is called with the field name.",
    )

    # Rendering
    helper_method: Optional[str] = Field(
        default=None,
        description="Name of a registered helper that renders the value",
    )
    link_to_search: Union[bool, str] = Field(
        default=False,
        description="Render each value as a link to a search filtered on it. "
        "True filters on this field's key; a string names another facet field.",
    )
    itemprop: Optional[str] = Field(
        default=None,
        description="schema.org itemprop wrapped around each value",
    )
    separator_options: Optional[SeparatorOptions] = None

    @model_validator(mode="after")
    def _fill_defaults(self) -> "FieldConfig":
        if self.field is None:
            self.field = self.key
        if self.label is None:
            self.label = self.key.replace("_", " ").strip().title()
        return self

    @property
    def facet_field(self) -> str:
        """The facet a link_to_search link filters on."""
        if self.link_to_search is True:
            return self.key
        return str(self.link_to_search)


class ViewConfig(BaseModel):
    """Per-view settings (``index`` for result lists, ``show`` for a document page)."""

    title_field: Union[str, list[str], None] = Field(
        default=None,
        description="Field(s) holding the heading; the first one present wins",
    )
    html_title_field: Union[str, list[str], None] = Field(
        default=None,
        description="Field(s) for the <title> element; falls back to the heading",
    )
    display_type_field: Optional[str] = Field(
        default=None,
        description="Field naming the document's display type",
    )


def _keyed_fields(value: Any) -> Any:
    """Accept ``{name: options}`` mappings and inject each name as the key."""
    if not isinstance(value, dict):
        return value
    fields = {}
    for name, options in value.items():
        if isinstance(options, FieldConfig):
            fields[name] = options
        else:
            fields[name] = {"key": name, **(options or {})}
    return fields


class SearchConfiguration(BaseModel):
    """Complete presentation configuration for a search application."""

    unique_key: str = Field(
        default="id",
        description="Document field holding the document id",
    )
    index_fields: dict[str, FieldConfig] = Field(default_factory=dict)
    show_fields: dict[str, FieldConfig] = Field(default_factory=dict)
    views: dict[str, ViewConfig] = Field(default_factory=dict)
    search_route: str = Field(
        default="search_action",
        description="Route name of the search results action",
    )
    document_route: str = Field(
        default="solr_document",
        description="Route name of the single-document action",
    )

    @field_validator("index_fields", "show_fields", mode="before")
    @classmethod
    def _key_fields_by_name(cls, value: Any) -> Any:
        return _keyed_fields(value)

    def view_config(self, name: str) -> ViewConfig:
        """Get the named view's config; undeclared views get an empty one."""
        return self.views.get(name) or ViewConfig()

    def add_index_field(self, name: str, **options: Any) -> FieldConfig:
        config = FieldConfig(key=name, **options)
        self.index_fields[name] = config
        return config

    def add_show_field(self, name: str, **options: Any) -> FieldConfig:
        config = FieldConfig(key=name, **options)
        self.show_fields[name] = config
        return config

    def fields_for(self, view: str) -> dict[str, FieldConfig]:
        """Field configs for the ``index`` or ``show`` view."""
        if view == "index":
            return self.index_fields
        if view == "show":
            return self.show_fields
        raise ValueError(f"Unknown view: {view}. Expected 'index' or 'show'")
