"""Tests for field configuration and the configuration registry."""

from __future__ import annotations

from pathlib import Path

import pytest

from searchview.config import ConfigRegistry, FieldConfig, SearchConfiguration
from searchview.exceptions import ConfigurationError


def test_field_config_defaults_field_and_label_from_key() -> None:
    """field and label are derived from the key when not given."""

    config = FieldConfig(key="call_number")

    assert config.field == "call_number"
    assert config.label == "Call Number"
    assert config.highlight is False
    assert config.link_to_search is False


def test_facet_field_follows_link_to_search() -> None:
    """link_to_search=True filters on the key, a string names another facet."""

    assert FieldConfig(key="format", link_to_search=True).facet_field == "format"
    assert FieldConfig(key="author", link_to_search="author_facet").facet_field == "author_facet"


def test_accessor_accepts_bool_name_and_chain() -> None:
    """The accessor keeps its declared shape."""

    assert FieldConfig(key="a", accessor=True).accessor is True
    assert FieldConfig(key="a", accessor="first").accessor == "first"
    assert FieldConfig(key="a", accessor=["holdings", "summary"]).accessor == ["holdings", "summary"]


def test_search_configuration_keys_fields_by_name() -> None:
    """Mapping entries become FieldConfigs keyed by their name, in order."""

    config = SearchConfiguration.model_validate(
        {"show_fields": {"title": {"itemprop": "name"}, "subtitle": None, "author": {}}}
    )

    assert list(config.show_fields) == ["title", "subtitle", "author"]
    assert config.show_fields["title"].key == "title"
    assert config.show_fields["title"].itemprop == "name"
    assert config.show_fields["subtitle"].field == "subtitle"


def test_view_config_for_undeclared_view_is_empty() -> None:
    """Unknown views get a blank ViewConfig."""

    config = SearchConfiguration()

    assert config.view_config("show").title_field is None
    assert config.view_config("show").html_title_field is None


def test_add_show_field_registers_config() -> None:
    """Programmatic declarations land in show_fields."""

    config = SearchConfiguration()
    field = config.add_show_field("isbn", label="ISBN", default="n/a")

    assert config.show_fields["isbn"] is field
    assert field.default == "n/a"


def test_fields_for_rejects_unknown_view() -> None:
    """Only index and show views carry field lists."""

    with pytest.raises(ValueError):
        SearchConfiguration().fields_for("feed")


def test_registry_loads_yaml(tmp_path: Path) -> None:
    """A YAML definition becomes a SearchConfiguration."""

    path = tmp_path / "catalog.yaml"
    path.write_text(
        "views:\n"
        "  show:\n"
        "    title_field: title\n"
        "index_fields:\n"
        "  format:\n"
        "    link_to_search: true\n"
        "show_fields:\n"
        "  subject:\n"
        "    separator_options:\n"
        "      words_connector: '; '\n"
    )

    registry = ConfigRegistry(config_path=path)
    config = registry.get_configuration()

    assert config.view_config("show").title_field == "title"
    assert config.index_fields["format"].link_to_search is True
    assert config.show_fields["subject"].separator_options.words_connector == "; "
    assert config.show_fields["subject"].separator_options.two_words_connector == " and "
    assert registry.get_stats() == {"index_fields": 1, "show_fields": 1, "views": 1}


def test_registry_reads_path_from_environment(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    """SEARCHVIEW_CONFIG_PATH overrides the bundled definition."""

    path = tmp_path / "other.yaml"
    path.write_text("unique_key: record_id\n")
    monkeypatch.setenv("SEARCHVIEW_CONFIG_PATH", str(path))

    registry = ConfigRegistry()

    assert registry.config_path == path
    assert registry.get_configuration().unique_key == "record_id"


def test_registry_missing_file_raises(tmp_path: Path) -> None:
    """A missing definition file is reported, not silently ignored."""

    registry = ConfigRegistry(config_path=tmp_path / "missing.yaml")

    with pytest.raises(FileNotFoundError):
        registry.load()


def test_registry_invalid_yaml_raises_configuration_error(tmp_path: Path) -> None:
    """Broken YAML surfaces as a ConfigurationError."""

    path = tmp_path / "broken.yaml"
    path.write_text("show_fields: [unclosed\n")

    with pytest.raises(ConfigurationError):
        ConfigRegistry(config_path=path).load()


def test_registry_invalid_field_raises_configuration_error(tmp_path: Path) -> None:
    """Schema violations surface as a ConfigurationError."""

    path = tmp_path / "bad.yaml"
    path.write_text("show_fields:\n  title:\n    highlight: [1, 2]\n")

    with pytest.raises(ConfigurationError):
        ConfigRegistry(config_path=path).load()


def test_bundled_catalog_configuration_loads() -> None:
    """The shipped catalog definition is valid."""

    config = ConfigRegistry().get_configuration()

    assert config.show_fields["summary"].helper_method == "render_markdown"
    assert config.index_fields["author"].facet_field == "author_facet"
    assert config.view_config("show").title_field == ["title", "subtitle"]
