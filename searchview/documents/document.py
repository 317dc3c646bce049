"""SearchDocument - field lookup, highlighting and export formats for one hit."""

import json
import mimetypes
import re
import xml.etree.ElementTree as ET
from typing import Any, Callable, Mapping, Optional

from searchview.exceptions import UnsupportedExportFormat

from .schemas import DocumentPayload

# Sentinel for fetch() without a default
MISSING = object()


def as_list(value: Any) -> list:
    """None -> [], list/tuple -> list, anything else -> [value]."""
    if value is None:
        return []
    if isinstance(value, (list, tuple)):
        return list(value)
    return [value]


class SearchDocument:
    """A search result document.

    Field values are read with ``doc[field]`` (``None`` when absent) or
    ``fetch`` (with a default). Highlighting snippets are kept apart from
    stored values and are only used for fields configured to highlight.

    Export formats are declared per class with ``will_export_as``; each one
    is served by an ``export_as_<short_name>`` method. Formats are resolved
    along the MRO, so a format declared on a parent later still reaches its
    subclasses.
    """

    _export_formats: dict[str, dict[str, Optional[str]]] = {}

    def __init__(
        self,
        fields: Optional[Mapping[str, Any]] = None,
        highlighting: Optional[Mapping[str, Any]] = None,
        unique_key: str = "id",
    ):
        self._fields = dict(fields or {})
        self._highlighting = {
            name: as_list(snippets) for name, snippets in (highlighting or {}).items()
        }
        self.unique_key = unique_key

    @classmethod
    def from_payload(cls, payload: DocumentPayload, unique_key: str = "id") -> "SearchDocument":
        """Build a document, picking the Dublin Core flavour when requested.

        A class that already is a Dublin Core document is kept as is.
        """
        doc_class = cls
        if payload.dublin_core and not issubclass(cls, DublinCoreDocument):
            doc_class = DublinCoreDocument
        return doc_class(
            fields=payload.fields,
            highlighting=payload.highlighting,
            unique_key=unique_key,
        )

    def __repr__(self) -> str:
        return f"<{type(self).__name__} id={self.id!r}>"

    # -- Field access --

    @property
    def id(self) -> Any:
        return self._fields.get(self.unique_key)

    def __getitem__(self, field: str) -> Any:
        return self._fields.get(field)

    def __contains__(self, field: str) -> bool:
        return field in self._fields

    def keys(self) -> list[str]:
        return list(self._fields.keys())

    def to_dict(self) -> dict[str, Any]:
        return dict(self._fields)

    def has(self, field: str, *values: Any) -> bool:
        """Check the document has a field, optionally holding one of ``values``.

        A compiled regex in ``values`` matches when it is found in any of
        the field's values.
        """
        if field not in self._fields:
            return False
        if not values:
            return True

        field_values = as_list(self._fields[field])
        for expected in values:
            if isinstance(expected, re.Pattern):
                if any(expected.search(str(v)) for v in field_values):
                    return True
            elif expected in field_values:
                return True
        return False

    def fetch(self, field: str, default: Any = MISSING) -> Any:
        """Get a field value, falling back to ``default``.

        A callable default is called with the field name. With no default a
        missing field raises KeyError.
        """
        if field in self._fields:
            return self._fields[field]
        if default is MISSING:
            raise KeyError(field)
        if callable(default):
            return default(field)
        return default

    def first(self, field: str) -> Any:
        """First value of a (possibly multi-valued) field."""
        values = as_list(self._fields.get(field))
        return values[0] if values else None

    # -- Highlighting --

    def has_highlight_field(self, field: str) -> bool:
        return bool(self._highlighting.get(field))

    def highlight_field(self, field: str) -> Optional[list[str]]:
        """Highlighted snippets for a field, or None."""
        snippets = self._highlighting.get(field)
        if snippets is None:
            return None
        return list(snippets)

    # -- Export formats --

    @classmethod
    def will_export_as(cls, short_name: str, content_type: Optional[str] = None) -> None:
        """Declare an export format; the content type is guessed from the name if omitted."""
        if content_type is None:
            content_type = mimetypes.types_map.get(f".{short_name}")
        if "_export_formats" not in cls.__dict__:
            cls._export_formats = {}
        cls._export_formats[short_name] = {"content_type": content_type}

    @classmethod
    def declared_export_formats(cls) -> dict[str, dict[str, Optional[str]]]:
        """Formats declared on this class and its bases, base classes first."""
        formats: dict[str, dict[str, Optional[str]]] = {}
        for klass in reversed(cls.__mro__):
            formats.update(klass.__dict__.get("_export_formats", {}))
        return formats

    def export_formats(self) -> dict[str, dict[str, Optional[str]]]:
        """Short name -> {"content_type": ...}, in declaration order."""
        return self.declared_export_formats()

    def exports_as(self, short_name: str) -> bool:
        return short_name in self.export_formats()

    def export_as(self, short_name: str) -> str:
        method: Optional[Callable[[], str]] = getattr(self, f"export_as_{short_name}", None)
        if not self.exports_as(short_name) or method is None:
            raise UnsupportedExportFormat(self.id, short_name)
        return method()

    def export_as_json(self) -> str:
        return json.dumps(self._fields, default=str)


SearchDocument.will_export_as("json", "application/json")


# Dublin Core elements, in the order they are emitted
DUBLIN_CORE_FIELDS = [
    "contributor", "coverage", "creator", "date", "description", "format",
    "identifier", "language", "publisher", "relation", "rights", "source",
    "subject", "title", "type",
]

DC_NAMESPACE = "http://purl.org/dc/elements/1.1/"
OAI_DC_NAMESPACE = "http://www.openarchives.org/OAI/2.0/oai_dc/"


class DublinCoreDocument(SearchDocument):
    """A document that can also be exported as Dublin Core XML.

    Fields named after Dublin Core elements (``title``, ``creator``, ...)
    become ``dc:`` elements, one per value.
    """

    def dublin_core_field_names(self) -> list[str]:
        return [name for name in DUBLIN_CORE_FIELDS if self.has(name)]

    def export_as_oai_dc_xml(self) -> str:
        ET.register_namespace("dc", DC_NAMESPACE)
        ET.register_namespace("oai_dc", OAI_DC_NAMESPACE)
        root = ET.Element(f"{{{OAI_DC_NAMESPACE}}}dc")
        for name in self.dublin_core_field_names():
            for value in as_list(self[name]):
                element = ET.SubElement(root, f"{{{DC_NAMESPACE}}}{name}")
                element.text = str(value)
        return ET.tostring(root, encoding="unicode")

    export_as_dc_xml = export_as_oai_dc_xml
    export_as_xml = export_as_oai_dc_xml


DublinCoreDocument.will_export_as("oai_dc_xml", "text/xml")
DublinCoreDocument.will_export_as("dc_xml", "text/xml")
DublinCoreDocument.will_export_as("xml", "text/xml")
