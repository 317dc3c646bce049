"""Search state - the current request's search parameters.

Link-to-search fields build their links from a reset state with one facet
filter added. Facet filters live under ``params["f"]`` as
``{facet_field: [values]}`` and travel in the query string as
``f[facet_field][]=value`` pairs.
"""

import copy
import logging
import re
from typing import Any, Iterable, Mapping, Optional

# Dropped whenever the filters change
PAGING_KEYS = ("page", "counter", "commit")

_FACET_PAIR = re.compile(r"^f\[(?P<field>[^\]]+)\]\[\]$")

logger = logging.getLogger(__name__)


def _normalize_facets(params: dict[str, Any]) -> None:
    """Keep ``params["f"]`` a ``{field: [values]}`` mapping; drop anything else."""
    facets = params.get("f")
    if facets is None:
        return
    if not isinstance(facets, Mapping):
        logger.debug(f"Ignoring malformed facet filters: {facets!r}")
        params.pop("f")
        return
    params["f"] = {
        field: list(values) if isinstance(values, (list, tuple)) else [values]
        for field, values in facets.items()
    }


class SearchState:
    """Immutable view over a request's search parameters."""

    def __init__(self, params: Optional[Mapping[str, Any]] = None):
        self._params: dict[str, Any] = copy.deepcopy(dict(params or {}))
        _normalize_facets(self._params)

    def __repr__(self) -> str:
        return f"SearchState({self._params!r})"

    def __eq__(self, other: object) -> bool:
        return isinstance(other, SearchState) and self._params == other._params

    @property
    def params(self) -> dict[str, Any]:
        """A copy of the parameters; mutating it leaves the state untouched."""
        return copy.deepcopy(self._params)

    @property
    def query(self) -> Optional[str]:
        return self._params.get("q")

    def filters(self) -> dict[str, list[Any]]:
        return {field: list(values) for field, values in self._params.get("f", {}).items()}

    def has_facet(self, field: str, value: Any) -> bool:
        return value in self._params.get("f", {}).get(field, [])

    def reset(self, params: Optional[Mapping[str, Any]] = None) -> "SearchState":
        """A new state holding only ``params`` (empty by default)."""
        return SearchState(params)

    def add_facet_params(self, field: str, value: Any) -> dict[str, Any]:
        """Parameters for this search with ``value`` added to facet ``field``."""
        params = self.params
        for key in PAGING_KEYS:
            params.pop(key, None)

        values = params.setdefault("f", {}).setdefault(field, [])
        if value not in values:
            values.append(value)
        return params

    def remove_facet_params(self, field: str, value: Any) -> dict[str, Any]:
        """Parameters for this search without ``value`` in facet ``field``."""
        params = self.params
        for key in PAGING_KEYS:
            params.pop(key, None)

        facets = params.get("f", {})
        values = [v for v in facets.get(field, []) if v != value]
        if values:
            facets[field] = values
        else:
            facets.pop(field, None)
        if not facets:
            params.pop("f", None)
        return params

    @staticmethod
    def to_query_pairs(params: Mapping[str, Any]) -> list[tuple[str, str]]:
        """Flatten parameters into ordered query-string pairs."""
        pairs: list[tuple[str, str]] = []
        for key, value in params.items():
            if key == "f":
                for field, values in value.items():
                    pairs.extend((f"f[{field}][]", str(v)) for v in values)
            elif isinstance(value, (list, tuple)):
                pairs.extend((f"{key}[]", str(v)) for v in value)
            elif value is not None:
                pairs.append((key, str(value)))
        return pairs

    @classmethod
    def from_query_pairs(cls, pairs: Iterable[tuple[str, str]]) -> "SearchState":
        """Rebuild a state from query-string pairs (inverse of to_query_pairs)."""
        params: dict[str, Any] = {}
        for key, value in pairs:
            match = _FACET_PAIR.match(key)
            if match:
                values = params.setdefault("f", {}).setdefault(match.group("field"), [])
                if value not in values:
                    values.append(value)
            elif key in ("f", "f[]"):
                # only f[field][] carries a filter
                logger.debug(f"Ignoring facet parameter without a field: {key}={value}")
            elif key.endswith("[]"):
                params.setdefault(key[:-2], []).append(value)
            else:
                params[key] = value
        return cls(params)
