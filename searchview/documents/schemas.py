"""Document payload schema - the JSON shape documents arrive in."""

from typing import Any

from pydantic import BaseModel, Field


class DocumentPayload(BaseModel):
    """One search hit: stored fields plus highlighting snippets."""

    fields: dict[str, Any] = Field(
        ...,
        description="Stored field values; multi-valued fields are lists",
    )
    highlighting: dict[str, list[str]] = Field(
        default_factory=dict,
        description="Field name -> highlighted snippets (already HTML)",
    )
    dublin_core: bool = Field(
        default=False,
        description="Expose Dublin Core XML export formats for this document",
    )
