"""Presenter request/response schemas."""

from typing import Literal

from pydantic import BaseModel, Field

from searchview.documents.schemas import DocumentPayload


class RenderRequest(BaseModel):
    """A document to render for one view."""

    document: DocumentPayload
    view: Literal["index", "show"] = Field(
        default="show",
        description="'index' for a result-list entry, 'show' for a document page",
    )


class RenderedField(BaseModel):
    """One field's label and rendered HTML."""

    name: str
    label: str
    html: str


class RenderResponse(BaseModel):
    """Everything a page needs to display a document."""

    document_id: str
    view: str
    heading: str
    html_title: str
    alternates: str
    fields: list[RenderedField] = Field(default_factory=list)
