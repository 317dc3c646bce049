"""Page assembly - composes presenter output into complete HTML pages."""

from markupsafe import Markup

from searchview.documents.document import as_list

from .document_presenter import DocumentPresenter
from .schemas import RenderedField, RenderResponse

SHOW_PAGE = Markup("""<!DOCTYPE html>
<html lang="en">
<head>
<meta charset="utf-8">
<title>{title}</title>
{alternates}
</head>
<body>
<article class="document" itemscope itemtype="http://schema.org/Thing">
<h1>{heading}</h1>
<dl class="document-fields">
{fields}
</dl>
</article>
</body>
</html>
""")

FIELD_ROW = Markup(
    '<dt class="field-label-{name}">{label}:</dt>\n'
    '<dd class="field-value-{name}">{value}</dd>'
)


def render_fields(presenter: DocumentPresenter, view: str) -> list[RenderedField]:
    """Render every field of the view that the document has a value for."""
    render = (
        presenter.render_index_field_value
        if view == "index"
        else presenter.render_document_show_field_value
    )
    return [
        RenderedField(name=name, label=config.label, html=str(render(name)))
        for name, config in presenter.fields_to_render(view)
    ]


def render_show_page(presenter: DocumentPresenter) -> Markup:
    """Full HTML page for a single document."""
    rows = Markup("\n").join(
        FIELD_ROW.format(name=field.name, label=field.label, value=Markup(field.html))
        for field in render_fields(presenter, "show")
    )
    return SHOW_PAGE.format(
        title=presenter.document_show_html_title(),
        alternates=presenter.link_rel_alternates(),
        heading=presenter.document_heading(),
        fields=rows,
    )


def render_heading(presenter: DocumentPresenter, view: str) -> Markup:
    """Result-list label for the index view, document heading for the show view."""
    if view == "index":
        title_field = presenter.configuration.view_config("index").title_field
        return presenter.render_document_index_label(next(iter(as_list(title_field)), None))
    return presenter.document_heading()


def build_render_response(presenter: DocumentPresenter, view: str) -> RenderResponse:
    return RenderResponse(
        document_id=str(presenter.document.id),
        view=view,
        heading=str(render_heading(presenter, view)),
        html_title=str(presenter.document_show_html_title()),
        alternates=str(presenter.link_rel_alternates()),
        fields=render_fields(presenter, view),
    )
