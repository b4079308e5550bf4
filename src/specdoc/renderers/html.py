"""Render a :class:`~specdoc.models.Document` as a standalone HTML page.

All spec-provided text is autoescaped; anchors become element ``id``
attributes so the quick-reference links resolve inside the page.
"""

from __future__ import annotations

from typing import Optional

from jinja2 import TemplateError

from specdoc.exceptions import RenderError
from specdoc.models import Document
from specdoc.renderers.environment import create_environment

TEMPLATE_NAME = "api-docs.html.j2"


def render_html(document: Document, exclude_brand: Optional[bool] = None) -> str:
    """Render *document* to an HTML string.

    Raises:
        RenderError: If the template fails to render.
    """
    if exclude_brand is None:
        exclude_brand = document.exclude_brand
    env = create_environment()
    try:
        template = env.get_template(TEMPLATE_NAME)
        return template.render(document=document, exclude_brand=exclude_brand)
    except TemplateError as exc:
        raise RenderError(f"Failed to render HTML: {exc}") from exc
