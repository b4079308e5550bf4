"""Render a :class:`~specdoc.models.Document` as Markdown."""

from __future__ import annotations

from typing import Optional

from jinja2 import TemplateError

from specdoc.exceptions import RenderError
from specdoc.models import Document
from specdoc.renderers.environment import create_environment

TEMPLATE_NAME = "api-docs.md.j2"


def render_markdown(document: Document, exclude_brand: Optional[bool] = None) -> str:
    """Render *document* to a Markdown string.

    Args:
        document: The processed document model.
        exclude_brand: Omit the branding footer. ``None`` uses
            ``document.exclude_brand``.

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
        raise RenderError(f"Failed to render Markdown: {exc}") from exc
