"""Renderers that serialise a :class:`~specdoc.models.Document`.

Each renderer takes the document (and, for branding, an explicit
``exclude_brand`` argument) and returns text or JSON-ready dictionaries.
None of them write files; :mod:`specdoc.app` does that.
"""

from specdoc.renderers.html import render_html
from specdoc.renderers.markdown import render_markdown
from specdoc.renderers.postman import build_postman_collection, build_postman_environment

__all__ = [
    "build_postman_collection",
    "build_postman_environment",
    "render_html",
    "render_markdown",
]
