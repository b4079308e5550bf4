"""Shared Jinja2 environment and helpers for the template-based renderers."""

from __future__ import annotations

import json
from pathlib import Path

from jinja2 import Environment, FileSystemLoader, select_autoescape

from specdoc.models import Endpoint

TEMPLATE_DIR = Path(__file__).parent / "templates"
"""Directory holding the ``*.j2`` templates."""

BRAND_TEXT = "Generated with specdoc"


def create_environment() -> Environment:
    """Create the Jinja2 environment used by the Markdown and HTML renderers.

    Autoescape is on for ``.html.j2`` templates and off for ``.md.j2`` ones.
    """
    env = Environment(
        loader=FileSystemLoader(str(TEMPLATE_DIR)),
        autoescape=select_autoescape(
            enabled_extensions=("html", "html.j2"),
            disabled_extensions=("md.j2",),
        ),
        trim_blocks=True,
        lstrip_blocks=True,
        keep_trailing_newline=True,
    )
    env.filters["md_cell"] = markdown_cell
    env.filters["display"] = display_value
    env.globals["curl_command"] = curl_command
    env.globals["brand_text"] = BRAND_TEXT
    return env


def markdown_cell(value: object) -> str:
    """Make *value* safe inside a Markdown table cell."""
    text = "" if value is None else str(value)
    return text.replace("|", "\\|").replace("\r\n", "\n").replace("\n", "<br>")


def display_value(value: object) -> str:
    """Show example values the way they read in JSON."""
    if isinstance(value, str):
        return value
    return json.dumps(value, ensure_ascii=False)


def curl_command(endpoint: Endpoint) -> str:
    """Build a multi-line ``curl`` sample for *endpoint*.

    Uses the endpoint's base URL, query string example and header rows; a
    JSON body is added when the request body has a compact example.
    """
    url = f"{endpoint.base_url}{endpoint.path}{endpoint.query_string}"
    parts = [f'curl -X {endpoint.method} "{url}"']
    for header in endpoint.headers:
        parts.append(f'-H "{header.name}: {header.example}"')
    if endpoint.request_body is not None:
        parts.append(f'-H "Content-Type: {endpoint.request_body.content_type}"')
        if endpoint.request_body_example is not None:
            body = endpoint.request_body_example.replace("'", "'\\''")
            parts.append(f"-d '{body}'")
    return " \\\n  ".join(parts)
