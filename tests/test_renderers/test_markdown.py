"""Tests for the Markdown renderer and shared template helpers."""

from __future__ import annotations

import pytest

from specdoc.exceptions import RenderError
from specdoc.models import Document, Endpoint, Header, ProcessorOptions, RequestBody
from specdoc.processor import OpenApiProcessor
from specdoc.renderers import render_markdown
from specdoc.renderers.environment import curl_command, display_value, markdown_cell


class TestHelpers:
    def test_markdown_cell_escapes_pipes_and_newlines(self) -> None:
        assert markdown_cell("a|b\r\nc") == "a\\|b<br>c"
        assert markdown_cell(None) == ""

    def test_display_value(self) -> None:
        assert display_value("x") == "x"
        assert display_value(False) == "false"
        assert display_value({"k": "ü"}) == '{"k": "ü"}'

    def test_curl_without_body(self) -> None:
        endpoint = Endpoint(
            method="GET",
            path="/pets",
            summary="List",
            anchor="List",
            base_url="https://api.example.com",
            query_string="?limit=20",
            headers=[Header(name="Authorization", example="Bearer <your-token>")],
        )
        assert curl_command(endpoint) == (
            'curl -X GET "https://api.example.com/pets?limit=20" \\\n'
            '  -H "Authorization: Bearer <your-token>"'
        )

    def test_curl_with_body_quotes_single_quotes(self) -> None:
        endpoint = Endpoint(
            method="POST",
            path="/notes",
            summary="Add",
            anchor="Add",
            request_body=RequestBody(content_type="application/json"),
            request_body_example='{"text":"it\'s"}',
        )
        assert curl_command(endpoint) == (
            'curl -X POST "/notes" \\\n'
            '  -H "Content-Type: application/json" \\\n'
            "  -d '{\"text\":\"it'\\''s\"}'"
        )


class TestRenderMarkdown:
    def test_structure(self, petstore_document: Document) -> None:
        text = render_markdown(petstore_document)
        assert text.startswith("# Petstore API\n")
        assert "**Version:** 2.1.0" in text
        assert "- `https://api.petstore.example.com/v2` - Production" in text
        assert "## Authentication" in text
        assert '<a id="Quick-Reference"></a>\n## Quick Reference' in text
        assert "| GET | `/pets` | [List pets](#List-pets) |" in text
        assert '<a id="Pets"></a>\n## Pets' in text
        assert "## Schemas" in text
        assert text.index("## Pets") < text.index("## Store") < text.index("## Schemas")

    def test_lock_only_on_protected_endpoints(self, petstore_document: Document) -> None:
        text = render_markdown(petstore_document)
        assert "### List pets 🔒\n\n`GET /pets`" in text
        assert "### Health check\n\n`GET /health`" in text

    def test_tables_and_examples(self, petstore_document: Document) -> None:
        text = render_markdown(petstore_document)
        assert '| `status` | query | string ("available", "sold") | No |' in text
        assert "| `Authorization` | `Bearer <your-token>` | Yes |" in text
        assert "**Request Body** (`application/json`, required)" in text
        assert "_Generated Example_: Auto-generated from schema" in text
        assert "_201 Example_" in text
        assert "| `X-Total-Count` | `42` | Total pets |" in text

    def test_curl_example(self, petstore_document: Document) -> None:
        text = render_markdown(petstore_document)
        assert (
            'curl -X GET "https://api.petstore.example.com/v2/pets?limit=20&status=available" \\\n'
            '  -H "X-Trace-Id: value" \\\n'
            '  -H "Authorization: Bearer <your-token>"'
        ) in text

    def test_every_link_has_a_target(self, petstore_document: Document) -> None:
        text = render_markdown(petstore_document)
        for ref in petstore_document.endpoints:
            assert f"(#{ref.anchor})" in text
            assert f'<a id="{ref.anchor}"></a>' in text

    def test_turkish_anchor_links(self, users_tr_raw: dict) -> None:
        text = render_markdown(OpenApiProcessor().process(users_tr_raw))
        assert "[Kullanıcı Girişi ve Token Alımı](#Kullanıcı-Girişi-ve-Token-Alımı)" in text
        assert '<a id="Kullanıcı-Girişi-ve-Token-Alımı"></a>' in text

    def test_pipe_in_summary_escaped(self) -> None:
        spec = {"paths": {"/x": {"get": {"summary": "a | b"}}}}
        text = render_markdown(OpenApiProcessor().process(spec))
        assert "[a \\| b]" in text


class TestBranding:
    def test_footer(self, petstore_document: Document) -> None:
        assert render_markdown(petstore_document).rstrip().endswith(
            "_Generated with specdoc v9.9.9_"
        )

    def test_exclude_brand_argument(self, petstore_document: Document) -> None:
        assert "Generated with specdoc" not in render_markdown(petstore_document, exclude_brand=True)

    def test_exclude_brand_from_document(self, minimal_raw: dict) -> None:
        document = OpenApiProcessor(ProcessorOptions(exclude_brand=True)).process(minimal_raw)
        assert "Generated with specdoc" not in render_markdown(document)


class TestErrors:
    def test_template_error_becomes_render_error(
        self, petstore_document: Document, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        monkeypatch.setattr("specdoc.renderers.markdown.TEMPLATE_NAME", "missing.md.j2")
        with pytest.raises(RenderError, match="Failed to render Markdown"):
            render_markdown(petstore_document)
