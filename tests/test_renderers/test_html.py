"""Tests for the HTML renderer."""

from __future__ import annotations

from specdoc.models import Document
from specdoc.processor import OpenApiProcessor
from specdoc.renderers import render_html


class TestRenderHtml:
    def test_page_structure(self, petstore_document: Document) -> None:
        html = render_html(petstore_document)
        assert html.startswith("<!DOCTYPE html>")
        assert "<title>Petstore API - API Documentation</title>" in html
        assert '<h2 id="Quick-Reference">Quick Reference</h2>' in html
        assert '<a href="#List-pets">List pets</a>' in html
        assert '<div class="endpoint" id="List-pets">' in html
        assert '<h2 id="Pets">Pets</h2>' in html

    def test_every_link_has_a_target(self, petstore_document: Document) -> None:
        html = render_html(petstore_document)
        for ref in petstore_document.endpoints:
            assert f'href="#{ref.anchor}"' in html
            assert f'id="{ref.anchor}"' in html

    def test_spec_text_is_escaped(self) -> None:
        spec = {
            "info": {"title": "<script>alert(1)</script>", "version": "1"},
            "paths": {"/x": {"get": {"summary": "A & B", "description": "<b>bold</b>"}}},
        }
        html = render_html(OpenApiProcessor().process(spec))
        assert "<script>alert(1)</script>" not in html
        assert "&lt;script&gt;alert(1)&lt;/script&gt;" in html
        assert "A &amp; B" in html
        assert "&lt;b&gt;bold&lt;/b&gt;" in html

    def test_footer(self, petstore_document: Document) -> None:
        assert "<footer>Generated with specdoc v9.9.9</footer>" in render_html(petstore_document)
        assert "<footer>" not in render_html(petstore_document, exclude_brand=True)
