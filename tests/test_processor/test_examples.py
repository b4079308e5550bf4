"""Tests for specdoc.processor.examples."""

from __future__ import annotations

import json
import logging

import pytest

from specdoc.models import SchemaType
from specdoc.parser.resolver import RefResolver
from specdoc.processor.examples import (
    ExampleSynthesizer,
    display_text,
    format_example_value,
    object_to_form_data,
    object_to_xml,
    syntax_language,
)


@pytest.fixture
def synth() -> ExampleSynthesizer:
    return ExampleSynthesizer()


# ---------------------------------------------------------------------------
# SchemaType dispatch
# ---------------------------------------------------------------------------


class TestSchemaType:
    @pytest.mark.parametrize(
        ("schema", "expected"),
        [
            ({"type": "object"}, SchemaType.OBJECT),
            ({"type": "decimal"}, SchemaType.NUMBER),
            ({"type": ["null", "integer"]}, SchemaType.INTEGER),
            ({"type": "file"}, SchemaType.UNKNOWN),
            ({}, SchemaType.UNKNOWN),
            ("string", SchemaType.UNKNOWN),
        ],
    )
    def test_of(self, schema: object, expected: SchemaType) -> None:
        assert SchemaType.of(schema) is expected


# ---------------------------------------------------------------------------
# Structural synthesis
# ---------------------------------------------------------------------------


class TestStructuralSynthesis:
    @pytest.mark.parametrize(
        ("schema", "expected"),
        [
            ({"type": "string"}, "string"),
            ({"type": "string", "enum": ["red", "green"]}, "red"),
            ({"type": "integer"}, 0),
            ({"type": "number"}, 0),
            ({"type": "decimal"}, 0),
            ({"type": "boolean"}, True),
            ({"type": "mystery"}, None),
            ({}, None),
        ],
    )
    def test_scalars(self, synth: ExampleSynthesizer, schema: dict, expected: object) -> None:
        assert synth.example(schema) == expected

    def test_object_recurses_into_properties(self, synth: ExampleSynthesizer) -> None:
        schema = {
            "type": "object",
            "properties": {
                "id": {"type": "integer"},
                "tags": {"type": "array", "items": {"type": "string"}},
                "owner": {"type": "object", "properties": {"active": {"type": "boolean"}}},
            },
        }
        assert synth.example(schema) == {"id": 0, "tags": ["string"], "owner": {"active": True}}

    def test_object_without_properties(self, synth: ExampleSynthesizer) -> None:
        assert synth.example({"type": "object"}) == {}

    def test_array_defaults_to_string_items(self, synth: ExampleSynthesizer) -> None:
        assert synth.example({"type": "array"}) == ["string"]

    def test_empty_items_schema_is_kept(self, synth: ExampleSynthesizer) -> None:
        assert synth.example({"type": "array", "items": {}}) == [None]


# ---------------------------------------------------------------------------
# Explicit examples
# ---------------------------------------------------------------------------


class TestExplicitExamples:
    @pytest.mark.parametrize(
        "schema",
        [
            {"type": "object", "properties": {"a": {"type": "string"}}, "example": {"a": "custom"}},
            {"type": "array", "items": {"type": "integer"}, "example": {"a": "custom"}},
            {"type": "string", "example": {"a": "custom"}},
        ],
    )
    def test_example_wins_over_type(self, synth: ExampleSynthesizer, schema: dict) -> None:
        assert synth.example(schema) == {"a": "custom"}

    def test_falsy_example_is_kept(self, synth: ExampleSynthesizer) -> None:
        assert synth.example({"type": "integer", "example": 0}) == 0
        assert synth.example({"type": "boolean", "example": False}) is False

    def test_nested_example(self, synth: ExampleSynthesizer) -> None:
        schema = {"type": "object", "properties": {"email": {"type": "string", "example": "a@b.c"}}}
        assert synth.example(schema) == {"email": "a@b.c"}


# ---------------------------------------------------------------------------
# References and termination
# ---------------------------------------------------------------------------


class TestReferences:
    def test_follows_refs(self) -> None:
        resolver = RefResolver({"components": {"schemas": {"Id": {"type": "integer", "example": 7}}}})
        synth = ExampleSynthesizer(resolver)
        schema = {"type": "object", "properties": {"id": {"$ref": "#/components/schemas/Id"}}}
        assert synth.example(schema) == {"id": 7}

    def test_ref_without_resolver_is_none(self, synth: ExampleSynthesizer) -> None:
        assert synth.example({"$ref": "#/components/schemas/Pet"}) is None

    def test_cycle_fails_closed(self, cyclic_raw: dict) -> None:
        synth = ExampleSynthesizer(RefResolver(cyclic_raw))
        result = synth.example({"$ref": "#/components/schemas/Node"})
        assert result == {"value": "string", "children": [None], "parent": None}

    def test_initial_seen_stops_first_self_reference(self, cyclic_raw: dict) -> None:
        synth = ExampleSynthesizer(RefResolver(cyclic_raw))
        node = cyclic_raw["components"]["schemas"]["Node"]
        result = synth.example(node, frozenset({"#/components/schemas/Node"}))
        assert result == {"value": "string", "children": [None], "parent": None}

    def test_depth_ceiling(self, caplog: pytest.LogCaptureFixture) -> None:
        schema: dict = {"type": "string"}
        for _ in range(5):
            schema = {"type": "object", "properties": {"child": schema}}
        synth = ExampleSynthesizer(max_depth=2)
        with caplog.at_level(logging.WARNING, logger="specdoc.processor.examples"):
            result = synth.example(schema)
        assert result == {"child": {"child": {"child": None}}}
        assert "depth" in caplog.text

    def test_deep_acyclic_schema_within_limit(self, synth: ExampleSynthesizer) -> None:
        schema: dict = {"type": "integer"}
        for _ in range(10):
            schema = {"type": "array", "items": schema}
        value = synth.example(schema)
        for _ in range(10):
            assert isinstance(value, list) and len(value) == 1
            value = value[0]
        assert value == 0


# ---------------------------------------------------------------------------
# Formatting helpers
# ---------------------------------------------------------------------------


class TestFormatting:
    def test_display_text(self) -> None:
        assert display_text("x") == "x"
        assert display_text(True) == "true"
        assert display_text(None) == "null"
        assert display_text(3) == "3"

    def test_json_pretty_keeps_unicode(self) -> None:
        text = format_example_value({"ad": "Işık"}, "application/json")
        assert json.loads(text) == {"ad": "Işık"}
        assert "Işık" in text
        assert "\n  " in text

    def test_string_value_unchanged(self) -> None:
        assert format_example_value("<raw/>", "application/xml") == "<raw/>"
        assert format_example_value("already text", "application/json") == "already text"

    def test_xml(self) -> None:
        assert object_to_xml({"pet": {"name": "Rex"}, "tag": ["a", "b"]}) == (
            "<pet>\n<name>Rex</name>\n</pet>\n<tag>a</tag>\n<tag>b</tag>\n"
        )

    def test_form_data(self) -> None:
        assert object_to_form_data({"q": "a b&c", "n": 1}) == "q=a%20b%26c&n=1"
        assert format_example_value({"ok": True}, "application/x-www-form-urlencoded") == "ok=true"

    def test_plain_text(self) -> None:
        assert format_example_value(42, "text/plain") == "42"

    def test_none_is_empty(self) -> None:
        assert format_example_value(None, "application/json") == ""

    @pytest.mark.parametrize(
        ("content_type", "language"),
        [("application/json", "json"), ("application/xml", "xml"), ("text/yaml", "yaml"), ("image/png", "text"), (None, "text")],
    )
    def test_syntax_language(self, content_type: object, language: str) -> None:
        assert syntax_language(content_type) == language
