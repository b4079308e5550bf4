"""Synthesize representative example values from JSON Schema nodes.

:class:`ExampleSynthesizer` walks a schema and returns a *structured* value
(dicts, lists, scalars). Callers decide how to serialise it: the Postman
assembler embeds the live structure, while Markdown and HTML samples use the
pretty-printed JSON from :func:`format_example_value`.

Rules, in order:

1. An explicit ``example`` on the node is returned verbatim, whatever the
   declared type.
2. ``$ref``, ``allOf``, ``anyOf`` and ``oneOf`` are flattened through the
   :class:`~specdoc.parser.resolver.RefResolver`.
3. Dispatch on :class:`~specdoc.models.SchemaType`: objects recurse into
   their properties, arrays wrap one example of ``items`` (``string`` when
   absent), strings yield the first ``enum`` value or ``"string"``, numbers
   and integers ``0``, booleans ``True``, anything else ``None``.

Recursion is bounded twice: by a depth ceiling and by the set of ``$ref``
pointers already followed on the current branch. Either guard yields
``None`` for the offending node, so synthesis always terminates.
"""

from __future__ import annotations

import json
import logging
from typing import Any, Optional
from urllib.parse import quote

from specdoc.models import SchemaType
from specdoc.parser.resolver import RefResolver

logger = logging.getLogger(__name__)

DEFAULT_MAX_DEPTH = 10

_FORM_SAFE = "-_.!~*'()"

_SYNTAX_LANGUAGES = {
    "application/json": "json",
    "application/xml": "xml",
    "text/html": "html",
    "text/css": "css",
    "text/javascript": "javascript",
    "application/javascript": "javascript",
    "text/yaml": "yaml",
    "application/yaml": "yaml",
    "text/plain": "text",
}


class ExampleSynthesizer:
    """Build example values for schemas of one spec.

    Args:
        resolver: Resolver for ``$ref`` pointers. Without one, reference
            nodes have no type and synthesize to ``None``.
        max_depth: Deepest nesting level that is still expanded.
    """

    def __init__(
        self,
        resolver: Optional[RefResolver] = None,
        max_depth: int = DEFAULT_MAX_DEPTH,
    ) -> None:
        self.resolver = resolver
        self.max_depth = max_depth

    def example(self, schema: Any, seen: frozenset[str] = frozenset()) -> Any:
        """Return an example value for *schema*.

        *seen* lists references already on the walk, e.g. the pointer of the
        component schema being documented.
        """
        return self._example(schema, 0, seen)

    def _example(self, schema: Any, depth: int, seen: frozenset[str]) -> Any:
        if depth > self.max_depth:
            logger.warning(
                "Example synthesis stopped at depth %d (limit %d)", depth, self.max_depth
            )
            return None

        if isinstance(schema, dict) and "example" in schema:
            return schema["example"]

        if self.resolver is not None:
            schema, seen = self.resolver.resolve_schema(schema, seen)
        if not isinstance(schema, dict):
            return None
        if "example" in schema:
            return schema["example"]

        kind = SchemaType.of(schema)
        if kind is SchemaType.OBJECT:
            properties = schema.get("properties")
            if not isinstance(properties, dict):
                return {}
            return {
                name: self._example(prop, depth + 1, seen)
                for name, prop in properties.items()
            }
        if kind is SchemaType.ARRAY:
            items = schema["items"] if "items" in schema else {"type": "string"}
            return [self._example(items, depth + 1, seen)]
        if kind is SchemaType.STRING:
            enum_values = schema.get("enum")
            if isinstance(enum_values, list) and enum_values:
                return enum_values[0]
            return "string"
        if kind is SchemaType.NUMBER or kind is SchemaType.INTEGER:
            return 0
        if kind is SchemaType.BOOLEAN:
            return True
        return None


def display_text(value: Any) -> str:
    """Render a scalar the way it reads in JSON (``true``, ``null``, ``3``).

    Strings are returned unchanged; containers become compact JSON.
    """
    if isinstance(value, str):
        return value
    if isinstance(value, (bool, type(None), dict, list)):
        return json.dumps(value, ensure_ascii=False)
    return str(value)


def to_json(value: Any, pretty: bool = True) -> str:
    """Serialise *value* as JSON, keeping non-ASCII text readable."""
    if pretty:
        return json.dumps(value, indent=2, ensure_ascii=False, default=str)
    return json.dumps(value, ensure_ascii=False, separators=(",", ":"), default=str)


def syntax_language(content_type: Optional[str]) -> str:
    """Map a media type to a code-fence language (``text`` when unknown)."""
    return _SYNTAX_LANGUAGES.get(content_type or "", "text")


def format_example_value(value: Any, content_type: Optional[str]) -> str:
    """Serialise an example for display according to its media type.

    * JSON (and unknown types): strings unchanged, everything else
      pretty-printed JSON.
    * ``application/xml``: strings unchanged, objects through
      :func:`object_to_xml`.
    * ``text/plain``: :func:`display_text`.
    * Form types: ``key=value&...`` through :func:`object_to_form_data`.
    """
    if value is None:
        return ""
    if content_type == "application/xml":
        return value if isinstance(value, str) else object_to_xml(value)
    if content_type == "text/plain":
        return display_text(value)
    if content_type in ("multipart/form-data", "application/x-www-form-urlencoded"):
        return object_to_form_data(value)
    return value if isinstance(value, str) else to_json(value)


def object_to_xml(obj: Any, depth: int = 0) -> str:
    """Write a mapping as simple nested XML elements, one per line."""
    if depth > DEFAULT_MAX_DEPTH:
        return ""
    if not isinstance(obj, dict):
        return display_text(obj)

    lines: list[str] = []
    for key, value in obj.items():
        for item in value if isinstance(value, list) else [value]:
            if isinstance(item, dict):
                lines.append(f"<{key}>\n{object_to_xml(item, depth + 1)}</{key}>\n")
            else:
                lines.append(f"<{key}>{display_text(item)}</{key}>\n")
    return "".join(lines)


def object_to_form_data(obj: Any) -> str:
    """Encode a mapping as ``application/x-www-form-urlencoded`` text."""
    if not isinstance(obj, dict):
        return display_text(obj)
    return "&".join(
        f"{key}={quote(display_text(value), safe=_FORM_SAFE)}"
        for key, value in obj.items()
    )
