"""Request bodies, responses and component schema models."""

from __future__ import annotations

import logging
from typing import Any, Optional

from specdoc.models import (
    Example,
    Property,
    RequestBody,
    Response,
    ResponseHeader,
    SchemaModel,
)
from specdoc.parser.resolver import RefResolver, component_ref
from specdoc.processor.examples import (
    ExampleSynthesizer,
    format_example_value,
    syntax_language,
    to_json,
)
from specdoc.processor.parameters import parameter_type

logger = logging.getLogger(__name__)

REQUEST_CONTENT_TYPES = (
    "application/json",
    "application/xml",
    "text/plain",
    "multipart/form-data",
    "application/x-www-form-urlencoded",
)
RESPONSE_CONTENT_TYPES = (
    "application/json",
    "application/xml",
    "text/plain",
    "text/html",
)

GENERATED_EXAMPLE = "Generated Example"


def select_content(
    content: Any, preferred: tuple[str, ...]
) -> tuple[Optional[str], Optional[dict[str, Any]], list[str]]:
    """Pick a media type from a ``content`` map.

    Returns:
        ``(content_type, media_type_object, available_content_types)``. The
        first entry of *preferred* that is present wins, else the first
        declared type.
    """
    if not isinstance(content, dict) or not content:
        return None, None, []
    available = [str(key) for key in content]
    selected = next((ct for ct in preferred if ct in content), available[0])
    media = content.get(selected)
    return selected, media if isinstance(media, dict) else {}, available


class BodyBuilder:
    """Build request and response records for one spec.

    Args:
        resolver: Resolver for ``$ref`` pointers in the spec.
        synthesizer: Example synthesizer sharing the same resolver.
    """

    def __init__(self, resolver: RefResolver, synthesizer: ExampleSynthesizer) -> None:
        self.resolver = resolver
        self.synthesizer = synthesizer

    # --- Examples ---

    def examples(
        self, media: dict[str, Any], content_type: str, generate: bool = True
    ) -> list[Example]:
        """Collect the examples of a media type object.

        Named ``examples`` first, then the single ``example``. When neither
        exists and *generate* is set, one example is synthesized from the
        schema.
        """
        language = syntax_language(content_type)
        examples: list[Example] = []

        named = media.get("examples")
        if isinstance(named, dict):
            for name, example in named.items():
                example, _ = self.resolver.deref(example)
                if not isinstance(example, dict):
                    continue
                examples.append(
                    Example(
                        name=str(name or "Example"),
                        summary=str(example.get("summary") or ""),
                        description=str(example.get("description") or ""),
                        value=format_example_value(example.get("value"), content_type),
                        syntax_language=language,
                    )
                )

        if "example" in media:
            examples.append(
                Example(
                    name="Example",
                    value=format_example_value(media["example"], content_type),
                    syntax_language=language,
                )
            )

        if not examples and generate and "schema" in media:
            generated = self.synthesizer.example(media["schema"])
            if generated is not None:
                examples.append(
                    Example(
                        name=GENERATED_EXAMPLE,
                        summary="Auto-generated from schema",
                        value=format_example_value(generated, content_type),
                        syntax_language=language,
                    )
                )

        return examples

    # --- Properties ---

    def properties(
        self,
        schema: Any,
        default_type: str = "object",
        annotate_enum: bool = False,
        seen: frozenset[str] = frozenset(),
    ) -> list[Property]:
        """List the top-level properties of an (already resolvable) schema."""
        resolved, seen = self.resolver.resolve_schema(schema, seen)
        if not isinstance(resolved, dict):
            return []
        properties = resolved.get("properties")
        if not isinstance(properties, dict):
            return []
        required = resolved.get("required")
        required_names = set(required) if isinstance(required, list) else set()

        result: list[Property] = []
        for name, prop in properties.items():
            prop, _ = self.resolver.deref(prop, seen)
            if not isinstance(prop, dict):
                prop = {}
            if annotate_enum:
                type_str = parameter_type(prop, default_type)
            else:
                type_str = str(prop.get("type") or default_type)
            result.append(
                Property(
                    name=str(name),
                    type=type_str,
                    required=name in required_names,
                    description=str(prop.get("description") or ""),
                )
            )
        return result

    # --- Request body ---

    def request_body(self, request_body: Any) -> Optional[RequestBody]:
        """Build the :class:`~specdoc.models.RequestBody`, or ``None``."""
        request_body, _ = self.resolver.deref(request_body)
        if not isinstance(request_body, dict):
            return None
        content_type, media, available = select_content(
            request_body.get("content"), REQUEST_CONTENT_TYPES
        )
        if content_type is None or media is None:
            return None

        return RequestBody(
            description=str(request_body.get("description") or ""),
            required=bool(request_body.get("required", False)),
            content_type=content_type,
            examples=self.examples(media, content_type),
            properties=self.properties(
                media.get("schema"), default_type="string", annotate_enum=True
            ),
            available_content_types=available if len(available) > 1 else None,
        )

    def request_body_value(self, request_body: Any) -> Any:
        """Return the live JSON example of a request body, or ``None``.

        Only ``application/json`` bodies qualify. An explicit example wins
        over the first named example, which wins over synthesis.
        """
        request_body, _ = self.resolver.deref(request_body)
        if not isinstance(request_body, dict):
            return None
        content = request_body.get("content")
        if not isinstance(content, dict):
            return None
        media = content.get("application/json")
        if not isinstance(media, dict):
            return None

        if "example" in media:
            return media["example"]
        named = media.get("examples")
        if isinstance(named, dict):
            for example in named.values():
                example, _ = self.resolver.deref(example)
                if isinstance(example, dict) and "value" in example:
                    return example["value"]
        if "schema" in media:
            return self.synthesizer.example(media["schema"])
        return None

    def request_body_example(self, request_body: Any) -> Optional[str]:
        """Compact JSON form of :meth:`request_body_value`."""
        value = self.request_body_value(request_body)
        return None if value is None else to_json(value, pretty=False)

    # --- Responses ---

    def responses(self, responses: Any) -> list[Response]:
        """Build one :class:`~specdoc.models.Response` per status code."""
        if not isinstance(responses, dict):
            return []
        return [self.response(str(code), response) for code, response in responses.items()]

    def response(self, code: str, response: Any) -> Response:
        resolved, _ = self.resolver.deref(response)
        if not isinstance(resolved, dict):
            logger.warning("Response %s could not be resolved", code)
            resolved = {}

        content_type, media, available = select_content(
            resolved.get("content"), RESPONSE_CONTENT_TYPES
        )

        examples: list[Example] = []
        schema_example: Optional[str] = None
        properties: list[Property] = []
        if content_type is not None and media:
            examples = self.examples(media, content_type, generate=False)
        if content_type is not None and media and "schema" in media:
            schema = media["schema"]
            resolved_schema, _ = self.resolver.resolve_schema(schema)
            if isinstance(resolved_schema, dict):
                schema_example = to_json(self.synthesizer.example(schema))
                properties = self.properties(resolved_schema)

        return Response(
            code=code,
            description=str(resolved.get("description") or ""),
            content_type=content_type,
            examples=examples,
            schema_example=schema_example,
            properties=properties,
            headers=self.response_headers(resolved.get("headers")),
            available_content_types=available if len(available) > 1 else None,
        )

    def response_headers(self, headers: Any) -> list[ResponseHeader]:
        if not isinstance(headers, dict):
            return []
        result: list[ResponseHeader] = []
        for name, header in headers.items():
            header, _ = self.resolver.deref(header)
            if not isinstance(header, dict):
                header = {}
            schema = header.get("schema")
            if "example" in header:
                example = header["example"]
            elif isinstance(schema, dict) and "example" in schema:
                example = schema["example"]
            else:
                example = "value"
            result.append(
                ResponseHeader(
                    name=str(name),
                    description=str(header.get("description") or ""),
                    example=example,
                )
            )
        return result

    # --- Models ---

    def schema_models(self, schemas: Any) -> list[SchemaModel]:
        """Build one :class:`~specdoc.models.SchemaModel` per component schema.

        Each schema's own pointer starts out as visited, so a self-reference
        stops at the first level, as it does when the schema is reached
        through a ``$ref``.
        """
        if not isinstance(schemas, dict):
            return []
        models: list[SchemaModel] = []
        for name, schema in schemas.items():
            seen = frozenset({component_ref("schemas", str(name))})
            resolved, _ = self.resolver.resolve_schema(schema, seen)
            description = ""
            if isinstance(resolved, dict):
                description = str(resolved.get("description") or "")
            models.append(
                SchemaModel(
                    name=str(name),
                    description=description,
                    example=to_json(self.synthesizer.example(schema, seen)),
                    properties=self.properties(schema, seen=seen),
                )
            )
        return models
