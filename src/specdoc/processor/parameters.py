"""Normalise OpenAPI parameter objects into display-ready records.

Parameters are split by location: ``in: header`` entries become
:class:`~specdoc.models.Header` rows (see :func:`build_headers`), everything
else becomes a :class:`~specdoc.models.Parameter`. Enum and default
information is folded into the type string and description so renderers can
print them verbatim::

    type         string ("asc", "desc")
    description  Sort order. Allowed values: "asc", "desc". Default: "asc"

Example values are picked by :func:`parameter_example_value` with a single,
shared priority order, so query strings, curl samples, and header rows always
agree.
"""

from __future__ import annotations

from typing import Any, Optional
from urllib.parse import quote

from specdoc.models import Example, Header, Parameter
from specdoc.processor.examples import display_text, to_json

FALLBACK_EXAMPLE = "value"


def _schema_of(param: dict[str, Any]) -> dict[str, Any]:
    schema = param.get("schema")
    return schema if isinstance(schema, dict) else {}


def _enum_of(schema: dict[str, Any]) -> Optional[list[Any]]:
    enum_values = schema.get("enum")
    return enum_values if isinstance(enum_values, list) else None


def _quoted(values: list[Any]) -> str:
    return ", ".join('"%s"' % display_text(value) for value in values)


def base_type(schema: Any, default: str = "string") -> str:
    """Return the declared JSON Schema type, or *default*.

    OpenAPI 3.1 type arrays resolve to their first non-``null`` member.
    """
    if not isinstance(schema, dict):
        return default
    type_value = schema.get("type")
    if isinstance(type_value, list):
        non_null = [t for t in type_value if t != "null"]
        type_value = non_null[0] if non_null else None
    return str(type_value) if type_value else default


def parameter_type(schema: Any, default: str = "string") -> str:
    """Build the display type: base type plus an inline enum annotation."""
    type_str = base_type(schema, default)
    enum_values = _enum_of(schema) if isinstance(schema, dict) else None
    if enum_values is not None:
        type_str += f" ({_quoted(enum_values)})"
    return type_str


def parameter_description(param: dict[str, Any]) -> str:
    """Append ``Allowed values`` then ``Default`` sentences to the description."""
    description = str(param.get("description") or "")
    schema = _schema_of(param)

    extras: list[str] = []
    enum_values = _enum_of(schema)
    if enum_values is not None:
        extras.append(f"Allowed values: {_quoted(enum_values)}")
    if "default" in schema:
        extras.append(f'Default: "{display_text(schema["default"])}"')

    for text in extras:
        description = f"{description}. {text}" if description else text
    return description


def parameter_example_value(param: dict[str, Any]) -> Any:
    """Pick the example value for a parameter.

    Priority: ``example`` > ``schema.example`` > first ``schema.enum`` value
    > ``schema.default`` > ``"value"``.
    """
    if "example" in param:
        return param["example"]
    schema = _schema_of(param)
    if "example" in schema:
        return schema["example"]
    enum_values = _enum_of(schema)
    if enum_values:
        return enum_values[0]
    if "default" in schema:
        return schema["default"]
    return FALLBACK_EXAMPLE


def parameter_examples(param: dict[str, Any]) -> list[Example]:
    """Collect every example a parameter declares, serialised for display.

    Named ``examples`` come first (``$ref`` entries are skipped), then the
    single ``example``, then ``schema.example``.
    """
    examples: list[Example] = []

    named = param.get("examples")
    if isinstance(named, dict):
        for key, example in named.items():
            key = str(key)
            if isinstance(example, dict):
                if "$ref" in example:
                    continue
                value = example.get("value", example)
                summary = example.get("summary") or key
                description = example.get("description") or ""
            else:
                value, summary, description = example, key, ""
            examples.append(
                Example(
                    name=key,
                    summary=str(summary),
                    description=str(description),
                    value=_example_text(value),
                )
            )

    if "example" in param:
        examples.append(
            Example(
                name="example",
                summary="Example",
                description="Parameter example",
                value=_example_text(param["example"]),
            )
        )

    schema = _schema_of(param)
    if "example" in schema:
        examples.append(
            Example(
                name="schema_example",
                summary="Schema Example",
                description="Example from parameter schema",
                value=_example_text(schema["example"]),
            )
        )

    return examples


def _example_text(value: Any) -> str:
    if isinstance(value, (dict, list)):
        return to_json(value)
    return display_text(value)


def merge_parameters(
    path_params: list[dict[str, Any]],
    op_params: list[dict[str, Any]],
) -> list[dict[str, Any]]:
    """Merge path-level and operation-level parameters.

    Operation-level parameters replace path-level ones in place when their
    ``name`` and ``in`` match case-insensitively; the rest are appended.
    An unresolved ``$ref`` entry is matched on its pointer instead.
    """

    def key(param: dict[str, Any]) -> str:
        if "$ref" in param and "name" not in param:
            return f"$ref:{param['$ref']}"
        return f"{param.get('name', '')}:{param.get('in', '')}".lower()

    merged = list(path_params)
    positions = {key(param): index for index, param in enumerate(merged)}
    for param in op_params:
        index = positions.get(key(param))
        if index is None:
            positions[key(param)] = len(merged)
            merged.append(param)
        else:
            merged[index] = param
    return merged


def normalize_parameter(param: dict[str, Any]) -> Parameter:
    """Convert one raw parameter into a :class:`~specdoc.models.Parameter`.

    Path parameters are always required, regardless of the source flag.
    """
    location = str(param.get("in") or "")
    required = bool(param.get("required", False)) or location == "path"
    return Parameter(
        name=str(param.get("name") or ""),
        location=location,
        type=parameter_type(param.get("schema")),
        required=required,
        description=parameter_description(param),
        example=parameter_example_value(param),
        examples=parameter_examples(param),
    )


def normalize_parameters(params: list[dict[str, Any]]) -> list[Parameter]:
    """Normalise every non-header parameter, preserving order."""
    return [normalize_parameter(p) for p in params if p.get("in") != "header"]


def build_query_string(params: list[dict[str, Any]]) -> str:
    """Build ``?a=1&b=x`` from the query parameters, or ``""`` when there are none."""
    pairs = [
        f"{param.get('name', '')}={quote(display_text(parameter_example_value(param)), safe=',')}"
        for param in params
        if param.get("in") == "query"
    ]
    return f"?{'&'.join(pairs)}" if pairs else ""


def explicit_headers(params: list[dict[str, Any]]) -> list[Header]:
    """Return the ``in: header`` parameters as header rows."""
    return [
        Header(
            name=str(param.get("name") or ""),
            example=display_text(parameter_example_value(param)),
            description=str(param.get("description") or ""),
            required=bool(param.get("required", False)),
        )
        for param in params
        if param.get("in") == "header"
    ]


def build_headers(
    params: list[dict[str, Any]], auth_header: Optional[Header]
) -> list[Header]:
    """Combine explicit header parameters with an optional synthesized auth header.

    The auth header is appended only when no explicit header shares its name
    (compared case-insensitively), so an author-documented ``Authorization``
    parameter is never duplicated.
    """
    headers = explicit_headers(params)
    if auth_header is not None:
        wanted = auth_header.name.lower()
        if not any(h.name.lower() == wanted for h in headers):
            headers.append(auth_header)
    return headers
