"""Canonical Pydantic models shared across all specdoc modules.

This is the single source of truth for data shapes in the project. The models
fall into three groups:

**Options** -- the construction-time configuration of the processor:
    :class:`ProcessorOptions`.

**Schema vocabulary** -- enums used while walking a raw OpenAPI document:
    :class:`HTTPMethod` and :class:`SchemaType`.

**Document model** -- the renderer-agnostic output of
:meth:`~specdoc.processor.OpenApiProcessor.process`:
    :class:`Document`, :class:`Info`, :class:`Server`, :class:`Resource`,
    :class:`Endpoint`, :class:`EndpointRef`, :class:`Parameter`,
    :class:`Header`, :class:`RequestBody`, :class:`Response`,
    :class:`ResponseHeader`, :class:`Example`, :class:`Property`, and
    :class:`SchemaModel`.

Document models are frozen: they are read-only projections of one input
spec and are rebuilt from scratch on every run. Field names are snake_case
in Python and camelCase when dumped with ``by_alias=True``, which is the
shape written by ``specdoc generate --format json``.
"""

from __future__ import annotations

import enum
from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


# --- Options ---


class ProcessorOptions(BaseModel):
    """Options fixed at :class:`~specdoc.processor.OpenApiProcessor` construction.

    The processor never reads files or the environment; callers resolve these
    values (see :func:`~specdoc.config.resolve_options`) and pass them in.
    Accepts both snake_case and camelCase keys so that a project config file
    such as ``{"tagOrder": ["Users"]}`` validates directly.

    Example::

        ProcessorOptions(base_url="https://api.example.com", url_encode_anchors=False)
    """

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    exclude_brand: bool = Field(
        default=False, description="Omit the 'generated with' footer"
    )
    version: str = Field(
        default="unknown", description="Generator version echoed into the document"
    )
    base_url: str = Field(
        default="", description="Fallback base URL when the spec declares no servers"
    )
    url_encode_anchors: bool = Field(
        default=True,
        description="Preserve case in anchors (True) or lower-case them (False)",
    )
    tag_order: list[str] = Field(
        default_factory=list, description="Resource names to list first, in order"
    )
    max_example_depth: int = Field(
        default=10, ge=1, description="Recursion ceiling for example synthesis"
    )
    deduplicate_anchors: bool = Field(
        default=True, description="Suffix repeated anchors with -2, -3, ..."
    )


# --- Schema vocabulary ---


class HTTPMethod(str, enum.Enum):
    """HTTP verbs that produce an endpoint when found as a path-item key.

    Every other path-item key (``parameters``, ``servers``, ``$ref``,
    ``x-*`` extensions, ``trace``) is ignored when enumerating endpoints.
    """

    GET = "get"
    POST = "post"
    PUT = "put"
    DELETE = "delete"
    PATCH = "patch"
    OPTIONS = "options"
    HEAD = "head"


class SchemaType(str, enum.Enum):
    """Closed set of JSON Schema types the example synthesizer understands.

    Use :meth:`of` rather than ``SchemaType(value)``: it folds the non-standard
    ``decimal`` type into :attr:`NUMBER`, picks the first non-``null`` entry of
    an OpenAPI 3.1 type array, and maps anything else to :attr:`UNKNOWN`.
    """

    OBJECT = "object"
    ARRAY = "array"
    STRING = "string"
    NUMBER = "number"
    INTEGER = "integer"
    BOOLEAN = "boolean"
    UNKNOWN = "unknown"

    @classmethod
    def of(cls, schema: Any) -> SchemaType:
        if not isinstance(schema, dict):
            return cls.UNKNOWN
        type_value = schema.get("type")
        if isinstance(type_value, list):
            non_null = [t for t in type_value if t != "null"]
            type_value = non_null[0] if non_null else None
        if type_value == "decimal":
            return cls.NUMBER
        try:
            return cls(type_value)
        except (TypeError, ValueError):
            return cls.UNKNOWN


# --- Document model ---


class _DocumentModel(BaseModel):
    """Base for all document models: frozen, camelCase aliases."""

    model_config = ConfigDict(
        frozen=True, alias_generator=to_camel, populate_by_name=True
    )


class ContactInfo(_DocumentModel):
    """The spec's ``info.contact`` object."""

    name: Optional[str] = None
    email: Optional[str] = None
    url: Optional[str] = None


class LicenseInfo(_DocumentModel):
    """The spec's ``info.license`` object."""

    name: Optional[str] = None
    url: Optional[str] = None


class Info(_DocumentModel):
    """API metadata with defaults substituted for missing fields."""

    title: str = "API Documentation"
    version: str = "1.0.0"
    description: str = ""
    contact: Optional[ContactInfo] = None
    license: Optional[LicenseInfo] = None


class Server(_DocumentModel):
    """A server entry; ``description`` falls back to the URL."""

    url: str = ""
    description: str = "Server"


class Example(_DocumentModel):
    """A named example, already serialised for display."""

    name: str
    summary: str = ""
    description: str = ""
    value: str = ""
    syntax_language: str = "text"


class Parameter(_DocumentModel):
    """A display-ready, non-header operation parameter.

    ``type`` carries the enum annotation (``string ("a", "b")``) and
    ``description`` the appended ``Allowed values`` / ``Default`` sentences.
    ``example`` is the value used for query strings and curl samples.
    """

    name: str
    location: str = Field(default="", alias="in")
    type: str = "string"
    required: bool = False
    description: str = ""
    example: Any = None
    examples: list[Example] = Field(default_factory=list)


class Header(_DocumentModel):
    """A request header row: explicit ``in: header`` parameter or synthesized auth header."""

    name: str
    example: str = "value"
    description: str = ""
    required: bool = False
    synthesized: bool = False


class Property(_DocumentModel):
    """A top-level property of an object schema."""

    name: str
    type: str = "string"
    required: bool = False
    description: str = ""


class RequestBody(_DocumentModel):
    """The selected representation of an operation's ``requestBody``."""

    description: str = ""
    required: bool = False
    content_type: str
    examples: list[Example] = Field(default_factory=list)
    properties: list[Property] = Field(default_factory=list)
    available_content_types: Optional[list[str]] = None


class ResponseHeader(_DocumentModel):
    """A header declared on a response object."""

    name: str
    description: str = ""
    example: Any = "value"


class Response(_DocumentModel):
    """One status-code entry of an operation's ``responses``."""

    code: str
    description: str = ""
    content_type: Optional[str] = None
    examples: list[Example] = Field(default_factory=list)
    schema_example: Optional[str] = None
    properties: list[Property] = Field(default_factory=list)
    headers: list[ResponseHeader] = Field(default_factory=list)
    available_content_types: Optional[list[str]] = None


class Endpoint(_DocumentModel):
    """One (path, HTTP verb) pair, fully normalised for rendering."""

    method: str
    path: str
    summary: str
    description: str = ""
    anchor: str
    operation_id: Optional[str] = None
    tags: list[str] = Field(default_factory=list)
    deprecated: bool = False
    requires_auth: bool = False
    parameters: list[Parameter] = Field(default_factory=list)
    headers: list[Header] = Field(default_factory=list)
    request_body: Optional[RequestBody] = None
    request_body_example: Optional[str] = None
    responses: list[Response] = Field(default_factory=list)
    base_url: str = ""
    query_string: str = ""
    has_content_type: bool = False


class EndpointRef(_DocumentModel):
    """Quick-reference entry pointing at an :class:`Endpoint` anchor."""

    method: str
    path: str
    summary: str
    anchor: str


class Resource(_DocumentModel):
    """A named group of endpoints (by first tag or first path segment)."""

    name: str
    description: str = ""
    anchor: str = ""
    endpoints: list[Endpoint] = Field(default_factory=list)


class SchemaModel(_DocumentModel):
    """One entry of ``components.schemas`` with a serialised example."""

    name: str
    description: str = ""
    example: str = "null"
    properties: list[Property] = Field(default_factory=list)


class Document(_DocumentModel):
    """Root of the document model; one per ``process()`` call.

    See Also:
        :meth:`specdoc.processor.OpenApiProcessor.process`
    """

    info: Info = Field(default_factory=Info)
    servers: list[Server] = Field(default_factory=list)
    has_auth: bool = False
    resources: list[Resource] = Field(default_factory=list)
    schemas: list[SchemaModel] = Field(default_factory=list)
    endpoints: list[EndpointRef] = Field(default_factory=list)
    exclude_brand: bool = False
    version: str = "unknown"
    quick_reference_anchor: str = "Quick-Reference"

    @property
    def endpoint_count(self) -> int:
        """Total number of endpoints across all resources."""
        return sum(len(resource.endpoints) for resource in self.resources)
