"""Assemble a :class:`~specdoc.models.Document` from a parsed OpenAPI spec.

:class:`OpenApiProcessor` is the single entry point. It holds only the
construction-time :class:`~specdoc.models.ProcessorOptions`; everything that
depends on one input spec (the ``$ref`` resolver, the example synthesizer,
the anchor registry) lives in a short-lived :class:`_DocumentBuilder`, so a
processor can be shared between threads and ``process()`` has no side
effects beyond logging.

Example::

    from specdoc.parser import load_spec
    from specdoc.processor import OpenApiProcessor

    document = OpenApiProcessor().process(load_spec("openapi.json"))
    for resource in document.resources:
        print(resource.name, len(resource.endpoints))
"""

from __future__ import annotations

import logging
from typing import Any, Optional

from specdoc.models import (
    ContactInfo,
    Document,
    Endpoint,
    EndpointRef,
    Info,
    LicenseInfo,
    ProcessorOptions,
    Resource,
    Server,
)
from specdoc.parser.resolver import RefResolver
from specdoc.processor.anchors import AnchorRegistry
from specdoc.processor.auth import (
    authorization_header,
    document_has_auth,
    operation_requires_auth,
)
from specdoc.processor.bodies import BodyBuilder
from specdoc.processor.examples import ExampleSynthesizer
from specdoc.processor.grouping import (
    Operation,
    iter_operations,
    order_resources,
    resource_key,
    tag_description,
)
from specdoc.processor.parameters import (
    build_headers,
    build_query_string,
    merge_parameters,
    normalize_parameters,
)

logger = logging.getLogger(__name__)

QUICK_REFERENCE = "Quick Reference"


class OpenApiProcessor:
    """Turn OpenAPI 3.x dictionaries into renderer-agnostic documents.

    Args:
        options: Construction-time options. Defaults to
            ``ProcessorOptions()``.
    """

    def __init__(self, options: Optional[ProcessorOptions] = None) -> None:
        self.options = options or ProcessorOptions()

    def process(self, spec: dict[str, Any]) -> Document:
        """Build the document model for *spec*.

        Missing or malformed sections degrade to defaults instead of raising.
        The input dictionary is never mutated.
        """
        document = _DocumentBuilder(spec, self.options).build()
        logger.debug(
            "Processed %d endpoints into %d resources and %d schemas",
            document.endpoint_count,
            len(document.resources),
            len(document.schemas),
        )
        return document


class _DocumentBuilder:
    """Per-call state for one :meth:`OpenApiProcessor.process` run."""

    def __init__(self, spec: dict[str, Any], options: ProcessorOptions) -> None:
        self.spec = spec if isinstance(spec, dict) else {}
        self.options = options
        self.resolver = RefResolver(self.spec)
        self.synthesizer = ExampleSynthesizer(self.resolver, options.max_example_depth)
        self.bodies = BodyBuilder(self.resolver, self.synthesizer)
        self.anchors = AnchorRegistry(
            url_encode=options.url_encode_anchors,
            deduplicate=options.deduplicate_anchors,
        )

    def build(self) -> Document:
        quick_reference_anchor = self.anchors.claim_text(QUICK_REFERENCE)
        servers = self.servers(self.spec.get("servers"))
        operations = list(iter_operations(self.spec))

        # Anchors are claimed in path order so suffixes are stable.
        endpoint_refs = [
            EndpointRef(
                method=op.method.upper(),
                path=op.path,
                summary=self.summary(op),
                anchor=self.anchors.anchor_for(op.method, op.path, self.summary(op)),
            )
            for op in operations
        ]

        groups: dict[str, list[Endpoint]] = {}
        for op in operations:
            groups.setdefault(resource_key(op.path, op.operation), []).append(
                self.endpoint(op, servers)
            )

        resources = [
            Resource(
                name=name,
                description=tag_description(self.spec, name),
                anchor=self.anchors.claim_text(name),
                endpoints=endpoints,
            )
            for name, endpoints in order_resources(groups, self.options.tag_order)
        ]

        components = self.spec.get("components")
        schemas = components.get("schemas") if isinstance(components, dict) else None

        return Document(
            info=self.info(self.spec.get("info")),
            servers=servers,
            has_auth=document_has_auth(self.spec),
            resources=resources,
            schemas=self.bodies.schema_models(schemas),
            endpoints=endpoint_refs,
            exclude_brand=self.options.exclude_brand,
            version=self.options.version,
            quick_reference_anchor=quick_reference_anchor,
        )

    # --- Info and servers ---

    @staticmethod
    def info(raw: Any) -> Info:
        if raw is None:
            return Info()
        if not isinstance(raw, dict):
            logger.warning("Ignoring 'info': expected an object")
            return Info()

        contact = raw.get("contact")
        license_ = raw.get("license")
        return Info(
            title=str(raw.get("title") or "API Documentation"),
            version=str(raw.get("version") or "1.0.0"),
            description=str(raw.get("description") or ""),
            contact=ContactInfo(
                name=contact.get("name"),
                email=contact.get("email"),
                url=contact.get("url"),
            )
            if isinstance(contact, dict)
            else None,
            license=LicenseInfo(name=license_.get("name"), url=license_.get("url"))
            if isinstance(license_, dict)
            else None,
        )

    @staticmethod
    def servers(raw: Any) -> list[Server]:
        if not isinstance(raw, list):
            return []
        servers: list[Server] = []
        for entry in raw:
            if not isinstance(entry, dict):
                continue
            url = str(entry.get("url") or "")
            servers.append(
                Server(url=url, description=str(entry.get("description") or url or "Server"))
            )
        return servers

    # --- Endpoints ---

    @staticmethod
    def summary(op: Operation) -> str:
        return str(op.operation.get("summary") or "")

    def base_url(self, op: Operation, servers: list[Server]) -> str:
        op_servers = self.servers(op.operation.get("servers"))
        if op_servers:
            return op_servers[0].url
        if servers:
            return servers[0].url
        return self.options.base_url

    def endpoint(self, op: Operation, servers: list[Server]) -> Endpoint:
        operation = op.operation
        params = merge_parameters(
            self.resolver.resolve_parameters(op.path_item.get("parameters")),
            self.resolver.resolve_parameters(operation.get("parameters")),
        )

        requires_auth = operation_requires_auth(operation, self.spec)
        auth_header = authorization_header(self.spec, operation) if requires_auth else None
        request_body = self.bodies.request_body(operation.get("requestBody"))

        tags = operation.get("tags")
        operation_id = operation.get("operationId")
        return Endpoint(
            method=op.method.upper(),
            path=op.path,
            summary=self.summary(op),
            description=str(operation.get("description") or ""),
            anchor=self.anchors.anchor_for(op.method, op.path, self.summary(op)),
            operation_id=str(operation_id) if operation_id is not None else None,
            tags=[str(tag) for tag in tags] if isinstance(tags, list) else [],
            deprecated=bool(operation.get("deprecated", False)),
            requires_auth=requires_auth,
            parameters=normalize_parameters(params),
            headers=build_headers(params, auth_header),
            request_body=request_body,
            request_body_example=self.bodies.request_body_example(
                operation.get("requestBody")
            ),
            responses=self.bodies.responses(operation.get("responses")),
            base_url=self.base_url(op, servers),
            query_string=build_query_string(params),
            has_content_type=request_body is not None,
        )
