"""Assemble a Postman Collection v2.1 and environment from a document.

Requests use Postman variables instead of concrete values: the host is
``{{BASE_URL}}`` and authentication headers carry ``{{AUTH_TOKEN}}``, both
defined in the companion environment from :func:`build_postman_environment`.
"""

from __future__ import annotations

import json
import re
import uuid
from datetime import datetime, timezone
from typing import Any, Optional

from specdoc.models import Document, Endpoint, Header

COLLECTION_SCHEMA = "https://schema.getpostman.com/json/collection/v2.1.0/collection.json"
DEFAULT_BASE_URL = "http://localhost:3000"

_PATH_PARAM_RE = re.compile(r"\{([^}]+)\}")
_BODY_METHODS = frozenset({"POST", "PUT", "PATCH"})


def _new_id() -> str:
    return str(uuid.uuid4())


def to_postman_path(path: str) -> str:
    """``/users/{id}`` -> ``/users/:id``."""
    return _PATH_PARAM_RE.sub(r":\1", path)


def _header_value(header: Header) -> str:
    if not header.synthesized:
        return header.example
    if header.example.startswith("Bearer "):
        return "Bearer {{AUTH_TOKEN}}"
    return "{{AUTH_TOKEN}}"


def _test_script(endpoint: Endpoint) -> list[str]:
    codes = {response.code for response in endpoint.responses}
    lines: list[str] = []
    if codes & {"200", "201"}:
        lines += [
            'pm.test("Status code is successful", function () {',
            "    pm.expect(pm.response.code).to.be.oneOf([200, 201]);",
            "});",
        ]
    lines += [
        'pm.test("Response time is less than 5000ms", function () {',
        "    pm.expect(pm.response.responseTime).to.be.below(5000);",
        "});",
    ]
    return lines


def build_postman_request(endpoint: Endpoint) -> dict[str, Any]:
    """Build one collection item for *endpoint*."""
    postman_path = to_postman_path(endpoint.path)
    query = [
        {
            "key": param.name,
            "value": param.example if isinstance(param.example, str) else json.dumps(param.example),
            "description": param.description,
        }
        for param in endpoint.parameters
        if param.location == "query"
    ]

    headers: list[dict[str, Any]] = []
    if endpoint.request_body is not None:
        headers.append(
            {"key": "Content-Type", "value": endpoint.request_body.content_type, "type": "text"}
        )
    headers.extend(
        {"key": header.name, "value": _header_value(header), "type": "text"}
        for header in endpoint.headers
    )

    raw_query = "&".join(f"{item['key']}={item['value']}" for item in query)
    url: dict[str, Any] = {
        "raw": "{{BASE_URL}}" + postman_path + (f"?{raw_query}" if raw_query else ""),
        "host": ["{{BASE_URL}}"],
        "path": [segment for segment in postman_path.split("/") if segment],
    }
    if query:
        url["query"] = query

    request: dict[str, Any] = {
        "method": endpoint.method,
        "header": headers,
        "url": url,
    }
    if endpoint.description:
        request["description"] = endpoint.description

    if endpoint.method in _BODY_METHODS and endpoint.request_body is not None:
        body = (
            json.loads(endpoint.request_body_example)
            if endpoint.request_body_example is not None
            else {}
        )
        request["body"] = {
            "mode": "raw",
            "raw": json.dumps(body, indent=2, ensure_ascii=False),
            "options": {"raw": {"language": "json"}},
        }

    return {
        "name": endpoint.summary or f"{endpoint.method} {endpoint.path}",
        "request": request,
        "event": [
            {
                "listen": "test",
                "script": {"type": "text/javascript", "exec": _test_script(endpoint)},
            }
        ],
    }


def build_postman_collection(document: Document) -> dict[str, Any]:
    """Build a Postman Collection v2.1 with one folder per resource."""
    info = document.info
    return {
        "info": {
            "_postman_id": _new_id(),
            "name": f"{info.title} v{info.version}",
            "description": info.description or f"API collection for {info.title}",
            "schema": COLLECTION_SCHEMA,
        },
        "item": [
            {
                "name": resource.name,
                "description": resource.description,
                "item": [build_postman_request(endpoint) for endpoint in resource.endpoints],
            }
            for resource in document.resources
        ],
        "variable": [
            {
                "key": "authToken",
                "value": "",
                "type": "string",
                "description": "Authentication token",
            }
        ],
    }


def _environment_base_url(document: Document) -> str:
    if document.servers and document.servers[0].url:
        return document.servers[0].url
    for resource in document.resources:
        for endpoint in resource.endpoints:
            if endpoint.base_url:
                return endpoint.base_url
    return DEFAULT_BASE_URL


def build_postman_environment(
    document: Document, exported_at: Optional[datetime] = None
) -> dict[str, Any]:
    """Build the environment holding ``BASE_URL``, ``API_VERSION`` and ``AUTH_TOKEN``."""
    exported_at = exported_at or datetime.now(timezone.utc)
    name = re.sub(r"\s+", "_", document.info.title.upper()) or "API_ENVIRONMENT"
    return {
        "id": _new_id(),
        "name": name,
        "values": [
            {
                "key": "BASE_URL",
                "value": _environment_base_url(document),
                "type": "default",
                "description": "API base URL",
                "enabled": True,
            },
            {
                "key": "API_VERSION",
                "value": document.info.version,
                "type": "default",
                "description": "API version",
                "enabled": True,
            },
            {
                "key": "AUTH_TOKEN",
                "value": "your_auth_token_here",
                "type": "secret",
                "description": "Authentication token (configure in your environment)",
                "enabled": True,
            },
        ],
        "_postman_variable_scope": "environment",
        "_postman_exported_at": exported_at.isoformat(),
        "_postman_exported_using": "specdoc",
    }
