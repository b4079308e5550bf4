"""Infer whether operations require authentication, and how to show it.

Two questions are answered here, deliberately with different rules:

* :func:`document_has_auth` -- should the documentation have an
  authentication section at all? True when the API declares security
  schemes or any operation is protected.
* :func:`operation_requires_auth` -- does *this* endpoint need credentials,
  and therefore a synthesized header? An operation-level ``security`` array
  is authoritative (``[]`` means explicitly public); otherwise a non-empty
  global ``security`` array is inherited; otherwise the answer is no, even if
  security schemes are declared.

:func:`authorization_header` turns the applicable security scheme into the
one header row a caller needs to send.
"""

from __future__ import annotations

from typing import Any, Iterator, Optional

from specdoc.models import Header, HTTPMethod

_HTTP_METHODS = frozenset(m.value for m in HTTPMethod)

BEARER_EXAMPLE = "Bearer <your-token>"
API_KEY_EXAMPLE = "<your-api-key>"


def effective_security(
    operation: dict[str, Any], spec: dict[str, Any]
) -> list[dict[str, Any]]:
    """Return the security requirements that apply to *operation*.

    An operation-level ``security`` list (even empty) replaces the global
    one.
    """
    op_security = operation.get("security")
    if isinstance(op_security, list):
        return [req for req in op_security if isinstance(req, dict)]
    global_security = spec.get("security")
    if isinstance(global_security, list):
        return [req for req in global_security if isinstance(req, dict)]
    return []


def operation_requires_auth(operation: dict[str, Any], spec: dict[str, Any]) -> bool:
    """Return ``True`` when calling *operation* requires authentication."""
    op_security = operation.get("security")
    if isinstance(op_security, list):
        return len(op_security) > 0
    global_security = spec.get("security")
    return isinstance(global_security, list) and len(global_security) > 0


def _security_schemes(spec: dict[str, Any]) -> dict[str, Any]:
    components = spec.get("components")
    if not isinstance(components, dict):
        return {}
    schemes = components.get("securitySchemes")
    return schemes if isinstance(schemes, dict) else {}


def _iter_operations(spec: dict[str, Any]) -> Iterator[dict[str, Any]]:
    paths = spec.get("paths")
    if not isinstance(paths, dict):
        return
    for path_item in paths.values():
        if not isinstance(path_item, dict):
            continue
        for method, operation in path_item.items():
            if method in _HTTP_METHODS and isinstance(operation, dict):
                yield operation


def document_has_auth(spec: dict[str, Any]) -> bool:
    """Return ``True`` when the API has any authentication story to document."""
    if _security_schemes(spec):
        return True
    return any(operation_requires_auth(op, spec) for op in _iter_operations(spec))


def _header_for_scheme(scheme: Any) -> Optional[Header]:
    if not isinstance(scheme, dict):
        return None
    scheme_type = scheme.get("type")
    if scheme_type == "http" and str(scheme.get("scheme", "")).lower() == "bearer":
        return Header(
            name="Authorization",
            example=BEARER_EXAMPLE,
            description="Bearer token",
            required=True,
            synthesized=True,
        )
    if scheme_type == "apiKey" and scheme.get("in") == "header":
        return Header(
            name=str(scheme.get("name") or "Authorization"),
            example=API_KEY_EXAMPLE,
            description="API key",
            required=True,
            synthesized=True,
        )
    return None


def authorization_header(
    spec: dict[str, Any], operation: Optional[dict[str, Any]] = None
) -> Header:
    """Synthesize the authentication header for an operation.

    Schemes named by the operation's effective security requirements are
    tried in order; without an operation, or when its requirements name no
    scheme, every declared scheme is tried instead. The first bearer
    ``http`` scheme or header ``apiKey`` scheme wins; when none qualifies a
    generic ``Authorization: Bearer <your-token>`` header is returned.
    """
    schemes = _security_schemes(spec)

    candidates: list[str] = []
    if operation is not None:
        for requirement in effective_security(operation, spec):
            candidates.extend(name for name in requirement if name not in candidates)
    if not candidates:
        candidates = list(schemes)

    for name in candidates:
        header = _header_for_scheme(schemes.get(name))
        if header is not None:
            return header

    return Header(
        name="Authorization",
        example=BEARER_EXAMPLE,
        description="Authentication token",
        required=True,
        synthesized=True,
    )
