"""OpenAPI spec loading and ``$ref`` resolution.

This sub-package is the caller-facing half of the pipeline: it reads a raw
OpenAPI 3.x document (JSON or YAML, local file, remote URL, or stdin) and
offers lazy internal ``$ref`` resolution for the processor.

Typical usage::

    from specdoc.parser import load_spec, validate_openapi_version

    raw = load_spec("openapi.yaml")
    validate_openapi_version(raw)

Sub-modules:

* :mod:`~specdoc.parser.loader` -- I/O layer (URL, file, stdin) plus format
  detection and OpenAPI version validation.
* :mod:`~specdoc.parser.resolver` -- On-demand ``$ref`` resolution with
  circular-reference detection.
"""

from specdoc.parser.loader import load_spec, validate_openapi_version
from specdoc.parser.resolver import RefResolver

__all__ = ["load_spec", "validate_openapi_version", "RefResolver"]
