"""specdoc -- Generate API documentation from OpenAPI 3.x specs.

This package turns an OpenAPI specification into a renderer-agnostic
*document model* and serialises that model as Markdown, HTML, or a Postman
collection. The model is built once by
:class:`~specdoc.processor.OpenApiProcessor` and handed to every renderer, so
resource grouping, authentication inference, header deduplication, anchor
generation, and example synthesis are decided in exactly one place.

Typical workflow::

    specdoc generate openapi.json --format markdown --output docs/
    specdoc inspect openapi.json

Modules:
    app: Typer application and CLI entry point.
    models: Pydantic document model and processor options.
    config: Option resolution from flags, environment, and project config.
    exceptions: Exception hierarchy with exit-code mapping.
    exit_codes: Numeric exit codes.
    output: stdout/stderr formatting with Rich support.
"""

__version__ = "0.1.0"
