"""OpenAPI-to-document-model processing."""

from specdoc.processor.anchors import AnchorRegistry, create_anchor
from specdoc.processor.assembler import OpenApiProcessor
from specdoc.processor.auth import document_has_auth, operation_requires_auth
from specdoc.processor.examples import ExampleSynthesizer

__all__ = [
    "AnchorRegistry",
    "ExampleSynthesizer",
    "OpenApiProcessor",
    "create_anchor",
    "document_has_auth",
    "operation_requires_auth",
]
