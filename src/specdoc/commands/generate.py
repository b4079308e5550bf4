"""The ``specdoc generate`` command.

Loads a spec, resolves processor options (CLI > environment > project
config), builds the document model once, and writes one artifact family::

    specdoc generate openapi.yaml --format markdown --output docs/
    specdoc generate https://api.example.com/openapi.json -f postman
    specdoc generate openapi.json -f json -o -     # document model to stdout
"""

from __future__ import annotations

import enum
import json
import logging
from pathlib import Path
from typing import Optional

import typer

from specdoc import __version__
from specdoc.config import resolve_options
from specdoc.exceptions import InvalidUsageError, RenderError, SpecdocError
from specdoc.models import Document
from specdoc.output import error, print_data, success
from specdoc.parser import load_spec, validate_openapi_version
from specdoc.processor import OpenApiProcessor
from specdoc.renderers import (
    build_postman_collection,
    build_postman_environment,
    render_html,
    render_markdown,
)

logger = logging.getLogger(__name__)

STDOUT = "-"


class DocFormat(str, enum.Enum):
    MARKDOWN = "markdown"
    HTML = "html"
    POSTMAN = "postman"
    JSON = "json"


def _to_json(data: object) -> str:
    return json.dumps(data, indent=2, ensure_ascii=False) + "\n"


def render_artifacts(document: Document, doc_format: DocFormat) -> dict[str, str]:
    """Render *document* into ``{file name: content}`` for *doc_format*."""
    if doc_format is DocFormat.MARKDOWN:
        return {"api-docs.md": render_markdown(document, exclude_brand=document.exclude_brand)}
    if doc_format is DocFormat.HTML:
        return {"api-docs.html": render_html(document, exclude_brand=document.exclude_brand)}
    if doc_format is DocFormat.POSTMAN:
        return {
            "api-postman.json": _to_json(build_postman_collection(document)),
            "api-postman-env.json": _to_json(build_postman_environment(document)),
        }
    return {"api-model.json": _to_json(document.model_dump(mode="json", by_alias=True))}


def write_artifacts(artifacts: dict[str, str], output_dir: Path) -> list[Path]:
    """Write rendered artifacts under *output_dir*, creating it if needed.

    Raises:
        RenderError: If the directory or a file cannot be written.
    """
    written: list[Path] = []
    try:
        output_dir.mkdir(parents=True, exist_ok=True)
        for name, content in artifacts.items():
            path = output_dir / name
            path.write_text(content, encoding="utf-8")
            written.append(path)
    except OSError as exc:
        raise RenderError(f"Cannot write output to {output_dir}: {exc}") from exc
    return written


def generate_command(
    spec: str = typer.Argument(..., help="Spec file path, http(s) URL, or '-' for stdin."),
    doc_format: DocFormat = typer.Option(
        DocFormat.MARKDOWN, "--format", "-f", case_sensitive=False, help="Artifact to generate."
    ),
    output: str = typer.Option(
        "./docs", "--output", "-o", help="Output directory, or '-' for stdout."
    ),
    base_url: Optional[str] = typer.Option(
        None, "--base-url", help="Base URL used when the spec declares no servers."
    ),
    exclude_brand: bool = typer.Option(
        False, "--exclude-brand", help="Omit the 'Generated with specdoc' footer."
    ),
    no_url_encode: bool = typer.Option(
        False, "--no-url-encode", help="Lower-case anchors instead of preserving case."
    ),
    tag_order: Optional[list[str]] = typer.Option(
        None, "--tag-order", help="Resource to list first (repeatable)."
    ),
    version_label: Optional[str] = typer.Option(
        None, "--version-label", help="Generator version shown in the footer."
    ),
) -> None:
    """Generate documentation from an OpenAPI 3.x spec.

    Example::

        specdoc generate openapi.yaml --format html --tag-order Users
    """
    try:
        options = resolve_options(
            base_url=base_url,
            exclude_brand=True if exclude_brand else None,
            url_encode_anchors=False if no_url_encode else None,
            tag_order=tag_order,
            version=version_label or __version__,
        )
        raw = load_spec(spec)
        openapi_version = validate_openapi_version(raw)
        logger.debug("Loaded OpenAPI %s document from %s", openapi_version, spec)

        document = OpenApiProcessor(options).process(raw)
        artifacts = render_artifacts(document, doc_format)

        if output == STDOUT:
            if len(artifacts) != 1:
                raise InvalidUsageError(
                    f"--output - is not supported for --format {doc_format.value}"
                )
            print_data(next(iter(artifacts.values())).rstrip("\n"))
            return

        for path in write_artifacts(artifacts, Path(output)):
            success(f"Wrote {path}")
    except SpecdocError as exc:
        error(str(exc))
        raise typer.Exit(code=exc.exit_code) from None
