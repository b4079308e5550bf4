"""The ``specdoc inspect`` command: a resource/endpoint overview of a spec."""

from __future__ import annotations

import typer

from specdoc.config import resolve_options
from specdoc.exceptions import SpecdocError
from specdoc.output import error, get_output, info
from specdoc.parser import load_spec, validate_openapi_version
from specdoc.processor import OpenApiProcessor


def inspect_command(
    spec: str = typer.Argument(..., help="Spec file path, http(s) URL, or '-' for stdin."),
) -> None:
    """Show how a spec groups into resources and endpoints.

    Example::

        specdoc inspect openapi.yaml
        specdoc --json inspect openapi.yaml
    """
    try:
        raw = load_spec(spec)
        validate_openapi_version(raw)
        document = OpenApiProcessor(resolve_options()).process(raw)
    except SpecdocError as exc:
        error(str(exc))
        raise typer.Exit(code=exc.exit_code) from None

    info(
        f"{document.info.title} {document.info.version}: "
        f"{document.endpoint_count} endpoints in {len(document.resources)} resources"
    )

    rows: list[list[str]] = []
    for resource in document.resources:
        for endpoint in resource.endpoints:
            rows.append([
                resource.name,
                endpoint.method,
                endpoint.path,
                endpoint.summary or "-",
                "Yes" if endpoint.requires_auth else "",
                endpoint.anchor,
            ])

    get_output().print_table(
        ["Resource", "Method", "Path", "Summary", "Auth", "Anchor"],
        rows,
        title=f"{document.info.title} -- Endpoints ({len(rows)})",
    )
