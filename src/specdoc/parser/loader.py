"""Read an OpenAPI document from disk, an ``http(s)`` URL or standard input.

Reading and decoding are separate steps. :func:`read_source` returns a
:class:`RawSource` (the text, a label naming where it came from, and a format
hint taken from the file suffix or the response ``Content-Type``), and
:func:`parse_document` decodes it. :func:`load_spec` chains the two.

Any source that does not yield a mapping raises
:class:`~specdoc.exceptions.SpecParseError` before the processor runs, with
the label in the message.
"""

from __future__ import annotations

import json
import sys
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Callable, Optional

import httpx
import yaml

from specdoc.exceptions import SpecParseError

STDIN = "-"
FETCH_TIMEOUT = 30.0

_SUFFIX_FORMATS = {".json": "json", ".yaml": "yaml", ".yml": "yaml"}

_DECODERS: dict[str, tuple[Callable[[str], Any], type[Exception]]] = {
    "json": (json.loads, json.JSONDecodeError),
    "yaml": (yaml.safe_load, yaml.YAMLError),
}


@dataclass(frozen=True)
class RawSource:
    """Undecoded document text.

    ``format`` is ``"json"``, ``"yaml"`` or ``None`` when nothing hints at
    either.
    """

    text: str
    label: str
    format: Optional[str] = None


def load_spec(source: str) -> dict[str, Any]:
    """Return the OpenAPI document at *source* as a dictionary.

    Args:
        source: A file path, an ``http://``/``https://`` URL, or ``-`` for
            stdin.

    Raises:
        SpecParseError: The source is unreadable, empty, not JSON/YAML, or
            its root is not an object.
    """
    return parse_document(read_source(source))


def read_source(source: str) -> RawSource:
    """Fetch the raw text behind *source* without decoding it."""
    if source == STDIN:
        raw = _read_stdin()
    elif source.startswith(("http://", "https://")):
        raw = _fetch(source)
    else:
        raw = _read_file(Path(source))
    if not raw.text.strip():
        raise SpecParseError(f"{raw.label} is empty")
    return raw


def _read_stdin() -> RawSource:
    try:
        text = sys.stdin.read()
    except OSError as exc:
        raise SpecParseError(f"Cannot read <stdin>: {exc}") from exc
    return RawSource(text=text, label="<stdin>")


def _fetch(url: str) -> RawSource:
    try:
        response = httpx.get(url, timeout=FETCH_TIMEOUT, follow_redirects=True)
        response.raise_for_status()
    except httpx.HTTPStatusError as exc:
        raise SpecParseError(f"{url} answered HTTP {exc.response.status_code}") from exc
    except httpx.RequestError as exc:
        raise SpecParseError(f"Cannot fetch {url}: {exc}") from exc
    media_type = response.headers.get("content-type", "").split(";")[0].strip().lower()
    return RawSource(text=response.text, label=url, format=_media_type_format(media_type))


def _media_type_format(media_type: str) -> Optional[str]:
    if media_type.endswith("json"):
        return "json"
    if "yaml" in media_type or "yml" in media_type:
        return "yaml"
    return None


def _read_file(path: Path) -> RawSource:
    if not path.is_file():
        raise SpecParseError(f"Spec file not found: {path}")
    try:
        text = path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as exc:
        raise SpecParseError(f"Cannot read {path}: {exc}") from exc
    fmt = _SUFFIX_FORMATS.get(path.suffix.lower())
    return RawSource(text=text, label=str(path), format=fmt)


def parse_document(raw: RawSource) -> dict[str, Any]:
    """Decode *raw* into a dictionary.

    With a format hint only that decoder runs. Without one JSON is tried
    first and YAML second, and a failure reports both errors.
    """
    formats = [raw.format] if raw.format else ["json", "yaml"]
    errors: list[str] = []
    for fmt in formats:
        decode, failure = _DECODERS[fmt]
        try:
            document = decode(raw.text)
        except failure as exc:
            errors.append(f"{fmt.upper()}: {exc}")
            continue
        if not isinstance(document, dict):
            found = "nothing" if document is None else type(document).__name__
            raise SpecParseError(
                f"{raw.label} must contain an object at its root, found {found}"
            )
        return document
    expected = " or ".join(fmt.upper() for fmt in formats)
    raise SpecParseError(f"{raw.label} is not valid {expected}\n  " + "\n  ".join(errors))


def validate_openapi_version(spec: dict[str, Any]) -> str:
    """Return the document's ``openapi`` version when it is ``3.x``.

    Raises:
        SpecParseError: For Swagger 2.x documents, a missing ``openapi``
            field, or any other major version.
    """
    if "swagger" in spec:
        raise SpecParseError(
            f"Swagger {spec['swagger']} documents are not supported; "
            "convert to OpenAPI 3.x first (https://converter.swagger.io)"
        )
    if "openapi" not in spec:
        raise SpecParseError("No 'openapi' field; expected an OpenAPI 3.x document")
    version = str(spec["openapi"])
    if not version.startswith("3."):
        raise SpecParseError(f"OpenAPI {version} is not supported; expected 3.x")
    return version
