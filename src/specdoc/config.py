"""Resolve :class:`~specdoc.models.ProcessorOptions` for a CLI run.

The processor never reads files or the environment; this module does it on
its behalf. Precedence (high to low):

    1. CLI flags
    2. Environment variables (``SPECDOC_BASE_URL``, ``SPECDOC_EXCLUDE_BRAND``,
       ``SPECDOC_NO_URL_ENCODE``, ``SPECDOC_TAG_ORDER``)
    3. Project config (``./specdoc.json``)
    4. Defaults

Project config keys may be camelCase or snake_case::

    {"baseUrl": "https://api.example.com", "tagOrder": ["Users", "Orders"]}
"""

from __future__ import annotations

import json
import os
from pathlib import Path
from typing import Any, Optional

from pydantic import ValidationError

from specdoc.exceptions import ConfigError
from specdoc.models import ProcessorOptions

_PROJECT_CONFIG_FILENAME = "specdoc.json"

ENV_BASE_URL = "SPECDOC_BASE_URL"
ENV_EXCLUDE_BRAND = "SPECDOC_EXCLUDE_BRAND"
ENV_NO_URL_ENCODE = "SPECDOC_NO_URL_ENCODE"
ENV_TAG_ORDER = "SPECDOC_TAG_ORDER"

_TRUE = frozenset({"1", "true", "yes", "on"})
_FALSE = frozenset({"0", "false", "no", "off", ""})


def load_project_config(directory: Optional[Path] = None) -> Optional[dict[str, Any]]:
    """Load ``specdoc.json`` from *directory* (default: the working directory).

    Returns:
        The parsed object, or ``None`` if the file does not exist.

    Raises:
        ConfigError: If the file is not valid JSON or not a JSON object.
    """
    path = (directory or Path.cwd()) / _PROJECT_CONFIG_FILENAME
    if not path.is_file():
        return None
    try:
        data = json.loads(path.read_text(encoding="utf-8"))
    except (OSError, UnicodeDecodeError, json.JSONDecodeError) as exc:
        raise ConfigError(f"Invalid project config at {path}: {exc}") from exc
    if not isinstance(data, dict):
        raise ConfigError(f"Invalid project config at {path}: expected a JSON object")
    return data


def _env_flag(name: str) -> Optional[bool]:
    raw = os.environ.get(name)
    if raw is None:
        return None
    value = raw.strip().lower()
    if value in _TRUE:
        return True
    if value in _FALSE:
        return False
    raise ConfigError(f"Invalid value for {name}: {raw!r} (expected true or false)")


def _env_options() -> dict[str, Any]:
    """Read the ``SPECDOC_*`` variables that are set, as snake_case options."""
    values: dict[str, Any] = {}

    base_url = os.environ.get(ENV_BASE_URL)
    if base_url:
        values["base_url"] = base_url

    exclude_brand = _env_flag(ENV_EXCLUDE_BRAND)
    if exclude_brand is not None:
        values["exclude_brand"] = exclude_brand

    no_url_encode = _env_flag(ENV_NO_URL_ENCODE)
    if no_url_encode is not None:
        values["url_encode_anchors"] = not no_url_encode

    tag_order = os.environ.get(ENV_TAG_ORDER)
    if tag_order:
        values["tag_order"] = [tag.strip() for tag in tag_order.split(",") if tag.strip()]

    return values


def resolve_options(
    base_url: Optional[str] = None,
    exclude_brand: Optional[bool] = None,
    url_encode_anchors: Optional[bool] = None,
    tag_order: Optional[list[str]] = None,
    version: Optional[str] = None,
    project_dir: Optional[Path] = None,
) -> ProcessorOptions:
    """Merge CLI values, environment and project config into options.

    ``None`` (or an empty ``tag_order``) means "not given on the command
    line" and lets the lower layers decide.

    Raises:
        ConfigError: If any layer holds an invalid value.
    """
    project = load_project_config(project_dir) or {}
    try:
        merged = ProcessorOptions.model_validate(project).model_dump()
    except ValidationError as exc:
        raise ConfigError(f"Invalid project config: {exc}") from exc

    merged.update(_env_options())

    cli = {
        "base_url": base_url,
        "exclude_brand": exclude_brand,
        "url_encode_anchors": url_encode_anchors,
        "tag_order": tag_order or None,
        "version": version,
    }
    merged.update({key: value for key, value in cli.items() if value is not None})

    try:
        return ProcessorOptions.model_validate(merged)
    except ValidationError as exc:
        raise ConfigError(f"Invalid options: {exc}") from exc
