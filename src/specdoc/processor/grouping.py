"""Enumerate operations and partition them into named resources."""

from __future__ import annotations

import logging
import re
from typing import Any, Iterator, NamedTuple, TypeVar

from specdoc.models import HTTPMethod

logger = logging.getLogger(__name__)

_HTTP_METHODS = frozenset(m.value for m in HTTPMethod)
_WORD_SPLIT_RE = re.compile(r"[-_\s]+")

FALLBACK_RESOURCE = "API"

T = TypeVar("T")


class Operation(NamedTuple):
    """One (path, verb) pair found in ``paths``."""

    path: str
    method: str
    path_item: dict[str, Any]
    operation: dict[str, Any]


def iter_operations(spec: dict[str, Any]) -> Iterator[Operation]:
    """Yield every operation in source order.

    Only the seven recognised verbs count; other path-item keys are ignored.
    Malformed path items and operations are skipped with a warning.
    """
    paths = spec.get("paths")
    if paths is None:
        return
    if not isinstance(paths, dict):
        logger.warning("Ignoring 'paths': expected an object, got %s", type(paths).__name__)
        return

    for path, path_item in paths.items():
        if not isinstance(path_item, dict):
            logger.warning("Skipping path '%s': path item is not an object", path)
            continue
        for key, operation in path_item.items():
            if key not in _HTTP_METHODS:
                continue
            if not isinstance(operation, dict):
                logger.warning(
                    "Skipping %s %s: operation is not an object", key.upper(), path
                )
                continue
            yield Operation(str(path), key, path_item, operation)


def to_pascal_case(text: str) -> str:
    """``user-accounts`` -> ``UserAccounts``."""
    return "".join(
        word[0].upper() + word[1:].lower()
        for word in _WORD_SPLIT_RE.split(text)
        if word
    )


def resource_key(path: str, operation: dict[str, Any]) -> str:
    """Return the resource an operation belongs to.

    The first tag wins. Untagged operations are grouped by their first path
    segment that is not a ``{placeholder}``, Pascal-cased.
    """
    tags = operation.get("tags")
    if isinstance(tags, list) and tags and tags[0] not in (None, ""):
        return str(tags[0])

    for segment in path.split("/"):
        if segment and not segment.startswith("{"):
            name = to_pascal_case(segment)
            if name:
                return name
    return FALLBACK_RESOURCE


def tag_description(spec: dict[str, Any], name: str) -> str:
    """Return the description of the top-level tag called *name*, or ``""``."""
    tags = spec.get("tags")
    if not isinstance(tags, list):
        return ""
    for tag in tags:
        if isinstance(tag, dict) and tag.get("name") == name:
            return str(tag.get("description") or "")
    return ""


def order_resources(groups: dict[str, T], tag_order: list[str]) -> list[tuple[str, T]]:
    """Order grouped resources.

    Names listed in *tag_order* (matched case-insensitively) come first, in
    that order; the remainder keep their first-seen order.
    """
    by_lower = {name.lower(): name for name in groups}
    ordered: list[str] = []
    for wanted in tag_order:
        name = by_lower.get(wanted.lower())
        if name is not None and name not in ordered:
            ordered.append(name)
    ordered.extend(name for name in groups if name not in ordered)
    return [(name, groups[name]) for name in ordered]
