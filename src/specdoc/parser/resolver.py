"""Resolve ``$ref`` JSON Reference pointers in OpenAPI specifications on demand.

OpenAPI documents commonly use ``$ref`` pointers (e.g.,
``{"$ref": "#/components/schemas/Pet"}``) to avoid repetition. Rather than
deep-copying and inlining the whole document up front, :class:`RefResolver`
follows pointers lazily, at the node the processor is looking at, and threads
a ``seen`` set of references through every recursive walk. A reference that
is already on the current path is a cycle: it is reported and resolved to
``None`` so that callers fail closed instead of recursing forever.

Only **internal** references (those starting with ``#/``) are followed.
External file or URL references, and pointers to keys that do not exist, are
logged and treated as unresolved.
"""

from __future__ import annotations

import logging
from typing import Any

from specdoc.exceptions import SpecParseError

logger = logging.getLogger(__name__)


class RefResolver:
    """Follow internal ``$ref`` pointers against one root document.

    Args:
        root: The raw OpenAPI spec dictionary. It is never mutated.

    Example::

        resolver = RefResolver(raw)
        schema, seen = resolver.deref({"$ref": "#/components/schemas/Pet"})
    """

    def __init__(self, root: dict[str, Any]) -> None:
        self.root = root

    def lookup(self, ref: str) -> Any:
        """Return the value a single ``$ref`` string points at.

        Handles RFC 6901 JSON Pointer escaping (``~0`` for ``~``, ``~1`` for
        ``/``).

        Raises:
            SpecParseError: If the reference is external, or any segment of
                the pointer does not exist in the document.
        """
        if not ref.startswith("#/"):
            raise SpecParseError(
                f"External $ref not supported: {ref}. "
                "Only internal references (#/...) are handled."
            )

        current: Any = self.root
        for segment in ref[2:].split("/"):
            segment = segment.replace("~1", "/").replace("~0", "~")

            if isinstance(current, dict):
                if segment not in current:
                    raise SpecParseError(
                        f"Cannot resolve $ref '{ref}': "
                        f"key '{segment}' not found at path"
                    )
                current = current[segment]
            elif isinstance(current, list):
                try:
                    current = current[int(segment)]
                except (ValueError, IndexError) as exc:
                    raise SpecParseError(
                        f"Cannot resolve $ref '{ref}': "
                        f"invalid array index '{segment}'"
                    ) from exc
            else:
                raise SpecParseError(
                    f"Cannot resolve $ref '{ref}': "
                    f"cannot navigate into {type(current).__name__}"
                )

        return current

    def deref(
        self, node: Any, seen: frozenset[str] = frozenset()
    ) -> tuple[Any, frozenset[str]]:
        """Follow a chain of ``$ref`` pointers starting at *node*.

        Args:
            node: Any spec node. Non-reference nodes are returned unchanged.
            seen: References already followed on the current walk.

        Returns:
            ``(target, seen)`` where *seen* includes every reference followed.
            *target* is ``None`` when the chain is circular or cannot be
            resolved.
        """
        while isinstance(node, dict) and isinstance(node.get("$ref"), str):
            ref = node["$ref"]
            if ref in seen:
                logger.warning("Circular $ref '%s' left unresolved", ref)
                return None, seen
            seen = seen | {ref}
            try:
                node = self.lookup(ref)
            except SpecParseError as exc:
                logger.warning("%s", exc)
                return None, seen
        return node, seen

    def resolve_schema(
        self, schema: Any, seen: frozenset[str] = frozenset()
    ) -> tuple[Any, frozenset[str]]:
        """Dereference *schema* and flatten its composition keywords.

        * ``allOf`` -- the properties (and ``required`` names) of every branch
          are merged into a single ``object`` schema.
        * ``anyOf`` / ``oneOf`` -- the first branch is used.

        Returns:
            ``(schema, seen)``; *schema* is ``None`` if it cannot be resolved.
        """
        schema, seen = self.deref(schema, seen)
        if not isinstance(schema, dict):
            return schema, seen

        if isinstance(schema.get("allOf"), list):
            merged: dict[str, Any] = {"type": "object", "properties": {}}
            required: list[str] = []
            for sub_schema in schema["allOf"]:
                resolved, _ = self.resolve_schema(sub_schema, seen)
                if not isinstance(resolved, dict):
                    continue
                merged["properties"].update(resolved.get("properties") or {})
                required.extend(
                    name for name in resolved.get("required") or [] if name not in required
                )
                if "description" in resolved and "description" not in merged:
                    merged["description"] = resolved["description"]
            if "description" in schema:
                merged["description"] = schema["description"]
            if "example" in schema:
                merged["example"] = schema["example"]
            if required:
                merged["required"] = required
            return merged, seen

        for keyword in ("anyOf", "oneOf"):
            branches = schema.get(keyword)
            if isinstance(branches, list) and branches:
                return self.resolve_schema(branches[0], seen)

        return schema, seen

    def resolve_parameters(
        self, params: Any, seen: frozenset[str] = frozenset()
    ) -> list[dict[str, Any]]:
        """Resolve a ``parameters`` array, flattening parameter groups.

        A ``$ref`` that points at an array (a reusable group of parameters) is
        expanded in place, recursively. Unresolvable references keep the
        original ``$ref`` dict; non-dict entries are dropped.
        """
        if not isinstance(params, list):
            return []

        result: list[dict[str, Any]] = []
        for param in params:
            if isinstance(param, dict) and "$ref" in param:
                resolved, branch_seen = self.deref(param, seen)
                if isinstance(resolved, list):
                    result.extend(self.resolve_parameters(resolved, branch_seen))
                elif isinstance(resolved, dict):
                    result.append(resolved)
                else:
                    result.append(param)
            elif isinstance(param, dict):
                result.append(param)
        return result


def component_ref(section: str, name: str) -> str:
    """Build the internal ``$ref`` for ``components/<section>/<name>``.

    ``~`` and ``/`` in *name* are escaped per RFC 6901.
    """
    escaped = name.replace("~", "~0").replace("/", "~1")
    return f"#/components/{section}/{escaped}"
