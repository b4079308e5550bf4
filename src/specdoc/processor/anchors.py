"""Generate link-safe anchors from endpoint display text.

Anchors keep every Unicode letter and digit, so Turkish, Cyrillic, CJK and
Arabic summaries produce readable link targets instead of empty strings::

    >>> create_anchor("get", "/users", "Kullanıcı Girişi ve Token Alımı")
    'Kullanıcı-Girişi-ve-Token-Alımı'
    >>> create_anchor("get", "/users", "Kullanıcı Girişi ve Token Alımı", url_encode=False)
    'kullanıcı-girişi-ve-token-alımı'

The ``url_encode`` flag only controls casing. Lower-casing happens after every
other step, so both modes always agree once case is folded.
"""

from __future__ import annotations

import logging
import re
from typing import Optional

logger = logging.getLogger(__name__)

# Python's ``\w`` is Unicode-aware; underscores are removed separately.
_STRIP_RE = re.compile(r"[^\w\s-]|_")
_SPACE_RE = re.compile(r"\s+")
_HYPHEN_RE = re.compile(r"-+")


def anchor_text(method: str, path: str, summary: Optional[str]) -> str:
    """Return the text an anchor is built from: summary, else ``METHOD path``."""
    if summary and summary.strip():
        return summary
    return f"{method.upper()} {path}"


def slugify(text: str, url_encode: bool = True) -> str:
    """Reduce *text* to letters, digits and single hyphens."""
    slug = _STRIP_RE.sub("", text)
    slug = _SPACE_RE.sub("-", slug)
    slug = _HYPHEN_RE.sub("-", slug).strip("-")
    return slug if url_encode else slug.lower()


def create_anchor(
    method: str, path: str, summary: Optional[str] = None, url_encode: bool = True
) -> str:
    """Build the anchor for one endpoint.

    If the summary contains nothing usable (e.g. only punctuation), the
    ``METHOD path`` text is used instead.
    """
    anchor = slugify(anchor_text(method, path, summary), url_encode)
    if not anchor:
        anchor = slugify(f"{method.upper()} {path}", url_encode)
    return anchor


class AnchorRegistry:
    """Hand out anchors for one document, suffixing collisions.

    The first claim of an anchor keeps it unchanged; later claims that
    collide case-insensitively get ``-2``, ``-3``, ... appended. Endpoint
    anchors are cached by ``(method, path)`` so that every place an endpoint
    is linked from uses the same target.

    Args:
        url_encode: Preserve case (``True``) or lower-case anchors.
        deduplicate: When ``False``, collisions are returned unchanged.
    """

    def __init__(self, url_encode: bool = True, deduplicate: bool = True) -> None:
        self.url_encode = url_encode
        self.deduplicate = deduplicate
        self._taken: set[str] = set()
        self._endpoints: dict[tuple[str, str], str] = {}

    def claim(self, anchor: str) -> str:
        """Reserve *anchor*, returning it or a suffixed variant."""
        if not self.deduplicate:
            return anchor

        candidate = anchor
        counter = 2
        while candidate.casefold() in self._taken:
            candidate = f"{anchor}-{counter}"
            counter += 1
        if candidate != anchor:
            logger.debug("Anchor '%s' already used; using '%s'", anchor, candidate)
        self._taken.add(candidate.casefold())
        return candidate

    def claim_text(self, text: str) -> str:
        """Slugify free text (a resource name, a heading) and claim it."""
        return self.claim(slugify(text, self.url_encode) or "section")

    def anchor_for(self, method: str, path: str, summary: Optional[str] = None) -> str:
        """Return the anchor of an endpoint, claiming it on first use."""
        key = (method.lower(), path)
        if key not in self._endpoints:
            anchor = create_anchor(method, path, summary, self.url_encode)
            self._endpoints[key] = self.claim(anchor)
        return self._endpoints[key]
