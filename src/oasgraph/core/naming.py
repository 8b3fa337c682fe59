"""Sanitization of identifiers into valid GraphQL names.

Every name that ends up in the generated type graph (type names, field names, argument names) goes through
a `NameRegistry`, which remembers the original identifier so requests can later be built with the real names.
"""

from __future__ import annotations

import logging
import re
from collections.abc import Iterator
from typing import Any

from oasgraph.core.errors import InvalidName, NameCollision

logger = logging.getLogger(__name__)

# Anything GraphQL does not allow in a name separates words
_SEPARATOR_RE = re.compile(r"[^A-Za-z0-9_]+")


def beautify(original: Any) -> str:
    """Turn an arbitrary identifier into a GraphQL name.

    Disallowed characters are dropped and the character following them is upper-cased:

        >>> beautify("pet-id")
        'petId'
        >>> beautify("application/json")
        'applicationJson'
        >>> beautify("2fa")
        '_2fa'
    """
    text = original if isinstance(original, str) else str(original)
    head, *tail = _SEPARATOR_RE.split(text)
    sanitized = head + "".join(part[:1].upper() + part[1:] for part in tail)
    if not sanitized:
        raise InvalidName(f"Cannot sanitize `{text}` into a GraphQL name")
    if sanitized[0].isdigit():
        sanitized = f"_{sanitized}"
    return sanitized


class NameRegistry:
    """Append-only bidirectional mapping between sanitized and original names.

    Storing the same original twice returns the same sanitized name. When a different original produces an already
    registered sanitized form, a numeric suffix is added, or `NameCollision` is raised if the registry is strict.
    """

    __slots__ = ("strict", "_originals", "_sanitized")

    def __init__(self, *, strict: bool = False) -> None:
        self.strict = strict
        # sanitized -> original
        self._originals: dict[str, str] = {}
        # original -> sanitized
        self._sanitized: dict[str, str] = {}

    def store(self, original: Any) -> str:
        key = original if isinstance(original, str) else str(original)
        existing = self._sanitized.get(key)
        if existing is not None:
            return existing
        sanitized = beautify(key)
        if sanitized in self._originals:
            if self.strict:
                raise NameCollision(sanitized, key, self._originals[sanitized])
            base = sanitized
            suffix = 2
            while f"{base}{suffix}" in self._originals:
                suffix += 1
            sanitized = f"{base}{suffix}"
            logger.debug("Name `%s` is taken by `%s`, using `%s` for `%s`", base, self._originals[base], sanitized, key)
        self._originals[sanitized] = key
        self._sanitized[key] = sanitized
        return sanitized

    def original(self, sanitized: str) -> str:
        """Original identifier for a sanitized name."""
        return self._originals[sanitized]

    def get_original(self, sanitized: str, default: str | None = None) -> str | None:
        return self._originals.get(sanitized, default)

    def sanitized(self, original: str) -> str | None:
        return self._sanitized.get(original)

    def items(self) -> Iterator[tuple[str, str]]:
        """Iterate over `(sanitized, original)` pairs in registration order."""
        return iter(self._originals.items())

    def __contains__(self, sanitized: object) -> bool:
        return sanitized in self._originals

    def __len__(self) -> int:
        return len(self._originals)

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}({self._originals!r})"


def beautify_and_store(original: Any, registry: NameRegistry) -> str:
    """Sanitize `original` and register the mapping in `registry`."""
    return registry.store(original)
