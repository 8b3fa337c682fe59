"""Errors raised while turning an API description into GraphQL types."""

from __future__ import annotations

import enum
from difflib import get_close_matches
from typing import TYPE_CHECKING, Any, NoReturn

if TYPE_CHECKING:
    from collections.abc import Iterable


SCHEMA_ERROR_SUGGESTION = "Ensure that the definition complies with the OpenAPI specification"


class OasGraphError(Exception):
    """Base exception class for all oasgraph errors."""


class InvalidSchema(OasGraphError):
    """A schema node can not be translated.

    Structural errors abort the whole build, the partially built type graph is not usable.
    """

    def __init__(self, message: str, name: str | None = None) -> None:
        self.message = message
        self.name = name

    def __str__(self) -> str:
        return self.message

    @classmethod
    def missing_definition(cls, name: str, schema: Any) -> InvalidSchema:
        return cls(
            f"Invalid schema for `{name}` provided of type `{type(schema).__name__}`\n\n{SCHEMA_ERROR_SUGGESTION}",
            name=name,
        )

    @classmethod
    def unknown_shape(cls, name: str, schema: Any) -> InvalidSchema:
        return cls(f"Schema `{name}` has no or a wrong type: {_truncate(schema)}", name=name)


class IterationLimitExceeded(InvalidSchema):
    """Nested translation went deeper than the configured ceiling."""

    def __init__(self, name: str, limit: int) -> None:
        super().__init__(f"Too many iterations when creating schema `{name}` (limit: {limit})", name=name)
        self.limit = limit


class InvalidLink(OasGraphError):
    """A link definition can not be turned into a field."""

    def __init__(self, message: str, link: str) -> None:
        self.message = message
        self.link = link

    def __str__(self) -> str:
        return self.message


class OperationNotFound(LookupError, OasGraphError):
    """Raised when an operation referenced by a link is not known."""

    def __init__(self, message: str, item: str) -> None:
        self.message = message
        self.item = item

    def __str__(self) -> str:
        return self.message


def on_missing_operation(item: str, options: Iterable[str]) -> NoReturn:
    message = f"Operation `{item}` not found"
    matches = get_close_matches(item, list(options))
    if matches:
        message += f". Did you mean `{matches[0]}`?"
    raise OperationNotFound(message=message, item=item)


class InvalidName(OasGraphError):
    """An identifier has nothing left after sanitization."""


class NameCollision(OasGraphError):
    """Two different identifiers sanitize to the same GraphQL name."""

    def __init__(self, sanitized: str, original: str, existing: str) -> None:
        self.sanitized = sanitized
        self.original = original
        self.existing = existing

    def __str__(self) -> str:
        return (
            f"Sanitized name `{self.sanitized}` for `{self.original}` is already used by `{self.existing}`"
        )


class SchemaNameCollision(OasGraphError):
    """An inline property schema shares its name with a schema definition."""

    def __init__(self, name: str) -> None:
        self.name = name

    def __str__(self) -> str:
        return f"Inline schema for property `{self.name}` collides with a schema definition of the same name"


class ResolverError(OasGraphError):
    """A resolver can not prepare or hand over a request."""


@enum.unique
class LoaderErrorKind(str, enum.Enum):
    SYNTAX_ERROR = "syntax_error"
    OPEN_API_INVALID_SCHEMA = "open_api_invalid_schema"
    OPEN_API_UNSPECIFIED_VERSION = "open_api_unspecified_version"


class LoaderError(OasGraphError):
    """Failed to load an API description."""

    def __init__(self, kind: LoaderErrorKind, message: str, extras: list[str] | None = None) -> None:
        self.kind = kind
        self.message = message
        self.extras = extras or []

    def __str__(self) -> str:
        return self.message


def _truncate(value: Any, limit: int = 80) -> str:
    text = repr(value)
    if len(text) > limit:
        return text[: limit - 3] + "..."
    return text
