"""Structural inspection of JSON Schema nodes from an OpenAPI description."""

from __future__ import annotations

import enum
from collections.abc import Mapping
from typing import Any

from oasgraph.core.errors import InvalidSchema


class SchemaShape(str, enum.Enum):
    """How a schema node is translated."""

    OBJECT = "object"
    # An object without any declared properties has nothing to expose
    EMPTY_OBJECT = "empty_object"
    ENUM = "enum"
    ARRAY = "array"
    SCALAR = "scalar"


def get_schema_type(schema: Mapping[str, Any]) -> str | None:
    """Type marker of a schema node.

    `enum` wins over the declared type, `properties` and `items` imply `object` and `array` when `type` is absent.
    A type list with a single non-null entry, e.g. `["string", "null"]`, stands for that entry.
    """
    if isinstance(schema.get("enum"), list):
        return "enum"
    declared = declared_type(schema)
    if declared is not None:
        return declared
    if isinstance(schema.get("properties"), Mapping):
        return "object"
    if "items" in schema:
        return "array"
    return None


def declared_type(schema: Mapping[str, Any]) -> str | None:
    """The `type` keyword of a schema, with `null` dropped from type lists."""
    declared = schema.get("type")
    if isinstance(declared, list):
        remaining = [type_ for type_ in declared if type_ != "null"]
        declared = remaining[0] if len(remaining) == 1 else None
    return declared if isinstance(declared, str) else None


def classify(name: str, schema: Mapping[str, Any]) -> SchemaShape:
    type_ = get_schema_type(schema)
    if type_ is None:
        raise InvalidSchema.unknown_shape(name, schema)
    if type_ == "object":
        if schema.get("properties"):
            return SchemaShape.OBJECT
        return SchemaShape.EMPTY_OBJECT
    if type_ == "enum":
        return SchemaShape.ENUM
    if type_ == "array":
        return SchemaShape.ARRAY
    return SchemaShape.SCALAR


def is_reference(schema: Any) -> bool:
    return isinstance(schema, Mapping) and "$ref" in schema


def ref_name(reference: str) -> str:
    """Schema name a local reference points to.

    >>> ref_name("#/components/schemas/Pet")
    'Pet'
    """
    return reference.rsplit("/", 1)[-1].replace("~1", "/").replace("~0", "~")


def resolve_pointer(document: Any, pointer: str) -> Any:
    """Resolve a JSON Pointer against `document`.

    Leading `/` is optional, missing entries resolve to `None`.
    """
    if not pointer:
        return document
    target = document
    for token in pointer.lstrip("/").split("/"):
        token = token.replace("~1", "/").replace("~0", "~")
        if isinstance(target, Mapping):
            target = target.get(token)
        elif isinstance(target, list):
            try:
                target = target[int(token)]
            except (ValueError, IndexError):
                return None
        else:
            return None
        if target is None:
            return None
    return target
