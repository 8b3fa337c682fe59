from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any

from graphql import GraphQLEnumType, GraphQLEnumValue

from oasgraph.core.errors import InvalidName, InvalidSchema
from oasgraph.core.naming import beautify

if TYPE_CHECKING:
    from oasgraph.translation.context import TranslationContext

logger = logging.getLogger(__name__)

# Not allowed as enum value names in GraphQL
_RESERVED_VALUE_NAMES = frozenset(("true", "false", "null"))
# Member name for literals without any usable character, e.g. ""
EMPTY_VALUE_NAME = "EMPTY"


def resolve_enum(name: str, context: TranslationContext, values: list[Any]) -> GraphQLEnumType:
    """Return the enum type cached under `name` or build it from `values`.

    Enums are cached in the output namespace only.
    """
    cached = context.output_types.get(name)
    if cached is not None:
        logger.debug("Reuse enum type `%s`", name)
        return cached  # type: ignore[return-value]
    logger.debug("Create enum type `%s`", name)
    members: dict[str, GraphQLEnumValue] = {}
    for value in values:
        key = _member_name(value)
        if key in members:
            raise InvalidSchema(
                f"Enum `{name}` has values `{members[key].value!r}` and `{value!r}` with the same name `{key}`",
                name=name,
            )
        members[key] = GraphQLEnumValue(value=value)
    enum_type = GraphQLEnumType(name=name, values=members)
    context.output_types[name] = enum_type
    return enum_type


def _member_name(value: Any) -> str:
    try:
        key = beautify(value)
    except InvalidName:
        return EMPTY_VALUE_NAME
    if key in _RESERVED_VALUE_NAMES:
        return key.upper()
    return key
