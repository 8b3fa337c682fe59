from __future__ import annotations

from graphql import GraphQLBoolean, GraphQLFloat, GraphQLInt, GraphQLScalarType, GraphQLString

SCALAR_TYPES: dict[str, GraphQLScalarType] = {
    "string": GraphQLString,
    "integer": GraphQLInt,
    "number": GraphQLFloat,
    "boolean": GraphQLBoolean,
}


def get_scalar_type(type_: str | None) -> GraphQLScalarType | None:
    """GraphQL scalar for a JSON Schema primitive type, `None` for anything else."""
    return SCALAR_TYPES.get(type_)
