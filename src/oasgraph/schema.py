"""Assemble a GraphQL schema from an OpenAPI description."""

from __future__ import annotations

import logging
from collections.abc import Mapping
from typing import TYPE_CHECKING, Any

from graphql import GraphQLField, GraphQLObjectType, GraphQLSchema

from oasgraph.core.errors import InvalidSchema
from oasgraph.openapi.preprocessing import preprocess
from oasgraph.openapi.schemas import SchemaShape, classify
from oasgraph.resolvers import build_resolver
from oasgraph.translation.arguments import build_args, to_graphql_arguments
from oasgraph.translation.types import translate_type

if TYPE_CHECKING:
    from oasgraph.config import OasGraphConfig
    from oasgraph.translation.context import Fetch, Link, Operation, TranslationContext

logger = logging.getLogger(__name__)


def translate_document(
    document: Mapping[str, Any],
    *,
    config: OasGraphConfig | None = None,
    fetch: Fetch | None = None,
) -> TranslationContext:
    """Translate the response schema of every operation and return the populated context.

    Links of all operations returning the same schema are attached to that schema's type. Object schemas are built
    first, so a type carrying links is created at the top level before an array response can reach it by reference.
    """
    context = preprocess(document, config, fetch)
    links: dict[str, dict[str, Link]] = {}
    for operation in context.operations.values():
        if operation.response_schema_name is not None:
            links.setdefault(operation.response_schema_name, {}).update(operation.links)

    for name in sorted(links, key=lambda name: _build_priority(name, context)):
        type_ = translate_type(name, context.output_defs.get(name), context, links=links[name])
        context.output_types[name] = type_
    return context


def build_schema(
    document: Mapping[str, Any],
    *,
    config: OasGraphConfig | None = None,
    fetch: Fetch | None = None,
) -> GraphQLSchema:
    """Build a GraphQL schema with GET operations under `Query` and all others under `Mutation`."""
    context = translate_document(document, config=config, fetch=fetch)
    query: dict[str, GraphQLField] = {}
    mutation: dict[str, GraphQLField] = {}
    for operation in context.operations.values():
        field = _operation_field(operation, context)
        if field is None:
            continue
        fields = mutation if operation.is_mutation else query
        fields[context.names.store(operation.operation_id)] = field
    if not query:
        raise InvalidSchema("The API description has no GET operation with a usable response schema")
    return GraphQLSchema(
        query=GraphQLObjectType("Query", query),
        mutation=GraphQLObjectType("Mutation", mutation) if mutation else None,
    )


def _operation_field(operation: Operation, context: TranslationContext) -> GraphQLField | None:
    type_ = context.output_types.get(operation.response_schema_name or "")
    if type_ is None:
        logger.warning("Skipped operation `%s`, its response has no usable schema", operation.label)
        return None
    if operation.is_mutation:
        args = build_args(
            operation.parameters,
            operation.request_schema_name,
            operation.request_schema_required,
            context=context,
        )
    else:
        args = build_args(operation.parameters, context=context)
    return GraphQLField(
        type_,  # type: ignore[arg-type]
        args=to_graphql_arguments(args),
        resolve=build_resolver(operation, context),
        description=operation.description,
    )


def _build_priority(name: str, context: TranslationContext) -> int:
    schema = context.output_defs.get(name)
    if isinstance(schema, Mapping) and classify(name, schema) == SchemaShape.OBJECT:
        return 0
    return 1
