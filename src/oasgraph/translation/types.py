"""Recursive translation of JSON Schema nodes into GraphQL types.

Object types are registered in the context cache before their fields are computed. Fields are a thunk evaluated by
`graphql-core` on first access, therefore a self-referential schema resolves through the cache instead of recursing
forever. The `iteration` counter bounds nesting that is not broken by the cache, e.g. deeply nested inline schemas.
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Mapping
from typing import TYPE_CHECKING, Any

from graphql import (
    GraphQLField,
    GraphQLInputField,
    GraphQLInputObjectType,
    GraphQLList,
    GraphQLNonNull,
    GraphQLObjectType,
)

from oasgraph.core import ARRAY_ITEMS_NAME, BODY_POINTER_MARKER, INPUT_SUFFIX
from oasgraph.core.errors import InvalidLink, InvalidSchema, IterationLimitExceeded, SchemaNameCollision
from oasgraph.openapi.schemas import SchemaShape, classify, declared_type, is_reference, ref_name
from oasgraph.translation.arguments import build_args, to_graphql_arguments
from oasgraph.translation.enums import resolve_enum
from oasgraph.translation.scalars import get_scalar_type

if TYPE_CHECKING:
    from graphql import GraphQLType

    from oasgraph.translation.context import Link, TranslationContext

logger = logging.getLogger(__name__)


def translate_type(
    name: str,
    schema: Any,
    context: TranslationContext,
    links: Mapping[str, Link] | None = None,
    iteration: int = 0,
    is_mutation: bool = False,
) -> GraphQLType | None:
    """Translate a schema node into a GraphQL type.

    Returns `None` for schemas without a usable GraphQL counterpart, such as objects without properties.
    Links are attached only to the fields of an object built at `iteration == 0`.
    """
    if iteration >= context.max_iterations:
        raise IterationLimitExceeded(name, context.max_iterations)
    if not isinstance(schema, Mapping):
        raise InvalidSchema.missing_definition(name, schema)

    shape = classify(name, schema)
    if shape == SchemaShape.OBJECT:
        return _object_type(name, schema, context, links or {}, iteration, is_mutation)
    if shape == SchemaShape.ENUM:
        return resolve_enum(context.names.store(name), context, schema["enum"])
    if shape == SchemaShape.EMPTY_OBJECT:
        logger.warning("Skipped creation of (input) object type `%s`, which has no properties", name)
        return None
    if shape == SchemaShape.ARRAY:
        return _list_type(name, schema, context, iteration, is_mutation)
    return get_scalar_type(declared_type(schema))


def resolve_reference(name: str, context: TranslationContext, is_mutation: bool, iteration: int) -> GraphQLType | None:
    """Return the cached type for a referenced schema or translate its definition.

    Input types are keyed by `name + "Input"` in both the cache and the definitions.
    """
    if is_mutation:
        key = name + INPUT_SUFFIX
        types, definitions = context.input_types, context.input_defs
    else:
        key = name
        types, definitions = context.output_types, context.output_defs
    if key in types:
        return types[key]
    type_ = translate_type(key, definitions.get(key), context, iteration=iteration + 1, is_mutation=is_mutation)
    types[key] = type_
    return type_


def _object_type(
    name: str,
    schema: Mapping[str, Any],
    context: TranslationContext,
    links: Mapping[str, Link],
    iteration: int,
    is_mutation: bool,
) -> GraphQLObjectType | GraphQLInputObjectType:
    types = context.types_for(is_mutation)
    if name in types:
        return types[name]  # type: ignore[return-value]

    def fields() -> dict[str, Any]:
        return create_fields(schema, context, links, iteration, is_mutation)

    type_: GraphQLObjectType | GraphQLInputObjectType
    if is_mutation:
        type_name = name if name.endswith(INPUT_SUFFIX) else name + INPUT_SUFFIX
        type_ = GraphQLInputObjectType(
            name=context.names.store(type_name), fields=fields, description=schema.get("description")
        )
    else:
        type_ = GraphQLObjectType(name=context.names.store(name), fields=fields, description=schema.get("description"))
    types[name] = type_
    return type_


def _list_type(
    name: str, schema: Mapping[str, Any], context: TranslationContext, iteration: int, is_mutation: bool
) -> GraphQLList | None:
    if "items" not in schema:
        raise InvalidSchema(f"Items property missing in array schema definition `{name}`", name=name)
    items = schema["items"]
    if is_reference(items):
        item_type = resolve_reference(ref_name(items["$ref"]), context, is_mutation, iteration)
    else:
        if not isinstance(items, Mapping):
            raise InvalidSchema.missing_definition(name, items)
        shape = classify(items.get("title", name), items)
        # Untitled enum items take the owner name so every array gets its own enum type
        items_name = items.get("title", f"{name}Items" if shape == SchemaShape.ENUM else ARRAY_ITEMS_NAME)
        if shape == SchemaShape.SCALAR:
            item_type = get_scalar_type(declared_type(items))
        else:
            item_type = translate_type(items_name, items, context, iteration=iteration + 1, is_mutation=is_mutation)
    if item_type is None:
        return None
    return GraphQLList(item_type)


def create_fields(
    schema: Mapping[str, Any],
    context: TranslationContext,
    links: Mapping[str, Link],
    iteration: int,
    is_mutation: bool,
) -> dict[str, GraphQLField | GraphQLInputField]:
    """Fields of an (input) object type, in property declaration order."""
    fields: dict[str, GraphQLField | GraphQLInputField] = {}
    required = set(schema.get("required", ()))
    # Link targets are looked up before any property is translated
    link_fields: dict[str, GraphQLField] = {}
    if iteration == 0 and not is_mutation:
        for link_name, link in links.items():
            link_fields[context.names.store(link_name)] = _link_field(link_name, link, context)

    for property_name, property_schema in schema["properties"].items():
        if is_reference(property_schema):
            type_ = resolve_reference(ref_name(property_schema["$ref"]), context, is_mutation, iteration)
        else:
            # An inline schema is cached under the property name, which may clash with a schema definition
            if property_name in context.output_defs or property_name in context.input_defs:
                if context.config.fail_on_name_collision:
                    raise SchemaNameCollision(property_name)
                logger.warning("Creating type for property with colliding name `%s`", property_name)
            type_ = translate_type(
                property_name, property_schema, context, iteration=iteration + 1, is_mutation=is_mutation
            )

        if type_ is None:
            continue

        sane_name = context.names.store(property_name)
        description = property_schema.get("description") if isinstance(property_schema, Mapping) else None
        if is_mutation:
            if property_name in required:
                type_ = GraphQLNonNull(type_)
            fields[sane_name] = GraphQLInputField(type_, description=description)  # type: ignore[arg-type]
        else:
            resolve = _property_resolver(property_name) if sane_name != property_name else None
            fields[sane_name] = GraphQLField(type_, resolve=resolve, description=description)  # type: ignore[arg-type]

    fields.update(link_fields)
    return fields


def _link_field(link_name: str, link: Link, context: TranslationContext) -> GraphQLField:
    from oasgraph.resolvers import build_resolver

    if link.operation_id is None:
        raise InvalidLink(
            f"Link `{link_name}` has no `operationId`, `operationRef` links are not supported", link=link_name
        )
    operation = context.get_operation(link.operation_id)

    # Values taken from the parent response body are not exposed as arguments
    preset: dict[str, str] = {}
    for parameter, expression in link.parameters.items():
        if isinstance(expression, str) and BODY_POINTER_MARKER in expression:
            preset[parameter] = expression.split(BODY_POINTER_MARKER, 1)[1]
        else:
            logger.debug("Link `%s`: parameter `%s` is not taken from the response body", link_name, parameter)
    remaining = [parameter for parameter in operation.parameters if parameter.get("name") not in preset]

    resolver = build_resolver(operation, context, preset)
    args = build_args(remaining, context=context)

    response_type = context.output_types.get(operation.response_schema_name or "")
    if response_type is None:
        raise InvalidLink(
            f"Link `{link_name}` targets operation `{operation.operation_id}` without a translated response type",
            link=link_name,
        )
    return GraphQLField(
        response_type,  # type: ignore[arg-type]
        args=to_graphql_arguments(args),
        resolve=resolver,
        description=link.description,
    )


def _property_resolver(property_name: str) -> Callable[..., Any]:
    def resolve(parent: Any, info: Any, **kwargs: Any) -> Any:
        if isinstance(parent, Mapping):
            return parent.get(property_name)
        return getattr(parent, property_name, None)

    return resolve
