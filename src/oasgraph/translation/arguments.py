from __future__ import annotations

import logging
from collections.abc import Iterable, Mapping
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any

from graphql import GraphQLArgument, GraphQLNonNull, GraphQLString

from oasgraph.openapi.schemas import declared_type
from oasgraph.translation.scalars import get_scalar_type

if TYPE_CHECKING:
    from graphql import GraphQLInputType

    from oasgraph.translation.context import TranslationContext

logger = logging.getLogger(__name__)

BODY_LOCATION = "body"


@dataclass
class Argument:
    """Argument of a generated field.

    `original_name` is the parameter name from the API description, the key in the argument map is its sanitized form.
    """

    type: GraphQLInputType
    required: bool
    description: str | None
    original_name: str
    location: str

    __slots__ = ("type", "required", "description", "original_name", "location")

    def as_graphql(self) -> GraphQLArgument:
        return GraphQLArgument(self.type, description=self.description)


def build_args(
    parameters: Iterable[Mapping[str, Any]],
    request_schema_name: str | None = None,
    request_schema_required: bool = False,
    *,
    context: TranslationContext,
) -> dict[str, Argument]:
    """Build field arguments from OpenAPI parameters and an optional request body schema.

    Parameters that are preset via configured headers or query values are not exposed.
    """
    args: dict[str, Argument] = {}
    for parameter in parameters:
        name = parameter.get("name")
        if not isinstance(name, str):
            logger.debug("Ignore parameter without a name: %r", parameter)
            continue
        if context.config.is_preset(name):
            logger.debug("Ignore parameter `%s` provided via configuration", name)
            continue
        type_ = _parameter_type(parameter)
        required = bool(parameter.get("required", False))
        sane_name = context.names.store(name)
        args[sane_name] = Argument(
            type=GraphQLNonNull(type_) if required else type_,
            required=required,
            description=parameter.get("description"),
            original_name=name,
            location=parameter.get("in", "query"),
        )

    if request_schema_name is not None:
        body_type = _request_body_type(request_schema_name, context)
        if body_type is not None:
            sane_name = context.names.store(request_schema_name)
            definition = context.input_defs.get(request_schema_name) or {}
            args[sane_name] = Argument(
                type=GraphQLNonNull(body_type) if request_schema_required else body_type,
                required=request_schema_required,
                description=definition.get("description"),
                original_name=request_schema_name,
                location=BODY_LOCATION,
            )
    return args


def to_graphql_arguments(args: Mapping[str, Argument]) -> dict[str, GraphQLArgument]:
    return {name: argument.as_graphql() for name, argument in args.items()}


def _parameter_type(parameter: Mapping[str, Any]) -> GraphQLInputType:
    # Objects and arrays are not supported as simple parameters, they are passed as strings
    schema = parameter.get("schema")
    if isinstance(schema, Mapping):
        type_ = declared_type(schema)
        if type_ not in ("object", "array"):
            scalar = get_scalar_type(type_)
            if scalar is not None:
                return scalar
    return GraphQLString


def _request_body_type(name: str, context: TranslationContext) -> GraphQLInputType | None:
    from oasgraph.translation.types import translate_type

    if name in context.input_types:
        return context.input_types[name]  # type: ignore[return-value]
    return translate_type(name, context.input_defs.get(name), context, is_mutation=True)  # type: ignore[return-value]
