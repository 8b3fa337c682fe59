from __future__ import annotations

from collections.abc import Callable, Mapping
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any

from oasgraph.config import OasGraphConfig
from oasgraph.core.errors import on_missing_operation
from oasgraph.core.naming import NameRegistry

if TYPE_CHECKING:
    from graphql import GraphQLType

    from oasgraph.resolvers import PreparedRequest

Fetch = Callable[["PreparedRequest"], Any]


@dataclass
class Link:
    """OpenAPI link from a response to another operation."""

    name: str
    operation_id: str | None
    operation_ref: str | None
    # Target parameter name -> runtime expression, e.g. `$response.body#/id`
    parameters: dict[str, str]
    description: str | None

    __slots__ = ("name", "operation_id", "operation_ref", "parameters", "description")

    @classmethod
    def from_definition(cls, name: str, definition: Mapping[str, Any]) -> Link:
        return cls(
            name=name,
            operation_id=definition.get("operationId"),
            operation_ref=definition.get("operationRef"),
            parameters=dict(definition.get("parameters", {})),
            description=definition.get("description"),
        )


@dataclass
class Operation:
    """Operation data the translator needs, produced by preprocessing."""

    operation_id: str
    method: str
    path: str
    parameters: list[dict[str, Any]]
    response_schema_name: str | None = None
    # Key in the input namespace, i.e. already carrying the `Input` suffix
    request_schema_name: str | None = None
    request_schema_required: bool = False
    links: dict[str, Link] = field(default_factory=dict)
    description: str | None = None

    @property
    def is_mutation(self) -> bool:
        return self.method.lower() != "get"

    @property
    def label(self) -> str:
        return f"{self.method.upper()} {self.path}"


@dataclass
class TranslationContext:
    """State of a single translation run.

    Output and input types are cached separately: GraphQL does not accept an object type as an argument type,
    so the same schema can have an entry in both namespaces.
    """

    output_types: dict[str, GraphQLType | None] = field(default_factory=dict)
    input_types: dict[str, GraphQLType | None] = field(default_factory=dict)
    output_defs: dict[str, Any] = field(default_factory=dict)
    input_defs: dict[str, Any] = field(default_factory=dict)
    names: NameRegistry = field(default_factory=NameRegistry)
    operations: dict[str, Operation] = field(default_factory=dict)
    config: OasGraphConfig = field(default_factory=OasGraphConfig)
    # Resolvers hand prepared requests to this callable
    fetch: Fetch | None = None

    @classmethod
    def from_config(cls, config: OasGraphConfig | None = None, **kwargs: Any) -> TranslationContext:
        config = config or OasGraphConfig()
        return cls(config=config, names=NameRegistry(strict=config.strict_names), **kwargs)

    @property
    def max_iterations(self) -> int:
        return self.config.max_iterations

    def types_for(self, is_mutation: bool) -> dict[str, GraphQLType | None]:
        return self.input_types if is_mutation else self.output_types

    def get_operation(self, operation_id: str) -> Operation:
        try:
            return self.operations[operation_id]
        except KeyError:
            on_missing_operation(operation_id, self.operations)
