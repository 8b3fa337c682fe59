"""Resolvers for fields backed by API operations.

A resolver does not talk to the network. It maps GraphQL arguments back to the original parameter names, builds a
`PreparedRequest` and hands it to the `fetch` callable of the translation context.
"""

from __future__ import annotations

import re
from collections.abc import Callable, Mapping
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any
from urllib.parse import quote

from oasgraph.core.errors import ResolverError
from oasgraph.openapi.schemas import resolve_pointer

if TYPE_CHECKING:
    from oasgraph.core.naming import NameRegistry
    from oasgraph.translation.context import Operation, TranslationContext

_PATH_PARAMETER_RE = re.compile(r"{([^}]+)}")


@dataclass
class PreparedRequest:
    """HTTP request derived from a GraphQL field invocation."""

    operation_id: str
    method: str
    url: str
    path_parameters: dict[str, Any] = field(default_factory=dict)
    query: dict[str, Any] = field(default_factory=dict)
    headers: dict[str, str] = field(default_factory=dict)
    cookies: dict[str, str] = field(default_factory=dict)
    body: Any = None

    def as_requests_kwargs(self) -> dict[str, Any]:
        """Keyword arguments for `requests.request`."""
        kwargs: dict[str, Any] = {
            "method": self.method,
            "url": self.url,
            "params": self.query,
            "headers": self.headers,
        }
        if self.cookies:
            kwargs["cookies"] = self.cookies
        if self.body is not None:
            kwargs["json"] = self.body
        return kwargs


Resolver = Callable[..., Any]


def build_resolver(
    operation: Operation,
    context: TranslationContext,
    preset_arguments: Mapping[str, str] | None = None,
) -> Resolver:
    """Build a resolver for `operation`.

    `preset_arguments` maps parameter names to JSON pointers into the parent value, the way link parameters
    are supplied from a response body.
    """
    preset = dict(preset_arguments or {})

    def resolve(parent: Any, info: Any, **kwargs: Any) -> Any:
        if context.fetch is None:
            raise ResolverError(f"No fetch function is configured to call operation `{operation.operation_id}`")
        request = prepare_request(operation, context, parent, kwargs, preset)
        return context.fetch(request)

    return resolve


def prepare_request(
    operation: Operation,
    context: TranslationContext,
    parent: Any,
    arguments: Mapping[str, Any],
    preset: Mapping[str, str],
) -> PreparedRequest:
    locations = {
        parameter["name"]: parameter.get("in", "query")
        for parameter in operation.parameters
        if isinstance(parameter.get("name"), str)
    }
    values: dict[str, Any] = {name: resolve_pointer(parent, pointer) for name, pointer in preset.items()}
    body = None
    for key, value in arguments.items():
        original = context.names.get_original(key, key)
        if original == operation.request_schema_name:
            body = desanitize(value, context.names)
        else:
            values[original] = value

    request = PreparedRequest(operation_id=operation.operation_id, method=operation.method.upper(), url="", body=body)
    for name, value in values.items():
        if value is None:
            continue
        location = locations.get(name, "query")
        if location == "path":
            request.path_parameters[name] = value
        elif location == "header":
            request.headers[name] = str(value)
        elif location == "cookie":
            request.cookies[name] = str(value)
        else:
            request.query[name] = value
    request.headers.update(context.config.headers)
    request.query.update(context.config.qs)
    request.url = _build_url(context.config.base_url, operation.path, request.path_parameters)
    return request


def desanitize(value: Any, names: NameRegistry) -> Any:
    """Restore original keys in an input value built from sanitized field names."""
    if isinstance(value, Mapping):
        return {names.get_original(key, key): desanitize(item, names) for key, item in value.items()}
    if isinstance(value, list):
        return [desanitize(item, names) for item in value]
    return value


def _build_url(base_url: str | None, path: str, path_parameters: Mapping[str, Any]) -> str:
    def substitute(match: re.Match[str]) -> str:
        name = match.group(1)
        if name not in path_parameters:
            raise ResolverError(f"Missing value for path parameter `{name}` in `{path}`")
        return quote(str(path_parameters[name]), safe="")

    return (base_url or "").rstrip("/") + _PATH_PARAMETER_RE.sub(substitute, path)
