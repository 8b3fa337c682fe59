"""Collect schema definitions and operation data from an OpenAPI description."""

from __future__ import annotations

import logging
from collections.abc import Mapping
from typing import Any

from oasgraph.config import OasGraphConfig
from oasgraph.core import INPUT_SUFFIX
from oasgraph.core.naming import beautify
from oasgraph.openapi.schemas import is_reference, ref_name
from oasgraph.translation.context import Fetch, Link, Operation, TranslationContext

logger = logging.getLogger(__name__)

HTTP_METHODS = ("get", "put", "post", "delete", "options", "head", "patch", "trace")
JSON_MEDIA_TYPES = ("application/json", "application/*+json", "*/*")


def get_definitions(document: Mapping[str, Any]) -> dict[str, Any]:
    """Named schemas of an OpenAPI 3 (`components.schemas`) or Swagger 2 (`definitions`) document."""
    if "swagger" in document:
        return dict(document.get("definitions", {}))
    return dict(document.get("components", {}).get("schemas", {}))


def preprocess(
    document: Mapping[str, Any],
    config: OasGraphConfig | None = None,
    fetch: Fetch | None = None,
) -> TranslationContext:
    """Create a translation context for `document`.

    Every named schema is available under its own name in the output definitions and under `<name>Input` in the
    input definitions. Inline response and request body schemas are registered under names derived from the operation.
    """
    context = TranslationContext.from_config(config, fetch=fetch)
    for name, schema in get_definitions(document).items():
        add_definition(context, name, schema)

    for path, path_item in document.get("paths", {}).items():
        shared_parameters = path_item.get("parameters", [])
        for method in HTTP_METHODS:
            definition = path_item.get(method)
            if definition is None:
                continue
            operation = _make_operation(context, document, path, method, definition, shared_parameters)
            if operation.operation_id in context.operations:
                logger.warning("Duplicate operation id `%s` in `%s`", operation.operation_id, operation.label)
            context.operations[operation.operation_id] = operation
    return context


def add_definition(context: TranslationContext, name: str, schema: Any) -> None:
    context.output_defs[name] = schema
    context.input_defs[name + INPUT_SUFFIX] = schema


def _make_operation(
    context: TranslationContext,
    document: Mapping[str, Any],
    path: str,
    method: str,
    definition: Mapping[str, Any],
    shared_parameters: list[dict[str, Any]],
) -> Operation:
    operation_id = definition.get("operationId") or _synthesize_operation_id(method, path)
    operation = Operation(
        operation_id=operation_id,
        method=method,
        path=path,
        parameters=_merge_parameters(shared_parameters, definition.get("parameters", [])),
        description=definition.get("description") or definition.get("summary"),
    )
    response = _get_success_response(definition)
    if response is not None:
        schema = _get_json_schema(response) if "content" in response else response.get("schema")
        if schema is not None:
            operation.response_schema_name = _schema_name(context, schema, f"{operation_id}Response")
        for link_name, link in response.get("links", {}).items():
            operation.links[link_name] = Link.from_definition(link_name, link)

    if "swagger" in document:
        body = next((p for p in operation.parameters if p.get("in") == "body"), None)
        if body is not None:
            operation.parameters.remove(body)
            schema = body.get("schema")
            required = bool(body.get("required", False))
        else:
            schema, required = None, False
    else:
        request_body = definition.get("requestBody", {})
        schema = _get_json_schema(request_body)
        required = bool(request_body.get("required", False))
    if schema is not None:
        name = _schema_name(context, schema, f"{operation_id}Request")
        operation.request_schema_name = name + INPUT_SUFFIX
        operation.request_schema_required = required
    return operation


def _merge_parameters(shared: list[dict[str, Any]], own: list[dict[str, Any]]) -> list[dict[str, Any]]:
    """Path-level parameters overridden by operation-level ones with the same name and location."""
    merged = {(parameter.get("name"), parameter.get("in")): parameter for parameter in shared}
    for parameter in own:
        merged[(parameter.get("name"), parameter.get("in"))] = parameter
    return [_normalize_parameter(parameter) for parameter in merged.values()]


def _normalize_parameter(parameter: dict[str, Any]) -> dict[str, Any]:
    # Swagger 2 declares `type` on the parameter itself
    if "schema" not in parameter and "type" in parameter:
        return {**parameter, "schema": {"type": parameter["type"]}}
    return dict(parameter)


def _get_success_response(definition: Mapping[str, Any]) -> dict[str, Any] | None:
    for status_code, response in definition.get("responses", {}).items():
        if str(status_code).startswith("2") and isinstance(response, dict):
            return response
    return None


def _get_json_schema(container: Mapping[str, Any]) -> Any:
    content = container.get("content", {})
    for media_type in JSON_MEDIA_TYPES:
        if media_type in content:
            return content[media_type].get("schema")
    for media_type, definition in content.items():
        if media_type.endswith("json"):
            return definition.get("schema")
    return None


def _schema_name(context: TranslationContext, schema: Any, fallback: str) -> str:
    if is_reference(schema):
        return ref_name(schema["$ref"])
    add_definition(context, fallback, schema)
    return fallback


def _synthesize_operation_id(method: str, path: str) -> str:
    return beautify(f"{method} {path}")
