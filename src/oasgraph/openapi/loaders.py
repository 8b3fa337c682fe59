from __future__ import annotations

import enum
import json
import re
from os import PathLike
from pathlib import Path
from typing import IO, Any

from oasgraph.core.deserialization import deserialize_yaml
from oasgraph.core.errors import LoaderError, LoaderErrorKind

SCHEMA_INVALID_ERROR = "The provided API description does not appear to be a valid OpenAPI document"
SCHEMA_SYNTAX_ERROR = "API description does not appear syntactically valid"
OPENAPI_VERSION_RE = re.compile(r"^3\.[01]\.[0-9](-.+)?$")


class ContentType(enum.Enum):
    """Known content types for API description files."""

    JSON = enum.auto()
    YAML = enum.auto()
    UNKNOWN = enum.auto()


def from_path(path: PathLike | str, *, encoding: str = "utf-8") -> dict[str, Any]:
    """Load an API description from a JSON or YAML file."""
    with open(path, encoding=encoding) as file:
        document = load_content(file.read(), detect_content_type(str(path)))
    return from_dict(document)


def from_file(file: IO[str] | str) -> dict[str, Any]:
    """Load an API description from a file-like object or a string."""
    data = file if isinstance(file, str) else file.read()
    return from_dict(load_content(data, ContentType.UNKNOWN))


def from_dict(document: Any) -> dict[str, Any]:
    """Check that `document` looks like an OpenAPI 3.0 / 3.1 or Swagger 2 description."""
    if not isinstance(document, dict):
        raise LoaderError(LoaderErrorKind.OPEN_API_INVALID_SCHEMA, SCHEMA_INVALID_ERROR)
    version = document.get("openapi")
    if version is not None and not OPENAPI_VERSION_RE.match(str(version)):
        raise LoaderError(
            LoaderErrorKind.OPEN_API_INVALID_SCHEMA,
            f"The provided document uses OpenAPI {version}, which is currently not supported.",
        )
    if version is None and "swagger" not in document:
        raise LoaderError(
            LoaderErrorKind.OPEN_API_UNSPECIFIED_VERSION,
            "Unable to determine the OpenAPI version as it's not specified in the document.",
        )
    return document


def detect_content_type(path: str) -> ContentType:
    suffix = Path(path).suffix.lower()
    if suffix == ".json":
        return ContentType.JSON
    if suffix in (".yaml", ".yml"):
        return ContentType.YAML
    return ContentType.UNKNOWN


def load_content(content: str, content_type: ContentType) -> Any:
    if content_type == ContentType.JSON:
        return _load_json(content)
    if content_type == ContentType.YAML:
        return _load_yaml(content)
    # Unknown: JSON first, then YAML
    try:
        return _load_json(content)
    except LoaderError:
        return _load_yaml(content)


def _load_json(content: str) -> Any:
    try:
        return json.loads(content)
    except json.JSONDecodeError as exc:
        raise LoaderError(
            LoaderErrorKind.SYNTAX_ERROR,
            SCHEMA_SYNTAX_ERROR,
            extras=[entry for entry in str(exc).splitlines() if entry],
        ) from exc


def _load_yaml(content: str) -> Any:
    import yaml

    try:
        return deserialize_yaml(content)
    except yaml.YAMLError as exc:
        raise LoaderError(
            LoaderErrorKind.SYNTAX_ERROR,
            SCHEMA_SYNTAX_ERROR,
            extras=[entry for entry in str(exc).splitlines() if entry],
        ) from exc
