from __future__ import annotations

from difflib import get_close_matches
from typing import TYPE_CHECKING

from oasgraph.core.errors import OasGraphError

if TYPE_CHECKING:
    from collections.abc import Callable

    from jsonschema import ValidationError

_ARTICLES = {"array": "an", "integer": "an", "object": "an"}


class ConfigError(OasGraphError):
    """Configuration file content is not valid."""

    @classmethod
    def from_validation_error(cls, error: ValidationError) -> ConfigError:
        formatter = _FORMATTERS.get(str(error.validator))
        if formatter is None:
            return cls(error.message)
        return cls(formatter(error))


def section_name(path: list[int | str]) -> str:
    """TOML table that holds the value at `path`, e.g. `[headers]`."""
    if not path:
        return "root"
    return "[" + ".".join(map(str, path)) + "]"


def _report(path: list[int | str], title: str, lines: list[str]) -> str:
    body = "\n".join(f"  - {line}" for line in lines)
    return f"Error in {section_name(path)} section:\n  {title}:\n\n{body}"


def _key(error: ValidationError) -> str:
    return str(error.path[-1]) if error.path else "value"


def _describe_type(expected: str | list[str]) -> str:
    if isinstance(expected, list):
        return "one of: " + " or ".join(expected)
    return f"{_ARTICLES.get(expected, 'a')} {expected}"


def _type_error(error: ValidationError) -> str:
    actual = f"{type(error.instance).__name__}: {error.instance}"
    line = f"'{_key(error)}' -> Must be {_describe_type(error.validator_value)}, but got {actual}"
    return _report(list(error.path)[:-1], "Type error", [line])


def _minimum_error(error: ValidationError) -> str:
    line = f"'{_key(error)}' -> Must be at least {error.validator_value}, but got {error.instance}."
    return _report(list(error.path)[:-1], "Value too low", [line])


def _unknown_keys_error(error: ValidationError) -> str:
    known = list(error.schema.get("properties", {}))
    lines = []
    for key in sorted(set(error.instance) - set(known)):
        suggestion = get_close_matches(key, known, n=1)
        lines.append(f"'{key}' -> Did you mean '{suggestion[0]}'?" if suggestion else f"'{key}'")
    path = list(error.path)
    listing = ", ".join(f"'{key}'" for key in known)
    report = _report(path, "Unknown properties", lines)
    return f"{report}\n\nValid properties for {section_name(path)} are: {listing}."


_FORMATTERS: dict[str, Callable[[ValidationError], str]] = {
    "type": _type_error,
    "minimum": _minimum_error,
    "additionalProperties": _unknown_keys_error,
}
