from __future__ import annotations

import os
from string import Template
from typing import Any

from oasgraph.config._error import ConfigError


def resolve(value: Any) -> Any:
    """Expand `${NAME}` placeholders of a string option from the process environment."""
    if not isinstance(value, str):
        return value
    try:
        return Template(value).substitute(os.environ)
    except KeyError as exc:
        raise ConfigError(f"Missing environment variable `{exc.args[0]}` in `{value}`") from None
    except ValueError:
        raise ConfigError(f"Invalid placeholder in `{value}`") from None


def resolve_mapping(values: dict[str, Any]) -> dict[str, str]:
    """Header and query string tables, with every value as an expanded string."""
    return {name: str(resolve(value)) for name, value in values.items()}
