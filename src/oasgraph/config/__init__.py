from __future__ import annotations

import os
import sys
from dataclasses import dataclass, fields
from os import PathLike
from pathlib import Path
from typing import Any

from oasgraph.config._env import resolve, resolve_mapping
from oasgraph.config._error import ConfigError
from oasgraph.core import DEFAULT_MAX_ITERATIONS

if sys.version_info < (3, 11):
    import tomli
else:
    import tomllib as tomli

__all__ = ["OasGraphConfig", "ConfigError", "CONFIG_FILE_NAME"]

CONFIG_FILE_NAME = "oasgraph.toml"


@dataclass(repr=False)
class OasGraphConfig:
    """Options shared by every step of a translation run."""

    base_url: str | None
    # Header values sent with every request; these names are never exposed as arguments
    headers: dict[str, str]
    # Query string values sent with every request; these names are never exposed as arguments
    qs: dict[str, str]
    max_iterations: int
    strict_names: bool
    fail_on_name_collision: bool
    _config_path: str | None

    __slots__ = (
        "base_url",
        "headers",
        "qs",
        "max_iterations",
        "strict_names",
        "fail_on_name_collision",
        "_config_path",
    )

    def __init__(
        self,
        *,
        base_url: str | None = None,
        headers: dict[str, str] | None = None,
        qs: dict[str, str] | None = None,
        max_iterations: int = DEFAULT_MAX_ITERATIONS,
        strict_names: bool = False,
        fail_on_name_collision: bool = False,
    ) -> None:
        self.base_url = base_url
        self.headers = headers or {}
        self.qs = qs or {}
        self.max_iterations = max_iterations
        self.strict_names = strict_names
        self.fail_on_name_collision = fail_on_name_collision
        self._config_path = None

    def __repr__(self) -> str:
        # Only options that differ from the defaults
        default = OasGraphConfig()
        changed = [
            f"{field.name}={getattr(self, field.name)!r}"
            for field in fields(self)
            if not field.name.startswith("_") and getattr(self, field.name) != getattr(default, field.name)
        ]
        return f"{self.__class__.__name__}({', '.join(changed)})"

    @property
    def config_path(self) -> str | None:
        """Filesystem path to the loaded configuration file, if any."""
        return self._config_path

    def is_preset(self, name: str) -> bool:
        """Whether a parameter is supplied by configuration instead of an argument."""
        return name in self.headers or name in self.qs

    @classmethod
    def discover(cls) -> OasGraphConfig:
        """Find `oasgraph.toml` in the current directory or its parents.

        The search stops at a directory containing `.git` or at the filesystem root.
        Without a config file the default configuration is returned.
        """
        current_dir = os.getcwd()
        while True:
            candidate = os.path.join(current_dir, CONFIG_FILE_NAME)
            if os.path.isfile(candidate):
                return cls.from_path(candidate)
            if os.path.isdir(os.path.join(current_dir, ".git")):
                break
            parent = os.path.dirname(current_dir)
            if parent == current_dir:
                break
            current_dir = parent
        return cls()

    @classmethod
    def from_path(cls, path: PathLike | str) -> OasGraphConfig:
        """Load configuration from a file path."""
        with open(path, encoding="utf-8") as fd:
            config = cls.from_str(fd.read())
            config._config_path = str(Path(path).resolve())
            return config

    @classmethod
    def from_str(cls, data: str) -> OasGraphConfig:
        """Parse configuration from a TOML string."""
        parsed = tomli.loads(data)
        return cls.from_dict(parsed)

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> OasGraphConfig:
        """Create a config instance from a dictionary."""
        from jsonschema.exceptions import ValidationError

        from oasgraph.config._validator import CONFIG_VALIDATOR

        try:
            CONFIG_VALIDATOR.validate(data)
        except ValidationError as exc:
            raise ConfigError.from_validation_error(exc) from None
        return cls(
            base_url=resolve(data.get("base-url")),
            headers=resolve_mapping(data.get("headers", {})),
            qs=resolve_mapping(data.get("qs", {})),
            max_iterations=data.get("max-iterations", DEFAULT_MAX_ITERATIONS),
            strict_names=data.get("strict-names", False),
            fail_on_name_collision=data.get("fail-on-name-collision", False),
        )
