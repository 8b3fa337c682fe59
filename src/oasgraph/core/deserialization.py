from __future__ import annotations

from typing import Any, BinaryIO, TextIO

import yaml

_STR_TAG = "tag:yaml.org,2002:str"
_MAP_TAG = "tag:yaml.org,2002:map"
_TIMESTAMP_TAG = "tag:yaml.org,2002:timestamp"


class DescriptionLoader(getattr(yaml, "CSafeLoader", yaml.SafeLoader)):  # type: ignore[misc]
    """Safe YAML loader for API descriptions.

    Mapping keys that YAML would resolve to other types (`200`, `on`) and date-like scalars stay strings, so status
    codes and enum literals reach the translator as written.
    """

    yaml_implicit_resolvers = {
        first: [(tag, pattern) for tag, pattern in resolvers if tag != _TIMESTAMP_TAG]
        for first, resolvers in yaml.SafeLoader.yaml_implicit_resolvers.items()
    }


def _construct_mapping(loader: yaml.SafeLoader, node: yaml.MappingNode) -> dict[Any, Any]:
    loader.flatten_mapping(node)
    mapping = {}
    for key_node, value_node in node.value:
        key = loader.construct_object(key_node, deep=True) if key_node.tag == _STR_TAG else key_node.value
        mapping[key] = loader.construct_object(value_node, deep=True)
    return mapping


DescriptionLoader.add_constructor(_MAP_TAG, _construct_mapping)


def deserialize_yaml(stream: str | bytes | TextIO | BinaryIO) -> Any:
    return yaml.load(stream, DescriptionLoader)
