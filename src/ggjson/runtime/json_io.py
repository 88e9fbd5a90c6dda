from __future__ import annotations

import json
from collections.abc import Mapping, Set

from ggjson.options import DEFAULT_TYPE_TAG
from ggjson.type_registry import qualified_name


def to_json_value(value: object, *, type_tag: str = DEFAULT_TYPE_TAG) -> object:
    """Render a mapped object graph as plain JSON-compatible values.

    Instances become objects whose first member is the type tag (the class'
    qualified name) followed by their public attributes, so the output can be
    read back with fully qualified types enabled.
    """
    if value is None or isinstance(value, (str, bool, int, float)):
        return value
    if isinstance(value, Mapping):
        return {
            str(key): to_json_value(item, type_tag=type_tag)
            for key, item in value.items()
        }
    if isinstance(value, Set):
        return [to_json_value(item, type_tag=type_tag) for item in value]
    if isinstance(value, (list, tuple)) or _is_sequence_like(value):
        return [to_json_value(item, type_tag=type_tag) for item in value]
    attributes = getattr(value, "__dict__", None)
    if isinstance(attributes, dict):
        payload: dict[str, object] = {type_tag: qualified_name(type(value))}
        for key, item in attributes.items():
            if key.startswith("_"):
                continue
            payload[key] = to_json_value(item, type_tag=type_tag)
        return payload
    raise TypeError(f"to_json_value does not support value type {type(value).__name__}")


def _is_sequence_like(value: object) -> bool:
    return hasattr(value, "__iter__") and hasattr(value, "__len__") and not hasattr(value, "__dict__")


def dump_json_pretty(value: object, *, type_tag: str = DEFAULT_TYPE_TAG) -> str:
    return json.dumps(to_json_value(value, type_tag=type_tag), indent=2, sort_keys=False)
