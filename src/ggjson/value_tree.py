"""Immutable JSON value tree consumed by the mapper.

The tree is a closed union of frozen dataclasses. Numbers keep their source
lexeme so the mapper can pick the representation a target slot asks for, and
object members keep their source order (duplicates included).
"""

from __future__ import annotations

import json
from dataclasses import dataclass
from typing import TypeAlias

from ggjson.exceptions import ParseError


@dataclass(frozen=True)
class JsonNull:
    pass


@dataclass(frozen=True)
class JsonBool:
    value: bool


@dataclass(frozen=True)
class JsonNumber:
    lexeme: str


@dataclass(frozen=True)
class JsonString:
    value: str


@dataclass(frozen=True)
class JsonArray:
    items: tuple[JsonNode, ...] = ()


@dataclass(frozen=True)
class JsonObject:
    members: tuple[tuple[str, JsonNode], ...] = ()

    def get(self, key: str) -> JsonNode | None:
        for name, node in self.members:
            if name == key:
                return node
        return None

    def keys(self) -> list[str]:
        return [name for name, _ in self.members]


JsonNode: TypeAlias = JsonNull | JsonBool | JsonNumber | JsonString | JsonArray | JsonObject

_NODE_TYPES = (JsonNull, JsonBool, JsonNumber, JsonString, JsonArray, JsonObject)


def _reject_constant(name: str) -> object:
    raise ParseError(f"Invalid JSON constant: {name}")


def _object_from_pairs(pairs: list[tuple[str, object]]) -> JsonObject:
    return JsonObject(tuple((key, to_node(value)) for key, value in pairs))


def to_node(value: object) -> JsonNode:
    """Convert a decoded python value (or an already built node) into a node."""
    if isinstance(value, _NODE_TYPES):
        return value
    if value is None:
        return JsonNull()
    if isinstance(value, bool):
        return JsonBool(value)
    if isinstance(value, (int, float)):
        return JsonNumber(json.dumps(value))
    if isinstance(value, str):
        return JsonString(value)
    if isinstance(value, (list, tuple)):
        return JsonArray(tuple(to_node(item) for item in value))
    if isinstance(value, dict):
        return JsonObject(tuple((str(key), to_node(item)) for key, item in value.items()))
    raise TypeError(f"to_node does not support value type {type(value).__name__}")


def parse_value_tree(text: str | bytes) -> JsonNode:
    """Parse canonical JSON text, raising ParseError on malformed input."""
    try:
        raw = json.loads(
            text,
            parse_int=JsonNumber,
            parse_float=JsonNumber,
            parse_constant=_reject_constant,
            object_pairs_hook=_object_from_pairs,
        )
    except json.JSONDecodeError as exc:
        raise ParseError(
            f"Invalid JSON: {exc.msg} (line {exc.lineno} column {exc.colno})",
            line=exc.lineno,
            column=exc.colno,
        ) from exc
    except UnicodeDecodeError as exc:
        raise ParseError(f"Invalid JSON encoding: {exc}") from exc
    return to_node(raw)
