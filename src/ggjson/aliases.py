"""Alias registry: caller controlled short names for instantiable types."""

from __future__ import annotations

import inspect
from collections.abc import Iterable, Iterator, MutableMapping
from types import ModuleType

from ggjson.numbers import Float32, Int32, Int64, UInt32, UInt64
from ggjson.type_registry import is_abstract_class

_DEFAULT_ALIASES: dict[str, object] = {
    "int": Int32,
    "uint": UInt32,
    "float": Float32,
    "long": Int64,
    "ulong": UInt64,
    "int[]": tuple[Int32, ...],
    "float[]": tuple[Float32, ...],
    "string[]": tuple[str, ...],
    "double[]": tuple[float, ...],
    "object[]": tuple[object, ...],
    "bool[]": tuple[bool, ...],
    "boolean[]": tuple[bool, ...],
    "uint[]": tuple[UInt32, ...],
    "long[]": tuple[Int64, ...],
    "ulong[]": tuple[UInt64, ...],
}


class AliasRegistry(MutableMapping[str, object]):
    """Mapping of alias -> type hint.

    Keys are unique and the last registration for a key wins, so registries can
    be layered: scan a module first, then override individual names.
    """

    def __init__(self, pairs: Iterable[tuple[str, object]] = ()) -> None:
        self._types: dict[str, object] = {}
        self.update(pairs)

    @classmethod
    def from_pairs(cls, *pairs: tuple[str, object]) -> AliasRegistry:
        return cls(pairs)

    @classmethod
    def from_module(cls, module: ModuleType) -> AliasRegistry:
        return cls().add_types_in_module(module)

    def __getitem__(self, name: str) -> object:
        return self._types[name]

    def __setitem__(self, name: str, tp: object) -> None:
        self._types[name] = tp

    def __delitem__(self, name: str) -> None:
        del self._types[name]

    def __iter__(self) -> Iterator[str]:
        return iter(self._types)

    def __len__(self) -> int:
        return len(self._types)

    def __repr__(self) -> str:
        return f"AliasRegistry({sorted(self._types)!r})"

    def register(self, name: str, tp: object) -> AliasRegistry:
        self._types[name] = tp
        return self

    def merge(self, other: Iterable[tuple[str, object]] | MutableMapping[str, object]) -> AliasRegistry:
        self.update(other)
        return self

    def add_types_in_module(self, module: ModuleType) -> AliasRegistry:
        """Register every public, concrete class defined in `module` by its simple name."""
        for name, member in inspect.getmembers(module, inspect.isclass):
            if member.__module__ != module.__name__:
                continue
            if name.startswith("_") or member.__name__.startswith("_"):
                continue
            if is_abstract_class(member):
                continue
            self._types[member.__name__] = member
        return self

    def add_default_aliases(self) -> AliasRegistry:
        self._types.update(_DEFAULT_ALIASES)
        return self

    def copy(self) -> AliasRegistry:
        return AliasRegistry(self._types.items())


def default_aliases() -> AliasRegistry:
    return AliasRegistry().add_default_aliases()
