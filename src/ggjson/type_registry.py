"""Type descriptors: the introspection facade the mapper works against.

A descriptor classifies a python type hint (`Hero`, `list[Int32]`,
`tuple[str, ...]`, `Person | None`, ...) and answers the questions the mapper
needs: is it concrete, what are its elements, can it be default constructed and
which public members can be assigned.
"""

from __future__ import annotations

import collections.abc
import inspect
import types
import typing
from dataclasses import dataclass, field, replace
from enum import StrEnum
from typing import Annotated, Any, ClassVar, Union, get_args, get_origin

_MISSING = object()

_ABSTRACT_SEQUENCES: frozenset[type] = frozenset(
    {
        collections.abc.Iterable,
        collections.abc.Collection,
        collections.abc.Sequence,
        collections.abc.MutableSequence,
    }
)
_ABSTRACT_SETS: frozenset[type] = frozenset(
    {
        collections.abc.Set,
        collections.abc.MutableSet,
    }
)
_COLLECTION_BASES: tuple[type, ...] = (
    collections.abc.MutableSequence,
    collections.abc.MutableSet,
    list,
    set,
    frozenset,
    collections.deque,
)


class TypeKind(StrEnum):
    UNSPECIFIED = "unspecified"
    SCALAR = "scalar"
    ARRAY = "array"
    TUPLE = "tuple"
    COLLECTION = "collection"
    MAPPING = "mapping"
    OBJECT = "object"
    ABSTRACT = "abstract"


class MemberKind(StrEnum):
    PROPERTY = "property"
    FIELD = "field"


@dataclass(frozen=True)
class MemberInfo:
    name: str
    declared_type: object
    kind: MemberKind


@dataclass(frozen=True)
class TypeDescriptor:
    hint: object
    kind: TypeKind
    origin: type | None = None
    args: tuple[object, ...] = field(default_factory=tuple)
    optional: bool = False

    @property
    def is_concrete(self) -> bool:
        return self.kind not in (TypeKind.UNSPECIFIED, TypeKind.ABSTRACT)

    @property
    def element_type(self) -> object:
        if self.kind in (TypeKind.ARRAY, TypeKind.COLLECTION) and self.args:
            return self.args[0]
        if self.kind is TypeKind.MAPPING and len(self.args) == 2:
            return self.args[1]
        return None

    @property
    def is_default_constructible(self) -> bool:
        if self.origin is None or not self.is_concrete:
            return False
        try:
            signature = inspect.signature(self.origin)
        except (TypeError, ValueError):
            # builtins without an introspectable signature
            return True
        return all(
            parameter.default is not parameter.empty
            or parameter.kind in (parameter.VAR_POSITIONAL, parameter.VAR_KEYWORD)
            for parameter in signature.parameters.values()
        )

    @property
    def name(self) -> str:
        if self.origin is not None and self.kind is TypeKind.OBJECT:
            return self.origin.__name__
        return _hint_name(self.hint)

    @property
    def qualified_name(self) -> str:
        if self.origin is None:
            return _hint_name(self.hint)
        return qualified_name(self.origin)

    def find_member(self, name: str, instance: object = None) -> MemberInfo | None:
        """Find a settable public member: property with a setter first, then field."""
        cls = self.origin
        if cls is None or not name or name.startswith("_"):
            return None
        try:
            attribute = inspect.getattr_static(cls, name)
        except AttributeError:
            attribute = _MISSING
        if isinstance(attribute, property):
            if attribute.fset is None:
                return None
            return MemberInfo(name, _property_type(attribute), MemberKind.PROPERTY)
        hints = class_type_hints(cls)
        if name in hints:
            return MemberInfo(name, hints[name], MemberKind.FIELD)
        if _declares_class_var(cls, name):
            return None
        if isinstance(attribute, types.MemberDescriptorType):
            # __slots__ entry without an annotation
            return MemberInfo(name, None, MemberKind.FIELD)
        instance_vars = getattr(instance, "__dict__", None)
        if isinstance(instance_vars, dict) and name in instance_vars:
            return MemberInfo(name, _inferred_type(instance_vars[name]), MemberKind.FIELD)
        if attribute is not _MISSING and not _is_behaviour(attribute):
            return MemberInfo(name, _inferred_type(attribute), MemberKind.FIELD)
        return None


def qualified_name(tp: type) -> str:
    return f"{tp.__module__}:{tp.__qualname__}"


def _hint_name(hint: object) -> str:
    if hint is None:
        return "unspecified"
    if isinstance(hint, type):
        return hint.__name__
    return str(hint).replace("typing.", "")


def _is_behaviour(attribute: object) -> bool:
    return (
        callable(attribute)
        or isinstance(attribute, (staticmethod, classmethod))
        or hasattr(attribute, "__get__")
    )


def _inferred_type(value: object) -> object:
    # Scalars carry their numeric kind over; containers and None stay dynamic.
    if isinstance(value, (bool, int, float, str)):
        return type(value)
    return None


def _property_type(prop: property) -> object:
    try:
        return typing.get_type_hints(prop.fget).get("return")
    except (NameError, TypeError, AttributeError):
        return None


def _is_class_var(hint: object) -> bool:
    return hint is ClassVar or get_origin(hint) is ClassVar


def _declares_class_var(cls: type, name: str) -> bool:
    for base in cls.__mro__:
        try:
            annotations = inspect.get_annotations(base)
        except (NameError, TypeError):
            continue
        if name not in annotations:
            continue
        annotation = annotations[name]
        if isinstance(annotation, str):
            return annotation.strip().startswith(("ClassVar", "typing.ClassVar"))
        return _is_class_var(annotation)
    return False


def class_type_hints(cls: type) -> dict[str, object]:
    """Public annotated members of `cls` (ClassVar excluded).

    Annotations that cannot be evaluated are kept with an unspecified type.
    """
    try:
        hints = typing.get_type_hints(cls)
    except (NameError, TypeError, AttributeError):
        hints = {}
        for base in reversed(cls.__mro__):
            for key, value in vars(base).get("__annotations__", {}).items():
                hints[key] = None if isinstance(value, str) else value
    return {
        key: value
        for key, value in hints.items()
        if not key.startswith("_") and not _is_class_var(value)
    }


def is_abstract_class(cls: type) -> bool:
    return inspect.isabstract(cls) or bool(getattr(cls, "_is_protocol", False))


def describe(hint: object) -> TypeDescriptor:
    """Classify a type hint."""
    if hint is None or hint is Any or hint is object:
        return TypeDescriptor(hint, TypeKind.UNSPECIFIED)
    origin = get_origin(hint)
    args = get_args(hint)
    if origin is Annotated:
        return replace(describe(args[0]), hint=hint)
    if origin is Union or origin is types.UnionType:
        members = tuple(arg for arg in args if arg is not type(None))
        optional = len(members) != len(args)
        if len(members) == 1:
            return replace(describe(members[0]), hint=hint, optional=optional)
        return TypeDescriptor(hint, TypeKind.ABSTRACT, args=members, optional=optional)
    supertype = getattr(hint, "__supertype__", None)
    if supertype is not None:
        return replace(describe(supertype), hint=hint)
    container = origin if origin is not None else hint
    if not isinstance(container, type):
        # TypeVar, unresolved forward references and similar
        return TypeDescriptor(hint, TypeKind.UNSPECIFIED)
    if container is tuple:
        if len(args) == 2 and args[1] is Ellipsis:
            return TypeDescriptor(hint, TypeKind.ARRAY, tuple, (args[0],))
        if args == ((),):
            return TypeDescriptor(hint, TypeKind.TUPLE, tuple, ())
        if args:
            return TypeDescriptor(hint, TypeKind.TUPLE, tuple, args)
        return TypeDescriptor(hint, TypeKind.ARRAY, tuple, ())
    if issubclass(container, (str, bytes, bool, int, float)):
        return TypeDescriptor(hint, TypeKind.SCALAR, container, args)
    if issubclass(container, collections.abc.Mapping):
        factory = dict if is_abstract_class(container) else container
        return TypeDescriptor(hint, TypeKind.MAPPING, factory, args)
    if container in _ABSTRACT_SEQUENCES:
        return TypeDescriptor(hint, TypeKind.COLLECTION, list, args)
    if container in _ABSTRACT_SETS:
        return TypeDescriptor(hint, TypeKind.COLLECTION, set, args)
    if issubclass(container, _COLLECTION_BASES) and not is_abstract_class(container):
        return TypeDescriptor(hint, TypeKind.COLLECTION, container, args)
    if is_abstract_class(container):
        return TypeDescriptor(hint, TypeKind.ABSTRACT, container, args)
    return TypeDescriptor(hint, TypeKind.OBJECT, container, args)
