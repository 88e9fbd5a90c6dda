"""Object builder: default construction and member assignment."""

from __future__ import annotations

from ggjson.exceptions import ConstructionError
from ggjson.invariants import never
from ggjson.type_registry import MemberInfo, TypeDescriptor, TypeKind


def construct(descriptor: TypeDescriptor) -> object:
    if descriptor.kind is not TypeKind.OBJECT or descriptor.origin is None:
        # The mapper resolves abstract slots before getting here.
        never("non-concrete type reached the object builder", hint=descriptor.hint)
    cls = descriptor.origin
    if not descriptor.is_default_constructible:
        raise ConstructionError(
            f"Cannot create an instance of {cls.__name__}: it has no default constructor."
        )
    try:
        return cls()
    except Exception as exc:
        raise ConstructionError(f"Failed to create an instance of {cls.__name__}: {exc}") from exc


def assign(instance: object, member: MemberInfo, value: object) -> None:
    try:
        setattr(instance, member.name, value)
    except Exception as exc:
        raise ConstructionError(
            f"Failed to assign {member.kind} {member.name} on {type(instance).__name__}: {exc}"
        ) from exc
