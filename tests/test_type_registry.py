from __future__ import annotations

import collections.abc
from collections import OrderedDict, deque
from typing import Any, Optional

from ggjson.numbers import Int32
from ggjson.type_registry import MemberKind, TypeKind, describe, qualified_name
from tests.models import (
    Car,
    Citizen,
    Exploding,
    Hero,
    NeedsArgs,
    Person,
    Point,
    Sample,
    Vehicle,
    Villain,
)


def test_describe_classifies_hints() -> None:
    assert describe(None).kind is TypeKind.UNSPECIFIED
    assert describe(Any).kind is TypeKind.UNSPECIFIED
    assert describe(object).kind is TypeKind.UNSPECIFIED
    assert describe(str).kind is TypeKind.SCALAR
    assert describe(Int32).origin is Int32
    assert describe(tuple[Int32, ...]).kind is TypeKind.ARRAY
    assert describe(tuple[Int32, ...]).element_type is Int32
    assert describe(tuple[int, str]).kind is TypeKind.TUPLE
    assert describe(list[str]).kind is TypeKind.COLLECTION
    assert describe(deque[int]).origin is deque
    assert describe(collections.abc.MutableSequence[int]).origin is list
    assert describe(collections.abc.Set[int]).origin is set
    assert describe(dict[str, int]).kind is TypeKind.MAPPING
    assert describe(dict[str, int]).element_type is int
    assert describe(collections.abc.Mapping).origin is dict
    assert describe(OrderedDict).origin is OrderedDict
    assert describe(Hero).kind is TypeKind.OBJECT


def test_describe_abstract_and_optional_hints() -> None:
    assert describe(Person).kind is TypeKind.ABSTRACT
    assert describe(Vehicle).kind is TypeKind.ABSTRACT
    assert describe(Car).kind is TypeKind.OBJECT
    optional = describe(Optional[Hero])
    assert optional.kind is TypeKind.OBJECT
    assert optional.optional is True
    ambiguous = describe(Hero | Citizen)
    assert ambiguous.kind is TypeKind.ABSTRACT
    assert not ambiguous.is_concrete


def test_default_constructibility() -> None:
    assert describe(Hero).is_default_constructible
    assert describe(Point).is_default_constructible
    assert describe(Exploding).is_default_constructible
    assert not describe(NeedsArgs).is_default_constructible
    assert not describe(Person).is_default_constructible


def test_find_member_prefers_properties_with_setters() -> None:
    descriptor = describe(Villain)
    villain = Villain()
    lair = descriptor.find_member("Lair", villain)
    assert lair is not None
    assert lair.kind is MemberKind.PROPERTY
    assert lair.declared_type is str
    minions = descriptor.find_member("Minions", villain)
    assert minions is not None
    assert minions.kind is MemberKind.FIELD
    assert minions.declared_type is int


def test_find_member_skips_read_only_and_private_members() -> None:
    descriptor = describe(Hero)
    hero = Hero()
    assert descriptor.find_member("SecretId", hero) is None
    assert descriptor.find_member("_secret_id", hero) is None
    assert descriptor.find_member("Nope", hero) is None
    assert descriptor.find_member("Name", hero).declared_type is str
    assert descriptor.find_member("Age", hero).declared_type is float
    assert descriptor.find_member("ReportsTo", hero).declared_type == Hero | None


def test_find_member_uses_annotations_and_class_defaults() -> None:
    sample = describe(Sample).find_member("P1")
    assert sample is not None
    assert sample.declared_type is Int32
    citizen = describe(Citizen).find_member("AlterEgo")
    assert citizen is not None
    assert describe(citizen.declared_type).kind is TypeKind.ABSTRACT


def test_qualified_name() -> None:
    assert qualified_name(Hero) == "tests.models:Hero"
    assert describe(Hero).qualified_name == "tests.models:Hero"
    assert describe(Hero).name == "Hero"
