"""Type-directed mapping of a JSON value tree onto python objects.

Dispatch is by node kind, steered by a type hint:

* null, booleans and strings come back as-is;
* numbers take the representation the hint asks for and default to float;
* arrays become tuples (`tuple[T, ...]`), collections (`list[T]`, `set[T]`,
  ...) or, without a hint, lists of dynamically mapped values;
* objects carrying the type tag become instances of the named type whatever
  the hint says; otherwise a concrete hint is instantiated and anything else
  falls back to a dict.

Object members are bound by exact name, property first and field second. A
member named `name<separator>Type` is mapped as `Type` and assigned to `name`,
which is how a concrete class is chosen for an abstract slot.
"""

from __future__ import annotations

from ggjson.builder import assign, construct
from ggjson.exceptions import (
    ConstructionError,
    PropertyBindingWarning,
    TypeResolutionError,
    ValueConversionError,
)
from ggjson.invariants import never
from ggjson.numbers import convert_number
from ggjson.options import Options, resolve_options
from ggjson.resolver import resolve_type
from ggjson.type_registry import TypeDescriptor, TypeKind, describe
from ggjson.value_tree import (
    JsonArray,
    JsonBool,
    JsonNode,
    JsonNull,
    JsonNumber,
    JsonObject,
    JsonString,
)
from ggjson.versioning import VERSION_TAG

_UNSPECIFIED = describe(None)


def split_name_and_type(name: str, separator: str) -> tuple[str, str] | None:
    """Split `"property<sep>Type"` at the first separator.

    A separator at position 0 does not count: the key is taken literally.
    """
    index = name.find(separator)
    if index > 0:
        return name[:index].strip(), name[index + 1 :].strip()
    return None


class ValueMapper:
    def __init__(self, options: Options | None = None) -> None:
        self.options = resolve_options(options)

    @property
    def type_tag(self) -> str:
        return self.options.effective_type_tag

    def map(self, node: JsonNode, hint: object = None) -> object:
        return self._map_value(node, describe(hint))

    def map_dynamic(self, node: JsonNode) -> object:
        return self._map_value(node, _UNSPECIFIED)

    def map_root(self, node: JsonNode, hint: object = None) -> object:
        descriptor = describe(hint)
        if descriptor.kind is TypeKind.ABSTRACT:
            # A top-level abstract target is satisfied by the document's own
            # type tag, or degrades to a dict.
            return self._map_value(node, _UNSPECIFIED)
        return self._map_value(node, descriptor)

    def _map_value(self, node: JsonNode, descriptor: TypeDescriptor) -> object:
        if isinstance(node, JsonNull):
            return None
        if isinstance(node, (JsonBool, JsonString)):
            return node.value
        if isinstance(node, JsonNumber):
            kind = descriptor.origin if descriptor.kind is TypeKind.SCALAR else None
            return convert_number(node.lexeme, kind)
        if isinstance(node, JsonArray):
            return self._map_array(node, descriptor)
        if isinstance(node, JsonObject):
            return self._map_object(node, descriptor)
        never("unknown value tree node", node_type=type(node).__name__)

    # ---------------- arrays ----------------

    def _map_array(self, node: JsonArray, descriptor: TypeDescriptor) -> object:
        kind = descriptor.kind
        if kind in (TypeKind.UNSPECIFIED, TypeKind.ABSTRACT):
            return [self._map_value(item, _UNSPECIFIED) for item in node.items]
        if kind is TypeKind.ARRAY:
            element = describe(descriptor.element_type)
            return tuple(self._map_value(item, element) for item in node.items)
        if kind is TypeKind.TUPLE:
            if len(node.items) != len(descriptor.args):
                raise ValueConversionError(
                    f"Expected {len(descriptor.args)} items for {descriptor.name}, "
                    f"found {len(node.items)}."
                )
            return tuple(
                self._map_value(item, describe(item_hint))
                for item, item_hint in zip(node.items, descriptor.args)
            )
        if kind is TypeKind.COLLECTION:
            element = describe(descriptor.element_type)
            items = [self._map_value(item, element) for item in node.items]
            return self._build_collection(descriptor, items)
        raise ValueConversionError(f"Unknown or unhandled target type: {descriptor.name}")

    def _build_collection(self, descriptor: TypeDescriptor, items: list[object]) -> object:
        factory = descriptor.origin
        if factory is None or factory is list:
            return items
        try:
            return factory(items)
        except Exception as exc:
            raise ConstructionError(
                f"Failed to create collection {descriptor.name} from {len(items)} items: {exc}"
            ) from exc

    # ---------------- objects ----------------

    def _type_tag_node(self, node: JsonObject) -> JsonNode | None:
        for key, value in node.members:
            if key.strip() == self.type_tag:
                return value
        return None

    def _map_object(self, node: JsonObject, descriptor: TypeDescriptor) -> object:
        tag = self._type_tag_node(node)
        if tag is not None:
            if not isinstance(tag, JsonString):
                raise TypeResolutionError(
                    f"The {self.type_tag} member must be a string naming a type."
                )
            resolved = resolve_type(tag.value, self.options)
            return self._map_object_as(node, describe(resolved))
        return self._map_object_as(node, descriptor)

    def _map_object_as(self, node: JsonObject, descriptor: TypeDescriptor) -> object:
        kind = descriptor.kind
        if kind is TypeKind.OBJECT:
            instance = construct(descriptor)
            self._bind_members(instance, descriptor, node)
            return instance
        if kind in (TypeKind.UNSPECIFIED, TypeKind.MAPPING):
            return self._map_dictionary(node, descriptor)
        if kind is TypeKind.ABSTRACT:
            raise TypeResolutionError(
                f"Cannot instantiate an interface of type {descriptor.name}, use either an "
                f'explicit typename or an alias (eg "MyProperty{self.options.type_separator}Alias").',
                type_name=descriptor.name,
            )
        raise ValueConversionError(f"Cannot map a JSON object to {descriptor.name}.")

    def _bind_members(self, instance: object, descriptor: TypeDescriptor, node: JsonObject) -> None:
        separator = self.options.type_separator
        for key, value in node.members:
            if key.strip() in (self.type_tag, VERSION_TAG):
                continue
            inlined = split_name_and_type(key, separator)
            if inlined is not None:
                member_name, type_name = inlined
                mapped = self._map_value(value, describe(resolve_type(type_name, self.options)))
                member = descriptor.find_member(member_name, instance)
                if member is None:
                    self.options.warn(PropertyBindingWarning(member_name, descriptor.name))
                    continue
                assign(instance, member, mapped)
                continue
            member = descriptor.find_member(key, instance)
            if member is None:
                self.options.warn(PropertyBindingWarning(key, descriptor.name))
                continue
            assign(instance, member, self._map_value(value, describe(member.declared_type)))

    def _map_dictionary(self, node: JsonObject, descriptor: TypeDescriptor) -> dict[str, object]:
        factory = descriptor.origin if descriptor.kind is TypeKind.MAPPING else dict
        try:
            result = factory() if factory is not None else {}
        except Exception as exc:
            raise ConstructionError(f"Failed to create mapping {descriptor.name}: {exc}") from exc
        value_descriptor = describe(descriptor.element_type)
        separator = self.options.type_separator
        for key, value in node.members:
            if key.strip() == self.type_tag:
                # only present when it already selected this mapping type
                continue
            inlined = split_name_and_type(key, separator)
            if inlined is not None:
                name, type_name = inlined
                resolved = describe(resolve_type(type_name, self.options))
                result[name] = self._map_value(value, resolved)
            else:
                result[key] = self._map_value(value, value_descriptor)
        return result
