"""Public entry points: deserialize text, map parsed trees, read files."""

from __future__ import annotations

import sys
from dataclasses import replace
from pathlib import Path

from ggjson.aliases import AliasRegistry, default_aliases
from ggjson.mapper import ValueMapper
from ggjson.options import LogLevel, Options, resolve_options
from ggjson.transcoder import transcode
from ggjson.type_registry import TypeKind, describe
from ggjson.value_tree import JsonNode, parse_value_tree
from ggjson.versioning import check_document_version

XJSON_EXTENSIONS: tuple[str, ...] = (".xjsn", ".xjson")


def deserialize(
    text: str | bytes,
    target: object = None,
    options: Options | None = None,
) -> object:
    """Parse canonical JSON text and map it onto `target`.

    Without a target (or with an abstract one) the document's own type tag
    decides what is built; untagged objects come back as dicts.
    """
    options = resolve_options(options)
    options.try_log(f"Deserializing json text with target type {describe(target).name}.", LogLevel.INFO)
    return map_node(parse_value_tree(text), target, options)


def map_node(
    node: JsonNode,
    target: object = None,
    options: Options | None = None,
) -> object:
    options = resolve_options(options)
    check_document_version(node, options)
    return ValueMapper(options).map_root(node, target)


def is_xjson_path(path: Path) -> bool:
    return path.suffix.lower() in XJSON_EXTENSIONS


def fill_default_options(target: object = None, options: Options | None = None) -> Options:
    """Derive the options a file read runs with.

    Options without aliases are seeded from the classes of the target's module.
    The built-in aliases are layered beneath whatever the caller registered,
    and the target is registered under its qualified name so that a type tag
    injected by the transcoder resolves without fully qualified lookup.
    """
    base = resolve_options(options)
    descriptor = describe(target)
    if base.has_aliases:
        registry = default_aliases().merge(base.aliases)
    else:
        registry = AliasRegistry()
        module = sys.modules.get(descriptor.origin.__module__) if descriptor.origin else None
        if module is not None and descriptor.kind in (TypeKind.OBJECT, TypeKind.ABSTRACT):
            registry.add_types_in_module(module)
        registry.add_default_aliases()
    if descriptor.kind is TypeKind.OBJECT:
        registry.register(descriptor.qualified_name, descriptor.origin)
    return replace(base, aliases=registry)


def transcode_file(
    path: str | Path,
    target: object = None,
    options: Options | None = None,
) -> str:
    path = Path(path)
    options = resolve_options(options)
    options.try_log(f"Reading & transcribing config from {path}.", LogLevel.INFO)
    with path.open(encoding="utf-8-sig") as handle:
        return transcode(handle, target, options)


def read_file(
    path: str | Path,
    target: object = None,
    options: Options | None = None,
) -> object:
    """Read a `.json` or XJSON (`.xjsn`, `.xjson`) file and map it onto `target`."""
    path = Path(path)
    options = fill_default_options(target, options)
    if is_xjson_path(path):
        text = transcode_file(path, target, options)
    else:
        options.try_log(f"Reading config from {path}.", LogLevel.INFO)
        text = path.read_text(encoding="utf-8-sig")
    return deserialize(text, target, options)
