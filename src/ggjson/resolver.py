"""Type name resolution.

Aliases are looked up first. Fully qualified names (`package.module:Qual.Name`
or `package.module.Name`) are imported only when the options explicitly allow
it: doing so lets untrusted input run the constructor of any importable class.
"""

from __future__ import annotations

import importlib
from types import ModuleType

from ggjson.exceptions import TypeResolutionError
from ggjson.options import Options


def resolve_type(name: str, options: Options) -> object:
    type_name = name.strip()
    if options.has_aliases and type_name in options.aliases:
        return options.aliases[type_name]
    if options.allow_fully_qualified_types:
        return lookup_qualified_type(type_name)
    raise TypeResolutionError(
        f"Trying to create fully qualified type {type_name} but the deserialization options forbid that.",
        type_name=type_name,
    )


def lookup_qualified_type(name: str) -> type:
    module_name, qualname = _split_qualified_name(name)
    module = _import_module(module_name, name)
    target: object = module
    for part in qualname.split("."):
        try:
            target = getattr(target, part)
        except AttributeError as exc:
            raise TypeResolutionError(
                f"Type {name} not found: {module_name} has no attribute path {qualname}.",
                type_name=name,
            ) from exc
    if not isinstance(target, type):
        raise TypeResolutionError(f"{name} does not name a class.", type_name=name)
    return target


def _split_qualified_name(name: str) -> tuple[str, str]:
    if ":" in name:
        module_name, _, qualname = name.partition(":")
        module_name, qualname = module_name.strip(), qualname.strip()
        if module_name and qualname:
            return module_name, qualname
        raise TypeResolutionError(f"Malformed qualified type name: {name!r}.", type_name=name)
    parts = [part for part in name.split(".") if part]
    if len(parts) < 2:
        raise TypeResolutionError(
            f"Cannot resolve type {name!r}: not an alias and not a qualified name.",
            type_name=name,
        )
    for index in range(len(parts) - 1, 0, -1):
        module_name = ".".join(parts[:index])
        try:
            importlib.import_module(module_name)
        except ModuleNotFoundError as exc:
            # A missing import inside an existing module is not a shorter prefix.
            if exc.name == module_name or module_name.startswith(f"{exc.name}."):
                continue
            raise _import_failure(module_name, name, exc) from exc
        except Exception as exc:
            raise _import_failure(module_name, name, exc) from exc
        return module_name, ".".join(parts[index:])
    raise TypeResolutionError(f"No importable module found for type {name!r}.", type_name=name)


def _import_module(module_name: str, name: str) -> ModuleType:
    try:
        return importlib.import_module(module_name)
    except Exception as exc:
        raise _import_failure(module_name, name, exc) from exc


def _import_failure(module_name: str, name: str, exc: Exception) -> TypeResolutionError:
    return TypeResolutionError(
        f"Cannot import module {module_name} for type {name}: {exc}",
        type_name=name,
    )
