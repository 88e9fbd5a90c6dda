from __future__ import annotations

import importlib
from datetime import date, datetime, time
from pathlib import Path
from typing import TypeAlias
import tomllib

from ggjson.aliases import AliasRegistry
from ggjson.exceptions import TypeResolutionError
from ggjson.options import LogSink, Options
from ggjson.resolver import lookup_qualified_type
from ggjson.schema import DeserializeConfigDTO

DEFAULT_CONFIG_NAME = "ggjson.toml"

TomlScalar: TypeAlias = str | int | float | bool | None | date | datetime | time
TomlValue: TypeAlias = TomlScalar | list["TomlValue"] | dict[str, "TomlValue"]
TomlTable: TypeAlias = dict[str, TomlValue]


def _load_toml(path: Path) -> TomlTable:
    try:
        raw = path.read_text(encoding="utf-8")
    except FileNotFoundError:
        return {}
    except OSError:
        return {}
    try:
        data = tomllib.loads(raw)
    except Exception:
        return {}
    return data if isinstance(data, dict) else {}


def load_config(root: Path | None = None, config_path: Path | None = None) -> TomlTable:
    if config_path is None:
        base = root if root is not None else Path.cwd()
        config_path = base / DEFAULT_CONFIG_NAME
    return _load_toml(config_path)


def deserialize_defaults(
    root: Path | None = None, config_path: Path | None = None
) -> TomlTable:
    data = load_config(root=root, config_path=config_path)
    section = data.get("deserialize", {})
    return section if isinstance(section, dict) else {}


def _normalize_name_list(value: TomlValue) -> list[str]:
    items: list[str] = []
    if value is None:
        return items
    if isinstance(value, str):
        items = [part.strip() for part in value.split(",") if part.strip()]
    elif isinstance(value, (list, tuple, set)):
        for item in value:
            if isinstance(item, str):
                items.extend([part.strip() for part in item.split(",") if part.strip()])
    return [item for item in items if item]


def parse_alias_specs(specs: list[str] | None) -> dict[str, str]:
    """Parse repeatable `NAME=module:QualName` specs into an alias table."""
    aliases: dict[str, str] = {}
    for spec in specs or []:
        name, sep, target = spec.partition("=")
        if not sep or not name.strip() or not target.strip():
            raise ValueError(f"Alias spec must look like NAME=module:QualName, got {spec!r}")
        aliases[name.strip()] = target.strip()
    return aliases


def merge_payload(payload: TomlTable, defaults: TomlTable) -> TomlTable:
    merged = dict(defaults)
    for key, value in payload.items():
        if value is None:
            continue
        merged[key] = value
    return merged


def options_from_config(section: TomlTable, *, log: LogSink | None = None) -> Options:
    """Build Options from a `[deserialize]` table.

    Alias targets come from the (trusted) configuration, so they are imported
    directly rather than through the untrusted-input resolver.
    """
    normalized = dict(section)
    if "modules" in normalized:
        normalized["modules"] = _normalize_name_list(normalized["modules"])
    config = DeserializeConfigDTO.model_validate(normalized)
    registry = AliasRegistry()
    if config.default_aliases:
        registry.add_default_aliases()
    for module_name in config.modules:
        try:
            module = importlib.import_module(module_name)
        except ImportError as exc:
            raise TypeResolutionError(
                f"Cannot import alias module {module_name}: {exc}", type_name=module_name
            ) from exc
        registry.add_types_in_module(module)
    for name, target in config.aliases.items():
        registry.register(name, lookup_qualified_type(target))
    return Options(
        aliases=registry,
        type_tag=config.type_tag,
        type_separator=config.type_separator,
        allow_fully_qualified_types=config.allow_fully_qualified_types,
        log=log,
    )
