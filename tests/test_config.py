from __future__ import annotations

import textwrap
from pathlib import Path

import pytest
from pydantic import ValidationError

from ggjson.config import (
    deserialize_defaults,
    load_config,
    merge_payload,
    options_from_config,
    parse_alias_specs,
)
from ggjson.exceptions import TypeResolutionError
from tests import models


def _write_config(path: Path, body: str) -> Path:
    path.write_text(textwrap.dedent(body).strip() + "\n", encoding="utf-8")
    return path


def test_deserialize_defaults_reads_toml(tmp_path: Path) -> None:
    _write_config(
        tmp_path / "ggjson.toml",
        """
        [deserialize]
        type_tag = "$type"
        type_separator = "|"
        allow_fully_qualified_types = true
        modules = ["tests.models"]

        [deserialize.aliases]
        Batman = "tests.models:Hero"
        """,
    )
    defaults = deserialize_defaults(root=tmp_path)
    assert defaults["type_tag"] == "$type"
    assert defaults["type_separator"] == "|"
    assert defaults["allow_fully_qualified_types"] is True
    assert defaults["modules"] == ["tests.models"]
    assert defaults["aliases"] == {"Batman": "tests.models:Hero"}


def test_missing_or_invalid_config_is_empty(tmp_path: Path) -> None:
    assert load_config(root=tmp_path) == {}
    broken = _write_config(tmp_path / "broken.toml", "[deserialize\n")
    assert load_config(config_path=broken) == {}
    odd = _write_config(tmp_path / "odd.toml", 'deserialize = "nope"')
    assert deserialize_defaults(config_path=odd) == {}


def test_options_from_config_builds_registry(log_sink) -> None:
    options = options_from_config(
        {
            "type_tag": "$type",
            "modules": "tests.models",
            "aliases": {"Batman": "tests.models:Hero"},
        },
        log=log_sink,
    )
    assert options.type_tag == "$type"
    assert options.type_separator == ":"
    assert options.allow_fully_qualified_types is False
    assert options.log is log_sink
    assert options.aliases["Batman"] is models.Hero
    assert options.aliases["Citizen"] is models.Citizen
    assert "int[]" in options.aliases


def test_options_from_config_without_default_aliases() -> None:
    options = options_from_config({"default_aliases": False})
    assert len(options.aliases) == 0
    assert not options.has_aliases


def test_options_from_config_validates_section() -> None:
    with pytest.raises(ValidationError):
        options_from_config({"type_separator": "::"})
    with pytest.raises(ValidationError):
        options_from_config({"type_tag": ""})


def test_options_from_config_reports_missing_modules() -> None:
    with pytest.raises(TypeResolutionError):
        options_from_config({"modules": ["tests.no_such_module"]})
    with pytest.raises(TypeResolutionError):
        options_from_config({"aliases": {"Ghost": "tests.models:Ghost"}})


def test_parse_alias_specs() -> None:
    assert parse_alias_specs(["Batman = tests.models:Hero", "Car=tests.models:Car"]) == {
        "Batman": "tests.models:Hero",
        "Car": "tests.models:Car",
    }
    assert parse_alias_specs(None) == {}
    with pytest.raises(ValueError):
        parse_alias_specs(["Batman"])


def test_merge_payload_prefers_explicit_values() -> None:
    merged = merge_payload(
        {"type_tag": "$t", "allow_fully_qualified_types": None},
        {"type_tag": "__type", "allow_fully_qualified_types": True},
    )
    assert merged == {"type_tag": "$t", "allow_fully_qualified_types": True}
