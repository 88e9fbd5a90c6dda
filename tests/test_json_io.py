from __future__ import annotations

import json
from collections import deque

import pytest

from ggjson.numbers import Float32, Int32
from ggjson.runtime.json_io import dump_json_pretty, to_json_value
from tests import models


def test_to_json_value_renders_instances_with_type_tag() -> None:
    hero = models.Hero()
    hero.Age = 43.1
    hero.ReportsTo = None
    assert to_json_value(hero) == {
        "__type": "tests.models:Hero",
        "Name": "some hero...",
        "Age": 43.1,
        "ReportsTo": None,
    }


def test_to_json_value_handles_containers_and_kinds() -> None:
    value = {"ints": (Int32(1), Int32(2)), "queue": deque([Float32(0.5)]), "tags": {"a"}}
    assert to_json_value(value, type_tag="$t") == {
        "ints": [1, 2],
        "queue": [0.5],
        "tags": ["a"],
    }


def test_to_json_value_rejects_unknown_values() -> None:
    with pytest.raises(TypeError):
        to_json_value(object())


def test_dump_json_pretty_is_indented() -> None:
    text = dump_json_pretty({"a": [1, 2]})
    assert text.splitlines()[0] == "{"
    assert json.loads(text) == {"a": [1, 2]}
