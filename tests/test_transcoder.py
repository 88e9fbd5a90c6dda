from __future__ import annotations

import json
import textwrap

from ggjson.options import LogLevel, Options
from ggjson.transcoder import transcode, transcode_text
from tests.models import Citizen, Hero, Person


def _recording_options(records: list[tuple[str, LogLevel]]) -> Options:
    return Options(log=lambda message, level: records.append((message, level)))


def test_transcode_strips_comments_and_wraps_members() -> None:
    lines = ["// comment", '"a": 1,', "", "   ", '"b": 2']
    assert transcode(lines) == '{\n"a": 1,\n"b": 2\n}'


def test_transcode_keeps_member_lines_verbatim() -> None:
    text = textwrap.dedent(
        """\
        // heading
          "list": [
             // inner comment
             1, 2
          ],
        "url": "http://example.com" // trailing text stays
        """
    )
    assert transcode_text(text) == (
        '{\n  "list": [\n     1, 2\n  ],\n'
        '"url": "http://example.com" // trailing text stays\n}'
    )


def test_transcode_injects_type_tag_for_concrete_targets() -> None:
    records: list[tuple[str, LogLevel]] = []
    text = transcode(['"Name": "James",', '"Age": 43.1'], Hero, _recording_options(records))
    assert text.splitlines()[1] == '"__type": "tests.models:Hero",'
    assert json.loads(text) == {"__type": "tests.models:Hero", "Name": "James", "Age": 43.1}
    assert records == [("Adding __type: tests.models:Hero.", LogLevel.INFO)]


def test_transcode_injection_without_statements_has_no_trailing_comma() -> None:
    text = transcode(["// only a comment"], Hero)
    assert text == '{\n"__type": "tests.models:Hero"\n}'
    assert json.loads(text) == {"__type": "tests.models:Hero"}


def test_transcode_respects_an_existing_top_level_tag() -> None:
    lines = ['  "__type" : "Citizen",', '"Name": "Bruce"']
    assert transcode(lines, Citizen) == '{\n  "__type" : "Citizen",\n"Name": "Bruce"\n}'


def test_transcode_ignores_nested_type_tags_when_detecting() -> None:
    lines = [
        '"AlterEgo": {',
        '    "__type": "Hero",',
        '    "Name": "Batman"',
        "}",
    ]
    text = transcode(lines, Citizen)
    assert json.loads(text)["__type"] == "tests.models:Citizen"


def test_transcode_custom_tag_and_non_concrete_targets() -> None:
    options = Options(type_tag="$kind")
    lines = ['"Name": "Bruce"']
    assert json.loads(transcode(lines, Hero, options)) == {
        "$kind": "tests.models:Hero",
        "Name": "Bruce",
    }
    assert transcode(lines, dict, options) == '{\n"Name": "Bruce"\n}'
    assert transcode(lines, Person, options) == '{\n"Name": "Bruce"\n}'
    assert transcode(['"__typeface": "serif"'], Hero).splitlines()[1].startswith('"__type": ')
