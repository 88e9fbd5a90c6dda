"""XJSON -> canonical JSON transcoding.

XJSON is JSON with full-line `//` comments, blank lines and an implicit
top-level object: the file holds bare `"key": value` members. Transcoding drops
the comment and blank lines, keeps every other line verbatim and wraps the
result in braces. When the caller asks for a concrete class and the document
does not name one, a type tag member is injected so the mapper instantiates it.
"""

from __future__ import annotations

import re
from typing import Iterable

from ggjson.options import LogLevel, Options, resolve_options
from ggjson.type_registry import TypeKind, describe

COMMENT_MARKER = "//"

_OPENERS = frozenset("{[")
_CLOSERS = frozenset("}]")


def _is_dropped(stripped: str) -> bool:
    return not stripped or stripped.startswith(COMMENT_MARKER)


def _declares_type_tag(stripped: str, type_tag: str) -> bool:
    return re.match(rf'"{re.escape(type_tag)}"\s*:', stripped) is not None


def _depth_delta(line: str) -> int:
    delta = 0
    in_string = False
    escaped = False
    for char in line:
        if in_string:
            if escaped:
                escaped = False
            elif char == "\\":
                escaped = True
            elif char == '"':
                in_string = False
        elif char == '"':
            in_string = True
        elif char in _OPENERS:
            delta += 1
        elif char in _CLOSERS:
            delta -= 1
    return delta


def wants_type_tag(target: object) -> bool:
    return describe(target).kind is TypeKind.OBJECT


def transcode(
    lines: Iterable[str],
    target: object = None,
    options: Options | None = None,
) -> str:
    """Rewrite XJSON source lines into a single canonical JSON text.

    An injected type tag holds the target's `module:QualName`. Mapping the
    result needs that name to resolve: pass options prepared by
    `fill_default_options(target, options)` (which registers it), or enable
    `allow_fully_qualified_types`. `read_file` does the former.
    """
    options = resolve_options(options)
    type_tag = options.effective_type_tag
    kept: list[str] = []
    has_type_tag = False
    statement_count = 0
    depth = 0
    for raw_line in lines:
        line = raw_line.rstrip("\r\n")
        stripped = line.strip()
        if _is_dropped(stripped):
            continue
        # Only members of the implicit top-level object count as its type tag.
        if depth == 0 and _declares_type_tag(stripped, type_tag):
            has_type_tag = True
        else:
            statement_count += 1
        depth += _depth_delta(stripped)
        kept.append(line)

    output = ["{"]
    if wants_type_tag(target) and not has_type_tag:
        type_name = describe(target).qualified_name
        options.try_log(f"Adding {type_tag}: {type_name}.", LogLevel.INFO)
        separator = "," if statement_count > 0 else ""
        output.append(f'"{type_tag}": "{type_name}"{separator}')
    output.extend(kept)
    output.append("}")
    return "\n".join(output)


def transcode_text(
    text: str,
    target: object = None,
    options: Options | None = None,
) -> str:
    return transcode(text.splitlines(), target, options)
