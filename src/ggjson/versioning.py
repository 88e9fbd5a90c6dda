"""Major version gate for documents carrying the reserved version tag."""

from __future__ import annotations

import re

from ggjson.exceptions import VersionError
from ggjson.options import LogLevel, Options
from ggjson.value_tree import JsonNode, JsonObject, JsonString

VERSION_TAG = "__gg.json.version"

# [0] major: breaking changes with lower versions
# [1] minor: compatible with lower versions of the same major
ENGINE_VERSION: tuple[int, int] = (1, 0)


_MAJOR_RE = re.compile(r"[+-]?[0-9]+")


def parse_major_version(version: str) -> int | None:
    head = version.split(".", 1)[0].strip()
    if _MAJOR_RE.fullmatch(head) is None:
        return None
    return int(head)


def validate_version(version: str, options: Options) -> None:
    major = parse_major_version(version)
    if major is None:
        options.try_log(f"Warning: cannot validate this version '{version}'.", LogLevel.WARNING)
        return
    if major > ENGINE_VERSION[0]:
        message = (
            f"Input document is a higher version {version} than the current version "
            f"{ENGINE_VERSION[0]}.{ENGINE_VERSION[1]} of ggjson."
        )
        options.try_log(message, LogLevel.ERROR)
        raise VersionError(message, document_version=version)


def check_document_version(root: JsonNode, options: Options) -> None:
    """Run the version gate on a parsed document before anything is mapped."""
    if not isinstance(root, JsonObject):
        return
    version = root.get(VERSION_TAG)
    if version is None:
        return
    if not isinstance(version, JsonString):
        options.try_log(
            f"Warning: cannot validate version tag {VERSION_TAG} of kind {type(version).__name__}.",
            LogLevel.WARNING,
        )
        return
    validate_version(version.value, options)
