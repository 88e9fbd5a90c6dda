"""Invariant markers for internal contracts."""

from __future__ import annotations

from typing import NoReturn

from ggjson.exceptions import NeverThrown


def never(reason: str = "", **env: object) -> NoReturn:
    """Mark a code path as intentionally unreachable.

    The env payload is attached to the raised exception for diagnostics only.
    """
    rendered = ", ".join(f"{key}={value!r}" for key, value in env.items())
    message = reason or "never() marker reached"
    if rendered:
        message = f"{message} ({rendered})"
    raise NeverThrown(message, env=env)
