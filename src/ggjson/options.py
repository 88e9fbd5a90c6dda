"""Per-call deserialization options and the observational log sink."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from enum import StrEnum
from typing import Callable

from ggjson.aliases import AliasRegistry

DEFAULT_TYPE_TAG = "__type"
DEFAULT_TYPE_SEPARATOR = ":"

logger = logging.getLogger("ggjson")


class LogLevel(StrEnum):
    INFO = "info"
    WARNING = "warning"
    ERROR = "error"

    @property
    def logging_level(self) -> int:
        return _STDLIB_LEVELS[self]


_STDLIB_LEVELS: dict[LogLevel, int] = {
    LogLevel.INFO: logging.INFO,
    LogLevel.WARNING: logging.WARNING,
    LogLevel.ERROR: logging.ERROR,
}

LogSink = Callable[[str, LogLevel], None]


@dataclass(frozen=True)
class Options:
    aliases: AliasRegistry = field(default_factory=AliasRegistry)
    type_tag: str = DEFAULT_TYPE_TAG
    type_separator: str = DEFAULT_TYPE_SEPARATOR
    allow_fully_qualified_types: bool = False
    log: LogSink | None = None

    def __post_init__(self) -> None:
        if len(self.type_separator) != 1:
            raise ValueError(
                f"type_separator must be a single character, got {self.type_separator!r}"
            )

    @property
    def effective_type_tag(self) -> str:
        return self.type_tag or DEFAULT_TYPE_TAG

    @property
    def has_aliases(self) -> bool:
        return len(self.aliases) > 0

    def try_log(self, message: str, level: LogLevel = LogLevel.INFO) -> None:
        logger.log(level.logging_level, message)
        if self.log is not None:
            self.log(message, level)

    def warn(self, warning: Warning) -> None:
        self.try_log(str(warning), LogLevel.WARNING)


def resolve_options(options: Options | None) -> Options:
    return Options() if options is None else options
