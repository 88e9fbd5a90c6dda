"""Exception taxonomy for ggjson deserialization."""

from __future__ import annotations


class JsonConfigError(Exception):
    """Base class for every fatal ggjson failure.

    A raised JsonConfigError aborts the whole top-level call; no partially
    mapped object graph is ever handed back to the caller.
    """


class ParseError(JsonConfigError):
    """The input text is not valid JSON (after XJSON transcoding)."""

    def __init__(self, message: str, *, line: int | None = None, column: int | None = None):
        super().__init__(message)
        self.line = line
        self.column = column


class VersionError(JsonConfigError):
    """The document declares a major version newer than this engine."""

    def __init__(self, message: str, *, document_version: str):
        super().__init__(message)
        self.document_version = document_version


class TypeResolutionError(JsonConfigError):
    """A type name could not be turned into an instantiable type."""

    def __init__(self, message: str, *, type_name: str = ""):
        super().__init__(message)
        self.type_name = type_name


class ConstructionError(JsonConfigError):
    """Default construction of a type, or assignment of one of its members, failed."""


class ValueConversionError(JsonConfigError):
    """A JSON value cannot be represented as the requested Python type."""


class PropertyBindingWarning(UserWarning):
    """Non-fatal: a JSON member had no settable counterpart on the target.

    Instances are rendered into the log sink and the value is dropped.
    """

    def __init__(self, member_name: str, target_name: str):
        super().__init__(
            f"Warning could not resolve member with name: {member_name} on {target_name}"
        )
        self.member_name = member_name
        self.target_name = target_name


class NeverThrown(RuntimeError):
    """Raised by never() on code paths that must be unreachable.

    Reaching one means ggjson itself broke an internal contract, not that the
    input document was bad.
    """

    def __init__(self, message: str, *, env: dict[str, object] | None = None):
        super().__init__(message)
        self.env = dict(env or {})
