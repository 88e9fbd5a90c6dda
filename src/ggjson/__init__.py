"""ggjson package root."""

from ggjson.aliases import AliasRegistry, default_aliases
from ggjson.api import deserialize, fill_default_options, map_node, read_file, transcode_file
from ggjson.exceptions import (
    ConstructionError,
    JsonConfigError,
    NeverThrown,
    ParseError,
    PropertyBindingWarning,
    TypeResolutionError,
    ValueConversionError,
    VersionError,
)
from ggjson.invariants import never
from ggjson.numbers import Float32, Int32, Int64, UInt32, UInt64
from ggjson.options import LogLevel, Options
from ggjson.transcoder import transcode, transcode_text
from ggjson.versioning import ENGINE_VERSION, VERSION_TAG

__all__ = [
    "__version__",
    "AliasRegistry",
    "ConstructionError",
    "ENGINE_VERSION",
    "Float32",
    "Int32",
    "Int64",
    "JsonConfigError",
    "LogLevel",
    "NeverThrown",
    "Options",
    "ParseError",
    "PropertyBindingWarning",
    "TypeResolutionError",
    "UInt32",
    "UInt64",
    "VERSION_TAG",
    "ValueConversionError",
    "VersionError",
    "default_aliases",
    "deserialize",
    "fill_default_options",
    "map_node",
    "never",
    "read_file",
    "transcode",
    "transcode_file",
    "transcode_text",
]

__version__ = "1.0.0"
