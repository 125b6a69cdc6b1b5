"""Core library for lineconf.

Parses line-oriented config files into a typed, read-only lookup table.
"""

from .config import (
    INTEGER_BIT_SIZE,
    INTEGER_RADIX,
    VERSION,
    Config,
    ConfigValue,
    VarType,
    load_config,
    parse,
)
from .errors import (
    ConfigError,
    ConfigValueError,
    ErrorKind,
    NotFoundError,
    TypeMismatchError,
    ValueMismatchError,
)

__version__ = VERSION

__all__ = [
    "Config",
    "ConfigError",
    "ConfigValue",
    "ConfigValueError",
    "ErrorKind",
    "INTEGER_BIT_SIZE",
    "INTEGER_RADIX",
    "NotFoundError",
    "TypeMismatchError",
    "VERSION",
    "ValueMismatchError",
    "VarType",
    "load_config",
    "parse",
]
