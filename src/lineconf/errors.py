"""Error types and message helpers for lineconf."""

from __future__ import annotations

from enum import Enum
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from .config import VarType


class ConfigError(RuntimeError):
    pass


class ErrorKind(Enum):
    """Why a typed lookup failed."""
    NOT_FOUND = "requested value does not exist"
    TYPE_MISMATCH = "requested type and actual type do not match"
    VALUE_MISMATCH = "value and type do not match"


class ConfigValueError(ConfigError):
    """A typed lookup failed for ``key`` while expecting ``expected``."""

    kind: ErrorKind = ErrorKind.TYPE_MISMATCH

    def __init__(self, key: str, expected: "VarType") -> None:
        self.key = key
        self.expected = expected
        super().__init__(f"Config error: {self.kind.value}: ({key!r}, {expected})")


class NotFoundError(ConfigValueError):
    kind = ErrorKind.NOT_FOUND


class TypeMismatchError(ConfigValueError):
    kind = ErrorKind.TYPE_MISMATCH


class ValueMismatchError(ConfigValueError):
    kind = ErrorKind.VALUE_MISMATCH


def format_config_error(error: Exception) -> str:
    """Format configuration-related error messages."""
    error_str = str(error)

    if isinstance(error, NotFoundError):
        return (
            f"Key '{error.key}' is not set in the configuration. "
            f"Use 'lineconf keys' to see available keys."
        )

    if isinstance(error, TypeMismatchError):
        if str(error.expected) == "Integer":
            return (
                f"Key '{error.key}' does not hold an integer in the configured radix. "
                f"Original error: {error_str}"
            )
        return (
            f"Key '{error.key}' is not stored as {error.expected}. "
            f"Original error: {error_str}"
        )

    if isinstance(error, ValueMismatchError):
        return f"Internal value error for key '{error.key}': {error_str}"

    if "no config file given" in error_str.lower():
        return (
            "No configuration file given. Please either:\n"
            "  • Pass --file /path/to/file.conf, or\n"
            "  • Set LINECONF_CONFIG=/path/to/file.conf"
        )

    return f"Configuration error: {error_str}"


def suggest_troubleshooting_steps(error: Exception) -> list[str]:
    """Suggest troubleshooting steps based on the error."""
    suggestions = []

    if isinstance(error, NotFoundError):
        suggestions.extend([
            "List the parsed keys: lineconf keys --file <path>",
            "Keys are case-insensitive; check the spelling",
            "Lines starting with '#' or ';' are comments and are ignored",
        ])

    elif isinstance(error, TypeMismatchError):
        if str(error.expected) == "Integer":
            suggestions.extend([
                "Integers are read in base 6 with a 12-bit range (-2048..2047) by default",
                "Only digits 0-5 are accepted in base 6; '10' reads as 6",
                "Pass --radix 10 --bit-size 64 to read plain decimal numbers",
            ])
        else:
            suggestions.extend([
                "A key with no value is a flag: use --type bool",
                "A value containing ',' is an array: use --type array",
                "Any other value is a string: use --type string",
            ])

    if not suggestions:
        suggestions.extend([
            "Check the logs with -v/--verbose flag for more details",
            "Verify the config file path exists and is readable",
        ])

    return suggestions
