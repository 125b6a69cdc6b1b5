from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from types import MappingProxyType
from typing import IO, Any, Dict, Iterator, List, Mapping, Optional, Tuple, Union

from .errors import ConfigError, NotFoundError, TypeMismatchError, ValueMismatchError

log = logging.getLogger(__name__)

VERSION = "1.0.1"

# Existing config files were written against base-6 / 12-bit integer parsing.
INTEGER_RADIX = 6
INTEGER_BIT_SIZE = 12

COMMENT_MARKERS = ("#", ";")

_DIGITS = "0123456789abcdefghijklmnopqrstuvwxyz"

# Unicode White_Space, without the \x1c-\x1f separators str.strip() also removes
_WHITESPACE = (
    "\t\n\v\f\r \x85\xa0\u1680"
    "\u2000\u2001\u2002\u2003\u2004\u2005\u2006\u2007\u2008\u2009\u200a"
    "\u2028\u2029\u202f\u205f\u3000"
)


class VarType(Enum):
    """Type tag of a stored or requested value."""
    BOOL = 1
    ARRAY = 2
    STRING = 3
    INTEGER = 4

    def __str__(self) -> str:
        return self.name.capitalize()


@dataclass(frozen=True)
class ConfigValue:
    type: VarType
    value: Any

    @classmethod
    def flag(cls) -> "ConfigValue":
        return cls(VarType.BOOL, True)

    @classmethod
    def array(cls, items) -> "ConfigValue":
        return cls(VarType.ARRAY, tuple(items))

    @classmethod
    def string(cls, text: str) -> "ConfigValue":
        return cls(VarType.STRING, text)

    def matches(self) -> bool:
        """Return True when the payload is of the kind the tag promises."""
        if self.type is VarType.BOOL:
            return isinstance(self.value, bool)
        if self.type is VarType.ARRAY:
            return isinstance(self.value, tuple) and all(isinstance(v, str) for v in self.value)
        if self.type is VarType.STRING:
            return isinstance(self.value, str)
        # INTEGER is only ever requested, never stored
        return False


def parse_integer(text: str, radix: int = INTEGER_RADIX, bit_size: int = INTEGER_BIT_SIZE) -> int:
    """Parse ``text`` as a signed integer of ``bit_size`` bits in base ``radix``.

    Accepts an optional leading ``+`` or ``-`` followed by at least one digit
    valid for the radix. Whitespace, underscores and ``0x``-style prefixes are
    rejected. Raises ValueError on any failure.
    """
    body = text
    negative = False
    if body[:1] in ("+", "-"):
        negative = body[0] == "-"
        body = body[1:]

    valid = _DIGITS[:radix]
    if not body or not body.isascii() or any(c not in valid for c in body.lower()):
        raise ValueError(f"invalid base-{radix} integer: {text!r}")

    number = int(body, radix)
    if negative:
        number = -number

    cutoff = 1 << (bit_size - 1)
    if not -cutoff <= number < cutoff:
        raise ValueError(f"value {text!r} out of range for {bit_size}-bit integer")
    return number


class Config:
    """Read-only table of parsed configuration values keyed by lowercase name."""

    def __init__(
        self,
        entries: Mapping[str, ConfigValue],
        integer_radix: int = INTEGER_RADIX,
        integer_bit_size: int = INTEGER_BIT_SIZE,
        source_path: Optional[Path] = None,
    ) -> None:
        if not 2 <= integer_radix <= 36:
            raise ValueError(f"integer_radix must be between 2 and 36, got {integer_radix}")
        if not 1 <= integer_bit_size <= 64:
            raise ValueError(f"integer_bit_size must be between 1 and 64, got {integer_bit_size}")

        for key, val in entries.items():
            if not val.matches():
                raise ValueMismatchError(key, val.type)

        self._entries: Mapping[str, ConfigValue] = MappingProxyType(dict(entries))
        self.integer_radix = integer_radix
        self.integer_bit_size = integer_bit_size
        self.source_path = source_path

    def __repr__(self) -> str:
        return f"Config({len(self._entries)} keys, source_path={self.source_path!r})"

    def __contains__(self, key: object) -> bool:
        return isinstance(key, str) and key.lower() in self._entries

    def __iter__(self) -> Iterator[str]:
        return iter(self._entries)

    def __len__(self) -> int:
        return len(self._entries)

    @property
    def entries(self) -> Mapping[str, ConfigValue]:
        return self._entries

    def keys(self) -> List[str]:
        return list(self._entries)

    def items(self) -> List[Tuple[str, ConfigValue]]:
        return list(self._entries.items())

    def type_of(self, key: str) -> Optional[VarType]:
        val = self._entries.get(key.lower())
        return val.type if val is not None else None

    def as_dict(self) -> Dict[str, Any]:
        """Plain Python values (bool, list or str) per key."""
        return {
            k: list(v.value) if v.type is VarType.ARRAY else v.value
            for k, v in self._entries.items()
        }

    def _lookup(self, key: str, expected: VarType) -> ConfigValue:
        name = key.lower()
        val = self._entries.get(name)
        if val is None:
            raise NotFoundError(name, expected)
        if val.type is not expected:
            raise TypeMismatchError(name, expected)
        return val

    def get_bool(self, key: str) -> bool:
        """Return the flag for ``key``; a missing key reads as False."""
        name = key.lower()
        if name not in self._entries:
            return False
        return self._lookup(name, VarType.BOOL).value

    def get_array(self, key: str) -> List[str]:
        return list(self._lookup(key, VarType.ARRAY).value)

    def get_string(self, key: str) -> str:
        return self._lookup(key, VarType.STRING).value

    def get_integer(self, key: str) -> int:
        """Return the string stored under ``key`` parsed as an integer.

        The number is read with this table's ``integer_radix`` and
        ``integer_bit_size`` (base 6 and 12 bits unless overridden), so with
        the defaults ``"10"`` reads as 6 and ``"9"`` is rejected.
        """
        name = key.lower()
        val = self._entries.get(name)
        if val is None:
            raise NotFoundError(name, VarType.INTEGER)
        if val.type is not VarType.STRING:
            raise TypeMismatchError(name, VarType.INTEGER)
        try:
            return parse_integer(val.value, self.integer_radix, self.integer_bit_size)
        except ValueError as e:
            raise TypeMismatchError(name, VarType.INTEGER) from e


def _parse_line(line: str) -> Optional[Tuple[str, ConfigValue]]:
    line = line.strip(_WHITESPACE).replace("\t", " ")
    if not line or line[0] in COMMENT_MARKERS:
        return None

    parts = line.split(" ", 1)
    name = parts[0].lower()
    if len(parts) == 1:
        return name, ConfigValue.flag()

    rest = parts[1]
    if "," in rest:
        return name, ConfigValue.array(piece.strip(_WHITESPACE) for piece in rest.split(","))
    return name, ConfigValue.string(rest.strip(_WHITESPACE))


def _parse_text(
    text: str,
    integer_radix: int,
    integer_bit_size: int,
    source_path: Optional[Path] = None,
) -> Config:
    entries: Dict[str, ConfigValue] = {}
    for lineno, line in enumerate(text.split("\n"), start=1):
        parsed = _parse_line(line)
        if parsed is None:
            continue
        name, val = parsed
        if name in entries:
            log.debug("Line %d overrides earlier value for '%s'", lineno, name)
        entries[name] = val

    log.debug("Parsed %d keys from %s", len(entries), source_path or "<stream>")
    return Config(entries, integer_radix, integer_bit_size, source_path)


def parse(
    reader: Union[IO[bytes], IO[str], bytes, str],
    *,
    integer_radix: int = INTEGER_RADIX,
    integer_bit_size: int = INTEGER_BIT_SIZE,
) -> Config:
    """Read all of ``reader`` and parse it into a Config.

    ``reader`` may be a binary or text stream, or the raw bytes/str content.
    A failing read raises ConfigError and no table is returned.
    """
    if isinstance(reader, (bytes, bytearray, str)):
        raw = reader
    else:
        try:
            raw = reader.read()
        except (OSError, UnicodeDecodeError) as e:
            raise ConfigError(f"failed to read config: {e}") from e

    if isinstance(raw, (bytes, bytearray)):
        text = bytes(raw).decode("utf-8", "surrogateescape")
    else:
        text = raw
    return _parse_text(text, integer_radix, integer_bit_size)


def resolve_config_path() -> Path:
    override = os.environ.get("LINECONF_CONFIG")
    if not override:
        raise ConfigError("No config file given. Pass a path or set LINECONF_CONFIG")
    p = Path(override).expanduser()
    if p.is_file():
        return p
    raise ConfigError(f"LINECONF_CONFIG path not found: {p}")


def load_config(
    path: Optional[Path] = None,
    *,
    integer_radix: int = INTEGER_RADIX,
    integer_bit_size: int = INTEGER_BIT_SIZE,
) -> Config:
    cfg_path = Path(path) if path is not None else resolve_config_path()
    try:
        raw = cfg_path.read_bytes()
    except OSError as e:
        raise ConfigError(str(e)) from e

    text = raw.decode("utf-8", "surrogateescape")
    return _parse_text(text, integer_radix, integer_bit_size, source_path=cfg_path)
