from __future__ import annotations

from lineconf.config import VarType
from lineconf.errors import (
    ConfigError,
    NotFoundError,
    TypeMismatchError,
    ValueMismatchError,
    format_config_error,
    suggest_troubleshooting_steps,
)


def test_error_hierarchy():
    err = TypeMismatchError("port", VarType.STRING)
    assert isinstance(err, ConfigError)
    assert isinstance(err, RuntimeError)
    assert str(err) == "Config error: requested type and actual type do not match: ('port', String)"


def test_value_mismatch_message():
    err = ValueMismatchError("x", VarType.BOOL)
    assert str(err) == "Config error: value and type do not match: ('x', Bool)"


def test_errors_are_fresh_per_failure():
    a = NotFoundError("a", VarType.STRING)
    b = NotFoundError("b", VarType.ARRAY)
    assert a is not b
    assert (a.key, a.expected) == ("a", VarType.STRING)
    assert (b.key, b.expected) == ("b", VarType.ARRAY)


def test_format_not_found():
    msg = format_config_error(NotFoundError("port", VarType.STRING))
    assert "Key 'port' is not set" in msg
    assert "lineconf keys" in msg


def test_format_integer_mismatch_mentions_radix():
    msg = format_config_error(TypeMismatchError("n", VarType.INTEGER))
    assert "configured radix" in msg


def test_format_missing_config():
    msg = format_config_error(ConfigError("No config file given. Pass a path or set LINECONF_CONFIG"))
    assert "LINECONF_CONFIG" in msg
    assert "--file" in msg


def test_format_generic_error():
    assert format_config_error(ConfigError("boom")) == "Configuration error: boom"


def test_suggestions_for_integer_mismatch():
    steps = suggest_troubleshooting_steps(TypeMismatchError("n", VarType.INTEGER))
    assert any("base 6" in s for s in steps)


def test_suggestions_fallback():
    steps = suggest_troubleshooting_steps(ConfigError("boom"))
    assert any("--verbose" in s for s in steps)
