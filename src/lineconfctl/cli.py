from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any, Optional

import click
from tabulate import tabulate

from lineconf.config import (
    INTEGER_BIT_SIZE,
    INTEGER_RADIX,
    VERSION,
    Config,
    ConfigValue,
    VarType,
    load_config,
)
from lineconf.errors import ConfigError, format_config_error, suggest_troubleshooting_steps

_ACCESSORS = {
    "bool": Config.get_bool,
    "string": Config.get_string,
    "array": Config.get_array,
    "integer": Config.get_integer,
}

file_option = click.option(
    "--file",
    "path",
    type=click.Path(dir_okay=False, path_type=Path),
    help="Config file to read; uses LINECONF_CONFIG if omitted",
)


@click.group(context_settings={"help_option_names": ["-h", "--help"]})
@click.option(
    "--json-output",
    "json_output",
    is_flag=True,
    help="Output JSON instead of tables (pretty-printed)",
)
@click.option(
    "-v",
    "--verbose",
    is_flag=True,
    help="Enable verbose logging to stderr (what the CLI is doing)",
)
@click.version_option(VERSION, prog_name="lineconf")
@click.pass_context
def cli(ctx: click.Context, json_output: bool, verbose: bool) -> None:
    """lineconf CLI.

    Inspect line-oriented config files: one key per line, optionally
    followed by a value or a comma-separated list. JSON output is always
    pretty-printed.
    """
    ctx.ensure_object(dict)
    ctx.obj["json"] = json_output
    ctx.obj["verbose"] = verbose

    # Configure logging once per process
    level = logging.INFO if verbose else logging.WARNING
    logging.basicConfig(
        level=level,
        format="%(asctime)s | %(levelname)s | %(name)s | %(message)s",
    )


def _printable(text: str) -> str:
    # undecodable input bytes survive parsing as lone surrogates
    return text.encode("utf-8", "surrogateescape").decode("utf-8", "replace")


def _fail(ctx: click.Context, error: Exception) -> None:
    click.echo(_printable(format_config_error(error)), err=True)
    if ctx.obj.get("verbose"):
        suggestions = suggest_troubleshooting_steps(error)
        if suggestions:
            click.echo("\nTroubleshooting suggestions:", err=True)
            for suggestion in suggestions[:3]:
                click.echo(f"  • {suggestion}", err=True)
    raise SystemExit(2)


def _load(
    ctx: click.Context,
    log: logging.Logger,
    path: Optional[Path],
    radix: int = INTEGER_RADIX,
    bit_size: int = INTEGER_BIT_SIZE,
) -> Config:
    try:
        log.info("Loading config...")
        cfg = load_config(path, integer_radix=radix, integer_bit_size=bit_size)
        log.info("Loaded %d keys from %s", len(cfg), cfg.source_path)
    except ConfigError as e:
        _fail(ctx, e)
    return cfg


def _display(val: ConfigValue) -> str:
    if val.type is VarType.BOOL:
        return "true" if val.value else "false"
    if val.type is VarType.ARRAY:
        return _printable(", ".join(val.value))
    return _printable(val.value)


@cli.command("keys")
@file_option
@click.pass_context
def keys(ctx: click.Context, path: Optional[Path]) -> None:
    """List every parsed key with its type and value."""
    log = logging.getLogger("lineconf.keys")
    cfg = _load(ctx, log, path)

    items = sorted(cfg.items())
    if ctx.obj.get("json"):
        plain = cfg.as_dict()
        out = {
            "path": str(cfg.source_path),
            "entries": [
                {"key": name, "type": str(val.type), "value": plain[name]}
                for name, val in items
            ],
        }
        click.echo(json.dumps(out, indent=2, sort_keys=True))
        return

    if not items:
        click.echo("No keys found")
        return

    rows = [[_printable(name), str(val.type), _display(val)] for name, val in items]
    log.info("Rendering %d keys", len(rows))
    click.echo(tabulate(rows, headers=["KEY", "TYPE", "VALUE"]))


@cli.command("get")
@click.argument("key")
@click.option(
    "--type",
    "value_type",
    type=click.Choice(sorted(_ACCESSORS)),
    default="string",
    show_default=True,
    help="Type to read the value as",
)
@file_option
@click.option(
    "--radix",
    type=click.IntRange(2, 36),
    default=INTEGER_RADIX,
    show_default=True,
    help="Radix used by --type integer",
)
@click.option(
    "--bit-size",
    "bit_size",
    type=click.IntRange(1, 64),
    default=INTEGER_BIT_SIZE,
    show_default=True,
    help="Signed bit width used by --type integer",
)
@click.pass_context
def get(
    ctx: click.Context,
    key: str,
    value_type: str,
    path: Optional[Path],
    radix: int,
    bit_size: int,
) -> None:
    """Read KEY as the requested type."""
    log = logging.getLogger("lineconf.get")
    cfg = _load(ctx, log, path, radix, bit_size)

    try:
        log.info("Reading '%s' as %s", key, value_type)
        value: Any = _ACCESSORS[value_type](cfg, key)
    except ConfigError as e:
        _fail(ctx, e)

    if ctx.obj.get("json"):
        out = {"key": key.lower(), "type": value_type, "value": value}
        click.echo(json.dumps(out, indent=2, sort_keys=True))
        return

    if value_type == "bool":
        click.echo("true" if value else "false")
    elif value_type == "array":
        for item in value:
            click.echo(_printable(item))
    elif value_type == "string":
        click.echo(_printable(value))
    else:
        click.echo(value)


def main() -> None:  # entry point
    cli(standalone_mode=True)


if __name__ == "__main__":  # pragma: no cover
    main()
