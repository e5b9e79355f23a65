"""Command-line interface for ringarray.

This module defines a small playground for the Array type using the Click
framework. It builds arrays from command-line values and replays operations
on them, printing the contents and physical layout along the way.

Commands:
- inspect: Build an array and show its contents and layout.
- run: Replay push/shift/slice operations step by step.
"""

from __future__ import annotations

from pathlib import Path
from typing import Any

import click
import yaml

from . import __version__
from .array import EMPTY, Array, ArrayError
from .config import ConfigError, load_config


@click.group()
@click.version_option(version=__version__, prog_name="ringarray")
def cli():
    """Immutable circular-buffer array playground."""


@cli.command()
@click.argument("values", nargs=-1)
@click.option("--capacity", type=int, required=False, help="Initial capacity (overrides ringarray.yaml)")
def inspect(values: tuple[str, ...], capacity: int | None):
    """Build an array from VALUES and show its layout."""
    config = _load_config()
    arr = _build(values, config["default_capacity"] if capacity is None else capacity)
    _echo_layout(arr)


@cli.command()
@click.option("--values", "raw_values", default="", help="Initial values, joined by the configured separator")
@click.option("--capacity", type=int, required=False, help="Initial capacity (overrides ringarray.yaml)")
@click.option("--layout", "show_layout", is_flag=True, help="Show the physical layout after every step")
@click.argument("ops", nargs=-1)
def run(raw_values: str, capacity: int | None, show_layout: bool, ops: tuple[str, ...]):
    """Replay OPS (push:X, shift, slice:OFFSET:LENGTH) against an array."""
    config = _load_config()
    values = [v for v in raw_values.split(config["separator"]) if v.strip()]
    arr = _build(values, config["default_capacity"] if capacity is None else capacity)
    click.echo(f"{'start':<20} {arr.to_list()!r}")
    for op in ops:
        arr = _apply(arr, op)
        if show_layout:
            _echo_layout(arr)


def _apply(arr: Array, op: str) -> Array:
    """Apply one operation and print the result.

    ``shift`` on an empty array prints ``empty`` and leaves it unchanged.
    """
    name, _, rest = op.partition(":")
    try:
        if name == "push" and rest:
            arr = arr.push(_parse_value(rest))
        elif name == "shift" and not rest:
            shifted = arr.shift()
            if shifted is EMPTY:
                click.echo(f"{op:<20} empty")
                return arr
            element, arr = shifted
            click.echo(f"{op:<20} -> {element!r}")
        elif name == "slice":
            offset, length = _parse_range(op, rest)
            arr = arr.slice(offset, length)
        else:
            raise click.ClickException(
                f"Unknown operation {op!r}; expected push:X, shift or slice:OFFSET:LENGTH"
            )
    except ArrayError as exc:
        click.echo(click.style("Operation failed:", fg="red", bold=True), err=True)
        click.echo(click.style(f"  Step: {op}", fg="yellow"), err=True)
        click.echo(click.style(f"  Error: {exc}", fg="white"), err=True)
        raise SystemExit(1) from None
    click.echo(f"{op:<20} {arr.to_list()!r}")
    return arr


def _parse_range(op: str, rest: str) -> tuple[int, int]:
    parts = rest.split(":")
    if len(parts) != 2:
        raise click.ClickException(f"Expected slice:OFFSET:LENGTH, got {op!r}")
    try:
        return int(parts[0]), int(parts[1])
    except ValueError:
        raise click.ClickException(f"Slice bounds must be integers, got {op!r}") from None


def _parse_value(text: str) -> Any:
    """Parse a command-line value as a YAML scalar (``1`` -> 1, ``a`` -> 'a')."""
    try:
        value = yaml.safe_load(text)
    except yaml.YAMLError:
        return text
    if value is None or isinstance(value, (dict, list)):
        return text
    return value


def _build(values, capacity: int) -> Array:
    try:
        return Array.new((_parse_value(v.strip()) for v in values), capacity=capacity)
    except ArrayError as exc:
        raise click.ClickException(str(exc)) from exc


def _load_config() -> dict[str, Any]:
    try:
        return load_config(Path.cwd())
    except ConfigError as exc:
        raise click.ClickException(str(exc)) from exc


def _echo_layout(arr: Array) -> None:
    layout = arr.layout()
    click.echo(repr(arr))
    click.echo(f"  capacity: {layout['capacity']}")
    click.echo(f"  size:     {layout['size']}")
    click.echo(f"  start:    {layout['start']}")
    slots = ", ".join("_" if s is None else repr(s) for s in layout["slots"])
    click.echo(f"  slots:    [{slots}]")


def main():
    """Entry point for the CLI application."""
    cli()
