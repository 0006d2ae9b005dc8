"""Command-line interface for ABI encoding and decoding."""

from __future__ import annotations

import json
import logging
import sys
from decimal import Decimal, InvalidOperation, localcontext
from fractions import Fraction
from typing import TYPE_CHECKING, Any, NoReturn

import click
from rich.console import Console
from rich.logging import RichHandler
from rich.table import Table

from evmabi.abi import TypeSyntaxError, calculate_layout, parse_signature, parse_type_list
from evmabi.codec import (
    ArityError,
    CodecError,
    decode,
    encode,
    encode_function_call,
    function_selector,
)

if TYPE_CHECKING:
    from evmabi.abi import LayoutInfo, TypeDescriptor

# Enough significant digits to print any 256-bit fixed-point value exactly
FIXED_POINT_DIGITS = 400


@click.group()
@click.option("--verbose", "-v", is_flag=True, default=False, help="Show debug logging")
def cli(verbose: bool) -> None:
    """Ethereum contract ABI encoder and decoder."""
    if verbose:
        _setup_logging()


def _setup_logging() -> None:
    """Route evmabi debug logging to stderr through rich."""
    logger = logging.getLogger("evmabi")
    logger.setLevel(logging.DEBUG)
    if not any(isinstance(h, RichHandler) for h in logger.handlers):
        logger.addHandler(RichHandler(console=Console(stderr=True), show_path=False))


def _fail(error: Exception) -> NoReturn:
    print(f"Error: {error}")
    sys.exit(1)


def _parse_hex(text: str) -> bytes:
    digits = text[2:] if text[:2] in ("0x", "0X") else text
    return bytes.fromhex(digits)


def _parse_value(raw: str) -> Any:
    """Read a command-line value as JSON, falling back to a plain string."""
    try:
        return json.loads(raw, parse_float=Decimal)
    except json.JSONDecodeError:
        return raw


def _coerce(t: TypeDescriptor, value: Any) -> Any:
    """Convert a JSON-shaped value to the Python type the codec expects."""
    if t.is_array:
        if isinstance(value, list):
            return [_coerce(t.subtype, v) for v in value]
        return value

    if isinstance(value, str):
        if t.base in ("bytes", "hash"):
            return _parse_hex(value)
        if t.base in ("uint", "int"):
            return int(value, 0)
        if t.base in ("fixed", "ufixed"):
            return Decimal(value)
    elif isinstance(value, float) and t.base in ("fixed", "ufixed"):
        return Decimal(str(value))
    return value


def _to_json(value: Any) -> Any:
    if isinstance(value, bytes):
        return "0x" + value.hex()
    if isinstance(value, Fraction):
        # A power-of-two denominator always has an exact decimal expansion
        with localcontext() as ctx:
            ctx.prec = FIXED_POINT_DIGITS
            return str(Decimal(value.numerator) / Decimal(value.denominator))
    if isinstance(value, list):
        return [_to_json(v) for v in value]
    return value


def _encode_args(types: list[TypeDescriptor], raw_values: tuple[str, ...]) -> list[Any]:
    if len(types) != len(raw_values):
        raise ArityError(len(types), len(raw_values))
    return [_coerce(t, _parse_value(raw)) for t, raw in zip(types, raw_values)]


@cli.command()
@click.argument("types")
@click.option("--json", "output_json", is_flag=True, help="Output as JSON")
def info(types: str, output_json: bool) -> None:
    """Display layout information for a comma-joined type list."""
    try:
        parsed = parse_type_list(types)
    except TypeSyntaxError as e:
        _fail(e)

    layout = calculate_layout(parsed)

    if output_json:
        _output_json(layout)
    else:
        _output_plain(layout)


def _format_size(size: int | None) -> str:
    """Format a size value, handling None for dynamic."""
    return "dynamic" if size is None else str(size)


def _output_json(layout: LayoutInfo) -> None:
    """Output layout info as JSON."""
    data: dict = {
        "types": [],
        "head_size": layout.head_size,
        "min_size": layout.min_size,
        "static_size": layout.static_size,
    }

    for size_info in layout.types:
        t = size_info.abi_type
        entry = t.to_dict()
        entry.update(
            {
                "canonical": t.canonical,
                "size": t.size,
                "dynamic": t.is_dynamic,
                "head_size": size_info.head_size,
                "min_size": size_info.min_size,
            }
        )
        data["types"].append(entry)

    print(json.dumps(data, indent=2))


def _output_plain(layout: LayoutInfo) -> None:
    """Output layout info using rich text formatting."""
    console = Console()

    console.print("[bold cyan]Types[/bold cyan]")
    type_table = Table(show_header=True, box=None, padding=(0, 2, 0, 0))
    type_table.add_column("Type", style="white")
    type_table.add_column("Base", style="dim")
    type_table.add_column("Dims", style="dim")
    type_table.add_column("Size", style="yellow", justify="right")
    type_table.add_column("Kind", style="green")

    for size_info in layout.types:
        t = size_info.abi_type
        dims = ", ".join(str(d) if d else "dynamic" for d in t.dims)
        type_table.add_row(t.canonical, t.base, dims, _format_size(t.size), size_info.kind.value)

    console.print(type_table)
    console.print()

    console.print("[bold cyan]Encoding[/bold cyan]")
    size_table = Table(show_header=False, box=None, padding=(0, 2, 0, 2))
    size_table.add_column("Label", style="dim")
    size_table.add_column("Value", style="white")

    size_table.add_row("Head", f"{layout.head_size} bytes")
    size_table.add_row("Minimum", f"{layout.min_size} bytes")
    size_table.add_row("Static", f"{_format_size(layout.static_size)} bytes")

    console.print(size_table)


@cli.command("encode")
@click.argument("types")
@click.argument("values", nargs=-1)
def encode_cmd(types: str, values: tuple[str, ...]) -> None:
    """Encode VALUES (JSON or plain strings) as TYPES and print hex."""
    try:
        parsed = parse_type_list(types)
        data = encode(parsed, _encode_args(parsed, values))
    except (TypeSyntaxError, CodecError, ValueError, InvalidOperation) as e:
        _fail(e)

    print("0x" + data.hex())


@cli.command("decode")
@click.argument("types")
@click.argument("data")
@click.option("--json", "output_json", is_flag=True, help="Output as JSON")
def decode_cmd(types: str, data: str, output_json: bool) -> None:
    """Decode hex DATA as TYPES."""
    try:
        parsed = parse_type_list(types)
        values = decode(parsed, _parse_hex(data))
    except (TypeSyntaxError, CodecError, ValueError) as e:
        _fail(e)

    if output_json:
        print(json.dumps(_to_json(values), indent=2))
        return

    console = Console()
    table = Table(show_header=True, box=None, padding=(0, 2, 0, 0))
    table.add_column("#", style="dim", justify="right")
    table.add_column("Type", style="white")
    table.add_column("Value", style="yellow")

    for index, (t, value) in enumerate(zip(parsed, values)):
        table.add_row(str(index), t.canonical, json.dumps(_to_json(value)))

    console.print(table)


@cli.command()
@click.argument("signature")
def selector(signature: str) -> None:
    """Print the 4-byte selector of a function SIGNATURE."""
    try:
        sig = parse_signature(signature)
    except TypeSyntaxError as e:
        _fail(e)

    print("0x" + function_selector(sig).hex())


@cli.command()
@click.argument("signature")
@click.argument("values", nargs=-1)
def calldata(signature: str, values: tuple[str, ...]) -> None:
    """Encode a call to SIGNATURE with VALUES and print hex."""
    try:
        sig = parse_signature(signature)
        data = encode_function_call(sig, _encode_args(list(sig.inputs), values))
    except (TypeSyntaxError, CodecError, ValueError, InvalidOperation) as e:
        _fail(e)

    print("0x" + data.hex())


def main() -> None:
    """Main entry point."""
    cli()


if __name__ == "__main__":
    main()
