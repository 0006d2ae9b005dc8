"""ABI type string parser.

A type string is scanned as three consecutive runs: lowercase letters
(the base), digits with at most one ``x`` (the sub), and a sequence of
bracketed array dimensions. Each run is then validated against the rules
for its base.
"""

import logging
from dataclasses import dataclass
from functools import lru_cache

from .types import BASE_ALIASES, TypeDescriptor

__all__ = [
    "PARSE_CACHE_SIZE",
    "TypeSyntaxError",
    "parse",
    "parse_type_list",
    "to_descriptor",
]

logger = logging.getLogger(__name__)

# Number of distinct type strings interned by parse()
PARSE_CACHE_SIZE = 1024


class TypeSyntaxError(RuntimeError):
    """Raised when a type string is malformed."""

    def __init__(self, message: str, type_string: str, position: int | None = None) -> None:
        detail = f"{message}: {type_string!r}"
        if position is not None:
            detail += f" (at position {position})"
        super().__init__(detail)
        self.type_string = type_string
        self.position = position


@dataclass
class _Runs:
    base: str
    sub: str
    dims: list[int]


def _is_digit(ch: str) -> bool:
    return "0" <= ch <= "9"


def _is_number(text: str) -> bool:
    return bool(text) and all(_is_digit(ch) for ch in text)


def _scan(text: str) -> _Runs:
    """Split a type string into its base, sub and dimension runs."""
    pos = 0
    end = len(text)

    start = pos
    while pos < end and "a" <= text[pos] <= "z":
        pos += 1
    base = text[start:pos]

    start = pos
    seen_x = False
    while pos < end:
        ch = text[pos]
        if _is_digit(ch):
            pos += 1
        elif ch == "x" and not seen_x:
            seen_x = True
            pos += 1
        else:
            break
    sub = text[start:pos]

    dims: list[int] = []
    while pos < end:
        if text[pos] != "[":
            raise TypeSyntaxError("Unknown characters found in array declaration", text, pos)

        close = pos + 1
        while close < end and _is_digit(text[close]):
            close += 1
        if close >= end or text[close] != "]":
            raise TypeSyntaxError("Malformed array dimension", text, pos)

        digits = text[pos + 1 : close]
        if digits and int(digits) == 0:
            raise TypeSyntaxError("Fixed array dimension must be positive", text, pos)
        dims.append(int(digits) if digits else 0)
        pos = close + 1

    return _Runs(base, sub, dims)


def _validate(base: str, sub: str, text: str) -> None:
    """Check the sub qualifier against the rules for its base."""
    if base == "string":
        if sub:
            raise TypeSyntaxError("String type must have no suffix", text)
    elif base == "bytes":
        if sub and (not _is_number(sub) or int(sub) > 32):
            raise TypeSyntaxError("Maximum 32 bytes for fixed-length bytes", text)
    elif base in ("uint", "int"):
        if not _is_number(sub):
            raise TypeSyntaxError("Integer type must have numerical suffix", text)
        size = int(sub)
        if not 8 <= size <= 256:
            raise TypeSyntaxError("Integer size out of bounds", text)
        if size % 8 != 0:
            raise TypeSyntaxError("Integer size must be multiple of 8", text)
    elif base in ("fixed", "ufixed"):
        high_text, _, low_text = sub.partition("x")
        if not (_is_number(high_text) and _is_number(low_text)):
            raise TypeSyntaxError(
                "Fixed-point type must have suffix of form <high>x<low>, e.g. 128x128", text
            )
        high, low = int(high_text), int(low_text)
        if not 8 <= high + low <= 256:
            raise TypeSyntaxError("Fixed-point size out of bounds (max 32 bytes)", text)
        if high % 8 != 0 or low % 8 != 0:
            raise TypeSyntaxError("Fixed-point high/low sizes must be multiples of 8", text)
    elif base == "hash":
        if not _is_number(sub):
            raise TypeSyntaxError("Hash type must have numerical suffix", text)
    elif base in ("address", "bool"):
        if sub:
            raise TypeSyntaxError(f"{base.capitalize()} type cannot have suffix", text)
    else:
        raise TypeSyntaxError(f"Unrecognized type base {base!r}", text)


@lru_cache(maxsize=PARSE_CACHE_SIZE)
def _parse_cached(text: str) -> TypeDescriptor:
    logger.debug("Parsing ABI type %r", text)
    runs = _scan(text)
    base = BASE_ALIASES.get(runs.base, runs.base)
    _validate(base, runs.sub, text)
    return TypeDescriptor(base=base, sub=runs.sub, dims=tuple(runs.dims))


def parse(type_string: str) -> TypeDescriptor:
    """Parse an ABI type string such as ``uint256[2][]`` into a descriptor."""
    if not isinstance(type_string, str):
        raise TypeSyntaxError("Type must be given as a string", repr(type_string))

    text = type_string.strip()
    if not text:
        raise TypeSyntaxError("Empty type string", type_string)
    return _parse_cached(text)


def parse_type_list(text: str) -> list[TypeDescriptor]:
    """Parse a comma-joined list of types, e.g. ``"uint256,address,bytes32[]"``."""
    if not text.strip():
        return []

    types = []
    for item in text.split(","):
        if not item.strip():
            raise TypeSyntaxError("Empty entry in type list", text)
        types.append(parse(item))
    return types


def to_descriptor(abi_type: TypeDescriptor | str) -> TypeDescriptor:
    """Return ``abi_type`` as a descriptor, parsing it if given as a string."""
    if isinstance(abi_type, TypeDescriptor):
        return abi_type
    return parse(abi_type)
