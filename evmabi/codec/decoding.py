"""ABI decoding of head/tail encoded data into Python values."""

import logging
from collections.abc import Callable, Sequence
from fractions import Fraction
from typing import Any

from evmabi.abi import TypeDescriptor, to_descriptor
from evmabi.abi.types import WORD_SIZE

from .encoding import ADDRESS_SIZE, hash_length
from .errors import DecodingError
from .words import ceil32, word_to_int, word_to_uint

logger = logging.getLogger(__name__)

_ZERO_PREFIX = bytes(WORD_SIZE)

# Words a decode may visit per word of input. Heads that share a tail are
# allowed, but only up to this much repeated work.
DECODE_WORK_FACTOR = 2


class _WorkBudget:
    """Bounds the number of words a single decode may visit."""

    def __init__(self, data_size: int):
        self.remaining = DECODE_WORK_FACTOR * (ceil32(data_size) // WORD_SIZE)

    def charge(self, words: int, offset: int) -> None:
        self.remaining -= words
        if self.remaining < 0:
            raise DecodingError("Offsets expand the data beyond its size", offset)


def _read_word(data: memoryview, offset: int) -> bytes:
    if offset < 0 or offset + WORD_SIZE > len(data):
        raise DecodingError("Unexpected end of data reading a 32-byte word", offset)
    return bytes(data[offset : offset + WORD_SIZE])


def _read_uint(data: memoryview, offset: int) -> int:
    return word_to_uint(_read_word(data, offset))


def _check_unsigned(t: TypeDescriptor, value: int, bits: int, offset: int) -> int:
    if value >= 1 << bits:
        raise DecodingError(f"Value out of range for {t}", offset)
    return value


def _check_signed(t: TypeDescriptor, value: int, bits: int, offset: int) -> int:
    bound = 1 << (bits - 1)
    if not -bound <= value < bound:
        raise DecodingError(f"Value out of range for {t}", offset)
    return value


def _decode_uint(t: TypeDescriptor, word: bytes, offset: int) -> int:
    return _check_unsigned(t, word_to_uint(word), int(t.sub), offset)


def _decode_int(t: TypeDescriptor, word: bytes, offset: int) -> int:
    return _check_signed(t, word_to_int(word), int(t.sub), offset)


def _decode_bool(t: TypeDescriptor, word: bytes, offset: int) -> bool:
    value = word_to_uint(word)
    if value not in (0, 1):
        raise DecodingError(f"Invalid {t} value {value}", offset)
    return value == 1


def _decode_address(t: TypeDescriptor, word: bytes, offset: int) -> str:
    padding = WORD_SIZE - ADDRESS_SIZE
    if word[:padding] != _ZERO_PREFIX[:padding]:
        raise DecodingError(f"Non-zero padding in {t} value", offset)
    return "0x" + word[padding:].hex()


def _decode_hash(t: TypeDescriptor, word: bytes, offset: int) -> bytes:
    length = hash_length(t)
    if length is None:
        raise DecodingError(f"Unsupported hash width for {t}", offset)

    padding = WORD_SIZE - length
    if word[:padding] != _ZERO_PREFIX[:padding]:
        raise DecodingError(f"Non-zero padding in {t} value", offset)
    return word[padding:]


def _decode_fixed_bytes(t: TypeDescriptor, word: bytes, offset: int) -> bytes:
    return word[: t.byte_length or 0]


def _decode_fixed_point(t: TypeDescriptor, word: bytes, offset: int) -> Fraction:
    high, low = t.fixed_bits
    if t.base == "ufixed":
        scaled = _check_unsigned(t, word_to_uint(word), high + low, offset)
    else:
        scaled = _check_signed(t, word_to_int(word), high + low, offset)
    return Fraction(scaled, 1 << low)


_STATIC_DECODERS: dict[str, Callable[[TypeDescriptor, bytes, int], Any]] = {
    "uint": _decode_uint,
    "int": _decode_int,
    "bool": _decode_bool,
    "address": _decode_address,
    "hash": _decode_hash,
    "fixed": _decode_fixed_point,
    "ufixed": _decode_fixed_point,
    "bytes": _decode_fixed_bytes,
}


def _decode_payload(
    t: TypeDescriptor, data: memoryview, offset: int, budget: _WorkBudget
) -> bytes:
    """Read a length-prefixed byte payload."""
    length = _read_uint(data, offset)
    start = offset + WORD_SIZE
    if length > len(data) - start:
        raise DecodingError(f"{t} length {length} exceeds available data", offset)
    budget.charge(1 + ceil32(length) // WORD_SIZE, offset)
    return bytes(data[start : start + length])


def _decode_array(
    t: TypeDescriptor, data: memoryview, offset: int, budget: _WorkBudget
) -> list[Any]:
    elem = t.subtype
    count = t.dims[-1]
    start = offset

    if count == 0:
        count = _read_uint(data, offset)
        budget.charge(1, offset)
        start += WORD_SIZE

    # Every element needs at least its head slot, so this bounds count by the data size
    head_size = WORD_SIZE if elem.is_dynamic else elem.size or 0
    if count * head_size > len(data) - start:
        raise DecodingError(f"{t} of {count} elements exceeds available data", offset)

    return _decode_sequence([elem] * count, data, start, budget)


def _decode_at(t: TypeDescriptor, data: memoryview, offset: int, budget: _WorkBudget) -> Any:
    if t.is_array:
        return _decode_array(t, data, offset, budget)

    if t.base == "string":
        raw = _decode_payload(t, data, offset, budget)
        try:
            return raw.decode("utf-8")
        except UnicodeDecodeError as e:
            raise DecodingError(f"Invalid UTF-8 in {t} value", offset) from e

    if t.base == "bytes" and not t.sub:
        return _decode_payload(t, data, offset, budget)

    word = _read_word(data, offset)
    budget.charge(1, offset)
    return _STATIC_DECODERS[t.base](t, word, offset)


def _decode_sequence(
    types: Sequence[TypeDescriptor], data: memoryview, start: int, budget: _WorkBudget
) -> list[Any]:
    """Decode a block of heads starting at ``start``.

    Offsets read from dynamic heads are relative to the start of the block.
    Every word visited is charged to ``budget``, so heads that alias the same
    tail cannot multiply the work beyond the size of the data.
    """
    values = []
    pos = start

    for t in types:
        if t.is_dynamic:
            pointer = _read_uint(data, pos)
            budget.charge(1, pos)
            target = start + pointer
            if target > len(data):
                raise DecodingError(f"Offset {pointer} for {t} points outside data", pos)
            values.append(_decode_at(t, data, target, budget))
            pos += WORD_SIZE
        else:
            values.append(_decode_at(t, data, pos, budget))
            pos += t.size or 0

    return values


def decode(types: Sequence[TypeDescriptor | str], data: bytes | bytearray | memoryview) -> list[Any]:
    """Decode ABI encoded data as the given types.

    Args:
        types: Type descriptors or type strings, in declaration order.
        data: The encoded bytes. Never modified.

    Returns:
        One decoded value per type.

    Raises:
        DecodingError: If the data is truncated, malformed, or an offset
            points outside of it, or if shared offsets would make decoding
            visit more than ``DECODE_WORK_FACTOR`` times its size.
    """
    descriptors = [to_descriptor(t) for t in types]
    view = memoryview(data).cast("B")

    head_size = sum(WORD_SIZE if t.is_dynamic else t.size or 0 for t in descriptors)
    if head_size > len(view):
        raise DecodingError(f"Data of {len(view)} bytes is shorter than the {head_size} byte head")

    values = _decode_sequence(descriptors, view, 0, _WorkBudget(len(view)))

    logger.debug("Decoded %d values from %d bytes", len(values), len(view))
    return values
