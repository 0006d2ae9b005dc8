"""ABI encoding of Python values into the head/tail word layout."""

import logging
from collections.abc import Callable, Sequence
from decimal import Decimal
from fractions import Fraction
from math import floor
from typing import Any

from evmabi.abi import TypeDescriptor, to_descriptor
from evmabi.abi.types import WORD_SIZE

from .errors import ArityError, EncodingError, EncodingRangeError
from .words import int_to_word, pad_right, uint_to_word

logger = logging.getLogger(__name__)

ADDRESS_SIZE = 20

_BYTES_LIKE = (bytes, bytearray, memoryview)


def _type_name(value: Any) -> str:
    return type(value).__name__


def _as_int(t: TypeDescriptor, value: Any) -> int:
    if isinstance(value, bool) or not isinstance(value, int):
        raise EncodingError(str(t), f"expected int, got {_type_name(value)}")
    return value


def _as_bytes(t: TypeDescriptor, value: Any) -> bytes:
    if not isinstance(value, _BYTES_LIKE):
        raise EncodingError(str(t), f"expected bytes, got {_type_name(value)}")
    return bytes(value)


def _check_unsigned(t: TypeDescriptor, value: int, bits: int) -> int:
    if not 0 <= value < 1 << bits:
        raise EncodingRangeError(str(t), f"{value} out of range for {bits}-bit unsigned value")
    return value


def _check_signed(t: TypeDescriptor, value: int, bits: int) -> int:
    bound = 1 << (bits - 1)
    if not -bound <= value < bound:
        raise EncodingRangeError(str(t), f"{value} out of range for {bits}-bit signed value")
    return value


def hash_length(t: TypeDescriptor) -> int | None:
    """Byte length of a ``hashN`` type, or None if N is not a valid width."""
    bits = t.bits
    if bits is None or bits % 8 != 0 or not 8 <= bits <= 256:
        return None
    return bits // 8


def _encode_uint(t: TypeDescriptor, value: Any) -> bytes:
    return uint_to_word(_check_unsigned(t, _as_int(t, value), int(t.sub)))


def _encode_int(t: TypeDescriptor, value: Any) -> bytes:
    return int_to_word(_check_signed(t, _as_int(t, value), int(t.sub)))


def _encode_bool(t: TypeDescriptor, value: Any) -> bytes:
    if not isinstance(value, bool):
        raise EncodingError(str(t), f"expected bool, got {_type_name(value)}")
    return uint_to_word(int(value))


def _address_bytes(t: TypeDescriptor, value: Any) -> bytes:
    if isinstance(value, str):
        digits = value[2:] if value[:2] in ("0x", "0X") else value
        if len(digits) != ADDRESS_SIZE * 2:
            raise EncodingRangeError(str(t), f"expected 40 hex digits, got {value!r}")
        try:
            raw = bytes.fromhex(digits)
        except ValueError as e:
            raise EncodingError(str(t), f"invalid hex address {value!r}") from e
    elif isinstance(value, _BYTES_LIKE):
        raw = bytes(value)
    else:
        raise EncodingError(str(t), f"expected hex string or bytes, got {_type_name(value)}")

    if len(raw) != ADDRESS_SIZE:
        raise EncodingRangeError(str(t), f"expected {ADDRESS_SIZE} bytes, got {len(raw)}")
    return raw


def _encode_address(t: TypeDescriptor, value: Any) -> bytes:
    return _address_bytes(t, value).rjust(WORD_SIZE, b"\x00")


def _encode_hash(t: TypeDescriptor, value: Any) -> bytes:
    length = hash_length(t)
    if length is None:
        raise EncodingRangeError(str(t), "hash width must be a multiple of 8 from 8 to 256")

    raw = _as_bytes(t, value)
    if len(raw) != length:
        raise EncodingRangeError(str(t), f"expected {length} bytes, got {len(raw)}")
    return raw.rjust(WORD_SIZE, b"\x00")


def _encode_fixed_bytes(t: TypeDescriptor, value: Any) -> bytes:
    raw = _as_bytes(t, value)
    length = t.byte_length or 0
    if len(raw) > length:
        raise EncodingRangeError(str(t), f"{len(raw)} bytes exceeds {length} bytes")
    return raw.ljust(WORD_SIZE, b"\x00")


def _encode_fixed_point(t: TypeDescriptor, value: Any) -> bytes:
    if isinstance(value, bool) or not isinstance(value, (int, float, Decimal, Fraction)):
        raise EncodingError(str(t), f"expected a number, got {_type_name(value)}")

    high, low = t.fixed_bits
    try:
        scaled = floor(Fraction(value) * (1 << low))
    except (ValueError, OverflowError) as e:
        raise EncodingRangeError(str(t), f"{value} is not a finite number") from e

    if t.base == "ufixed":
        return uint_to_word(_check_unsigned(t, scaled, high + low))
    return int_to_word(_check_signed(t, scaled, high + low))


def _encode_dynamic_bytes(t: TypeDescriptor, value: Any) -> bytes:
    raw = _as_bytes(t, value)
    return uint_to_word(len(raw)) + pad_right(raw)


def _encode_string(t: TypeDescriptor, value: Any) -> bytes:
    if not isinstance(value, str):
        raise EncodingError(str(t), f"expected str, got {_type_name(value)}")
    try:
        raw = value.encode("utf-8")
    except UnicodeEncodeError as e:
        raise EncodingError(str(t), "string is not valid unicode") from e
    return uint_to_word(len(raw)) + pad_right(raw)


_STATIC_ENCODERS: dict[str, Callable[[TypeDescriptor, Any], bytes]] = {
    "uint": _encode_uint,
    "int": _encode_int,
    "bool": _encode_bool,
    "address": _encode_address,
    "hash": _encode_hash,
    "fixed": _encode_fixed_point,
    "ufixed": _encode_fixed_point,
    "bytes": _encode_fixed_bytes,
}


def _encode_array(t: TypeDescriptor, value: Any) -> bytes:
    if not isinstance(value, (list, tuple)):
        raise EncodingError(str(t), f"expected list or tuple, got {_type_name(value)}")

    elem = t.subtype
    length = t.dims[-1]

    if length == 0:
        # T[]: length prefix followed by the elements as a nested block
        return uint_to_word(len(value)) + _encode_sequence([elem] * len(value), value)

    if len(value) != length:
        raise EncodingRangeError(str(t), f"expected {length} elements, got {len(value)}")
    return _encode_sequence([elem] * length, value)


def _encode_sequence(types: Sequence[TypeDescriptor], values: Sequence[Any]) -> bytes:
    """Encode a block of values as heads followed by their tails.

    Offsets written to the heads are relative to the start of the block.
    """
    head_size = sum(WORD_SIZE if t.is_dynamic else t.size or 0 for t in types)

    heads: list[bytes] = []
    tails: list[bytes] = []
    tail_size = 0

    for t, value in zip(types, values, strict=True):
        encoded = encode_single(t, value)
        if t.is_dynamic:
            heads.append(uint_to_word(head_size + tail_size))
            tails.append(encoded)
            tail_size += len(encoded)
        else:
            heads.append(encoded)

    return b"".join(heads) + b"".join(tails)


def encode_single(abi_type: TypeDescriptor | str, value: Any) -> bytes:
    """Encode one value.

    Static types yield their inline encoding; dynamic types yield the
    payload that belongs in the tail region.
    """
    t = to_descriptor(abi_type)

    if t.is_array:
        return _encode_array(t, value)
    if t.base == "string":
        return _encode_string(t, value)
    if t.base == "bytes" and not t.sub:
        return _encode_dynamic_bytes(t, value)
    return _STATIC_ENCODERS[t.base](t, value)


def encode(types: Sequence[TypeDescriptor | str], values: Sequence[Any]) -> bytes:
    """Encode values as the ABI head/tail layout for the given types.

    Args:
        types: Type descriptors or type strings, one per value.
        values: The values to encode.

    Returns:
        The encoded bytes, a whole number of 32-byte words.

    Raises:
        ArityError: If the number of types and values differ.
        EncodingError: If a value has the wrong Python type.
        EncodingRangeError: If a value is out of range for its type.
    """
    if len(types) != len(values):
        raise ArityError(len(types), len(values))

    descriptors = [to_descriptor(t) for t in types]
    data = _encode_sequence(descriptors, values)

    logger.debug("Encoded %d values into %d bytes", len(descriptors), len(data))
    return data
