"""32-byte word primitives shared by the encoder and decoder."""

from evmabi.abi.types import WORD_SIZE

_WORD_BITS = WORD_SIZE * 8
_WORD_MODULUS = 1 << _WORD_BITS


def ceil32(length: int) -> int:
    """Round a byte length up to a whole number of words."""
    return -(-length // WORD_SIZE) * WORD_SIZE


def pad_right(data: bytes) -> bytes:
    """Zero-pad data on the right up to the next word boundary."""
    return data + b"\x00" * (ceil32(len(data)) - len(data))


def uint_to_word(value: int) -> bytes:
    """Encode a non-negative integer below 2**256 as a big-endian word."""
    return value.to_bytes(WORD_SIZE, "big")


def int_to_word(value: int) -> bytes:
    """Encode a signed integer as a sign-extended two's complement word."""
    return (value % _WORD_MODULUS).to_bytes(WORD_SIZE, "big")


def word_to_uint(word: bytes) -> int:
    return int.from_bytes(word, "big")


def word_to_int(word: bytes) -> int:
    return int.from_bytes(word, "big", signed=True)
