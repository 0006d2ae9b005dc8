"""Function call data: selectors followed by ABI encoded arguments."""

from collections.abc import Sequence
from typing import Any

from Crypto.Hash import keccak

from evmabi.abi import FunctionSignature, to_signature

from .decoding import decode
from .encoding import encode
from .errors import DecodingError

SELECTOR_SIZE = 4


def keccak256(data: bytes) -> bytes:
    """Compute the Keccak-256 hash (not NIST SHA3-256) of ``data``."""
    k = keccak.new(digest_bits=256)
    return k.update(data).digest()


def function_selector(signature: FunctionSignature | str) -> bytes:
    """Return the 4-byte selector of a function signature.

    The signature is canonicalised first, so ``transfer(address, uint256)``
    and ``transfer(address,uint256)`` share a selector.
    """
    canonical = to_signature(signature).canonical
    return keccak256(canonical.encode("ascii"))[:SELECTOR_SIZE]


def encode_function_call(signature: FunctionSignature | str, values: Sequence[Any]) -> bytes:
    """Build call data for a function: selector followed by encoded arguments."""
    sig = to_signature(signature)
    return function_selector(sig) + encode(sig.inputs, values)


def decode_function_call(
    signature: FunctionSignature | str, data: bytes | bytearray | memoryview
) -> list[Any]:
    """Check the selector of call data and decode its arguments."""
    sig = to_signature(signature)
    view = memoryview(data).cast("B")

    if len(view) < SELECTOR_SIZE:
        raise DecodingError(f"Call data of {len(view)} bytes has no selector")

    selector = bytes(view[:SELECTOR_SIZE])
    expected = function_selector(sig)
    if selector != expected:
        raise DecodingError(
            f"Selector 0x{selector.hex()} does not match {sig.canonical} (0x{expected.hex()})", 0
        )
    return decode(sig.inputs, view[SELECTOR_SIZE:])
