"""Function signature parser using Lark."""

import logging
import os
from dataclasses import dataclass
from typing import Any

from dataclasses_json import DataClassJsonMixin
from lark import Lark
from lark.exceptions import LarkError
from lark.visitors import Transformer

from .parser import TypeSyntaxError, parse
from .types import TypeDescriptor

logger = logging.getLogger(__name__)

_g_parser: Lark | None = None


class SignatureSyntaxError(TypeSyntaxError):
    """Raised when a function signature is malformed."""


@dataclass(frozen=True)
class FunctionSignature(DataClassJsonMixin):
    """A function name and its argument types."""

    name: str
    inputs: tuple[TypeDescriptor, ...]

    def __str__(self) -> str:
        return self.canonical

    @property
    def canonical(self) -> str:
        """The signature hashed to derive the function selector."""
        return f"{self.name}({','.join(t.canonical for t in self.inputs)})"


@dataclass
class _RawSignature:
    name: str
    arguments: list[str]


class SignatureTransformer(Transformer):
    """Transform a signature parse tree into its name and type strings."""

    def arguments(self, args: list[Any]) -> list[str]:
        return [str(arg) for arg in args]

    def start(self, args: list[Any]) -> _RawSignature:
        return _RawSignature(name=str(args[0]), arguments=args[1] or [])


def _get_parser() -> Lark:
    global _g_parser

    if not _g_parser:
        with open(f"{os.path.dirname(__file__)}/signature.lark", encoding="utf-8") as f:
            grammar = f.read()

        logger.debug("Building function signature parser")
        _g_parser = Lark(grammar, parser="lalr")
    return _g_parser


def parse_signature(text: str) -> FunctionSignature:
    """Parse a function signature such as ``transfer(address,uint256)``."""
    try:
        tree = _get_parser().parse(text)
    except LarkError as e:
        raise SignatureSyntaxError("Invalid function signature", text) from e

    raw = SignatureTransformer().transform(tree)
    try:
        inputs = tuple(parse(arg) for arg in raw.arguments)
    except TypeSyntaxError as e:
        raise SignatureSyntaxError(f"Invalid argument type {e.type_string!r}", text) from e

    return FunctionSignature(name=raw.name, inputs=inputs)


def to_signature(signature: FunctionSignature | str) -> FunctionSignature:
    """Return ``signature`` as a FunctionSignature, parsing it if needed."""
    if isinstance(signature, FunctionSignature):
        return signature
    return parse_signature(signature)
