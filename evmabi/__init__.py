"""evmabi - Ethereum contract ABI type grammar and codec."""

from importlib.metadata import PackageNotFoundError, version

from .abi import TypeDescriptor as TypeDescriptor
from .abi import TypeSyntaxError as TypeSyntaxError
from .abi import parse as parse
from .abi import size_type as size_type
from .codec import ArityError as ArityError
from .codec import DecodingError as DecodingError
from .codec import EncodingRangeError as EncodingRangeError
from .codec import decode as decode
from .codec import encode as encode

try:
    __version__ = version("evmabi")
except PackageNotFoundError:
    __version__ = "(local)"
