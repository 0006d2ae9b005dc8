"""Ethereum contract ABI value codec."""

from .decoding import decode as decode
from .encoding import encode as encode
from .encoding import encode_single as encode_single
from .errors import ArityError as ArityError
from .errors import CodecError as CodecError
from .errors import DecodingError as DecodingError
from .errors import EncodingError as EncodingError
from .errors import EncodingRangeError as EncodingRangeError
from .function import decode_function_call as decode_function_call
from .function import encode_function_call as encode_function_call
from .function import function_selector as function_selector
from .function import keccak256 as keccak256
