"""Exceptions raised by the ABI value codec."""


class CodecError(RuntimeError):
    """Base exception for codec errors."""


class ArityError(CodecError):
    """Raised when the number of types and values differ."""

    def __init__(self, expected: int, actual: int) -> None:
        super().__init__(f"Expected {expected} values for {expected} types, got {actual}")
        self.expected = expected
        self.actual = actual


class EncodingError(CodecError):
    """Raised when a value cannot be encoded as its declared type."""

    def __init__(self, abi_type: str, message: str) -> None:
        super().__init__(f"Cannot encode {abi_type}: {message}")
        self.abi_type = abi_type


class EncodingRangeError(EncodingError):
    """Raised when a value is out of range for its declared type."""


class DecodingError(CodecError):
    """Raised when data cannot be decoded as the expected types."""

    def __init__(self, message: str, offset: int | None = None) -> None:
        if offset is not None:
            message = f"{message} (at byte offset {offset})"
        super().__init__(message)
        self.offset = offset
