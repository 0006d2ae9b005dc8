"""Type descriptors for Ethereum contract ABI types."""

from dataclasses import dataclass
from functools import cached_property

from dataclasses_json import DataClassJsonMixin

__all__ = [
    "BASE_ALIASES",
    "BASE_TYPES",
    "SIZE_TYPE",
    "WORD_SIZE",
    "TypeDescriptor",
    "base_types",
    "size_type",
]

# Every ABI value occupies a whole number of 32-byte words
WORD_SIZE = 32

BASE_TYPES = frozenset(
    [
        "uint",
        "int",
        "address",
        "bool",
        "fixed",
        "ufixed",
        "bytes",
        "string",
        "hash",
    ]
)

# Legacy spellings accepted by the parser, mapped to their canonical base
BASE_ALIASES: dict[str, str] = {
    "real": "fixed",
    "ureal": "ufixed",
}


@dataclass(frozen=True)
class TypeDescriptor(DataClassJsonMixin):
    """A parsed ABI type.

    - base: canonical base name (``uint``, ``bytes``, ...)
    - sub: width qualifier as written, e.g. ``"256"`` or ``"128x128"``, or ``""``
    - dims: array dimensions in textual order; the last entry is the
      outermost axis and ``0`` marks a dynamic ``[]`` dimension

    ``size`` is the static encoded size in bytes, or None for dynamic types.
    """

    base: str
    sub: str = ""
    dims: tuple[int, ...] = ()

    def __str__(self) -> str:
        return self.canonical

    @cached_property
    def canonical(self) -> str:
        """The canonical type string, as used in function signatures."""
        suffix = "".join(f"[{dim}]" if dim else "[]" for dim in self.dims)
        return f"{self.base}{self.sub}{suffix}"

    @cached_property
    def size(self) -> int | None:
        if self.base == "string" or (self.base == "bytes" and not self.sub):
            return None

        # A fixed array is as large as its elements times the dimension
        size = WORD_SIZE
        for dim in self.dims:
            if dim == 0:
                return None
            size *= dim
        return size

    @cached_property
    def subtype(self) -> "TypeDescriptor":
        """Element type of the outermost array axis."""
        if not self.dims:
            raise ValueError(f"{self.canonical} is not an array type")
        return TypeDescriptor(self.base, self.sub, self.dims[:-1])

    @property
    def is_dynamic(self) -> bool:
        return self.size is None

    def dynamic(self) -> bool:
        """Check if the encoded size of this type depends on its value."""
        return self.is_dynamic

    @property
    def is_array(self) -> bool:
        return bool(self.dims)

    @property
    def bits(self) -> int | None:
        """Total bit width of integer, hash and fixed-point types."""
        if self.base in ("uint", "int", "hash"):
            return int(self.sub)
        if self.base in ("fixed", "ufixed"):
            high, low = self.fixed_bits
            return high + low
        return None

    @property
    def fixed_bits(self) -> tuple[int, int]:
        """The (high, low) bit split of a fixed-point type."""
        if self.base not in ("fixed", "ufixed"):
            raise ValueError(f"{self.canonical} is not a fixed-point type")
        high, low = self.sub.split("x")
        return int(high), int(low)

    @property
    def byte_length(self) -> int | None:
        """Length of a sized ``bytesN`` type, None for dynamic ``bytes``."""
        if self.base != "bytes" or not self.sub:
            return None
        return int(self.sub)


SIZE_TYPE = TypeDescriptor("uint", "256")


def size_type() -> TypeDescriptor:
    """Return the ``uint256`` descriptor used for lengths and offsets."""
    return SIZE_TYPE


def base_types() -> list[str]:
    """Return a list of canonical base type names."""
    return sorted(BASE_TYPES)
