"""Encoded size calculation for ABI types and argument lists."""

from dataclasses import dataclass
from enum import StrEnum, auto

from .types import WORD_SIZE, TypeDescriptor


class SizeKind(StrEnum):
    """Classification of encoded size characteristics."""

    STATIC = auto()  # Encoded inline in the head region
    DYNAMIC = auto()  # Offset in the head region, payload in the tail


@dataclass(frozen=True)
class SizeInfo:
    """Size information for a single type."""

    abi_type: TypeDescriptor
    head_size: int  # Bytes occupied in the enclosing head region
    min_size: int  # Smallest possible encoding, head and tail together
    kind: SizeKind

    @property
    def is_static(self) -> bool:
        return self.kind == SizeKind.STATIC


@dataclass(frozen=True)
class LayoutInfo:
    """Size information for an argument list."""

    types: tuple[SizeInfo, ...]
    head_size: int
    min_size: int
    static_size: int | None  # None if any argument is dynamic


class SizeCalculator:
    """Calculate encoded sizes for ABI types."""

    def __init__(self) -> None:
        self._cache: dict[TypeDescriptor, int] = {}

    def calc_min_tail_size(self, t: TypeDescriptor) -> int:
        """Smallest tail payload a dynamic type can encode to."""
        if t in self._cache:
            return self._cache[t]

        # Fixed dimensions wrapped around the outermost dynamic one
        outer = len(t.dims)
        while outer and t.dims[outer - 1]:
            outer -= 1

        # string, bytes and T[]: a zero length prefix and no data
        size = WORD_SIZE
        for dim in t.dims[outer:]:
            # T[k] of a dynamic T: k offsets, each followed by a minimal element
            size = dim * (WORD_SIZE + size)

        self._cache[t] = size
        return size

    def calc_type_size(self, t: TypeDescriptor) -> SizeInfo:
        """Calculate size information for a single type."""
        if t.size is not None:
            return SizeInfo(t, t.size, t.size, SizeKind.STATIC)
        return SizeInfo(t, WORD_SIZE, WORD_SIZE + self.calc_min_tail_size(t), SizeKind.DYNAMIC)

    def calc_layout(self, types: list[TypeDescriptor]) -> LayoutInfo:
        """Calculate size information for an argument list."""
        infos = tuple(self.calc_type_size(t) for t in types)

        head_size = sum(info.head_size for info in infos)
        min_size = sum(info.min_size for info in infos)
        static_size = head_size if all(info.is_static for info in infos) else None

        return LayoutInfo(
            types=infos,
            head_size=head_size,
            min_size=min_size,
            static_size=static_size,
        )


def calculate_layout(types: list[TypeDescriptor]) -> LayoutInfo:
    """Calculate size information for an argument list."""
    calc = SizeCalculator()
    return calc.calc_layout(types)
