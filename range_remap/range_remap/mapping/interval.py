"""Half-open integer intervals."""

from __future__ import annotations

from dataclasses import dataclass

from range_remap.errors import MalformedEntry

# Bounds are unsigned 64-bit, so the largest value an interval can hold is MAX_VALUE - 1.
MAX_VALUE = 2**64 - 1


@dataclass(frozen=True, order=True)
class Interval:
    """Half-open range ``[start, end)`` of non-negative integers."""

    start: int
    end: int

    def __post_init__(self) -> None:
        if self.start < 0 or self.end < 0:
            raise MalformedEntry(f"Interval bounds must be non-negative: {self}")
        if self.start > self.end:
            raise MalformedEntry(f"Interval start exceeds end: {self}")
        if self.end > MAX_VALUE:
            raise MalformedEntry(f"Interval end exceeds {MAX_VALUE}: {self}")

    @classmethod
    def from_length(cls, start: int, length: int) -> Interval:
        if length < 0:
            raise MalformedEntry(f"Interval length must be non-negative: {length}")
        return cls(start, start + length)

    @property
    def is_empty(self) -> bool:
        return self.start == self.end

    @property
    def length(self) -> int:
        # Not __len__: widths past sys.maxsize would overflow it.
        return self.end - self.start

    def __contains__(self, value: object) -> bool:
        return isinstance(value, int) and self.start <= value < self.end

    def __str__(self) -> str:
        return f"[{self.start}, {self.end})"
