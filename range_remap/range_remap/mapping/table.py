"""Range tables: sparse interval remapping with identity fallback."""

from __future__ import annotations

import logging
from collections.abc import Iterable
from dataclasses import dataclass, field

from range_remap.errors import LabelMismatch, MalformedEntry
from range_remap.mapping.interval import Interval

logger = logging.getLogger(__name__)

Entry = tuple[Interval, Interval]
Triple = tuple[int, int, int]


@dataclass(frozen=True)
class RangeMap:
    """One named mapping from ``source_label`` values to ``destination_label`` values.

    Each entry shifts a source interval onto a destination interval of the same
    length. Values covered by no entry map to themselves. When source intervals
    overlap, the entry constructed first wins.
    """

    source_label: str
    destination_label: str
    entries: tuple[Entry, ...] = field(default=())

    def __post_init__(self) -> None:
        kept: list[Entry] = []
        for source, destination in self.entries:
            if source.length != destination.length:
                raise MalformedEntry(
                    f"{self}: source {source} and destination {destination} differ in length"
                )
            if source.is_empty:
                continue
            kept.append((source, destination))
        object.__setattr__(self, "entries", tuple(kept))

    @classmethod
    def from_triples(
        cls, source_label: str, destination_label: str, triples: Iterable[Triple]
    ) -> RangeMap:
        """Build a table from ``(destination_start, source_start, length)`` triples."""
        entries = []
        for destination_start, source_start, length in triples:
            entries.append(
                (
                    Interval.from_length(source_start, length),
                    Interval.from_length(destination_start, length),
                )
            )
        return cls(source_label, destination_label, tuple(entries))

    @classmethod
    def identity(cls, source_label: str, destination_label: str) -> RangeMap:
        return cls(source_label, destination_label)

    def map(self, value: int) -> int:
        for source, destination in self.entries:
            if source.start <= value < source.end:
                return destination.start + (value - source.start)
        # Identity fallback for everything no entry covers.
        return value

    def source_breakpoints(self) -> set[int]:
        points: set[int] = set()
        for source, _ in self.entries:
            points.add(source.start)
            points.add(source.end)
        return points

    def destination_breakpoints(self) -> set[int]:
        points: set[int] = set()
        for _, destination in self.entries:
            points.add(destination.start)
            points.add(destination.end)
        return points

    def preimages(self, value: int) -> set[int]:
        """Return every source value that this table maps onto *value*."""
        found: set[int] = set()
        if self.map(value) == value:
            found.add(value)
        for index, (source, destination) in enumerate(self.entries):
            if destination.start <= value < destination.end:
                candidate = source.start + (value - destination.start)
                # Skip candidates shadowed by an earlier overlapping entry.
                if self._first_match(candidate) == index:
                    found.add(candidate)
        return found

    def to_triples(self) -> list[Triple]:
        return [(dst.start, src.start, src.length) for src, dst in self.entries]

    def _first_match(self, value: int) -> int | None:
        for index, (source, _) in enumerate(self.entries):
            if source.start <= value < source.end:
                return index
        return None

    def __str__(self) -> str:
        return f"{self.source_label}-to-{self.destination_label} map"


def compose(first: RangeMap, second: RangeMap) -> RangeMap:
    """Merge two adjacent tables into one table equal to applying *first* then *second*.

    The composed table is piecewise affine with pieces bounded by the source
    breakpoints of *first* and by the points that *first* sends onto a source
    breakpoint of *second*. Inside one piece neither input switches entries, so
    evaluating the left endpoint fixes the offset for the whole piece. Outside
    the outermost breakpoints both inputs are identity and no entry is needed.
    """
    if first.destination_label != second.source_label:
        raise LabelMismatch(str(first), str(second))

    breakpoints = first.source_breakpoints()
    for point in second.source_breakpoints():
        breakpoints |= first.preimages(point)
    ordered = sorted(breakpoints)

    entries: list[Entry] = []
    for lo, hi in zip(ordered, ordered[1:]):
        destination_start = second.map(first.map(lo))
        entries.append((Interval(lo, hi), Interval.from_length(destination_start, hi - lo)))

    composed = RangeMap(first.source_label, second.destination_label, tuple(entries))
    logger.debug(
        "Composed %s (%d entries) with %s (%d entries) into %d entries",
        first,
        len(first.entries),
        second,
        len(second.entries),
        len(composed.entries),
    )
    return composed
