from __future__ import annotations

import logging
from collections.abc import Iterable, Iterator, Sequence
from dataclasses import dataclass, field
from functools import cached_property

from range_remap.errors import ChainBroken
from range_remap.mapping import Interval, RangeMap, compose

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class PipelineConfig:
    origin_label: str = "seed"
    terminal_label: str = "location"


@dataclass(frozen=True)
class Pipeline:
    """Chain of tables walked from the origin label to the terminal label.

    Tables are found by their ``source_label`` at each hop, so callers may pass
    them in any order. No two tables are expected to share a source label; if
    they do, the first one passed is used.
    """

    tables: tuple[RangeMap, ...]
    config: PipelineConfig = field(default_factory=PipelineConfig)

    def __post_init__(self) -> None:
        object.__setattr__(self, "tables", tuple(self.tables))

    @property
    def origin_label(self) -> str:
        return self.config.origin_label

    @property
    def terminal_label(self) -> str:
        return self.config.terminal_label

    def table_for(self, label: str) -> RangeMap:
        for table in self.tables:
            if table.source_label == label:
                return table
        raise ChainBroken(label)

    def chain(self) -> list[RangeMap]:
        """Return the tables in the order a lookup visits them."""
        return list(self._resolved_chain)

    @cached_property
    def _resolved_chain(self) -> tuple[RangeMap, ...]:
        visited = {self.origin_label}
        label = self.origin_label
        tables: list[RangeMap] = []
        while label != self.terminal_label:
            table = self.table_for(label)
            label = table.destination_label
            if label in visited:
                raise ChainBroken(label, reason="label revisited, tables form a cycle")
            visited.add(label)
            tables.append(table)
        logger.debug(
            "Resolved chain %s: %s",
            self.origin_label,
            " -> ".join(t.destination_label for t in tables) or "(empty)",
        )
        return tuple(tables)

    def _walk(self, value: int) -> Iterator[tuple[str, int]]:
        for table in self._resolved_chain:
            yield table.source_label, value
            value = table.map(value)
        yield self.terminal_label, value

    def lookup(self, value: int) -> int:
        """Map an origin value through every table to the terminal namespace."""
        for _, value in self._walk(value):
            pass
        return value

    def trace(self, value: int) -> list[tuple[str, int]]:
        """Return the ``(label, value)`` hops of a lookup, origin first."""
        return list(self._walk(value))

    def compose_chain(self) -> RangeMap:
        """Collapse the whole chain into one table from origin to terminal."""
        return self._collapsed

    @cached_property
    def _collapsed(self) -> RangeMap:
        tables = self._resolved_chain
        if not tables:
            return RangeMap.identity(self.origin_label, self.terminal_label)
        collapsed = tables[0]
        for table in tables[1:]:
            collapsed = compose(collapsed, table)
        logger.debug("Collapsed %d tables into %d entries", len(tables), len(collapsed.entries))
        return collapsed

    def lookup_min(self, values: Iterable[int]) -> int | None:
        results = [self.lookup(value) for value in values]
        return min(results) if results else None

    def lookup_min_over_ranges(self, ranges: Sequence[Interval]) -> int | None:
        """Return the lowest terminal value reachable from any value in *ranges*.

        The collapsed table is a constant offset between consecutive
        breakpoints, so its minimum over a range is attained at the range start
        or at a breakpoint inside the range.
        """
        ranges = [interval for interval in ranges if not interval.is_empty]
        if not ranges:
            return None

        collapsed = self.compose_chain()
        breakpoints = sorted(collapsed.source_breakpoints())
        best: int | None = None
        for interval in ranges:
            candidates = [interval.start]
            candidates.extend(p for p in breakpoints if interval.start < p < interval.end)
            low = min(collapsed.map(c) for c in candidates)
            if best is None or low < best:
                best = low
        return best

    def lookup_min_over_ranges_brute_force(self, ranges: Sequence[Interval]) -> int | None:
        """Per-value reference for :meth:`lookup_min_over_ranges`."""
        best: int | None = None
        for interval in ranges:
            for value in range(interval.start, interval.end):
                result = self.lookup(value)
                if best is None or result < best:
                    best = result
        return best
