"""Parser for the almanac text format.

An almanac starts with a seeds line followed by blank-line separated map
blocks::

    seeds: 79 14 55 13

    seed-to-soil map:
    50 98 2
    52 50 48
"""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass

from range_remap.errors import AlmanacFormatError
from range_remap.mapping import MAX_VALUE, Interval, RangeMap
from range_remap.pipeline import Pipeline, PipelineConfig

logger = logging.getLogger(__name__)

_SEEDS_PREFIX = "seeds:"

# Matches map headers like "seed-to-soil map:"
_MAP_HEADER_RE = re.compile(r"^(?P<source>\w+)-to-(?P<destination>\w+) map:$")


@dataclass(frozen=True)
class Almanac:
    seeds: tuple[int, ...]
    pipeline: Pipeline

    @property
    def seed_ranges(self) -> list[Interval]:
        """Seed numbers read as consecutive ``(start, length)`` pairs."""
        if len(self.seeds) % 2:
            raise AlmanacFormatError(
                f"Seed ranges need an even count of numbers, got {len(self.seeds)}"
            )
        ranges = []
        for start, length in zip(self.seeds[::2], self.seeds[1::2]):
            if start + length > MAX_VALUE:
                raise AlmanacFormatError(f"Seed range {start} {length} ends past {MAX_VALUE}")
            ranges.append(Interval.from_length(start, length))
        return ranges


def parse_almanac(text: str, config: PipelineConfig | None = None) -> Almanac:
    blocks = _split_blocks(text)
    if not blocks:
        raise AlmanacFormatError("Almanac is empty: a seeds line is required")

    seeds_block, *map_blocks = blocks
    if len(seeds_block) != 1:
        raise AlmanacFormatError(f"Expected a single seeds line, got: {seeds_block!r}")
    seeds = _parse_seeds(seeds_block[0])

    tables = [_parse_map_block(block) for block in map_blocks]
    logger.debug("Parsed almanac with %d seed numbers and %d tables", len(seeds), len(tables))

    pipeline = Pipeline(tuple(tables), config or PipelineConfig())
    return Almanac(seeds=seeds, pipeline=pipeline)


def _split_blocks(text: str) -> list[list[str]]:
    blocks: list[list[str]] = []
    current: list[str] = []
    for raw_line in text.splitlines():
        line = raw_line.strip()
        if not line:
            if current:
                blocks.append(current)
                current = []
            continue
        current.append(line)
    if current:
        blocks.append(current)
    return blocks


def _parse_seeds(line: str) -> tuple[int, ...]:
    if not line.startswith(_SEEDS_PREFIX):
        raise AlmanacFormatError(f"Invalid seeds definition: {line!r}")
    return tuple(_parse_numbers(line[len(_SEEDS_PREFIX) :], line))


def _parse_map_block(block: list[str]) -> RangeMap:
    header, *entry_lines = block
    match = _MAP_HEADER_RE.match(header)
    if match is None:
        raise AlmanacFormatError(f"Invalid map header: {header!r}")

    triples = []
    for line in entry_lines:
        numbers = _parse_numbers(line, line)
        if len(numbers) != 3:
            raise AlmanacFormatError(
                f"Map entry needs destination, source and length, got: {line!r}"
            )
        destination_start, source_start, length = numbers
        if max(destination_start, source_start) + length > MAX_VALUE:
            raise AlmanacFormatError(f"Map entry ends past {MAX_VALUE}: {line!r}")
        triples.append((destination_start, source_start, length))

    return RangeMap.from_triples(match["source"], match["destination"], triples)


def _parse_numbers(text: str, line: str) -> list[int]:
    numbers = []
    for token in text.split():
        if not (token.isascii() and token.isdigit()):
            raise AlmanacFormatError(f"Expected a non-negative integer, got {token!r} in {line!r}")
        numbers.append(int(token))
        if numbers[-1] > MAX_VALUE:
            raise AlmanacFormatError(f"Number {token} exceeds {MAX_VALUE} in {line!r}")
    return numbers
