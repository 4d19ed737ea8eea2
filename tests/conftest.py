"""Pytest configuration and shared fixtures."""

from __future__ import annotations

import random
from collections.abc import Callable
from functools import partial
from pathlib import Path

import pytest

from range_remap.mapping import Interval, RangeMap
from range_remap.parser import Almanac, parse_almanac

EXAMPLE_ALMANAC = """\
seeds: 79 14 55 13

seed-to-soil map:
50 98 2
52 50 48

soil-to-fertilizer map:
0 15 37
37 52 2
39 0 15

fertilizer-to-water map:
49 53 8
0 11 42
42 0 7
57 7 4

water-to-light map:
88 18 7
18 25 70

light-to-temperature map:
45 77 23
81 45 19
68 64 13

temperature-to-humidity map:
0 69 1
1 0 69

humidity-to-location map:
60 56 37
56 93 4
"""


def random_table(
    rng: random.Random, source_label: str, destination_label: str, domain: int = 60
) -> RangeMap:
    """Build a table whose source intervals tile random, non-overlapping parts of *domain*."""
    cuts = sorted(rng.sample(range(1, domain), rng.randint(2, 8)))
    entries = []
    for start, end in zip(cuts, cuts[1:]):
        if rng.random() < 0.3:
            continue
        destination_start = rng.randrange(0, domain)
        entries.append(
            (Interval(start, end), Interval.from_length(destination_start, end - start))
        )
    rng.shuffle(entries)
    return RangeMap(source_label, destination_label, tuple(entries))


@pytest.fixture
def seed_to_soil() -> RangeMap:
    """Provide the seed-to-soil table from the example almanac."""
    return RangeMap.from_triples("seed", "soil", [(50, 98, 2), (52, 50, 48)])


@pytest.fixture
def almanac() -> Almanac:
    """Provide the parsed example almanac."""
    return parse_almanac(EXAMPLE_ALMANAC)


@pytest.fixture
def rng() -> random.Random:
    """Provide a seeded random generator so failures are reproducible."""
    return random.Random(20231205)


@pytest.fixture
def make_random_table(rng: random.Random) -> Callable[..., RangeMap]:
    """Provide a factory for random non-overlapping tables drawn from ``rng``."""
    return partial(random_table, rng)


@pytest.fixture
def almanac_file(tmp_path: Path) -> Path:
    """Write the example almanac to a temporary file."""
    path = tmp_path / "input.txt"
    path.write_text(EXAMPLE_ALMANAC)
    return path
