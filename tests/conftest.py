from __future__ import annotations

import random

import matplotlib

matplotlib.use("Agg")

import pytest

from remap_pipeline import Interval, ShiftMapping, ShiftRange

SAMPLE_ALMANAC = """\
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


@pytest.fixture
def sample_text() -> str:
    return SAMPLE_ALMANAC


@pytest.fixture
def sample_file(tmp_path):
    path = tmp_path / "almanac.txt"
    path.write_text(SAMPLE_ALMANAC, encoding="utf-8")
    return path


def _random_mapping(rng: random.Random, n: int = 4, lo: int = 0, hi: int = 200, max_offset: int = 40) -> ShiftMapping:
    cuts = sorted(rng.sample(range(lo, hi), 2 * n))
    ranges = []
    prev_end = None
    for start, end in zip(cuts[::2], cuts[1::2]):
        # sometimes make neighbours touch
        if prev_end is not None and rng.random() < 0.3:
            start = prev_end
        ranges.append(ShiftRange(Interval(start, end), rng.randint(-max_offset, max_offset)))
        prev_end = end
    return ShiftMapping(tuple(ranges))


@pytest.fixture
def random_mapping():
    """Factory for small disjoint mappings driven by a seeded Random."""
    return _random_mapping
