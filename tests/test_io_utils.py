"""Tests for remap_pipeline.io_utils."""
from __future__ import annotations

import json

import pytest

from remap_pipeline import (
    AlmanacParseError, Interval, MalformedInterval, Stage, load_almanac, load_intervals,
    parse_almanac, save_intervals_json,
)


class TestParseAlmanac:
    def test_sample(self, sample_text) -> None:
        almanac = parse_almanac(sample_text)
        assert almanac.seeds == [79, 14, 55, 13]
        assert len(almanac.stages) == 7
        assert almanac.stages[0].source is Stage.SEED
        assert almanac.stages[-1].target is Stage.LOCATION
        assert almanac.stages[0].image(98) == 50

    def test_seed_views(self, sample_text) -> None:
        almanac = parse_almanac(sample_text)
        assert almanac.seed_set() == {79, 14, 55, 13}
        assert almanac.seed_ranges() == [Interval(79, 93), Interval(55, 68)]

    def test_odd_seed_count_for_ranges(self) -> None:
        with pytest.raises(AlmanacParseError):
            parse_almanac("seeds: 1 2 3\n").seed_ranges()

    def test_load_from_file(self, sample_file) -> None:
        assert load_almanac(sample_file).seeds == [79, 14, 55, 13]

    def test_leading_blank_lines_and_no_stages(self) -> None:
        almanac = parse_almanac("\n\nseeds: 5\n")
        assert almanac.seeds == [5]
        assert almanac.stages == []

    @pytest.mark.parametrize(
        "text, line_no",
        [
            ("", None),
            ("soil: 1 2\n", 1),
            ("seeds: 1 x\n", 1),
            ("seeds: 1\n\nseed to soil:\n1 2 3\n", 3),
            ("seeds: 1\n\nseed-to-mud map:\n1 2 3\n", 3),
            ("seeds: 1\n\nseed-to-soil map:\n1 2\n", 4),
            ("seeds: 1\n\nseed-to-soil map:\n1 2 -3\n", 4),
            ("seeds: 1\n\nseed-to-soil map:\n0 0 10\n50 5 3\n", 3),
            ("seeds: 1\n\nseed-to-soil map:\n1 2 3\n\nwater-to-light map:\n1 2 3\n", 6),
        ],
    )
    def test_malformed(self, text, line_no) -> None:
        with pytest.raises(AlmanacParseError) as info:
            parse_almanac(text)
        assert info.value.line_no == line_no


class TestIntervalFiles:
    def test_json_roundtrip(self, tmp_path) -> None:
        spans = [Interval(46, 56), Interval(60, 61)]
        path = tmp_path / "out" / "spans.json"
        save_intervals_json(spans, path)
        assert json.loads(path.read_text(encoding="utf-8")) == [[46, 56], [60, 61]]
        assert load_intervals(path) == spans

    def test_plaintext(self, tmp_path) -> None:
        path = tmp_path / "spans.txt"
        path.write_text("# comment\n1, 4\n\n10 20\n", encoding="utf-8")
        assert load_intervals(path) == [Interval(1, 4), Interval(10, 20)]

    @pytest.mark.parametrize("content", ["[[1, 2]", "[[1, 2, 3]]", "5", "[[\"a\", 2]]"])
    def test_malformed_json(self, tmp_path, content) -> None:
        path = tmp_path / "spans.json"
        path.write_text(content, encoding="utf-8")
        with pytest.raises(AlmanacParseError):
            load_intervals(path)

    def test_plaintext_errors(self, tmp_path) -> None:
        path = tmp_path / "spans.txt"
        path.write_text("1 2 3\n", encoding="utf-8")
        with pytest.raises(AlmanacParseError):
            load_intervals(path)
        path.write_text("5 1\n", encoding="utf-8")
        with pytest.raises(MalformedInterval):
            load_intervals(path)
