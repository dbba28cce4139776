"""Tests for remap_pipeline.plotting (Agg backend, see conftest)."""
from __future__ import annotations

from remap_pipeline import Interval, ShiftMapping, ShiftRange, plot_mapping, plot_stage_ranges


def test_plot_stage_ranges_saves_png(tmp_path) -> None:
    path = tmp_path / "ranges.png"
    plot_stage_ranges(
        {"seeds": [Interval(79, 93), Interval(55, 68)], "empty": []},
        title="ranges",
        show=False,
        save_path=str(path),
    )
    assert path.stat().st_size > 0


def test_plot_mapping_saves_png(tmp_path) -> None:
    m = ShiftMapping((ShiftRange(Interval(98, 100), -48), ShiftRange(Interval(50, 98), 2)))
    path = tmp_path / "mapping.png"
    plot_mapping(m, show=False, save_path=str(path))
    assert path.stat().st_size > 0


def test_plot_identity_mapping(tmp_path) -> None:
    path = tmp_path / "identity.png"
    plot_mapping(ShiftMapping.identity(), show=False, save_path=str(path))
    assert path.exists()
