from __future__ import annotations
from bisect import bisect_left, bisect_right
from dataclasses import dataclass, field
from typing import Iterable, Iterator, List, Optional, Tuple

import numpy as np

from .errors import IntegerOverflow, OverlappingRanges
from .intervals import Interval
from .stages import Stage

_INT64 = np.iinfo(np.int64)


@dataclass(frozen=True)
class ShiftRange:
    """Every integer v in interval maps to v + offset."""
    interval: Interval
    offset: int

    @staticmethod
    def from_triple(destination_start: int, source_start: int, length: int) -> "ShiftRange":
        return ShiftRange(Interval.from_length(source_start, length), destination_start - source_start)

    @property
    def image_interval(self) -> Interval:
        return self.interval.shift(self.offset)


@dataclass(frozen=True)
class ShiftMapping:
    """One remapping stage: disjoint shift ranges, identity everywhere else.

    Ranges are kept sorted by start so that point lookups are a binary
    search. source/target are optional stage tags; None chains with anything.
    """
    ranges: Tuple[ShiftRange, ...] = ()
    source: Optional[Stage] = None
    target: Optional[Stage] = None
    _starts: Tuple[int, ...] = field(init=False, repr=False, compare=False)

    def __post_init__(self):
        ranges = tuple(sorted((r for r in self.ranges if not r.interval.is_empty()),
                              key=lambda r: r.interval))
        for prev, cur in zip(ranges, ranges[1:]):
            if prev.interval.end > cur.interval.start:
                raise OverlappingRanges(
                    f"shift ranges {prev.interval} and {cur.interval} overlap in {self.label}"
                )
        object.__setattr__(self, "ranges", ranges)
        object.__setattr__(self, "_starts", tuple(r.interval.start for r in ranges))

    @staticmethod
    def from_triples(triples: Iterable[Tuple[int, int, int]],
                     source: Optional[Stage] = None,
                     target: Optional[Stage] = None) -> "ShiftMapping":
        """Build from (destination_start, source_start, length) triples."""
        return ShiftMapping(tuple(ShiftRange.from_triple(d, s, n) for (d, s, n) in triples), source, target)

    @staticmethod
    def identity(source: Optional[Stage] = None, target: Optional[Stage] = None) -> "ShiftMapping":
        return ShiftMapping((), source, target)

    @property
    def label(self) -> str:
        src = self.source.value if self.source else "?"
        dst = self.target.value if self.target else "?"
        return f"{src}-to-{dst}"

    def __len__(self) -> int:
        return len(self.ranges)

    def __iter__(self) -> Iterator[ShiftRange]:
        return iter(self.ranges)

    def domain(self) -> List[Interval]:
        return [r.interval for r in self.ranges]

    def overlapping(self, interval: Interval) -> List[ShiftRange]:
        """Shift ranges whose intervals intersect interval, in order."""
        if interval.is_empty():
            return []
        lo = max(bisect_right(self._starts, interval.start) - 1, 0)
        hi = bisect_left(self._starts, interval.end)
        return [r for r in self.ranges[lo:hi] if r.interval.overlaps(interval)]

    # -----------------------------
    # Point and set images
    # -----------------------------
    def image(self, point: int) -> int:
        idx = bisect_right(self._starts, point) - 1
        if idx >= 0:
            rng = self.ranges[idx]
            if rng.interval.contains(point):
                return point + rng.offset
        return point

    def _fits_int64(self, lo: int, hi: int) -> bool:
        """True when [lo, hi], the range bounds and every image fit in int64."""
        offsets = [r.offset for r in self.ranges] + [0]
        bounds = [lo, hi, lo + min(offsets), hi + max(offsets)]
        bounds.extend(b for r in self.ranges for b in (r.interval.start, r.interval.end))
        return all(_INT64.min <= b <= _INT64.max for b in bounds)

    def image_array(self, values) -> np.ndarray:
        """Vectorised image of an int64 array of points.

        Raises IntegerOverflow instead of letting int64 arithmetic wrap.
        """
        try:
            values = np.asarray(values, dtype=np.int64)
        except OverflowError as exc:
            raise IntegerOverflow(f"points do not fit in int64: {exc}") from exc
        if not self.ranges or values.size == 0:
            return values.copy()
        if not self._fits_int64(int(values.min()), int(values.max())):
            raise IntegerOverflow(f"images under {self.label} leave the int64 range")
        starts = np.asarray(self._starts, dtype=np.int64)
        ends = np.asarray([r.interval.end for r in self.ranges], dtype=np.int64)
        offsets = np.asarray([r.offset for r in self.ranges], dtype=np.int64)
        idx = np.searchsorted(starts, values, side="right") - 1
        safe = np.clip(idx, 0, None)
        hit = (idx >= 0) & (values < ends[safe])
        return values + np.where(hit, offsets[safe], 0)

    def _images(self, points: Iterable[int]) -> List[int]:
        pts = list(points)
        if not pts:
            return []
        if self._fits_int64(min(pts), max(pts)):
            return [int(v) for v in self.image_array(np.asarray(pts, dtype=np.int64))]
        # outside int64: exact Python ints, one lookup per point
        return [self.image(p) for p in pts]

    def image_set(self, points: Iterable[int]) -> set:
        """Image of a small explicit set of points. Use image_range for ranges."""
        return set(self._images(points))

    # -----------------------------
    # Range images
    # -----------------------------
    def image_range(self, interval: Interval) -> List[Interval]:
        """Image of a whole range: shifted holes first, then untouched remainders.

        Each overlapping shift range punches its intersection out of the
        still-unshifted slices and moves it by its offset.
        """
        shifted = []
        unshifted = [interval] if not interval.is_empty() else []
        for rng in self.overlapping(interval):
            next_unshifted = []
            for piece in unshifted:
                below, mid, above = piece.slice(rng.interval)
                if not mid.is_empty():
                    shifted.append(mid.shift(rng.offset))
                next_unshifted.extend(p for p in (below, above) if not p.is_empty())
            unshifted = next_unshifted
        # images of different input ranges may overlap; callers merge if needed
        return shifted + unshifted

    def image_multi_range(self, intervals: Iterable[Interval]) -> List[Interval]:
        out = []
        for iv in intervals:
            out.extend(self.image_range(iv))
        return out

    # -----------------------------
    # Algebra
    # -----------------------------
    def simplified(self) -> "ShiftMapping":
        """Pointwise-equal mapping without zero offsets and with touching equal offsets merged."""
        out: List[ShiftRange] = []
        for rng in self.ranges:
            if rng.offset == 0:
                continue
            if out and out[-1].offset == rng.offset and out[-1].interval.end == rng.interval.start:
                out[-1] = ShiftRange(Interval(out[-1].interval.start, rng.interval.end), rng.offset)
            else:
                out.append(rng)
        return ShiftMapping(tuple(out), self.source, self.target)

    def compose(self, other: "ShiftMapping") -> "ShiftMapping":
        """Return a map equivalent to applying self then other."""
        from .composer import compose
        return compose(self, other)

    def agrees_with(self, other: "ShiftMapping", points: Iterable[int]) -> bool:
        pts = list(points)
        return self._images(pts) == other._images(pts)
