from __future__ import annotations
from dataclasses import dataclass
from typing import Iterable, List, Tuple

from .errors import MalformedInterval


def _clamp(value: int, lo: int, hi: int) -> int:
    return max(lo, min(value, hi))


@dataclass(frozen=True, order=True)
class Interval:
    """Half-open integer range [start, end). start == end is the empty interval."""
    start: int
    end: int

    def __post_init__(self):
        if self.start > self.end:
            raise MalformedInterval(f"Interval start ({self.start}) must be <= end ({self.end})")

    @staticmethod
    def from_length(start: int, length: int) -> "Interval":
        if length < 0:
            raise MalformedInterval(f"Interval length must be >= 0, got {length}")
        return Interval(start, start + length)

    def __len__(self) -> int:
        return self.end - self.start

    def __contains__(self, point: int) -> bool:
        return self.contains(point)

    def __str__(self) -> str:
        return f"[{self.start}, {self.end})"

    def is_empty(self) -> bool:
        return self.start == self.end

    def contains(self, point: int) -> bool:
        return self.start <= point < self.end

    def shift(self, offset: int) -> "Interval":
        return Interval(self.start + offset, self.end + offset)

    def slice(self, other: "Interval") -> Tuple["Interval", "Interval", "Interval"]:
        """Split self into (below other, inside other, above other).

        The three pieces tile self in order; empty pieces sit at the point
        where other's bound was clamped into self.
        """
        cut_lo = _clamp(other.start, self.start, self.end)
        cut_hi = _clamp(other.end, cut_lo, self.end)
        return Interval(self.start, cut_lo), Interval(cut_lo, cut_hi), Interval(cut_hi, self.end)

    def intersection(self, other: "Interval") -> "Interval":
        return self.slice(other)[1]

    def overlaps(self, other: "Interval") -> bool:
        return not self.intersection(other).is_empty()


def difference(interval: Interval, holes: Iterable[Interval]) -> List[Interval]:
    """Parts of interval not covered by any of holes."""
    remainder = [interval] if not interval.is_empty() else []
    for hole in holes:
        next_remainder = []
        for piece in remainder:
            below, _, above = piece.slice(hole)
            next_remainder.extend(p for p in (below, above) if not p.is_empty())
        remainder = next_remainder
        if not remainder:
            break
    return remainder


def merge_intervals(intervals: Iterable[Interval], merge_gap: int = 0) -> List[Interval]:
    """Sort and merge overlapping or touching intervals into a disjoint list."""
    xs = sorted(iv for iv in intervals if not iv.is_empty())
    if not xs:
        return []
    out = []
    cs, ce = xs[0].start, xs[0].end
    for iv in xs[1:]:
        if iv.start <= ce + merge_gap:
            ce = max(ce, iv.end)
        else:
            out.append(Interval(cs, ce))
            cs, ce = iv.start, iv.end
    out.append(Interval(cs, ce))
    return out


def total_length(intervals: Iterable[Interval]) -> int:
    return sum(len(iv) for iv in intervals)
