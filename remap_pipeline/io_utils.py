from __future__ import annotations
from dataclasses import dataclass, field
from typing import List, Optional, Set, Union
import json
import re
from pathlib import Path

from .errors import AlmanacParseError
from .intervals import Interval
from .shift_map import ShiftMapping, ShiftRange
from .stages import Stage, check_chain

_HEADER = re.compile(r"^(\w+)-to-(\w+) map:$")


@dataclass
class Almanac:
    seeds: List[int]
    stages: List[ShiftMapping] = field(default_factory=list)
    # replaces the (start, length) reading of seeds when set
    ranges: Optional[List[Interval]] = None

    def seed_set(self) -> Set[int]:
        return set(self.seeds)

    def has_seed_ranges(self) -> bool:
        return self.ranges is not None or len(self.seeds) % 2 == 0

    def seed_ranges(self) -> List[Interval]:
        """Read the seeds as (start, length) pairs."""
        if self.ranges is not None:
            return list(self.ranges)
        if len(self.seeds) % 2:
            raise AlmanacParseError(f"seed ranges need (start, length) pairs, got {len(self.seeds)} numbers")
        return [Interval.from_length(s, n) for s, n in zip(self.seeds[::2], self.seeds[1::2])]


def _ints(text: str, line_no: int) -> List[int]:
    try:
        return [int(tok) for tok in text.split()]
    except ValueError:
        raise AlmanacParseError(f"expected integers, got {text!r}", line_no) from None


def parse_almanac(text: str) -> Almanac:
    """Parse a seeds line followed by blank-line separated '<a>-to-<b> map:' blocks."""
    lines = text.splitlines()
    idx = 0
    while idx < len(lines) and not lines[idx].strip():
        idx += 1
    if idx == len(lines) or not lines[idx].startswith("seeds:"):
        raise AlmanacParseError("missing 'seeds:' line", idx + 1 if idx < len(lines) else None)
    seeds = _ints(lines[idx].split(":", 1)[1], idx + 1)
    idx += 1

    stages: List[ShiftMapping] = []
    while idx < len(lines):
        ln = lines[idx].strip()
        if not ln:
            idx += 1
            continue
        m = _HEADER.match(ln)
        if m is None:
            raise AlmanacParseError(f"expected a '<source>-to-<target> map:' header, got {ln!r}", idx + 1)
        source = Stage.parse(m.group(1), idx + 1)
        target = Stage.parse(m.group(2), idx + 1)
        if stages:
            try:
                check_chain(stages[-1].target, source)
            except ValueError as exc:
                raise AlmanacParseError(str(exc), idx + 1) from exc
        header_no = idx + 1
        idx += 1
        ranges = []
        while idx < len(lines) and lines[idx].strip():
            nums = _ints(lines[idx], idx + 1)
            if len(nums) != 3:
                raise AlmanacParseError(f"expected 'destination source length', got {lines[idx]!r}", idx + 1)
            try:
                ranges.append(ShiftRange.from_triple(*nums))
            except ValueError as exc:
                raise AlmanacParseError(str(exc), idx + 1) from exc
            idx += 1
        try:
            stages.append(ShiftMapping(tuple(ranges), source, target))
        except ValueError as exc:
            raise AlmanacParseError(str(exc), header_no) from exc
    return Almanac(seeds, stages)


def load_almanac(path: Union[str, Path]) -> Almanac:
    return parse_almanac(Path(path).read_text(encoding="utf-8"))


def parse_intervals_from_lines(lines: List[str]) -> List[Interval]:
    out = []
    for no, ln in enumerate(lines, start=1):
        ln = ln.strip()
        if not ln:
            continue
        if ln.startswith("#"):
            continue
        parts = ln.replace(",", " ").split()
        if len(parts) != 2:
            raise AlmanacParseError(f"expected 'start end', got {ln!r}", no)
        a, b = _ints(" ".join(parts), no)
        out.append(Interval(a, b))
    return out


def load_intervals(path: Union[str, Path]) -> List[Interval]:
    p = Path(path)
    if p.suffix.lower() in {".json", ".js"}:
        try:
            data = json.loads(p.read_text(encoding="utf-8"))
            spans = [(int(a), int(b)) for (a, b) in data]
        except (ValueError, TypeError) as exc:
            raise AlmanacParseError(f"{p}: expected a JSON list of [start, end] pairs ({exc})") from None
        return [Interval(a, b) for (a, b) in spans]
    # try plaintext
    return parse_intervals_from_lines(p.read_text(encoding="utf-8").splitlines())


def save_intervals_json(spans: List[Interval], path: Union[str, Path]):
    Path(path).parent.mkdir(parents=True, exist_ok=True)
    with open(path, "w", encoding="utf-8") as f:
        json.dump([[int(iv.start), int(iv.end)] for iv in spans], f, ensure_ascii=False, indent=2)
