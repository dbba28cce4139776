from __future__ import annotations
import logging
from typing import List, Sequence

from .errors import RemapError
from .intervals import difference
from .shift_map import ShiftMapping, ShiftRange
from .stages import check_chain

logger = logging.getLogger(__name__)


def compose(first: ShiftMapping, second: ShiftMapping) -> ShiftMapping:
    """Return a mapping equivalent to applying first then second.

    first: X -> Y; second: Y -> Z; result: X -> Z. Works on interval
    bounds only, so the cost is O(|first| * |second|) slices regardless
    of how many integers the ranges cover.
    """
    check_chain(first.target, second.source)
    pieces: List[ShiftRange] = []

    # X values inside first's ranges: follow their image through second
    for rng in first:
        remainder = [rng.image_interval]
        for other in second.overlapping(rng.image_interval):
            next_remainder = []
            for piece in remainder:
                below, mid, above = piece.slice(other.interval)
                if not mid.is_empty():
                    pieces.append(ShiftRange(mid.shift(-rng.offset), rng.offset + other.offset))
                next_remainder.extend(p for p in (below, above) if not p.is_empty())
            remainder = next_remainder
        # passes through second's identity region
        pieces.extend(ShiftRange(piece.shift(-rng.offset), rng.offset) for piece in remainder)

    # X values first leaves alone land on second's ranges unchanged
    first_domain = first.domain()
    for other in second:
        for piece in difference(other.interval, first_domain):
            pieces.append(ShiftRange(piece, other.offset))

    # construction rejects overlapping pieces instead of returning a wrong map
    composed = ShiftMapping(tuple(pieces), first.source, second.target).simplified()
    logger.debug("composed %s (%d ranges) with %s (%d ranges) into %d ranges",
                 first.label, len(first), second.label, len(second), len(composed))
    return composed


def compose_all(stages: Sequence[ShiftMapping]) -> ShiftMapping:
    """Fold a chain of stages into a single end-to-end mapping."""
    if not stages:
        raise RemapError("cannot compose an empty list of stages")
    result = stages[0]
    for stage in stages[1:]:
        result = compose(result, stage)
    return result
