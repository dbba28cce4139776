from __future__ import annotations
import logging
from dataclasses import dataclass, field
from typing import Dict, Iterable, List, Optional, Sequence

from .composer import compose_all
from .config import PipelineConfig
from .errors import EmptyReduction
from .intervals import Interval, merge_intervals
from .io_utils import Almanac
from .shift_map import ShiftMapping
from .stages import check_chain

logger = logging.getLogger(__name__)


def _check_stage_chain(stages: Sequence[ShiftMapping]) -> None:
    for prev, cur in zip(stages, stages[1:]):
        check_chain(prev.target, cur.source)


def apply_stages(ranges: Iterable[Interval], stages: Sequence[ShiftMapping]) -> List[Interval]:
    """Feed ranges through every stage in order."""
    _check_stage_chain(stages)
    current = list(ranges)
    for stage in stages:
        current = stage.image_multi_range(current)
        logger.debug("%s: %d ranges", stage.label, len(current))
    return current


def apply_stages_to_set(points: Iterable[int], stages: Sequence[ShiftMapping]) -> set:
    _check_stage_chain(stages)
    current = set(points)
    for stage in stages:
        current = stage.image_set(current)
    return current


def reduce_minimum(ranges: Iterable[Interval]) -> int:
    """Lowest start over the non-empty ranges."""
    starts = [iv.start for iv in ranges if not iv.is_empty()]
    if not starts:
        raise EmptyReduction("cannot reduce an empty collection of ranges")
    return min(starts)


@dataclass
class PipelineResult:
    stages: List[ShiftMapping]
    composed: Optional[ShiftMapping]
    seeds: List[int]
    seed_ranges: List[Interval]
    # images in the final stage's domain
    point_locations: Optional[set] = None
    range_locations: Optional[List[Interval]] = None
    lowest_point_location: Optional[int] = None
    lowest_range_location: Optional[int] = None
    # number of ranges leaving each stage (range mode only)
    range_counts: Dict[str, int] = field(default_factory=dict)


class AlmanacPipeline:
    def __init__(self, config: PipelineConfig):
        self.cfg = config

    def _run_ranges(self, seed_ranges: List[Interval], stages: List[ShiftMapping],
                    counts: Dict[str, int]) -> List[Interval]:
        merge = self.cfg.evaluation.merge_ranges
        current = list(seed_ranges)
        for stage in stages:
            current = stage.image_multi_range(current)
            if merge:
                current = merge_intervals(current)
            counts[stage.label] = len(current)
            logger.debug("%s: %d ranges", stage.label, len(current))
        return current

    def run(self, almanac: Almanac) -> PipelineResult:
        cfg = self.cfg
        stages = list(almanac.stages)
        _check_stage_chain(stages)

        # Precompose into a single seed -> location mapping if asked
        composed = None
        evaluated = stages
        if cfg.evaluation.precompose and stages:
            composed = compose_all(stages)
            evaluated = [composed]
            logger.info("precomposed %d stages into %d shift ranges", len(stages), len(composed))

        mode = cfg.seeds.mode
        run_ranges = mode in ("ranges", "both")
        if mode == "both" and not almanac.has_seed_ranges():
            logger.warning("odd number of seeds (%d); skipping range evaluation", len(almanac.seeds))
            run_ranges = False
        res = PipelineResult(
            stages=stages,
            composed=composed,
            seeds=list(almanac.seeds),
            seed_ranges=almanac.seed_ranges() if run_ranges else [],
        )

        if mode in ("set", "both"):
            res.point_locations = apply_stages_to_set(almanac.seed_set(), evaluated)
            if not res.point_locations:
                raise EmptyReduction("no seeds to evaluate")
            res.lowest_point_location = min(res.point_locations)
        if run_ranges:
            res.range_locations = self._run_ranges(res.seed_ranges, evaluated, res.range_counts)
            res.lowest_range_location = reduce_minimum(res.range_locations)
        return res


def check_precomposition(almanac: Almanac) -> bool:
    """True if the composed seed -> location mapping matches stage-by-stage evaluation.

    Compares the two on the seed values, and on the lowest location of the
    seed ranges when the seeds can be read as ranges.
    """
    stages = list(almanac.stages)
    if not stages:
        return True
    composed = compose_all(stages)
    for seed in sorted(almanac.seed_set()):
        stepwise = seed
        for stage in stages:
            stepwise = stage.image(stepwise)
        if composed.image(seed) == stepwise:
            continue
        logger.warning("precomposed mapping sends seed %d to %d, stages give %d",
                       seed, composed.image(seed), stepwise)
        return False
    if almanac.has_seed_ranges():
        ranges = almanac.seed_ranges()
        if any(not iv.is_empty() for iv in ranges):
            expected = reduce_minimum(apply_stages(ranges, stages))
            if reduce_minimum(composed.image_multi_range(ranges)) != expected:
                logger.warning("precomposed mapping disagrees with the stages on the seed ranges")
                return False
    return True
