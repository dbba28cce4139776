from __future__ import annotations
import logging
import statistics
import time
from dataclasses import dataclass
from typing import Callable, List

logger = logging.getLogger(__name__)


@dataclass
class TimingSummary:
    label: str
    repetitions: int
    minimum: float   # seconds
    maximum: float
    mean: float
    median: float
    total: float


def time_trials(block: Callable[[], object], repetitions: int = 1000, label: str = "") -> TimingSummary:
    """Run block repeatedly and summarise the wall-clock timings."""
    if repetitions < 1:
        raise ValueError(f"repetitions must be >= 1, got {repetitions}")
    logger.info("Gathering timings for %s with %d repetitions", label or "block", repetitions)
    timings: List[float] = []
    for _ in range(repetitions):
        t0 = time.perf_counter()
        block()
        timings.append(time.perf_counter() - t0)
    summary = TimingSummary(
        label=label,
        repetitions=repetitions,
        minimum=min(timings),
        maximum=max(timings),
        mean=statistics.fmean(timings),
        median=statistics.median(timings),
        total=sum(timings),
    )
    logger.info("Timings for %s: min %.6fs max %.6fs mean %.6fs median %.6fs total %.3fs",
                label or "block", summary.minimum, summary.maximum, summary.mean,
                summary.median, summary.total)
    return summary
