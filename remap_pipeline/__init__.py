from .errors import (
    RemapError, MalformedInterval, OverlappingRanges, CompositionDomainMismatch, EmptyReduction, IntegerOverflow,
    AlmanacParseError
)
from .intervals import Interval, difference, merge_intervals, total_length
from .stages import Stage, check_chain
from .shift_map import ShiftRange, ShiftMapping
from .composer import compose, compose_all
from .config import SeedParams, EvaluationParams, PipelineConfig, load_config_yaml
from .io_utils import Almanac, parse_almanac, load_almanac, load_intervals, save_intervals_json
from .pipeline import (
    AlmanacPipeline, PipelineResult, apply_stages, apply_stages_to_set, check_precomposition, reduce_minimum
)
from .plotting import plot_stage_ranges, plot_mapping
from .timing import TimingSummary, time_trials
