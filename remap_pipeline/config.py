from dataclasses import dataclass, field
from typing import Literal
import yaml

@dataclass
class SeedParams:
    mode: Literal["set", "ranges", "both"] = "both"   # how the seeds line is read

@dataclass
class EvaluationParams:
    precompose: bool = False     # fold all stages into one mapping before evaluating
    merge_ranges: bool = True    # merge overlapping ranges between stages

@dataclass
class PipelineConfig:
    log_level: str = "WARNING"
    seeds: SeedParams = field(default_factory=SeedParams)
    evaluation: EvaluationParams = field(default_factory=EvaluationParams)

def load_config_yaml(path: str) -> PipelineConfig:
    """Load config from a YAML file into PipelineConfig dataclasses."""
    with open(path, "r", encoding="utf-8") as f:
        data = yaml.safe_load(f) or {}

    def merge_dataclass(dc_cls, values):
        obj = dc_cls()
        for k, v in (values or {}).items():
            if hasattr(obj, k):
                setattr(obj, k, v)
        return obj

    seeds_cfg = merge_dataclass(SeedParams, data.get("seeds"))
    if seeds_cfg.mode not in ("set", "ranges", "both"):
        raise ValueError(f"seeds.mode must be one of set, ranges, both; got {seeds_cfg.mode!r}")
    eval_cfg = merge_dataclass(EvaluationParams, data.get("evaluation"))

    cfg = PipelineConfig(
        log_level=str(data.get("log_level", "WARNING")).upper(),
        seeds=seeds_cfg,
        evaluation=eval_cfg,
    )
    return cfg
