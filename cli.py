#!/usr/bin/env python3
import argparse, json, logging, sys
from pathlib import Path

from remap_pipeline import (
    PipelineConfig, load_config_yaml, AlmanacPipeline, RemapError, load_almanac, load_intervals,
    save_intervals_json, plot_stage_ranges, plot_mapping, time_trials, check_precomposition
)

logger = logging.getLogger("remap_pipeline.cli")

def build_argparser():
    ap = argparse.ArgumentParser(description="Almanac remapping pipeline")
    ap.add_argument("almanac", type=str, help="Almanac text file (seeds line + '<a>-to-<b> map:' blocks)")
    ap.add_argument("--config", type=str, default="", help="YAML config file (optional)")
    ap.add_argument("--mode", choices=["set", "ranges", "both"], default=None, help="Override how seeds are read")
    ap.add_argument("--precompose", action="store_true", help="Compose all stages into one mapping first")
    ap.add_argument("--no-merge", action="store_true", help="Do not merge overlapping ranges between stages")
    ap.add_argument("--seed-ranges", type=str, default="", help="Intervals file (json or txt) used instead of the seed pairs")
    ap.add_argument("--check", action="store_true", help="Verify the precomposed mapping against stage-by-stage results")
    ap.add_argument("--output-dir", type=str, default="outputs", help="Directory to store results")
    ap.add_argument("--plot", action="store_true", help="Show plots interactively")
    ap.add_argument("--save-plots", action="store_true", help="Save plots as PNGs in output-dir")
    ap.add_argument("--time-trials", type=int, default=0, help="Repeat the evaluation N times and report timings")
    ap.add_argument("--verbose", action="store_true", help="Log progress at INFO level")
    return ap

def main(argv=None):
    args = build_argparser().parse_args(argv)

    try:
        if args.config:
            cfg = load_config_yaml(args.config)
        else:
            cfg = PipelineConfig()
    except (OSError, ValueError) as exc:
        print(f"error: cannot load config: {exc}", file=sys.stderr)
        return 2

    if args.mode:
        cfg.seeds.mode = args.mode
    if args.precompose:
        cfg.evaluation.precompose = True
    if args.no_merge:
        cfg.evaluation.merge_ranges = False
    if args.verbose:
        cfg.log_level = "INFO"
    if not logging.getLogger().handlers:
        logging.basicConfig(level=getattr(logging, cfg.log_level, logging.WARNING),
                            format="%(asctime)s %(levelname)s %(name)s: %(message)s")

    out_dir = Path(args.output_dir); out_dir.mkdir(parents=True, exist_ok=True)

    pipe = AlmanacPipeline(cfg)
    try:
        almanac = load_almanac(args.almanac)
        if args.seed_ranges:
            almanac.ranges = load_intervals(args.seed_ranges)
        res = pipe.run(almanac)
        check_ok = check_precomposition(almanac) if args.check else None
    except OSError as exc:
        print(f"error: cannot read input: {exc}", file=sys.stderr)
        return 2
    except RemapError as exc:
        print(f"error: {exc}", file=sys.stderr)
        return 2

    if res.range_locations is not None:
        save_intervals_json(res.range_locations, out_dir / "location_ranges.json")
    if res.composed is not None:
        save_intervals_json(res.composed.domain(), out_dir / "composed_domain.json")

    # Plots
    if args.save_plots or args.plot:
        spans = {"seed ranges": res.seed_ranges}
        if res.range_locations is not None:
            spans["locations"] = res.range_locations
        plot_stage_ranges(
            spans,
            title="Seed ranges and their locations",
            show=args.plot,
            save_path=str(out_dir / "plot_ranges.png") if args.save_plots else None
        )
        for i, stage in enumerate([res.composed] if res.composed is not None else res.stages):
            plot_mapping(
                stage,
                show=args.plot,
                save_path=str(out_dir / f"plot_stage_{i}_{stage.label}.png") if args.save_plots else None
            )

    # Summary
    summary = {
        "stages": [s.label for s in res.stages],
        "precomposed": res.composed is not None,
        "lowest_point_location": res.lowest_point_location,
        "lowest_range_location": res.lowest_range_location,
        "range_counts": res.range_counts,
    }
    if check_ok is not None:
        summary["check"] = check_ok
    if args.time_trials > 0:
        timing = time_trials(lambda: pipe.run(almanac), repetitions=args.time_trials, label="evaluation")
        summary["timing"] = {
            "repetitions": timing.repetitions,
            "min_s": timing.minimum,
            "max_s": timing.maximum,
            "mean_s": timing.mean,
            "median_s": timing.median,
            "total_s": timing.total,
        }
    (out_dir / "summary.json").write_text(json.dumps(summary, indent=2, ensure_ascii=False), encoding="utf-8")
    logger.info("wrote results to %s", out_dir)
    print(json.dumps(summary))
    return 1 if check_ok is False else 0

if __name__ == "__main__":
    sys.exit(main())
