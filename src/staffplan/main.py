from __future__ import annotations

import argparse
import sys
from pathlib import Path
from typing import Sequence

from staffplan.config import Config, cfg
from staffplan.domain import Schedule
from staffplan.input_data import InputData
from staffplan.loader import InputFormatError, load_input, load_schedule
from staffplan.output import export_shift_reports, write_schedule
from staffplan.reporting import Reporter
from staffplan.scheduler import GreedyScheduler
from staffplan.score import ScoreResult, score_schedule
from staffplan.strategies.registry import StrategyLike, available_strategies


def run_planner(
    data: InputData,
    config: Config | None = None,
    strategy: StrategyLike | None = None,
    reporter: Reporter | None = None,
    output_path: Path | str | None = None,
    validate_config: bool = True,
    enable_reporting: bool | None = None,
) -> tuple[Schedule, ScoreResult]:
    """
    Build a schedule with the greedy scheduler, then validate and score it.

    Parameters
    ----------
    data:
        The typed problem instance.
    config:
        Run configuration. Defaults to `staffplan.config.cfg` when omitted.
    strategy:
        Ranking strategy (name, class or instance). Falls back to
        `config.STRATEGY`.
    reporter:
        Custom reporter instance; the default `Reporter` is used when reporting
        is enabled and none is given.
    output_path:
        When given, the schedule is written there in the text output format.
    validate_config:
        Toggle to run `Config.validate()` first.
    enable_reporting:
        Overrides `config.ENABLE_REPORTING`.

    Returns
    -------
    (Schedule, ScoreResult)
    """
    cfg_obj = config or cfg
    if validate_config:
        cfg_obj.validate()

    reporting = cfg_obj.ENABLE_REPORTING if enable_reporting is None else enable_reporting
    active_reporter = reporter if reporting else None
    if active_reporter is None and reporting:
        active_reporter = Reporter(cfg_obj)

    if active_reporter is not None:
        active_reporter.pre_solve(data)

    print(f"\nScheduling {data.num_days} day(s) for {len(data.employees)} employee(s)...")
    scheduler = GreedyScheduler(data, strategy=strategy or cfg_obj.STRATEGY)
    built = scheduler.build()
    if built.uncovered:
        print(f"Uncovered (day, skill) slots: {len(built.uncovered)}")

    result = score_schedule(data, built.schedule)

    if active_reporter is not None:
        active_reporter.post_solve(result, data)

    if output_path is not None:
        path = write_schedule(
            built.schedule, data.days, output_path, merge=cfg_obj.MERGE_OUTPUT_SHIFTS
        )
        print(f"Wrote schedule to {path}")

    if reporting:
        export_shift_reports(built.schedule, cfg_obj, data)

    return built.schedule, result


def run_scoring(
    data: InputData,
    schedule: Schedule,
    config: Config | None = None,
    reporter: Reporter | None = None,
    enable_reporting: bool | None = None,
) -> ScoreResult:
    """Validate and score an existing schedule (e.g. one written by another tool)."""
    cfg_obj = config or cfg
    result = score_schedule(data, schedule)

    reporting = cfg_obj.ENABLE_REPORTING if enable_reporting is None else enable_reporting
    if reporting:
        (reporter or Reporter(cfg_obj)).post_solve(result, data)
    return result


def parse_args(argv: Sequence[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        prog="staffplan", description="Build and score hourly staffing schedules."
    )
    sub = parser.add_subparsers(dest="command", required=True)

    plan = sub.add_parser("plan", help="Build a schedule and write it out.")
    plan.add_argument("input", type=Path, help="Problem description file.")
    plan.add_argument("output", type=Path, help="Where to write the schedule.")
    plan.add_argument(
        "--strategy",
        default=cfg.STRATEGY,
        choices=available_strategies(),
        help=f"Candidate ranking (default: {cfg.STRATEGY}).",
    )
    plan.add_argument("--no-merge", action="store_true", help="Keep shifts unmerged.")

    score = sub.add_parser("score", help="Validate and score an existing schedule.")
    score.add_argument("input", type=Path, help="Problem description file.")
    score.add_argument("schedule", type=Path, help="Schedule file to score.")

    for p in (plan, score):
        p.add_argument("--no-report", action="store_true", help="Skip reporting.")
        p.add_argument("--no-plots", action="store_true", help="Skip plots.")
        p.add_argument(
            "--output-dir",
            type=Path,
            default=cfg.OUTPUT_DIR,
            help=f"Directory for reports and exports (default: {cfg.OUTPUT_DIR}).",
        )
    return parser.parse_args(argv)


def main(argv: Sequence[str] | None = None) -> int:
    args = parse_args(argv)
    run_cfg = Config(
        STRATEGY=getattr(args, "strategy", cfg.STRATEGY),
        MERGE_OUTPUT_SHIFTS=not getattr(args, "no_merge", False),
        OUTPUT_DIR=args.output_dir,
        ENABLE_REPORTING=not args.no_report,
        ENABLE_PLOTS=not args.no_plots,
    )

    try:
        data = load_input(args.input)
        if args.command == "plan":
            _, result = run_planner(data, config=run_cfg, output_path=args.output)
        else:
            result = run_scoring(data, load_schedule(args.schedule), config=run_cfg)
    except (InputFormatError, OSError) as exc:
        print(f"Error: {exc}", file=sys.stderr)
        return 2

    print(f"Final Score: {result.total_score:,.2f}")
    return 0 if result.valid else 1


if __name__ == "__main__":
    sys.exit(main())
