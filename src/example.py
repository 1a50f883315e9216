"""
Module with example code for running the staffing planner.

There are two ways to run the code:

1. Build a small problem in code, schedule it and score it.
2. Load the bundled text problem (src/example_input.txt), schedule it,
    write the schedule out and score it again from the written file.

Usage via cli:
    python3 -m src.example --option 1
"""

from __future__ import annotations

import argparse
from pathlib import Path

from staffplan import (
    Config,
    Day,
    Employee,
    InputData,
    Organization,
    load_input,
    run_planner,
    run_scoring,
)
from staffplan.loader import load_schedule

cfg = Config(
    STRATEGY="trained_first",
    OUTPUT_DIR=Path("outputs"),
    ENABLE_PLOTS=True,
    NUM_PRINT_EXAMPLES=5,
)


def parse_args() -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Run staffing examples.")
    parser.add_argument(
        "--option",
        type=int,
        default=2,
        choices=(1, 2),
        help="Example scenario to run (default: 2).",
    )
    return parser.parse_args()


def run_option(option: int) -> None:
    print(f"Running example code with option {option}")

    # A two-day shop defined in code: one trained cashier, two learners.
    if option == 1:
        data = InputData(
            org=Organization(overtime_modifier_percent=150, fixed_daily_cost=100),
            days=[
                Day(1, True, 8, 12, 1200, ["Register"]),
                Day(2, True, 8, 12, 1200, ["Register", "Grill"]),
            ],
            employees=[
                Employee(1, 40, 15, 1, 4, {"Register"}),
                Employee(2, 40, 10, 60, 1),
                Employee(3, 40, 10, 60, 1, vacation_days={1}),
            ],
        )
        run_planner(data, config=cfg)

    # The bundled text problem, round-tripped through the output format.
    elif option == 2:
        data = load_input(Path("src/example_input.txt"))
        out_path = cfg.OUTPUT_DIR / "example_schedule.txt"
        run_planner(data, config=cfg, output_path=out_path)
        print("\nRe-scoring the written schedule:")
        run_scoring(data, load_schedule(out_path), config=cfg, enable_reporting=False)
    else:
        raise SystemExit(f"Unknown option {option}")


def main() -> None:
    args = parse_args()
    run_option(args.option)


if __name__ == "__main__":
    main()
