from __future__ import annotations

import math

import pandas as pd
import pytest

from staffplan.domain import Day, Employee, Organization, Shift
from staffplan.input_data import InputData
from staffplan.reporting.metrics import (
    compute_coverage_metrics,
    hours_summary,
    lowest_capacity_days,
    skill_coverage_by_day,
)
from staffplan.score import ScoreResult, score_schedule


def make_data() -> InputData:
    return InputData(
        org=Organization(50, 100),
        days=[
            Day(1, True, 8, 10, 1000, ["Register", "Grill"]),
            Day(2, False),
            Day(3, True, 8, 10, 1000, ["Register"]),
        ],
        employees=[
            Employee(1, 40, 10, initial_skills={"Register"}),
            Employee(2, 40, 10, learning_rate=600),
        ],
    )


def make_result() -> ScoreResult:
    schedule = {
        1: [Shift(1, 1, 8, 10, "Register"), Shift(2, 1, 8, 10, "Grill")],
        2: [],
        3: [Shift(1, 3, 8, 10, "Register")],
    }
    return score_schedule(make_data(), schedule)


def test_coverage_metrics() -> None:
    cov = compute_coverage_metrics(make_result())
    assert cov.required_skill_hours == 6
    # Grill: 0.5 at hour 8, employee 2 reaches 1200 points and is promoted
    # at the end of the day, so hour 9 is still half coverage
    assert cov.achieved_skill_hours == 2 + 0.5 + 0.5 + 2
    assert cov.open_days == 2
    assert cov.fully_covered_days == 1
    assert cov.promotions == 1
    assert cov.coverage_ratio == pytest.approx(5 / 6)


def test_coverage_metrics_for_invalid_result() -> None:
    cov = compute_coverage_metrics(ScoreResult(valid=False, total_score=0))
    assert cov.required_skill_hours == 0
    assert cov.coverage_ratio == 0.0


def test_lowest_capacity_days_skips_closed_days() -> None:
    worst = lowest_capacity_days(make_result(), top=5)
    assert worst["day_id"].tolist() == [1, 3]
    assert worst["capacity"].tolist() == [0.75, 1.0]


def test_skill_coverage_by_day() -> None:
    data = make_data()
    grid = skill_coverage_by_day(make_result(), data)
    assert list(grid.columns) == ["Register", "Grill"]
    assert grid.loc[1, "Register"] == 1.0
    assert grid.loc[1, "Grill"] == 0.5
    assert math.isnan(grid.loc[2, "Register"])
    assert math.isnan(grid.loc[3, "Grill"])


def test_hours_summary() -> None:
    stats = hours_summary(pd.DataFrame({"hours": [2, 4, 6]}))
    assert stats["mean"] == 4.0
    assert stats["min"] == 2.0 and stats["max"] == 6.0
    assert stats["std"] == pytest.approx(2.0)

    single = hours_summary(pd.DataFrame({"hours": [5]}))
    assert single["p5"] == single["p95"] == 5.0
    assert math.isnan(single["std"])

    assert hours_summary(pd.DataFrame()) == {}
