from __future__ import annotations

import pytest

from staffplan.domain import Day, Employee, Organization, Shift
from staffplan.input_data import InputData
from staffplan.score import DAY_COLUMNS, EMPLOYEE_COLUMNS, score_schedule
from staffplan.simulate import simulate
from staffplan.validate import validate_schedule


def make_data() -> InputData:
    return InputData(
        org=Organization(overtime_modifier_percent=50, fixed_daily_cost=100),
        days=[
            Day(1, True, 8, 10, 1000, ["Register"]),
            Day(2, False),
            Day(3, True, 8, 12, 2000, ["Register", "Grill"]),
        ],
        employees=[
            Employee(1, 40, 10, initial_skills={"Register"}),
            Employee(2, 40, 8, learning_rate=2, vacation_days={1}),
            Employee(3, 3, 12, initial_skills={"Grill"}),
        ],
    )


def valid_schedule() -> dict[int, list[Shift]]:
    return {
        1: [Shift(1, 1, 8, 10, "Register")],
        2: [],
        3: [
            Shift(1, 3, 8, 12, "Register"),
            Shift(2, 3, 8, 10, "Grill"),
            Shift(3, 3, 8, 12, "Grill"),
        ],
    }


def test_valid_schedule_scores_simulated_profit() -> None:
    data = make_data()
    res = score_schedule(data, valid_schedule())
    sim = simulate(data, valid_schedule())

    assert res.valid
    assert res.status_name == "VALID"
    assert res.total_score == sim.total_score
    assert res.per_day_profit == sim.per_day_profit
    assert res.errors == []


def test_invalid_schedule_scores_zero_without_simulating(monkeypatch) -> None:
    data = make_data()
    schedule = valid_schedule()
    schedule[1].append(Shift(2, 1, 8, 9, "Register"))  # vacation day

    def boom(*args, **kwargs):  # pragma: no cover - must not run
        raise AssertionError("invalid schedules are never simulated")

    monkeypatch.setattr("staffplan.score.simulate", boom)
    res = score_schedule(data, schedule)
    assert not res.valid
    assert res.status_name == "INVALID"
    assert res.total_score == 0
    assert res.simulation is None
    assert [e.code for e in res.errors] == ["VACATION"]


def test_precomputed_validation_is_reused() -> None:
    data = make_data()
    checked = validate_schedule(valid_schedule(), data)
    res = score_schedule(data, valid_schedule(), validation=checked)
    assert res.valid


def test_day_breakdown_has_one_row_per_day() -> None:
    res = score_schedule(make_data(), valid_schedule())
    df = res.day_breakdown()
    assert list(df.columns) == DAY_COLUMNS
    assert df["day_id"].tolist() == [1, 2, 3]
    assert df.loc[df["day_id"] == 2, "profit"].item() == -100
    assert df.loc[df["day_id"] == 1, "profit"].item() == 880
    # employee 3 has a 3h weekly cap: the fourth hour is overtime
    assert df.loc[df["day_id"] == 3, "overtime_hours"].item() == 1


def test_employee_breakdown_sorted_by_hours() -> None:
    res = score_schedule(make_data(), valid_schedule())
    df = res.employee_breakdown()
    assert list(df.columns) == EMPLOYEE_COLUMNS
    assert df["employee_id"].tolist() == [1, 3, 2]
    assert df["hours"].tolist() == [6, 4, 2]
    row3 = df[df["employee_id"] == 3].iloc[0]
    assert row3["base_hours"] == 3
    assert row3["overtime_hours"] == 1
    assert row3["cost"] == 3 * 12 + 6


def test_totals_add_up() -> None:
    res = score_schedule(make_data(), valid_schedule())
    totals = res.totals()
    assert totals["total_fixed_costs"] == 300
    assert totals["total_revenue_potential"] == 3000
    assert totals["total_profit"] == pytest.approx(
        totals["total_revenue"] - totals["total_payroll"] - totals["total_fixed_costs"]
    )


def test_invalid_breakdowns_are_empty() -> None:
    res = score_schedule(make_data(), {1: [], 2: []})
    assert not res.valid
    assert res.day_breakdown().empty
    assert res.employee_breakdown().empty
    assert res.totals()["total_profit"] == 0.0
