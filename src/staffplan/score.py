# staffplan/score.py
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Optional

import pandas as pd

from staffplan.domain import Schedule
from staffplan.input_data import InputData
from staffplan.result_types import SimulationResult
from staffplan.simulate import simulate
from staffplan.state import SimulationState
from staffplan.validate import ValidationResult, Violation, validate_schedule

DAY_COLUMNS = [
    "day_id",
    "is_open",
    "capacity",
    "achieved_skill_hours",
    "required_skill_hours",
    "payroll",
    "revenue",
    "revenue_potential",
    "fixed_cost",
    "profit",
    "overtime_hours",
]
EMPLOYEE_COLUMNS = ["employee_id", "hours", "base_hours", "overtime_hours", "cost"]


@dataclass
class ScoreResult:
    """Score of one schedule. Invalid schedules score 0 and carry no simulation."""

    valid: bool
    total_score: float
    per_day_profit: list[float] = field(default_factory=list)
    errors: list[Violation] = field(default_factory=list)
    simulation: Optional[SimulationResult] = None

    @property
    def status_name(self) -> str:
        return "VALID" if self.valid else "INVALID"

    def errors_by_code(self) -> dict[str, list[Violation]]:
        return ValidationResult(errors=list(self.errors)).by_code()

    def day_breakdown(self) -> pd.DataFrame:
        if self.simulation is None:
            return pd.DataFrame(columns=DAY_COLUMNS)
        rows = [
            {
                "day_id": d.day_id,
                "is_open": d.is_open,
                "capacity": d.capacity,
                "achieved_skill_hours": d.achieved_skill_hours,
                "required_skill_hours": d.required_skill_hours,
                "payroll": d.payroll,
                "revenue": d.revenue,
                "revenue_potential": d.revenue_potential,
                "fixed_cost": d.fixed_cost,
                "profit": d.profit,
                "overtime_hours": d.overtime_hours,
            }
            for d in self.simulation.days
        ]
        return pd.DataFrame(rows, columns=DAY_COLUMNS)

    def employee_breakdown(self) -> pd.DataFrame:
        if self.simulation is None:
            return pd.DataFrame(columns=EMPLOYEE_COLUMNS)
        totals: dict[int, dict[str, float]] = {}
        for d in self.simulation.days:
            for emp_id, rec in d.employee_hours.items():
                row = totals.setdefault(
                    emp_id, {"base_hours": 0, "overtime_hours": 0, "cost": 0}
                )
                row["base_hours"] += rec.base_hours
                row["overtime_hours"] += rec.overtime_hours
                row["cost"] += rec.cost
        rows = [
            {
                "employee_id": emp_id,
                "hours": int(row["base_hours"] + row["overtime_hours"]),
                "base_hours": int(row["base_hours"]),
                "overtime_hours": int(row["overtime_hours"]),
                "cost": row["cost"],
            }
            for emp_id, row in sorted(totals.items())
        ]
        df = pd.DataFrame(rows, columns=EMPLOYEE_COLUMNS)
        return df.sort_values(
            ["hours", "employee_id"], ascending=[False, True]
        ).reset_index(drop=True)

    def totals(self) -> dict[str, float]:
        """Scorecard totals: profit, payroll, revenue potential, fixed costs."""
        if self.simulation is None:
            return {
                "total_profit": 0.0,
                "total_payroll": 0.0,
                "total_revenue": 0.0,
                "total_revenue_potential": 0.0,
                "total_fixed_costs": 0.0,
            }
        days = self.simulation.days
        return {
            "total_profit": float(self.total_score),
            "total_payroll": float(sum(d.payroll for d in days)),
            "total_revenue": float(sum(d.revenue for d in days)),
            "total_revenue_potential": float(sum(d.revenue_potential for d in days)),
            "total_fixed_costs": float(sum(d.fixed_cost for d in days)),
        }


def score_schedule(
    data: InputData,
    schedule: Schedule,
    state: SimulationState | None = None,
    validation: ValidationResult | None = None,
) -> ScoreResult:
    """
    Validate `schedule` and, when valid, sum the simulator's daily profits.

    An invalid schedule is rejected with a score of 0; it is never simulated.
    """
    checked = validation if validation is not None else validate_schedule(
        schedule, data
    )
    if not checked.valid:
        return ScoreResult(valid=False, total_score=0.0, errors=list(checked.errors))

    sim = simulate(data, schedule, state=state)
    return ScoreResult(
        valid=True,
        total_score=sim.total_score,
        per_day_profit=list(sim.per_day_profit),
        simulation=sim,
    )
