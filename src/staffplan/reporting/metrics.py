from __future__ import annotations

from dataclasses import dataclass

import numpy as np
import pandas as pd

from staffplan.input_data import InputData
from staffplan.score import ScoreResult


@dataclass(frozen=True)
class CoverageMetrics:
    """Horizon-wide coverage figures summarising achieved vs demanded skill-hours."""

    required_skill_hours: int
    achieved_skill_hours: float
    open_days: int
    fully_covered_days: int
    overtime_hours: int
    promotions: int

    @property
    def coverage_ratio(self) -> float:
        if self.required_skill_hours <= 0:
            return 0.0
        return self.achieved_skill_hours / self.required_skill_hours


def compute_coverage_metrics(res: ScoreResult) -> CoverageMetrics:
    if res.simulation is None:
        return CoverageMetrics(0, 0.0, 0, 0, 0, 0)
    days = res.simulation.days
    open_days = [d for d in days if d.is_open]
    return CoverageMetrics(
        required_skill_hours=sum(d.required_skill_hours for d in open_days),
        achieved_skill_hours=float(sum(d.achieved_skill_hours for d in open_days)),
        open_days=len(open_days),
        fully_covered_days=sum(
            1 for d in open_days if d.required_skill_hours and d.capacity >= 1.0
        ),
        overtime_hours=sum(d.overtime_hours for d in days),
        promotions=sum(len(d.promotions) for d in days),
    )


def lowest_capacity_days(res: ScoreResult, top: int = 5) -> pd.DataFrame:
    """Open days with demand, worst capacity first."""
    df = res.day_breakdown()
    if df.empty:
        return df
    df = df[df["is_open"] & (df["required_skill_hours"] > 0)]
    return (
        df.sort_values(["capacity", "day_id"], ascending=[True, True])
        .head(top)[["day_id", "capacity", "payroll", "revenue", "profit"]]
        .reset_index(drop=True)
    )


def skill_coverage_by_day(res: ScoreResult, data: InputData) -> pd.DataFrame:
    """
    Coverage ratio per (day, skill): achieved skill-hours / open hours.
    Rows are day ids, columns skills; NaN where a day does not demand a skill.
    """
    demanded = {s for d in data.open_days() for s in d.required_skills}
    skills = [s for s in data.all_skills() if s in demanded]
    index = pd.Index([d.id for d in data.days], name="day_id")
    out = pd.DataFrame(np.nan, index=index, columns=skills, dtype=float)
    if res.simulation is None:
        return out
    for day, result in zip(data.days, res.simulation.days):
        if not day.is_open:
            continue
        open_hours = day.end - day.start
        for skill, achieved in result.skill_coverage.items():
            out.loc[day.id, skill] = achieved / open_hours
    return out


def hours_summary(df_emp: pd.DataFrame) -> dict[str, float]:
    """Mean/std/percentiles of total hours across employees that worked."""
    if df_emp.empty or "hours" not in df_emp.columns:
        return {}
    hrs = pd.to_numeric(df_emp["hours"], errors="coerce").to_numpy(dtype=float)
    hrs = hrs[~np.isnan(hrs)]
    if not hrs.size:
        return {}
    if hrs.size > 1:
        p5, p95 = np.percentile(hrs, [5.0, 95.0])
        std = float(np.std(hrs, ddof=1))
    else:
        p5, p95 = float(hrs.min()), float(hrs.max())
        std = float("nan")
    return {
        "mean": float(np.mean(hrs)),
        "std": std,
        "p5": float(p5),
        "p95": float(p95),
        "min": float(np.min(hrs)),
        "max": float(np.max(hrs)),
    }
