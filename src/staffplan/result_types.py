# staffplan/result_types.py
from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from staffplan.domain import Schedule
    from staffplan.state import SimulationState


@dataclass
class EmployeeDayHours:
    base_hours: int = 0
    overtime_hours: int = 0
    cost: float = 0

    @property
    def hours(self) -> int:
        return self.base_hours + self.overtime_hours


@dataclass
class DayResult:
    """Everything the simulator learned about a single day."""

    day_id: int
    is_open: bool
    capacity: float
    achieved_skill_hours: float
    required_skill_hours: int
    payroll: float
    revenue: float  # earned: potential * capacity^2
    revenue_potential: float
    fixed_cost: float
    profit: float
    employee_hours: dict[int, EmployeeDayHours] = field(default_factory=dict)
    promotions: list[tuple[int, str, int]] = field(default_factory=list)
    skill_coverage: dict[str, float] = field(default_factory=dict)

    @property
    def overtime_hours(self) -> int:
        return sum(h.overtime_hours for h in self.employee_hours.values())


@dataclass
class SimulationResult:
    """Structured output of one simulation pass."""

    per_day_profit: list[float]
    total_score: float
    final_state: "SimulationState"
    days: list[DayResult] = field(default_factory=list)


@dataclass
class SchedulerResult:
    schedule: "Schedule"
    final_state: "SimulationState"
    uncovered: list[tuple[int, str]] = field(default_factory=list)
