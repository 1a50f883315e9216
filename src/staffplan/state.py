from __future__ import annotations

from dataclasses import dataclass, field
from typing import Iterable

from staffplan.domain import TRAINED_THRESHOLD, Employee
from staffplan.rules.calendar import block_index, is_block_start


@dataclass(slots=True)
class EmployeeState:
    """Training and hours bookkeeping for one employee within one pass."""

    training_points: dict[str, float] = field(default_factory=dict)
    trained_skills: set[str] = field(default_factory=set)
    weekly_hours_used: int = 0

    def points(self, skill: str) -> float:
        return self.training_points.get(skill, 0)

    def is_trained(self, skill: str) -> bool:
        return skill in self.trained_skills

    def add_points(self, skill: str, points: float) -> float:
        total = self.training_points.get(skill, 0) + points
        self.training_points[skill] = total
        return total

    def promote(self, skill: str) -> None:
        self.trained_skills.add(skill)

    def copy(self) -> "EmployeeState":
        return EmployeeState(
            training_points=dict(self.training_points),
            trained_skills=set(self.trained_skills),
            weekly_hours_used=self.weekly_hours_used,
        )


@dataclass
class SimulationState:
    """
    Mutable state owned by a single simulation or scheduling pass.

    Never share one instance between two passes; use copy() to fork.
    """

    employees: dict[int, EmployeeState] = field(default_factory=dict)
    current_block: int | None = None

    @classmethod
    def from_employees(cls, employees: Iterable[Employee]) -> "SimulationState":
        state = cls()
        for emp in employees:
            es = EmployeeState()
            for skill in emp.initial_skills:
                es.training_points[skill] = TRAINED_THRESHOLD
                es.trained_skills.add(skill)
            state.employees[emp.id] = es
        return state

    def __getitem__(self, employee_id: int) -> EmployeeState:
        return self.employees[employee_id]

    def __contains__(self, employee_id: object) -> bool:
        return employee_id in self.employees

    def begin_day(self, day_id: int) -> bool:
        """
        Enter day `day_id`, resetting weekly hours on the first day of a block
        week (1, 8, 15, ...) or when the state last saw a different block.
        Returns True when a reset happened.

        A state carried over from an earlier pass is reset on day 1 too;
        repeating the call on the same day changes nothing since no hours were
        worked in between.
        """
        block = block_index(day_id)
        if block == self.current_block and not is_block_start(day_id):
            return False
        self.current_block = block
        for es in self.employees.values():
            es.weekly_hours_used = 0
        return True

    def copy(self) -> "SimulationState":
        return SimulationState(
            employees={eid: es.copy() for eid, es in self.employees.items()},
            current_block=self.current_block,
        )

    def snapshot(self) -> dict[int, dict[str, object]]:
        """Plain-data view used for comparisons and reporting."""
        return {
            eid: {
                "training_points": dict(sorted(es.training_points.items())),
                "trained_skills": sorted(es.trained_skills),
                "weekly_hours_used": es.weekly_hours_used,
            }
            for eid, es in sorted(self.employees.items())
        }
