from __future__ import annotations

from dataclasses import dataclass, field

from staffplan.domain import Day, Employee, Organization


@dataclass
class InputData:
    """Typed problem instance: organisation, dense day horizon, employees."""

    org: Organization
    days: list[Day]
    employees: list[Employee]
    _days_by_id: dict[int, Day] = field(init=False, repr=False)
    _employees_by_id: dict[int, Employee] = field(init=False, repr=False)

    def __post_init__(self) -> None:
        ids = [day.id for day in self.days]
        if ids != list(range(1, len(ids) + 1)):
            raise ValueError(
                "Day ids must be dense and sequential starting at 1; "
                f"got {ids[:10]}{'...' if len(ids) > 10 else ''}."
            )
        self._days_by_id = {day.id: day for day in self.days}

        self._employees_by_id = {}
        for emp in self.employees:
            if emp.id in self._employees_by_id:
                raise ValueError(f"Duplicate employee id {emp.id}.")
            self._employees_by_id[emp.id] = emp

    @property
    def num_days(self) -> int:
        return len(self.days)

    def day(self, day_id: int) -> Day | None:
        return self._days_by_id.get(day_id)

    def employee(self, employee_id: int) -> Employee | None:
        return self._employees_by_id.get(employee_id)

    def has_day(self, day_id: int) -> bool:
        return day_id in self._days_by_id

    def has_employee(self, employee_id: int) -> bool:
        return employee_id in self._employees_by_id

    def open_days(self) -> list[Day]:
        return [day for day in self.days if day.is_open]

    def all_skills(self) -> list[str]:
        """Every skill that is demanded on some day or held by some employee."""
        seen: dict[str, None] = {}
        for day in self.days:
            for skill in day.required_skills:
                seen.setdefault(skill, None)
        for emp in self.employees:
            for skill in sorted(emp.initial_skills):
                seen.setdefault(skill, None)
        return list(seen)
