from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Iterable, TypeAlias

# Training points at which an employee counts as trained in a skill.
TRAINED_THRESHOLD = 1000


def _normalize_int_set(values: Iterable[Any], what: str) -> set[int]:
    out: set[int] = set()
    for val in values:
        if isinstance(val, bool) or not isinstance(val, int):
            raise TypeError(f"{what} entries must be int day ids; got {val!r}.")
        out.add(val)
    return out


@dataclass(frozen=True)
class Organization:
    """Organisation-wide cost settings shared by every day of the horizon."""

    overtime_modifier_percent: int
    fixed_daily_cost: float

    def __post_init__(self) -> None:
        if self.overtime_modifier_percent < 0:
            raise ValueError("overtime_modifier_percent must be >= 0.")
        if self.fixed_daily_cost < 0:
            raise ValueError("fixed_daily_cost must be >= 0.")


@dataclass(slots=True)
class Day:
    """
    One calendar day of the horizon.

    Closed days carry no opening window, revenue or skill demand. Each listed
    required skill is one unit of demand for every open hour.
    """

    id: int
    is_open: bool
    start: int = 0
    end: int = 0
    revenue: float = 0
    required_skills: list[str] = field(default_factory=list)

    def __post_init__(self) -> None:
        if self.id <= 0:
            raise ValueError(f"Day id must be positive; got {self.id}.")
        if not self.is_open:
            self.start, self.end, self.revenue = 0, 0, 0
            self.required_skills = []
            return
        if not (0 <= self.start < self.end <= 24):
            raise ValueError(
                f"Day {self.id}: require 0 <= start < end <= 24 "
                f"(got {self.start}-{self.end})."
            )
        if self.revenue < 0:
            raise ValueError(f"Day {self.id}: revenue must be >= 0.")
        self.required_skills = list(self.required_skills)
        if len(set(self.required_skills)) != len(self.required_skills):
            raise ValueError(
                f"Day {self.id}: required skills must be distinct "
                f"(got {self.required_skills})."
            )

    @property
    def hours(self) -> range:
        return range(self.start, self.end) if self.is_open else range(0)

    @property
    def total_required_skill_hours(self) -> int:
        if not self.is_open:
            return 0
        return (self.end - self.start) * len(self.required_skills)


@dataclass(slots=True)
class Employee:
    """Static employee record. Evolving training/hours live in SimulationState."""

    id: int
    max_hours_per_week: int
    salary_per_hour: float
    learning_rate: float = 0
    teaching_rate: float = 0
    initial_skills: set[str] = field(default_factory=set)
    vacation_days: set[int] = field(default_factory=set)

    def __repr__(self) -> str:
        return (
            f"Employee(id={self.id}, max_h={self.max_hours_per_week}, "
            f"salary={self.salary_per_hour}, learn={self.learning_rate}, "
            f"teach={self.teaching_rate}, skills={sorted(self.initial_skills)}, "
            f"vacation={sorted(self.vacation_days)})"
        )

    def __post_init__(self) -> None:
        if self.max_hours_per_week <= 0:
            raise ValueError(
                f"Employee {self.id}: max_hours_per_week must be > 0."
            )
        for attr in ("salary_per_hour", "learning_rate", "teaching_rate"):
            if getattr(self, attr) < 0:
                raise ValueError(f"Employee {self.id}: {attr} must be >= 0.")
        self.initial_skills = set(self.initial_skills)
        self.vacation_days = _normalize_int_set(
            self.vacation_days, "Employee.vacation_days"
        )

    def is_available(self, day_id: int) -> bool:
        return day_id not in self.vacation_days


@dataclass(frozen=True)
class Shift:
    """Half-open hour interval [start, end) worked by one employee on one skill."""

    employee_id: int
    day_id: int
    start: int
    end: int
    skill: str

    @property
    def length(self) -> int:
        return self.end - self.start

    def is_active(self, hour: int) -> bool:
        return self.start <= hour < self.end

    def overlaps(self, other: "Shift") -> bool:
        return max(self.start, other.start) < min(self.end, other.end)

    def token(self) -> str:
        return f"{self.employee_id}-{self.start}-{self.end}-{self.skill}"


# day id -> ordered shifts (an empty list marks a closed or unstaffed day)
Schedule: TypeAlias = dict[int, list[Shift]]


def empty_schedule(days: Iterable[Day]) -> Schedule:
    return {day.id: [] for day in days}
