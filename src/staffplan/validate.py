# staffplan/validate.py
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Optional

from staffplan.domain import Day, Schedule, Shift
from staffplan.input_data import InputData


@dataclass(frozen=True)
class Violation:
    """One structural problem found in a schedule."""

    day_id: int
    employee_id: Optional[int]
    code: str
    message: str

    def __str__(self) -> str:
        return self.message


@dataclass
class ValidationResult:
    errors: list[Violation] = field(default_factory=list)

    @property
    def valid(self) -> bool:
        return not self.errors

    def add(
        self, day_id: int, employee_id: Optional[int], code: str, message: str
    ) -> None:
        v = Violation(day_id, employee_id, code, message)
        if v not in self.errors:
            self.errors.append(v)

    def by_code(self) -> dict[str, list[Violation]]:
        grouped: dict[str, list[Violation]] = {}
        for v in self.errors:
            grouped.setdefault(v.code, []).append(v)
        return grouped


def _is_int(value: object) -> bool:
    return isinstance(value, int) and not isinstance(value, bool)


def _check_shift(
    res: ValidationResult, data: InputData, day: Day, shift: Shift
) -> bool:
    """
    Per-shift checks. An unknown employee is reported but the remaining
    checks still run; returns False so the caller skips the overlap check.
    """
    tok = shift.token()
    if shift.day_id != day.id:
        res.add(
            day.id,
            shift.employee_id,
            "DAY-MISMATCH",
            f"Day {day.id}: shift {tok} belongs to day {shift.day_id}.",
        )

    emp = data.employee(shift.employee_id)
    if emp is None:
        res.add(
            day.id,
            shift.employee_id,
            "UNKNOWN-EMPLOYEE",
            f"Day {day.id}: shift {tok} references unknown employee "
            f"{shift.employee_id}.",
        )
    elif not emp.is_available(day.id):
        res.add(
            day.id,
            emp.id,
            "VACATION",
            f"Day {day.id}: employee {emp.id} scheduled on a vacation day.",
        )

    if not day.is_open:
        res.add(
            day.id,
            shift.employee_id,
            "CLOSED-DAY",
            f"Day {day.id}: shift {tok} scheduled on a closed day.",
        )

    if not (_is_int(shift.start) and _is_int(shift.end)):
        res.add(
            day.id,
            shift.employee_id,
            "NON-INTEGER",
            f"Day {day.id}: shift {tok} must use integer hours.",
        )
    elif shift.start >= shift.end:
        res.add(
            day.id,
            shift.employee_id,
            "EMPTY-SHIFT",
            f"Day {day.id}: shift {tok} has start >= end.",
        )

    if day.is_open:
        if shift.start < day.start or shift.end > day.end:
            res.add(
                day.id,
                shift.employee_id,
                "OUTSIDE-WINDOW",
                f"Day {day.id}: shift {tok} is outside the opening window "
                f"[{day.start}, {day.end}).",
            )
        if shift.skill not in day.required_skills:
            res.add(
                day.id,
                shift.employee_id,
                "UNKNOWN-SKILL",
                f"Day {day.id}: shift {tok} uses skill '{shift.skill}' "
                "which is not required that day.",
            )
    return emp is not None


def validate_schedule(schedule: Schedule, data: InputData) -> ValidationResult:
    """
    Collect every structural violation of `schedule` against `data`.

    Never stops at the first problem; an empty error list means the schedule
    is valid and may be simulated.
    """
    res = ValidationResult()

    for day_id in sorted(schedule):
        if not data.has_day(day_id):
            res.add(
                day_id,
                None,
                "UNKNOWN-DAY",
                f"Schedule references non-existent day id {day_id}.",
            )

    for day in data.days:
        if day.id not in schedule:
            res.add(
                day.id, None, "MISSING-DAY", f"Day {day.id}: missing from schedule."
            )
            continue

        seen: dict[int, list[Shift]] = {}
        for shift in schedule[day.id]:
            if not _check_shift(res, data, day, shift):
                continue
            earlier = seen.setdefault(shift.employee_id, [])
            for other in earlier:
                if shift.overlaps(other):
                    res.add(
                        day.id,
                        shift.employee_id,
                        "OVERLAP",
                        f"Day {day.id}: employee {shift.employee_id} has "
                        f"overlapping shifts {other.token()} and {shift.token()}.",
                    )
            earlier.append(shift)

    return res
