from __future__ import annotations

from staffplan.domain import Employee


def overtime_rate(salary_per_hour: float, overtime_modifier_percent: int) -> int:
    # integer floor, never rounded
    return int(salary_per_hour * overtime_modifier_percent // 100)


def is_overtime(employee: Employee, weekly_hours_used: int) -> bool:
    return weekly_hours_used >= employee.max_hours_per_week


def hourly_cost(
    employee: Employee, weekly_hours_used: int, overtime_modifier_percent: int
) -> float:
    """Cost of the next hour given the hours already used this block week."""
    if is_overtime(employee, weekly_hours_used):
        return overtime_rate(employee.salary_per_hour, overtime_modifier_percent)
    return employee.salary_per_hour
