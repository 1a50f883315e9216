# staffplan/simulate.py
from __future__ import annotations

from collections import defaultdict
from typing import Sequence

from staffplan.domain import TRAINED_THRESHOLD, Day, Employee, Schedule, Shift
from staffplan.input_data import InputData
from staffplan.result_types import DayResult, EmployeeDayHours, SimulationResult
from staffplan.rules.coverage import coverage_value
from staffplan.rules.payroll import hourly_cost, is_overtime
from staffplan.rules.training import points_gained, teacher_bonus
from staffplan.state import SimulationState


class SimulationError(RuntimeError):
    """A schedule references something the domain model does not contain."""


def _employee(data: InputData, employee_id: int) -> Employee:
    emp = data.employee(employee_id)
    if emp is None:
        raise SimulationError(f"Unknown employee {employee_id}.")
    return emp


def _check_day_shifts(data: InputData, day: Day, shifts: Sequence[Shift]) -> None:
    if not day.is_open:
        if shifts:
            raise SimulationError(
                f"Day {day.id} is closed but has {len(shifts)} shift(s); "
                "validate the schedule before simulating."
            )
        return
    required = set(day.required_skills)
    for shift in shifts:
        if shift.day_id != day.id:
            raise SimulationError(
                f"Shift {shift.token()} is filed under day {day.id} "
                f"but belongs to day {shift.day_id}."
            )
        if not data.has_employee(shift.employee_id):
            raise SimulationError(
                f"Day {day.id}: shift {shift.token()} references unknown "
                f"employee {shift.employee_id}."
            )
        if shift.skill not in required:
            raise SimulationError(
                f"Day {day.id}: shift {shift.token()} uses skill "
                f"'{shift.skill}' which is not required that day."
            )


def simulate_day(
    data: InputData,
    day: Day,
    shifts: Sequence[Shift],
    state: SimulationState,
) -> DayResult:
    """
    Replay one day hour by hour, mutating `state` in place.

    Promotions earned during hour h are staged and only applied at the start
    of hour h+1, so they never change hour h's coverage or teaching.
    """
    _check_day_shifts(data, day, shifts)
    state.begin_day(day.id)
    fixed_cost = data.org.fixed_daily_cost

    if not day.is_open:
        return DayResult(
            day_id=day.id,
            is_open=False,
            capacity=0.0,
            achieved_skill_hours=0.0,
            required_skill_hours=0,
            payroll=0,
            revenue=0,
            revenue_potential=0,
            fixed_cost=fixed_cost,
            profit=-fixed_cost,
        )

    for shift in shifts:
        if shift.employee_id not in state:
            raise SimulationError(
                f"Employee {shift.employee_id} has no simulation state."
            )

    overtime_mod = data.org.overtime_modifier_percent
    achieved = 0.0
    payroll: float = 0
    hours_by_emp: dict[int, EmployeeDayHours] = defaultdict(EmployeeDayHours)
    promotions: list[tuple[int, str, int]] = []
    skill_coverage: dict[str, float] = {skill: 0.0 for skill in day.required_skills}
    staged: list[tuple[int, str]] = []

    for h in day.hours:
        # 1) promotions earned last hour take effect now
        for emp_id, skill in staged:
            state[emp_id].promote(skill)
            promotions.append((emp_id, skill, h))
        staged = []

        active = [s for s in shifts if s.is_active(h)]
        by_skill: dict[str, list[Shift]] = defaultdict(list)
        for s in active:
            by_skill[s.skill].append(s)

        # 2-4) coverage and training per required skill
        for skill in day.required_skills:
            workers = by_skill.get(skill, [])
            trained = [s for s in workers if state[s.employee_id].is_trained(skill)]
            untrained = [
                s for s in workers if not state[s.employee_id].is_trained(skill)
            ]
            value = coverage_value(len(trained), len(untrained))
            achieved += value
            skill_coverage[skill] += value
            if not untrained:
                continue

            bonus = teacher_bonus(
                _employee(data, s.employee_id).teaching_rate for s in trained
            )
            for s in untrained:
                emp = _employee(data, s.employee_id)
                total = state[emp.id].add_points(
                    skill, points_gained(emp.learning_rate, bonus)
                )
                if total >= TRAINED_THRESHOLD and (emp.id, skill) not in staged:
                    staged.append((emp.id, skill))

        # 5) payroll: one weekly hour per active worker, whatever the skill
        for emp_id in dict.fromkeys(s.employee_id for s in active):
            emp = _employee(data, emp_id)
            es = state[emp_id]
            cost = hourly_cost(emp, es.weekly_hours_used, overtime_mod)
            record = hours_by_emp[emp_id]
            if is_overtime(emp, es.weekly_hours_used):
                record.overtime_hours += 1
            else:
                record.base_hours += 1
            record.cost += cost
            payroll += cost
            es.weekly_hours_used += 1

    # the next hour anyone can work is on a later day
    for emp_id, skill in staged:
        state[emp_id].promote(skill)
        promotions.append((emp_id, skill, day.end))

    required_hours = day.total_required_skill_hours
    capacity = achieved / required_hours if required_hours > 0 else 0.0
    revenue = day.revenue * capacity**2
    return DayResult(
        day_id=day.id,
        is_open=True,
        capacity=capacity,
        achieved_skill_hours=achieved,
        required_skill_hours=required_hours,
        payroll=payroll,
        revenue=revenue,
        revenue_potential=day.revenue,
        fixed_cost=fixed_cost,
        profit=revenue - payroll - fixed_cost,
        employee_hours=dict(hours_by_emp),
        promotions=promotions,
        skill_coverage=skill_coverage,
    )


def simulate(
    data: InputData,
    schedule: Schedule,
    state: SimulationState | None = None,
) -> SimulationResult:
    """
    Authoritative scorer: replay `schedule` day by day in ascending id order.

    The schedule is assumed to have passed validate_schedule(); references to
    unknown days, employees or skills raise SimulationError. A given `state`
    is copied, never mutated, so repeated calls are independent.
    """
    unknown = sorted(d for d in schedule if not data.has_day(d))
    if unknown:
        raise SimulationError(f"Schedule references unknown day id(s): {unknown}.")

    own_state = (
        state.copy()
        if state is not None
        else SimulationState.from_employees(data.employees)
    )

    days: list[DayResult] = []
    for day in data.days:
        days.append(simulate_day(data, day, schedule.get(day.id, []), own_state))

    per_day_profit = [d.profit for d in days]
    return SimulationResult(
        per_day_profit=per_day_profit,
        total_score=sum(per_day_profit),
        final_state=own_state,
        days=days,
    )
