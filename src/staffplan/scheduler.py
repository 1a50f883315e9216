# staffplan/scheduler.py
from __future__ import annotations

from staffplan.domain import Day, Schedule, Shift
from staffplan.input_data import InputData
from staffplan.result_types import SchedulerResult
from staffplan.rules.payroll import hourly_cost
from staffplan.simulate import SimulationError, simulate_day
from staffplan.state import SimulationState
from staffplan.strategies.base import Candidate
from staffplan.strategies.registry import StrategyLike, resolve_strategy


class GreedyScheduler:
    """
    Single forward pass over the horizon, one whole-day shift per assignment.

    Per open day and required skill (in listed order) the strategy ranks the
    free candidates, then:
      - a trained top candidate covers the skill alone,
      - otherwise the two best untrained candidates pair up,
      - otherwise a lone untrained candidate gives half coverage,
      - otherwise the skill stays uncovered.
    After each day the scheduler's own state is advanced with simulate_day(),
    the same code the scorer runs, so the two can never disagree.
    """

    def __init__(
        self,
        data: InputData,
        strategy: StrategyLike | None = None,
        state: SimulationState | None = None,
    ) -> None:
        self.data = data
        self.strategy = resolve_strategy(strategy)
        self._initial_state = state

    def _fresh_state(self) -> SimulationState:
        if self._initial_state is not None:
            return self._initial_state.copy()
        return SimulationState.from_employees(self.data.employees)

    def build(self) -> SchedulerResult:
        state = self._fresh_state()
        schedule: Schedule = {}
        uncovered: list[tuple[int, str]] = []

        for day in self.data.days:
            # weekly counters must be reset before costs are projected
            state.begin_day(day.id)
            shifts = self._assign_day(day, state, uncovered) if day.is_open else []
            schedule[day.id] = shifts
            simulate_day(self.data, day, shifts, state)

        return SchedulerResult(schedule=schedule, final_state=state, uncovered=uncovered)

    def candidates(
        self, day: Day, skill: str, state: SimulationState, busy: dict[int, list[Shift]]
    ) -> list[Candidate]:
        """Employees free for the whole opening window of `day`, ranked."""
        window = Shift(-1, day.id, day.start, day.end, skill)
        mod = self.data.org.overtime_modifier_percent
        pool: list[Candidate] = []
        for emp in self.data.employees:
            if not emp.is_available(day.id):
                continue
            if any(window.overlaps(s) for s in busy.get(emp.id, ())):
                continue
            if emp.id not in state:
                raise SimulationError(f"Employee {emp.id} has no simulation state.")
            es = state[emp.id]
            pool.append(
                Candidate(
                    employee=emp,
                    trained=es.is_trained(skill),
                    hourly_cost=hourly_cost(emp, es.weekly_hours_used, mod),
                )
            )
        return self.strategy.rank(pool)

    def _assign_day(
        self, day: Day, state: SimulationState, uncovered: list[tuple[int, str]]
    ) -> list[Shift]:
        shifts: list[Shift] = []
        busy: dict[int, list[Shift]] = {}

        for skill in day.required_skills:
            ranked = self.candidates(day, skill, state, busy)
            if not ranked:
                uncovered.append((day.id, skill))
                continue

            if ranked[0].trained:
                chosen = ranked[:1]
            else:
                chosen = [c for c in ranked if not c.trained][:2]

            for cand in chosen:
                shift = Shift(cand.id, day.id, day.start, day.end, skill)
                shifts.append(shift)
                busy.setdefault(cand.id, []).append(shift)

        return shifts


def build_schedule(
    data: InputData, strategy: StrategyLike | None = None
) -> Schedule:
    return GreedyScheduler(data, strategy=strategy).build().schedule
