# staffplan/precheck.py
from __future__ import annotations

import sys
from typing import Any, Dict, List, Tuple

import numpy as np

from staffplan.input_data import InputData


def availability_matrix(data: InputData) -> np.ndarray:
    """Boolean (employees, days) mask: True where the employee is not on vacation."""
    mask = np.ones((len(data.employees), data.num_days), dtype=bool)
    for e, emp in enumerate(data.employees):
        for d, day in enumerate(data.days):
            if not emp.is_available(day.id):
                mask[e, d] = False
    return mask


def trained_matrix(data: InputData, skills: List[str]) -> np.ndarray:
    """Boolean (employees, skills) mask of initial training."""
    out = np.zeros((len(data.employees), len(skills)), dtype=bool)
    for e, emp in enumerate(data.employees):
        for s, skill in enumerate(skills):
            out[e, s] = skill in emp.initial_skills
    return out


def _demanded_skills(data: InputData) -> List[str]:
    seen: Dict[str, None] = {}
    for day in data.open_days():
        for skill in day.required_skills:
            seen.setdefault(skill, None)
    return list(seen)


def _capacity_upper_bound_hours(data: InputData, avail: np.ndarray) -> int:
    """
    Loose *upper bound* on base-rate person-hours across the horizon:

      cap = Σ_e Σ_weeks min(open hours available to e that week, max_hours_e)

    Hours past the weekly cap are still workable, only at overtime pay.
    """
    open_hours = np.array(
        [day.end - day.start if day.is_open else 0 for day in data.days], dtype=int
    )
    weeks = np.array([(day.id - 1) // 7 for day in data.days], dtype=int)
    cap_total = 0
    for e, emp in enumerate(data.employees):
        hours_e = open_hours * avail[e]
        for w in np.unique(weeks):
            cap_total += min(int(hours_e[weeks == w].sum()), emp.max_hours_per_week)
    return cap_total


def _single_worker_demand_hours(data: InputData) -> int:
    """Person-hours needed if every skill slot were covered by one trained worker."""
    return int(sum(day.total_required_skill_hours for day in data.days))


def precheck_staffing(
    data: InputData,
    *,
    verbose: bool = True,
    examples_per_skill: int = 3,
    stream=None,
) -> Tuple[
    int,  # cap
    int,  # dem
    bool,  # ok_cap
    Dict[str, List[Tuple[int, int]]],  # buckets
    Dict[str, Dict[str, Any]],  # skill_stats
]:
    """
    Returns:
      cap: base-rate person-hour *upper bound* across the horizon
      dem: person-hours needed when each skill slot gets one trained worker
      ok_cap: cap >= dem
      buckets[skill]: list of (day_id, available_staff) for open days demanding
        the skill where fewer than two employees are available and none of them
        starts trained (the skill cannot be fully covered that day)
      skill_stats[skill]: {
          'required_hours': demanded skill-hours,
          'days_demanded': open days listing the skill,
          'trained_staff': employees trained at the start,
          'days_no_staff': demanded days with nobody available,
          'days_no_trained': demanded days with no initially trained staff available,
          'has_any_trained': trained_staff > 0
      }
    """
    stream = stream or sys.stdout
    avail = availability_matrix(data)
    skills = _demanded_skills(data)
    trained = trained_matrix(data, skills)

    cap = _capacity_upper_bound_hours(data, avail)
    dem = _single_worker_demand_hours(data)
    ok_cap = cap >= dem

    buckets: Dict[str, List[Tuple[int, int]]] = {s: [] for s in skills}
    skill_stats: Dict[str, Dict[str, Any]] = {
        s: {
            "required_hours": 0,
            "days_demanded": 0,
            "trained_staff": int(trained[:, i].sum()) if trained.size else 0,
            "days_no_staff": 0,
            "days_no_trained": 0,
        }
        for i, s in enumerate(skills)
    }

    for d, day in enumerate(data.days):
        if not day.is_open:
            continue
        available_today = avail[:, d] if avail.size else np.zeros(0, dtype=bool)
        n_avail = int(available_today.sum())
        for skill in day.required_skills:
            i = skills.index(skill)
            st = skill_stats[skill]
            st["required_hours"] += day.end - day.start
            st["days_demanded"] += 1
            n_trained = int((available_today & trained[:, i]).sum()) if n_avail else 0
            if n_avail == 0:
                st["days_no_staff"] += 1
            if n_trained == 0:
                st["days_no_trained"] += 1
                if n_avail < 2:
                    buckets[skill].append((day.id, n_avail))

    for st in skill_stats.values():
        st["has_any_trained"] = st["trained_staff"] > 0

    if verbose:
        print_precheck_header(cap, dem, ok_cap, stream=stream)
        print_skill_status(
            buckets,
            stats=skill_stats,
            examples_per_skill=examples_per_skill,
            stream=stream,
        )

    return cap, dem, ok_cap, buckets, skill_stats


def print_precheck_header(cap: int, dem: int, ok_cap: bool, *, stream=sys.stdout) -> None:
    """Print 'Pre-check' on its own line, then capacity line with ✅/❌"""
    print("\nPre-check:\n", file=stream)
    if ok_cap:
        print(f"✅ Base-rate capacity = {cap:,} | demand = {dem:,} | OK", file=stream)
    else:
        print(
            f"❌ Base-rate capacity = {cap:,} | demand = {dem:,} | "
            "overtime will be needed",
            file=stream,
        )
    print(
        "ℹ️  Pre-check only looks at initial training and vacations; staff trained "
        "during the horizon can still close gaps.",
        file=stream,
    )


def print_skill_status(
    buckets: Dict[str, List[Tuple[int, int]]],
    *,
    stats: Dict[str, Dict[str, Any]],
    examples_per_skill: int = 3,
    stream=sys.stdout,
) -> None:
    """
    One line per skill using ✅/❌ only.
    Shows demanded hours, trained staff, and sample days that cannot be fully covered.
    """
    for skill in sorted(buckets.keys()):
        days = buckets.get(skill, [])
        st = stats[skill]
        suffix = (
            f" | requires {st['required_hours']:,}h over {st['days_demanded']} day(s)"
            f" | trained staff: {st['trained_staff']}"
        )
        if st["days_no_trained"]:
            suffix += f" | days without trained staff: {st['days_no_trained']}"

        if not days:
            print(f"✅ {skill} — coverable{suffix}", file=stream)
            continue

        n = len(days)
        sample = ", ".join(
            f"d={d} (have {v})" for d, v in days[:examples_per_skill]
        )
        more = f", +{n - examples_per_skill} more" if n > examples_per_skill else ""
        print(
            f"❌ {skill} — {n} day(s) cannot reach full coverage — e.g. {sample}{more}"
            f"{suffix}",
            file=stream,
        )
