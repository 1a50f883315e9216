from __future__ import annotations

import random
from pathlib import Path
from typing import Iterable

import matplotlib.pyplot as plt
import pandas as pd
from matplotlib.colors import LinearSegmentedColormap
from matplotlib.patches import Patch

from staffplan.config import Config
from staffplan.domain import Day, Schedule, Shift
from staffplan.input_data import InputData
from staffplan.loader import EMPTY_MARKER


def merge_shifts(shifts: Iterable[Shift]) -> list[Shift]:
    """
    Join back-to-back shifts of the same employee on the same skill.

    Presentation only: the merged list covers exactly the same hours, and the
    scorer never sees it.
    """
    merged: list[Shift] = []
    for shift in sorted(shifts, key=lambda s: (s.employee_id, s.skill, s.start)):
        last = merged[-1] if merged else None
        if (
            last is not None
            and last.employee_id == shift.employee_id
            and last.skill == shift.skill
            and last.end == shift.start
        ):
            merged[-1] = Shift(
                last.employee_id, last.day_id, last.start, shift.end, last.skill
            )
        else:
            merged.append(shift)
    return merged


def format_day_line(day_id: int, shifts: list[Shift], merge: bool = True) -> str:
    if not shifts:
        return f"{day_id} {EMPTY_MARKER}"
    out = merge_shifts(shifts) if merge else shifts
    return f"{day_id} " + " ".join(s.token() for s in out)


def format_schedule(schedule: Schedule, days: Iterable[Day], merge: bool = True) -> str:
    """One line per horizon day, in id order."""
    lines = [format_day_line(day.id, schedule.get(day.id, []), merge) for day in days]
    return "\n".join(lines) + "\n"


def write_schedule(
    schedule: Schedule, days: Iterable[Day], path: Path | str, merge: bool = True
) -> Path:
    out_path = Path(path)
    out_path.parent.mkdir(parents=True, exist_ok=True)
    out_path.write_text(format_schedule(schedule, days, merge), encoding="utf-8")
    return out_path


def schedule_to_frame(schedule: Schedule) -> pd.DataFrame:
    """Long table: one row per (employee, day, hour) worked."""
    rows = [
        {
            "employee_id": s.employee_id,
            "day_id": day_id,
            "hour": h,
            "skill": s.skill,
        }
        for day_id, shifts in sorted(schedule.items())
        for s in shifts
        for h in range(s.start, s.end)
    ]
    return pd.DataFrame(rows, columns=["employee_id", "day_id", "hour", "skill"])


def export_shift_reports(schedule: Schedule, cfg: Config, data: InputData) -> None:
    """Persist hourly/daily CSVs plus a sample Gantt chart for a schedule."""
    df = schedule_to_frame(schedule)
    if df.empty:
        return

    df["scheduled"] = 1
    day_ids = pd.Index([d.id for d in data.days], name="day_id")
    hours = pd.Index(range(24), name="hour")
    idx = pd.MultiIndex.from_product([day_ids, hours], names=["day_id", "hour"])
    emp_ids = [e.id for e in data.employees]

    hourly = (
        df.pivot_table(
            index=["day_id", "hour"],
            columns="employee_id",
            values="scheduled",
            aggfunc="max",
            fill_value=0,
        )
        .reindex(index=idx, fill_value=0)
        .reindex(columns=emp_ids, fill_value=0)
    )
    hourly.columns = [f"Employee {e}" for e in emp_ids]

    out_dir = cfg.OUTPUT_DIR
    out_dir.mkdir(parents=True, exist_ok=True)
    if cfg.EXPORT_CSV:
        hourly.to_csv(out_dir / "shifts_hourly.csv")
        # hours worked per employee per day
        daily = hourly.groupby(level="day_id").sum()
        daily.to_csv(out_dir / "shifts_daily.csv")

    if cfg.ENABLE_PLOTS:
        sample_employee_hourly_gantt_plot(df, data, cfg)


def sample_employee_hourly_gantt_plot(
    df: pd.DataFrame, data: InputData, cfg: Config
) -> Path | None:
    if df.empty or not data.employees:
        return None

    worked = sorted(df["employee_id"].unique().tolist())
    num_staff = min(cfg.GANTT_MAX_EMPLOYEES, len(worked))
    if num_staff == 0:
        return None

    rng = random.Random(cfg.SEED)
    chosen = sorted(rng.sample(worked, num_staff))

    skills = sorted(df["skill"].unique().tolist())
    gradient = LinearSegmentedColormap.from_list(
        "green_blue_purple",
        ["#6EE7B7", "#34D399", "#3B82F6", "#6366F1", "#C4B5FD"],
    )
    denom = max(len(skills) - 1, 1)
    color_map = {skill: gradient(i / denom) for i, skill in enumerate(skills)}

    fig_height = 3 + num_staff * 0.2
    fig, ax = plt.subplots(figsize=(9, fig_height), dpi=150)

    y_positions = list(range(num_staff))[::-1]
    for y, emp_id in zip(y_positions, chosen):
        rows = df[df["employee_id"] == emp_id]
        for row in rows.itertuples(index=False):
            # x axis in days: day 1 hour 0 sits at 1.0
            ax.barh(
                y,
                width=1 / 24,
                left=row.day_id + row.hour / 24,
                height=0.8,
                color=color_map[row.skill],
                align="center",
                linewidth=0,
                alpha=0.9,
                zorder=3,
            )

    ax.set_yticks(y_positions, [f"Employee {e}" for e in chosen])
    ax.set_ylabel("Employee")
    ax.set_xlabel("Day")
    ax.set_title(f"Sample employee shifts (up to {num_staff} employees)", fontsize=11)

    first, last = data.days[0].id, data.days[-1].id + 1
    ax.set_xlim(first, last)
    for d in range(first, last + 1):
        ax.axvline(d, color="0.85", linestyle="--", linewidth=0.8, zorder=1)

    for spine in ("top", "right"):
        ax.spines[spine].set_visible(False)
    ax.set_ylim(-0.5, num_staff - 0.5)

    legend_handles = [Patch(facecolor=color_map[s], label=s) for s in skills]
    if legend_handles:
        ax.legend(
            handles=legend_handles,
            loc="upper center",
            bbox_to_anchor=(0.5, 1.2),
            ncol=3,
            frameon=False,
        )

    ax.grid(False)
    fig.tight_layout()
    out_path = cfg.OUTPUT_DIR / "sample_shifts_gantt.png"
    fig.savefig(out_path, dpi=fig.dpi, bbox_inches="tight")
    plt.close(fig)
    return out_path
