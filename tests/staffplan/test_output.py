from __future__ import annotations

from pathlib import Path

import matplotlib

matplotlib.use("Agg", force=True)

from staffplan.config import Config
from staffplan.domain import Shift
from staffplan.input_data import InputData
from staffplan.loader import parse_schedule
from staffplan.output import (
    export_shift_reports,
    format_day_line,
    format_schedule,
    merge_shifts,
    sample_employee_hourly_gantt_plot,
    schedule_to_frame,
    write_schedule,
)
from staffplan.scheduler import build_schedule
from staffplan.score import score_schedule


def hourly_schedule() -> dict[int, list[Shift]]:
    return {
        1: [
            Shift(3, 1, 8, 9, "Register"),
            Shift(4, 1, 8, 9, "Register"),
            Shift(3, 1, 9, 10, "Register"),
            Shift(4, 1, 9, 10, "Register"),
            Shift(3, 1, 10, 11, "Grill"),
            Shift(3, 1, 11, 12, "Register"),
        ],
        2: [],
        3: [],
        4: [],
        5: [],
        6: [],
        7: [],
        8: [],
        9: [],
    }


def test_merge_joins_contiguous_same_skill_shifts() -> None:
    merged = merge_shifts(hourly_schedule()[1])
    assert [s.token() for s in merged] == [
        "3-10-11-Grill",
        "3-8-10-Register",
        "3-11-12-Register",
        "4-8-10-Register",
    ]


def test_format_day_line() -> None:
    assert format_day_line(7, []) == "7 _"
    shifts = [Shift(1, 2, 8, 9, "A"), Shift(1, 2, 9, 10, "A")]
    assert format_day_line(2, shifts) == "2 1-8-10-A"
    assert format_day_line(2, shifts, merge=False) == "2 1-8-9-A 1-9-10-A"


def test_format_schedule_lists_every_day(small_data: InputData) -> None:
    text = format_schedule({1: [Shift(1, 1, 8, 12, "Register")]}, small_data.days)
    lines = text.splitlines()
    assert len(lines) == 9
    assert lines[0] == "1 1-8-12-Register"
    assert lines[6] == "7 _"
    assert text.endswith("\n")


def test_merging_never_changes_the_score(small_data: InputData) -> None:
    schedule = hourly_schedule()
    merged = parse_schedule(format_schedule(schedule, small_data.days, merge=True))
    unmerged = parse_schedule(format_schedule(schedule, small_data.days, merge=False))

    assert len(merged[1]) < len(unmerged[1])
    a = score_schedule(small_data, merged)
    b = score_schedule(small_data, unmerged)
    assert a.valid and b.valid
    assert a.total_score == b.total_score
    assert a.simulation.final_state.snapshot() == b.simulation.final_state.snapshot()


def test_written_schedule_scores_the_same(small_data: InputData, tmp_path: Path) -> None:
    schedule = build_schedule(small_data)
    path = write_schedule(schedule, small_data.days, tmp_path / "out" / "sched.txt")
    assert path.exists()
    reread = parse_schedule(path.read_text(encoding="utf-8"))
    assert (
        score_schedule(small_data, reread).total_score
        == score_schedule(small_data, schedule).total_score
    )


def test_schedule_to_frame_has_one_row_per_hour() -> None:
    df = schedule_to_frame(hourly_schedule())
    assert list(df.columns) == ["employee_id", "day_id", "hour", "skill"]
    assert len(df) == 6
    assert schedule_to_frame({1: []}).empty


def test_export_writes_csvs(small_data: InputData, tmp_path: Path) -> None:
    cfg = Config(OUTPUT_DIR=tmp_path, ENABLE_PLOTS=False)
    export_shift_reports(hourly_schedule(), cfg, small_data)

    hourly = (tmp_path / "shifts_hourly.csv").read_text().splitlines()
    assert hourly[0] == "day_id,hour," + ",".join(
        f"Employee {e.id}" for e in small_data.employees
    )
    # 9 days x 24 hours plus the header
    assert len(hourly) == 9 * 24 + 1
    assert (tmp_path / "shifts_daily.csv").exists()
    assert not (tmp_path / "sample_shifts_gantt.png").exists()


def test_export_skips_empty_schedules(small_data: InputData, tmp_path: Path) -> None:
    cfg = Config(OUTPUT_DIR=tmp_path / "never")
    export_shift_reports({d.id: [] for d in small_data.days}, cfg, small_data)
    assert not (tmp_path / "never").exists()


def test_gantt_plot_saves(small_data: InputData, tmp_path: Path) -> None:
    cfg = Config(OUTPUT_DIR=tmp_path, GANTT_MAX_EMPLOYEES=1)
    df = schedule_to_frame(hourly_schedule())
    path = sample_employee_hourly_gantt_plot(df, small_data, cfg)
    assert path == tmp_path / "sample_shifts_gantt.png"
    assert path.exists()
