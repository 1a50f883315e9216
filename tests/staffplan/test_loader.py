from __future__ import annotations

from pathlib import Path

import pytest

from staffplan.domain import Shift
from staffplan.loader import (
    InputFormatError,
    load_input,
    load_schedule,
    parse_input,
    parse_schedule,
    parse_shift_token,
)


def test_parse_input_reads_every_section(small_text: str) -> None:
    data = parse_input(small_text)
    assert data.org.overtime_modifier_percent == 150
    assert data.org.fixed_daily_cost == 100
    assert data.num_days == 9

    day1 = data.day(1)
    assert (day1.start, day1.end, day1.revenue) == (8, 12, 1200)
    assert day1.required_skills == ["Register", "Grill"]
    assert not data.day(7).is_open

    emp1 = data.employee(1)
    assert emp1.max_hours_per_week == 16
    assert emp1.learning_rate == 2 and emp1.teaching_rate == 5
    assert emp1.initial_skills == {"Register"}
    assert emp1.vacation_days == set()
    assert data.employee(4).vacation_days == {5, 6}
    assert data.employee(3).initial_skills == set()


def test_load_input_from_file(input_file: Path) -> None:
    assert load_input(input_file).num_days == 9


def test_blank_lines_are_ignored() -> None:
    data = parse_input("\n50 10\n\n1\n1 8 10 100 A\n\n1 40 10 0 0 A _\n")
    assert data.num_days == 1
    assert [e.id for e in data.employees] == [1]


def test_fractional_numbers_are_accepted() -> None:
    data = parse_input("50 10.5\n1\n1 8 10 99.5 A\n1 40 12.5 0.5 1.5 _ _\n")
    assert data.org.fixed_daily_cost == 10.5
    assert data.day(1).revenue == 99.5
    assert data.employee(1).learning_rate == 0.5


@pytest.mark.parametrize(
    "text,line_no",
    [
        ("50\n1\n1\n", 1),
        ("50 10\nmany\n", 2),
        ("50 10\n2\n1\n", 3),
        ("50 10\n1\n1 8 10 100\n", 3),
        ("50 10\n1\n1 10 8 100 A\n", 3),
        ("50 10\n1\n1 8 10 100 A\n1 40 10 0 0 A\n", 4),
        ("50 10\n1\n1 8 10 100 A\n1 40 ten 0 0 A _\n", 4),
        ("50 10\n1\n1 8 10 100 A\n1 40 10 0 0 A x\n", 4),
        ("50 10\n1\n1 8 10 100 A\n1 0 10 0 0 A _\n", 4),
    ],
)
def test_malformed_input_reports_line(text: str, line_no: int) -> None:
    with pytest.raises(InputFormatError) as excinfo:
        parse_input(text)
    assert excinfo.value.line_no == line_no
    assert str(excinfo.value).startswith(f"line {line_no}:")


def test_non_sequential_days_are_rejected() -> None:
    with pytest.raises(InputFormatError, match="dense"):
        parse_input("50 10\n2\n1\n3\n")


def test_parse_shift_token_keeps_dashes_in_skill() -> None:
    shift = parse_shift_token(1, 4, "12-8-16-Front-Desk")
    assert shift == Shift(12, 4, 8, 16, "Front-Desk")


@pytest.mark.parametrize("token", ["1-8-16", "1-8-16-", "x-8-16-A", "1-a-16-A"])
def test_parse_shift_token_rejects_bad_tokens(token: str) -> None:
    with pytest.raises(InputFormatError):
        parse_shift_token(3, 1, token)


def test_parse_schedule() -> None:
    schedule = parse_schedule("1 1-8-12-Register 2-8-10-Grill\n2 _\n3 3-10-14-Register\n")
    assert schedule[1] == [
        Shift(1, 1, 8, 12, "Register"),
        Shift(2, 1, 8, 10, "Grill"),
    ]
    assert schedule[2] == []
    assert schedule[3] == [Shift(3, 3, 10, 14, "Register")]


def test_parse_schedule_rejects_repeated_day() -> None:
    with pytest.raises(InputFormatError, match="listed twice"):
        parse_schedule("1 _\n1 _\n")


def test_load_schedule_from_file(tmp_path: Path) -> None:
    path = tmp_path / "schedule.txt"
    path.write_text("1 _\n2 1-8-9-A\n", encoding="utf-8")
    assert load_schedule(path)[2] == [Shift(1, 2, 8, 9, "A")]
