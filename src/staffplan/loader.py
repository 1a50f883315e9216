# staffplan/loader.py
from __future__ import annotations

from pathlib import Path
from typing import Callable, TypeVar

from staffplan.domain import Day, Employee, Organization, Schedule, Shift
from staffplan.input_data import InputData

EMPTY_MARKER = "_"

T = TypeVar("T")


class InputFormatError(ValueError):
    """Malformed problem or schedule text."""

    def __init__(self, line_no: int, message: str, line: str = "") -> None:
        self.line_no = line_no
        self.line = line
        detail = f" ({line!r})" if line else ""
        super().__init__(f"line {line_no}: {message}{detail}")


def _number(token: str) -> int | float:
    try:
        return int(token)
    except ValueError:
        return float(token)


def _field(
    line_no: int, line: str, what: str, conv: Callable[[str], T], tok: str
) -> T:
    try:
        return conv(tok)
    except ValueError as exc:
        raise InputFormatError(line_no, f"invalid {what} {tok!r}", line) from exc


def _csv(token: str) -> list[str]:
    if token == EMPTY_MARKER:
        return []
    return [part for part in token.split(",") if part]


def _numbered_lines(text: str) -> list[tuple[int, str]]:
    return [
        (i, line.strip())
        for i, line in enumerate(text.splitlines(), start=1)
        if line.strip()
    ]


def _parse_day(line_no: int, line: str) -> Day:
    parts = line.split()
    day_id = _field(line_no, line, "day id", int, parts[0])
    try:
        if len(parts) == 1:
            return Day(id=day_id, is_open=False)
        if len(parts) != 5:
            raise InputFormatError(
                line_no, "open day needs: id start end revenue skills_csv", line
            )
        return Day(
            id=day_id,
            is_open=True,
            start=_field(line_no, line, "start hour", int, parts[1]),
            end=_field(line_no, line, "end hour", int, parts[2]),
            revenue=_field(line_no, line, "revenue", _number, parts[3]),
            required_skills=_csv(parts[4]),
        )
    except InputFormatError:
        raise
    except (TypeError, ValueError) as exc:
        raise InputFormatError(line_no, str(exc), line) from exc


def _parse_employee(line_no: int, line: str) -> Employee:
    parts = line.split()
    if len(parts) != 7:
        raise InputFormatError(
            line_no,
            "employee needs: id max_hours salary learning teaching skills vacations",
            line,
        )
    vacations = [
        _field(line_no, line, "vacation day", int, tok) for tok in _csv(parts[6])
    ]
    try:
        return Employee(
            id=_field(line_no, line, "employee id", int, parts[0]),
            max_hours_per_week=_field(line_no, line, "max hours", int, parts[1]),
            salary_per_hour=_field(line_no, line, "salary", _number, parts[2]),
            learning_rate=_field(line_no, line, "learning rate", _number, parts[3]),
            teaching_rate=_field(line_no, line, "teaching rate", _number, parts[4]),
            initial_skills=set(_csv(parts[5])),
            vacation_days=set(vacations),
        )
    except InputFormatError:
        raise
    except (TypeError, ValueError) as exc:
        raise InputFormatError(line_no, str(exc), line) from exc


def parse_input(text: str) -> InputData:
    """
    Parse the textual problem description.

    Layout: an organisation line, a day count, one line per day (a bare id for
    a closed day), then one line per employee. Raises InputFormatError with the
    offending 1-based line number.
    """
    lines = _numbered_lines(text)
    if len(lines) < 2:
        raise InputFormatError(
            len(lines), "input needs an organisation line and a day count"
        )

    org_no, org_line = lines[0]
    org_parts = org_line.split()
    if len(org_parts) != 2:
        raise InputFormatError(
            org_no, "organisation line needs: overtime_percent fixed_cost", org_line
        )
    try:
        org = Organization(
            overtime_modifier_percent=_field(
                org_no, org_line, "overtime percent", int, org_parts[0]
            ),
            fixed_daily_cost=_field(
                org_no, org_line, "fixed cost", _number, org_parts[1]
            ),
        )
    except InputFormatError:
        raise
    except ValueError as exc:
        raise InputFormatError(org_no, str(exc), org_line) from exc

    count_no, count_line = lines[1]
    num_days = _field(count_no, count_line, "day count", int, count_line)
    if num_days < 0:
        raise InputFormatError(count_no, "day count must be >= 0", count_line)
    if len(lines) < 2 + num_days:
        raise InputFormatError(
            lines[-1][0],
            f"expected {num_days} day lines, file ended after {len(lines) - 2}",
        )

    days = [_parse_day(no, line) for no, line in lines[2 : 2 + num_days]]
    employees = [_parse_employee(no, line) for no, line in lines[2 + num_days :]]

    try:
        return InputData(org=org, days=days, employees=employees)
    except ValueError as exc:
        raise InputFormatError(count_no, str(exc)) from exc


def load_input(path: Path | str) -> InputData:
    return parse_input(Path(path).read_text(encoding="utf-8"))


def parse_shift_token(line_no: int, day_id: int, token: str) -> Shift:
    """`<emp>-<start>-<end>-<skill>`; the skill itself may contain dashes."""
    parts = token.split("-", 3)
    if len(parts) != 4 or not parts[3]:
        raise InputFormatError(
            line_no, f"malformed shift token {token!r} (want emp-start-end-skill)"
        )
    return Shift(
        employee_id=_field(line_no, token, "employee id", int, parts[0]),
        day_id=day_id,
        start=_field(line_no, token, "start hour", int, parts[1]),
        end=_field(line_no, token, "end hour", int, parts[2]),
        skill=parts[3],
    )


def parse_schedule(text: str) -> Schedule:
    """Parse writer output back into a Schedule (one line per day)."""
    schedule: Schedule = {}
    for line_no, line in _numbered_lines(text):
        parts = line.split()
        day_id = _field(line_no, line, "day id", int, parts[0])
        if day_id in schedule:
            raise InputFormatError(line_no, f"day {day_id} listed twice", line)
        tokens = parts[1:]
        if tokens == [EMPTY_MARKER]:
            tokens = []
        schedule[day_id] = [parse_shift_token(line_no, day_id, tok) for tok in tokens]
    return schedule


def load_schedule(path: Path | str) -> Schedule:
    return parse_schedule(Path(path).read_text(encoding="utf-8"))
