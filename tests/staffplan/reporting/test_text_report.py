from __future__ import annotations

from pathlib import Path

import matplotlib

matplotlib.use("Agg", force=True)

from staffplan.domain import Day, Employee, Organization, Shift
from staffplan.input_data import InputData
from staffplan.reporting.text_report import (
    ReportDocument,
    _fmt_float,
    _fmt_money,
    _log_print,
    get_active_report,
    render_text_report,
    set_active_report,
)
from staffplan.score import score_schedule


def make_data() -> InputData:
    return InputData(
        org=Organization(50, 100),
        days=[Day(1, True, 8, 10, 1000, ["Register"]), Day(2, False)],
        employees=[
            Employee(1, 40, 10, initial_skills={"Register"}),
            Employee(2, 40, 10, vacation_days={1}),
        ],
    )


def test_valid_report_prints_totals(capfd) -> None:
    res = score_schedule(make_data(), {1: [Shift(1, 1, 8, 10, "Register")], 2: []})
    render_text_report(res, num_print_examples=3)
    out = capfd.readouterr().out

    assert "SCORECARD & VALIDATION RESULTS" in out
    assert "STATUS: VALID SCHEDULE" in out
    assert "Total Profit (Final Score): 780.00" in out
    assert "Total Payroll Cost: 20.00" in out
    assert "Total Revenue Potential: 1,000.00" in out
    assert "Total Fixed Costs Incurred: 200.00" in out
    assert "Every open day reached full capacity." in out
    assert "Hours distribution" in out


def test_invalid_report_lists_errors(capfd) -> None:
    res = score_schedule(
        make_data(),
        {1: [Shift(2, 1, 8, 10, "Register")], 2: [Shift(1, 2, 8, 9, "Register")]},
    )
    render_text_report(res)
    out = capfd.readouterr().out

    assert "STATUS: INVALID SCHEDULE (Score: 0)" in out
    assert "1. Day 1: employee 2 scheduled on a vacation day." in out
    assert "2. Day 2:" in out
    assert "Errors by type: CLOSED-DAY=1, VACATION=1" in out
    assert "Score is 0 due to invalidity." in out
    assert "Total Profit" not in out


def test_log_print_mirrors_into_active_report(capfd, tmp_path: Path) -> None:
    doc = ReportDocument(tmp_path / "report.pdf")
    set_active_report(doc)
    try:
        _log_print("hello", 42)
    finally:
        set_active_report(None)
    assert capfd.readouterr().out == "hello 42\n"
    assert doc.lines == ["hello 42"]
    assert get_active_report() is None


def test_report_document_writes_pdf(tmp_path: Path) -> None:
    doc = ReportDocument(tmp_path / "nested" / "report.pdf")
    doc.write()
    assert doc.path.exists()

    doc = ReportDocument(tmp_path / "with_text.pdf")
    doc.add_text("line one")
    doc.write()
    assert doc.path.stat().st_size > 0


def test_formatters() -> None:
    assert _fmt_money(1234.5) == "1,234.50"
    assert _fmt_money(None) == "nan"
    assert _fmt_money(float("nan")) == "nan"
    assert _fmt_float(0.256, nd=1, as_pct=True) == "25.6%"
    assert _fmt_float(2.0) == "2.00"
    assert _fmt_float(None) == "nan"
