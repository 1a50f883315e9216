from __future__ import annotations

from pathlib import Path
from typing import Optional

import matplotlib.pyplot as plt
import pandas as pd
from matplotlib.backends.backend_pdf import PdfPages

from staffplan.score import ScoreResult

from .metrics import compute_coverage_metrics, hours_summary, lowest_capacity_days


class ReportDocument:
    def __init__(self, path: Path) -> None:
        self.path = path
        self.lines: list[str] = []
        self.figures: list[plt.Figure] = []

    def add_text(self, text: str) -> None:
        self.lines.append(text)

    def add_figure(self, fig: plt.Figure) -> None:
        self.figures.append(fig)

    def write(self) -> None:
        self.path.parent.mkdir(parents=True, exist_ok=True)
        with PdfPages(self.path) as pdf:
            if self.lines:
                fig, ax = plt.subplots(figsize=(8.27, 11.69))
                ax.axis("off")
                ax.text(
                    0.01,
                    0.99,
                    "\n".join(self.lines),
                    ha="left",
                    va="top",
                    fontsize=8,
                    family="monospace",
                )
                pdf.savefig(fig, bbox_inches="tight")
                plt.close(fig)
            elif not self.figures:
                fig, ax = plt.subplots(figsize=(8.27, 11.69))
                ax.axis("off")
                ax.text(
                    0.5,
                    0.5,
                    "Report contains no data.",
                    ha="center",
                    va="center",
                    fontsize=12,
                )
                pdf.savefig(fig, bbox_inches="tight")
                plt.close(fig)
            for fig in self.figures:
                pdf.savefig(fig, bbox_inches="tight")
                plt.close(fig)


_ACTIVE_REPORT: Optional[ReportDocument] = None


def set_active_report(doc: Optional[ReportDocument]) -> None:
    global _ACTIVE_REPORT
    _ACTIVE_REPORT = doc


def get_active_report() -> Optional[ReportDocument]:
    return _ACTIVE_REPORT


def _log_print(*args, **kwargs) -> None:
    from io import StringIO

    buf = StringIO()
    kwargs_copy = kwargs.copy()
    kwargs_copy["file"] = buf
    print(*args, **kwargs_copy)
    print(*args, **kwargs)
    if _ACTIVE_REPORT is not None:
        _ACTIVE_REPORT.add_text(buf.getvalue().rstrip("\n"))


def _fmt_money(x: float | None) -> str:
    if x is None or pd.isna(x):
        return "nan"
    return f"{float(x):,.2f}"


def _fmt_float(x: float | None, nd: int = 2, as_pct: bool = False) -> str:
    if x is None:
        return "nan"
    try:
        if pd.isna(x):
            return "nan"
        return f"{float(100 * x):.{nd}f}%" if as_pct else f"{float(x):.{nd}f}"
    except (TypeError, ValueError):
        return "nan"


def _print_hours_histogram(df_emp: pd.DataFrame) -> None:
    if df_emp.empty or "hours" not in df_emp.columns:
        _log_print("\nHours distribution: (no data)")
        return
    hours_series = pd.to_numeric(df_emp["hours"], errors="coerce").dropna().astype(int)
    counts = hours_series.value_counts().sort_index()
    _log_print("\nHours distribution — how many staff at each total hour:")
    for h, n in counts.items():
        bar = "█" * min(int(n), 50)
        _log_print(f"  {h:>4}h : {n:>4} staff  {bar}")


def render_text_report(
    res: ScoreResult,
    *,
    num_print_examples: int = 6,
) -> None:
    """Print the scorecard; invalid schedules list every violation and score 0."""
    _log_print("\n" + "=" * 50)
    _log_print("  SCORECARD & VALIDATION RESULTS")
    _log_print("=" * 50)

    if not res.valid:
        _print_violations(res)
        return

    totals = res.totals()
    _log_print(f"STATUS: {res.status_name} SCHEDULE")
    _log_print("-" * 50)
    _log_print(f"Total Profit (Final Score): {_fmt_money(totals['total_profit'])}")
    _log_print(f"Total Payroll Cost: {_fmt_money(totals['total_payroll'])}")
    _log_print(f"Total Revenue Earned: {_fmt_money(totals['total_revenue'])}")
    _log_print(
        f"Total Revenue Potential: {_fmt_money(totals['total_revenue_potential'])}"
    )
    _log_print(f"Total Fixed Costs Incurred: {_fmt_money(totals['total_fixed_costs'])}")

    cov = compute_coverage_metrics(res)
    _log_print(
        f"\nSkill coverage: achieved {_fmt_float(cov.achieved_skill_hours, nd=1)} / "
        f"required {cov.required_skill_hours:,} skill-hours "
        f"({_fmt_float(cov.coverage_ratio, nd=1, as_pct=True)})"
    )
    _log_print(
        f"Fully covered days: {cov.fully_covered_days} / {cov.open_days} open | "
        f"overtime hours: {cov.overtime_hours:,} | promotions: {cov.promotions:,}"
    )
    _log_print(
        "\nDefinitions:"
        "\n- skill-hour: one required skill during one open hour."
        "\n- capacity: achieved / required skill-hours for a day; revenue scales with capacity²."
        "\n- promotion: an employee reaching 1000 training points in a skill.\n"
    )

    df_emp = res.employee_breakdown()
    if not df_emp.empty:
        _log_print(f"Per-employee hours (top {num_print_examples}):")
        _log_print(df_emp.head(num_print_examples).to_string(index=False))
        stats = hours_summary(df_emp)
        if stats:
            _log_print(
                "\nHours distribution across employees: "
                f"mean={_fmt_float(stats['mean'])} | std={_fmt_float(stats['std'])} | "
                f"p5={_fmt_float(stats['p5'])} | p95={_fmt_float(stats['p95'])} | "
                f"min={_fmt_float(stats['min'])} | max={_fmt_float(stats['max'])}"
            )

    worst = lowest_capacity_days(res, top=num_print_examples)
    if worst.empty:
        _log_print("\nLowest-capacity days: (no open days with demand)")
    elif float(worst["capacity"].min()) >= 1.0:
        _log_print("\nEvery open day reached full capacity.")
    else:
        _log_print("\nLowest-capacity days:")
        _log_print(worst.to_string(index=False))

    _print_hours_histogram(df_emp)


def _print_violations(res: ScoreResult) -> None:
    _log_print(f"STATUS: {res.status_name} SCHEDULE (Score: 0)")
    _log_print("-" * 50)
    _log_print("ERRORS FOUND:")
    for i, err in enumerate(res.errors, start=1):
        _log_print(f"  {i}. {err.message}")
    counts = ", ".join(
        f"{code}={len(found)}" for code, found in sorted(res.errors_by_code().items())
    )
    _log_print(f"Errors by type: {counts}")
    _log_print("-" * 50)
    _log_print("Score is 0 due to invalidity.")
