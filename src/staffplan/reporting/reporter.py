from __future__ import annotations

import sys

from staffplan.config import Config
from staffplan.input_data import InputData
from staffplan.precheck import precheck_staffing
from staffplan.reporting.plots import show_daily_profit, show_skill_coverage
from staffplan.reporting.text_report import (
    ReportDocument,
    render_text_report,
    set_active_report,
)
from staffplan.score import ScoreResult


class Reporter:
    """High-level orchestrator: runs the staffing pre-check and renders reports."""

    def __init__(
        self,
        cfg: Config,
        num_print_examples: int | None = None,
        enable_plots: bool | None = None,
    ) -> None:
        self.cfg = cfg
        self.num_print_examples = (
            num_print_examples
            if num_print_examples is not None
            else cfg.NUM_PRINT_EXAMPLES
        )
        self.enable_plots = enable_plots if enable_plots is not None else cfg.ENABLE_PLOTS

    def pre_solve(self, data: InputData) -> None:
        """Print the staffing pre-check (supply vs demand per skill)."""
        if not self.cfg.ENABLE_PRECHECK:
            print("Pre-check: (disabled)")
            return
        precheck_staffing(data, verbose=True, stream=sys.stdout)

    def render_text_report(self, res: ScoreResult) -> None:
        """Public entry point for callers that want text reporting only."""
        render_text_report(res, num_print_examples=self.num_print_examples)

    def post_solve(self, res: ScoreResult, data: InputData) -> None:
        """
        Render the scorecard and, for valid schedules, the plots; mirror all of
        it into <OUTPUT_DIR>/report.pdf.
        """
        doc = ReportDocument(self.cfg.OUTPUT_DIR / "report.pdf")
        set_active_report(doc)
        try:
            self.render_text_report(res)
            if res.valid and self.enable_plots:
                show_daily_profit(res, self.cfg.OUTPUT_DIR)
                show_skill_coverage(res, data, self.cfg.OUTPUT_DIR)
        finally:
            set_active_report(None)
        doc.write()
