from __future__ import annotations

from .metrics import CoverageMetrics, compute_coverage_metrics
from .reporter import Reporter

__all__ = [
    "Reporter",
    "CoverageMetrics",
    "compute_coverage_metrics",
]
