from __future__ import annotations

from .calendar import WEEK_LENGTH_DAYS, block_index, is_block_start
from .coverage import coverage_value
from .payroll import hourly_cost, is_overtime, overtime_rate
from .training import points_gained, teacher_bonus

__all__ = [
    "WEEK_LENGTH_DAYS",
    "block_index",
    "is_block_start",
    "coverage_value",
    "hourly_cost",
    "is_overtime",
    "overtime_rate",
    "points_gained",
    "teacher_bonus",
]
