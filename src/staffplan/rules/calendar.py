from __future__ import annotations

# Block weeks are non-overlapping and anchored at day 1: 1-7, 8-14, 15-21, ...
WEEK_LENGTH_DAYS = 7
FIRST_DAY_ID = 1


def block_index(day_id: int) -> int:
    return (day_id - FIRST_DAY_ID) // WEEK_LENGTH_DAYS


def is_block_start(day_id: int) -> bool:
    return (day_id - FIRST_DAY_ID) % WEEK_LENGTH_DAYS == 0
