from __future__ import annotations

from typing import Iterable


def teacher_bonus(teaching_rates: Iterable[float]) -> float:
    """
    Multiplier a learner gets from the trained colleagues working beside them.

    The best teacher counts. With no trained colleague (or only colleagues
    whose teaching rate is 0) the learner still learns at the base rate.
    """
    best = max(teaching_rates, default=0)
    return best if best > 0 else 1


def points_gained(learning_rate: float, bonus: float) -> float:
    return learning_rate * bonus
