from __future__ import annotations

FULL = 1.0
HALF = 0.5
NONE = 0.0


def coverage_value(trained_count: int, untrained_count: int) -> float:
    """
    Coverage of one (hour, skill) slot.

    One trained worker, or two untrained workers, fully cover the slot; a lone
    untrained worker covers half of it. Extra staff never push it above 1.0.
    """
    if trained_count >= 1:
        return FULL
    if untrained_count >= 2:
        return FULL
    if untrained_count == 1:
        return HALF
    return NONE
