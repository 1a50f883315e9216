from __future__ import annotations

from .base import Candidate, RankingStrategy
from .cost_first import CostFirstStrategy
from .registry import (
    DEFAULT_STRATEGY,
    STRATEGY_REGISTRY,
    available_strategies,
    resolve_strategy,
)
from .trained_first import TrainedFirstStrategy

__all__ = [
    "Candidate",
    "RankingStrategy",
    "CostFirstStrategy",
    "TrainedFirstStrategy",
    "DEFAULT_STRATEGY",
    "STRATEGY_REGISTRY",
    "available_strategies",
    "resolve_strategy",
]
