from __future__ import annotations

from typing import Type, Union

from staffplan.strategies.base import RankingStrategy
from staffplan.strategies.cost_first import CostFirstStrategy
from staffplan.strategies.trained_first import TrainedFirstStrategy

DEFAULT_STRATEGY = "trained_first"

STRATEGY_REGISTRY: dict[str, Type[RankingStrategy]] = {
    TrainedFirstStrategy.name: TrainedFirstStrategy,
    CostFirstStrategy.name: CostFirstStrategy,
}

StrategyLike = Union[str, Type[RankingStrategy], RankingStrategy]


def available_strategies() -> list[str]:
    return sorted(STRATEGY_REGISTRY)


def resolve_strategy(item: StrategyLike | None = None) -> RankingStrategy:
    """Turn a name, class or instance into a ready RankingStrategy."""
    if item is None:
        item = DEFAULT_STRATEGY
    if isinstance(item, RankingStrategy):
        return item
    if isinstance(item, str):
        try:
            return STRATEGY_REGISTRY[item]()
        except KeyError:
            raise ValueError(
                f"Unknown strategy '{item}'; choose one of {available_strategies()}."
            ) from None
    if isinstance(item, type) and issubclass(item, RankingStrategy):
        return item()
    raise TypeError(
        "Strategies must be names, RankingStrategy subclasses or instances; "
        f"got {type(item)!r}"
    )
