from staffplan.strategies.base import Candidate, RankingStrategy


class CostFirstStrategy(RankingStrategy):
    """Cheapest projected hour first; trained staff only break cost ties."""

    name = "cost_first"

    def sort_key(self, candidate: Candidate) -> tuple:
        return (candidate.hourly_cost, not candidate.trained, candidate.id)
