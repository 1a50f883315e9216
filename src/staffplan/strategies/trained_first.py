from staffplan.strategies.base import Candidate, RankingStrategy


class TrainedFirstStrategy(RankingStrategy):
    """
    Trained staff first, then the cheapest projected hour, then lowest id.

    A single trained worker covers a skill for the whole day, so they are
    always preferred over a cheaper pair of learners.
    """

    name = "trained_first"

    def sort_key(self, candidate: Candidate) -> tuple:
        return (not candidate.trained, candidate.hourly_cost, candidate.id)
