# src/staffplan/strategies/base.py
from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Iterable

from staffplan.domain import Employee


@dataclass(frozen=True)
class Candidate:
    """An employee eligible for a (day, skill) slot, as seen right now."""

    employee: Employee
    trained: bool
    hourly_cost: float

    @property
    def id(self) -> int:
        return self.employee.id


class RankingStrategy(ABC):
    """
    Orders the candidate pool for one required skill.

    Strategies only decide *who is tried first*; coverage, training and payroll
    always come from staffplan.rules, so every strategy is scored the same way.
    """

    name: str = "RankingStrategy"

    @abstractmethod
    def sort_key(self, candidate: Candidate) -> tuple: ...

    def rank(self, candidates: Iterable[Candidate]) -> list[Candidate]:
        return sorted(candidates, key=self.sort_key)
