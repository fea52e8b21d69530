from __future__ import annotations

from abc import ABC, abstractmethod

from ...entries.model import AbsenceEntry, TimeEntry


class PayCalculator(ABC):
    """Calculator interface (Strategy Pattern for paid minutes and pay)."""

    @abstractmethod
    def paid_minutes(self, entry: AbsenceEntry) -> int:
        raise NotImplementedError

    @abstractmethod
    def minutes_pay(self, minutes: float, rate: float) -> float:
        raise NotImplementedError

    @abstractmethod
    def overtime_pay(self, entry: TimeEntry, rate: float) -> float:
        raise NotImplementedError
