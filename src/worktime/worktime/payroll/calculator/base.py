from __future__ import annotations

from abc import ABC, abstractmethod


class PayrollCalculator(ABC):
    """Calculator interface (Strategy Pattern for labour cost of a work session)."""

    @abstractmethod
    def cost(self, hours: float, hourly_rate: float) -> float:
        raise NotImplementedError
