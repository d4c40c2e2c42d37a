from __future__ import annotations

from .base import PayrollCalculator


class BaseRateCalculator(PayrollCalculator):
    """Plain rule: hours x hourly rate, no contributions."""

    def cost(self, hours: float, hourly_rate: float) -> float:
        return hours * hourly_rate
