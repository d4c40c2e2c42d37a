from __future__ import annotations

from ...core.constants import EMPLOYER_CONTRIBUTION_RATE
from .base import PayrollCalculator


class EmployerCostCalculator(PayrollCalculator):
    """Gross rule: base pay plus fixed employer contributions (33.8%)."""

    def __init__(self, contribution_rate: float = EMPLOYER_CONTRIBUTION_RATE):
        self._rate = float(contribution_rate)

    def cost(self, hours: float, hourly_rate: float) -> float:
        base = hours * hourly_rate
        return base + base * self._rate
