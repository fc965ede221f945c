from __future__ import annotations

from typing import Optional

from .base import PayoutCalculator
from ...cleanings.model import Cleaning
from ...core.constants import DEFAULT_PAYMENT_RATE


class StandardPayoutCalculator(PayoutCalculator):
    """Standard rule: the rate captured on the cleaning, else the first set fallback, else 100."""

    def __init__(self, default_rate: float = DEFAULT_PAYMENT_RATE):
        self._default_rate = default_rate

    def rate_for(self, cleaning: Cleaning, *fallbacks: Optional[float]) -> float:
        for rate in (cleaning.payment_rate, *fallbacks):
            if rate:
                return rate
        return self._default_rate
