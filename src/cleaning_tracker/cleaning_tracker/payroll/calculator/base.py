from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Iterable, Optional

from ...cleanings.model import Cleaning


class PayoutCalculator(ABC):
    """Calculator interface (Strategy Pattern for cleaning payouts)."""

    @abstractmethod
    def rate_for(self, cleaning: Cleaning, *fallbacks: Optional[float]) -> float:
        raise NotImplementedError

    def total(self, cleanings: Iterable[Cleaning], *fallbacks: Optional[float]) -> float:
        return sum(self.rate_for(c, *fallbacks) for c in cleanings)
