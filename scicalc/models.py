"""Records stored in the calculator database."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Optional


@dataclass
class CalculationEntity:
    """One history entry: an expression and its result."""

    id: int = -1
    expression: str = ""
    result: str = ""
    timestamp: Optional[datetime] = None

    def is_valid(self) -> bool:
        return bool(self.expression) and bool(self.result) and self.timestamp is not None


@dataclass
class CurrencyEntity:
    """An exchange rate of one currency against the rouble."""

    id: int = -1
    code: str = ""
    name: str = ""
    nominal: int = 1
    rate: float = 0.0
    last_update: Optional[datetime] = None

    def is_valid(self) -> bool:
        return (
            bool(self.code)
            and bool(self.name)
            and self.rate > 0
            and self.last_update is not None
        )