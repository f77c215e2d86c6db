"""
Market data provider protocols for type hints.
"""

from __future__ import annotations

from typing import List, Protocol


class PriceProvider(Protocol):
    name: str

    async def get_current_price(self) -> float:
        ...


class HistoricalPriceProvider(Protocol):
    name: str

    async def get_daily_prices(self, days: int) -> List[float]:
        ...
