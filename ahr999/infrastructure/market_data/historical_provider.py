"""
Historical BTC/USD prices with synthetic fallback.

The remote series comes from CoinGecko's market chart. When it cannot be
fetched the source synthesizes a smooth oscillation around a current price
estimate, so the metrics pipeline always has a series to work with.
"""

from __future__ import annotations

import logging
import math
from enum import Enum
from typing import List, Optional

from ahr999.core.errors import ProviderError
from ahr999.domain.models import PriceSeries
from ahr999.infrastructure.market_data.json_price_provider import request_json, to_price
from ahr999.infrastructure.market_data.types import HistoricalPriceProvider, PriceProvider

logger = logging.getLogger(__name__)

SYNTHETIC_SOURCE = "synthetic"
SYNTHETIC_PERIOD_DAYS = 30
SYNTHETIC_AMPLITUDE = 0.2


class HistoricalFetchState(str, Enum):
    """Progress of one historical fetch"""
    FETCHING = "FETCHING"
    FAILED = "FAILED"
    SYNTHESIZING = "SYNTHESIZING"
    SUCCESS = "SUCCESS"


class CoinGeckoHistoricalProvider:
    """Daily prices from the CoinGecko market chart endpoint."""

    BASE_URL = "https://api.coingecko.com/api/v3"
    MARKET_CHART_URL = f"{BASE_URL}/coins/bitcoin/market_chart"

    def __init__(self, timeout: float = 10.0):
        self.name = "coingecko"
        self.timeout = timeout

    def parse(self, body) -> List[float]:
        if not isinstance(body, dict) or not isinstance(body.get("prices"), list):
            raise ProviderError(self.name, "missing field prices")

        prices: List[float] = []
        skipped = 0
        for point in body["prices"]:
            price = None
            if isinstance(point, (list, tuple)) and len(point) >= 2:
                price = to_price(point[1])
            if price is None:
                skipped += 1
                continue
            prices.append(price)

        if skipped:
            logger.warning(f"Dropped {skipped} invalid historical price points")
        if not prices:
            raise ProviderError(self.name, "no usable historical prices")
        return prices

    async def get_daily_prices(self, days: int) -> List[float]:
        params = {"vs_currency": "usd", "days": days}
        body = await request_json(self.name, self.MARKET_CHART_URL, self.timeout, params=params)
        return self.parse(body)


def synthesize_prices(days: int, average: float) -> List[float]:
    """
    Deterministic substitute series

    Formula: price[i] = avg + sin(i / 30) * avg * 0.2
    """
    return [
        average + math.sin(i / SYNTHETIC_PERIOD_DAYS) * average * SYNTHETIC_AMPLITUDE
        for i in range(days)
    ]


class HistoricalDataSource:
    """
    Trailing daily prices that never fail.

    FETCHING -> SUCCESS, or FETCHING -> FAILED -> SYNTHESIZING -> SUCCESS.
    """

    def __init__(
        self,
        provider: HistoricalPriceProvider,
        price_source: Optional[PriceProvider] = None,
        fallback_price: float = 30000.0,
    ):
        self.provider = provider
        self.price_source = price_source
        self.fallback_price = fallback_price
        self.last_state: Optional[HistoricalFetchState] = None

    def _transition(self, state: HistoricalFetchState) -> None:
        logger.debug(f"Historical fetch {self.last_state} -> {state}")
        self.last_state = state

    async def get_historical_prices(self, days: int = 365) -> PriceSeries:
        if days < 1:
            raise ValueError("days must be at least 1")

        self._transition(HistoricalFetchState.FETCHING)
        try:
            prices = await self.provider.get_daily_prices(days)
            series = PriceSeries.from_values(prices, source=self.provider.name)
        except Exception as exc:
            self._transition(HistoricalFetchState.FAILED)
            logger.warning(f"Using fallback historical data: {exc}")
            return await self._synthesize(days)

        self._transition(HistoricalFetchState.SUCCESS)
        logger.info("Loaded %d historical prices from %s", len(series), series.source)
        return series

    async def _estimate_price(self) -> float:
        if self.price_source is None:
            return self.fallback_price
        try:
            return await self.price_source.get_current_price()
        except Exception as exc:
            logger.warning(f"No price estimate available ({exc}), using {self.fallback_price:.2f}")
            return self.fallback_price

    async def _synthesize(self, days: int) -> PriceSeries:
        self._transition(HistoricalFetchState.SYNTHESIZING)
        average = await self._estimate_price()
        series = PriceSeries.from_values(
            synthesize_prices(days, average),
            source=SYNTHETIC_SOURCE,
            synthetic=True,
        )
        self._transition(HistoricalFetchState.SUCCESS)
        return series
