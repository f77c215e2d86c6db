"""
Valuation Service

• Validates the base investment before any network call
• Fetches current price + historical series concurrently
• Computes AHR999 metrics
"""

import asyncio
import logging
import math
from datetime import date
from typing import Any, Optional, Tuple

from ahr999.core.errors import InvalidInput
from ahr999.domain.models import MetricsResult
from ahr999.domain.services.metrics_engine import compute_metrics
from ahr999.infrastructure.market_data.historical_provider import HistoricalDataSource
from ahr999.infrastructure.market_data.types import PriceProvider

logger = logging.getLogger(__name__)


def validate_base_investment(value: Any) -> float:
    """
    Parse a user-supplied base investment.

    Raises:
        InvalidInput: value is not a number, not finite, or not above 0.
    """
    if value is None or isinstance(value, bool):
        raise InvalidInput("Please enter a valid number")
    try:
        amount = float(value.strip() if isinstance(value, str) else value)
    except (TypeError, ValueError):
        raise InvalidInput("Please enter a valid number") from None
    if not math.isfinite(amount):
        raise InvalidInput("Please enter a valid number")
    if amount <= 0:
        raise InvalidInput("Amount must be greater than 0")
    return amount


class ValuationService:
    def __init__(
        self,
        price_source: PriceProvider,
        historical_source: HistoricalDataSource,
        history_days: int = 365,
    ) -> None:
        self.price_source = price_source
        self.historical_source = historical_source
        self.history_days = history_days
        self.last_price_source: Optional[str] = None
        self.last_history_synthetic: Optional[bool] = None

    async def _fetch_current_price(self) -> Tuple[float, Optional[str]]:
        """Current price plus the provider that served this call."""
        source = self.price_source
        if hasattr(source, "get_current_price_with_source"):
            return await source.get_current_price_with_source()
        return await source.get_current_price(), getattr(source, "name", None)

    async def calculate(self, base_amount: Any, today: Optional[date] = None) -> MetricsResult:
        amount = validate_base_investment(base_amount)

        price_result, history = await asyncio.gather(
            self._fetch_current_price(),
            self.historical_source.get_historical_prices(self.history_days),
            return_exceptions=True,
        )
        if isinstance(history, BaseException):
            raise history
        if isinstance(price_result, BaseException):
            raise price_result

        price, self.last_price_source = price_result
        self.last_history_synthetic = history.synthetic

        result = compute_metrics(price, history.prices, amount, today=today)
        logger.info(
            f"AHR999={result.ahr999:.4f} band={result.band.value} "
            f"recommended={result.recommended_investment:.2f} "
            f"(history: {history.source}, {len(history)} points)"
        )
        return result
