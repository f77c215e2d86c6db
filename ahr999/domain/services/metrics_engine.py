"""
METRICS ENGINE
Derive AHR999 valuation metrics from price inputs

RESPONSIBILITIES:
- DCA cost (mean of the trailing window)
- Coin age and power-law growth estimate
- AHR999 index and valuation band
- Recommended DCA amount

RULES:
❌ No I/O
❌ No shared state
✅ Pure calculation
✅ Deterministic output (coin age takes an explicit date when needed)
"""

import math
from datetime import date, datetime, timezone
from typing import Optional, Sequence

from ahr999.core.errors import ComputationError, EmptySeries
from ahr999.domain.models import MetricsResult, PriceSeries, ValuationBand

GENESIS_DATE = date(2009, 1, 3)

GROWTH_SLOPE = 5.84
GROWTH_INTERCEPT = 17.01

# Floor applied to the index before dividing the base amount (max 10x)
MIN_INDEX_FOR_SIZING = 0.1

SEVERELY_UNDERVALUED_BELOW = 0.45
UNDERVALUED_BELOW = 1.2
FAIR_VALUE_BELOW = 5.0


def average_price(prices: Sequence[float]) -> float:
    """Arithmetic mean of the series (the DCA cost)."""
    if isinstance(prices, PriceSeries):
        prices = prices.prices
    if not prices:
        raise EmptySeries()
    return sum(prices) / len(prices)


def coin_age(today: Optional[date] = None) -> int:
    """Whole days elapsed since the genesis block date."""
    if today is None:
        today = datetime.now(timezone.utc).date()
    return (today - GENESIS_DATE).days


def growth_estimate(coin_age_days: int) -> float:
    """
    Power-law fair value for a given coin age

    Formula: 10 ^ (5.84 * log10(age) - 17.01)
    """
    if coin_age_days <= 0:
        raise ComputationError(f"Coin age must be positive, got {coin_age_days}")
    return 10 ** (GROWTH_SLOPE * math.log10(coin_age_days) - GROWTH_INTERCEPT)


def ahr999_index(current_price: float, dca_cost: float, growth: float) -> float:
    """
    AHR999 index

    Formula: (price / dca_cost) * (price / growth_estimate)
    """
    if dca_cost <= 0:
        raise ComputationError(f"DCA cost must be positive, got {dca_cost}")
    if growth <= 0:
        raise ComputationError(f"Growth estimate must be positive, got {growth}")
    return (current_price / dca_cost) * (current_price / growth)


def recommended_investment(ahr999: float, base_amount: float) -> float:
    """Scale the base amount inversely to the index, capped at 10x."""
    amount = base_amount / max(ahr999, MIN_INDEX_FOR_SIZING)
    if not math.isfinite(amount):
        raise ComputationError(f"Recommended investment overflows for base amount {base_amount}")
    return amount


def classify(ahr999: float) -> ValuationBand:
    """
    Map the index to a display band

    Logic:
    - SEVERELY_UNDERVALUED: < 0.45
    - UNDERVALUED: [0.45, 1.2)
    - FAIR_VALUE: [1.2, 5)
    - OVERVALUED: >= 5
    """
    if ahr999 < SEVERELY_UNDERVALUED_BELOW:
        return ValuationBand.SEVERELY_UNDERVALUED
    if ahr999 < UNDERVALUED_BELOW:
        return ValuationBand.UNDERVALUED
    if ahr999 < FAIR_VALUE_BELOW:
        return ValuationBand.FAIR_VALUE
    return ValuationBand.OVERVALUED


def compute_metrics(
    current_price: float,
    historical_prices: Sequence[float],
    base_amount: float,
    today: Optional[date] = None,
) -> MetricsResult:
    """
    Run the full metrics chain for one valuation request

    Args:
        current_price: Latest BTC/USD spot price
        historical_prices: Trailing daily prices (oldest first)
        base_amount: Validated base DCA amount
        today: Date used for coin age (defaults to current UTC date)

    Returns:
        MetricsResult object
    """
    dca_cost = average_price(historical_prices)
    age = coin_age(today)
    growth = growth_estimate(age)
    index = ahr999_index(current_price, dca_cost, growth)
    amount = recommended_investment(index, base_amount)

    return MetricsResult(
        current_price=current_price,
        dca_cost=dca_cost,
        growth_estimate=growth,
        ahr999=index,
        recommended_investment=amount,
        band=classify(index),
        coin_age_days=age,
        base_investment=base_amount,
    )
