"""
Domain Models - Entities
Pure domain objects with no infrastructure dependencies
"""

import math
from dataclasses import dataclass
from enum import Enum
from typing import Iterable, Tuple


class ValuationBand(str, Enum):
    """Qualitative valuation derived from the AHR999 index"""
    SEVERELY_UNDERVALUED = "SeverelyUndervalued"
    UNDERVALUED = "Undervalued"
    FAIR_VALUE = "FairValue"
    OVERVALUED = "Overvalued"


@dataclass(frozen=True)
class PriceSeries:
    """
    Daily BTC/USD prices, oldest first - Immutable

    Synthetic series are flagged so they are never mistaken for
    provider data downstream.
    """
    prices: Tuple[float, ...]
    source: str
    synthetic: bool = False

    def __post_init__(self):
        if not self.prices:
            raise ValueError("Price series cannot be empty")
        for price in self.prices:
            if not math.isfinite(price) or price <= 0:
                raise ValueError(f"Price series contains invalid price: {price!r}")

    @classmethod
    def from_values(cls, values: Iterable[float], source: str, synthetic: bool = False) -> "PriceSeries":
        return cls(prices=tuple(float(v) for v in values), source=source, synthetic=synthetic)

    def __len__(self) -> int:
        return len(self.prices)


@dataclass(frozen=True)
class MetricsResult:
    """
    Output of one valuation run, handed to the presenter.
    """
    current_price: float
    dca_cost: float
    growth_estimate: float
    ahr999: float
    recommended_investment: float
    band: ValuationBand
    coin_age_days: int
    base_investment: float

    def to_dict(self) -> dict:
        return {
            "current_price": self.current_price,
            "dca_cost": self.dca_cost,
            "growth_estimate": self.growth_estimate,
            "ahr999": self.ahr999,
            "recommended_investment": self.recommended_investment,
            "band": self.band.value,
            "coin_age_days": self.coin_age_days,
            "base_investment": self.base_investment,
        }
