"""
Provider chain - try primary, then fallbacks.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import List, Optional, Tuple

from ahr999.core.errors import DataUnavailable
from ahr999.infrastructure.market_data.types import PriceProvider

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class NamedProvider:
    name: str
    provider: PriceProvider


class ChainedPriceProvider:
    """
    Current price from the first provider that answers.

    Provider failures are logged and skipped; only exhausting the whole
    chain raises DataUnavailable.
    """

    def __init__(self, providers: List[NamedProvider]):
        if not providers:
            raise ValueError("At least one price provider is required")
        self.providers = providers
        self.last_source: Optional[str] = None

    @property
    def names(self) -> List[str]:
        return [named.name for named in self.providers]

    async def get_current_price(self) -> float:
        price, _ = await self.get_current_price_with_source()
        return price

    async def get_current_price_with_source(self) -> Tuple[float, str]:
        for named in self.providers:
            try:
                price = await named.provider.get_current_price()
            except Exception as exc:
                logger.warning(f"Price provider {named.name} failed: {exc}")
                continue
            self.last_source = named.name
            logger.info("Current BTC price %.2f from %s", price, named.name)
            return price, named.name

        logger.error("All price providers unavailable: %s", ", ".join(self.names))
        raise DataUnavailable()
