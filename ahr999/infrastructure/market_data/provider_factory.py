"""
Market data provider factory.
"""

from __future__ import annotations

from typing import Dict, List, Optional, Tuple

from ahr999.config import settings
from ahr999.infrastructure.market_data.historical_provider import (
    CoinGeckoHistoricalProvider,
    HistoricalDataSource,
)
from ahr999.infrastructure.market_data.json_price_provider import JsonPriceProvider
from ahr999.infrastructure.market_data.provider_chain import ChainedPriceProvider, NamedProvider

# name -> (url, path to the USD price), tried in this order
PRICE_PROVIDERS: Dict[str, Tuple[str, Tuple[str, ...]]] = {
    "coingecko": (
        "https://api.coingecko.com/api/v3/simple/price?ids=bitcoin&vs_currencies=usd",
        ("bitcoin", "usd"),
    ),
    "coincap": (
        "https://api.coincap.io/v2/assets/bitcoin",
        ("data", "priceUsd"),
    ),
    "blockchain": (
        "https://blockchain.info/ticker",
        ("USD", "last"),
    ),
}


def get_price_provider(timeout: Optional[float] = None) -> ChainedPriceProvider:
    timeout = settings.HTTP_TIMEOUT_SECONDS if timeout is None else timeout
    providers: List[NamedProvider] = [
        NamedProvider(name, JsonPriceProvider(name, url, path, timeout=timeout))
        for name, (url, path) in PRICE_PROVIDERS.items()
    ]
    return ChainedPriceProvider(providers)


def get_historical_source(
    price_source: ChainedPriceProvider,
    timeout: Optional[float] = None,
) -> HistoricalDataSource:
    timeout = settings.HTTP_TIMEOUT_SECONDS if timeout is None else timeout
    return HistoricalDataSource(
        provider=CoinGeckoHistoricalProvider(timeout=timeout),
        price_source=price_source,
        fallback_price=settings.FALLBACK_BTC_PRICE,
    )
