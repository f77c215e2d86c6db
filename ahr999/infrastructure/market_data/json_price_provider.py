"""
JSON spot price provider
One HTTP endpoint plus the path to the BTC/USD price in its body.
"""

from __future__ import annotations

import logging
import math
from typing import Any, Optional, Tuple

import httpx

from ahr999.core.errors import ProviderError

logger = logging.getLogger(__name__)


def to_price(value: Any) -> Optional[float]:
    """
    Normalise a provider value (number or numeric string) to a positive float.
    """
    if value is None or isinstance(value, bool):
        return None
    try:
        price = float(value)
    except (TypeError, ValueError):
        return None
    if not math.isfinite(price) or price <= 0:
        return None
    return price


async def request_json(provider: str, url: str, timeout: float, params: Optional[dict] = None) -> Any:
    """
    GET a JSON document, raising ProviderError on any failure.
    """
    headers = {"Accept": "application/json"}
    try:
        async with httpx.AsyncClient(timeout=timeout) as client:
            response = await client.get(url, headers=headers, params=params)
    except httpx.HTTPError as exc:
        raise ProviderError(provider, f"request failed: {exc!r}") from exc

    if response.status_code != 200:
        raise ProviderError(provider, f"HTTP {response.status_code}")

    try:
        return response.json()
    except ValueError as exc:
        raise ProviderError(provider, "response is not valid JSON") from exc


class JsonPriceProvider:
    """
    Spot price from a JSON API

    price_path lists the keys to follow from the top-level object,
    e.g. ("bitcoin", "usd") for {"bitcoin": {"usd": 64000.0}}.
    """

    def __init__(self, name: str, url: str, price_path: Tuple[str, ...], timeout: float = 10.0):
        if not price_path:
            raise ValueError("price_path must name at least one key")
        self.name = name
        self.url = url
        self.price_path = tuple(price_path)
        self.timeout = timeout

    def __repr__(self) -> str:
        return f"JsonPriceProvider(name={self.name!r}, path={'.'.join(self.price_path)!r})"

    def parse(self, body: Any) -> float:
        node = body
        for key in self.price_path:
            if not isinstance(node, dict) or key not in node:
                raise ProviderError(self.name, f"missing field {'.'.join(self.price_path)}")
            node = node[key]

        price = to_price(node)
        if price is None:
            raise ProviderError(self.name, f"invalid price value {node!r}")
        return price

    async def fetch(self) -> Any:
        return await request_json(self.name, self.url, self.timeout)

    async def get_current_price(self) -> float:
        body = await self.fetch()
        price = self.parse(body)
        logger.debug(f"{self.name} price: {price}")
        return price
