import pytest

from ahr999.core.errors import DataUnavailable, ProviderError
from ahr999.infrastructure.market_data.historical_provider import (
    CoinGeckoHistoricalProvider,
    HistoricalDataSource,
    HistoricalFetchState,
    synthesize_prices,
)
from ahr999.infrastructure.market_data.json_price_provider import JsonPriceProvider
from tests.conftest import FakeResponse


class DummyHistorical:
    name = "dummy"

    def __init__(self, prices=None, error=None):
        self.prices = prices
        self.error = error

    async def get_daily_prices(self, days):
        if self.error is not None:
            raise self.error
        return self.prices


class DummyPrice:
    def __init__(self, price=None):
        self.price = price
        self.calls = 0

    async def get_current_price(self):
        self.calls += 1
        if self.price is None:
            raise DataUnavailable()
        return self.price


@pytest.mark.asyncio
async def test_remote_series_returned_as_is():
    source = HistoricalDataSource(DummyHistorical(prices=[1.0, 2.0, 3.0]), DummyPrice(50000.0))

    series = await source.get_historical_prices(3)

    assert series.prices == (1.0, 2.0, 3.0)
    assert series.source == "dummy"
    assert series.synthetic is False
    assert source.last_state == HistoricalFetchState.SUCCESS


@pytest.mark.asyncio
async def test_failure_synthesizes_days_points_within_band():
    price = DummyPrice(50000.0)
    source = HistoricalDataSource(DummyHistorical(error=ProviderError("dummy", "HTTP 500")), price)

    series = await source.get_historical_prices(365)

    assert len(series) == 365
    assert series.synthetic is True
    assert series.source == "synthetic"
    assert all(40000.0 <= p <= 60000.0 for p in series.prices)
    assert series.prices[0] == 50000.0
    assert price.calls == 1
    assert source.last_state == HistoricalFetchState.SUCCESS


@pytest.mark.asyncio
async def test_failure_without_price_estimate_uses_fixed_default():
    source = HistoricalDataSource(
        DummyHistorical(error=ProviderError("dummy", "HTTP 500")),
        DummyPrice(None),
        fallback_price=30000.0,
    )

    series = await source.get_historical_prices(90)

    assert len(series) == 90
    assert all(24000.0 <= p <= 36000.0 for p in series.prices)


@pytest.mark.asyncio
async def test_empty_remote_series_falls_back():
    source = HistoricalDataSource(DummyHistorical(prices=[]), price_source=None, fallback_price=30000.0)

    series = await source.get_historical_prices(10)

    assert series.synthetic is True
    assert len(series) == 10


@pytest.mark.asyncio
async def test_days_must_be_positive():
    source = HistoricalDataSource(DummyHistorical(prices=[1.0]))
    with pytest.raises(ValueError):
        await source.get_historical_prices(0)


def test_synthesize_prices_is_deterministic():
    assert synthesize_prices(5, 100.0) == synthesize_prices(5, 100.0)
    assert synthesize_prices(1, 100.0) == [100.0]


def test_coingecko_parse_takes_second_column_and_drops_invalid_points():
    provider = CoinGeckoHistoricalProvider()
    body = {"prices": [[1700000000000, 35000.0], [1700086400000, 0], [1700172800000, None], [1], [1700259200000, "36000"]]}

    assert provider.parse(body) == [35000.0, 36000.0]


@pytest.mark.parametrize("body", [{}, {"prices": None}, {"prices": []}, {"prices": [[1, -1]]}, []])
def test_coingecko_parse_rejects_unusable_bodies(body):
    with pytest.raises(ProviderError):
        CoinGeckoHistoricalProvider().parse(body)


@pytest.mark.asyncio
async def test_coingecko_http_failure_degrades_to_synthetic(fake_http):
    fake_http.add(CoinGeckoHistoricalProvider.MARKET_CHART_URL, FakeResponse(500, text="error"))
    source = HistoricalDataSource(CoinGeckoHistoricalProvider(timeout=1.0), DummyPrice(40000.0))

    series = await source.get_historical_prices(30)

    assert series.synthetic is True
    assert len(series) == 30
    assert all(32000.0 <= p <= 48000.0 for p in series.prices)


@pytest.mark.asyncio
async def test_coingecko_success(fake_http):
    fake_http.add(
        CoinGeckoHistoricalProvider.MARKET_CHART_URL,
        FakeResponse(200, {"prices": [[1, 30000.0], [2, 31000.0]]}),
    )

    prices = await CoinGeckoHistoricalProvider().get_daily_prices(2)

    assert prices == [30000.0, 31000.0]


class BrokenPrice:
    async def get_current_price(self):
        raise RuntimeError("unexpected payload")


@pytest.mark.asyncio
async def test_failing_estimate_of_any_kind_uses_fixed_default():
    source = HistoricalDataSource(
        DummyHistorical(error=ProviderError("dummy", "HTTP 500")),
        BrokenPrice(),
        fallback_price=30000.0,
    )

    series = await source.get_historical_prices(10)

    assert series.synthetic is True
    assert series.prices[0] == 30000.0
    assert source.last_state == HistoricalFetchState.SUCCESS


@pytest.mark.asyncio
async def test_single_json_provider_as_estimate_source_never_raises(fake_http):
    estimate = JsonPriceProvider("one", "https://prices.test/btc", ("bitcoin", "usd"), timeout=1.0)
    source = HistoricalDataSource(
        DummyHistorical(error=ProviderError("dummy", "HTTP 500")),
        estimate,
        fallback_price=30000.0,
    )

    series = await source.get_historical_prices(10)

    assert len(series) == 10
    assert all(24000.0 <= p <= 36000.0 for p in series.prices)
    assert fake_http.calls == ["https://prices.test/btc"]
