from typing import Dict, List, Union

import httpx
import pytest


class FakeResponse:
    def __init__(self, status_code: int = 200, payload=None, text: str = ""):
        self.status_code = status_code
        self._payload = payload
        self.text = text

    def json(self):
        if self._payload is None:
            raise ValueError("No JSON object could be decoded")
        return self._payload


Route = Union[FakeResponse, Exception]


class FakeHttp:
    """Stands in for httpx.AsyncClient, answering by URL."""

    def __init__(self):
        self.routes: Dict[str, Route] = {}
        self.calls: List[str] = []

    def add(self, url: str, route: Route) -> None:
        self.routes[url] = route

    def client(self, *args, **kwargs):
        fake = self

        class FakeClient:
            async def __aenter__(self):
                return self

            async def __aexit__(self, exc_type, exc, tb):
                return False

            async def get(self, url, headers=None, params=None):
                fake.calls.append(url)
                route = fake.routes.get(url)
                if route is None:
                    raise httpx.ConnectError(f"no route for {url}")
                if isinstance(route, Exception):
                    raise route
                return route

        return FakeClient()


@pytest.fixture()
def fake_http(monkeypatch) -> FakeHttp:
    fake = FakeHttp()
    import ahr999.infrastructure.market_data.json_price_provider as provider_module
    monkeypatch.setattr(provider_module.httpx, "AsyncClient", fake.client)
    return fake
