"""
Shared fixtures for action registry tests.
Toolkits built by the registry are served by an in-memory router.
"""
from typing import Any, Dict, List, Optional
from unittest.mock import patch

import httpx
import pytest
import pytest_asyncio

from dexpaprika_plugin.actions import build_registry
from dexpaprika_plugin.config import DexPaprikaConfig
from dexpaprika_plugin.toolkits.data import DexPaprikaToolkit


@pytest.fixture(autouse=True)
def mock_logger():
    """Auto-use fixture to keep registry and toolkit logging quiet."""
    with patch('dexpaprika_plugin.actions.registry.logger') as mock_registry_log, \
         patch('dexpaprika_plugin.toolkits.data.dexpaprika_toolkit.logger'), \
         patch('dexpaprika_plugin.toolkits.utils.http_client.logger'):
        yield mock_registry_log


class FakeRuntime:
    """Hosting runtime exposing settings through ``get_setting``."""

    def __init__(self, settings: Optional[Dict[str, Any]] = None):
        self.settings = settings or {}

    def get_setting(self, key: str) -> Any:
        return self.settings.get(key)


class CamelCaseRuntime:
    """Hosting runtime exposing settings through ``getSetting``."""

    def __init__(self, settings: Optional[Dict[str, Any]] = None):
        self.settings = settings or {}

    def getSetting(self, key: str) -> Any:
        return self.settings.get(key)


ROUTES = {
    "/networks": [
        {"id": "ethereum", "display_name": "Ethereum", "native_asset_ticker": "ETH",
         "explorer": "https://etherscan.io"},
        {"id": "solana", "display_name": "Solana", "native_asset_ticker": "SOL",
         "explorer": "https://solscan.io"},
    ],
    "/pools": {
        "pools": [{
            "id": "pool1", "dex_id": "uniswap_v3", "dex_name": "Uniswap V3", "chain": "ethereum",
            "volume_usd": 1000000, "price_usd": 1800, "last_price_change_usd_24h": 0.05,
            "tokens": [{"id": "eth", "name": "Ethereum", "symbol": "ETH"},
                       {"id": "usdc", "name": "USD Coin", "symbol": "USDC"}],
        }],
        "page_info": {"page": 0, "limit": 10, "total_items": 1, "total_pages": 1},
    },
    "/networks/ethereum/pools/0xpool": {
        "id": "0xpool", "dex_id": "uniswap_v3", "price_usd": 1800, "fee": 0.003,
        "tokens": [{"id": "eth", "name": "Ethereum", "symbol": "ETH"},
                   {"id": "usdc", "name": "USD Coin", "symbol": "USDC"}],
    },
    "/networks/solana/tokens/sol": {"id": "sol", "name": "Solana", "symbol": "SOL", "price_usd": 150},
    "/search": {"tokens": [], "pools": [], "dexes": []},
    "/stats": {"networks_count": 20, "dexes_count": 150, "pools_count": 500000,
               "tokens_count": 1000000, "total_volume_usd": 5000000000},
}


@pytest.fixture
def runtime():
    return FakeRuntime()


@pytest.fixture
def make_runtime():
    """``make_runtime(settings, camel_case=False)`` builds a settings-bearing runtime."""
    def factory(settings: Optional[Dict[str, Any]] = None, camel_case: bool = False):
        return CamelCaseRuntime(settings) if camel_case else FakeRuntime(settings)
    return factory


@pytest_asyncio.fixture
async def routed_registry():
    """Registry whose toolkits answer from ``ROUTES`` and 404 otherwise.

    Yields ``(registry, requests, created)`` where ``created`` lists every
    toolkit the registry built.
    """
    requests: List[httpx.Request] = []
    created: List[DexPaprikaToolkit] = []

    def handler(request: httpx.Request) -> httpx.Response:
        requests.append(request)
        body = ROUTES.get(request.url.path)
        if body is None:
            return httpx.Response(404, json={"error": "not found"})
        return httpx.Response(200, json=body)

    def factory(config: DexPaprikaConfig) -> DexPaprikaToolkit:
        toolkit = DexPaprikaToolkit(
            config, http_client_kwargs={"transport": httpx.MockTransport(handler)}
        )
        created.append(toolkit)
        return toolkit

    registry = build_registry(toolkit_factory=factory)
    yield registry, requests, created
    await registry.aclose()
