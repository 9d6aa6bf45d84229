"""
Shared fixtures and configuration for toolkit tests.
This file provides sample DexPaprika payloads and a toolkit factory whose
HTTP traffic is answered in-memory through ``httpx.MockTransport``.
"""
import copy
from typing import Any, Callable, Dict, List, Union
from unittest.mock import patch

import httpx
import pytest
import pytest_asyncio

from dexpaprika_plugin.config import DexPaprikaConfig
from dexpaprika_plugin.toolkits.data import DexPaprikaToolkit


# ============================================================================
# SHARED MOCKS AND PATCHES
# ============================================================================

@pytest.fixture(autouse=True)
def mock_logger():
    """Auto-use fixture to mock logger across all toolkit tests."""
    with patch('dexpaprika_plugin.toolkits.utils.http_client.logger') as mock_http_log, \
         patch('dexpaprika_plugin.toolkits.data.dexpaprika_toolkit.logger') as mock_toolkit_log:
        yield {
            'http': mock_http_log,
            'toolkit': mock_toolkit_log,
        }


# ============================================================================
# SAMPLE PAYLOADS
# ============================================================================

ETH_TOKEN = {
    "id": "eth", "name": "Ethereum", "symbol": "ETH", "chain": "ethereum",
    "decimals": 18, "added_at": "2023-01-01T00:00:00Z",
}
USDC_TOKEN = {
    "id": "usdc", "name": "USD Coin", "symbol": "USDC", "chain": "ethereum",
    "decimals": 6, "added_at": "2023-01-01T00:00:00Z",
}


def _pool(pool_id: str, volume: float, change_24h: Any = -0.02) -> Dict[str, Any]:
    pool = {
        "id": pool_id,
        "dex_id": "uniswap_v3",
        "dex_name": "Uniswap V3",
        "chain": "ethereum",
        "volume_usd": volume,
        "created_at": "2023-01-01T00:00:00Z",
        "created_at_block_number": 12345678,
        "transactions": 1000,
        "price_usd": 1800,
        "fee": 0.003,
        "tokens": [dict(ETH_TOKEN), dict(USDC_TOKEN)],
    }
    if change_24h is not None:
        pool["last_price_change_usd_24h"] = change_24h
    return pool


@pytest.fixture
def sample_networks():
    return [
        {"id": "ethereum", "display_name": "Ethereum", "native_asset_ticker": "ETH",
         "explorer": "https://etherscan.io"},
        {"id": "solana", "display_name": "Solana", "native_asset_ticker": "SOL",
         "explorer": "https://solscan.io"},
    ]


@pytest.fixture
def sample_network_dexes():
    return {
        "dexes": [
            {"dex_id": "uniswap_v3", "dex_name": "Uniswap V3", "chain": "ethereum", "protocol": "uniswapv3"},
            {"dex_id": "sushiswap", "dex_name": "SushiSwap", "chain": "ethereum", "protocol": "uniswapv2"},
        ],
        "page_info": {"limit": 10, "page": 0, "total_items": 2, "total_pages": 1},
    }


@pytest.fixture
def sample_pools():
    """Seven pools on page 3 of 3, more than the display cap."""
    return {
        "pools": [_pool(f"pool{i}", 1000000 - i) for i in range(1, 8)],
        "page_info": {"limit": 10, "page": 2, "total_items": 25, "total_pages": 3},
    }


@pytest.fixture
def sample_pool_details():
    details = _pool("pool1", 1000000)
    details.update({"total_liquidity_usd": 5000000, "tvl_usd": 5000000})
    return details


@pytest.fixture
def sample_token_details():
    return {
        **ETH_TOKEN,
        "price_usd": 1800,
        "price_change_24h": -0.02,
        "market_cap_usd": 200000000000,
        "total_supply": 120000000,
        "circulating_supply": 110000000,
        "description": "Ethereum is a decentralized platform",
        "website": "https://ethereum.org",
        "twitter": "@ethereum",
        "telegram": "@ethereum",
        "discord": "ethereum",
    }


@pytest.fixture
def sample_search_results():
    return {
        "tokens": [dict(ETH_TOKEN, price_usd=1800) for _ in range(5)],
        "pools": [_pool(f"pool{i}", 1000) for i in range(1, 5)],
        "dexes": [{"dex_id": "uniswap_v3", "dex_name": "Uniswap V3", "chain": "ethereum",
                   "protocol": "uniswapv3"}],
    }


@pytest.fixture
def sample_stats():
    return {
        "networks_count": 20,
        "dexes_count": 150,
        "pools_count": 500000,
        "tokens_count": 1000000,
        "total_volume_usd": 5000000000,
        "top_network_by_volume": "ethereum",
        "top_dex_by_volume": "uniswap_v3",
    }


@pytest.fixture
def pool_factory():
    """Build a single pool payload, optionally without its 24h change."""
    return _pool


# ============================================================================
# TOOLKIT FACTORY
# ============================================================================

Responder = Union[Any, httpx.Response, Callable[[httpx.Request], Any]]


@pytest_asyncio.fixture
async def mock_api():
    """Create toolkits served by an in-memory handler.

    ``mock_api(responder, config=None)`` returns ``(toolkit, requests)``.
    The responder is a JSON payload, an ``httpx.Response``, or a callable
    receiving the request and returning either.
    """
    toolkits: List[DexPaprikaToolkit] = []

    def factory(responder: Responder, config: DexPaprikaConfig = None):
        requests: List[httpx.Request] = []

        def handler(request: httpx.Request) -> httpx.Response:
            requests.append(request)
            if isinstance(responder, httpx.Response):
                return responder
            result = responder(request) if callable(responder) else copy.deepcopy(responder)
            if isinstance(result, httpx.Response):
                return result
            return httpx.Response(200, json=result)

        toolkit = DexPaprikaToolkit(
            config or DexPaprikaConfig(),
            http_client_kwargs={"transport": httpx.MockTransport(handler)},
        )
        toolkits.append(toolkit)
        return toolkit, requests

    yield factory

    for toolkit in toolkits:
        await toolkit.aclose()
