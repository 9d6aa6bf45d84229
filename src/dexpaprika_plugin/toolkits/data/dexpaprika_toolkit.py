"""DexPaprika DEX Market Data Toolkit
===================================

An Agno-compatible toolkit exposing DexPaprika's decentralized-exchange
market data API: blockchain networks, DEXes, liquidity pools, tokens,
cross-entity search and platform statistics.

## Supported Data Types

**Networks & DEXes**
- Supported blockchain networks with native asset and explorer
- DEXes operating on a network, paginated

**Liquidity Pools**
- Top pools across all networks, on one network, or on one DEX
- Pool details including price, volume, TVL, fee and token pair

**Tokens & Search**
- Token details including price, market cap, supply and links
- Search across tokens, pools and DEXes

**Platform Statistics**
- Network, DEX, pool and token counts with total 24h volume

## Configuration Examples

```yaml
toolkits:
  - name: "DexPaprikaToolkit"
    params:
      config:
        api_url: "https://api.dexpaprika.com"
        timeout: 30
    available_tools:
      - "get_top_pools"
      - "get_pool_details"
      - "search"
```

## Environment Variables

- `DEXPAPRIKA_API_URL`: API base URL (default: https://api.dexpaprika.com)
- `DEXPAPRIKA_API_KEY`: Bearer token (optional, unauthenticated when unset)
- `DEXPAPRIKA_TIMEOUT`: Request timeout in seconds (default: 30)
- `DEXPAPRIKA_MAX_RETRIES`: Transport-failure retries, 0 or 1 (default: 0)

## Response Format Standards

Every tool returns the same envelope:

```json
{
  "formatted_response": {
    "title": "Top 5 Pools on Ethereum",
    "timestamp": "2024-01-01 at 12:00:00",
    ...
  },
  "raw_data": {...}       // upstream JSON, untouched
}
```

Failures raise ``DexPaprikaError`` subclasses with display-ready messages.
"""

import json
from enum import Enum
from typing import Any, Dict, List, Optional, Tuple
from urllib.parse import quote

from agno.tools import Toolkit
from loguru import logger

from dexpaprika_plugin.config import DexPaprikaConfig
from dexpaprika_plugin.exceptions import (
    APIError,
    DexPaprikaError,
    EmptyResponseError,
    NotFoundError,
    RateLimitError,
    SearchAPIError,
    SearchQueryError,
    TransportError,
)
from dexpaprika_plugin.toolkits.base import BaseAPIToolkit
from dexpaprika_plugin.toolkits.utils import HTTPClientError, ResponseBuilder
from dexpaprika_plugin.toolkits.utils.formatting import (
    MAX_DEXES_DISPLAY,
    MAX_POOLS_DISPLAY,
    MAX_SEARCH_RESULTS_DISPLAY,
    NOT_AVAILABLE,
    POOL_PRICE_DIGITS,
    TOKEN_PRICE_DIGITS,
    VOLUME_DIGITS,
    format_currency,
    format_fee,
    format_number,
    format_percentage_change,
    pagination_summary,
    title_case_identifier,
    token_list_display,
    token_pair_name,
)

__all__ = ["DexPaprikaToolkit", "OrderBy", "SortOrder"]


class OrderBy(str, Enum):
    """Pool listing sort fields accepted by the DexPaprika API."""
    VOLUME_USD = "volume_usd"
    PRICE_USD = "price_usd"
    TRANSACTIONS = "transactions"
    LAST_PRICE_CHANGE_USD_24H = "last_price_change_usd_24h"
    CREATED_AT = "created_at"


class SortOrder(str, Enum):
    """Sort direction for pool listings."""
    ASC = "asc"
    DESC = "desc"


DEFAULT_PAGE = 0
DEFAULT_LIMIT = 10
MIN_SEARCH_QUERY_LENGTH = 3

ENDPOINT_NAME = "dexpaprika"

_API_ENDPOINTS = {
    "networks": "/networks",
    "network_dexes": "/networks/{network}/dexes",
    "top_pools": "/pools",
    "network_pools": "/networks/{network}/pools",
    "dex_pools": "/networks/{network}/dexes/{dex}/pools",
    "pool_details": "/networks/{network}/pools/{pool_address}",
    "token_details": "/networks/{network}/tokens/{token_address}",
    "search": "/search",
    "stats": "/stats",
}

# (resource kind, what the caller should double-check) per 404
_NOT_FOUND_HINTS = {
    "network": ("Network", "network name"),
    "dex": ("DEX", "network and DEX identifier"),
    "pool": ("Pool", "network and pool address"),
    "token": ("Token", "network and token address"),
}


def _path_segment(value: str) -> str:
    return quote(value, safe="")


def _extract_api_message(response_text: Optional[str]) -> Optional[str]:
    """Pull the upstream ``error``/``message`` field out of a JSON error body."""
    if not response_text:
        return None
    try:
        body = json.loads(response_text)
    except ValueError:
        return None
    if isinstance(body, dict):
        message = body.get("error") or body.get("message")
        if isinstance(message, str) and message:
            return message
    return None


def _as_list(value: Any) -> List[Any]:
    return value if isinstance(value, list) else []


def _as_dict(value: Any) -> Dict[str, Any]:
    return value if isinstance(value, dict) else {}


class DexPaprikaToolkit(Toolkit, BaseAPIToolkit):
    """DexPaprika DEX Market Data Toolkit

    Provides read-only access to DexPaprika's on-chain DEX analytics. Each
    tool issues exactly one GET request and returns a display projection of
    the response next to the verbatim upstream payload.

    **Key Capabilities:**
    - Network and DEX discovery with pagination
    - Pool rankings by volume, price, transactions, 24h change or age
    - Pool and token detail lookups by on-chain address
    - Cross-entity search with top results per category
    - Ecosystem-wide statistics

    One HTTP client is created per toolkit and reused by every tool until
    ``aclose()``.
    """

    _toolkit_category = "defi"
    _toolkit_type = "market_data"

    def __init__(
        self,
        config: Optional[DexPaprikaConfig] = None,
        name: str = "dexpaprika_toolkit",
        http_client_kwargs: Optional[Dict[str, Any]] = None,
        **kwargs: Any,
    ):
        """Initialize the DexPaprika toolkit.

        Args:
            config: Resolved plugin configuration. If None, read from the
                    DEXPAPRIKA_* environment variables.
            name: Name identifier for this toolkit instance
            http_client_kwargs: Extra arguments for the underlying
                    ``httpx.AsyncClient`` (e.g. a custom transport)
            **kwargs: Additional arguments passed to Toolkit

        Example:
            ```python
            toolkit = DexPaprikaToolkit(DexPaprikaConfig(api_key="your_key"))
            pools = await toolkit.get_network_pools("ethereum", limit=5)
            print(pools["formatted_response"]["title"])
            await toolkit.aclose()
            ```
        """
        self.config = config or DexPaprikaConfig.from_env()
        self._http_client_kwargs = http_client_kwargs or {}

        self._init_standard_configuration(
            http_timeout=self.config.timeout,
            max_retries=self.config.max_retries,
        )
        self.response_builder = ResponseBuilder(self._get_toolkit_info())

        available_tools = [
            self.get_networks,
            self.get_network_dexes,
            self.get_top_pools,
            self.get_network_pools,
            self.get_dex_pools,
            self.get_pool_details,
            self.get_token_details,
            self.search,
            self.get_stats,
        ]

        super().__init__(name=name, tools=available_tools, **kwargs)

        logger.info(
            f"Initialized DexPaprikaToolkit for {self.config.api_url} "
            f"(authenticated: {bool(self.config.api_key)})"
        )

    async def _setup_endpoints(self):
        """Setup HTTP endpoint for the DexPaprika API."""
        await self._http_client.add_endpoint(
            name=ENDPOINT_NAME,
            base_url=self.config.api_url,
            headers=self.config.auth_headers(),
            timeout=self.config.timeout,
            **self._http_client_kwargs,
        )

        logger.debug("Setup HTTP endpoint for DexPaprika API")

    async def _make_api_request(
        self,
        path: str,
        params: Optional[Dict[str, Any]] = None,
        not_found: Optional[str] = None,
        search_query: Optional[str] = None,
    ) -> Any:
        """Issue one GET request and classify any failure.

        Args:
            path: API endpoint path
            params: Query parameters
            not_found: Key into the 404 hints naming the looked-up resource
            search_query: Set for the search endpoint so 400s get search advice

        Returns:
            Parsed JSON body

        Raises:
            DexPaprikaError: Classified upstream, transport or empty-body failure
        """
        if ENDPOINT_NAME not in self._http_client.get_endpoints():
            await self._setup_endpoints()

        try:
            data = await self._http_client.get(ENDPOINT_NAME, path, params=params)
        except HTTPClientError as e:
            error = self._classify_error(e, path, not_found, search_query)
            if isinstance(error, APIError) and error.status_code and error.status_code < 500:
                logger.warning(f"DexPaprika request {path} rejected: {error.message}")
            else:
                logger.error(f"DexPaprika request {path} failed: {error.message}")
            raise error from e

        if data is None:
            logger.error(f"DexPaprika request {path} returned an empty body")
            raise EmptyResponseError(path)

        return data

    def _classify_error(
        self,
        error: HTTPClientError,
        path: str,
        not_found: Optional[str] = None,
        search_query: Optional[str] = None,
    ) -> DexPaprikaError:
        """Map a transport-level failure onto the plugin's error hierarchy."""
        status = error.status_code
        if status is None:
            return TransportError(str(error), cause=error)

        api_message = _extract_api_message(error.response_text)

        if status == 404 and not_found in _NOT_FOUND_HINTS:
            resource, hint = _NOT_FOUND_HINTS[not_found]
            return NotFoundError(resource, hint, api_message=api_message)
        if status == 429:
            return RateLimitError(api_message=api_message)
        if status == 400 and search_query is not None:
            return SearchAPIError(search_query, api_message=api_message)
        if status < 400:
            return APIError(
                f"Invalid response from DexPaprika API: {error}",
                status_code=status,
                context={"endpoint": path},
                cause=error,
            )

        return APIError(
            f"DexPaprika API error: {status} - {api_message or error}",
            status_code=status,
            context={"endpoint": path, "api_message": api_message},
            cause=error,
        )

    # =========================================================================
    # Formatting helpers
    # =========================================================================

    @staticmethod
    def _format_pool(pool: Any, position: int) -> Dict[str, Any]:
        pool = _as_dict(pool)
        tokens = pool.get("tokens")
        return {
            "position": position,
            "id": pool.get("id"),
            "name": token_pair_name(tokens),
            "dex": pool.get("dex_name") or title_case_identifier(pool.get("dex_id")),
            "network": title_case_identifier(pool.get("chain")),
            "tokens": token_list_display(tokens),
            "volume": format_currency(pool.get("volume_usd"), VOLUME_DIGITS),
            "price": format_currency(pool.get("price_usd"), POOL_PRICE_DIGITS),
            "price_change_24h": format_percentage_change(pool.get("last_price_change_usd_24h")),
        }

    @staticmethod
    def _token_slots(tokens: Any) -> List[Dict[str, Any]]:
        """Both pair slots of a pool, falling back to Token1/Token2 when absent."""
        tokens = _as_list(tokens)
        slots = []
        for index in range(2):
            token = _as_dict(tokens[index]) if index < len(tokens) else {}
            fallback = f"Token{index + 1}"
            decimals = token.get("decimals")
            slots.append({
                "name": token.get("name") or fallback,
                "symbol": token.get("symbol") or fallback,
                "address": token.get("id") or NOT_AVAILABLE,
                "decimals": decimals if decimals is not None else NOT_AVAILABLE,
            })
        return slots

    async def _list_pools(
        self,
        path: str,
        title_scope: str,
        page: int,
        limit: int,
        order_by: str,
        sort: str,
        not_found: Optional[str] = None,
        **scope_fields: Any,
    ) -> Dict[str, Any]:
        """Shared implementation of the three pool listing tools."""
        params = {
            "page": page,
            "limit": limit,
            "order_by": order_by.value if isinstance(order_by, Enum) else order_by,
            "sort": sort.value if isinstance(sort, Enum) else sort,
        }
        data = await self._make_api_request(path, params=params, not_found=not_found)

        body = _as_dict(data)
        pools = _as_list(body.get("pools"))
        page_info = body.get("page_info")
        shown = [
            self._format_pool(pool, position)
            for position, pool in enumerate(pools[:MAX_POOLS_DISPLAY], start=1)
        ]

        top_pool_summary = None
        if shown:
            top = shown[0]
            top_pool_summary = {key: top[key] for key in ("id", "name", "dex", "tokens", "volume", "price")}

        logger.info(f"Retrieved {len(pools)} pools for {title_scope}")

        return self.response_builder.envelope(
            title=f"Top {len(shown)} Pools on {title_scope}",
            raw_data=data,
            **scope_fields,
            pagination=pagination_summary(page_info),
            total_items=_as_dict(page_info).get("total_items", len(pools)),
            total_pools=len(pools),
            order_by=params["order_by"],
            sort=params["sort"],
            pools=shown,
            top_pool_summary=top_pool_summary,
        )

    # =========================================================================
    # Network & DEX Tools
    # =========================================================================

    async def get_networks(self) -> Dict[str, Any]:
        """Get all blockchain networks supported by DexPaprika.

        Use this to find the network IDs required by the other tools.

        Returns:
            dict: Envelope with ``total_networks`` and ``networks``
                  (id, name, native_token, explorer)
        """
        logger.info("Fetching supported networks")
        data = await self._make_api_request(_API_ENDPOINTS["networks"])

        networks = data if isinstance(data, list) else _as_list(_as_dict(data).get("networks"))
        formatted = []
        for network in networks:
            network = _as_dict(network)
            formatted.append({
                "id": network.get("id"),
                "name": network.get("display_name") or title_case_identifier(network.get("id")),
                "native_token": network.get("native_asset_ticker") or NOT_AVAILABLE,
                "explorer": network.get("explorer") or NOT_AVAILABLE,
            })

        logger.info(f"Retrieved {len(formatted)} networks")

        return self.response_builder.envelope(
            title="Supported Blockchain Networks",
            raw_data=data,
            total_networks=len(formatted),
            networks=formatted,
        )

    async def get_network_dexes(
        self,
        network: str,
        page: int = DEFAULT_PAGE,
        limit: int = DEFAULT_LIMIT,
    ) -> Dict[str, Any]:
        """Get decentralized exchanges available on a specific network.

        Args:
            network: Network ID (e.g., "ethereum", "solana")
            page: 0-indexed page number
            limit: Number of items per page

        Returns:
            dict: Envelope with ``pagination``, ``total_items`` (across all
                  pages), ``total_dexes`` (this page) and up to 10 ``dexes``

        Raises:
            NotFoundError: If the network does not exist
        """
        network = self._resolve_identifier(network, "network")
        logger.info(f"Fetching DEXes on {network}")

        path = _API_ENDPOINTS["network_dexes"].format(network=_path_segment(network))
        data = await self._make_api_request(
            path, params={"page": page, "limit": limit}, not_found="network"
        )

        body = _as_dict(data)
        dexes = _as_list(body.get("dexes"))
        page_info = body.get("page_info")
        formatted = []
        for position, dex in enumerate(dexes[:MAX_DEXES_DISPLAY], start=1):
            dex = _as_dict(dex)
            dex_id = dex.get("dex_id") or dex.get("id")
            formatted.append({
                "position": position,
                "id": dex_id,
                "name": dex.get("dex_name") or title_case_identifier(dex_id),
                "protocol": dex.get("protocol") or NOT_AVAILABLE,
            })

        network_name = title_case_identifier(network)
        logger.info(f"Retrieved {len(dexes)} DEXes on {network}")

        return self.response_builder.envelope(
            title=f"DEXes on {network_name}",
            raw_data=data,
            network=network_name,
            pagination=pagination_summary(page_info),
            total_items=_as_dict(page_info).get("total_items", len(dexes)),
            total_dexes=len(dexes),
            dexes=formatted,
        )

    # =========================================================================
    # Pool Tools
    # =========================================================================

    async def get_top_pools(
        self,
        page: int = DEFAULT_PAGE,
        limit: int = DEFAULT_LIMIT,
        order_by: str = OrderBy.VOLUME_USD.value,
        sort: str = SortOrder.DESC.value,
    ) -> Dict[str, Any]:
        """Get top liquidity pools across all networks.

        Args:
            page: 0-indexed page number
            limit: Number of items per page
            order_by: One of volume_usd, price_usd, transactions,
                      last_price_change_usd_24h, created_at
            sort: "asc" or "desc"

        Returns:
            dict: Envelope with ``pagination``, ``total_pools``, the top 5
                  ``pools`` and ``top_pool_summary``
        """
        logger.info(f"Fetching top pools ordered by {order_by} {sort}")
        return await self._list_pools(
            _API_ENDPOINTS["top_pools"],
            "All Networks",
            page, limit, order_by, sort,
        )

    async def get_network_pools(
        self,
        network: str,
        page: int = DEFAULT_PAGE,
        limit: int = DEFAULT_LIMIT,
        order_by: str = OrderBy.VOLUME_USD.value,
        sort: str = SortOrder.DESC.value,
    ) -> Dict[str, Any]:
        """Get top liquidity pools on a specific network.

        Args:
            network: Network ID (e.g., "ethereum", "solana")
            page: 0-indexed page number
            limit: Number of items per page
            order_by: Field to order by
            sort: "asc" or "desc"

        Returns:
            dict: Envelope with ``network``, ``pagination`` and the top 5 ``pools``

        Raises:
            NotFoundError: If the network does not exist
        """
        network = self._resolve_identifier(network, "network")
        logger.info(f"Fetching pools on {network} ordered by {order_by} {sort}")

        network_name = title_case_identifier(network)
        return await self._list_pools(
            _API_ENDPOINTS["network_pools"].format(network=_path_segment(network)),
            network_name,
            page, limit, order_by, sort,
            not_found="network",
            network=network_name,
        )

    async def get_dex_pools(
        self,
        network: str,
        dex: str,
        page: int = DEFAULT_PAGE,
        limit: int = DEFAULT_LIMIT,
        order_by: str = OrderBy.VOLUME_USD.value,
        sort: str = SortOrder.DESC.value,
    ) -> Dict[str, Any]:
        """Get top liquidity pools on a specific DEX within a network.

        Args:
            network: Network ID (e.g., "ethereum")
            dex: DEX identifier (e.g., "uniswap_v3")
            page: 0-indexed page number
            limit: Number of items per page
            order_by: Field to order by
            sort: "asc" or "desc"

        Returns:
            dict: Envelope with ``network``, ``dex``, ``pagination`` and the top 5 ``pools``

        Raises:
            NotFoundError: If the network or DEX does not exist
        """
        network = self._resolve_identifier(network, "network")
        dex = self._resolve_identifier(dex, "dex")
        logger.info(f"Fetching pools on {dex} ({network}) ordered by {order_by} {sort}")

        network_name = title_case_identifier(network)
        dex_name = title_case_identifier(dex)
        path = _API_ENDPOINTS["dex_pools"].format(
            network=_path_segment(network), dex=_path_segment(dex)
        )
        return await self._list_pools(
            path,
            f"{dex_name} ({network_name})",
            page, limit, order_by, sort,
            not_found="dex",
            network=network_name,
            dex=dex_name,
        )

    async def get_pool_details(
        self,
        network: str,
        pool_address: str,
        inversed: bool = False,
    ) -> Dict[str, Any]:
        """Get detailed information about a specific pool.

        Args:
            network: Network ID (e.g., "ethereum")
            pool_address: Pool address or identifier
            inversed: Whether to invert the price ratio (forwarded to the API)

        Returns:
            dict: Envelope with price, 24h volume, TVL, fee, 24h change,
                  transactions and both pair ``tokens``

        Raises:
            NotFoundError: If the pool does not exist on the network
        """
        network = self._resolve_identifier(network, "network")
        pool_address = self._resolve_identifier(pool_address, "pool address")
        logger.info(f"Fetching details for pool {pool_address} on {network}")

        path = _API_ENDPOINTS["pool_details"].format(
            network=_path_segment(network), pool_address=_path_segment(pool_address)
        )
        data = await self._make_api_request(path, params={"inversed": inversed}, not_found="pool")

        pool = _as_dict(data)
        tokens = pool.get("tokens")
        tvl = pool.get("tvl_usd")
        if tvl is None:
            tvl = pool.get("total_liquidity_usd")
        pair_name = token_pair_name(tokens)

        logger.info(f"Retrieved pool details for {pair_name} ({pool_address})")

        return self.response_builder.envelope(
            title=f"Pool Details: {pair_name}",
            raw_data=data,
            pool_id=pool.get("id") or pool_address,
            name=pair_name,
            network=title_case_identifier(network),
            dex=pool.get("dex_name") or title_case_identifier(pool.get("dex_id")),
            tokens=self._token_slots(tokens),
            price=format_currency(pool.get("price_usd"), POOL_PRICE_DIGITS),
            volume_24h=format_currency(pool.get("volume_usd"), VOLUME_DIGITS),
            tvl=format_currency(tvl, VOLUME_DIGITS),
            fee=format_fee(pool.get("fee")),
            price_change_24h=format_percentage_change(pool.get("last_price_change_usd_24h")),
            total_transactions=format_number(pool.get("transactions")),
            created_at=pool.get("created_at") or NOT_AVAILABLE,
            created_at_block_number=pool.get("created_at_block_number") or NOT_AVAILABLE,
            inversed=inversed,
        )

    # =========================================================================
    # Token, Search & Stats Tools
    # =========================================================================

    async def get_token_details(self, network: str, token_address: str) -> Dict[str, Any]:
        """Get detailed information about a specific token.

        Args:
            network: Network ID (e.g., "solana")
            token_address: Token address or identifier

        Returns:
            dict: Envelope with price, market cap, supplies, 24h change,
                  description and ``links``

        Raises:
            NotFoundError: If the token does not exist on the network
        """
        network = self._resolve_identifier(network, "network")
        token_address = self._resolve_identifier(token_address, "token address")
        logger.info(f"Fetching details for token {token_address} on {network}")

        path = _API_ENDPOINTS["token_details"].format(
            network=_path_segment(network), token_address=_path_segment(token_address)
        )
        data = await self._make_api_request(path, not_found="token")

        token = _as_dict(data)
        name = token.get("name") or "Unknown Token"
        symbol = token.get("symbol") or NOT_AVAILABLE
        decimals = token.get("decimals")

        logger.info(f"Retrieved token details for {symbol}")

        return self.response_builder.envelope(
            title=f"Token Details: {name} ({symbol})",
            raw_data=data,
            token_id=token.get("id") or token_address,
            network=title_case_identifier(network),
            name=name,
            symbol=symbol,
            price=format_currency(token.get("price_usd"), TOKEN_PRICE_DIGITS),
            market_cap=format_currency(token.get("market_cap_usd"), VOLUME_DIGITS),
            total_supply=format_number(token.get("total_supply")),
            circulating_supply=format_number(token.get("circulating_supply")),
            price_change_24h=format_percentage_change(token.get("price_change_24h")),
            decimals=decimals if decimals is not None else NOT_AVAILABLE,
            added_at=token.get("added_at") or NOT_AVAILABLE,
            description=token.get("description") or NOT_AVAILABLE,
            links={
                key: token.get(key) or NOT_AVAILABLE
                for key in ("website", "twitter", "telegram", "discord")
            },
        )

    async def search(self, query: str) -> Dict[str, Any]:
        """Search for tokens, pools and DEXes by name, symbol or address.

        Args:
            query: Search term of at least 3 characters
                  (e.g., "uniswap", "bitcoin", or a token address)

        Returns:
            dict: Envelope with ``tokens``, ``pools`` and ``dexes``, each
                  holding the total ``count`` and up to 3 ``top_results``

        Raises:
            SearchQueryError: If the query is empty or shorter than 3
                  characters; no request is sent
            SearchAPIError: If the API rejects the query
        """
        cleaned, error = self._check_search_query(query)
        if error:
            logger.warning(f"Rejected search query {query!r}: {error}")
            raise SearchQueryError(error, query=query)

        logger.info(f"Searching DexPaprika for '{cleaned}'")
        data = await self._make_api_request(
            _API_ENDPOINTS["search"], params={"query": cleaned}, search_query=cleaned
        )

        body = _as_dict(data)
        tokens = _as_list(body.get("tokens"))
        pools = _as_list(body.get("pools"))
        dexes = _as_list(body.get("dexes"))

        top_tokens = []
        for token in tokens[:MAX_SEARCH_RESULTS_DISPLAY]:
            token = _as_dict(token)
            top_tokens.append({
                "id": token.get("id"),
                "name": token.get("name"),
                "symbol": token.get("symbol"),
                "network": token.get("chain"),
                "price": format_currency(token.get("price_usd"), TOKEN_PRICE_DIGITS),
            })

        top_pools = []
        for position, pool in enumerate(pools[:MAX_SEARCH_RESULTS_DISPLAY], start=1):
            pool = _as_dict(pool)
            top_pools.append({
                "position": position,
                "id": pool.get("id"),
                "name": token_pair_name(pool.get("tokens")),
                "dex": pool.get("dex_name") or title_case_identifier(pool.get("dex_id")),
                "tokens": token_list_display(pool.get("tokens")),
                "volume": format_currency(pool.get("volume_usd"), VOLUME_DIGITS),
                "network": pool.get("chain"),
            })

        top_dexes = []
        for dex in dexes[:MAX_SEARCH_RESULTS_DISPLAY]:
            dex = _as_dict(dex)
            dex_id = dex.get("dex_id") or dex.get("id")
            top_dexes.append({
                "id": dex_id,
                "name": dex.get("dex_name") or title_case_identifier(dex_id),
                "network": dex.get("chain"),
                "protocol": dex.get("protocol") or NOT_AVAILABLE,
            })

        logger.info(
            f"Search for '{cleaned}' found {len(tokens)} tokens, "
            f"{len(pools)} pools, {len(dexes)} DEXes"
        )

        return self.response_builder.envelope(
            title=f'Search Results for "{cleaned}"',
            raw_data=data,
            query=cleaned,
            tokens={"count": len(tokens), "top_results": top_tokens},
            pools={"count": len(pools), "top_results": top_pools},
            dexes={"count": len(dexes), "top_results": top_dexes},
        )

    @staticmethod
    def _check_search_query(query: Any) -> Tuple[str, Optional[str]]:
        """Return the trimmed query and, if it is unusable, the reason."""
        if not isinstance(query, str) or not query.strip():
            return "", "Search query cannot be empty"
        cleaned = query.strip()
        if len(cleaned) < MIN_SEARCH_QUERY_LENGTH:
            return cleaned, (
                f"Search query must be at least {MIN_SEARCH_QUERY_LENGTH} characters long"
            )
        return cleaned, None

    async def get_stats(self) -> Dict[str, Any]:
        """Get high-level statistics about the DexPaprika ecosystem.

        Returns:
            dict: Envelope with network, DEX, pool and token counts, total
                  24h volume and the top network and DEX by volume
        """
        logger.info("Fetching DexPaprika platform statistics")
        data = await self._make_api_request(_API_ENDPOINTS["stats"])

        stats = _as_dict(data)
        return self.response_builder.envelope(
            title="DexPaprika Platform Statistics",
            raw_data=data,
            total_networks=stats.get("networks_count") or 0,
            total_dexes=stats.get("dexes_count") or 0,
            total_pools=stats.get("pools_count") or 0,
            total_tokens=stats.get("tokens_count") or 0,
            total_volume_24h=format_currency(stats.get("total_volume_usd"), VOLUME_DIGITS),
            top_network_by_volume=stats.get("top_network_by_volume") or NOT_AVAILABLE,
            top_dex_by_volume=stats.get("top_dex_by_volume") or NOT_AVAILABLE,
        )

    async def aclose(self):
        """Close the underlying HTTP client and free its connections."""
        await self._http_client.aclose()

    async def __aenter__(self):
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        await self.aclose()
