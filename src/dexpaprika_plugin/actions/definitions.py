"""
Action definitions for the DexPaprika plugin.

Parameter models describe what hosts may pass to each action; names use the
host convention (``orderBy``, ``poolAddress``, ``tokenAddress``).
"""

from typing import List, Literal

from pydantic import Field

from dexpaprika_plugin.actions.registry import Action, ActionParams, ActionRegistry

__all__ = [
    "ACTIONS",
    "build_registry",
    "OrderByField",
    "SortField",
]

OrderByField = Literal[
    "volume_usd", "price_usd", "transactions", "last_price_change_usd_24h", "created_at"
]
SortField = Literal["asc", "desc"]

NETWORK_DESCRIPTION = "Network ID (e.g., ethereum, solana)"


class NoParams(ActionParams):
    """Actions that take no parameters."""


class PaginationParams(ActionParams):
    page: int = Field(0, description="Page number for pagination (0-indexed)")
    limit: int = Field(10, description="Number of items per page")


class NetworkDexesParams(PaginationParams):
    network: str = Field(..., description=NETWORK_DESCRIPTION)


class TopPoolsParams(PaginationParams):
    order_by: OrderByField = Field("volume_usd", alias="orderBy", description="Field to order by")
    sort: SortField = Field("desc", description="Sort order")


class NetworkPoolsParams(TopPoolsParams):
    network: str = Field(..., description=NETWORK_DESCRIPTION)


class DexPoolsParams(NetworkPoolsParams):
    dex: str = Field(..., description="DEX identifier (e.g., uniswap_v3)")


class PoolDetailsParams(ActionParams):
    network: str = Field(..., description=NETWORK_DESCRIPTION)
    pool_address: str = Field(..., alias="poolAddress", description="Pool address or identifier")
    inversed: bool = Field(False, description="Whether to invert the price ratio")


class TokenDetailsParams(ActionParams):
    network: str = Field(..., description=NETWORK_DESCRIPTION)
    token_address: str = Field(..., alias="tokenAddress", description="Token address or identifier")


class SearchParams(ActionParams):
    query: str = Field(
        ...,
        min_length=3,
        description='Search term (e.g., "uniswap", "bitcoin", or a token address)',
    )


ACTIONS: List[Action] = [
    Action(
        name="getNetworks",
        description="Retrieve a list of all supported blockchain networks",
        params_model=NoParams,
        handler="get_networks",
        similes=("LIST_NETWORKS", "SUPPORTED_CHAINS", "SHOW_BLOCKCHAINS", "AVAILABLE_NETWORKS"),
        examples=(
            {"user": "What blockchain networks are supported?",
             "agent": "Let me fetch the list of blockchain networks DexPaprika provides data for."},
            {"user": "Which chains can I get data for?",
             "agent": "I'll check which blockchain networks are available in DexPaprika."},
        ),
    ),
    Action(
        name="getNetworkDexes",
        description="Get a list of available decentralized exchanges on a specific network",
        params_model=NetworkDexesParams,
        handler="get_network_dexes",
        similes=("LIST_DEXES", "SHOW_DEXES", "EXCHANGES_ON_NETWORK", "FIND_DEXES_BY_NETWORK"),
        examples=(
            {"user": "Which DEXes are on Solana?",
             "agent": "I'll list the decentralized exchanges operating on Solana."},
        ),
    ),
    Action(
        name="getTopPools",
        description="Get a paginated list of top liquidity pools from all networks",
        params_model=TopPoolsParams,
        handler="get_top_pools",
        similes=("TOP_LIQUIDITY_POOLS", "LIST_BEST_POOLS", "HIGHEST_VOLUME_POOLS", "MOST_ACTIVE_POOLS"),
        examples=(
            {"user": "What are the top liquidity pools across all networks?",
             "agent": "I'll find the top liquidity pools across all blockchain networks."},
            {"user": "Show me liquidity pools with highest price change",
             "agent": "I'll find the pools with the highest price changes in the last 24 hours."},
        ),
    ),
    Action(
        name="getNetworkPools",
        description="Get a list of top liquidity pools on a specific network",
        params_model=NetworkPoolsParams,
        handler="get_network_pools",
        similes=("NETWORK_LIQUIDITY_POOLS", "LIST_POOLS_BY_NETWORK", "CHAIN_POOLS", "BLOCKCHAIN_POOLS"),
        examples=(
            {"user": "Show me the top pools on Ethereum",
             "agent": "I'll fetch the highest-volume liquidity pools on Ethereum."},
        ),
    ),
    Action(
        name="getDexPools",
        description="Get top pools on a specific DEX within a network",
        params_model=DexPoolsParams,
        handler="get_dex_pools",
        similes=("DEX_LIQUIDITY_POOLS", "LIST_POOLS_BY_DEX", "EXCHANGE_POOLS", "SPECIFIC_DEX_POOLS"),
        examples=(
            {"user": "What are the biggest Uniswap V3 pools on Ethereum?",
             "agent": "I'll look up the top pools on Uniswap V3 on Ethereum."},
        ),
    ),
    Action(
        name="getPoolDetails",
        description="Get detailed information about a specific pool on a network",
        params_model=PoolDetailsParams,
        handler="get_pool_details",
        similes=("POOL_INFO", "LIQUIDITY_POOL_DETAILS", "DETAILED_POOL_INFO", "VIEW_POOL"),
        examples=(
            {"user": "Tell me about pool 0x88e6a0c2ddd26feeb64f039a2c41296fcb3f5640 on Ethereum",
             "agent": "I'll get the details of that pool, including price, volume and TVL."},
        ),
    ),
    Action(
        name="getTokenDetails",
        description="Get detailed information about a specific token on a network",
        params_model=TokenDetailsParams,
        handler="get_token_details",
        similes=("TOKEN_INFO", "GET_CRYPTO_DETAILS", "DETAILED_TOKEN_INFO", "VIEW_TOKEN"),
        examples=(
            {"user": "What's the price of token EPjFWdd5AufqSSqeM2qN1xzybapC8G4wEGGkZwyTDt1v on Solana?",
             "agent": "I'll fetch the details for that token on Solana."},
        ),
    ),
    Action(
        name="search",
        description="Search for tokens, pools, and DEXes by name or identifier",
        params_model=SearchParams,
        handler="search",
        similes=("FIND", "LOOKUP", "SEARCH_CRYPTO", "FIND_TOKEN_OR_POOL"),
        examples=(
            {"user": "Search DexPaprika for uniswap",
             "agent": "I'll search DexPaprika for tokens, pools and DEXes matching 'uniswap'."},
        ),
    ),
    Action(
        name="getStats",
        description="Get high-level statistics about the DexPaprika ecosystem",
        params_model=NoParams,
        handler="get_stats",
        similes=("DEXPAPRIKA_STATS", "PLATFORM_STATISTICS", "ECOSYSTEM_OVERVIEW"),
        examples=(
            {"user": "How many pools does DexPaprika track?",
             "agent": "I'll pull the overall DexPaprika platform statistics."},
        ),
    ),
]


def build_registry(**kwargs) -> ActionRegistry:
    """Create a registry holding every DexPaprika action.

    Keyword arguments are passed to ``ActionRegistry`` (e.g. ``toolkit_factory``).
    """
    return ActionRegistry(actions=ACTIONS, **kwargs)
