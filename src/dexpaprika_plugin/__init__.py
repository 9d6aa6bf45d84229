"""
DexPaprika plugin: DEX market data (networks, DEXes, pools, tokens, search,
platform statistics) exposed as agent actions and an Agno toolkit.
"""

from dexpaprika_plugin.config import DexPaprikaConfig
from dexpaprika_plugin.exceptions import (
    DexPaprikaError,
    ConfigurationError,
    InvalidParametersError,
    SearchQueryError,
    ActionNotFoundError,
    APIError,
    NotFoundError,
    RateLimitError,
    SearchAPIError,
    TransportError,
    EmptyResponseError,
)
from dexpaprika_plugin.logging_config import setup_logging
from dexpaprika_plugin.toolkits import DexPaprikaToolkit
from dexpaprika_plugin.actions import Action, ActionRegistry, build_registry
from dexpaprika_plugin.plugin import Plugin, dexpaprika_plugin, __version__

__all__ = [
    "__version__",
    "DexPaprikaConfig",
    "DexPaprikaToolkit",
    "Action",
    "ActionRegistry",
    "build_registry",
    "Plugin",
    "dexpaprika_plugin",
    "setup_logging",
    "DexPaprikaError",
    "ConfigurationError",
    "InvalidParametersError",
    "SearchQueryError",
    "ActionNotFoundError",
    "APIError",
    "NotFoundError",
    "RateLimitError",
    "SearchAPIError",
    "TransportError",
    "EmptyResponseError",
]
