"""
DexPaprika Toolkits

Architecture:
- base/: API helper mixin shared by toolkits
- utils/: HTTP transport, response building and display formatting
- data/: The DexPaprika market-data toolkit
- tests/: Test suite for all components

Usage:
    from dexpaprika_plugin.toolkits import DexPaprikaToolkit, DataHTTPClient
"""

from .base import BaseAPIToolkit

from .utils import (
    ResponseBuilder,
    DataHTTPClient,
    HTTPClientError,
)

from .data import (
    DexPaprikaToolkit,
    OrderBy,
    SortOrder,
)

__all__ = [
    # Base classes
    "BaseAPIToolkit",

    # Utility modules
    "ResponseBuilder",
    "DataHTTPClient",
    "HTTPClientError",

    # Data toolkits
    "DexPaprikaToolkit",
    "OrderBy",
    "SortOrder",
]
