"""
Utility modules for the DexPaprika toolkit.

- ResponseBuilder: Envelope and error payload construction
- HTTPClient: Async HTTP client with bounded transport retries
- formatting: Display formatting for currency, percentages and pagination
"""

from .response_builder import ResponseBuilder
from .http_client import DataHTTPClient, HTTPClientError
from . import formatting

__all__ = [
    'ResponseBuilder',
    'DataHTTPClient',
    'HTTPClientError',
    'formatting',
]
