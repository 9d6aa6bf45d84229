"""
Custom exceptions for the DexPaprika plugin.

Every toolkit operation either returns a response envelope or raises one of
the exceptions below, each carrying a message fit for direct display and,
where the upstream API produced one, the HTTP status code.
"""

from typing import Optional, Any, Dict, List


class DexPaprikaError(Exception):
    """
    Base exception for all DexPaprika plugin errors.

    Attributes:
        message: Human-readable error message
        status_code: HTTP status code from the upstream API, if any
        error_code: Machine-readable error code
        context: Additional context information
    """

    def __init__(self,
                 message: str,
                 status_code: Optional[int] = None,
                 error_code: Optional[str] = None,
                 context: Optional[Dict[str, Any]] = None,
                 cause: Optional[Exception] = None):
        super().__init__(message)
        self.message = message
        self.status_code = status_code
        self.error_code = error_code or self.__class__.__name__
        self.context = context or {}
        self.cause = cause

    def to_dict(self) -> Dict[str, Any]:
        """Convert exception to dictionary for logging/serialization."""
        return {
            "error_type": self.__class__.__name__,
            "error_code": self.error_code,
            "message": self.message,
            "status_code": self.status_code,
            "context": self.context,
            "cause": str(self.cause) if self.cause else None
        }


# Configuration Related Errors

class ConfigurationError(DexPaprikaError):
    """Raised when plugin settings are invalid."""
    pass


# Caller Input Errors

class InvalidParametersError(DexPaprikaError):
    """Raised when an action is invoked with missing or unusable parameters."""

    def __init__(self, message: str, missing: Optional[List[str]] = None):
        super().__init__(
            message=message,
            context={"missing": missing} if missing else None
        )


class SearchQueryError(InvalidParametersError):
    """Raised when a search query is rejected before any request is sent."""

    def __init__(self, message: str, query: Optional[str] = None):
        super().__init__(message)
        self.context = {"query": query}


class ActionNotFoundError(DexPaprikaError, KeyError):
    """Raised when an unknown action name is requested from the registry."""

    def __init__(self, action_name: str, available_actions: Optional[List[str]] = None):
        message = f"Action '{action_name}' not found in registry"
        if available_actions:
            message += f". Available actions: {', '.join(available_actions)}"

        super().__init__(
            message=message,
            context={"requested_action": action_name, "available_actions": available_actions}
        )

    def __str__(self) -> str:
        return self.message


# Upstream API Errors

class APIError(DexPaprikaError):
    """Raised when the DexPaprika API answers with an HTTP error status."""
    pass


class NotFoundError(APIError):
    """Raised on HTTP 404 for the requested network, DEX, pool or token."""

    def __init__(self, resource: str, hint: str, api_message: Optional[str] = None):
        super().__init__(
            message=f"{resource} not found. Please check the {hint} and try again.",
            status_code=404,
            context={"resource": resource, "api_message": api_message}
        )


class RateLimitError(APIError):
    """Raised on HTTP 429."""

    def __init__(self, api_message: Optional[str] = None):
        super().__init__(
            message="Rate limit exceeded. Please try again later.",
            status_code=429,
            context={"api_message": api_message}
        )


class SearchAPIError(APIError):
    """Raised when the API rejects a search query with HTTP 400."""

    def __init__(self, query: str, api_message: Optional[str] = None):
        detail = api_message or "The search query is invalid or too short (min 3 characters required)"
        super().__init__(
            message=(
                f"DexPaprika search error: {detail} - To search DexPaprika, try using a more "
                f"specific query with at least 3 characters. For tokens, try including the "
                f"full name or symbol."
            ),
            status_code=400,
            context={"query": query, "api_message": api_message}
        )


# Transport and Payload Errors

class TransportError(DexPaprikaError):
    """Raised when no HTTP response was received at all."""

    def __init__(self, detail: str, cause: Optional[Exception] = None):
        super().__init__(message=f"Unexpected error: {detail}", cause=cause)


class EmptyResponseError(DexPaprikaError):
    """Raised when the API answers successfully but without a body."""

    def __init__(self, endpoint: str):
        super().__init__(
            message="No data received from DexPaprika API",
            context={"endpoint": endpoint}
        )
