"""Response Builder Utilities
===========================

Standardized response construction for the DexPaprika toolkit.

Successful operations return an envelope pairing a display projection with the
untouched upstream payload:

```json
{
    "formatted_response": {"title": "...", "timestamp": "2024-01-01 at 12:00:00", ...},
    "raw_data": {...}
}
```

Failures are raised as exceptions inside the toolkit; ``error_response`` only
shapes them for hosts that expect a payload instead of an exception.
"""

from datetime import datetime
from typing import Any, Dict, Optional

from dexpaprika_plugin.toolkits.utils.formatting import format_timestamp

__all__ = ["ResponseBuilder"]


class ResponseBuilder:
    """Stateful utility class for building standardized responses.

    Toolkit information given at construction is injected into error payloads,
    never into envelopes, so ``formatted_response`` stays a pure projection of
    upstream data.
    """

    def __init__(self, toolkit_info: Optional[Dict[str, Any]] = None):
        """Initialize ResponseBuilder with toolkit information.

        Args:
            toolkit_info: Dictionary containing toolkit identification info
                         (toolkit_name, toolkit_category, toolkit_type)
        """
        self.toolkit_info = toolkit_info or {}

    def envelope(
        self,
        title: str,
        raw_data: Any,
        now: Optional[datetime] = None,
        **fields
    ) -> Dict[str, Any]:
        """Create the success envelope for a normalized operation.

        Args:
            title: Display title of the formatted response
            raw_data: Upstream JSON, passed through by identity
            now: Clock override for the timestamp
            **fields: Entity-specific formatted fields

        Returns:
            dict: ``{"formatted_response": {...}, "raw_data": raw_data}``
        """
        formatted = {
            "title": title,
            "timestamp": format_timestamp(now),
        }
        formatted.update(fields)

        return {
            "formatted_response": formatted,
            "raw_data": raw_data,
        }

    def error_response(
        self,
        message: str,
        error_type: str = "unknown_error",
        status_code: Optional[int] = None,
        details: Optional[Dict[str, Any]] = None,
        **additional_fields
    ) -> Dict[str, Any]:
        """Create a standardized error payload.

        Args:
            message: Human-readable error message
            error_type: Error classification (e.g., "NotFoundError", "SearchQueryError")
            status_code: Upstream HTTP status, when one was received
            details: Additional error details
            **additional_fields: Additional fields to include in response

        Returns:
            dict: Standardized error payload

        Example:
            >>> ResponseBuilder({"toolkit_name": "DexPaprikaToolkit"}).error_response(
            ...     message="Rate limit exceeded. Please try again later.",
            ...     error_type="RateLimitError",
            ...     status_code=429,
            ... )
            {
                "success": False,
                "error": "Rate limit exceeded. Please try again later.",
                "error_type": "RateLimitError",
                "status_code": 429,
                "toolkit_name": "DexPaprikaToolkit"
            }
        """
        response = {
            "success": False,
            "error": message,
            "error_type": error_type,
            "status_code": status_code,
        }

        if details:
            response["details"] = details

        response.update(self.toolkit_info)

        # Explicit parameters win over colliding keyword fields
        safe_additional_fields = {
            k: v for k, v in additional_fields.items()
            if k not in ["error", "error_type", "details", "success", "status_code"] + list(self.toolkit_info.keys())
        }
        response.update(safe_additional_fields)

        return response
