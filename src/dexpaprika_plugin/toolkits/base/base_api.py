"""Base API Toolkit Helper Class
===============================

A helper class providing common API business logic for data toolkits.
Focuses on API-specific concerns like parameter validation, identifier
resolution and HTTP client setup, separate from HTTP transport
(DataHTTPClient) and response shaping (ResponseBuilder).

Key Features:
- API parameter validation and cleaning
- Path identifier resolution
- Standard HTTP client initialization
- Toolkit identification for response payloads
"""

from typing import Any, Dict, List, Optional

from loguru import logger

from dexpaprika_plugin.exceptions import InvalidParametersError

__all__ = ["BaseAPIToolkit"]


class BaseAPIToolkit:
    """Helper class for API business logic functionality.

    This class should be inherited alongside ``agno.tools.Toolkit``:

    Example:
        ```python
        class DexPaprikaToolkit(Toolkit, BaseAPIToolkit):
            def __init__(self, **kwargs):
                self._init_standard_configuration(http_timeout=30.0)
                super().__init__(name="dexpaprika_toolkit", tools=[self.get_stats])

            async def get_pool_details(self, network: str, pool_address: str):
                network = self._resolve_identifier(network, "network")
                ...
        ```
    """

    def _resolve_identifier(
        self,
        identifier: str,
        identifier_type: str = "identifier",
    ) -> str:
        """Validate and clean an identifier used in a request path.

        Args:
            identifier: The identifier to clean (e.g., "ethereum", a pool address)
            identifier_type: Type of identifier for error messages ("network", "dex", ...)

        Returns:
            str: Cleaned identifier

        Raises:
            InvalidParametersError: If identifier is missing or blank
        """
        if not identifier or not isinstance(identifier, str):
            raise InvalidParametersError(
                f"Invalid {identifier_type}: {identifier!r}", missing=[identifier_type]
            )

        cleaned = identifier.strip()
        if not cleaned:
            raise InvalidParametersError(
                f"Empty {identifier_type} provided", missing=[identifier_type]
            )

        return cleaned

    def _validate_api_parameters(
        self,
        params: Dict[str, Any],
        required_params: List[str],
        optional_params: Optional[List[str]] = None,
    ) -> Dict[str, Any]:
        """Validate API parameters and return cleaned parameter dict.

        Args:
            params: Dictionary of parameters to validate
            required_params: List of required parameter names
            optional_params: List of optional parameter names

        Returns:
            dict: Validated and cleaned parameters

        Raises:
            InvalidParametersError: If required parameters are missing
        """
        cleaned_params = {}
        all_allowed = set(required_params)

        if optional_params:
            all_allowed.update(optional_params)

        missing = [
            param for param in required_params
            if param not in params or params[param] is None
        ]
        if missing:
            raise InvalidParametersError(
                f"Required parameter(s) missing: {', '.join(missing)}", missing=missing
            )

        for param in required_params:
            cleaned_params[param] = params[param]

        if optional_params:
            for param in optional_params:
                if param in params and params[param] is not None:
                    cleaned_params[param] = params[param]

        unexpected = set(params.keys()) - all_allowed
        if unexpected:
            logger.warning(f"Unexpected parameters ignored: {sorted(unexpected)}")

        return cleaned_params

    def _init_standard_configuration(
        self,
        http_timeout: float = 30.0,
        max_retries: int = 0,
        retry_delay: float = 1.0,
    ) -> None:
        """Initialize the HTTP client shared by every tool of this toolkit.

        Args:
            http_timeout: HTTP request timeout in seconds
            max_retries: Retry attempts after a transport failure
            retry_delay: Delay between retries in seconds
        """
        # Import here to avoid circular imports
        from dexpaprika_plugin.toolkits.utils import DataHTTPClient

        self._http_client = DataHTTPClient(
            default_timeout=http_timeout,
            max_retries=max_retries,
            retry_delay=retry_delay,
        )

        logger.debug(f"Initialized standard configuration: timeout={http_timeout}s, retries={max_retries}")

    def _get_toolkit_info(self) -> Dict[str, Any]:
        """Get toolkit identification information.

        Returns:
            dict: Toolkit identification info including name, category and type
        """
        return {
            "toolkit_name": self.__class__.__name__,
            "toolkit_category": getattr(self, "_toolkit_category", "custom"),
            "toolkit_type": getattr(self, "_toolkit_type", "custom"),
        }
