"""
Configuration for the DexPaprika plugin.

Settings are resolved from whatever settings provider the hosting runtime
offers (``get_setting``/``getSetting``), or from environment variables when
no runtime is available. All settings are optional.
"""

import os
from typing import Any, Callable, Dict, Optional

import httpx
from loguru import logger
from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from dexpaprika_plugin.exceptions import ConfigurationError

__all__ = [
    "DexPaprikaConfig",
    "DEFAULT_API_URL",
    "DEFAULT_TIMEOUT",
    "SETTING_API_URL",
    "SETTING_API_KEY",
    "SETTING_TIMEOUT",
    "SETTING_MAX_RETRIES",
]

DEFAULT_API_URL = "https://api.dexpaprika.com"
DEFAULT_TIMEOUT = 30.0
USER_AGENT = "dexpaprika-plugin/0.1.0"

SETTING_API_URL = "DEXPAPRIKA_API_URL"
SETTING_API_KEY = "DEXPAPRIKA_API_KEY"
SETTING_TIMEOUT = "DEXPAPRIKA_TIMEOUT"
SETTING_MAX_RETRIES = "DEXPAPRIKA_MAX_RETRIES"

SettingsGetter = Callable[[str], Optional[Any]]


class DexPaprikaConfig(BaseModel):
    """Resolved plugin settings. Immutable once built."""

    model_config = ConfigDict(frozen=True)

    api_url: str = Field(
        DEFAULT_API_URL,
        description="Base URL for the DexPaprika API"
    )
    api_key: Optional[str] = Field(
        None,
        description="Bearer token for the DexPaprika API (unauthenticated when unset)"
    )
    timeout: float = Field(
        DEFAULT_TIMEOUT,
        gt=0,
        description="Request timeout in seconds"
    )
    max_retries: int = Field(
        0,
        ge=0,
        le=1,
        description="Retries on transport failures only (never on HTTP errors)"
    )

    @field_validator("api_url", mode="before")
    @classmethod
    def validate_api_url(cls, v):
        """Fall back to the default URL, drop trailing slashes and reject unusable URLs."""
        if v is None or not str(v).strip():
            return DEFAULT_API_URL
        url = str(v).strip().rstrip("/")
        try:
            parsed = httpx.URL(url)
        except httpx.InvalidURL as e:
            raise ValueError(f"invalid URL {url!r}: {e}")
        if parsed.scheme not in ("http", "https") or not parsed.host:
            raise ValueError(f"expected an absolute http(s) URL, got {url!r}")
        return url

    @field_validator("api_key", mode="before")
    @classmethod
    def validate_api_key(cls, v):
        """Treat blank keys as unset."""
        if v is None:
            return None
        v = str(v).strip()
        return v or None

    @classmethod
    def from_settings(cls, get_setting: SettingsGetter) -> "DexPaprikaConfig":
        """Build a configuration from a ``key -> value`` settings callable.

        Args:
            get_setting: Callable returning the raw value for a setting key,
                or None when the setting is absent.

        Returns:
            DexPaprikaConfig: Validated configuration

        Raises:
            ConfigurationError: If a numeric setting cannot be parsed
        """
        raw: Dict[str, Any] = {
            "api_url": get_setting(SETTING_API_URL),
            "api_key": get_setting(SETTING_API_KEY),
        }

        timeout = get_setting(SETTING_TIMEOUT)
        if timeout not in (None, ""):
            raw["timeout"] = timeout

        max_retries = get_setting(SETTING_MAX_RETRIES)
        if max_retries not in (None, ""):
            raw["max_retries"] = max_retries

        try:
            return cls(**raw)
        except ValidationError as e:
            errors = ", ".join(
                f"{'.'.join(str(p) for p in err['loc'])}: {err['msg']}" for err in e.errors()
            )
            raise ConfigurationError(
                f"DexPaprika plugin configuration error: {errors}",
                cause=e
            )

    @classmethod
    def from_env(cls) -> "DexPaprikaConfig":
        """Build a configuration from environment variables."""
        return cls.from_settings(os.environ.get)

    @classmethod
    def from_runtime(cls, runtime: Any = None) -> "DexPaprikaConfig":
        """Build a configuration from a hosting runtime's settings provider.

        The runtime may expose ``get_setting(key)`` or ``getSetting(key)``.
        Without a runtime the process environment is used.
        """
        if runtime is None:
            return cls.from_env()

        getter = getattr(runtime, "get_setting", None) or getattr(runtime, "getSetting", None)
        if getter is None:
            logger.warning(
                f"Runtime {type(runtime).__name__} exposes no settings provider, "
                f"falling back to environment variables"
            )
            return cls.from_env()

        return cls.from_settings(getter)

    def auth_headers(self) -> Dict[str, str]:
        """Headers sent with every request, including the bearer token if configured."""
        headers = {
            "Accept": "application/json",
            "User-Agent": USER_AGENT,
        }
        if self.api_key:
            headers["Authorization"] = f"Bearer {self.api_key}"
        return headers
