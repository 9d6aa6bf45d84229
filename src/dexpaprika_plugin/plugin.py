"""
Plugin descriptor handed to the hosting agent runtime.
"""

from dataclasses import dataclass
from typing import Any, Optional

from loguru import logger

from dexpaprika_plugin.actions import ActionRegistry, build_registry
from dexpaprika_plugin.config import DexPaprikaConfig

__all__ = ["Plugin", "dexpaprika_plugin"]

__version__ = "0.1.0"


@dataclass
class Plugin:
    """Name, description and actions a runtime needs to load the plugin."""

    name: str
    description: str
    version: str
    actions: ActionRegistry

    async def initialize(self, runtime: Any = None) -> DexPaprikaConfig:
        """Resolve settings from the runtime and announce the API in use."""
        config = DexPaprikaConfig.from_runtime(runtime)
        logger.info(f"DexPaprika plugin initialized with API URL: {config.api_url}")
        return config

    async def handle(self, name: str, params: Optional[dict] = None, runtime: Any = None, callback=None) -> bool:
        return await self.actions.handle(name, params, runtime, callback)

    async def aclose(self) -> None:
        await self.actions.aclose()


dexpaprika_plugin = Plugin(
    name="dexpaprika",
    description="DeFi analytics plugin using DexPaprika API",
    version=__version__,
    actions=build_registry(),
)
