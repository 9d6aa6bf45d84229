"""
Action registry exposing DexPaprika toolkit tools to a hosting agent runtime.

Each action pairs a host-facing name and parameter schema with the toolkit
tool that executes it. Hosts either await ``execute`` and receive the
response envelope, or use the callback-style ``handle`` adapter.
"""

import inspect
from dataclasses import dataclass, field
from typing import Any, Callable, Dict, Iterator, List, Optional, Tuple, Type

from loguru import logger
from pydantic import BaseModel, ConfigDict

from dexpaprika_plugin.actions.presenters import render_text
from dexpaprika_plugin.config import DexPaprikaConfig
from dexpaprika_plugin.exceptions import ActionNotFoundError, DexPaprikaError
from dexpaprika_plugin.toolkits.data import DexPaprikaToolkit
from dexpaprika_plugin.toolkits.utils import ResponseBuilder

__all__ = ["Action", "ActionParams", "ActionRegistry"]

ToolkitFactory = Callable[[DexPaprikaConfig], DexPaprikaToolkit]
HandlerCallback = Callable[[Dict[str, Any]], Any]


class ActionParams(BaseModel):
    """Base class for action parameter models.

    Models describe the host-facing schema (camelCase aliases, defaults,
    enums). They are not used to coerce or reject incoming values.
    """

    model_config = ConfigDict(populate_by_name=True, extra="ignore")


@dataclass(frozen=True)
class Action:
    """A named, schema-described operation backed by one toolkit tool."""

    name: str
    description: str
    params_model: Type[ActionParams]
    handler: str
    similes: Tuple[str, ...] = ()
    examples: Tuple[Dict[str, str], ...] = field(default=())

    @property
    def parameters(self) -> Dict[str, Any]:
        """JSON schema of the action parameters, keyed by host-facing names."""
        schema = self.params_model.model_json_schema(by_alias=True)
        return {
            "type": "object",
            "properties": schema.get("properties", {}),
            "required": schema.get("required", []),
        }

    @property
    def required(self) -> List[str]:
        return [
            info.alias or name
            for name, info in self.params_model.model_fields.items()
            if info.is_required()
        ]

    @property
    def optional(self) -> List[str]:
        return [
            info.alias or name
            for name, info in self.params_model.model_fields.items()
            if not info.is_required()
        ]

    def host_params(self, params: Dict[str, Any]) -> Dict[str, Any]:
        """Rename tool-style keys (``pool_address``) to host names (``poolAddress``)."""
        renamed = dict(params)
        for name, info in self.params_model.model_fields.items():
            if info.alias and name in renamed and renamed.get(info.alias) is None:
                renamed[info.alias] = renamed.pop(name)
        return renamed

    def to_tool_kwargs(self, params: Dict[str, Any]) -> Dict[str, Any]:
        """Map host parameters onto tool keyword arguments, filling defaults.

        Values are passed through untouched.
        """
        kwargs = {}
        for name, info in self.params_model.model_fields.items():
            key = info.alias or name
            if params.get(key) is not None:
                kwargs[name] = params[key]
            elif not info.is_required():
                kwargs[name] = info.get_default(call_default_factory=True)
        return kwargs

    def describe(self) -> Dict[str, Any]:
        """Plain-dict view for hosts that register actions from JSON."""
        return {
            "name": self.name,
            "description": self.description,
            "parameters": self.parameters,
            "similes": list(self.similes),
            "examples": [dict(example) for example in self.examples],
        }


class ActionRegistry:
    """
    Holds the registered actions and the toolkits that execute them.

    One toolkit (and therefore one HTTP client) is created per distinct
    configuration and reused for every later call with that configuration.
    """

    def __init__(
        self,
        actions: Optional[List[Action]] = None,
        toolkit_factory: Optional[ToolkitFactory] = None,
    ):
        self._actions: Dict[str, Action] = {}
        self._toolkits: Dict[DexPaprikaConfig, DexPaprikaToolkit] = {}
        self._toolkit_factory = toolkit_factory or DexPaprikaToolkit
        for action in actions or []:
            self.register(action)
        logger.trace("ActionRegistry instance created.")

    def register(self, action: Action) -> None:
        """Register an action, replacing any action with the same name."""
        if action.name in self._actions and self._actions[action.name] is not action:
            logger.warning(f"Overwriting action '{action.name}' in ActionRegistry")
        self._actions[action.name] = action
        logger.debug(f"ActionRegistry: Registered action '{action.name}' -> {action.handler}")

    def get(self, name: str) -> Action:
        """Retrieve an action by name.

        Raises:
            ActionNotFoundError: If no action is registered under ``name``
        """
        action = self._actions.get(name)
        if action is None:
            raise ActionNotFoundError(name, self.names())
        return action

    def names(self) -> List[str]:
        return list(self._actions)

    def __iter__(self) -> Iterator[Action]:
        return iter(self._actions.values())

    def __len__(self) -> int:
        return len(self._actions)

    def __contains__(self, name: object) -> bool:
        return name in self._actions

    def toolkit_for(self, config: DexPaprikaConfig) -> DexPaprikaToolkit:
        """Return the toolkit bound to ``config``, creating it on first use."""
        toolkit = self._toolkits.get(config)
        if toolkit is None:
            toolkit = self._toolkit_factory(config)
            self._toolkits[config] = toolkit
            logger.debug(f"ActionRegistry: Created toolkit for {config.api_url}")
        return toolkit

    async def execute(
        self,
        name: str,
        params: Optional[Dict[str, Any]] = None,
        runtime: Any = None,
    ) -> Dict[str, Any]:
        """Run an action and return its response envelope.

        Args:
            name: Registered action name (e.g. "getTopPools")
            params: Host parameters using the schema's names
            runtime: Hosting runtime exposing ``get_setting``/``getSetting``

        Returns:
            dict: ``{"formatted_response": {...}, "raw_data": ...}``

        Raises:
            DexPaprikaError: On unknown actions, missing parameters or any
                upstream failure
        """
        action = self.get(name)
        params = params or {}

        config = DexPaprikaConfig.from_runtime(runtime)
        toolkit = self.toolkit_for(config)

        # Presence only; enum values are forwarded for upstream to judge
        validated = toolkit._validate_api_parameters(
            action.host_params(params),
            required_params=action.required,
            optional_params=action.optional,
        )
        kwargs = action.to_tool_kwargs(validated)

        logger.info(f"Executing action '{name}' with {kwargs}")
        tool = getattr(toolkit, action.handler)
        return await tool(**kwargs)

    async def handle(
        self,
        name: str,
        params: Optional[Dict[str, Any]] = None,
        runtime: Any = None,
        callback: Optional[HandlerCallback] = None,
    ) -> bool:
        """Callback-style adapter around ``execute``.

        The callback receives ``{"text": ..., "content": ...}``: the rendered
        response and envelope on success, or the error message and error
        payload on failure.

        Returns:
            bool: True on success, False on failure
        """
        try:
            envelope = await self.execute(name, params, runtime)
        except DexPaprikaError as e:
            logger.error(f"Action '{name}' failed: {e.message}")
            payload = ResponseBuilder({"action": name}).error_response(
                message=e.message,
                error_type=type(e).__name__,
                status_code=e.status_code,
            )
            await self._notify(callback, {"text": e.message, "content": payload})
            return False

        await self._notify(callback, {"text": render_text(envelope), "content": envelope})
        return True

    @staticmethod
    async def _notify(callback: Optional[HandlerCallback], message: Dict[str, Any]) -> None:
        if callback is None:
            return
        result = callback(message)
        if inspect.isawaitable(result):
            await result

    async def aclose(self) -> None:
        """Close every toolkit created by this registry."""
        for toolkit in self._toolkits.values():
            await toolkit.aclose()
        self._toolkits.clear()
