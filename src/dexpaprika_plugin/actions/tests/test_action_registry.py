"""
Tests for the action registry, the callback adapter and the plugin descriptor.
"""
from unittest.mock import AsyncMock, Mock, patch

import pytest

from dexpaprika_plugin.actions import ACTIONS, Action, ActionRegistry, build_registry, render_text
from dexpaprika_plugin.config import DexPaprikaConfig
from dexpaprika_plugin.exceptions import (
    ActionNotFoundError,
    InvalidParametersError,
    SearchQueryError,
)
from dexpaprika_plugin.plugin import Plugin, dexpaprika_plugin


EXPECTED_ACTIONS = [
    "getNetworks",
    "getNetworkDexes",
    "getTopPools",
    "getNetworkPools",
    "getDexPools",
    "getPoolDetails",
    "getTokenDetails",
    "search",
    "getStats",
]


class TestActionDefinitions:
    """Test the registered action set and its schemas."""

    def test_all_actions_registered(self):
        registry = build_registry()

        assert registry.names() == EXPECTED_ACTIONS
        assert len(registry) == 9
        assert "getStats" in registry
        assert "getPrice" not in registry

    def test_every_action_resolves_to_a_toolkit_tool(self):
        from dexpaprika_plugin.toolkits.data import DexPaprikaToolkit

        for action in ACTIONS:
            assert callable(getattr(DexPaprikaToolkit, action.handler))
            assert action.description
            assert action.similes

    def test_pool_details_schema_uses_host_names(self):
        action = build_registry().get("getPoolDetails")

        schema = action.parameters
        assert schema["type"] == "object"
        assert set(schema["properties"]) == {"network", "poolAddress", "inversed"}
        assert schema["required"] == ["network", "poolAddress"]
        assert schema["properties"]["inversed"]["default"] is False

    def test_pool_listing_schema_exposes_enums(self):
        schema = build_registry().get("getNetworkPools").parameters

        assert schema["properties"]["orderBy"]["enum"] == [
            "volume_usd", "price_usd", "transactions", "last_price_change_usd_24h", "created_at",
        ]
        assert schema["properties"]["orderBy"]["default"] == "volume_usd"
        assert schema["properties"]["sort"]["enum"] == ["asc", "desc"]
        assert schema["properties"]["page"]["default"] == 0
        assert schema["properties"]["limit"]["default"] == 10
        assert schema["required"] == ["network"]

    def test_parameterless_actions(self):
        registry = build_registry()

        for name in ("getNetworks", "getStats"):
            assert registry.get(name).parameters == {"type": "object", "properties": {}, "required": []}

    def test_required_and_optional_names(self):
        action = build_registry().get("getDexPools")

        assert sorted(action.required) == ["dex", "network"]
        assert sorted(action.optional) == ["limit", "orderBy", "page", "sort"]

    def test_describe(self):
        description = build_registry().get("search").describe()

        assert description["name"] == "search"
        assert description["parameters"]["required"] == ["query"]
        assert "FIND" in description["similes"]
        assert description["examples"][0]["user"] == "Search DexPaprika for uniswap"

    def test_unknown_action(self):
        registry = build_registry()

        with pytest.raises(ActionNotFoundError) as exc_info:
            registry.get("getPrice")

        assert "getPrice" in str(exc_info.value)
        assert "getStats" in exc_info.value.message

    def test_register_overwrites_with_warning(self, mock_logger):
        registry = ActionRegistry(actions=ACTIONS)
        replacement = Action(
            name="getStats", description="Replaced", params_model=ACTIONS[-1].params_model,
            handler="get_stats",
        )

        registry.register(replacement)

        assert registry.get("getStats").description == "Replaced"
        mock_logger.warning.assert_called_once()


class TestToolKwargs:
    """Test the mapping from host parameters to tool arguments."""

    def test_defaults_filled(self):
        kwargs = build_registry().get("getTopPools").to_tool_kwargs({})

        assert kwargs == {"page": 0, "limit": 10, "order_by": "volume_usd", "sort": "desc"}

    def test_aliases_mapped(self):
        kwargs = build_registry().get("getPoolDetails").to_tool_kwargs(
            {"network": "ethereum", "poolAddress": "0xpool", "inversed": True}
        )

        assert kwargs == {"network": "ethereum", "pool_address": "0xpool", "inversed": True}

    def test_host_params_accepts_tool_names(self):
        action = build_registry().get("getTokenDetails")

        assert action.host_params({"network": "solana", "token_address": "sol"}) == {
            "network": "solana", "tokenAddress": "sol",
        }

    def test_values_not_coerced(self):
        kwargs = build_registry().get("getTopPools").to_tool_kwargs({"orderBy": "liquidity", "limit": "5"})

        assert kwargs["order_by"] == "liquidity"
        assert kwargs["limit"] == "5"


class TestExecute:
    """Test running actions end to end against the in-memory router."""

    @pytest.mark.asyncio
    async def test_get_networks(self, routed_registry, runtime):
        registry, requests, _ = routed_registry

        envelope = await registry.execute("getNetworks", {}, runtime)

        assert envelope["formatted_response"]["total_networks"] == 2
        assert len(envelope["raw_data"]) == 2
        assert requests[0].url.path == "/networks"

    @pytest.mark.asyncio
    async def test_camel_case_parameters(self, routed_registry, runtime):
        registry, requests, _ = routed_registry

        envelope = await registry.execute(
            "getPoolDetails", {"network": "ethereum", "poolAddress": "0xpool"}, runtime
        )

        assert envelope["formatted_response"]["title"] == "Pool Details: ETH-USDC"
        assert requests[0].url.path == "/networks/ethereum/pools/0xpool"
        assert requests[0].url.params["inversed"] == "false"

    @pytest.mark.asyncio
    async def test_snake_case_parameters(self, routed_registry, runtime):
        registry, requests, _ = routed_registry

        envelope = await registry.execute(
            "getTokenDetails", {"network": "solana", "token_address": "sol"}, runtime
        )

        assert envelope["formatted_response"]["title"] == "Token Details: Solana (SOL)"
        assert requests[0].url.path == "/networks/solana/tokens/sol"

    @pytest.mark.asyncio
    async def test_missing_required_parameter(self, routed_registry, runtime):
        registry, requests, _ = routed_registry

        with pytest.raises(InvalidParametersError) as exc_info:
            await registry.execute("getPoolDetails", {"network": "ethereum"}, runtime)

        assert "poolAddress" in exc_info.value.message
        assert exc_info.value.context["missing"] == ["poolAddress"]
        assert requests == []

    @pytest.mark.asyncio
    async def test_unknown_order_by_forwarded(self, routed_registry, runtime):
        registry, requests, _ = routed_registry

        await registry.execute("getTopPools", {"orderBy": "liquidity", "sort": "asc", "limit": 5}, runtime)

        assert requests[0].url.params["order_by"] == "liquidity"
        assert requests[0].url.params["sort"] == "asc"
        assert requests[0].url.params["limit"] == "5"

    @pytest.mark.asyncio
    async def test_short_search_rejected_by_tool(self, routed_registry, runtime):
        registry, requests, _ = routed_registry

        with pytest.raises(SearchQueryError):
            await registry.execute("search", {"query": "ab"}, runtime)

        assert requests == []

    @pytest.mark.asyncio
    async def test_unknown_action(self, routed_registry, runtime):
        registry, _, _ = routed_registry

        with pytest.raises(ActionNotFoundError):
            await registry.execute("getPrice", {}, runtime)

    @pytest.mark.asyncio
    async def test_toolkit_reused_per_configuration(self, routed_registry, make_runtime):
        registry, requests, created = routed_registry

        await registry.execute("getStats", {}, make_runtime())
        await registry.execute("getStats", {}, make_runtime())
        await registry.execute("getStats", {}, make_runtime({"DEXPAPRIKA_API_KEY": "secret"}, camel_case=True))

        assert len(created) == 2
        assert len(requests) == 3
        assert "Authorization" not in requests[0].headers
        assert requests[2].headers["Authorization"] == "Bearer secret"

    def test_toolkit_for_equal_configs(self):
        factory = Mock(side_effect=lambda config: object())
        registry = ActionRegistry(toolkit_factory=factory)

        first = registry.toolkit_for(DexPaprikaConfig(api_url="https://api.dexpaprika.com/"))
        second = registry.toolkit_for(DexPaprikaConfig())

        assert first is second
        factory.assert_called_once()


class TestHandle:
    """Test the callback-style adapter."""

    @pytest.mark.asyncio
    async def test_success_callback(self, routed_registry, runtime):
        registry, _, _ = routed_registry
        callback = Mock()

        ok = await registry.handle("getStats", {}, runtime, callback)

        assert ok is True
        message = callback.call_args.args[0]
        assert message["content"]["formatted_response"]["total_pools"] == 500000
        assert message["text"].startswith("DexPaprika Platform Statistics\nAs of ")
        assert "Total volume 24h: $5,000,000,000.00" in message["text"]

    @pytest.mark.asyncio
    async def test_async_callback_awaited(self, routed_registry, runtime):
        registry, _, _ = routed_registry
        callback = AsyncMock()

        ok = await registry.handle("getNetworks", {}, runtime, callback)

        assert ok is True
        callback.assert_awaited_once()

    @pytest.mark.asyncio
    async def test_failure_callback(self, routed_registry, runtime):
        registry, _, _ = routed_registry
        callback = Mock()

        ok = await registry.handle("getNetworkDexes", {"network": "atlantis"}, runtime, callback)

        assert ok is False
        message = callback.call_args.args[0]
        assert message["text"].startswith("Network not found")
        assert message["content"]["success"] is False
        assert message["content"]["error_type"] == "NotFoundError"
        assert message["content"]["status_code"] == 404
        assert message["content"]["action"] == "getNetworkDexes"

    @pytest.mark.asyncio
    async def test_validation_failure_callback(self, routed_registry, runtime):
        registry, requests, _ = routed_registry
        callback = Mock()

        ok = await registry.handle("search", {"query": "  "}, runtime, callback)

        assert ok is False
        assert callback.call_args.args[0]["text"] == "Search query cannot be empty"
        assert requests == []

    @pytest.mark.asyncio
    async def test_unusable_api_url_reported_through_callback(self, routed_registry, make_runtime):
        registry, requests, created = routed_registry
        callback = Mock()
        runtime = make_runtime({"DEXPAPRIKA_API_URL": "https://api.dexpaprika.com:notaport"})

        ok = await registry.handle("getStats", {}, runtime, callback)

        assert ok is False
        message = callback.call_args.args[0]
        assert "api_url" in message["text"]
        assert message["content"]["error_type"] == "ConfigurationError"
        assert message["content"]["status_code"] is None
        assert created == []
        assert requests == []

    @pytest.mark.asyncio
    async def test_blank_identifier_reported_without_request(self, routed_registry, runtime):
        registry, requests, _ = routed_registry
        callback = Mock()

        ok = await registry.handle("getNetworkPools", {"network": "  "}, runtime, callback)

        assert ok is False
        assert callback.call_args.args[0]["content"]["error_type"] == "InvalidParametersError"
        assert requests == []

    @pytest.mark.asyncio
    async def test_without_callback(self, routed_registry, runtime):
        registry, _, _ = routed_registry

        assert await registry.handle("getPrice", {}, runtime) is False


class TestRenderText:
    """Test plain-text rendering of envelopes."""

    def test_header_and_fields(self):
        text = render_text({"formatted_response": {
            "title": "DexPaprika Platform Statistics",
            "timestamp": "2024-01-01 at 12:00:00",
            "total_pools": 3,
            "top_dex_by_volume": None,
        }})

        assert text.split("\n") == [
            "DexPaprika Platform Statistics",
            "As of 2024-01-01 at 12:00:00",
            "",
            "Total pools: 3",
            "Top dex by volume: N/A",
        ]

    def test_numbered_items(self):
        text = render_text({"formatted_response": {
            "title": "Top 1 Pools on Ethereum",
            "pools": [{"position": 1, "id": "pool1", "name": "ETH-USDC", "volume": "$10.00"}],
            "dexes": [],
        }})

        assert "1. ETH-USDC" in text
        assert "   Volume: $10.00" in text
        assert "Dexes: none" in text


class TestPlugin:
    """Test the plugin descriptor."""

    def test_descriptor(self):
        assert dexpaprika_plugin.name == "dexpaprika"
        assert dexpaprika_plugin.description == "DeFi analytics plugin using DexPaprika API"
        assert dexpaprika_plugin.actions.names() == EXPECTED_ACTIONS

    @pytest.mark.asyncio
    async def test_initialize_logs_api_url(self, make_runtime):
        plugin = Plugin("dexpaprika", "test", "0.0.0", build_registry())

        with patch('dexpaprika_plugin.plugin.logger') as mock_log:
            config = await plugin.initialize(make_runtime({"DEXPAPRIKA_API_URL": "https://custom.example/"}))

        assert config.api_url == "https://custom.example"
        mock_log.info.assert_called_once_with(
            "DexPaprika plugin initialized with API URL: https://custom.example"
        )

    @pytest.mark.asyncio
    async def test_handle_delegates_to_registry(self, routed_registry, runtime):
        registry, _, _ = routed_registry
        plugin = Plugin("dexpaprika", "test", "0.0.0", registry)
        callback = Mock()

        assert await plugin.handle("getStats", {}, runtime, callback) is True
        callback.assert_called_once()
