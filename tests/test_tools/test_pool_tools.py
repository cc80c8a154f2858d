"""
Tests for the getPoolStats, getNetworkStats and getUserOverview tools.

Tests cover:
- Markdown formatting of valid responses
- Raw JSON fallback when the response does not match the schema
- Error payloads raised as ToolError
"""

import json
from datetime import datetime, timedelta, timezone
from unittest.mock import AsyncMock, MagicMock, patch

import pytest
from mcp.server.fastmcp.exceptions import ToolError

from braiins_mcp.api.exceptions import BraiinsAPIError, NetworkError
from braiins_mcp.tools.get_network_stats import get_network_stats
from braiins_mcp.tools.get_pool_stats import get_pool_stats
from braiins_mcp.tools.get_user_overview import get_user_overview


def iso_ago(**delta) -> str:
    return (datetime.now(timezone.utc) - timedelta(**delta)).isoformat()


def iso_ahead(**delta) -> str:
    return (datetime.now(timezone.utc) + timedelta(**delta)).isoformat()


@pytest.fixture
def cached_client():
    """Cached client double installed for every tool module."""
    client = MagicMock()
    modules = [
        "braiins_mcp.tools.get_pool_stats",
        "braiins_mcp.tools.get_network_stats",
        "braiins_mcp.tools.get_user_overview",
    ]
    patchers = [patch(f"{m}.get_cached_client", return_value=client) for m in modules]
    for p in patchers:
        p.start()
    yield client
    for p in patchers:
        p.stop()


@pytest.fixture
def pool_stats():
    return {
        "coin": "BTC",
        "pool_hashrate": 12.5e18,
        "workers_active": 123456,
        "last_block": {"height": 870000, "found_at": iso_ago(hours=2), "reward": "3.125"},
        "luck": {"window_blocks": 100, "value": 1.05},
        "updated_at": "2025-01-15T12:00:00Z",
    }


class TestGetPoolStats:
    """Test suite for getPoolStats."""

    @pytest.mark.asyncio
    async def test_formats_markdown(self, cached_client, pool_stats):
        cached_client.get_pool_stats = AsyncMock(return_value=pool_stats)

        result = await get_pool_stats()

        assert result.startswith("## Braiins Pool Statistics (BTC)")
        assert "| Total Hashrate | 12.50 EH/s |" in result
        assert "| Active Workers | 123,456 |" in result
        assert "| Block Height | 870,000 |" in result
        assert "| Reward | 3.125 BTC |" in result
        assert "| Found | 2h ago |" in result
        assert "| Luck (100 blocks) | ✨ 105.0% (Lucky) |" in result
        assert "*Last updated: 2025-01-15 12:00:00 UTC*" in result

    @pytest.mark.asyncio
    async def test_invalid_response_returns_raw_json(self, cached_client):
        raw = {"coin": "BTC", "unexpected": True}
        cached_client.get_pool_stats = AsyncMock(return_value=raw)

        result = await get_pool_stats()

        assert json.loads(result) == raw

    @pytest.mark.asyncio
    async def test_api_error_raises_tool_error(self, cached_client):
        cached_client.get_pool_stats = AsyncMock(
            side_effect=BraiinsAPIError.from_http_status(503, details={"url": "/pool/stats"})
        )

        with pytest.raises(ToolError) as exc_info:
            await get_pool_stats()

        payload = json.loads(str(exc_info.value))
        assert payload["error"] is True
        assert payload["code"] == "API_ERROR"
        assert payload["details"] == {"url": "/pool/stats"}

    @pytest.mark.asyncio
    async def test_unexpected_error_becomes_internal_error(self, cached_client):
        cached_client.get_pool_stats = AsyncMock(side_effect=RuntimeError("kaboom"))

        with pytest.raises(ToolError) as exc_info:
            await get_pool_stats()

        payload = json.loads(str(exc_info.value))
        assert payload["code"] == "INTERNAL_ERROR"
        assert payload["message"] == "kaboom"
        assert payload["details"] == {"original_error": "RuntimeError"}


class TestGetNetworkStats:
    """Test suite for getNetworkStats."""

    @pytest.mark.asyncio
    async def test_formats_markdown(self, cached_client):
        cached_client.get_network_stats = AsyncMock(
            return_value={
                "coin": "BTC",
                "difficulty": 1.1e14,
                "hashrate_estimate": 7.5e20,
                "block_time_target": 600,
                "block_time_avg": 540,
                "next_difficulty_change_eta": iso_ahead(days=3, hours=4, minutes=30),
            }
        )

        result = await get_network_stats()

        assert result.startswith("## Bitcoin Network Statistics")
        assert "| Network Hashrate | 750.00 EH/s |" in result
        assert "| Mining Difficulty | 110.00 T |" in result
        assert "| Target Block Time | 10m |" in result
        assert "| Average Block Time | 9m ✅ On Target |" in result
        assert "| Next Adjustment | 3d 4h |" in result

    @pytest.mark.asyncio
    async def test_network_error_raises_tool_error(self, cached_client):
        cached_client.get_network_stats = AsyncMock(side_effect=NetworkError("Cannot connect"))

        with pytest.raises(ToolError) as exc_info:
            await get_network_stats()

        assert json.loads(str(exc_info.value))["code"] == "NETWORK_ERROR"


class TestGetUserOverview:
    """Test suite for getUserOverview."""

    @pytest.fixture
    def overview(self):
        return {
            "username": "satoshi",
            "currency": "BTC",
            "hashrate": {"current": 1.2e15, "avg_1h": 1.1e15, "avg_24h": 1.0e15},
            "rewards": {
                "confirmed": "0.01234567",
                "unconfirmed": "0.00012345",
                "last_payout": "0.01000000",
                "last_payout_at": None,
            },
            "workers": {"active": 8, "inactive": 2, "total": 10},
            "updated_at": "2025-01-15T12:00:00Z",
        }

    @pytest.mark.asyncio
    async def test_formats_markdown(self, cached_client, overview):
        cached_client.get_user_overview = AsyncMock(return_value=overview)

        result = await get_user_overview()

        assert result.startswith("## Mining Overview for satoshi")
        assert "- **Current**: 1.20 PH/s" in result
        assert "- **24h Average**: 1.00 PH/s" in result
        assert "- **Confirmed**: 0.01234567" in result
        assert "- **Last Payout At**: Never" in result
        assert "- **Total**: 10" in result

    @pytest.mark.asyncio
    async def test_last_payout_timestamp(self, cached_client, overview):
        overview["rewards"]["last_payout_at"] = "2025-01-14T08:30:00Z"
        cached_client.get_user_overview = AsyncMock(return_value=overview)

        result = await get_user_overview()

        assert "- **Last Payout At**: 2025-01-14 08:30:00 UTC" in result

    @pytest.mark.asyncio
    async def test_unauthorized(self, cached_client):
        cached_client.get_user_overview = AsyncMock(
            side_effect=BraiinsAPIError.from_http_status(401)
        )

        with pytest.raises(ToolError) as exc_info:
            await get_user_overview()

        payload = json.loads(str(exc_info.value))
        assert payload["code"] == "UNAUTHORIZED"
        assert payload["message"] == "Invalid or missing API token"
