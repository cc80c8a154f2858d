"""
Tests for the listWorkers, getWorkerDetails, getWorkerHashrate and
getUserRewards tools.
"""

import json
from datetime import datetime, timedelta, timezone
from unittest.mock import AsyncMock, MagicMock, patch

import pytest
from mcp.server.fastmcp.exceptions import ToolError

from braiins_mcp.api.exceptions import BraiinsAPIError
from braiins_mcp.models.inputs import (
    GetUserRewardsInput,
    GetWorkerDetailsInput,
    GetWorkerHashrateInput,
    ListWorkersInput,
)
from braiins_mcp.tools.get_user_rewards import get_user_rewards
from braiins_mcp.tools.get_worker_details import get_worker_details
from braiins_mcp.tools.get_worker_hashrate import get_worker_hashrate
from braiins_mcp.tools.list_workers import list_workers


def iso_ago(**delta) -> str:
    return (datetime.now(timezone.utc) - timedelta(**delta)).isoformat()


@pytest.fixture
def cached_client():
    client = MagicMock()
    modules = [
        "braiins_mcp.tools.list_workers",
        "braiins_mcp.tools.get_worker_details",
        "braiins_mcp.tools.get_worker_hashrate",
        "braiins_mcp.tools.get_user_rewards",
    ]
    patchers = [patch(f"{m}.get_cached_client", return_value=client) for m in modules]
    for p in patchers:
        p.start()
    yield client
    for p in patchers:
        p.stop()


def make_worker(worker_id: str, status: str = "active", last_share_at=None, avg_24h: float = 1.1e14):
    return {
        "id": worker_id,
        "name": f"{worker_id}.miner",
        "status": status,
        "hashrate": {"current": 1.0e14, "avg_24h": avg_24h},
        "shares": {"valid": 1000, "invalid": 3},
        "last_share_at": last_share_at,
    }


class TestListWorkers:
    """Test suite for listWorkers."""

    @pytest.mark.asyncio
    async def test_formats_table(self, cached_client):
        cached_client.list_workers = AsyncMock(
            return_value={
                "page": 1,
                "page_size": 50,
                "total": 2,
                "workers": [
                    make_worker("rig-01", last_share_at=iso_ago(minutes=5)),
                    make_worker("rig-02", status="inactive"),
                ],
            }
        )

        result = await list_workers(ListWorkersInput())

        assert result.startswith("## Workers (Page 1 of 1)")
        assert "**Total workers**: 2 | **Showing**: 2" in result
        assert "| rig-01.miner | 🟢 Active | 110.00 TH/s | 5m ago |" in result
        assert "| rig-02.miner | 🔴 Inactive | 110.00 TH/s | Never |" in result
        assert "Use `page` parameter" not in result

    @pytest.mark.asyncio
    async def test_api_params_forwarded(self, cached_client):
        cached_client.list_workers = AsyncMock(
            return_value={"page": 2, "page_size": 10, "total": 0, "workers": []}
        )

        await list_workers(ListWorkersInput(page=2, pageSize=10, status="active", sortBy="name_asc"))

        cached_client.list_workers.assert_awaited_once_with(
            {"page": 2, "page_size": 10, "status": "active", "sort_by": "name_asc"}
        )

    @pytest.mark.asyncio
    async def test_empty_page(self, cached_client):
        cached_client.list_workers = AsyncMock(
            return_value={"page": 1, "page_size": 50, "total": 0, "workers": []}
        )

        result = await list_workers(ListWorkersInput(search="nothing"))

        assert "*No workers found matching your criteria.*" in result

    @pytest.mark.asyncio
    async def test_pagination_hint(self, cached_client):
        cached_client.list_workers = AsyncMock(
            return_value={
                "page": 2,
                "page_size": 1,
                "total": 3,
                "workers": [make_worker("rig-02")],
            }
        )

        result = await list_workers(ListWorkersInput(page=2, pageSize=1))

        assert result.startswith("## Workers (Page 2 of 3)")
        assert "*Page 2/3. Use `page` parameter to navigate.*" in result

    @pytest.mark.asyncio
    async def test_invalid_response_returns_raw_json(self, cached_client):
        raw = {"workers": "not-a-list"}
        cached_client.list_workers = AsyncMock(return_value=raw)

        result = await list_workers(ListWorkersInput())

        assert json.loads(result) == raw


class TestGetWorkerDetails:
    """Test suite for getWorkerDetails."""

    @pytest.fixture
    def details(self):
        return {
            "id": "rig-01",
            "name": "rig-01.miner",
            "status": "active",
            "hashrate": {"current": 1.1e14, "avg_1h": 1.05e14, "avg_24h": 1.0e14},
            "shares": {"valid": 990, "invalid": 5, "stale": 5},
            "hardware": {"model": "Antminer S19 Pro", "firmware": "Braiins OS+ 23.03", "power_mode": "eco"},
            "environment": {"temperature": {"avg": 65.25, "max": 78.0, "unit": "C"}},
            "last_share_at": iso_ago(seconds=10),
            "created_at": "2024-06-01T00:00:00Z",
            "updated_at": "2025-01-15T12:00:00Z",
        }

    @pytest.mark.asyncio
    async def test_formats_markdown(self, cached_client, details):
        cached_client.get_worker_details = AsyncMock(return_value=details)

        result = await get_worker_details(GetWorkerDetailsInput(workerId="rig-01"))

        cached_client.get_worker_details.assert_awaited_once_with("rig-01")
        assert result.startswith("## Worker: rig-01.miner")
        assert "**ID**: `rig-01`" in result
        assert "**Status**: 🟢 Active" in result
        assert "**Last Share**: Just now" in result
        assert "| **Rejection Rate** | 1.00% |" in result
        assert "- **Model**: Antminer S19 Pro" in result
        assert "- **Power Mode**: eco" in result
        assert "- **Temperature**: 65.2°C avg / 78.0°C max" in result
        assert "*Created: 2024-06-01 00:00:00 UTC*" in result

    @pytest.mark.asyncio
    async def test_optional_sections_omitted(self, cached_client, details):
        del details["hardware"]
        del details["environment"]
        cached_client.get_worker_details = AsyncMock(return_value=details)

        result = await get_worker_details(GetWorkerDetailsInput(workerId="rig-01"))

        assert "### Hardware" not in result
        assert "### Environment" not in result

    @pytest.mark.asyncio
    async def test_not_found(self, cached_client):
        cached_client.get_worker_details = AsyncMock(
            side_effect=BraiinsAPIError.from_http_status(404, "Worker not found")
        )

        with pytest.raises(ToolError) as exc_info:
            await get_worker_details(GetWorkerDetailsInput(workerId="ghost"))

        payload = json.loads(str(exc_info.value))
        assert payload["code"] == "NOT_FOUND"
        assert payload["message"] == "Worker not found"


class TestGetWorkerHashrate:
    """Test suite for getWorkerHashrate."""

    @pytest.mark.asyncio
    async def test_formats_statistics(self, cached_client):
        points = [
            {"timestamp": f"2025-01-15T{hour:02d}:00:00Z", "hashrate": rate}
            for hour, rate in enumerate([1.0e14, 2.0e14, 3.0e14])
        ]
        cached_client.get_worker_hashrate = AsyncMock(
            return_value={"worker_id": "rig-01", "points": points}
        )

        result = await get_worker_hashrate(
            GetWorkerHashrateInput(workerId="rig-01", granularity="hour")
        )

        cached_client.get_worker_hashrate.assert_awaited_once_with("rig-01", {"granularity": "hour"})
        assert result.startswith("## Hashrate History: rig-01")
        assert "**Period**: Jan 15, 00:00 → Jan 15, 02:00" in result
        assert "**Data Points**: 3 (hour)" in result
        assert "| Latest | 300.00 TH/s |" in result
        assert "| Average | 200.00 TH/s |" in result
        assert "| Minimum | 100.00 TH/s |" in result
        assert "| Maximum | 300.00 TH/s |" in result
        assert "▁▅█" in result

    @pytest.mark.asyncio
    async def test_no_points(self, cached_client):
        cached_client.get_worker_hashrate = AsyncMock(return_value={"worker_id": "rig-01", "points": []})

        result = await get_worker_hashrate(GetWorkerHashrateInput(workerId="rig-01"))

        assert "*No hashrate data available for the specified time range.*" in result

    @pytest.mark.asyncio
    async def test_only_last_ten_points_listed(self, cached_client):
        points = [
            {"timestamp": f"2025-01-15T{hour:02d}:00:00Z", "hashrate": 1.0e14}
            for hour in range(15)
        ]
        cached_client.get_worker_hashrate = AsyncMock(
            return_value={"worker_id": "rig-01", "points": points}
        )

        result = await get_worker_hashrate(GetWorkerHashrateInput(workerId="rig-01"))

        assert "*Showing last 10 of 15 points*" in result
        assert "| Jan 15, 04:00 |" not in result
        assert "| Jan 15, 05:00 |" in result


class TestGetUserRewards:
    """Test suite for getUserRewards."""

    @pytest.mark.asyncio
    async def test_formats_totals(self, cached_client):
        cached_client.get_user_rewards = AsyncMock(
            return_value={
                "currency": "BTC",
                "points": [
                    {
                        "timestamp": "2025-01-13T00:00:00Z",
                        "confirmed": "0.00100000",
                        "unconfirmed": "0.00001000",
                        "payout": "0.00000000",
                    },
                    {
                        "timestamp": "2025-01-14T00:00:00Z",
                        "confirmed": "0.00200000",
                        "unconfirmed": "0.00000000",
                        "payout": "0.00300000",
                    },
                ],
            }
        )

        result = await get_user_rewards(GetUserRewardsInput(granularity="day"))

        cached_client.get_user_rewards.assert_awaited_once_with({"granularity": "day"})
        assert result.startswith("## Rewards History (BTC)")
        assert "**Period**: Jan 13, 2025 → Jan 14, 2025" in result
        assert "| Confirmed | 0.00300000 BTC |" in result
        assert "| Unconfirmed | 0.00001000 BTC |" in result
        assert "| Payouts | 0.00300000 BTC |" in result
        assert "| Jan 14, 2025 | 0.00200000 | 0.00000000 | 0.00300000 |" in result

    @pytest.mark.asyncio
    async def test_no_points(self, cached_client):
        cached_client.get_user_rewards = AsyncMock(return_value={"currency": "BTC", "points": []})

        result = await get_user_rewards(GetUserRewardsInput())

        assert "*No rewards data available for the specified time range.*" in result

    @pytest.mark.asyncio
    async def test_malformed_amount_returns_raw_json(self, cached_client):
        raw = {
            "currency": "BTC",
            "points": [
                {"timestamp": "2025-01-13T00:00:00Z", "confirmed": "1e-3", "unconfirmed": "0.0", "payout": "0.0"}
            ],
        }
        cached_client.get_user_rewards = AsyncMock(return_value=raw)

        result = await get_user_rewards(GetUserRewardsInput())

        assert json.loads(result) == raw
