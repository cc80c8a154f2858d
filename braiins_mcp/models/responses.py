"""
Pydantic response models for the Braiins Pool API.

Each model mirrors one endpoint's JSON body and is used by the tools to
validate upstream data before formatting it. Hashrates are in H/s and
BTC amounts are strings to preserve decimal precision.
"""
from datetime import datetime
from typing import Literal, Optional

from pydantic import BaseModel, Field

WorkerStatus = Literal["active", "inactive", "disabled"]


# ---------------------------------------------------------------------------
# GET /user/overview
# ---------------------------------------------------------------------------


class HashrateSummary(BaseModel):
    current: float = Field(..., ge=0, description="Current hashrate in H/s")
    avg_1h: float = Field(..., ge=0, description="1-hour average hashrate in H/s")
    avg_24h: float = Field(..., ge=0, description="24-hour average hashrate in H/s")


class RewardsSummary(BaseModel):
    confirmed: str = Field(..., description="Confirmed rewards (BTC)")
    unconfirmed: str = Field(..., description="Unconfirmed/pending rewards (BTC)")
    last_payout: str = Field(..., description="Last payout amount (BTC)")
    last_payout_at: Optional[datetime] = Field(None, description="Last payout timestamp")


class WorkerCounts(BaseModel):
    active: int = Field(..., ge=0)
    inactive: int = Field(..., ge=0)
    total: int = Field(..., ge=0)


class UserOverviewResponse(BaseModel):
    """Account summary returned by GET /user/overview."""

    username: str = Field(..., min_length=1)
    currency: str = "BTC"
    hashrate: HashrateSummary
    rewards: RewardsSummary
    workers: WorkerCounts
    updated_at: datetime


# ---------------------------------------------------------------------------
# GET /workers
# ---------------------------------------------------------------------------


class WorkerHashrate(BaseModel):
    current: float = Field(..., ge=0)
    avg_24h: float = Field(..., ge=0)


class WorkerShares(BaseModel):
    valid: int = Field(..., ge=0)
    invalid: int = Field(..., ge=0)


class Worker(BaseModel):
    id: str = Field(..., min_length=1)
    name: str
    status: WorkerStatus
    hashrate: WorkerHashrate
    shares: WorkerShares
    last_share_at: Optional[datetime] = None
    location: Optional[str] = None
    tags: Optional[list[str]] = None


class ListWorkersResponse(BaseModel):
    """One page of workers returned by GET /workers."""

    page: int = Field(..., ge=1)
    page_size: int = Field(..., ge=1)
    total: int = Field(..., ge=0)
    workers: list[Worker]


# ---------------------------------------------------------------------------
# GET /workers/{id}
# ---------------------------------------------------------------------------


class WorkerSharesDetail(BaseModel):
    valid: int = Field(..., ge=0)
    invalid: int = Field(..., ge=0)
    stale: int = Field(..., ge=0)


class WorkerHardware(BaseModel):
    model: str = Field(..., description="Hardware model (e.g., Antminer S19 Pro)")
    firmware: str
    power_mode: Optional[str] = None


class Temperature(BaseModel):
    avg: float
    max: float
    unit: Literal["C", "F"] = "C"


class WorkerEnvironment(BaseModel):
    temperature: Temperature


class WorkerDetailsResponse(BaseModel):
    """Single worker returned by GET /workers/{id}."""

    id: str = Field(..., min_length=1)
    name: str
    status: WorkerStatus
    hashrate: HashrateSummary
    shares: WorkerSharesDetail
    hardware: Optional[WorkerHardware] = None
    environment: Optional[WorkerEnvironment] = None
    last_share_at: Optional[datetime] = None
    created_at: datetime
    updated_at: datetime


# ---------------------------------------------------------------------------
# GET /workers/{id}/hashrate
# ---------------------------------------------------------------------------


class HashratePoint(BaseModel):
    timestamp: datetime
    hashrate: float = Field(..., ge=0)


class WorkerHashrateResponse(BaseModel):
    worker_id: str = Field(..., min_length=1)
    points: list[HashratePoint]


# ---------------------------------------------------------------------------
# GET /user/rewards
# ---------------------------------------------------------------------------

BTC_AMOUNT_PATTERN = r"^\d+\.\d{1,8}$"


class RewardsPoint(BaseModel):
    timestamp: datetime
    confirmed: str = Field(..., pattern=BTC_AMOUNT_PATTERN)
    unconfirmed: str = Field(..., pattern=BTC_AMOUNT_PATTERN)
    payout: str = Field(..., pattern=BTC_AMOUNT_PATTERN)


class UserRewardsResponse(BaseModel):
    currency: str
    points: list[RewardsPoint]


# ---------------------------------------------------------------------------
# GET /pool/stats
# ---------------------------------------------------------------------------


class LastBlock(BaseModel):
    height: int = Field(..., ge=0)
    found_at: datetime
    reward: str = Field(..., description="Block reward in BTC")


class Luck(BaseModel):
    window_blocks: int = Field(..., gt=0)
    value: float = Field(..., description="Luck value (>1 = lucky, <1 = unlucky)")


class PoolStatsResponse(BaseModel):
    coin: str
    pool_hashrate: float = Field(..., ge=0)
    workers_active: int = Field(..., ge=0)
    last_block: LastBlock
    luck: Luck
    updated_at: datetime


# ---------------------------------------------------------------------------
# GET /network/stats
# ---------------------------------------------------------------------------


class NetworkStatsResponse(BaseModel):
    coin: str
    difficulty: float = Field(..., ge=0)
    hashrate_estimate: float = Field(..., ge=0)
    block_time_target: int = Field(..., gt=0)
    block_time_avg: float = Field(..., gt=0)
    next_difficulty_change_eta: datetime


# ---------------------------------------------------------------------------
# Server payloads
# ---------------------------------------------------------------------------


class HealthCheckResponse(BaseModel):
    """
    Health check response.

    Used to verify the server is running and to report cache health.
    """

    status: str = Field(
        ...,
        description="Overall health status (healthy, degraded, unhealthy)",
    )
    version: str = Field(
        ...,
        description="Server version",
    )
    components: dict[str, str] = Field(
        ...,
        description="Health status of individual components",
    )
    cache_stats: dict[str, float] = Field(
        default_factory=dict,
        description="Cache hit/miss/error counters and hit ratio",
    )

    model_config = {
        "json_schema_extra": {
            "example": {
                "status": "healthy",
                "version": "0.1.0",
                "components": {"server": "healthy", "redis": "healthy"},
                "cache_stats": {"hits": 12, "misses": 3, "errors": 0, "ratio": 0.8},
            }
        }
    }
