"""
Pydantic input models for the Braiins Pool MCP tools.

Tool arguments use camelCase (as exposed to MCP clients) and are
converted to the snake_case query parameters the API expects by
each model's to_api_params().
"""
from datetime import datetime
from typing import Literal, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

WorkerStatusFilter = Literal["active", "inactive", "all"]
WorkerSort = Literal["hashrate_desc", "hashrate_asc", "name_asc", "name_desc", "last_share"]
HashrateGranularity = Literal["minute", "hour", "day"]
RewardsGranularity = Literal["hour", "day", "week"]


def _parse_iso_datetime(value: str) -> datetime:
    parsed = datetime.fromisoformat(value.replace("Z", "+00:00"))
    if parsed.tzinfo is None:
        raise ValueError("timestamp must include a timezone offset")
    return parsed


class _NoParamsInput(BaseModel):
    """Endpoints without parameters reject unexpected arguments."""

    model_config = ConfigDict(extra="forbid")


class GetUserOverviewInput(_NoParamsInput):
    """No parameters: the API token identifies the user."""


class GetPoolStatsInput(_NoParamsInput):
    """No parameters: returns global pool statistics."""


class GetNetworkStatsInput(_NoParamsInput):
    """No parameters: returns Bitcoin network statistics."""


class ListWorkersInput(BaseModel):
    """Input schema for listWorkers: pagination, filtering and sorting."""

    model_config = ConfigDict(populate_by_name=True)

    page: int = Field(1, ge=1, description="Page number (starts at 1)")
    page_size: int = Field(
        50,
        ge=1,
        le=200,
        alias="pageSize",
        description="Number of workers per page (max 200)",
    )
    status: WorkerStatusFilter = Field(
        "all",
        description="Filter by worker status: active, inactive, or all",
    )
    search: Optional[str] = Field(
        None,
        max_length=100,
        description="Search by worker name (partial match)",
    )
    sort_by: Optional[WorkerSort] = Field(
        None,
        alias="sortBy",
        description="Sort order for results",
    )

    def to_api_params(self) -> dict[str, str | int]:
        """
        API query parameters; "all" status and empty search are omitted.

        Example:
            >>> ListWorkersInput(pageSize=10, status="active").to_api_params()
            {'page': 1, 'page_size': 10, 'status': 'active'}
        """
        params: dict[str, str | int] = {"page": self.page, "page_size": self.page_size}

        if self.status != "all":
            params["status"] = self.status

        if self.search:
            params["search"] = self.search

        if self.sort_by is not None:
            params["sort_by"] = self.sort_by

        return params


class GetWorkerDetailsInput(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    worker_id: str = Field(
        ...,
        min_length=1,
        max_length=100,
        alias="workerId",
        description="Unique worker identifier",
    )


class _TimeRangeInput(BaseModel):
    """Optional ISO 8601 time window; from must precede to when both are set."""

    model_config = ConfigDict(populate_by_name=True)

    from_: Optional[str] = Field(None, alias="from", description="Start timestamp (ISO 8601)")
    to: Optional[str] = Field(None, description="End timestamp (ISO 8601)")

    @field_validator("from_", "to")
    @classmethod
    def validate_timestamp(cls, v: Optional[str]) -> Optional[str]:
        if v is None:
            return v
        try:
            _parse_iso_datetime(v)
        except ValueError as e:
            raise ValueError(f"must be an ISO 8601 datetime with offset: {e}") from e
        return v

    @model_validator(mode="after")
    def validate_range(self) -> "_TimeRangeInput":
        if self.from_ and self.to:
            if _parse_iso_datetime(self.from_) >= _parse_iso_datetime(self.to):
                raise ValueError("from timestamp must be before to timestamp")
        return self

    def _time_params(self) -> dict[str, str]:
        params: dict[str, str] = {}
        if self.from_:
            params["from"] = self.from_
        if self.to:
            params["to"] = self.to
        return params


class GetWorkerHashrateInput(_TimeRangeInput):
    worker_id: str = Field(
        ...,
        min_length=1,
        max_length=100,
        alias="workerId",
        description="Unique worker identifier",
    )
    granularity: Optional[HashrateGranularity] = Field(
        None,
        description="Data point granularity: minute, hour, or day",
    )

    def to_api_params(self) -> dict[str, str]:
        params = self._time_params()
        if self.granularity:
            params["granularity"] = self.granularity
        return params


class GetUserRewardsInput(_TimeRangeInput):
    granularity: Optional[RewardsGranularity] = Field(
        None,
        description="Data point granularity: hour, day, or week",
    )

    def to_api_params(self) -> dict[str, str]:
        params = self._time_params()
        if self.granularity:
            params["granularity"] = self.granularity
        return params
