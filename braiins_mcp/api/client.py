"""
Braiins Pool API client using httpx.

This module provides the BraiinsClient for calling the Braiins Pool
monitoring API with bearer authentication, exponential-backoff retries
for server and transport failures, and translation of failures into
typed BraiinsError subclasses.
"""

import asyncio
from typing import Any, Mapping, Optional
from urllib.parse import quote

import httpx

import structlog

from braiins_mcp.api.exceptions import (
    BraiinsAPIError,
    BraiinsError,
    ErrorCode,
    NetworkError,
    RequestTimeoutError,
)
from braiins_mcp.config import Settings

logger = structlog.get_logger(__name__)

QueryParams = Mapping[str, Any]


class BraiinsClient:
    """
    Async HTTP client for the Braiins Pool API.

    Retries server errors (5xx) and transport failures (connection refused,
    DNS failure, timeout) up to max_retries times, waiting
    retry_base_delay_ms * 2^attempt between attempts. Client errors (4xx)
    fail immediately.

    Attributes:
        max_retries: Additional attempts after the first failure
        retry_base_delay_ms: Base backoff delay in milliseconds

    Example:
        >>> client = BraiinsClient(Settings.from_env())
        >>> overview = await client.get_user_overview()
        >>> await client.close()
    """

    def __init__(
        self,
        settings: Optional[Settings] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ) -> None:
        settings = settings or Settings.from_env()

        self.max_retries = settings.max_retries
        self.retry_base_delay_ms = settings.retry_base_delay_ms

        headers = {"Content-Type": "application/json", "Accept": "application/json"}
        if settings.has_token:
            headers["Authorization"] = f"Bearer {settings.api_token}"

        self._http = httpx.AsyncClient(
            base_url=settings.api_base_url,
            timeout=settings.request_timeout_seconds,
            headers=headers,
            transport=transport,
            event_hooks={
                "request": [self._log_request],
                "response": [self._log_response],
            },
        )

        logger.info(
            "braiins_client_initialized",
            base_url=settings.api_base_url,
            authenticated=settings.has_token,
            max_retries=self.max_retries,
            retry_base_delay_ms=self.retry_base_delay_ms,
        )

    @staticmethod
    async def _log_request(request: httpx.Request) -> None:
        logger.debug("api_request", method=request.method, url=str(request.url))

    @staticmethod
    async def _log_response(response: httpx.Response) -> None:
        logger.debug(
            "api_response",
            status=response.status_code,
            url=str(response.request.url),
        )

    def backoff_delay_ms(self, retry_count: int) -> int:
        """Delay before retry number retry_count + 1: 1s, 2s, 4s with defaults."""
        return self.retry_base_delay_ms * (2**retry_count)

    async def _get(self, path: str, params: Optional[QueryParams] = None) -> Any:
        """
        GET a JSON resource with exponential backoff retry.

        Args:
            path: Endpoint path relative to the base URL
            params: Query parameters passed through verbatim

        Returns:
            Parsed JSON body

        Raises:
            BraiinsAPIError: Upstream returned an error status
            NetworkError: Upstream could not be reached
            RequestTimeoutError: Upstream kept timing out
        """
        retry_count = 0

        while True:
            try:
                response = await self._http.get(path, params=dict(params) if params else None)
                response.raise_for_status()
                return self._parse_body(response, path)

            except httpx.HTTPStatusError as e:
                # Client errors cannot succeed on retry
                if e.response.status_code < 500:
                    logger.warning(
                        "api_error",
                        status=e.response.status_code,
                        url=path,
                    )
                    raise self._translate_status_error(e.response, path) from e
                error: Exception = e

            except httpx.TransportError as e:
                error = e

            if retry_count >= self.max_retries:
                logger.warning(
                    "api_retries_exhausted",
                    url=path,
                    attempts=retry_count + 1,
                    error=str(error),
                    error_type=type(error).__name__,
                )
                raise self._translate_error(error, path) from error

            delay_ms = self.backoff_delay_ms(retry_count)
            logger.info(
                "api_retry",
                url=path,
                attempt=retry_count + 1,
                max_retries=self.max_retries,
                delay_ms=delay_ms,
                error_type=type(error).__name__,
            )

            await asyncio.sleep(delay_ms / 1000)
            retry_count += 1

    @staticmethod
    def _parse_body(response: httpx.Response, path: str) -> Any:
        try:
            return response.json()
        except ValueError as e:
            raise BraiinsAPIError(
                "Braiins API returned a non-JSON response",
                ErrorCode.API_ERROR,
                response.status_code,
                {"url": path, "data": response.text[:500]},
            ) from e

    def _translate_error(self, error: Exception, path: str) -> BraiinsError:
        if isinstance(error, httpx.HTTPStatusError):
            return self._translate_status_error(error.response, path)

        details = {"url": path, "error_type": type(error).__name__}

        if isinstance(error, httpx.TimeoutException):
            return RequestTimeoutError(f"Braiins API request timed out: {error}", details)

        return NetworkError(f"Cannot connect to Braiins API: {error}", details)

    @staticmethod
    def _translate_status_error(response: httpx.Response, path: str) -> BraiinsAPIError:
        try:
            data = response.json()
        except ValueError:
            data = response.text or None

        message = None
        if isinstance(data, dict) and isinstance(data.get("message"), str):
            message = data["message"]

        return BraiinsAPIError.from_http_status(
            response.status_code,
            message,
            {"url": path, "data": data},
        )

    # ------------------------------------------------------------------
    # API methods
    # ------------------------------------------------------------------

    async def get_user_overview(self) -> Any:
        """Account summary: hashrate, rewards and worker counts."""
        return await self._get("/user/overview")

    async def list_workers(self, params: Optional[QueryParams] = None) -> Any:
        """
        Paginated worker list.

        Args:
            params: page, page_size, status, search, sort_by (snake_case)
        """
        return await self._get("/workers", params)

    async def get_worker_details(self, worker_id: str) -> Any:
        """Detailed information for one worker."""
        return await self._get(f"/workers/{quote(worker_id, safe='')}")

    async def get_worker_hashrate(
        self, worker_id: str, params: Optional[QueryParams] = None
    ) -> Any:
        """
        Hashrate timeseries for one worker.

        Args:
            worker_id: Worker identifier
            params: from, to, granularity
        """
        return await self._get(f"/workers/{quote(worker_id, safe='')}/hashrate", params)

    async def get_user_rewards(self, params: Optional[QueryParams] = None) -> Any:
        """Rewards timeseries for the account."""
        return await self._get("/user/rewards", params)

    async def get_pool_stats(self) -> Any:
        """Global pool statistics."""
        return await self._get("/pool/stats")

    async def get_network_stats(self) -> Any:
        """Bitcoin network statistics."""
        return await self._get("/network/stats")

    async def close(self) -> None:
        await self._http.aclose()

    async def __aenter__(self) -> "BraiinsClient":
        return self

    async def __aexit__(self, *exc_info: Any) -> None:
        await self.close()


_client: Optional[BraiinsClient] = None


def get_braiins_client() -> BraiinsClient:
    """Return the process-wide client, creating it from the environment on first use."""
    global _client
    if _client is None:
        _client = BraiinsClient()
    return _client


def reset_braiins_client() -> None:
    """Forget the process-wide client (tests, credential rotation)."""
    global _client
    _client = None
