# SPDX-FileCopyrightText: Copyright (c) 2025-2026 NVIDIA CORPORATION & AFFILIATES. All rights reserved.
# SPDX-License-Identifier: Apache-2.0
"""Client for the Cloud Monitoring v3 REST API.

Implements the paginated listing calls the harvester consumes. Every listing
fetches its first page when awaited and further pages lazily while iterated.
"""

from collections.abc import AsyncIterator, Callable
from typing import Any, TypeVar

import aiohttp
import orjson
from prometheus_client import CollectorRegistry, Counter

from tsharvest.common.constants import SELF_STAT_METRIC_NAME
from tsharvest.common.environment import Environment
from tsharvest.common.exceptions import (
    InitializationError,
    InvalidStateError,
    MonitoringAPIError,
)
from tsharvest.common.mixins import HarvestLoggerMixin
from tsharvest.common.models import (
    ListMetricDescriptorsResponse,
    ListTimeSeriesRequest,
    ListTimeSeriesResponse,
    MetricDescriptor,
    TimeSeries,
)
from tsharvest.common.utils import format_rfc3339

TItem = TypeVar("TItem")


class GoogleMonitoringClient(HarvestLoggerMixin):
    """Lists metric descriptors and time series of a project over REST.

    Args:
        project: Project the client reports its self statistics for.
        access_token: OAuth2 bearer token sent with every request.
        api_url: Base URL of the v3 API.
        page_size: Maximum number of results requested per page.
        connect_timeout: Timeout in seconds for establishing a connection.
        request_timeout: Timeout in seconds for a single page.
        registry: Registry holding the self statistics counters. A private
            registry is created when omitted.
    """

    def __init__(
        self,
        project: str,
        access_token: str,
        api_url: str | None = None,
        page_size: int | None = None,
        connect_timeout: float | None = None,
        request_timeout: float | None = None,
        registry: CollectorRegistry | None = None,
        **kwargs,
    ) -> None:
        super().__init__(**kwargs)
        self.project = project
        self._access_token = access_token
        self.api_url = (api_url or Environment.GCP.API_URL).rstrip("/")
        self.page_size = page_size or Environment.GCP.PAGE_SIZE
        self._connect_timeout = connect_timeout or Environment.GCP.CONNECT_TIMEOUT
        self._request_timeout = request_timeout or Environment.GCP.REQUEST_TIMEOUT
        self._session: aiohttp.ClientSession | None = None

        self.registry = registry or CollectorRegistry()
        self._list_metric_descriptors_calls = Counter(
            "list_metric_descriptors_calls",
            "Number of metric descriptor listings started",
            ["project_id"],
            namespace=SELF_STAT_METRIC_NAME,
            registry=self.registry,
        ).labels(project_id=project)
        self._list_time_series_calls = Counter(
            "list_timeseries_calls",
            "Number of time series listings started",
            ["project_id"],
            namespace=SELF_STAT_METRIC_NAME,
            registry=self.registry,
        ).labels(project_id=project)

    @property
    def list_metric_descriptors_calls(self) -> float:
        return self._sample_value("list_metric_descriptors_calls")

    @property
    def list_time_series_calls(self) -> float:
        return self._sample_value("list_timeseries_calls")

    def _sample_value(self, name: str) -> float:
        value = self.registry.get_sample_value(
            f"{SELF_STAT_METRIC_NAME}_{name}_total", {"project_id": self.project}
        )
        return value or 0.0

    async def initialize(self) -> None:
        """Create the HTTP session shared by every request of this client."""
        if self._session is not None:
            return
        timeout = aiohttp.ClientTimeout(
            total=self._request_timeout,
            connect=self._connect_timeout,
        )
        self._session = aiohttp.ClientSession(
            timeout=timeout,
            headers={
                "Authorization": f"Bearer {self._access_token}",
                "Accept": "application/json",
            },
        )
        self.debug(lambda: f"Initialized monitoring client for {self.api_url}")

    async def close(self) -> None:
        if self._session:
            await self._session.close()
            self._session = None

    async def _get(self, path: str, params: list[tuple[str, str]]) -> dict[str, Any]:
        """GET one page and decode its JSON body.

        Raises:
            InvalidStateError: If the client has not been initialized.
            MonitoringAPIError: If the API answers with a non-success status.
        """
        # Snapshot session to avoid race with close() setting it to None
        session = self._session
        if session is None or session.closed:
            raise InvalidStateError("Monitoring client is not initialized")

        url = f"{self.api_url}/{path}"
        self.trace(lambda: f"GET {url} {params}")
        async with session.get(url, params=params) as response:
            body = await response.read()
            if not 200 <= response.status < 300:
                raise MonitoringAPIError(response.status, _error_message(body))
        return orjson.loads(body) if body else {}

    async def _paginate(
        self,
        path: str,
        params: list[tuple[str, str]],
        parse: Callable[[dict[str, Any]], tuple[list[TItem], str]],
    ) -> AsyncIterator[TItem]:
        """Fetch the first page now and return an iterator over every page's items."""
        items, next_page_token = parse(await self._get(path, params))

        async def _iterate() -> AsyncIterator[TItem]:
            nonlocal items, next_page_token
            while True:
                for item in items:
                    yield item
                if not next_page_token:
                    return
                items, next_page_token = parse(
                    await self._get(path, [*params, ("pageToken", next_page_token)])
                )

        return _iterate()

    async def list_metric_descriptors(
        self, name: str, filter: str
    ) -> AsyncIterator[MetricDescriptor]:
        self._list_metric_descriptors_calls.inc()
        params = [("pageSize", str(self.page_size))]
        if filter:
            params.append(("filter", filter))
        return await self._paginate(
            f"{name}/metricDescriptors", params, _parse_metric_descriptors
        )

    async def list_time_series(
        self, request: ListTimeSeriesRequest
    ) -> AsyncIterator[TimeSeries]:
        self._list_time_series_calls.inc()
        return await self._paginate(
            f"{request.name}/timeSeries",
            _time_series_params(request, self.page_size),
            _parse_time_series,
        )


def _time_series_params(
    request: ListTimeSeriesRequest, page_size: int
) -> list[tuple[str, str]]:
    params = [
        ("filter", request.filter),
        ("interval.endTime", format_rfc3339(request.interval.end_time)),
        ("pageSize", str(page_size)),
    ]
    if request.interval.start_time is not None:
        params.append(
            ("interval.startTime", format_rfc3339(request.interval.start_time))
        )
    if request.aggregation is not None:
        params.append(
            ("aggregation.alignmentPeriod", f"{request.aggregation.alignment_period}s")
        )
        params.append(
            ("aggregation.perSeriesAligner", str(request.aggregation.per_series_aligner))
        )
    return params


def _parse_metric_descriptors(
    page: dict[str, Any],
) -> tuple[list[MetricDescriptor], str]:
    response = ListMetricDescriptorsResponse.model_validate(page)
    return response.metric_descriptors, response.next_page_token


def _parse_time_series(page: dict[str, Any]) -> tuple[list[TimeSeries], str]:
    response = ListTimeSeriesResponse.model_validate(page)
    return response.time_series, response.next_page_token


def _error_message(body: bytes) -> str:
    """Extract the message of a Google API error body, falling back to the raw text."""
    try:
        error = orjson.loads(body).get("error", {})
        if isinstance(error, dict) and error.get("message"):
            return error["message"]
    except (orjson.JSONDecodeError, AttributeError):
        pass
    return body.decode(errors="replace").strip()


async def create_monitoring_client(project: str) -> GoogleMonitoringClient:
    """Create and initialize a REST client from the `TSHARVEST_GCP_*` settings.

    Raises:
        InitializationError: If no access token is configured.
    """
    if not Environment.GCP.ACCESS_TOKEN:
        raise InitializationError(
            "No access token configured for the monitoring API, set TSHARVEST_GCP_ACCESS_TOKEN"
        )
    client = GoogleMonitoringClient(project, Environment.GCP.ACCESS_TOKEN)
    await client.initialize()
    return client
