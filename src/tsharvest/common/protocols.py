# SPDX-FileCopyrightText: Copyright (c) 2025-2026 NVIDIA CORPORATION & AFFILIATES. All rights reserved.
# SPDX-License-Identifier: Apache-2.0

from __future__ import annotations

from collections.abc import AsyncIterator
from typing import TYPE_CHECKING, Protocol, runtime_checkable

if TYPE_CHECKING:
    from tsharvest.common.models import (
        ListTimeSeriesRequest,
        Metric,
        MetricDescriptor,
        TimeSeries,
    )


@runtime_checkable
class MetricClientProtocol(Protocol):
    """Paginated listing capability of the monitoring API.

    Awaiting a listing call issues the first request, so a failure to start the
    listing surfaces from the `await`. Iterating the returned async iterator fetches
    further pages lazily; an exception raised while iterating is a mid-stream failure
    and ends the listing early.
    """

    async def list_metric_descriptors(
        self, name: str, filter: str
    ) -> AsyncIterator[MetricDescriptor]:
        """List the metric descriptors of a project matching a filter.

        Args:
            name: Project scope, e.g. `projects/my-project`.
            filter: Monitoring filter, or an empty string for every descriptor.
        """
        ...

    async def list_time_series(
        self, request: ListTimeSeriesRequest
    ) -> AsyncIterator[TimeSeries]:
        """List the time series selected by a request."""
        ...

    async def close(self) -> None:
        """Release the connections held by the client."""
        ...


@runtime_checkable
class AccumulatorProtocol(Protocol):
    """Sink receiving the harvested metrics and the per-fetch errors of a cycle."""

    def add_metric(self, metric: Metric) -> None: ...

    def add_error(self, error: BaseException | None) -> None:
        """Record an error. `None` is accepted and ignored."""
        ...
