# SPDX-FileCopyrightText: Copyright (c) 2025-2026 NVIDIA CORPORATION & AFFILIATES. All rights reserved.
# SPDX-License-Identifier: Apache-2.0
import asyncio
from collections.abc import AsyncIterator
from contextlib import aclosing

from tsharvest.common.exceptions import FetchError
from tsharvest.common.mixins import HarvestLoggerMixin
from tsharvest.common.models import (
    BoolValue,
    DistributionValue,
    FieldValue,
    Sample,
    TimeSeries,
    TypedValue,
)
from tsharvest.common.protocols import MetricClientProtocol
from tsharvest.common.utils import is_cancelled, truncate_to_seconds
from tsharvest.harvest.distribution import DistributionConverter
from tsharvest.harvest.series_grouper import SeriesGrouper
from tsharvest.harvest.timeseries_config import TimeSeriesConfig


def metric_category(measurement: str) -> str:
    """Last path segment of a measurement, or the whole measurement."""
    index = measurement.rfind("/")
    if index > 0:
        return measurement[index + 1 :]
    return measurement


def field_value(value: TypedValue) -> FieldValue:
    """Scalar written to the grouper for a typed value. Booleans become 0 or 1."""
    if isinstance(value, BoolValue):
        return int(value.value)
    return value.value


class TimeSeriesFetcher(HarvestLoggerMixin):
    """Lists the time series of one request config and turns their points into samples."""

    def __init__(self, client: MetricClientProtocol, project: str, **kwargs) -> None:
        super().__init__(**kwargs)
        self.client = client
        self.project = project

    def series_tags(self, series: TimeSeries, config: TimeSeriesConfig) -> dict[str, str]:
        """Tags shared by every point of a series.

        Remote labels may override `resource_type` and `project_id`, but never the
        derived `metric_category` and `metric_kind` tags.
        """
        return {
            "resource_type": series.resource.type,
            "project_id": self.project,
            **series.resource.labels,
            **series.metric.labels,
            "metric_category": metric_category(config.measurement),
            "metric_kind": series.metric_kind.tag_value,
        }

    async def fetch(
        self,
        config: TimeSeriesConfig,
        cancel_event: asyncio.Event | None = None,
    ) -> AsyncIterator[Sample]:
        """Yield a sample for every point of every series, in API order.

        Pages are requested lazily as the samples are consumed. A failure to start
        the listing raises `FetchError`. A failure while paging is logged and ends
        the stream early.
        """
        try:
            listing = await self.client.list_time_series(config.request)
        except Exception as e:
            raise FetchError(config, e) from e

        try:
            async for series in listing:
                tags = self.series_tags(series, config)
                for point in series.points:
                    yield Sample(
                        timestamp=truncate_to_seconds(point.interval.end_time),
                        tags=tags,
                        metric_kind=series.metric_kind,
                        value=point.value,
                    )
                    if is_cancelled(cancel_event):
                        return
                if is_cancelled(cancel_event):
                    return
        except Exception as e:
            self.error(f"Failed iterating time series {config.request.filter!r}: {e!r}")

    async def gather(
        self,
        config: TimeSeriesConfig,
        grouper: SeriesGrouper,
        converter: DistributionConverter,
        cancel_event: asyncio.Event | None = None,
    ) -> None:
        """Fetch the samples of a config and write them to the grouper.

        Distribution samples go through the converter, every other sample is
        written under the config's field key.
        """
        async with aclosing(self.fetch(config, cancel_event)) as samples:
            async for sample in samples:
                if isinstance(sample.value, DistributionValue):
                    await converter.add_distribution(
                        sample.value.value,
                        config.measurement,
                        config.field_key,
                        sample.tags,
                        sample.timestamp,
                        sample.metric_kind,
                    )
                else:
                    await grouper.add(
                        config.measurement,
                        sample.tags,
                        sample.timestamp,
                        config.field_key,
                        field_value(sample.value),
                    )
