# SPDX-FileCopyrightText: Copyright (c) 2025-2026 NVIDIA CORPORATION & AFFILIATES. All rights reserved.
# SPDX-License-Identifier: Apache-2.0
from collections.abc import Iterable
from datetime import datetime, timedelta

from pydantic import Field

from tsharvest.common.config import HarvesterConfig
from tsharvest.common.constants import DEFAULT_FIELD_KEY
from tsharvest.common.enums import Aligner, ValueType
from tsharvest.common.environment import Environment
from tsharvest.common.mixins import HarvestLoggerMixin
from tsharvest.common.models import (
    Aggregation,
    HarvestBaseModel,
    ListTimeSeriesRequest,
    MetricDescriptor,
    TimeInterval,
)
from tsharvest.common.utils import truncate_to_seconds, utc_now
from tsharvest.harvest.discovery import build_time_series_filter


def split_metric_type(metric_type: str) -> tuple[str, str]:
    """Split a metric type into its measurement and field key at the last `/`.

    A type without a usable separator is kept whole as the measurement and gets
    the default field key.
    """
    index = metric_type.rfind("/")
    if index > 0:
        return metric_type[:index], metric_type[index + 1 :]
    return metric_type, DEFAULT_FIELD_KEY


def make_interval(start: datetime, end: datetime) -> TimeInterval:
    """Request interval for a window. The API works at second granularity."""
    return TimeInterval(
        start_time=truncate_to_seconds(start), end_time=truncate_to_seconds(end)
    )


class TimeSeriesConfig(HarvestBaseModel):
    """A time series request together with how its points are named."""

    request: ListTimeSeriesRequest = Field(description="Request issued for this config.")
    measurement: str = Field(description="Measurement the points are grouped under.")
    field_key: str = Field(
        default=DEFAULT_FIELD_KEY,
        description="Field the point values are written to, or the prefix of the "
        "fields derived from a distribution.",
    )

    def set_interval(self, start: datetime, end: datetime) -> None:
        self.request.interval = make_interval(start, end)

    def init_for_aggregate(self, aligner: Aligner, alignment_period: int) -> None:
        """Turn this config into a request for an aligned aggregate of the series.

        The field key is suffixed with the lowercase aligner name so each aligner
        gets its own field.
        """
        self.request.aggregation = Aggregation(
            alignment_period=alignment_period, per_series_aligner=aligner
        )
        self.field_key = f"{self.field_key}_{aligner.value.lower()}"


class TimeSeriesConfigBuilder:
    """Turns discovered metric descriptors into time series request configs."""

    def __init__(
        self, config: HarvesterConfig, alignment_period: int | None = None
    ) -> None:
        self.config = config
        self.alignment_period = (
            alignment_period or Environment.HARVEST.ALIGNMENT_PERIOD
        )

    def new_config(
        self, metric_type: str, start: datetime, end: datetime
    ) -> TimeSeriesConfig:
        measurement, field_key = split_metric_type(metric_type)
        return TimeSeriesConfig(
            request=ListTimeSeriesRequest(
                name=self.config.project_name,
                filter=build_time_series_filter(metric_type, self.config.filter),
                interval=make_interval(start, end),
            ),
            measurement=measurement,
            field_key=field_key,
        )

    def build(
        self,
        descriptors: Iterable[MetricDescriptor],
        start: datetime,
        end: datetime,
    ) -> list[TimeSeriesConfig]:
        """Build the configs of every descriptor, preserving descriptor order.

        Distribution types get one raw bucket config (when enabled) followed by
        one config per configured aligner. Every other type gets one config.
        """
        configs: list[TimeSeriesConfig] = []
        for descriptor in descriptors:
            if descriptor.value_type != ValueType.DISTRIBUTION:
                configs.append(self.new_config(descriptor.type, start, end))
                continue

            if self.config.gather_raw_distribution_buckets:
                configs.append(self.new_config(descriptor.type, start, end))
            for aligner in self.config.distribution_aggregation_aligners:
                config = self.new_config(descriptor.type, start, end)
                config.init_for_aggregate(aligner, self.alignment_period)
                configs.append(config)
        return configs


class ConfigCache(HarvestLoggerMixin):
    """Request configs reused across cycles until their time to live runs out.

    The cache is invalidated as a whole. A hit only moves the interval of every
    cached config to the current window.
    """

    def __init__(
        self,
        configs: list[TimeSeriesConfig],
        ttl: timedelta,
        generated: datetime | None = None,
        **kwargs,
    ) -> None:
        super().__init__(**kwargs)
        self.configs = configs
        self.ttl = ttl
        self.generated = generated or utc_now()

    def is_valid(self, now: datetime | None = None) -> bool:
        now = now or utc_now()
        return self.configs is not None and now - self.generated < self.ttl

    def refresh_interval(
        self, start: datetime, end: datetime
    ) -> list[TimeSeriesConfig]:
        """Move every cached config to the given window and return the configs."""
        for config in self.configs:
            config.set_interval(start, end)
        self.trace(
            lambda: f"Reusing {len(self.configs)} cached configs for window {start} - {end}"
        )
        return self.configs
