# SPDX-FileCopyrightText: Copyright (c) 2025-2026 NVIDIA CORPORATION & AFFILIATES. All rights reserved.
# SPDX-License-Identifier: Apache-2.0

from tsharvest.harvest.accumulator import AccumulatorProtocol, MetricAccumulator
from tsharvest.harvest.discovery import (
    MetricTypeDiscovery,
    build_descriptor_filters,
    build_time_series_filter,
    include_exclude,
)
from tsharvest.harvest.distribution import (
    DistributionConverter,
    bucket_count,
    bucket_upper_bound,
    distribution_to_histogram,
    format_bucket_bound,
)
from tsharvest.harvest.fetcher import TimeSeriesFetcher, field_value, metric_category
from tsharvest.harvest.harvester import ClientFactory, TimeSeriesHarvester
from tsharvest.harvest.rate_limiter import RateLimitedDispatcher, RateLimiter
from tsharvest.harvest.series_grouper import SeriesGrouper
from tsharvest.harvest.timeseries_config import (
    ConfigCache,
    TimeSeriesConfig,
    TimeSeriesConfigBuilder,
    make_interval,
    split_metric_type,
)
from tsharvest.harvest.window import WindowScheduler

__all__ = [
    "AccumulatorProtocol",
    "ClientFactory",
    "ConfigCache",
    "DistributionConverter",
    "MetricAccumulator",
    "MetricTypeDiscovery",
    "RateLimitedDispatcher",
    "RateLimiter",
    "SeriesGrouper",
    "TimeSeriesConfig",
    "TimeSeriesConfigBuilder",
    "TimeSeriesFetcher",
    "TimeSeriesHarvester",
    "WindowScheduler",
    "bucket_count",
    "bucket_upper_bound",
    "build_descriptor_filters",
    "build_time_series_filter",
    "distribution_to_histogram",
    "field_value",
    "format_bucket_bound",
    "include_exclude",
    "make_interval",
    "metric_category",
    "split_metric_type",
]
