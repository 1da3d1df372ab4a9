# SPDX-FileCopyrightText: Copyright (c) 2025-2026 NVIDIA CORPORATION & AFFILIATES. All rights reserved.
# SPDX-License-Identifier: Apache-2.0
"""Conversion of distribution values into bucketed histograms."""

import math
from datetime import datetime

from tsharvest.common.constants import (
    MEASUREMENT_TAG_KEY,
    OVERFLOW_BUCKET_BOUND,
    UNDERFLOW_BUCKET_BOUND,
)
from tsharvest.common.enums import MetricKind, MetricValueType
from tsharvest.common.mixins import HarvestLoggerMixin
from tsharvest.common.models import BucketOptions, Distribution, Metric
from tsharvest.harvest.series_grouper import SeriesGrouper


def format_bucket_bound(value: float) -> str:
    """Format a bucket upper bound as a histogram key.

    Uses scientific notation with the fewest digits that still round-trip to the
    same float, and at least one decimal: `1.0e+00`, `2.5e+01`, `1.0e+128`.
    Keys are therefore not fixed-precision and may differ in length. A fixed
    precision would map close bounds, such as those of fine exponential layouts,
    to the same key.
    """
    if not math.isfinite(value):
        return f"{value:e}"
    for precision in range(1, 18):
        formatted = f"{value:.{precision}e}"
        if float(formatted) == value:
            return formatted
    return f"{value:.17e}"


def bucket_count(options: BucketOptions) -> int:
    """Number of buckets of a layout, underflow and overflow included."""
    if options.linear_buckets is not None:
        return options.linear_buckets.num_finite_buckets + 2
    if options.exponential_buckets is not None:
        return options.exponential_buckets.num_finite_buckets + 2
    if options.explicit_buckets is not None:
        return len(options.explicit_buckets.bounds) + 1
    return 1


def bucket_upper_bound(options: BucketOptions, index: int, num_buckets: int) -> float:
    """Upper bound reported for the bucket at `index`.

    The first bucket reports zero and the last (overflow) bucket a huge sentinel.
    """
    if index == 0:
        return UNDERFLOW_BUCKET_BOUND
    if index == num_buckets - 1:
        return OVERFLOW_BUCKET_BOUND
    if options.linear_buckets is not None:
        linear = options.linear_buckets
        return linear.offset + linear.width * index
    if options.exponential_buckets is not None:
        exponential = options.exponential_buckets
        try:
            return exponential.scale * exponential.growth_factor**index
        except OverflowError:
            return math.inf
    return options.explicit_buckets.bounds[index]


def distribution_to_histogram(distribution: Distribution) -> dict[str, int]:
    """Map each non-empty bucket's formatted upper bound to its count.

    Counts are per bucket, not cumulative. The API may omit trailing empty
    buckets, so missing counts are treated as zero.
    """
    options = distribution.bucket_options
    num_buckets = bucket_count(options)
    histogram: dict[str, int] = {}
    for index, count in enumerate(distribution.bucket_counts[:num_buckets]):
        if count > 0:
            bound = bucket_upper_bound(options, index, num_buckets)
            histogram[format_bucket_bound(bound)] = count
    return histogram


class DistributionConverter(HarvestLoggerMixin):
    """Writes distribution samples as summary fields plus one histogram metric."""

    def __init__(self, grouper: SeriesGrouper, **kwargs) -> None:
        super().__init__(**kwargs)
        self.grouper = grouper

    async def add_distribution(
        self,
        distribution: Distribution,
        measurement: str,
        field_key: str,
        tags: dict[str, str],
        timestamp: datetime,
        metric_kind: MetricKind,
    ) -> None:
        """Add the summary fields of a distribution and its histogram.

        The histogram is named after the field key and tagged with the measurement
        so it can be told apart from histograms of other measurements. It is only
        emitted when at least one bucket has a count.
        """
        summary = {
            f"{field_key}_count": distribution.count,
            f"{field_key}_mean": distribution.mean,
            f"{field_key}_sum_of_squared_deviation": distribution.sum_of_squared_deviation,
        }
        if distribution.range is not None:
            summary[f"{field_key}_range_min"] = distribution.range.min
            summary[f"{field_key}_range_max"] = distribution.range.max
        for field, value in summary.items():
            await self.grouper.add(measurement, tags, timestamp, field, value)

        histogram = distribution_to_histogram(distribution)
        if not histogram:
            self.trace(lambda: f"Distribution {measurement}/{field_key} has no buckets")
            return

        await self.grouper.add_metric(
            Metric(
                name=field_key,
                tags={**tags, MEASUREMENT_TAG_KEY: measurement},
                fields=histogram,
                timestamp=timestamp,
                type=(
                    MetricValueType.CUMULATIVE_HISTOGRAM
                    if metric_kind == MetricKind.CUMULATIVE
                    else MetricValueType.HISTOGRAM
                ),
            )
        )
