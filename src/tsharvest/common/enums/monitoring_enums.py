# SPDX-FileCopyrightText: Copyright (c) 2025-2026 NVIDIA CORPORATION & AFFILIATES. All rights reserved.
# SPDX-License-Identifier: Apache-2.0

from tsharvest.common.enums.base_enums import CaseInsensitiveStrEnum


class MetricKind(CaseInsensitiveStrEnum):
    """Cloud Monitoring metric kinds, as reported on descriptors and time series.

    See: https://cloud.google.com/monitoring/api/ref_v3/rest/v3/projects.metricDescriptors#MetricKind
    """

    METRIC_KIND_UNSPECIFIED = "METRIC_KIND_UNSPECIFIED"
    """Do not use this default value."""

    GAUGE = "GAUGE"
    """An instantaneous measurement of a value."""

    DELTA = "DELTA"
    """The change in a value during a time interval."""

    CUMULATIVE = "CUMULATIVE"
    """A value accumulated over a time interval."""

    @property
    def tag_value(self) -> str:
        """Value used for the `metric_kind` tag on harvested metrics."""
        if self == MetricKind.METRIC_KIND_UNSPECIFIED:
            return "unspecified"
        return self.value.lower()


class ValueType(CaseInsensitiveStrEnum):
    """Cloud Monitoring value types of a single data point."""

    VALUE_TYPE_UNSPECIFIED = "VALUE_TYPE_UNSPECIFIED"
    BOOL = "BOOL"
    INT64 = "INT64"
    DOUBLE = "DOUBLE"
    STRING = "STRING"
    DISTRIBUTION = "DISTRIBUTION"
    MONEY = "MONEY"


class Aligner(CaseInsensitiveStrEnum):
    """Per-series aligners that can be requested for distribution metric types.

    An aligner collapses the points of a single time series inside one alignment
    period into a single derived point.
    See: https://cloud.google.com/monitoring/api/ref_v3/rest/v3/projects.alertPolicies#Aligner
    """

    ALIGN_NONE = "ALIGN_NONE"
    ALIGN_DELTA = "ALIGN_DELTA"
    ALIGN_RATE = "ALIGN_RATE"
    ALIGN_INTERPOLATE = "ALIGN_INTERPOLATE"
    ALIGN_NEXT_OLDER = "ALIGN_NEXT_OLDER"
    ALIGN_MIN = "ALIGN_MIN"
    ALIGN_MAX = "ALIGN_MAX"
    ALIGN_MEAN = "ALIGN_MEAN"
    ALIGN_COUNT = "ALIGN_COUNT"
    ALIGN_SUM = "ALIGN_SUM"
    ALIGN_STDDEV = "ALIGN_STDDEV"
    ALIGN_COUNT_TRUE = "ALIGN_COUNT_TRUE"
    ALIGN_COUNT_FALSE = "ALIGN_COUNT_FALSE"
    ALIGN_FRACTION_TRUE = "ALIGN_FRACTION_TRUE"
    ALIGN_PERCENTILE_99 = "ALIGN_PERCENTILE_99"
    ALIGN_PERCENTILE_95 = "ALIGN_PERCENTILE_95"
    ALIGN_PERCENTILE_50 = "ALIGN_PERCENTILE_50"
    ALIGN_PERCENTILE_05 = "ALIGN_PERCENTILE_05"
    ALIGN_PERCENT_CHANGE = "ALIGN_PERCENT_CHANGE"


class MetricValueType(CaseInsensitiveStrEnum):
    """Type of a harvested metric handed to the sink."""

    UNTYPED = "untyped"
    """Plain metric whose fields are scalar values."""

    HISTOGRAM = "histogram"
    """Metric whose fields are bucket upper bounds mapped to counts."""

    CUMULATIVE_HISTOGRAM = "cumulative_histogram"
    """Histogram whose counts accumulate since the series start time."""
