# SPDX-FileCopyrightText: Copyright (c) 2025-2026 NVIDIA CORPORATION & AFFILIATES. All rights reserved.
# SPDX-License-Identifier: Apache-2.0

from tsharvest.common.models.base_models import HarvestBaseModel, MonitoringAPIModel
from tsharvest.common.models.error_models import ErrorDetails, ErrorDetailsCount
from tsharvest.common.models.metric_models import FieldValue, Metric, Sample
from tsharvest.common.models.monitoring_models import (
    Aggregation,
    BoolValue,
    BucketOptions,
    Distribution,
    DistributionValue,
    DoubleValue,
    ExplicitBuckets,
    ExponentialBuckets,
    Int64Value,
    LinearBuckets,
    ListMetricDescriptorsResponse,
    ListTimeSeriesRequest,
    ListTimeSeriesResponse,
    MetricDescriptor,
    MonitoredResource,
    Point,
    Range,
    SeriesMetric,
    StringValue,
    TimeInterval,
    TimeSeries,
    TypedValue,
)

__all__ = [
    "Aggregation",
    "BoolValue",
    "BucketOptions",
    "Distribution",
    "DistributionValue",
    "DoubleValue",
    "ErrorDetails",
    "ErrorDetailsCount",
    "ExplicitBuckets",
    "ExponentialBuckets",
    "FieldValue",
    "HarvestBaseModel",
    "Int64Value",
    "LinearBuckets",
    "ListMetricDescriptorsResponse",
    "ListTimeSeriesRequest",
    "ListTimeSeriesResponse",
    "Metric",
    "MetricDescriptor",
    "MonitoredResource",
    "MonitoringAPIModel",
    "Point",
    "Range",
    "Sample",
    "SeriesMetric",
    "StringValue",
    "TimeInterval",
    "TimeSeries",
    "TypedValue",
]
