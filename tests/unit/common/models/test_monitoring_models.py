# SPDX-FileCopyrightText: Copyright (c) 2025-2026 NVIDIA CORPORATION & AFFILIATES. All rights reserved.
# SPDX-License-Identifier: Apache-2.0
from datetime import datetime, timezone

import orjson
import pytest
from pydantic import ValidationError

from tsharvest.common.enums import Aligner, MetricKind, ValueType
from tsharvest.common.models import (
    Aggregation,
    BoolValue,
    BucketOptions,
    DistributionValue,
    DoubleValue,
    Int64Value,
    LinearBuckets,
    ListMetricDescriptorsResponse,
    ListTimeSeriesResponse,
    Point,
    StringValue,
)

TIME_SERIES_PAGE = b"""
{
  "timeSeries": [
    {
      "metric": {"type": "compute.googleapis.com/instance/cpu/utilization", "labels": {"instance_name": "web-1"}},
      "resource": {"type": "gce_instance", "labels": {"project_id": "p", "zone": "us-central1-a"}},
      "metricKind": "GAUGE",
      "valueType": "DOUBLE",
      "unit": "10^2.%",
      "points": [
        {"interval": {"startTime": "2025-01-01T12:01:00Z", "endTime": "2025-01-01T12:01:00Z"}, "value": {"doubleValue": 0.75}},
        {"interval": {"endTime": "2025-01-01T12:00:00.123456Z"}, "value": {"doubleValue": 0.5}}
      ]
    }
  ],
  "nextPageToken": "token-2"
}
"""


class TestListResponses:
    """Test parsing of the API's JSON pages."""

    def test_time_series_page(self):
        page = ListTimeSeriesResponse.model_validate(orjson.loads(TIME_SERIES_PAGE))

        assert page.next_page_token == "token-2"
        series = page.time_series[0]
        assert series.metric.type == "compute.googleapis.com/instance/cpu/utilization"
        assert series.metric.labels == {"instance_name": "web-1"}
        assert series.resource.type == "gce_instance"
        assert series.resource.labels["zone"] == "us-central1-a"
        assert series.metric_kind == MetricKind.GAUGE
        assert series.value_type == ValueType.DOUBLE
        assert [p.value.value for p in series.points] == [0.75, 0.5]
        assert series.points[1].interval.start_time is None
        assert series.points[1].interval.end_time == datetime(
            2025, 1, 1, 12, 0, 0, 123456, tzinfo=timezone.utc
        )

    def test_empty_pages(self):
        assert ListTimeSeriesResponse.model_validate({}).time_series == []
        page = ListMetricDescriptorsResponse.model_validate({})
        assert page.metric_descriptors == []
        assert page.next_page_token == ""

    def test_descriptor_page(self):
        page = ListMetricDescriptorsResponse.model_validate(
            {
                "metricDescriptors": [
                    {
                        "type": "custom.googleapis.com/rpc/latency",
                        "metricKind": "CUMULATIVE",
                        "valueType": "DISTRIBUTION",
                        "displayName": "RPC latency",
                    }
                ]
            }
        )

        descriptor = page.metric_descriptors[0]
        assert descriptor.type == "custom.googleapis.com/rpc/latency"
        assert descriptor.metric_kind == MetricKind.CUMULATIVE
        assert descriptor.value_type == ValueType.DISTRIBUTION


class TestPointValues:
    """Test conversion of the API's TypedValue into tagged variants."""

    @pytest.mark.parametrize(
        "value, expected",
        [
            ({"boolValue": True}, BoolValue(value=True)),
            ({"int64Value": "42"}, Int64Value(value=42)),
            ({"int64Value": "-9007199254740993"}, Int64Value(value=-9007199254740993)),
            ({"doubleValue": 1.5}, DoubleValue(value=1.5)),
            ({"stringValue": "RUNNING"}, StringValue(value="RUNNING")),
            ({"int64_value": 7}, Int64Value(value=7)),
            ({"kind": "double", "value": 2.0}, DoubleValue(value=2.0)),
        ],
    )
    def test_scalar_values(self, value, expected):
        point = Point.model_validate(
            {"interval": {"endTime": "2025-01-01T00:00:00Z"}, "value": value}
        )
        assert point.value == expected

    def test_distribution_value(self):
        point = Point.model_validate(
            {
                "interval": {"endTime": "2025-01-01T00:00:00Z"},
                "value": {
                    "distributionValue": {
                        "count": "5",
                        "mean": 2.0,
                        "sumOfSquaredDeviation": 4.0,
                        "range": {"min": 1, "max": 3},
                        "bucketOptions": {
                            "exponentialBuckets": {
                                "numFiniteBuckets": 3,
                                "growthFactor": 2,
                                "scale": 1,
                            }
                        },
                        "bucketCounts": ["0", "2", "3"],
                    }
                },
            }
        )

        assert isinstance(point.value, DistributionValue)
        distribution = point.value.value
        assert distribution.count == 5
        assert distribution.sum_of_squared_deviation == 4.0
        assert distribution.range.max == 3.0
        assert distribution.bucket_options.exponential_buckets.growth_factor == 2.0
        assert distribution.bucket_counts == [0, 2, 3]

    def test_unsupported_value_rejected(self):
        with pytest.raises(ValidationError, match="Unsupported typed value"):
            Point.model_validate(
                {"interval": {"endTime": "2025-01-01T00:00:00Z"}, "value": {"moneyValue": {}}}
            )


class TestBucketOptions:
    def test_no_layout_allowed(self):
        options = BucketOptions()
        assert options.linear_buckets is None
        assert options.exponential_buckets is None
        assert options.explicit_buckets is None

    def test_two_layouts_rejected(self):
        with pytest.raises(ValidationError, match="Only one bucket layout"):
            BucketOptions(
                linear_buckets=LinearBuckets(num_finite_buckets=1, width=1),
                explicit_buckets={"bounds": [1.0]},
            )


class TestAggregation:
    def test_aligner_case_insensitive(self):
        aggregation = Aggregation(alignment_period=60, per_series_aligner="align_mean")
        assert aggregation.per_series_aligner == Aligner.ALIGN_MEAN

    def test_alignment_period_must_be_positive(self):
        with pytest.raises(ValidationError):
            Aggregation(alignment_period=0, per_series_aligner=Aligner.ALIGN_MEAN)
