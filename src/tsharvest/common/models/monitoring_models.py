# SPDX-FileCopyrightText: Copyright (c) 2025-2026 NVIDIA CORPORATION & AFFILIATES. All rights reserved.
# SPDX-License-Identifier: Apache-2.0
"""Data model of the Cloud Monitoring v3 API, as far as the harvester consumes it.

Models accept the REST API's camelCase JSON (int64 values arrive as strings and
are coerced) and can also be built directly in snake_case.
"""

from datetime import datetime
from typing import Annotated, Any, Literal

from pydantic import Field, field_validator, model_validator
from typing_extensions import Self

from tsharvest.common.enums import Aligner, MetricKind, ValueType
from tsharvest.common.models.base_models import HarvestBaseModel, MonitoringAPIModel


class TimeInterval(MonitoringAPIModel):
    """Time range of a request or of a single point."""

    start_time: datetime | None = Field(
        default=None, description="Start of the interval. Unset for gauge points."
    )
    end_time: datetime = Field(description="End of the interval.")


class Aggregation(MonitoringAPIModel):
    """Per-series alignment applied by the API before returning points."""

    alignment_period: int = Field(ge=1, description="Alignment period in seconds.")
    per_series_aligner: Aligner = Field(
        description="Aligner collapsing each period into one point."
    )


class ListTimeSeriesRequest(HarvestBaseModel):
    """Parameters of a single time series listing call."""

    name: str = Field(description="Project scope, e.g. `projects/my-project`.")
    filter: str = Field(description="Monitoring filter selecting the series.")
    interval: TimeInterval = Field(description="Time range of the points to return.")
    aggregation: Aggregation | None = Field(
        default=None, description="Optional per-series aggregation."
    )


class MetricDescriptor(MonitoringAPIModel):
    """Definition of a metric type available in the project."""

    type: str = Field(
        description="Metric type, e.g. `compute.googleapis.com/instance/cpu/usage_time`."
    )
    metric_kind: MetricKind = MetricKind.METRIC_KIND_UNSPECIFIED
    value_type: ValueType = ValueType.VALUE_TYPE_UNSPECIFIED


# ==============================================================================
# Distribution values
# ==============================================================================


class Range(MonitoringAPIModel):
    min: float = 0.0
    max: float = 0.0


class LinearBuckets(MonitoringAPIModel):
    """`num_finite_buckets` buckets of equal `width` starting at `offset`."""

    num_finite_buckets: int = Field(ge=0)
    width: float
    offset: float = 0.0


class ExponentialBuckets(MonitoringAPIModel):
    """`num_finite_buckets` buckets with bounds `scale * growth_factor ** i`."""

    num_finite_buckets: int = Field(ge=0)
    growth_factor: float
    scale: float


class ExplicitBuckets(MonitoringAPIModel):
    bounds: list[float] = Field(default_factory=list)


class BucketOptions(MonitoringAPIModel):
    """Bucket layout of a distribution. At most one layout is set."""

    linear_buckets: LinearBuckets | None = None
    exponential_buckets: ExponentialBuckets | None = None
    explicit_buckets: ExplicitBuckets | None = None

    @model_validator(mode="after")
    def validate_single_layout(self) -> Self:
        layouts = [
            layout
            for layout in (
                self.linear_buckets,
                self.exponential_buckets,
                self.explicit_buckets,
            )
            if layout is not None
        ]
        if len(layouts) > 1:
            raise ValueError("Only one bucket layout may be set on a distribution")
        return self


class Distribution(MonitoringAPIModel):
    """Summary of a set of observations with bucketed counts."""

    count: int = 0
    mean: float = 0.0
    sum_of_squared_deviation: float = 0.0
    range: Range | None = None
    bucket_options: BucketOptions = Field(default_factory=BucketOptions)
    bucket_counts: list[int] = Field(
        default_factory=list,
        description="Local count per bucket. Trailing empty buckets may be omitted.",
    )


# ==============================================================================
# Typed values
# ==============================================================================


class BoolValue(HarvestBaseModel):
    kind: Literal["bool"] = "bool"
    value: bool


class Int64Value(HarvestBaseModel):
    kind: Literal["int64"] = "int64"
    value: int


class DoubleValue(HarvestBaseModel):
    kind: Literal["double"] = "double"
    value: float


class StringValue(HarvestBaseModel):
    kind: Literal["string"] = "string"
    value: str


class DistributionValue(HarvestBaseModel):
    kind: Literal["distribution"] = "distribution"
    value: Distribution


TypedValue = Annotated[
    BoolValue | Int64Value | DoubleValue | StringValue | DistributionValue,
    Field(discriminator="kind"),
]

# JSON member of the API's TypedValue oneof -> variant discriminator
_TYPED_VALUE_KINDS = {
    "boolValue": "bool",
    "int64Value": "int64",
    "doubleValue": "double",
    "stringValue": "string",
    "distributionValue": "distribution",
    "bool_value": "bool",
    "int64_value": "int64",
    "double_value": "double",
    "string_value": "string",
    "distribution_value": "distribution",
}


class Point(MonitoringAPIModel):
    """A single data point of a time series."""

    interval: TimeInterval
    value: TypedValue

    @field_validator("value", mode="before")
    @classmethod
    def unwrap_typed_value(cls, value: Any) -> Any:
        """Convert the API's `{"int64Value": "42"}` form into a tagged variant."""
        if not isinstance(value, dict) or "kind" in value:
            return value
        for key, member in value.items():
            if key in _TYPED_VALUE_KINDS:
                return {"kind": _TYPED_VALUE_KINDS[key], "value": member}
        raise ValueError(f"Unsupported typed value: {value!r}")


class SeriesMetric(MonitoringAPIModel):
    type: str = ""
    labels: dict[str, str] = Field(default_factory=dict)


class MonitoredResource(MonitoringAPIModel):
    type: str = ""
    labels: dict[str, str] = Field(default_factory=dict)


class TimeSeries(MonitoringAPIModel):
    """One time series returned by a listing call, with its points newest first."""

    metric: SeriesMetric = Field(default_factory=SeriesMetric)
    resource: MonitoredResource = Field(default_factory=MonitoredResource)
    metric_kind: MetricKind = MetricKind.METRIC_KIND_UNSPECIFIED
    value_type: ValueType = ValueType.VALUE_TYPE_UNSPECIFIED
    points: list[Point] = Field(default_factory=list)


# ==============================================================================
# Listing pages
# ==============================================================================


class ListMetricDescriptorsResponse(MonitoringAPIModel):
    metric_descriptors: list[MetricDescriptor] = Field(default_factory=list)
    next_page_token: str = ""


class ListTimeSeriesResponse(MonitoringAPIModel):
    time_series: list[TimeSeries] = Field(default_factory=list)
    next_page_token: str = ""
