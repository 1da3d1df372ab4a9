# SPDX-FileCopyrightText: Copyright (c) 2025-2026 NVIDIA CORPORATION & AFFILIATES. All rights reserved.
# SPDX-License-Identifier: Apache-2.0
from datetime import datetime

from pydantic import Field

from tsharvest.common.enums import MetricKind, MetricValueType
from tsharvest.common.models.base_models import HarvestBaseModel
from tsharvest.common.models.monitoring_models import TypedValue

FieldValue = bool | int | float | str


class Sample(HarvestBaseModel):
    """One data point of a fetched series, tagged and ready to be grouped."""

    timestamp: datetime = Field(description="End time of the point's interval.")
    tags: dict[str, str] = Field(
        default_factory=dict,
        description="Resource labels, metric labels and the derived tags of the series.",
    )
    metric_kind: MetricKind = Field(
        default=MetricKind.METRIC_KIND_UNSPECIFIED,
        description="Metric kind of the series the point belongs to.",
    )
    value: TypedValue = Field(description="The point's value.")


class Metric(HarvestBaseModel):
    """A harvested metric handed to the sink.

    For untyped metrics the fields are scalar values keyed by field name. For
    histograms the fields are formatted bucket upper bounds mapped to counts.
    """

    name: str = Field(description="Measurement name, or the field key for histograms.")
    tags: dict[str, str] = Field(default_factory=dict)
    fields: dict[str, FieldValue] = Field(default_factory=dict)
    timestamp: datetime
    type: MetricValueType = MetricValueType.UNTYPED
