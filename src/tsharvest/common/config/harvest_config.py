# SPDX-FileCopyrightText: Copyright (c) 2025-2026 NVIDIA CORPORATION & AFFILIATES. All rights reserved.
# SPDX-License-Identifier: Apache-2.0
from datetime import timedelta
from typing import Annotated

from pydantic import BeforeValidator, Field, model_validator
from typing_extensions import Self

from tsharvest.common.config.base_config import BaseConfig
from tsharvest.common.config.config_defaults import HarvesterDefaults
from tsharvest.common.config.config_validators import (
    default_if_unset,
    parse_duration,
    parse_label_filters,
    parse_str_or_list,
)
from tsharvest.common.enums import Aligner


class LabelFilter(BaseConfig):
    """A single `key = value` clause of a time series filter.

    The value is either a literal label value, or a monitoring filter function
    call such as `starts_with("us-")` or `one_of("sda", "sdb")`.
    """

    key: Annotated[
        str,
        Field(min_length=1, description="Label key, e.g. `zone` or `instance_name`."),
    ]
    value: Annotated[
        str,
        Field(description="Literal label value or a filter function call."),
    ]


class ListTimeSeriesFilter(BaseConfig):
    """Label clauses appended to every time series filter."""

    resource_labels: Annotated[
        list[LabelFilter],
        Field(
            description="Resource label clauses. Several clauses are OR-joined.",
        ),
        BeforeValidator(parse_label_filters),
    ] = []

    metric_labels: Annotated[
        list[LabelFilter],
        Field(
            description="Metric label clauses. Several clauses are OR-joined.",
        ),
        BeforeValidator(parse_label_filters),
    ] = []


class HarvesterConfig(BaseConfig):
    """Configuration of a time series harvester for one project."""

    @model_validator(mode="after")
    def validate_window(self) -> Self:
        """A configured window must cover some time."""
        if self.window is not None and self.window <= timedelta(0):
            raise ValueError("window must be greater than zero when set")
        return self

    project: Annotated[
        str,
        Field(
            min_length=1,
            description="Cloud project to harvest, without the `projects/` prefix.",
        ),
    ]

    rate_limit: Annotated[
        int,
        Field(
            ge=1,
            description="Maximum number of time series listing calls issued per second. "
            "Zero or unset falls back to the default.",
        ),
        BeforeValidator(default_if_unset(HarvesterDefaults.RATE_LIMIT)),
    ] = HarvesterDefaults.RATE_LIMIT

    delay: Annotated[
        timedelta,
        Field(
            description="How far the end of every collection window lags behind now, "
            "giving the API time to settle points.",
        ),
        BeforeValidator(parse_duration),
    ] = HarvesterDefaults.DELAY

    window: Annotated[
        timedelta | None,
        Field(
            description="Fixed width of every collection window. When unset, every "
            "window starts where the previous one ended.",
        ),
        BeforeValidator(parse_duration),
    ] = HarvesterDefaults.WINDOW

    cache_ttl: Annotated[
        timedelta,
        Field(
            description="How long discovered request configurations are reused "
            "before metric descriptors are listed again.",
        ),
        BeforeValidator(parse_duration),
    ] = HarvesterDefaults.CACHE_TTL

    gather_raw_distribution_buckets: Annotated[
        bool,
        Field(
            description="Collect the raw buckets of distribution metric types.",
        ),
    ] = HarvesterDefaults.GATHER_RAW_DISTRIBUTION_BUCKETS

    distribution_aggregation_aligners: Annotated[
        list[Aligner],
        Field(
            description="Aligners requested in addition for distribution metric types, "
            "e.g. `ALIGN_PERCENTILE_99`. Each one produces a separate field.",
        ),
        BeforeValidator(parse_str_or_list),
    ] = HarvesterDefaults.DISTRIBUTION_AGGREGATION_ALIGNERS

    metric_type_prefix_include: Annotated[
        list[str],
        Field(
            description="Only harvest metric types starting with one of these prefixes.",
        ),
        BeforeValidator(parse_str_or_list),
    ] = HarvesterDefaults.METRIC_TYPE_PREFIX_INCLUDE

    metric_type_prefix_exclude: Annotated[
        list[str],
        Field(
            description="Skip metric types starting with one of these prefixes. "
            "Ignored when include prefixes are set.",
        ),
        BeforeValidator(parse_str_or_list),
    ] = HarvesterDefaults.METRIC_TYPE_PREFIX_EXCLUDE

    filter: Annotated[
        ListTimeSeriesFilter | None,
        Field(
            description="Label clauses added to every time series request.",
        ),
    ] = HarvesterDefaults.FILTER

    @property
    def project_name(self) -> str:
        """Resource name of the project as used by the monitoring API."""
        return f"projects/{self.project}"
