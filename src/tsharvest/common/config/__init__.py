# SPDX-FileCopyrightText: Copyright (c) 2025-2026 NVIDIA CORPORATION & AFFILIATES. All rights reserved.
# SPDX-License-Identifier: Apache-2.0

from tsharvest.common.config.base_config import BaseConfig
from tsharvest.common.config.config_defaults import CLIDefaults, HarvesterDefaults
from tsharvest.common.config.config_validators import (
    default_if_unset,
    parse_duration,
    parse_label_filter,
    parse_label_filters,
    parse_str_or_list,
)
from tsharvest.common.config.harvest_config import (
    HarvesterConfig,
    LabelFilter,
    ListTimeSeriesFilter,
)

__all__ = [
    "BaseConfig",
    "CLIDefaults",
    "HarvesterConfig",
    "HarvesterDefaults",
    "LabelFilter",
    "ListTimeSeriesFilter",
    "default_if_unset",
    "parse_duration",
    "parse_label_filter",
    "parse_label_filters",
    "parse_str_or_list",
]
