# SPDX-FileCopyrightText: Copyright (c) 2025-2026 NVIDIA CORPORATION & AFFILIATES. All rights reserved.
# SPDX-License-Identifier: Apache-2.0

from tsharvest.common.enums.base_enums import CaseInsensitiveStrEnum
from tsharvest.common.enums.logging_enums import HarvestLogLevel
from tsharvest.common.enums.monitoring_enums import (
    Aligner,
    MetricKind,
    MetricValueType,
    ValueType,
)

__all__ = [
    "Aligner",
    "CaseInsensitiveStrEnum",
    "HarvestLogLevel",
    "MetricKind",
    "MetricValueType",
    "ValueType",
]
