# SPDX-FileCopyrightText: Copyright (c) 2025-2026 NVIDIA CORPORATION & AFFILIATES. All rights reserved.
# SPDX-License-Identifier: Apache-2.0
from dataclasses import dataclass
from datetime import timedelta

from tsharvest.common.constants import DEFAULT_RATE_LIMIT
from tsharvest.common.enums import HarvestLogLevel


@dataclass(frozen=True)
class HarvesterDefaults:
    RATE_LIMIT = DEFAULT_RATE_LIMIT
    DELAY = timedelta(minutes=5)
    WINDOW = None
    CACHE_TTL = timedelta(hours=1)
    GATHER_RAW_DISTRIBUTION_BUCKETS = True
    DISTRIBUTION_AGGREGATION_ALIGNERS = []
    METRIC_TYPE_PREFIX_INCLUDE = []
    METRIC_TYPE_PREFIX_EXCLUDE = []
    FILTER = None


@dataclass(frozen=True)
class CLIDefaults:
    LOG_LEVEL = HarvestLogLevel.INFO
    LOG_FILE = None
    RUN_INTERVAL = timedelta(minutes=1)
