# SPDX-FileCopyrightText: Copyright (c) 2025-2026 NVIDIA CORPORATION & AFFILIATES. All rights reserved.
# SPDX-License-Identifier: Apache-2.0

from tsharvest.common.enums.base_enums import CaseInsensitiveStrEnum


class HarvestLogLevel(CaseInsensitiveStrEnum):
    """Logging levels understood by the harvester and its CLI."""

    TRACE = "TRACE"
    DEBUG = "DEBUG"
    INFO = "INFO"
    WARNING = "WARNING"
    ERROR = "ERROR"
    CRITICAL = "CRITICAL"
