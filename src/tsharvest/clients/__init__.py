# SPDX-FileCopyrightText: Copyright (c) 2025-2026 NVIDIA CORPORATION & AFFILIATES. All rights reserved.
# SPDX-License-Identifier: Apache-2.0

from tsharvest.clients.monitoring_client import (
    GoogleMonitoringClient,
    create_monitoring_client,
)

__all__ = ["GoogleMonitoringClient", "create_monitoring_client"]
