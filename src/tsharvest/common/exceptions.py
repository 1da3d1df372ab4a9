# SPDX-FileCopyrightText: Copyright (c) 2025-2026 NVIDIA CORPORATION & AFFILIATES. All rights reserved.
# SPDX-License-Identifier: Apache-2.0

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from tsharvest.harvest.timeseries_config import TimeSeriesConfig


class HarvestError(Exception):
    """Base class for all exceptions raised by tsharvest."""

    def __str__(self) -> str:
        """Return the string representation of the exception with the class name."""
        return super().__str__()


class ConfigurationError(HarvestError):
    """Exception raised when something fails to configure, or there is a configuration error."""


class InitializationError(HarvestError):
    """Exception raised when the monitoring API client cannot be established."""


class DiscoveryError(HarvestError):
    """Exception raised when listing metric descriptors fails."""


class InvalidStateError(HarvestError):
    """Exception raised when something is in an invalid state."""


class MonitoringAPIError(HarvestError):
    """Exception raised when the monitoring API answers with a non-success status."""

    def __init__(self, status: int, message: str) -> None:
        self.status = status
        self.message = message
        super().__init__(f"monitoring API returned {status}: {message}")


class FetchError(HarvestError):
    """Exception raised when listing the time series of a single request config fails.

    The failing config is kept so the sink can tell which metric type was lost.
    """

    def __init__(self, config: "TimeSeriesConfig", e: Exception) -> None:
        self.config = config
        self.exception = e
        self.status = getattr(e, "status", None)
        super().__init__(
            f"list time series {config.request.filter!r}: {e}",
        )
