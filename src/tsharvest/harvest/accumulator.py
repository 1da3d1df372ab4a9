# SPDX-FileCopyrightText: Copyright (c) 2025-2026 NVIDIA CORPORATION & AFFILIATES. All rights reserved.
# SPDX-License-Identifier: Apache-2.0

from collections import defaultdict

from tsharvest.common.models import ErrorDetails, ErrorDetailsCount, Metric
from tsharvest.common.protocols import AccumulatorProtocol

__all__ = ["AccumulatorProtocol", "MetricAccumulator"]


class MetricAccumulator:
    """In-memory sink collecting the metrics and errors of one or more cycles."""

    def __init__(self) -> None:
        self.metrics: list[Metric] = []
        self.errors: list[BaseException] = []
        self._error_counts: dict[ErrorDetails, int] = defaultdict(int)

    def add_metric(self, metric: Metric) -> None:
        self.metrics.append(metric)

    def add_error(self, error: BaseException | None) -> None:
        """Record an error. `None` is ignored."""
        if error is None:
            return
        self.errors.append(error)
        self._error_counts[ErrorDetails.from_exception(error)] += 1

    def get_error_summary(self) -> list[ErrorDetailsCount]:
        """Get the error summary."""
        return [
            ErrorDetailsCount(error_details=error_details, count=count)
            for error_details, count in self._error_counts.items()
        ]

    def clear(self) -> None:
        self.metrics.clear()
        self.errors.clear()
        self._error_counts.clear()
