# SPDX-FileCopyrightText: Copyright (c) 2025-2026 NVIDIA CORPORATION & AFFILIATES. All rights reserved.
# SPDX-License-Identifier: Apache-2.0
import asyncio
from datetime import datetime

from tsharvest.common.exceptions import InvalidStateError
from tsharvest.common.mixins import HarvestLoggerMixin
from tsharvest.common.models import FieldValue, Metric

GroupKey = tuple[str, tuple[tuple[str, str], ...], datetime]


class SeriesGrouper(HarvestLoggerMixin):
    """Merges the fields of concurrent fetch tasks into one metric per series point.

    Fields added for the same `(measurement, tags, timestamp)` end up on the same
    metric; any difference in one of the three keeps them apart. Complete metrics
    (histograms) can be added as they are. Every mutation goes through a single
    lock.

    The result is read once with `metrics()`. The grouper refuses any use after
    that, so each collection cycle needs a new one.
    """

    def __init__(self, **kwargs) -> None:
        super().__init__(**kwargs)
        self._lock = asyncio.Lock()
        self._groups: dict[GroupKey, Metric] = {}
        self._metrics: list[Metric] = []
        self._consumed = False

    def _check_not_consumed(self) -> None:
        if self._consumed:
            raise InvalidStateError("Series grouper metrics have already been read")

    async def add(
        self,
        measurement: str,
        tags: dict[str, str],
        timestamp: datetime,
        field: str,
        value: FieldValue,
    ) -> None:
        """Add a field to the metric of `(measurement, tags, timestamp)`."""
        key: GroupKey = (measurement, tuple(sorted(tags.items())), timestamp)
        async with self._lock:
            self._check_not_consumed()
            metric = self._groups.get(key)
            if metric is None:
                metric = Metric(name=measurement, tags=dict(tags), timestamp=timestamp)
                self._groups[key] = metric
                self._metrics.append(metric)
            metric.fields[field] = value

    async def add_metric(self, metric: Metric) -> None:
        """Add a complete metric. It is never merged with other metrics."""
        async with self._lock:
            self._check_not_consumed()
            self._metrics.append(metric)

    async def metrics(self) -> list[Metric]:
        """Return every metric in the order it was first added.

        Raises:
            InvalidStateError: If the metrics have already been read.
        """
        async with self._lock:
            self._check_not_consumed()
            self._consumed = True
            metrics, self._metrics = self._metrics, []
            self._groups.clear()
        self.debug(lambda: f"Grouped {len(metrics)} metrics")
        return metrics
