# SPDX-FileCopyrightText: Copyright (c) 2025-2026 NVIDIA CORPORATION & AFFILIATES. All rights reserved.
# SPDX-License-Identifier: Apache-2.0
import asyncio
from collections.abc import Awaitable, Callable
from datetime import datetime

from tsharvest.clients.monitoring_client import create_monitoring_client
from tsharvest.common.config import HarvesterConfig
from tsharvest.common.exceptions import InitializationError
from tsharvest.common.mixins import HarvestLoggerMixin
from tsharvest.common.protocols import AccumulatorProtocol, MetricClientProtocol
from tsharvest.harvest.discovery import MetricTypeDiscovery
from tsharvest.harvest.distribution import DistributionConverter
from tsharvest.harvest.fetcher import TimeSeriesFetcher
from tsharvest.harvest.rate_limiter import RateLimitedDispatcher
from tsharvest.harvest.series_grouper import SeriesGrouper
from tsharvest.harvest.timeseries_config import (
    ConfigCache,
    TimeSeriesConfig,
    TimeSeriesConfigBuilder,
)
from tsharvest.harvest.window import WindowScheduler

ClientFactory = Callable[[str], Awaitable[MetricClientProtocol]]


class TimeSeriesHarvester(HarvestLoggerMixin):
    """Collects the time series of one project, one cycle per `gather()` call.

    A cycle computes the next window, reuses the cached request configs or
    discovers new ones, fetches every config concurrently under the rate limit and
    hands the grouped metrics to the sink. A failing fetch is reported to the
    sink without affecting its siblings.

    The previous window end and the config cache live on the instance and are
    only touched between cycles. The monitoring client is created on the first
    cycle and reused until `close()`.
    """

    def __init__(
        self,
        config: HarvesterConfig,
        client: MetricClientProtocol | None = None,
        client_factory: ClientFactory | None = None,
        **kwargs,
    ) -> None:
        super().__init__(**kwargs)
        self.config = config
        self.client = client
        self.client_factory = client_factory or create_monitoring_client
        self.scheduler = WindowScheduler(config.delay, config.window)
        self.discovery = MetricTypeDiscovery(config)
        self.builder = TimeSeriesConfigBuilder(config)
        self.prev_end: datetime | None = None
        self.cache: ConfigCache | None = None
        self._cancel_event = asyncio.Event()

    async def initialize_client(self) -> MetricClientProtocol:
        """Create the monitoring client if needed and return it.

        Raises:
            InitializationError: If the client cannot be created.
        """
        if self.client is None:
            try:
                self.client = await self.client_factory(self.config.project)
            except InitializationError:
                raise
            except Exception as e:
                raise InitializationError(
                    f"failed to create monitoring client: {e}"
                ) from e
        return self.client

    async def generate_configs(
        self,
        client: MetricClientProtocol,
        start: datetime,
        end: datetime,
    ) -> list[TimeSeriesConfig]:
        """Request configs for the window, from the cache when it is still valid."""
        if self.cache is not None and self.cache.is_valid():
            return self.cache.refresh_interval(start, end)

        descriptors = await self.discovery.discover(client, self._cancel_event)
        configs = self.builder.build(descriptors, start, end)
        self.cache = ConfigCache(configs, self.config.cache_ttl)
        self.debug(
            lambda: f"Built {len(configs)} request configs from {len(descriptors)} metric descriptors"
        )
        return configs

    async def gather(self, accumulator: AccumulatorProtocol) -> None:
        """Run one collection cycle and send its metrics and errors to the sink.

        Raises:
            InitializationError: If the monitoring client cannot be created.
            DiscoveryError: If listing metric descriptors fails.
        """
        client = await self.initialize_client()
        self._cancel_event = asyncio.Event()

        start, end = self.scheduler.next_window(self.prev_end)
        self.prev_end = end

        configs = await self.generate_configs(client, start, end)

        grouper = SeriesGrouper()
        converter = DistributionConverter(grouper)
        fetcher = TimeSeriesFetcher(client, self.config.project)
        dispatcher = RateLimitedDispatcher(self.config.rate_limit)

        async def _gather_config(config: TimeSeriesConfig) -> None:
            await fetcher.gather(config, grouper, converter, self._cancel_event)

        results = await dispatcher.run(configs, _gather_config, self._cancel_event)

        errors = [result for result in results if isinstance(result, BaseException)]
        for error in errors:
            self.warning(f"Time series fetch failed: {error!r}")
            accumulator.add_error(error)

        metrics = await grouper.metrics()
        for metric in metrics:
            accumulator.add_metric(metric)

        self.info(
            lambda: f"Harvested {len(metrics)} metrics from {len(results)}/{len(configs)} "
            f"request configs ({len(errors)} failed) for window {start.isoformat()} - {end.isoformat()}"
        )

    def cancel(self) -> None:
        """Stop the current cycle. Samples gathered so far are still emitted."""
        self._cancel_event.set()

    async def close(self) -> None:
        """Release the monitoring client. A later cycle creates a new one."""
        if self.client is not None:
            await self.client.close()
            self.client = None
