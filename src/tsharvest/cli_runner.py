# SPDX-FileCopyrightText: Copyright (c) 2025-2026 NVIDIA CORPORATION & AFFILIATES. All rights reserved.
# SPDX-License-Identifier: Apache-2.0
import asyncio
import sys
import time
from datetime import timedelta
from pathlib import Path
from typing import BinaryIO

import orjson

from tsharvest.common.config import HarvesterConfig
from tsharvest.common.enums import HarvestLogLevel
from tsharvest.common.exceptions import HarvestError
from tsharvest.common.harvest_logger import HarvestLogger
from tsharvest.common.logging import setup_rich_logging
from tsharvest.common.models import Metric
from tsharvest.harvest import MetricAccumulator, TimeSeriesHarvester

_logger = HarvestLogger(__name__)


def write_metrics(metrics: list[Metric], stream: BinaryIO) -> None:
    """Write each metric as one JSON line."""
    for metric in metrics:
        stream.write(orjson.dumps(metric.model_dump(mode="json")) + b"\n")
    stream.flush()


def _report(accumulator: MetricAccumulator, stream: BinaryIO | None = None) -> None:
    write_metrics(accumulator.metrics, stream or sys.stdout.buffer)
    for error_count in accumulator.get_error_summary():
        _logger.warning(
            f"{error_count.count}x {error_count.error_details.type}: {error_count.error_details.message}"
        )
    accumulator.clear()


async def _gather_once(
    harvester: TimeSeriesHarvester, stream: BinaryIO | None = None
) -> None:
    accumulator = MetricAccumulator()
    try:
        await harvester.gather(accumulator)
    finally:
        await harvester.close()
    _report(accumulator, stream)


async def _gather_forever(harvester: TimeSeriesHarvester, interval: timedelta) -> None:
    accumulator = MetricAccumulator()
    try:
        while True:
            started = time.monotonic()
            try:
                await harvester.gather(accumulator)
            except HarvestError as e:
                _logger.error(f"Collection cycle failed: {e!r}")
            _report(accumulator)
            elapsed = time.monotonic() - started
            await asyncio.sleep(max(0.0, interval.total_seconds() - elapsed))
    finally:
        await harvester.close()


def run_gather(
    config: HarvesterConfig,
    log_level: HarvestLogLevel = HarvestLogLevel.INFO,
    log_file: Path | None = None,
) -> None:
    """Run a single collection cycle and print its metrics to stdout."""
    setup_rich_logging(log_level, log_file)
    asyncio.run(_gather_once(TimeSeriesHarvester(config)))


def run_forever(
    config: HarvesterConfig,
    interval: timedelta,
    log_level: HarvestLogLevel = HarvestLogLevel.INFO,
    log_file: Path | None = None,
) -> None:
    """Run collection cycles every `interval` until interrupted."""
    setup_rich_logging(log_level, log_file)
    _logger.info(lambda: f"Harvesting project {config.project} every {interval}")
    asyncio.run(_gather_forever(TimeSeriesHarvester(config), interval))
