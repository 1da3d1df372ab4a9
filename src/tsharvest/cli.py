# SPDX-FileCopyrightText: Copyright (c) 2025-2026 NVIDIA CORPORATION & AFFILIATES. All rights reserved.
# SPDX-License-Identifier: Apache-2.0
"""Main CLI entry point for tsharvest."""

################################################################################
# NOTE: Keep the imports here to a minimum. This file is read every time
# the CLI is run, including to generate the help text.
################################################################################

from dataclasses import dataclass
from pathlib import Path
from typing import Annotated

from cyclopts import App, Parameter

from tsharvest.cli_utils import exit_on_error
from tsharvest.common.config import CLIDefaults, HarvesterConfig, HarvesterDefaults
from tsharvest.common.enums import HarvestLogLevel

app = App(name="tsharvest", help="Harvest Google Cloud Monitoring time series")


@Parameter(name="*")
@dataclass
class HarvestOptions:
    """Options shared by every harvesting command."""

    project: Annotated[str, Parameter(name=("--project", "-p"))]
    """Cloud project to harvest."""

    rate_limit: Annotated[int, Parameter(name="--rate-limit")] = (
        HarvesterDefaults.RATE_LIMIT
    )
    """Maximum time series listing calls per second."""

    delay: Annotated[str | None, Parameter(name="--delay")] = None
    """How far the collection window lags behind now, e.g. `5m`. Defaults to 5 minutes."""

    window: Annotated[str | None, Parameter(name="--window")] = None
    """Fixed width of every collection window, e.g. `1m`."""

    cache_ttl: Annotated[str | None, Parameter(name="--cache-ttl")] = None
    """How long discovered request configs are reused, e.g. `1h`. Defaults to 1 hour."""

    include: Annotated[list[str] | None, Parameter(name="--include")] = None
    """Only harvest metric types starting with this prefix. Repeatable."""

    exclude: Annotated[list[str] | None, Parameter(name="--exclude")] = None
    """Skip metric types starting with this prefix. Repeatable."""

    aligner: Annotated[list[str] | None, Parameter(name="--aligner")] = None
    """Extra aligner requested for distribution metrics, e.g. `ALIGN_PERCENTILE_99`. Repeatable."""

    resource_label: Annotated[list[str] | None, Parameter(name="--resource-label")] = None
    """Resource label filter as `key=value`. Repeatable."""

    metric_label: Annotated[list[str] | None, Parameter(name="--metric-label")] = None
    """Metric label filter as `key=value`. Repeatable."""

    raw_buckets: Annotated[bool, Parameter(name="--raw-buckets")] = (
        HarvesterDefaults.GATHER_RAW_DISTRIBUTION_BUCKETS
    )
    """Collect the raw buckets of distribution metrics."""

    log_level: Annotated[HarvestLogLevel, Parameter(name="--log-level")] = (
        CLIDefaults.LOG_LEVEL
    )
    """Console log level."""

    log_file: Annotated[Path | None, Parameter(name="--log-file")] = CLIDefaults.LOG_FILE
    """Also write logs to this file."""

    def to_config(self) -> HarvesterConfig:
        """Build the validated harvester configuration."""
        label_filter = None
        if self.resource_label or self.metric_label:
            label_filter = {
                "resource_labels": self.resource_label or [],
                "metric_labels": self.metric_label or [],
            }
        return HarvesterConfig(
            project=self.project,
            rate_limit=self.rate_limit,
            delay=HarvesterDefaults.DELAY if self.delay is None else self.delay,
            window=self.window,
            cache_ttl=(
                HarvesterDefaults.CACHE_TTL if self.cache_ttl is None else self.cache_ttl
            ),
            gather_raw_distribution_buckets=self.raw_buckets,
            distribution_aggregation_aligners=self.aligner or [],
            metric_type_prefix_include=self.include or [],
            metric_type_prefix_exclude=self.exclude or [],
            filter=label_filter,
        )


@app.command(name="gather")
def gather(options: HarvestOptions) -> None:
    """Run a single collection cycle and print the metrics as JSON lines.

    Args:
        options: Harvesting options
    """
    with exit_on_error(title="Error Gathering Time Series"):
        from tsharvest.cli_runner import run_gather

        run_gather(options.to_config(), options.log_level, options.log_file)


@app.command(name="run")
def run(
    options: HarvestOptions,
    interval: Annotated[str | None, Parameter(name="--interval")] = None,
) -> None:
    """Run collection cycles on an interval until interrupted.

    Args:
        options: Harvesting options
        interval: Time between the start of two cycles, e.g. `30s`. Defaults to 1 minute.
    """
    with exit_on_error(title="Error Running Harvester"):
        from tsharvest.cli_runner import run_forever
        from tsharvest.common.config import parse_duration

        run_forever(
            options.to_config(),
            CLIDefaults.RUN_INTERVAL if interval is None else parse_duration(interval),
            options.log_level,
            options.log_file,
        )
