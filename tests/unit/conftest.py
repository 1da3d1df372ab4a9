# SPDX-FileCopyrightText: Copyright (c) 2025-2026 NVIDIA CORPORATION & AFFILIATES. All rights reserved.
# SPDX-License-Identifier: Apache-2.0
"""
Shared fixtures for testing the harvesting engine.

This file contains fixtures that are automatically discovered by pytest
and made available to test functions in the same directory and subdirectories.
"""

import asyncio
from datetime import datetime, timezone

import pytest

from tsharvest.common.config import HarvesterConfig
from tsharvest.common.enums import MetricKind, ValueType
from tsharvest.harvest import MetricAccumulator
from tests.harness.fake_metric_client import (
    FakeMetricClient,
    make_descriptor,
    make_series,
)
from tests.harness.time_traveler import TimeTraveler

DEFAULT_PROJECT = "test-project"
DEFAULT_POINT_TIME = datetime(2025, 1, 1, 12, 0, 0, tzinfo=timezone.utc)

_REAL_SLEEP = asyncio.sleep


@pytest.fixture(autouse=True)
def no_sleep(monkeypatch, request):
    """Patch asyncio.sleep to do nothing, unless test uses time_traveler fixture."""
    if "time_traveler" not in request.fixturenames:
        monkeypatch.setattr("asyncio.sleep", lambda delay: _REAL_SLEEP(0))
    yield


@pytest.fixture
async def time_traveler():
    """
    TimeTraveler fixture for virtual time testing.

    Usage:
        async def test_timing(time_traveler):
            start = time_traveler.time()
            await asyncio.sleep(10.0)  # Instant in real time!
            elapsed = time_traveler.time() - start
            assert elapsed >= 10.0
    """
    traveler = TimeTraveler()
    traveler.start_traveling()
    yield traveler
    traveler.stop_traveling()


@pytest.fixture
def harvester_config() -> HarvesterConfig:
    return HarvesterConfig(project=DEFAULT_PROJECT)


@pytest.fixture
def accumulator() -> MetricAccumulator:
    return MetricAccumulator()


@pytest.fixture
def gauge_client() -> FakeMetricClient:
    """Client serving one int64 gauge `custom.googleapis.com/foo/bar` with value 42."""
    return FakeMetricClient(
        descriptors=[
            make_descriptor("custom.googleapis.com/foo/bar", ValueType.INT64),
        ],
        series={
            "custom.googleapis.com/foo/bar": [
                make_series(
                    [(DEFAULT_POINT_TIME, {"int64Value": "42"})],
                    resource_labels={"zone": "us-central1-a"},
                    metric_kind=MetricKind.GAUGE,
                    value_type=ValueType.INT64,
                )
            ]
        },
    )
