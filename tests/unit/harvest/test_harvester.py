# SPDX-FileCopyrightText: Copyright (c) 2025-2026 NVIDIA CORPORATION & AFFILIATES. All rights reserved.
# SPDX-License-Identifier: Apache-2.0
import asyncio
from datetime import datetime, timedelta, timezone

import pytest

from tsharvest.common.config import HarvesterConfig
from tsharvest.common.enums import Aligner, MetricKind, MetricValueType, ValueType
from tsharvest.common.exceptions import (
    DiscoveryError,
    FetchError,
    InitializationError,
    MonitoringAPIError,
)
from tsharvest.harvest import MetricAccumulator, TimeSeriesHarvester
from tests.harness.fake_metric_client import FakeMetricClient, make_descriptor, make_series
from tests.unit.conftest import DEFAULT_POINT_TIME, DEFAULT_PROJECT


def numbered_client(count: int, latency: float = 0.0) -> FakeMetricClient:
    """Client serving `count` gauge metric types of distinct measurements, one point each."""
    metric_types = [f"custom.googleapis.com/app{i}/requests" for i in range(count)]
    return FakeMetricClient(
        descriptors=[make_descriptor(t, ValueType.INT64) for t in metric_types],
        series={
            t: [make_series([(DEFAULT_POINT_TIME, {"int64Value": str(i)})])]
            for i, t in enumerate(metric_types)
        },
        latency=latency,
    )


class TestTimeSeriesHarvesterGather:
    """Test complete collection cycles against an in-memory monitoring API."""

    async def test_gauge_metric(self, harvester_config, gauge_client, accumulator):
        harvester = TimeSeriesHarvester(harvester_config, client=gauge_client)

        await harvester.gather(accumulator)

        assert accumulator.errors == []
        assert len(accumulator.metrics) == 1
        metric = accumulator.metrics[0]
        assert metric.name == "custom.googleapis.com/foo"
        assert metric.fields == {"bar": 42}
        assert metric.timestamp == DEFAULT_POINT_TIME
        assert metric.type == MetricValueType.UNTYPED
        assert metric.tags == {
            "resource_type": "gce_instance",
            "project_id": DEFAULT_PROJECT,
            "zone": "us-central1-a",
            "metric_category": "foo",
            "metric_kind": "gauge",
        }

    async def test_cumulative_distribution(self, accumulator):
        metric_type = "custom.googleapis.com/rpc/latency"
        client = FakeMetricClient(
            descriptors=[
                make_descriptor(metric_type, ValueType.DISTRIBUTION, MetricKind.CUMULATIVE)
            ],
            series={
                metric_type: [
                    make_series(
                        [
                            (
                                DEFAULT_POINT_TIME,
                                {
                                    "distributionValue": {
                                        "count": "5",
                                        "mean": 2.0,
                                        "bucketOptions": {
                                            "linearBuckets": {
                                                "numFiniteBuckets": 1,
                                                "width": 1,
                                                "offset": 0,
                                            }
                                        },
                                        "bucketCounts": ["0", "3"],
                                    }
                                },
                            )
                        ],
                        metric_kind=MetricKind.CUMULATIVE,
                        value_type=ValueType.DISTRIBUTION,
                    )
                ]
            },
        )
        harvester = TimeSeriesHarvester(HarvesterConfig(project="p"), client=client)

        await harvester.gather(accumulator)

        summary, histogram = accumulator.metrics
        assert summary.name == "custom.googleapis.com/rpc"
        assert summary.fields["latency_count"] == 5
        assert summary.fields["latency_mean"] == 2.0
        assert histogram.name == "latency"
        assert histogram.type == MetricValueType.CUMULATIVE_HISTOGRAM
        assert histogram.fields == {"1.0e+00": 3}
        assert histogram.tags["input_metric_group"] == "custom.googleapis.com/rpc"
        assert histogram.tags["metric_kind"] == "cumulative"

    async def test_distribution_aligners_request_aggregates(self, accumulator):
        metric_type = "custom.googleapis.com/rpc/latency"
        client = FakeMetricClient(
            descriptors=[make_descriptor(metric_type, ValueType.DISTRIBUTION)],
            series={
                metric_type: [make_series([(DEFAULT_POINT_TIME, {"doubleValue": 1.5})])]
            },
        )
        config = HarvesterConfig(
            project="p",
            gather_raw_distribution_buckets=False,
            distribution_aggregation_aligners=[
                Aligner.ALIGN_PERCENTILE_99,
                Aligner.ALIGN_MEAN,
            ],
        )
        harvester = TimeSeriesHarvester(config, client=client)

        await harvester.gather(accumulator)

        assert [r.aggregation.per_series_aligner for r in client.time_series_requests] == [
            Aligner.ALIGN_PERCENTILE_99,
            Aligner.ALIGN_MEAN,
        ]
        assert all(r.aggregation.alignment_period == 60 for r in client.time_series_requests)
        assert accumulator.metrics[0].fields == {
            "latency_align_percentile_99": 1.5,
            "latency_align_mean": 1.5,
        }

    async def test_empty_project_emits_nothing(self, harvester_config, accumulator):
        harvester = TimeSeriesHarvester(harvester_config, client=FakeMetricClient())

        await harvester.gather(accumulator)

        assert accumulator.metrics == []
        assert accumulator.errors == []


class TestTimeSeriesHarvesterWindows:
    async def test_first_window_uses_default_window(
        self, harvester_config, gauge_client, accumulator, time_traveler
    ):
        harvester = TimeSeriesHarvester(harvester_config, client=gauge_client)
        now = datetime.fromtimestamp(time_traveler.time(), tz=timezone.utc)

        await harvester.gather(accumulator)

        interval = gauge_client.time_series_requests[0].interval
        expected_end = (now - timedelta(minutes=5)).replace(microsecond=0)
        assert abs(interval.end_time - expected_end) <= timedelta(seconds=1)
        assert interval.end_time - interval.start_time == timedelta(minutes=1)

    async def test_consecutive_windows_abut(
        self, harvester_config, gauge_client, accumulator, time_traveler
    ):
        harvester = TimeSeriesHarvester(harvester_config, client=gauge_client)

        await harvester.gather(accumulator)
        first_end = harvester.prev_end
        time_traveler.advance_time(60)
        await harvester.gather(accumulator)

        second = gauge_client.time_series_requests[1].interval
        assert second.start_time == first_end.replace(microsecond=0)
        elapsed = harvester.prev_end - first_end
        assert abs(elapsed - timedelta(seconds=60)) < timedelta(milliseconds=1)

    async def test_fixed_window(self, gauge_client, accumulator):
        config = HarvesterConfig(project="p", window="10m")
        harvester = TimeSeriesHarvester(config, client=gauge_client)

        await harvester.gather(accumulator)
        await harvester.gather(accumulator)

        for request in gauge_client.time_series_requests:
            duration = request.interval.end_time - request.interval.start_time
            assert timedelta(minutes=10) - timedelta(seconds=1) <= duration
            assert duration <= timedelta(minutes=10) + timedelta(seconds=1)


class TestTimeSeriesHarvesterCache:
    async def test_configs_reused_within_ttl(
        self, harvester_config, gauge_client, accumulator, time_traveler
    ):
        harvester = TimeSeriesHarvester(harvester_config, client=gauge_client)

        await harvester.gather(accumulator)
        time_traveler.advance_time(59 * 60)
        await harvester.gather(accumulator)

        assert len(gauge_client.descriptor_calls) == 1
        assert len(gauge_client.time_series_requests) == 2
        first, second = gauge_client.time_series_requests
        elapsed = second.interval.end_time - first.interval.end_time
        assert abs(elapsed - timedelta(minutes=59)) <= timedelta(seconds=1)

    async def test_configs_rebuilt_after_ttl(
        self, harvester_config, gauge_client, accumulator, time_traveler
    ):
        harvester = TimeSeriesHarvester(harvester_config, client=gauge_client)

        await harvester.gather(accumulator)
        time_traveler.advance_time(61 * 60)
        await harvester.gather(accumulator)

        assert len(gauge_client.descriptor_calls) == 2


class TestTimeSeriesHarvesterRateLimit:
    async def test_rate_limit_spreads_requests(self, accumulator, time_traveler):
        client = numbered_client(10)
        harvester = TimeSeriesHarvester(
            HarvesterConfig(project="p", rate_limit=2), client=client
        )

        await harvester.gather(accumulator)

        call_times = client.time_series_call_times
        assert len(call_times) == 10
        for i in range(2, len(call_times)):
            assert call_times[i] - call_times[i - 2] >= 1.0 - 1e-6
        assert len(accumulator.metrics) == 10
        assert client.completed_fetches == 10

    async def test_zero_rate_limit_uses_default(self, accumulator, time_traveler):
        client = numbered_client(20)
        config = HarvesterConfig(project="p", rate_limit=0)
        assert config.rate_limit == 14
        harvester = TimeSeriesHarvester(config, client=client)

        await harvester.gather(accumulator)

        call_times = client.time_series_call_times
        start = call_times[0]
        assert sum(1 for t in call_times if t - start < 0.5) == 14
        assert len(accumulator.metrics) == 20

    async def test_slow_fetches_do_not_block_dispatch(self, accumulator, time_traveler):
        client = numbered_client(4, latency=30.0)
        harvester = TimeSeriesHarvester(
            HarvesterConfig(project="p", rate_limit=14), client=client
        )

        await harvester.gather(accumulator)

        call_times = client.time_series_call_times
        assert call_times[-1] - call_times[0] < 1.0
        assert len(accumulator.metrics) == 4


class TestTimeSeriesHarvesterErrors:
    async def test_fetch_error_reported_and_siblings_complete(self, accumulator):
        client = numbered_client(3)
        failing_type = "custom.googleapis.com/app1/requests"
        client.fetch_errors[failing_type] = MonitoringAPIError(403, "permission denied")
        harvester = TimeSeriesHarvester(HarvesterConfig(project="p"), client=client)

        await harvester.gather(accumulator)

        assert len(accumulator.errors) == 1
        error = accumulator.errors[0]
        assert isinstance(error, FetchError)
        assert error.config.measurement == "custom.googleapis.com/app1"
        assert error.config.field_key == "requests"
        assert [m.name for m in accumulator.metrics] == [
            "custom.googleapis.com/app0",
            "custom.googleapis.com/app2",
        ]
        summary = accumulator.get_error_summary()
        assert summary[0].error_details.code == 403
        assert summary[0].count == 1

    async def test_mid_stream_error_keeps_samples_so_far(self, accumulator):
        metric_type = "custom.googleapis.com/app0/requests"
        client = FakeMetricClient(
            descriptors=[make_descriptor(metric_type)],
            series={
                metric_type: [
                    make_series(
                        [(DEFAULT_POINT_TIME, {"doubleValue": 1.0})],
                        resource_labels={"zone": "a"},
                    ),
                    make_series(
                        [(DEFAULT_POINT_TIME, {"doubleValue": 2.0})],
                        resource_labels={"zone": "b"},
                    ),
                ]
            },
            mid_stream_errors={metric_type: RuntimeError("stream reset")},
        )
        harvester = TimeSeriesHarvester(HarvesterConfig(project="p"), client=client)

        await harvester.gather(accumulator)

        assert accumulator.errors == []
        assert len(accumulator.metrics) == 1
        assert accumulator.metrics[0].tags["zone"] == "a"

    async def test_discovery_error_fails_cycle(self, harvester_config, accumulator):
        client = FakeMetricClient(descriptor_error=MonitoringAPIError(500, "backend"))
        harvester = TimeSeriesHarvester(harvester_config, client=client)

        with pytest.raises(DiscoveryError, match="backend"):
            await harvester.gather(accumulator)

        assert accumulator.metrics == []
        assert client.time_series_requests == []

    async def test_client_factory_error_fails_cycle(self, harvester_config, accumulator):
        async def failing_factory(project: str):
            raise RuntimeError("no credentials")

        harvester = TimeSeriesHarvester(harvester_config, client_factory=failing_factory)

        with pytest.raises(InitializationError, match="no credentials"):
            await harvester.gather(accumulator)

    async def test_initialization_error_passes_through(self, harvester_config, accumulator):
        error = InitializationError("missing token")

        async def failing_factory(project: str):
            raise error

        harvester = TimeSeriesHarvester(harvester_config, client_factory=failing_factory)

        with pytest.raises(InitializationError) as exc_info:
            await harvester.gather(accumulator)

        assert exc_info.value is error


class TestTimeSeriesHarvesterLifecycle:
    async def test_client_created_once_by_factory(self, harvester_config, gauge_client, accumulator):
        calls = []

        async def factory(project: str):
            calls.append(project)
            return gauge_client

        harvester = TimeSeriesHarvester(harvester_config, client_factory=factory)

        await harvester.gather(accumulator)
        await harvester.gather(accumulator)

        assert calls == [DEFAULT_PROJECT]

    async def test_close_releases_client(self, harvester_config, gauge_client, accumulator):
        harvester = TimeSeriesHarvester(harvester_config, client=gauge_client)
        await harvester.gather(accumulator)

        await harvester.close()

        assert gauge_client.closed
        assert harvester.client is None

    async def test_close_without_client(self, harvester_config):
        harvester = TimeSeriesHarvester(harvester_config, client_factory=None)

        await harvester.close()

        assert harvester.client is None

    async def test_cancel_stops_dispatch(self, accumulator, time_traveler):
        client = numbered_client(10)
        harvester = TimeSeriesHarvester(
            HarvesterConfig(project="p", rate_limit=1), client=client
        )

        async def cancel_soon():
            while len(client.time_series_requests) < 2:
                await asyncio.sleep(0.1)
            harvester.cancel()

        await asyncio.gather(harvester.gather(accumulator), cancel_soon())

        assert len(client.time_series_requests) < 10
        assert len(accumulator.metrics) == len(client.time_series_requests)
        assert accumulator.errors == []

    async def test_cancelled_cycle_leaves_no_fetch_tasks(self, accumulator, time_traveler):
        client = numbered_client(5)
        list_time_series = client.list_time_series
        never_set = asyncio.Event()
        fetch_tasks: list[asyncio.Task] = []

        async def blocking_list_time_series(request):
            fetch_tasks.append(asyncio.current_task())
            listing = await list_time_series(request)
            await never_set.wait()
            return listing

        client.list_time_series = blocking_list_time_series
        harvester = TimeSeriesHarvester(
            HarvesterConfig(project="p", rate_limit=1), client=client
        )

        gather_task = asyncio.create_task(harvester.gather(accumulator))
        while len(fetch_tasks) < 2:
            await asyncio.sleep(0.1)

        gather_task.cancel()
        with pytest.raises(asyncio.CancelledError):
            await gather_task

        assert len(fetch_tasks) < 5
        assert all(task.done() for task in fetch_tasks)
        assert client.completed_fetches == 0
        assert accumulator.metrics == []

    async def test_new_cycle_after_cancel_runs(self, harvester_config, gauge_client):
        harvester = TimeSeriesHarvester(harvester_config, client=gauge_client)
        harvester.cancel()
        accumulator = MetricAccumulator()

        await harvester.gather(accumulator)

        assert len(accumulator.metrics) == 1
