# SPDX-FileCopyrightText: Copyright (c) 2025-2026 NVIDIA CORPORATION & AFFILIATES. All rights reserved.
# SPDX-License-Identifier: Apache-2.0
import asyncio
from collections.abc import Sequence

from tsharvest.common.config import HarvesterConfig, LabelFilter, ListTimeSeriesFilter
from tsharvest.common.constants import FILTER_FUNCTIONS
from tsharvest.common.exceptions import DiscoveryError
from tsharvest.common.mixins import HarvestLoggerMixin
from tsharvest.common.models import MetricDescriptor
from tsharvest.common.protocols import MetricClientProtocol
from tsharvest.common.utils import is_cancelled


def include_exclude(
    key: str, includes: Sequence[str], excludes: Sequence[str]
) -> bool:
    """Decide whether a key passes prefix based include/exclude lists.

    A non-empty include list wins: the key must start with one of its prefixes.
    Otherwise the key must not start with any exclude prefix.
    """
    if includes:
        return any(key.startswith(prefix) for prefix in includes)
    if excludes:
        return not any(key.startswith(prefix) for prefix in excludes)
    return True


def build_descriptor_filters(include_prefixes: Sequence[str]) -> list[str]:
    """Server side filters used to list metric descriptors.

    One filter per include prefix. Without include prefixes a single empty
    filter lists every descriptor of the project.
    """
    if not include_prefixes:
        return [""]
    return [
        f'metric.type = starts_with("{_escape(prefix)}")'
        for prefix in include_prefixes
    ]


def build_time_series_filter(
    metric_type: str, label_filter: ListTimeSeriesFilter | None = None
) -> str:
    """Filter selecting the time series of one metric type.

    Resource label clauses are appended before metric label clauses. A single
    clause is AND-ed as is, several clauses are OR-ed inside parentheses.
    """
    filter_string = f'metric.type = "{metric_type}"'
    if label_filter is None:
        return filter_string

    for scope, labels in (
        ("resource", label_filter.resource_labels),
        ("metric", label_filter.metric_labels),
    ):
        clauses = [_label_clause(scope, label) for label in labels]
        if len(clauses) == 1:
            filter_string += f" AND {clauses[0]}"
        elif clauses:
            filter_string += f" AND ({' OR '.join(clauses)})"
    return filter_string


def _label_clause(scope: str, label: LabelFilter) -> str:
    if include_exclude(label.value, FILTER_FUNCTIONS, ()):
        return f"{scope}.labels.{label.key} = {label.value}"
    return f'{scope}.labels.{label.key} = "{label.value}"'


def _escape(value: str) -> str:
    return value.replace("\\", "\\\\").replace('"', '\\"')


class MetricTypeDiscovery(HarvestLoggerMixin):
    """Lists the metric descriptors a harvester should collect."""

    def __init__(self, config: HarvesterConfig, **kwargs) -> None:
        super().__init__(**kwargs)
        self.config = config

    async def discover(
        self,
        client: MetricClientProtocol,
        cancel_event: asyncio.Event | None = None,
    ) -> list[MetricDescriptor]:
        """List the accepted metric descriptors, in API order.

        Raises:
            DiscoveryError: If a descriptor listing cannot be started.
        """
        descriptors: list[MetricDescriptor] = []
        for descriptor_filter in build_descriptor_filters(
            self.config.metric_type_prefix_include
        ):
            try:
                listing = await client.list_metric_descriptors(
                    self.config.project_name, descriptor_filter
                )
            except Exception as e:
                raise DiscoveryError(f"list metric descriptors: {e}") from e

            try:
                async for descriptor in listing:
                    # Server side filtered listings are already restricted to the include prefixes
                    if descriptor_filter or include_exclude(
                        descriptor.type,
                        self.config.metric_type_prefix_include,
                        self.config.metric_type_prefix_exclude,
                    ):
                        descriptors.append(descriptor)
                    if is_cancelled(cancel_event):
                        break
            except Exception as e:
                self.error(
                    f"Failed iterating metric descriptors {descriptor_filter!r}: {e!r}"
                )

            if is_cancelled(cancel_event):
                break

        self.debug(lambda: f"Discovered {len(descriptors)} metric descriptors")
        return descriptors
