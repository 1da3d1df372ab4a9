# SPDX-FileCopyrightText: Copyright (c) 2025-2026 NVIDIA CORPORATION & AFFILIATES. All rights reserved.
# SPDX-License-Identifier: Apache-2.0
from tests.harness.fake_metric_client import (
    FakeMetricClient,
    make_descriptor,
    make_series,
)
from tests.harness.time_traveler import TimeTraveler

__all__ = [
    "FakeMetricClient",
    "TimeTraveler",
    "make_descriptor",
    "make_series",
]
