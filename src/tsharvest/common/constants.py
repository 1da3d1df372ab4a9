# SPDX-FileCopyrightText: Copyright (c) 2025-2026 NVIDIA CORPORATION & AFFILIATES. All rights reserved.
# SPDX-License-Identifier: Apache-2.0

"""Constants shared by the harvesting components."""

# Maximum listing calls per second. The monitoring API allows 14 reads/s per project.
DEFAULT_RATE_LIMIT = 14

# Field key used when a metric type contains no usable `/` separator
DEFAULT_FIELD_KEY = "value"

# Upper bounds reported for the overflow and underflow buckets of a distribution
OVERFLOW_BUCKET_BOUND = 1e128
UNDERFLOW_BUCKET_BOUND = 0.0

# Monitoring filter functions. Label values starting with one are emitted unquoted.
FILTER_FUNCTIONS = ("starts_with", "ends_with", "has_substring", "one_of")

# Tag carrying the measurement name on histogram metrics
MEASUREMENT_TAG_KEY = "input_metric_group"

# Prefix of the self-statistics counters of the monitoring client
SELF_STAT_METRIC_NAME = "stackdriver"
