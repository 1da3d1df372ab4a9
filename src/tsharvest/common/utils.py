# SPDX-FileCopyrightText: Copyright (c) 2025-2026 NVIDIA CORPORATION & AFFILIATES. All rights reserved.
# SPDX-License-Identifier: Apache-2.0
import asyncio
import time
from datetime import datetime, timezone


def utc_now() -> datetime:
    """Current wall-clock time as an aware UTC datetime.

    Goes through `time.time()` so tests can control it by patching the clock.
    """
    return datetime.fromtimestamp(time.time(), tz=timezone.utc)


def format_rfc3339(value: datetime) -> str:
    """Format a datetime the way the monitoring API expects interval bounds."""
    if value.tzinfo is None:
        value = value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc).strftime("%Y-%m-%dT%H:%M:%S.%fZ")


def is_cancelled(cancel_event: asyncio.Event | None) -> bool:
    """Whether an optional cancellation event has been set."""
    return cancel_event is not None and cancel_event.is_set()


def truncate_to_seconds(value: datetime) -> datetime:
    return value.replace(microsecond=0)
