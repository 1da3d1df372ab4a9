# SPDX-FileCopyrightText: Copyright (c) 2025-2026 NVIDIA CORPORATION & AFFILIATES. All rights reserved.
# SPDX-License-Identifier: Apache-2.0
"""Rate limited dispatch of independent fetch tasks."""

import asyncio
import time
from collections import deque
from collections.abc import Awaitable, Callable, Iterable
from typing import Any, Generic, TypeVar

from tsharvest.common.environment import Environment
from tsharvest.common.exceptions import ConfigurationError
from tsharvest.common.mixins import HarvestLoggerMixin
from tsharvest.common.utils import is_cancelled

TItem = TypeVar("TItem")


class RateLimiter:
    """Issues at most `rate` permits in any rolling window of `period` seconds.

    Keeps the monotonic timestamps of the permits issued during the last period.
    A caller asking for a permit while the window is full sleeps until the oldest
    permit falls out of it.
    """

    def __init__(self, rate: int, period: float | None = None) -> None:
        if rate < 1:
            raise ConfigurationError(f"Rate limit must be at least 1, got {rate}")
        self.rate = rate
        self.period = period or Environment.HARVEST.RATE_LIMIT_PERIOD
        self._issued: deque[float] = deque()
        self._lock = asyncio.Lock()

    def _expire(self, now: float) -> None:
        while self._issued and now - self._issued[0] >= self.period:
            self._issued.popleft()

    async def acquire(self) -> None:
        """Wait until a permit is available and take it."""
        async with self._lock:
            while True:
                now = time.monotonic()
                self._expire(now)
                if len(self._issued) < self.rate:
                    self._issued.append(now)
                    return
                await asyncio.sleep(self._issued[0] + self.period - now)


class RateLimitedDispatcher(HarvestLoggerMixin, Generic[TItem]):
    """Spawns one task per item, throttled by a `RateLimiter`.

    Items are dispatched in order. The dispatcher never waits for a spawned task
    before taking the next permit; all tasks are joined at the end.
    """

    def __init__(
        self, rate_limit: int, period: float | None = None, **kwargs
    ) -> None:
        super().__init__(**kwargs)
        self.limiter = RateLimiter(rate_limit, period)

    async def dispatch(
        self,
        items: Iterable[TItem],
        worker: Callable[[TItem], Awaitable[Any]],
        cancel_event: asyncio.Event | None = None,
    ) -> list[asyncio.Task]:
        """Spawn a task running `worker(item)` for every item, one permit each.

        Stops spawning as soon as `cancel_event` is set. Returns the spawned tasks.
        If dispatching is interrupted, the tasks already spawned are cancelled and
        joined before the exception propagates.
        """
        tasks: list[asyncio.Task] = []
        try:
            for item in items:
                if is_cancelled(cancel_event):
                    break
                await self.limiter.acquire()
                if is_cancelled(cancel_event):
                    break
                tasks.append(asyncio.create_task(worker(item)))
        except BaseException:
            for task in tasks:
                task.cancel()
            await asyncio.gather(*tasks, return_exceptions=True)
            self.debug(lambda: f"Dispatch interrupted, cancelled {len(tasks)} tasks")
            raise

        self.debug(lambda: f"Dispatched {len(tasks)} tasks")
        return tasks

    async def run(
        self,
        items: Iterable[TItem],
        worker: Callable[[TItem], Awaitable[Any]],
        cancel_event: asyncio.Event | None = None,
    ) -> list[Any]:
        """Dispatch every item and wait for all spawned tasks to finish.

        Returns the task results in dispatch order. Exceptions raised by a task are
        returned in its place instead of being raised.
        """
        tasks = await self.dispatch(items, worker, cancel_event)
        return await asyncio.gather(*tasks, return_exceptions=True)
