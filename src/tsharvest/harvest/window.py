# SPDX-FileCopyrightText: Copyright (c) 2025-2026 NVIDIA CORPORATION & AFFILIATES. All rights reserved.
# SPDX-License-Identifier: Apache-2.0
from datetime import datetime, timedelta

from tsharvest.common.environment import Environment
from tsharvest.common.utils import utc_now


class WindowScheduler:
    """Computes the time range every collection cycle asks the API for.

    The end of a window always lags `delay` behind now so the API has time to
    settle late points. Its start depends on the configuration:

    - a fixed `window` makes every cycle look back exactly that far
    - otherwise the first cycle looks back the default window, and every later
      cycle starts where the previous one ended, so consecutive windows abut
    """

    def __init__(
        self,
        delay: timedelta,
        window: timedelta | None = None,
        default_window: timedelta | None = None,
    ) -> None:
        self.delay = delay
        self.window = window
        self.default_window = default_window or timedelta(
            seconds=Environment.HARVEST.DEFAULT_WINDOW
        )

    def next_window(
        self, previous_end: datetime | None, now: datetime | None = None
    ) -> tuple[datetime, datetime]:
        """Return the `(start, end)` of the next collection window."""
        now = now or utc_now()
        end = now - self.delay
        if self.window:
            start = end - self.window
        elif previous_end is None:
            start = end - self.default_window
        else:
            start = previous_end
        return start, end
