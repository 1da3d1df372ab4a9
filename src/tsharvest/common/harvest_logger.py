# SPDX-FileCopyrightText: Copyright (c) 2025-2026 NVIDIA CORPORATION & AFFILIATES. All rights reserved.
# SPDX-License-Identifier: Apache-2.0
"""Lazy-evaluating logger used across tsharvest.

Messages may be passed either as plain strings or as zero-argument callables.
Callables are only evaluated when the level is enabled, so expensive f-strings
inside hot loops (per-point, per-page) cost nothing when the level is off::

    _logger = HarvestLogger(__name__)
    _logger.debug(lambda: f"Built {len(configs)} configs: {configs}")
"""

import logging
from collections.abc import Callable

_TRACE = logging.DEBUG - 5
_DEBUG = logging.DEBUG
_INFO = logging.INFO
_WARNING = logging.WARNING
_ERROR = logging.ERROR
_CRITICAL = logging.CRITICAL

logging.addLevelName(_TRACE, "TRACE")


class HarvestLogger:
    """Wrapper around `logging.Logger` adding a TRACE level and lazy messages."""

    def __init__(self, logger_name: str) -> None:
        self.logger_name = logger_name
        self._logger = logging.getLogger(logger_name)

    @property
    def is_trace_enabled(self) -> bool:
        return self._logger.isEnabledFor(_TRACE)

    @property
    def is_debug_enabled(self) -> bool:
        return self._logger.isEnabledFor(_DEBUG)

    def log(
        self, level: int, message: str | Callable[..., str], *args, **kwargs
    ) -> None:
        if not self._logger.isEnabledFor(level):
            return
        if callable(message):
            message = message()
        # stacklevel=3 reports the caller of trace()/debug()/... instead of this wrapper
        kwargs.setdefault("stacklevel", 3)
        self._logger.log(level, message, *args, **kwargs)

    def trace_or_debug(
        self,
        trace_msg: str | Callable[..., str],
        debug_msg: str | Callable[..., str],
        **kwargs,
    ) -> None:
        """Log the detailed message at TRACE if enabled, otherwise the short one at DEBUG."""
        if self.is_trace_enabled:
            self.log(_TRACE, trace_msg, **kwargs)
        else:
            self.log(_DEBUG, debug_msg, **kwargs)

    def trace(self, message: str | Callable[..., str], *args, **kwargs) -> None:
        self.log(_TRACE, message, *args, **kwargs)

    def debug(self, message: str | Callable[..., str], *args, **kwargs) -> None:
        self.log(_DEBUG, message, *args, **kwargs)

    def info(self, message: str | Callable[..., str], *args, **kwargs) -> None:
        self.log(_INFO, message, *args, **kwargs)

    def warning(self, message: str | Callable[..., str], *args, **kwargs) -> None:
        self.log(_WARNING, message, *args, **kwargs)

    def error(self, message: str | Callable[..., str], *args, **kwargs) -> None:
        self.log(_ERROR, message, *args, **kwargs)

    def exception(self, message: str | Callable[..., str], *args, **kwargs) -> None:
        kwargs.setdefault("exc_info", True)
        self.log(_ERROR, message, *args, **kwargs)

    def critical(self, message: str | Callable[..., str], *args, **kwargs) -> None:
        self.log(_CRITICAL, message, *args, **kwargs)
