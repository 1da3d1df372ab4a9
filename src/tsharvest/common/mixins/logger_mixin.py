# SPDX-FileCopyrightText: Copyright (c) 2025-2026 NVIDIA CORPORATION & AFFILIATES. All rights reserved.
# SPDX-License-Identifier: Apache-2.0
from collections.abc import Callable

from tsharvest.common.harvest_logger import HarvestLogger

# One frame deeper than HarvestLogger's default, so records point at the caller of the mixin method
_STACKLEVEL = 4


class HarvestLoggerMixin:
    """Mixin giving a class `self.debug(...)`, `self.error(...)` and friends.

    The logger name defaults to the class name and can be overridden with the
    `logger_name` keyword argument.
    """

    def __init__(self, logger_name: str | None = None, **kwargs) -> None:
        self.logger = HarvestLogger(logger_name or self.__class__.__name__)
        super().__init__(**kwargs)

    @property
    def is_trace_enabled(self) -> bool:
        return self.logger.is_trace_enabled

    @property
    def is_debug_enabled(self) -> bool:
        return self.logger.is_debug_enabled

    def trace_or_debug(
        self,
        trace_msg: str | Callable[..., str],
        debug_msg: str | Callable[..., str],
    ) -> None:
        self.logger.trace_or_debug(trace_msg, debug_msg, stacklevel=_STACKLEVEL)

    def trace(self, message: str | Callable[..., str], *args, **kwargs) -> None:
        kwargs.setdefault("stacklevel", _STACKLEVEL)
        self.logger.trace(message, *args, **kwargs)

    def debug(self, message: str | Callable[..., str], *args, **kwargs) -> None:
        kwargs.setdefault("stacklevel", _STACKLEVEL)
        self.logger.debug(message, *args, **kwargs)

    def info(self, message: str | Callable[..., str], *args, **kwargs) -> None:
        kwargs.setdefault("stacklevel", _STACKLEVEL)
        self.logger.info(message, *args, **kwargs)

    def warning(self, message: str | Callable[..., str], *args, **kwargs) -> None:
        kwargs.setdefault("stacklevel", _STACKLEVEL)
        self.logger.warning(message, *args, **kwargs)

    def error(self, message: str | Callable[..., str], *args, **kwargs) -> None:
        kwargs.setdefault("stacklevel", _STACKLEVEL)
        self.logger.error(message, *args, **kwargs)

    def exception(self, message: str | Callable[..., str], *args, **kwargs) -> None:
        kwargs.setdefault("stacklevel", _STACKLEVEL)
        self.logger.exception(message, *args, **kwargs)

    def critical(self, message: str | Callable[..., str], *args, **kwargs) -> None:
        kwargs.setdefault("stacklevel", _STACKLEVEL)
        self.logger.critical(message, *args, **kwargs)
