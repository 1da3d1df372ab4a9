# SPDX-FileCopyrightText: Copyright (c) 2025-2026 NVIDIA CORPORATION & AFFILIATES. All rights reserved.
# SPDX-License-Identifier: Apache-2.0
"""Rich console logging for the harvester CLI.

Usage::

    from tsharvest.common.logging import setup_rich_logging

    setup_rich_logging(HarvestLogLevel.DEBUG, log_file=Path("harvest.log"))
"""

import logging
from datetime import datetime
from pathlib import Path

from rich.console import Console, ConsoleRenderable, Group
from rich.logging import RichHandler
from rich.text import Text
from rich.traceback import Traceback

from tsharvest.common.enums import HarvestLogLevel
from tsharvest.common.environment import Environment
from tsharvest.common.harvest_logger import _TRACE, HarvestLogger

_logger = HarvestLogger(__name__)


def _level_number(level: HarvestLogLevel | str | int) -> int:
    if isinstance(level, int):
        return level
    level = str(level).upper()
    if level == HarvestLogLevel.TRACE:
        return _TRACE
    return logging.getLevelName(level)


def setup_rich_logging(
    log_level: HarvestLogLevel | str | int = HarvestLogLevel.INFO,
    log_file: Path | None = None,
    console: Console | None = None,
) -> None:
    """Set up rich logging on the root logger, replacing any existing handlers."""
    level = _level_number(log_level)
    root_logger = logging.getLogger()
    root_logger.setLevel(level)

    # Remove all existing handlers to avoid duplicate logs
    for existing_handler in root_logger.handlers[:]:
        root_logger.removeHandler(existing_handler)

    rich_handler = CustomRichHandler(
        rich_tracebacks=True,
        show_path=False,
        console=console or Console(stderr=True),
        show_time=False,
        show_level=False,
        tracebacks_show_locals=False,
    )
    rich_handler.setLevel(level)
    root_logger.addHandler(rich_handler)

    if log_file is not None:
        root_logger.addHandler(create_file_handler(log_file, level))

    _logger.debug(lambda: f"Logging initialized with level: {log_level}")


def create_file_handler(log_file: Path, level: str | int) -> logging.FileHandler:
    """Configure a file handler for logging."""
    log_file.parent.mkdir(parents=True, exist_ok=True)

    file_handler = logging.FileHandler(log_file, encoding="utf-8")
    file_handler.setLevel(level)
    file_handler.setFormatter(
        logging.Formatter(
            "%(asctime)s - %(name)s - %(levelname)s - %(message)s",
            datefmt="%Y-%m-%d %H:%M:%S",
        )
    )
    return file_handler


class CustomRichHandler(RichHandler):
    """Rich logging handler rendering `HH:MM:SS.mmm LEVEL    message (logger_name:lineno)`."""

    LOG_LEVEL_STYLES = {
        "TRACE": "dim",
        "DEBUG": "dim",
        "INFO": "cyan",
        "WARNING": "yellow",
        "ERROR": "red",
        "CRITICAL": "bold red",
    }

    def render(
        self,
        *,
        record: logging.LogRecord,
        traceback: Traceback | None,
        message_renderable: ConsoleRenderable,
    ) -> ConsoleRenderable:
        timestamp = datetime.fromtimestamp(record.created).strftime("%H:%M:%S.%f")[:-3]
        level_style = self.LOG_LEVEL_STYLES.get(record.levelname, "white")
        message = record.getMessage()[: Environment.LOGGING.MAX_CONSOLE_MESSAGE_LENGTH]

        formatted_log = Text.assemble(
            Text(f"{timestamp} ", style="log.time"),
            Text(f"{record.levelname:<8} ", style=level_style),
            self.highlighter(Text(message)),
            Text(f" ({record.name}:{record.lineno})", style="dim italic"),
        )
        return Group(formatted_log, traceback) if traceback else formatted_log

    def emit(self, record: logging.LogRecord) -> None:
        traceback = None
        if (
            self.rich_tracebacks
            and record.exc_info
            and record.exc_info != (None, None, None)
        ):
            traceback = Traceback.from_exception(*record.exc_info)

        log_renderable = self.render(
            record=record, traceback=traceback, message_renderable=Text("")
        )
        self.console.print(log_renderable)
