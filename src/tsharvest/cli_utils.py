# SPDX-FileCopyrightText: Copyright (c) 2025-2026 NVIDIA CORPORATION & AFFILIATES. All rights reserved.
# SPDX-License-Identifier: Apache-2.0
import sys
from collections.abc import Iterator
from contextlib import contextmanager

from rich.console import Console
from rich.panel import Panel
from rich.text import Text


@contextmanager
def exit_on_error(
    title: str = "Error",
    exit_code: int = 1,
    console: Console | None = None,
) -> Iterator[None]:
    """Print any escaping exception as a rich panel and exit the process.

    Args:
        title: Title of the error panel.
        exit_code: Exit code used when an exception escapes.
        console: Console to print to. Defaults to stderr.
    """
    try:
        yield
    except KeyboardInterrupt:
        sys.exit(130)
    except Exception as e:
        console = console or Console(stderr=True)
        console.print(
            Panel(
                Text(f"{e.__class__.__name__}: {e}", style="bold red"),
                title=title,
                title_align="left",
                border_style="red",
                expand=False,
            )
        )
        sys.exit(exit_code)
