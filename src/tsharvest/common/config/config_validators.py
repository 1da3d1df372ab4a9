# SPDX-FileCopyrightText: Copyright (c) 2025-2026 NVIDIA CORPORATION & AFFILIATES. All rights reserved.
# SPDX-License-Identifier: Apache-2.0
import math
import re
from datetime import timedelta
from typing import Any

_DURATION_PART_RE = re.compile(r"(\d+(?:\.\d*)?|\.\d+)(ms|h|m|s)")

_DURATION_UNITS = {
    "h": 3600.0,
    "m": 60.0,
    "s": 1.0,
    "ms": 0.001,
}


def parse_duration(value: Any) -> timedelta | None:
    """
    Parses a duration from a timedelta, a number of seconds, or a string.

    Strings can be plain numbers (seconds) or a sequence of `<number><unit>` parts
    with units `h`, `m`, `s` and `ms`, for example `"90s"`, `"5m"` or `"1h30m"`.

    Args:
        value: The value to parse.

    Returns:
        The parsed duration, or None if the value is None.

    Raises:
        ValueError: If the value cannot be parsed or is negative.
    """
    if value is None or isinstance(value, timedelta):
        duration = value
    elif isinstance(value, bool):
        raise ValueError(f"Invalid duration: {value!r}")
    elif isinstance(value, int | float):
        duration = timedelta(seconds=value)
    elif isinstance(value, str):
        duration = _parse_duration_str(value.strip())
    else:
        raise ValueError(f"Invalid duration: {value!r}")

    if duration is not None and duration < timedelta(0):
        raise ValueError(f"Duration must not be negative: {value!r}")
    return duration


def _parse_duration_str(value: str) -> timedelta:
    try:
        seconds = float(value)
    except ValueError:
        pass
    else:
        if not math.isfinite(seconds):
            raise ValueError(f"Invalid duration: {value!r}")
        return timedelta(seconds=seconds)

    seconds = 0.0
    position = 0
    for match in _DURATION_PART_RE.finditer(value):
        if match.start() != position:
            break
        seconds += float(match.group(1)) * _DURATION_UNITS[match.group(2)]
        position = match.end()

    if not value or position != len(value):
        raise ValueError(
            f"Invalid duration: {value!r}. Expected a number of seconds or a value like '90s', '5m' or '1h30m'"
        )
    return timedelta(seconds=seconds)


def parse_str_or_list(value: Any) -> list[Any]:
    """
    Parses the input to ensure it is a list.

    - If the input is a string, it is split by commas and each part is stripped.
    - If the input is a list or tuple, string entries are split the same way.
    - None becomes an empty list.

    Raises:
        ValueError: If the input is of any other type.
    """
    if value is None:
        return []
    if isinstance(value, str):
        return [part.strip() for part in value.split(",") if part.strip()]
    if isinstance(value, list | tuple):
        result = []
        for item in value:
            if isinstance(item, str):
                result.extend(parse_str_or_list(item))
            else:
                result.append(item)
        return result
    raise ValueError(f"User Config: {value} - must be a string or list")


def parse_label_filter(value: Any) -> Any:
    """
    Parses a single label filter.

    Strings of the form `key=value` become `{"key": ..., "value": ...}`. Only the
    first `=` separates key and value, so values such as `one_of("a=b")` survive.
    Anything else is passed through for the model to validate.
    """
    if not isinstance(value, str):
        return value
    key, sep, label_value = value.partition("=")
    if not sep or not key.strip():
        raise ValueError(f"Invalid label filter: {value!r}. Expected 'key=value'")
    return {"key": key.strip(), "value": label_value.strip()}


def parse_label_filters(value: Any) -> list[Any]:
    """Parses a list of label filters, accepting a single filter as well."""
    if value is None:
        return []
    if isinstance(value, str | dict):
        value = [value]
    if not isinstance(value, list | tuple):
        raise ValueError(f"User Config: {value} - must be a list of label filters")
    return [parse_label_filter(item) for item in value]


def default_if_unset(default: Any):
    """Returns a validator replacing None or 0 with the given default."""

    def _validator(value: Any) -> Any:
        if value is None or value == 0:
            return default
        return value

    return _validator
