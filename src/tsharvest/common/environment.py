# SPDX-FileCopyrightText: Copyright (c) 2025-2026 NVIDIA CORPORATION & AFFILIATES. All rights reserved.
# SPDX-License-Identifier: Apache-2.0
"""Process-level tunables read from `TSHARVEST_*` environment variables.

These are knobs an operator rarely touches, kept out of `HarvesterConfig` so the
user-facing configuration surface stays small. Access them as nested attributes::

    Environment.GCP.PAGE_SIZE
    Environment.HARVEST.RATE_LIMIT_PERIOD
"""

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class _GCPSettings(BaseSettings):
    """Settings for the Cloud Monitoring REST client."""

    model_config = SettingsConfigDict(
        env_prefix="TSHARVEST_GCP_",
        case_sensitive=False,
    )

    API_URL: str = Field(
        default="https://monitoring.googleapis.com/v3",
        description="Base URL of the Cloud Monitoring v3 REST API",
    )
    ACCESS_TOKEN: str | None = Field(
        default=None,
        description="OAuth2 bearer token used for every request",
    )
    PAGE_SIZE: int = Field(
        default=1000,
        ge=1,
        description="Maximum number of results requested per listing page",
    )
    CONNECT_TIMEOUT: float = Field(
        default=10.0,
        gt=0,
        description="Timeout in seconds for establishing a connection",
    )
    REQUEST_TIMEOUT: float = Field(
        default=60.0,
        gt=0,
        description="Timeout in seconds for a single listing page",
    )


class _HarvestSettings(BaseSettings):
    """Settings for the harvesting engine."""

    model_config = SettingsConfigDict(
        env_prefix="TSHARVEST_HARVEST_",
        case_sensitive=False,
    )

    RATE_LIMIT_PERIOD: float = Field(
        default=1.0,
        gt=0,
        description="Length in seconds of the rolling window the rate limit applies to",
    )
    ALIGNMENT_PERIOD: int = Field(
        default=60,
        ge=1,
        description="Alignment period in seconds used for aggregated distribution requests",
    )
    DEFAULT_WINDOW: float = Field(
        default=60.0,
        gt=0,
        description="Window in seconds used on the first cycle when no window is configured",
    )


class _LoggingSettings(BaseSettings):
    """Settings for console and file logging."""

    model_config = SettingsConfigDict(
        env_prefix="TSHARVEST_LOGGING_",
        case_sensitive=False,
    )

    MAX_CONSOLE_MESSAGE_LENGTH: int = Field(
        default=4096,
        ge=80,
        description="Console log messages longer than this are truncated",
    )


class _Environment(BaseSettings):
    model_config = SettingsConfigDict(
        env_prefix="TSHARVEST_",
        case_sensitive=False,
    )

    GCP: _GCPSettings = Field(default_factory=_GCPSettings)
    HARVEST: _HarvestSettings = Field(default_factory=_HarvestSettings)
    LOGGING: _LoggingSettings = Field(default_factory=_LoggingSettings)


Environment = _Environment()
