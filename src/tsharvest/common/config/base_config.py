# SPDX-FileCopyrightText: Copyright (c) 2025-2026 NVIDIA CORPORATION & AFFILIATES. All rights reserved.
# SPDX-License-Identifier: Apache-2.0
from pydantic import BaseModel, ConfigDict


class BaseConfig(BaseModel):
    """Base class for all user-facing configuration models.

    Unknown keys are rejected so that typos in a config file surface as errors
    instead of silently falling back to defaults.
    """

    model_config = ConfigDict(
        extra="forbid",
        validate_assignment=True,
        validate_default=True,
    )
