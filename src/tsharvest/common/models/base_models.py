# SPDX-FileCopyrightText: Copyright (c) 2025-2026 NVIDIA CORPORATION & AFFILIATES. All rights reserved.
# SPDX-License-Identifier: Apache-2.0
from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


class HarvestBaseModel(BaseModel):
    """Base model for all tsharvest data models."""

    model_config = ConfigDict(arbitrary_types_allowed=True)


class MonitoringAPIModel(HarvestBaseModel):
    """Base model for objects exchanged with the monitoring API.

    Fields are declared in snake_case and accept the API's camelCase JSON names.
    """

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        extra="ignore",
    )
