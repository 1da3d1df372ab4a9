# SPDX-FileCopyrightText: Copyright (c) 2025-2026 NVIDIA CORPORATION & AFFILIATES. All rights reserved.
# SPDX-License-Identifier: Apache-2.0
from pydantic import ConfigDict, Field
from typing_extensions import Self

from tsharvest.common.models.base_models import HarvestBaseModel


class ErrorDetails(HarvestBaseModel):
    """Encapsulates details about an error. Hashable so identical errors can be counted."""

    model_config = ConfigDict(frozen=True)

    code: int | None = Field(
        default=None,
        description="The error code, if the error came from the monitoring API.",
    )
    type: str | None = Field(
        default=None,
        description="The type of the error, usually the exception class name.",
    )
    message: str = Field(..., description="The error message.")

    @classmethod
    def from_exception(cls, e: BaseException) -> Self:
        """Create an error details object from an exception."""
        return cls(
            code=getattr(e, "status", None),
            type=e.__class__.__name__,
            message=str(e),
        )


class ErrorDetailsCount(HarvestBaseModel):
    """Count of the number of times an error occurred."""

    error_details: ErrorDetails = Field(..., description="The details of the error.")
    count: int = Field(..., ge=1, description="The count of the number of times the error occurred.")
