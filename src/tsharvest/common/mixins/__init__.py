# SPDX-FileCopyrightText: Copyright (c) 2025-2026 NVIDIA CORPORATION & AFFILIATES. All rights reserved.
# SPDX-License-Identifier: Apache-2.0

from tsharvest.common.mixins.logger_mixin import HarvestLoggerMixin

__all__ = ["HarvestLoggerMixin"]
