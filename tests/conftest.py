# SPDX-FileCopyrightText: Copyright (c) 2025-2026 NVIDIA CORPORATION & AFFILIATES. All rights reserved.
# SPDX-License-Identifier: Apache-2.0

"""
Shared test configuration and fixtures for all test types.

ONLY ADD FIXTURES HERE THAT ARE USED IN ALL TEST TYPES.
DO NOT ADD FIXTURES THAT ARE ONLY USED IN A SPECIFIC TEST TYPE.
"""

import logging

# Keep the self statistics and client chatter out of the captured test logs
for _noisy_logger in ["GoogleMonitoringClient", "aiohttp"]:
    logging.getLogger(_noisy_logger).setLevel(logging.ERROR)
