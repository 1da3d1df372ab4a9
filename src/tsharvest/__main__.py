# SPDX-FileCopyrightText: Copyright (c) 2025-2026 NVIDIA CORPORATION & AFFILIATES. All rights reserved.
# SPDX-License-Identifier: Apache-2.0

import sys

from tsharvest.cli import app


def main() -> int:
    return app(sys.argv[1:])


if __name__ == "__main__":
    sys.exit(main())
