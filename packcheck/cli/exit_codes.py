# Author : Eshan Roy <eshanized@proton.me>
# SPDX-License-Identifier: MIT

"""CLI exit codes. These are the only codes `packcheck` exits with."""

SUCCESS: int = 0
USER_ERROR: int = 1
CONFIG_ERROR: int = 2
RUNTIME_ERROR: int = 3
VALIDATION_ERROR: int = 4
