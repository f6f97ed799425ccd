# Author : Eshan Roy <eshanized@proton.me>
# SPDX-License-Identifier: MIT

"""
CLI exit codes.

A failed toolchain run doesn't use any of these: its own exit status is
passed straight through, so scripts wrapping clawbuild see what cargo said.
"""

SUCCESS: int = 0
USER_ERROR: int = 1
CONFIG_ERROR: int = 2
RUNTIME_ERROR: int = 3
INTERRUPTED: int = 130
