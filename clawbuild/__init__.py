# Author : Eshan Roy <eshanized@proton.me>
# SPDX-License-Identifier: MIT

"""
clawbuild: release build driver for the clawrs desktop app.

Picks the right acceleration backend for the host, runs `cargo build --release`
and reports where the executable landed.
"""

__version__ = "0.1.0"
