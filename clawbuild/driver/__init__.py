# Author : Eshan Roy <eshanized@proton.me>
# SPDX-License-Identifier: MIT

"""
Build driver package.

Subsystems:
  - platforms: host platforms, acceleration backends and the support matrix
  - profile: turning a platform plus an optional override into a BuildProfile
  - command: mapping a BuildProfile onto toolchain arguments
  - executor: the child-process capability (real and injectable)
  - core: invoke/run orchestration and the one-shot state machine
  - exceptions: the BuildError taxonomy
"""
