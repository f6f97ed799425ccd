# Author : Eshan Roy <eshanized@proton.me>
# SPDX-License-Identifier: MIT

"""
Host environment detection.

This is the only place that looks at the machine we're running on. Everything
downstream takes a Platform as an explicit argument, so tests can pretend to
be on macOS from a Linux box without patching anything global.
"""

import platform
import sys
from typing import NamedTuple, Optional

from clawbuild.driver.exceptions import UnsupportedPlatform
from clawbuild.driver.platforms import Platform

MINIMUM_PYTHON_MAJOR = 3
MINIMUM_PYTHON_MINOR = 11

# platform.system() names
_SYSTEM_NAMES: dict[str, Platform] = {
    "darwin": Platform.MACOS,
    "linux": Platform.LINUX,
    "windows": Platform.WINDOWS,
}


class SystemInfo(NamedTuple):
    """Snapshot of the current system environment."""

    python_version: str
    platform: str
    architecture: str
    hostname: str


def detect_platform(system_name: Optional[str] = None) -> Platform:
    """
    Map an OS name onto a Platform.

    Args:
        system_name: The value of platform.system(). Read from the host when
                     not given.

    Raises:
        UnsupportedPlatform: For anything that isn't macOS, Linux or Windows.
    """
    name = system_name if system_name is not None else platform.system()
    try:
        return _SYSTEM_NAMES[name.strip().lower()]
    except KeyError:
        raise UnsupportedPlatform(name) from None


def get_python_version() -> tuple[int, int, int]:
    """Return the current Python version as a (major, minor, micro) tuple."""
    return sys.version_info[:3]


def check_minimum_python() -> None:
    """
    Verify we're running Python 3.11+.

    Raises:
        RuntimeError: If Python version is below 3.11.
    """
    major, minor, _ = get_python_version()
    if major < MINIMUM_PYTHON_MAJOR or (
        major == MINIMUM_PYTHON_MAJOR and minor < MINIMUM_PYTHON_MINOR
    ):
        raise RuntimeError(
            f"clawbuild requires Python >= {MINIMUM_PYTHON_MAJOR}.{MINIMUM_PYTHON_MINOR}, "
            f"but you're running {major}.{minor}. Please upgrade."
        )


def get_system_info() -> SystemInfo:
    """Collect basic system information for logging and diagnostics."""
    return SystemInfo(
        python_version=platform.python_version(),
        platform=platform.system(),
        architecture=platform.machine(),
        hostname=platform.node(),
    )
