# Author : Eshan Roy <eshanized@proton.me>
# SPDX-License-Identifier: MIT

"""
Path helpers for locating the cargo project and its build output.
"""

from pathlib import Path
from typing import Optional

from clawbuild.driver.platforms import Platform

CARGO_MANIFEST = "Cargo.toml"


def executable_filename(executable_name: str, platform: Platform) -> str:
    """Windows binaries get a .exe suffix, everything else is bare."""
    if platform is Platform.WINDOWS and not executable_name.endswith(".exe"):
        return f"{executable_name}.exe"
    return executable_name


def artifact_path(
    executable_name: str,
    platform: Platform,
    target_dir: str = "target",
    optimization: str = "release",
    project_dir: Optional[Path] = None,
) -> Path:
    """
    Where cargo writes the finished binary: `<target_dir>/<profile>/<name>`.

    The path is relative unless a project directory is given, matching what
    we tell the user after a build.
    """
    relative = Path(target_dir) / optimization / executable_filename(executable_name, platform)
    if project_dir is None:
        return relative
    return project_dir / relative
