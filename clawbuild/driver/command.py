# Author : Eshan Roy <eshanized@proton.me>
# SPDX-License-Identifier: MIT

"""
Mapping a BuildProfile onto a toolchain command line.

The shape of the command is always:

    cargo build --release [--features <backend>] [--manifest-path <dir>/Cargo.toml] [extra...]

The backend flag only shows up when the backend has to be switched on
explicitly. On macOS the toolchain already builds with Metal, so a default
macOS build is a plain `cargo build --release`. When a flag is needed we
also pass the matching ggml define through CMAKE_ARGS, which is how the
bundled llama.cpp build picks the backend up. Building for the CPU on macOS
needs no feature but does need Metal switched off the same way.
"""

import os
import shlex
from collections.abc import Mapping
from dataclasses import dataclass, field
from pathlib import Path
from typing import Optional

from clawbuild.config.schema import BuildConfig, ToolchainConfig
from clawbuild.driver.platforms import requires_explicit_enable, toolchain_default_backend
from clawbuild.driver.profile import BuildProfile
from clawbuild.utils.paths import CARGO_MANIFEST


@dataclass(frozen=True)
class ToolchainCommand:
    """One fully-formed toolchain invocation, ready to hand to an executor."""

    program: str
    args: tuple[str, ...]
    env: dict[str, str] = field(default_factory=dict)

    @property
    def argv(self) -> list[str]:
        return [self.program, *self.args]

    def describe(self) -> str:
        """Shell-style rendering for logs and --dry-run output."""
        env_prefix = " ".join(
            f"{key}={shlex.quote(value)}" for key, value in sorted(self.env.items())
        )
        line = shlex.join(self.argv)
        return f"{env_prefix} {line}" if env_prefix else line


def _cmake_args(defines: list[str], environ: Mapping[str, str]) -> str:
    """Append our defines to whatever CMAKE_ARGS the caller already had."""
    parts: list[str] = []
    if environ.get("CMAKE_ARGS", "").strip():
        parts.append(environ["CMAKE_ARGS"].strip())
    parts.extend(defines)
    return " ".join(parts)


def build_command(
    profile: BuildProfile,
    build: BuildConfig,
    toolchain: ToolchainConfig,
    environ: Optional[Mapping[str, str]] = None,
) -> ToolchainCommand:
    """
    Turn a resolved profile into the exact command we'll run.

    Args:
        profile: The resolved BuildProfile.
        build: Build settings (project directory).
        toolchain: Toolchain settings (which program to launch).
        environ: The environment the build will inherit, os.environ when
                 not given. Only consulted to preserve an existing
                 CMAKE_ARGS value.

    Returns:
        A ToolchainCommand. Building it has no side effects.
    """
    if environ is None:
        environ = os.environ

    args: list[str] = ["build", f"--{profile.optimization}"]
    env: dict[str, str] = {}

    backend = profile.backend
    if requires_explicit_enable(profile.platform, backend):
        defines: list[str] = []
        if backend.cargo_feature is not None:
            args.extend(["--features", backend.cargo_feature])
        if backend.cmake_define is not None:
            defines.append(f"-D{backend.cmake_define}=on")
        # Opting out of a backend the toolchain would otherwise turn on.
        implicit = toolchain_default_backend(profile.platform)
        if implicit.cmake_define is not None:
            defines.append(f"-D{implicit.cmake_define}=off")
        if defines:
            env["CMAKE_ARGS"] = _cmake_args(defines, environ)

    if build.project_dir is not None:
        manifest = Path(build.project_dir) / CARGO_MANIFEST
        args.extend(["--manifest-path", str(manifest)])

    args.extend(profile.extra_args)

    return ToolchainCommand(
        program=toolchain.program,
        args=tuple(args),
        env=env,
    )
