# Author : Eshan Roy <eshanized@proton.me>
# SPDX-License-Identifier: MIT

"""
Errors raised by the build driver.

Every one of these is fatal to the run. Nothing in the driver catches and
retries them; the CLI maps each class onto an exit code and stops.
"""


class BuildError(Exception):
    """Base for all build driver errors."""


class UnknownBackend(BuildError):
    """Raised when a backend name doesn't match any known backend."""

    def __init__(self, name: str) -> None:
        self.name = name
        super().__init__(f"Unknown backend '{name}'")


class UnsupportedBackend(BuildError):
    """
    Raised when an explicit backend override isn't valid for the host.

    This is always raised during profile resolution, so no toolchain
    process has been started when you see it.
    """

    def __init__(self, backend: str, platform: str) -> None:
        self.backend = backend
        self.platform = platform
        super().__init__(f"Backend '{backend}' is not supported on {platform}")


class UnsupportedPlatform(BuildError):
    """Raised when the host operating system isn't one we know how to build on."""

    def __init__(self, system_name: str) -> None:
        self.system_name = system_name
        super().__init__(f"Unsupported host platform '{system_name}'")


class ToolchainFailure(BuildError):
    """
    Raised when the toolchain exits non-zero.

    The compiler output has already been streamed to the terminal, so the
    only thing we carry is the exit status.
    """

    def __init__(self, exit_status: int) -> None:
        self.exit_status = exit_status
        super().__init__(f"Toolchain exited with status {exit_status}")


class EnvironmentMissing(BuildError):
    """Raised when the toolchain executable can't be launched at all."""

    def __init__(self, program: str) -> None:
        self.program = program
        super().__init__(f"Toolchain executable '{program}' not found. Is it installed and on PATH?")


class InvalidStateTransition(BuildError):
    """Raised when a driver is asked to move between states it can't move between."""

    def __init__(self, current: str, target: str) -> None:
        self.current = current
        self.target = target
        super().__init__(f"Cannot move build from '{current}' to '{target}'")
