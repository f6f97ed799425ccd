# Author : Eshan Roy <eshanized@proton.me>
# SPDX-License-Identifier: MIT

"""
Host platforms, acceleration backends, and which backends work where.

The support matrix is the single source of truth for backend selection. The
first backend listed for a platform is its default. A separate table records
what the toolchain turns on by itself: on macOS, llama.cpp's build enables
Metal automatically, so asking for Metal there needs no extra flags.
"""

from enum import Enum

from clawbuild.driver.exceptions import UnknownBackend


class Platform(str, Enum):
    """Host operating system. Detected once per run and never changed."""

    MACOS = "macos"
    LINUX = "linux"
    WINDOWS = "windows"

    @property
    def display_name(self) -> str:
        return _DISPLAY_NAMES[self]


class AccelerationBackend(str, Enum):
    """A hardware-acceleration strategy compiled into the artifact."""

    CPU = "cpu"
    METAL = "metal"
    CUDA = "cuda"
    VULKAN = "vulkan"

    @property
    def is_baseline(self) -> bool:
        return self is AccelerationBackend.CPU

    @property
    def cargo_feature(self) -> str | None:
        """Cargo feature that switches this backend on, or None for the baseline."""
        if self.is_baseline:
            return None
        return self.value

    @property
    def cmake_define(self) -> str | None:
        """ggml CMake option for this backend, or None for the baseline."""
        if self.is_baseline:
            return None
        return f"GGML_{self.value.upper()}"

    @classmethod
    def parse(cls, name: str) -> "AccelerationBackend":
        """Look a backend up by name, ignoring case and surrounding whitespace."""
        normalized = name.strip().lower()
        for backend in cls:
            if backend.value == normalized:
                return backend
        raise UnknownBackend(name)


_DISPLAY_NAMES: dict[Platform, str] = {
    Platform.MACOS: "macOS",
    Platform.LINUX: "Linux",
    Platform.WINDOWS: "Windows",
}

# Default backend first.
SUPPORTED_BACKENDS: dict[Platform, tuple[AccelerationBackend, ...]] = {
    Platform.MACOS: (AccelerationBackend.METAL, AccelerationBackend.CPU),
    Platform.LINUX: (
        AccelerationBackend.CPU,
        AccelerationBackend.CUDA,
        AccelerationBackend.VULKAN,
    ),
    Platform.WINDOWS: (
        AccelerationBackend.CPU,
        AccelerationBackend.CUDA,
        AccelerationBackend.VULKAN,
    ),
}

TOOLCHAIN_DEFAULT_BACKENDS: dict[Platform, AccelerationBackend] = {
    Platform.MACOS: AccelerationBackend.METAL,
    Platform.LINUX: AccelerationBackend.CPU,
    Platform.WINDOWS: AccelerationBackend.CPU,
}


def default_backend(platform: Platform) -> AccelerationBackend:
    """The backend a build gets on this platform when nobody asks for one."""
    return SUPPORTED_BACKENDS[platform][0]


def supported_backends(platform: Platform) -> tuple[AccelerationBackend, ...]:
    return SUPPORTED_BACKENDS[platform]


def is_supported(platform: Platform, backend: AccelerationBackend) -> bool:
    return backend in SUPPORTED_BACKENDS[platform]


def toolchain_default_backend(platform: Platform) -> AccelerationBackend:
    """The backend the toolchain builds with when given no backend flags."""
    return TOOLCHAIN_DEFAULT_BACKENDS[platform]


def requires_explicit_enable(platform: Platform, backend: AccelerationBackend) -> bool:
    """
    True when the toolchain won't pick this backend up on its own.

    This is what decides whether the build command carries a backend flag.
    Asking for the backend the toolchain already defaults to adds nothing.
    """
    return backend is not TOOLCHAIN_DEFAULT_BACKENDS[platform]
