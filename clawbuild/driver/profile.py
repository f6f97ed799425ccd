# Author : Eshan Roy <eshanized@proton.me>
# SPDX-License-Identifier: MIT

"""
Build profile resolution.

A BuildProfile is everything the invocation needs to know about one build:
the optimization level (always release), the acceleration backend, and any
extra toolchain arguments. It's resolved exactly once per run from the host
platform plus an optional explicit override, then handed straight to the
invocation step. It is never mutated after that.

Resolution is where bad overrides die. If someone asks for Metal on Linux we
raise UnsupportedBackend here, before any process is started.
"""

import logging
from dataclasses import dataclass, field
from typing import Optional, Union

from clawbuild.driver.exceptions import UnsupportedBackend
from clawbuild.driver.platforms import (
    AccelerationBackend,
    Platform,
    default_backend,
    is_supported,
)
from clawbuild.logging.logger import get_logger

logger: logging.Logger = get_logger(__name__)

RELEASE: str = "release"


@dataclass(frozen=True)
class BuildProfile:
    """The resolved configuration for one toolchain invocation."""

    platform: Platform
    backend: AccelerationBackend
    optimization: str = RELEASE
    extra_args: tuple[str, ...] = field(default_factory=tuple)


def resolve_profile(
    platform: Platform,
    override: Optional[Union[AccelerationBackend, str]] = None,
    extra_args: tuple[str, ...] = (),
) -> BuildProfile:
    """
    Pick the backend for this platform and freeze it into a BuildProfile.

    Args:
        platform: The detected host platform.
        override: Optional explicit backend, either the enum member or its
                  name (e.g. "cuda").
        extra_args: Additional arguments appended to the toolchain command.

    Returns:
        A fully populated BuildProfile with optimization fixed to release.

    Raises:
        UnknownBackend: If the override name isn't a backend at all.
        UnsupportedBackend: If the override isn't valid on this platform.
    """
    if override is None:
        backend = default_backend(platform)
        logger.debug(
            "Using platform default backend",
            extra={"platform": platform.value, "backend": backend.value},
        )
    else:
        backend = (
            override
            if isinstance(override, AccelerationBackend)
            else AccelerationBackend.parse(override)
        )
        if not is_supported(platform, backend):
            logger.error(
                "Backend override rejected",
                extra={"platform": platform.value, "backend": backend.value},
            )
            raise UnsupportedBackend(backend.value, platform.display_name)

    return BuildProfile(
        platform=platform,
        backend=backend,
        optimization=RELEASE,
        extra_args=tuple(extra_args),
    )
