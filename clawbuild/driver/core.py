# Author : Eshan Roy <eshanized@proton.me>
# SPDX-License-Identifier: MIT

"""
Build orchestration: resolve the profile, invoke the toolchain, report.

The flow is strictly one-way:

    not_started -> resolving -> invoking -> succeeded
                       |            |
                       +-> failed <-+

There is no retry and no way back. A BuildDriver runs exactly once; make a
new one if you want to build again. Any exception while resolving or
invoking, including an interrupt, lands the driver in `failed` and is
re-raised untouched.

The host platform, the executor and the config are all passed in. Nothing
here reads global state, which is what lets the tests drive a "macOS" build
from any machine with a stub executor.
"""

import logging
from collections.abc import Mapping
from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from typing import Optional, Union

from clawbuild.config.schema import BuildConfig, ClawbuildConfig, ToolchainConfig
from clawbuild.driver.command import ToolchainCommand, build_command
from clawbuild.driver.exceptions import InvalidStateTransition, ToolchainFailure
from clawbuild.driver.executor import Executor, SubprocessExecutor
from clawbuild.driver.platforms import AccelerationBackend, Platform
from clawbuild.driver.profile import BuildProfile, resolve_profile
from clawbuild.logging.logger import get_logger
from clawbuild.utils.paths import artifact_path

logger: logging.Logger = get_logger(__name__)

BackendOverride = Optional[Union[AccelerationBackend, str]]


class BuildState(str, Enum):
    NOT_STARTED = "not_started"
    RESOLVING = "resolving"
    INVOKING = "invoking"
    SUCCEEDED = "succeeded"
    FAILED = "failed"


_TRANSITIONS: dict[BuildState, frozenset[BuildState]] = {
    BuildState.NOT_STARTED: frozenset({BuildState.RESOLVING}),
    BuildState.RESOLVING: frozenset({BuildState.INVOKING, BuildState.FAILED}),
    BuildState.INVOKING: frozenset({BuildState.SUCCEEDED, BuildState.FAILED}),
    BuildState.SUCCEEDED: frozenset(),
    BuildState.FAILED: frozenset(),
}


@dataclass(frozen=True)
class BuildResult:
    """Outcome of one invocation. artifact_path is only set on success."""

    exit_status: int
    artifact_path: Optional[Path] = None

    @property
    def succeeded(self) -> bool:
        return self.exit_status == 0


def invoke(
    profile: BuildProfile,
    executor: Executor,
    build: Optional[BuildConfig] = None,
    toolchain: Optional[ToolchainConfig] = None,
    environ: Optional[Mapping[str, str]] = None,
) -> BuildResult:
    """
    Run the toolchain once for a resolved profile.

    Every call with the same profile produces the same command and targets
    the same artifact path, so building twice overwrites rather than piles up.

    Raises:
        ToolchainFailure: If the toolchain exits non-zero. Not retried.
        EnvironmentMissing: If the toolchain can't be launched.
    """
    build = build if build is not None else BuildConfig()
    toolchain = toolchain if toolchain is not None else ToolchainConfig()

    command = build_command(profile, build, toolchain, environ)
    logger.info(
        "Invoking toolchain",
        extra={
            "command": command.describe(),
            "platform": profile.platform.value,
            "backend": profile.backend.value,
        },
    )

    exit_status = executor.execute(command)
    if exit_status != 0:
        logger.error("Toolchain failed", extra={"exit_status": exit_status})
        raise ToolchainFailure(exit_status)

    project_dir = Path(build.project_dir) if build.project_dir is not None else None
    path = artifact_path(
        build.executable_name,
        profile.platform,
        target_dir=build.target_dir,
        optimization=profile.optimization,
        project_dir=project_dir,
    )
    logger.info("Toolchain finished", extra={"artifact_path": str(path)})
    return BuildResult(exit_status=exit_status, artifact_path=path)


class BuildDriver:
    """
    One build, start to finish.

    Usage:
        driver = BuildDriver(Platform.MACOS, SubprocessExecutor())
        result = driver.run()            # or: driver.resolve(); driver.invoke()
        print(result.artifact_path)

    `resolve` and `invoke` are exposed separately so the CLI can announce
    the chosen backend before the (long) build starts. They still have to be
    called in that order, once each.
    """

    def __init__(
        self,
        platform: Platform,
        executor: Executor,
        config: Optional[ClawbuildConfig] = None,
        environ: Optional[Mapping[str, str]] = None,
    ) -> None:
        self._platform = platform
        self._executor = executor
        self._config = config if config is not None else ClawbuildConfig()
        self._environ = environ
        self._state = BuildState.NOT_STARTED
        self._profile: Optional[BuildProfile] = None

    @property
    def state(self) -> BuildState:
        return self._state

    @property
    def profile(self) -> Optional[BuildProfile]:
        return self._profile

    def _transition(self, target: BuildState) -> None:
        if target not in _TRANSITIONS[self._state]:
            raise InvalidStateTransition(self._state.value, target.value)
        logger.debug(
            "Build state change",
            extra={"from": self._state.value, "to": target.value},
        )
        self._state = target

    def _override(self, override: BackendOverride) -> BackendOverride:
        """An explicit override wins over the one in the config file."""
        if override is not None:
            return override
        return self._config.build.backend

    def _resolve(self, override: BackendOverride) -> BuildProfile:
        return resolve_profile(
            self._platform,
            self._override(override),
            extra_args=tuple(self._config.build.extra_args),
        )

    def plan(self, override: BackendOverride = None) -> tuple[BuildProfile, ToolchainCommand]:
        """
        Resolve and build the command without running anything.

        Doesn't touch the state machine, so it's safe to call for --dry-run
        or just to look.
        """
        profile = self._resolve(override)
        command = build_command(profile, self._config.build, self._config.toolchain, self._environ)
        return profile, command

    def resolve(self, override: BackendOverride = None) -> BuildProfile:
        """
        Pick the profile for this run.

        Raises:
            UnsupportedBackend / UnknownBackend: Bad override. The driver is
                left in `failed` and no process is ever started.
        """
        self._transition(BuildState.RESOLVING)
        try:
            self._profile = self._resolve(override)
        except BaseException:
            self._transition(BuildState.FAILED)
            raise

        logger.info(
            "Build profile resolved",
            extra={
                "platform": self._platform.value,
                "backend": self._profile.backend.value,
                "optimization": self._profile.optimization,
            },
        )
        return self._profile

    def invoke(self) -> BuildResult:
        """Run the toolchain for the resolved profile. Must follow resolve()."""
        profile = self._profile
        if profile is None:
            raise InvalidStateTransition(self._state.value, BuildState.INVOKING.value)
        self._transition(BuildState.INVOKING)
        try:
            result = invoke(
                profile,
                self._executor,
                build=self._config.build,
                toolchain=self._config.toolchain,
                environ=self._environ,
            )
        except BaseException:
            self._transition(BuildState.FAILED)
            raise

        self._transition(BuildState.SUCCEEDED)
        return result

    def run(self, override: BackendOverride = None) -> BuildResult:
        """Resolve, then invoke. Stops at the first error."""
        self.resolve(override)
        return self.invoke()


def run(
    platform: Platform,
    override: BackendOverride = None,
    executor: Optional[Executor] = None,
    config: Optional[ClawbuildConfig] = None,
    environ: Optional[Mapping[str, str]] = None,
) -> BuildResult:
    """
    Build once for `platform`, optionally forcing a backend.

    Uses a real SubprocessExecutor unless one is passed in.
    """
    config = config if config is not None else ClawbuildConfig()
    if executor is None:
        executor = SubprocessExecutor(config.toolchain.terminate_timeout_seconds)
    driver = BuildDriver(platform, executor, config=config, environ=environ)
    return driver.run(override)
