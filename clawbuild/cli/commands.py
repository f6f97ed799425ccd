# Author : Eshan Roy <eshanized@proton.me>
# SPDX-License-Identifier: MIT

"""
The build command handler.

Two kinds of output leave this module. Progress lines ("Building...",
"Executable: ...") are plain text on stdout, flushed before cargo starts so
they don't interleave with its output. Everything else is structured JSON
on stderr through the logger.

The host platform, the executor and the environment can all be injected,
which is how the tests run full "macOS" builds against a stub executor.
"""

import argparse
import logging
import os
import sys
from collections.abc import Mapping
from pathlib import Path
from typing import Optional

from clawbuild.cli.exit_codes import (
    CONFIG_ERROR,
    INTERRUPTED,
    RUNTIME_ERROR,
    SUCCESS,
    USER_ERROR,
)
from clawbuild.config.exceptions import ConfigError
from clawbuild.config.loader import load_config
from clawbuild.config.schema import ClawbuildConfig
from clawbuild.driver.core import BuildDriver
from clawbuild.driver.exceptions import (
    EnvironmentMissing,
    ToolchainFailure,
    UnknownBackend,
    UnsupportedBackend,
    UnsupportedPlatform,
)
from clawbuild.driver.executor import Executor, SubprocessExecutor
from clawbuild.driver.platforms import Platform, default_backend, supported_backends
from clawbuild.logging.logger import configure_package_logging
from clawbuild.runtime.environment import check_minimum_python, detect_platform, get_system_info


def _progress(message: str) -> None:
    print(message, flush=True)


def _error(message: str) -> None:
    print(f"clawbuild: error: {message}", file=sys.stderr, flush=True)


def _toolchain_exit_code(exit_status: int) -> int:
    """Pass cargo's status through. Signal deaths (negative) become 128+N like a shell."""
    if exit_status < 0:
        return 128 - exit_status
    return exit_status


def _load(args: argparse.Namespace) -> ClawbuildConfig:
    """Load the config file (if any) and fold the command-line overrides into it."""
    config = ClawbuildConfig()
    if args.config is not None:
        config = load_config(Path(args.config))

    if args.project_dir is not None:
        build = config.build.model_copy(update={"project_dir": args.project_dir})
        config = config.model_copy(update={"build": build})

    return config


def _list_backends(platform: Platform) -> int:
    default = default_backend(platform)
    _progress(f"Backends available on {platform.display_name}:")
    for backend in supported_backends(platform):
        marker = " (default)" if backend is default else ""
        _progress(f"  {backend.value}{marker}")
    return SUCCESS


def handle_build(
    args: argparse.Namespace,
    platform: Optional[Platform] = None,
    executor: Optional[Executor] = None,
    environ: Optional[Mapping[str, str]] = None,
) -> int:
    """Resolve the build profile for this host, run cargo, report the outcome."""
    try:
        config = _load(args)
    except ConfigError as err:
        early_logger = configure_package_logging(args.log_level or "WARNING")
        early_logger.error("Configuration error", extra={"error": str(err)})
        _error(str(err))
        return CONFIG_ERROR

    log_file = Path(config.logging.log_file) if config.logging.log_file else None
    logger: logging.Logger = configure_package_logging(
        args.log_level or config.logging.log_level,
        log_file=log_file,
    )

    try:
        check_minimum_python()
        if platform is None:
            platform = detect_platform()
    except UnsupportedPlatform as err:
        logger.error("Unsupported host", extra={"system": err.system_name})
        _error(str(err))
        return USER_ERROR
    except RuntimeError as err:
        logger.error("Environment check failed", extra={"error": str(err)})
        _error(str(err))
        return RUNTIME_ERROR

    system_info = get_system_info()
    logger.debug(
        "Host detected",
        extra={
            "platform": platform.value,
            "python_version": system_info.python_version,
            "architecture": system_info.architecture,
        },
    )

    if args.list_backends:
        return _list_backends(platform)

    if executor is None:
        executor = SubprocessExecutor(config.toolchain.terminate_timeout_seconds)
    if environ is None:
        environ = os.environ

    driver = BuildDriver(platform, executor, config=config, environ=environ)
    executable = config.build.executable_name

    try:
        if args.dry_run:
            profile, command = driver.plan(args.backend)
            _progress(
                f"Would build {executable} for {platform.display_name} "
                f"with {profile.backend.value} backend:"
            )
            _progress(f"  {command.describe()}")
            return SUCCESS

        profile = driver.resolve(args.backend)
        _progress(
            f"Building {executable} for {platform.display_name} "
            f"with {profile.backend.value} backend..."
        )
        result = driver.invoke()

    except (UnsupportedBackend, UnknownBackend) as err:
        _error(str(err))
        return USER_ERROR
    except ToolchainFailure as err:
        _error(f"build failed, toolchain exited with status {err.exit_status}")
        return _toolchain_exit_code(err.exit_status)
    except EnvironmentMissing as err:
        _error(str(err))
        return RUNTIME_ERROR
    except KeyboardInterrupt:
        logger.warning("Build interrupted")
        _error("interrupted")
        return INTERRUPTED
    except Exception as err:
        logger.error("Build failed", extra={"error": str(err)}, exc_info=True)
        _error(str(err))
        return RUNTIME_ERROR

    _progress("Build complete!")
    _progress(f"Executable: {result.artifact_path.as_posix()}")
    return SUCCESS
