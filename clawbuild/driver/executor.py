# Author : Eshan Roy <eshanized@proton.me>
# SPDX-License-Identifier: MIT

"""
The child-process capability.

The driver never calls subprocess directly. It hands a ToolchainCommand to an
Executor and gets an exit status back. SubprocessExecutor is the real thing;
tests swap in a stub that records commands and returns scripted statuses.

SubprocessExecutor doesn't capture anything. The child inherits our stdout
and stderr so cargo's progress and compiler errors show up live, exactly as
if the user had typed the command. No shell=True, ever.
"""

import logging
import os
import subprocess
from abc import ABC, abstractmethod

from clawbuild.driver.command import ToolchainCommand
from clawbuild.driver.exceptions import EnvironmentMissing
from clawbuild.logging.logger import get_logger

logger: logging.Logger = get_logger(__name__)


class Executor(ABC):
    """Runs one command to completion and reports its exit status."""

    @abstractmethod
    def execute(self, command: ToolchainCommand) -> int:
        """
        Run the command and block until it exits.

        Returns:
            The process exit status (0 means success).

        Raises:
            EnvironmentMissing: If the program can't be launched at all.
        """


class SubprocessExecutor(Executor):
    """
    Launches the toolchain as a real child process.

    If we get interrupted (Ctrl+C) while the build is running, the child is
    terminated before the interrupt propagates, and killed outright if it
    hasn't exited after `terminate_timeout_seconds`. A build never outlives
    the driver that started it.
    """

    def __init__(self, terminate_timeout_seconds: float = 10.0) -> None:
        self._terminate_timeout = terminate_timeout_seconds

    def execute(self, command: ToolchainCommand) -> int:
        env = dict(os.environ)
        env.update(command.env)

        try:
            process = subprocess.Popen(
                command.argv,
                env=env,
            )
        except (FileNotFoundError, PermissionError) as err:
            logger.error(
                "Toolchain could not be launched",
                extra={"program": command.program, "error": str(err)},
            )
            raise EnvironmentMissing(command.program) from err

        logger.debug("Toolchain started", extra={"pid": process.pid})

        try:
            return process.wait()
        except KeyboardInterrupt:
            logger.warning(
                "Interrupted, stopping toolchain",
                extra={"pid": process.pid},
            )
            self._stop(process)
            raise

    def _stop(self, process: subprocess.Popen) -> None:  # type: ignore[type-arg]
        """Terminate the child, escalating to kill if it won't go quietly."""
        if process.poll() is not None:
            return
        process.terminate()
        try:
            process.wait(timeout=self._terminate_timeout)
        except subprocess.TimeoutExpired:
            logger.warning(
                "Toolchain ignored terminate, killing it",
                extra={"pid": process.pid, "timeout_seconds": self._terminate_timeout},
            )
            process.kill()
            process.wait()
