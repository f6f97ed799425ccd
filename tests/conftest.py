# Author : Eshan Roy <eshanized@proton.me>
# SPDX-License-Identifier: MIT

"""
Shared pytest fixtures for clawbuild tests.

The important one is the recording executor: it stands in for cargo, writes
down every command it's handed, and returns whatever exit status the test
asked for. Nothing in the unit tests ever launches a real process.
"""

import textwrap
from pathlib import Path
from typing import Callable

import pytest

from clawbuild.driver.command import ToolchainCommand
from clawbuild.driver.executor import Executor


class RecordingExecutor(Executor):
    """Executor stub that records invocations and returns a scripted status."""

    def __init__(self, exit_status: int = 0) -> None:
        self.exit_status = exit_status
        self.commands: list[ToolchainCommand] = []

    def execute(self, command: ToolchainCommand) -> int:
        self.commands.append(command)
        return self.exit_status

    @property
    def invocation_count(self) -> int:
        return len(self.commands)


@pytest.fixture(autouse=True)
def _no_inherited_cmake_args(monkeypatch: pytest.MonkeyPatch) -> None:
    """Keep a CMAKE_ARGS from the developer's shell out of the expected commands."""
    monkeypatch.delenv("CMAKE_ARGS", raising=False)


@pytest.fixture()
def make_executor() -> Callable[[int], RecordingExecutor]:
    """Factory for recording executors with a chosen exit status."""
    return RecordingExecutor


@pytest.fixture()
def executor() -> RecordingExecutor:
    """A recording executor whose toolchain always succeeds."""
    return RecordingExecutor(exit_status=0)


@pytest.fixture()
def tmp_config_file(tmp_path: Path) -> Path:
    """A small but complete config file."""
    config_content = textwrap.dedent("""\
        config_version: "1.0.0"
        build:
          executable_name: clawrs
          target_dir: target
          extra_args: ["--locked"]
        toolchain:
          program: cargo
          terminate_timeout_seconds: 5
        logging:
          log_level: DEBUG
    """)
    config_file = tmp_path / "clawbuild.yaml"
    config_file.write_text(config_content, encoding="utf-8")
    return config_file


@pytest.fixture()
def invalid_config_file(tmp_path: Path) -> Path:
    """Valid YAML that fails schema validation (unknown key)."""
    config_content = textwrap.dedent("""\
        build:
          executable_name: clawrs
          optimisation: debug
    """)
    config_file = tmp_path / "invalid.yaml"
    config_file.write_text(config_content, encoding="utf-8")
    return config_file


@pytest.fixture()
def broken_yaml_file(tmp_path: Path) -> Path:
    """A file that isn't valid YAML at all."""
    config_file = tmp_path / "broken.yaml"
    config_file.write_text("{{not: yaml: at: all:::", encoding="utf-8")
    return config_file
