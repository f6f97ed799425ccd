# Author : Eshan Roy <eshanized@proton.me>
# SPDX-License-Identifier: MIT

"""
Tests for turning a profile into a cargo command line.
"""

from pathlib import Path

from clawbuild.config.schema import BuildConfig, ToolchainConfig
from clawbuild.driver.command import build_command
from clawbuild.driver.platforms import AccelerationBackend, Platform
from clawbuild.driver.profile import resolve_profile


def _command(platform: Platform, backend=None, build=None, environ=None):  # type: ignore[no-untyped-def]
    profile = resolve_profile(platform, backend)
    return build_command(profile, build or BuildConfig(), ToolchainConfig(), environ)


class TestReleaseFlag:
    def test_release_flag_always_present(self) -> None:
        for platform in Platform:
            command = _command(platform)
            assert command.args[:2] == ("build", "--release")

    def test_program_comes_from_toolchain_config(self) -> None:
        profile = resolve_profile(Platform.LINUX)
        command = build_command(profile, BuildConfig(), ToolchainConfig(program="/opt/cargo"))
        assert command.argv[0] == "/opt/cargo"


class TestBackendFlag:
    def test_macos_default_is_plain_release_build(self) -> None:
        command = _command(Platform.MACOS)
        assert command.argv == ["cargo", "build", "--release"]
        assert command.env == {}

    def test_linux_default_is_plain_release_build(self) -> None:
        command = _command(Platform.LINUX)
        assert command.argv == ["cargo", "build", "--release"]
        assert command.env == {}

    def test_cuda_on_linux_adds_feature_and_define(self) -> None:
        command = _command(Platform.LINUX, AccelerationBackend.CUDA)
        assert command.args == ("build", "--release", "--features", "cuda")
        assert command.env == {"CMAKE_ARGS": "-DGGML_CUDA=on"}

    def test_cpu_on_macos_switches_metal_off(self) -> None:
        command = _command(Platform.MACOS, AccelerationBackend.CPU)
        assert "--features" not in command.args
        assert command.env == {"CMAKE_ARGS": "-DGGML_METAL=off"}

    def test_existing_cmake_args_are_preserved(self) -> None:
        command = _command(
            Platform.WINDOWS,
            AccelerationBackend.VULKAN,
            environ={"CMAKE_ARGS": "-DFOO=1"},
        )
        assert command.env["CMAKE_ARGS"] == "-DFOO=1 -DGGML_VULKAN=on"


class TestProjectAndExtras:
    def test_project_dir_adds_manifest_path(self, tmp_path: Path) -> None:
        command = _command(Platform.LINUX, build=BuildConfig(project_dir=str(tmp_path)))
        index = command.args.index("--manifest-path")
        assert command.args[index + 1] == str(tmp_path / "Cargo.toml")

    def test_extra_args_come_last(self) -> None:
        profile = resolve_profile(Platform.LINUX, AccelerationBackend.CUDA, extra_args=("--locked",))
        command = build_command(profile, BuildConfig(), ToolchainConfig())
        assert command.args[-1] == "--locked"

    def test_describe_includes_env_prefix(self) -> None:
        command = _command(Platform.LINUX, AccelerationBackend.CUDA)
        assert command.describe() == "CMAKE_ARGS=-DGGML_CUDA=on cargo build --release --features cuda"
