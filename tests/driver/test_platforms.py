# Author : Eshan Roy <eshanized@proton.me>
# SPDX-License-Identifier: MIT

"""
Tests for the platform/backend support matrix.
"""

import pytest

from clawbuild.driver.exceptions import UnknownBackend
from clawbuild.driver.platforms import (
    AccelerationBackend,
    Platform,
    default_backend,
    is_supported,
    requires_explicit_enable,
    supported_backends,
)


class TestSupportMatrix:
    def test_every_platform_has_a_default(self) -> None:
        for platform in Platform:
            assert default_backend(platform) in supported_backends(platform)

    def test_metal_is_default_on_macos(self) -> None:
        assert default_backend(Platform.MACOS) is AccelerationBackend.METAL

    @pytest.mark.parametrize("platform", [Platform.LINUX, Platform.WINDOWS])
    def test_cpu_is_default_elsewhere(self, platform: Platform) -> None:
        assert default_backend(platform) is AccelerationBackend.CPU

    @pytest.mark.parametrize("platform", [Platform.LINUX, Platform.WINDOWS])
    def test_metal_only_on_macos(self, platform: Platform) -> None:
        assert is_supported(Platform.MACOS, AccelerationBackend.METAL)
        assert not is_supported(platform, AccelerationBackend.METAL)

    def test_cpu_supported_everywhere(self) -> None:
        for platform in Platform:
            assert is_supported(platform, AccelerationBackend.CPU)


class TestExplicitEnable:
    def test_metal_on_macos_needs_no_flag(self) -> None:
        assert not requires_explicit_enable(Platform.MACOS, AccelerationBackend.METAL)

    def test_cpu_on_macos_needs_opt_out(self) -> None:
        assert requires_explicit_enable(Platform.MACOS, AccelerationBackend.CPU)

    def test_cuda_on_linux_needs_flag(self) -> None:
        assert requires_explicit_enable(Platform.LINUX, AccelerationBackend.CUDA)

    def test_cpu_on_linux_needs_no_flag(self) -> None:
        assert not requires_explicit_enable(Platform.LINUX, AccelerationBackend.CPU)


class TestBackendParsing:
    def test_parse_is_case_insensitive(self) -> None:
        assert AccelerationBackend.parse(" Metal ") is AccelerationBackend.METAL

    def test_parse_unknown_raises(self) -> None:
        with pytest.raises(UnknownBackend) as exc_info:
            AccelerationBackend.parse("opencl")
        assert exc_info.value.name == "opencl"

    def test_baseline_has_no_feature_or_define(self) -> None:
        assert AccelerationBackend.CPU.cargo_feature is None
        assert AccelerationBackend.CPU.cmake_define is None

    def test_vulkan_feature_and_define(self) -> None:
        assert AccelerationBackend.VULKAN.cargo_feature == "vulkan"
        assert AccelerationBackend.VULKAN.cmake_define == "GGML_VULKAN"
