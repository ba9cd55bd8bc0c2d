#
# Copyright (C) 2020 The Android Open Source Project
#
# Licensed under the Apache License, Version 2.0 (the "License");
# you may not use this file except in compliance with the License.
# You may obtain a copy of the License at
#
#      http://www.apache.org/licenses/LICENSE-2.0
#
# Unless required by applicable law or agreed to in writing, software
# distributed under the License is distributed on an "AS IS" BASIS,
# WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied.
# See the License for the specific language governing permissions and
# limitations under the License.
#
"""Tests for paths.NdkPaths."""

import pytest

from paths import NdkPaths
from toolchains import Tool
import hosts

NDK = 'external/androidndk/ndk'


class TestToolPaths:

    def test_all_tools_in_order(self, ndk_paths):
        tool_paths = ndk_paths.create_tool_paths(
            'arm-linux-androideabi-4.9', 'arm-linux-androideabi')
        assert [entry.tool for entry in tool_paths] == list(Tool)
        assert tool_paths[0].path == (
            'ndk/toolchains/arm-linux-androideabi-4.9/prebuilt/linux-x86_64'
            '/bin/arm-linux-androideabi-ar')

    def test_excluded_tools(self, ndk_paths):
        tool_paths = ndk_paths.create_tool_paths(
            'arm-linux-androideabi-4.8', 'arm-linux-androideabi',
            frozenset({Tool.GCOVTOOL}))
        tools = [entry.tool for entry in tool_paths]
        assert Tool.GCOVTOOL not in tools
        assert len(tools) == len(Tool) - 1

    def test_clang_tool_paths(self, ndk_paths):
        tool_paths = ndk_paths.create_clang_tool_paths(
            'arm-linux-androideabi-4.8', 'arm-linux-androideabi', '3.5',
            frozenset({Tool.GCOVTOOL}))
        tools = [entry.tool for entry in tool_paths]
        assert tools.count(Tool.GCC) == 1
        assert Tool.GCOVTOOL not in tools
        assert tool_paths[-1].tool is Tool.GCC
        assert tool_paths[-1].path == (
            'ndk/toolchains/llvm-3.5/prebuilt/linux-x86_64/bin/clang')

    def test_host_tag(self):
        ndk_paths = NdkPaths('androidndk', hosts.Host.Darwin)
        tool_paths = ndk_paths.create_tool_paths(
            'aarch64-linux-android-4.9', 'aarch64-linux-android')
        assert all('/prebuilt/darwin-x86_64/' in entry.path for entry in tool_paths)

    def test_unknown_toolchain(self, ndk_paths):
        with pytest.raises(ValueError, match='Unknown NDK toolchain'):
            ndk_paths.create_tool_paths('mipsel-linux-android-4.9', 'mipsel-linux-android')

    def test_unknown_clang_version(self, ndk_paths):
        with pytest.raises(ValueError, match='Unknown clang version'):
            ndk_paths.create_clang_tool_paths(
                'aarch64-linux-android-4.9', 'aarch64-linux-android', '3.4')


class TestDirectories:

    def test_include_paths(self, ndk_paths):
        gcc_lib = (f'{NDK}/toolchains/aarch64-linux-android-4.9/prebuilt/linux-x86_64'
                   '/lib/gcc/aarch64-linux-android/4.9')
        assert ndk_paths.create_toolchain_include_paths(
            'aarch64-linux-android-4.9', 'aarch64-linux-android', '4.9') == [
                f'{gcc_lib}/include', f'{gcc_lib}/include-fixed']

    def test_gcc_toolchain_path(self, ndk_paths):
        assert ndk_paths.create_gcc_toolchain_path('arm-linux-androideabi-4.8') == (
            f'{NDK}/toolchains/arm-linux-androideabi-4.8/prebuilt/linux-x86_64')

    def test_repository_name(self):
        ndk_paths = NdkPaths('my_ndk', hosts.Host.Linux)
        assert ndk_paths.create_builtin_sysroot('arm').startswith('external/my_ndk/ndk/')

    @pytest.mark.parametrize('api_level, arch, expected', [
        (21, 'arm', 'android-21/arch-arm'),
        (21, 'arm64', 'android-21/arch-arm64'),
        (19, 'arm', 'android-19/arch-arm'),
        (19, 'arm64', 'android-21/arch-arm64'),
    ])
    def test_sysroot(self, api_level, arch, expected):
        ndk_paths = NdkPaths('androidndk', hosts.Host.Linux, api_level)
        assert ndk_paths.create_builtin_sysroot(arch) == f'{NDK}/platforms/{expected}'

    def test_unknown_arch(self, ndk_paths):
        with pytest.raises(ValueError, match='Unknown NDK arch'):
            ndk_paths.create_builtin_sysroot('mips')

    def test_invalid_api_level(self):
        with pytest.raises(ValueError, match='Invalid API level'):
            NdkPaths('androidndk', hosts.Host.Linux, 0)
