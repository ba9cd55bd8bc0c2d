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
"""Fixtures shared by the crosstool tests."""

from typing import FrozenSet, List, Tuple

import pytest

from paths import NdkPaths
from toolchains import Tool, ToolPath
import hosts


class FakeNdkPaths:
    """Returns fixture paths and remembers what it was asked for."""

    def __init__(self) -> None:
        self.tool_path_calls: List[Tuple[str, str, FrozenSet[Tool]]] = []
        self.clang_tool_path_calls: List[Tuple[str, str, str, FrozenSet[Tool]]] = []

    def create_tool_paths(self, toolchain_name, target_platform, excluded_tools=frozenset()):
        self.tool_path_calls.append((toolchain_name, target_platform, excluded_tools))
        return [ToolPath(tool, f'{toolchain_name}/{target_platform}-{tool.value}')
                for tool in Tool if tool not in excluded_tools]

    def create_clang_tool_paths(self, toolchain_name, target_platform, clang_version,
                                excluded_tools=frozenset()):
        self.clang_tool_path_calls.append(
            (toolchain_name, target_platform, clang_version, excluded_tools))
        return [ToolPath(tool, f'{toolchain_name}/{target_platform}-{tool.value}')
                for tool in Tool if tool not in excluded_tools | {Tool.GCC}
                ] + [ToolPath(Tool.GCC, f'llvm-{clang_version}/clang')]

    def create_toolchain_include_paths(self, toolchain_name, target_platform, gcc_version):
        return [f'{toolchain_name}/{gcc_version}/include']

    def create_builtin_sysroot(self, arch):
        return f'sysroot/arch-{arch}'

    def create_gcc_toolchain_path(self, toolchain_name):
        return f'gcc-toolchain/{toolchain_name}'


@pytest.fixture
def fake_ndk_paths() -> FakeNdkPaths:
    return FakeNdkPaths()


@pytest.fixture
def ndk_paths() -> NdkPaths:
    return NdkPaths('androidndk', hosts.Host.Linux, api_level=21)
