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
"""Helpers for paths inside the NDK repository."""

from typing import FrozenSet, List, Optional

import constants
import hosts
from toolchains import Tool, ToolPath

# Tool paths are relative to the crosstool package, which sits at the root of
# the NDK repository. Include dirs and the sysroot are relative to the
# execution root, so they carry the external/<repository> prefix.
NDK_DIR: str = 'ndk'
TOOLCHAINS_DIR: str = f'{NDK_DIR}/toolchains'


class NdkPaths:
    """Names the files of one NDK repository for a given host and API level."""

    repository_name: str
    host: hosts.Host
    api_level: int

    def __init__(self, repository_name: str = constants.DEFAULT_REPOSITORY_NAME,
                 host: Optional[hosts.Host] = None,
                 api_level: int = constants.DEFAULT_API_LEVEL) -> None:
        if api_level <= 0:
            raise ValueError(f'Invalid API level: {api_level}')
        self.repository_name = repository_name
        self.host = host if host is not None else hosts.build_host()
        self.api_level = api_level

    @property
    def external_dir(self) -> str:
        """Returns the NDK directory relative to the execution root."""
        return f'external/{self.repository_name}/{NDK_DIR}'

    @staticmethod
    def _check_toolchain(toolchain_name: str) -> None:
        if toolchain_name not in constants.NDK_GCC_TOOLCHAINS:
            raise ValueError(f'Unknown NDK toolchain: {toolchain_name}')

    def _prebuilt_dir(self, toolchain_name: str) -> str:
        return f'{toolchain_name}/prebuilt/{self.host.ndk_tag}'

    def _tool_path(self, toolchain_name: str, tool_name: str) -> str:
        return f'{TOOLCHAINS_DIR}/{self._prebuilt_dir(toolchain_name)}/bin/{tool_name}'

    def create_tool_paths(self, toolchain_name: str, target_platform: str,
                          excluded_tools: FrozenSet[Tool] = frozenset()) -> List[ToolPath]:
        """Returns paths of every gcc toolchain tool not in excluded_tools."""
        self._check_toolchain(toolchain_name)
        return [
            ToolPath(tool, self._tool_path(toolchain_name, f'{target_platform}-{tool.value}'))
            for tool in Tool if tool not in excluded_tools
        ]

    def create_clang_tool_paths(self, toolchain_name: str, target_platform: str,
                                clang_version: str,
                                excluded_tools: FrozenSet[Tool] = frozenset()) -> List[ToolPath]:
        """Returns the gcc toolchain paths with clang standing in for gcc."""
        if clang_version not in constants.CLANG_VERSIONS:
            raise ValueError(f'Unknown clang version: {clang_version}')
        tool_paths = self.create_tool_paths(toolchain_name, target_platform,
                                            excluded_tools | {Tool.GCC})
        clang = f'{TOOLCHAINS_DIR}/llvm-{clang_version}/prebuilt/{self.host.ndk_tag}/bin/clang'
        tool_paths.append(ToolPath(Tool.GCC, clang))
        return tool_paths

    def create_toolchain_include_paths(self, toolchain_name: str, target_platform: str,
                                       gcc_version: str) -> List[str]:
        """Returns the gcc builtin include directories."""
        self._check_toolchain(toolchain_name)
        gcc_lib = (f'{self.external_dir}/toolchains/{self._prebuilt_dir(toolchain_name)}'
                   f'/lib/gcc/{target_platform}/{gcc_version}')
        return [f'{gcc_lib}/include', f'{gcc_lib}/include-fixed']

    def create_gcc_toolchain_path(self, toolchain_name: str) -> str:
        """Returns the gcc toolchain root that clang assembles and links with."""
        self._check_toolchain(toolchain_name)
        return f'{self.external_dir}/toolchains/{self._prebuilt_dir(toolchain_name)}'

    def api_level_for(self, arch: str) -> int:
        """Returns the API level, raised to the first platform supporting arch."""
        try:
            min_api_level = constants.MIN_API_LEVELS[arch]
        except KeyError:
            raise ValueError(f'Unknown NDK arch: {arch}') from None
        return max(self.api_level, min_api_level)

    def create_builtin_sysroot(self, arch: str) -> str:
        """Returns the platform directory used as sysroot for arch."""
        api_level = self.api_level_for(arch)
        return f'{self.external_dir}/platforms/android-{api_level}/arch-{arch}'
