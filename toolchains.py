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
"""Records describing a crosstool toolchain."""

import dataclasses
import enum
from typing import Any, Dict, List, NamedTuple, Tuple


@enum.unique
class Tool(enum.Enum):
    """Tools a toolchain provides, in the order their paths are listed."""
    AR = 'ar'
    CPP = 'cpp'
    GCC = 'gcc'
    GCOV = 'gcov'
    GCOVTOOL = 'gcov-tool'
    LD = 'ld'
    NM = 'nm'
    OBJCOPY = 'objcopy'
    OBJDUMP = 'objdump'
    STRIP = 'strip'
    DWP = 'dwp'


@enum.unique
class CompilationMode(enum.Enum):
    """Compilation modes that carry additional compiler flags."""
    OPT = 'opt'
    DBG = 'dbg'


class ToolPath(NamedTuple):
    """Location of one tool, relative to the crosstool package."""
    tool: Tool
    path: str


class CompilationModeFlags(NamedTuple):
    """Compiler flags added on top of the common ones for one mode."""
    mode: CompilationMode
    compiler_flags: Tuple[str, ...]


@dataclasses.dataclass(frozen=True)
class ToolchainConfig:
    """A compiler and linker profile for one Android target."""

    identifier: str
    target_system_name: str
    target_cpu: str
    compiler: str

    tool_paths: Tuple[ToolPath, ...]
    builtin_include_dirs: Tuple[str, ...]
    builtin_sysroot: str

    static_runtimes_group: str
    dynamic_runtimes_group: str

    compiler_flags: Tuple[str, ...] = ()
    linker_flags: Tuple[str, ...] = ()
    compilation_mode_flags: Tuple[CompilationModeFlags, ...] = ()

    supports_embedded_runtimes: bool = True

    @property
    def mode_flags(self) -> Dict[CompilationMode, List[str]]:
        """Returns the per-mode compiler flags keyed by mode."""
        return {entry.mode: list(entry.compiler_flags)
                for entry in self.compilation_mode_flags}

    def tool_path(self, tool: Tool) -> str:
        """Returns the path of `tool`, raising KeyError if it is absent."""
        for entry in self.tool_paths:
            if entry.tool is tool:
                return entry.path
        raise KeyError(f'{self.identifier} has no {tool.value}')

    def as_dict(self) -> Dict[str, Any]:
        """Converts to plain types for yaml/json output."""
        return {
            'toolchain_identifier': self.identifier,
            'target_system_name': self.target_system_name,
            'target_cpu': self.target_cpu,
            'compiler': self.compiler,
            'tool_path': [{'name': entry.tool.value, 'path': entry.path}
                          for entry in self.tool_paths],
            'cxx_builtin_include_directory': list(self.builtin_include_dirs),
            'builtin_sysroot': self.builtin_sysroot,
            'supports_embedded_runtimes': self.supports_embedded_runtimes,
            'static_runtimes_filegroup': self.static_runtimes_group,
            'dynamic_runtimes_filegroup': self.dynamic_runtimes_group,
            'compiler_flag': list(self.compiler_flags),
            'linker_flag': list(self.linker_flags),
            'compilation_mode_flags': [
                {'mode': entry.mode.name, 'compiler_flag': list(entry.compiler_flags)}
                for entry in self.compilation_mode_flags
            ],
        }
