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
"""Tests for toolchains."""

import pytest

from toolchains import (CompilationMode, CompilationModeFlags, Tool, ToolPath,
                        ToolchainConfig)


@pytest.fixture
def config():
    return ToolchainConfig(
        identifier='arm-linux-androideabi-4.9-thumb',
        target_system_name='arm-linux-androideabi',
        target_cpu='armeabi',
        compiler='gcc-4.9',
        tool_paths=(ToolPath(Tool.AR, 'bin/ar'), ToolPath(Tool.GCC, 'bin/gcc')),
        builtin_include_dirs=('include',),
        builtin_sysroot='sysroot',
        static_runtimes_group='static-runtime-libs-arm-linux-androideabi-4.9',
        dynamic_runtimes_group='dynamic-runtime-libs-arm-linux-androideabi-4.9',
        compiler_flags=('-fpic',),
        linker_flags=('-no-canonical-prefixes',),
        compilation_mode_flags=(
            CompilationModeFlags(CompilationMode.OPT, ('-mthumb', '-Os')),
            CompilationModeFlags(CompilationMode.DBG, ('-O0',)),
        ))


def test_frozen(config):
    with pytest.raises(AttributeError):
        config.target_cpu = 'armeabi-v7a'


def test_mode_flags(config):
    assert config.mode_flags == {
        CompilationMode.OPT: ['-mthumb', '-Os'],
        CompilationMode.DBG: ['-O0'],
    }


def test_tool_path(config):
    assert config.tool_path(Tool.GCC) == 'bin/gcc'
    with pytest.raises(KeyError):
        config.tool_path(Tool.STRIP)


def test_as_dict(config):
    document = config.as_dict()
    assert document['toolchain_identifier'] == 'arm-linux-androideabi-4.9-thumb'
    assert document['tool_path'] == [
        {'name': 'ar', 'path': 'bin/ar'},
        {'name': 'gcc', 'path': 'bin/gcc'},
    ]
    assert document['supports_embedded_runtimes'] is True
    assert document['compilation_mode_flags'] == [
        {'mode': 'OPT', 'compiler_flag': ['-mthumb', '-Os']},
        {'mode': 'DBG', 'compiler_flag': ['-O0']},
    ]
