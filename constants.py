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
"""Configs for the crosstools."""

from typing import Dict, Tuple

# Repository name the NDK is mounted under, i.e. external/<name>/ndk.
DEFAULT_REPOSITORY_NAME: str = 'androidndk'

# Android platform used for the builtin sysroot when none is requested.
DEFAULT_API_LEVEL: int = 21

# Lowest platform that has headers and libraries for each NDK arch.
MIN_API_LEVELS: Dict[str, int] = {
    'arm': 3,
    'arm64': 21,
}

# gcc toolchains in ndk/toolchains/ that crosstools are generated for.
NDK_GCC_TOOLCHAINS: Tuple[str, ...] = (
    'aarch64-linux-android-4.9',
    'arm-linux-androideabi-4.8',
    'arm-linux-androideabi-4.9',
)

# gcc versions built for arm-linux-androideabi, in release order.
ARM_GCC_VERSIONS: Tuple[str, ...] = ('4.8', '4.9')

# Clang front ends in ndk/toolchains/llvm-<version>, in release order.
CLANG_VERSIONS: Tuple[str, ...] = ('3.5', '3.6')
