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
"""Constants and helper functions for hosts and target arches."""
import enum
import sys

@enum.unique
class Host(enum.Enum):
    """Enumeration of hosts the NDK ships prebuilt toolchains for."""
    Darwin = 'darwin'
    Linux = 'linux'
    Windows = 'windows'

    @property
    def ndk_tag(self) -> str:
        """Returns the prebuilt directory name used by the NDK for this host."""
        return {
            Host.Darwin: 'darwin-x86_64',
            Host.Linux: 'linux-x86_64',
            Host.Windows: 'windows-x86_64',
        }[self]


@enum.unique
class Arch(enum.Enum):
    """Enumeration of supported ARM arches."""
    ARM = 'arm'
    AARCH64 = 'aarch64'

    @property
    def ndk_arch(self) -> str:
        """Converts to the arch name used by NDK platform directories."""
        return {
            Arch.ARM: 'arm',
            Arch.AARCH64: 'arm64',
        }[self]

    @property
    def target_platform(self) -> str:
        """Returns the GNU triple prefix of the NDK gcc toolchain."""
        return {
            Arch.ARM: 'arm-linux-androideabi',
            Arch.AARCH64: 'aarch64-linux-android',
        }[self]


def _get_default_host() -> Host:
    """Returns the Host matching the current machine."""
    if sys.platform.startswith('linux'):
        return Host.Linux
    if sys.platform.startswith('darwin'):
        return Host.Darwin
    if sys.platform.startswith('win'):
        return Host.Windows
    raise RuntimeError('Unsupported host: {}'.format(sys.platform))


_BUILD_OS_TYPE: Host = _get_default_host()


def build_host() -> Host:
    """Returns the cached Host matching the current machine."""
    return _BUILD_OS_TYPE
