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
"""Crosstool definitions for ARM.

The flags are based on the setup.mk files in the Android NDK toolchain
directories. The NDK makefiles create a set of flags for every combination of
gcc or clang version, CPU variant (armeabi, armeabi-v7a, armeabi-v7a-hard) and
instruction set (arm or thumb), resulting in toolchains named like:

    arm-linux-androideabi-4.8
    arm-linux-androideabi-4.8-v7a
    arm-linux-androideabi-4.8-v7a-hard
    arm-linux-androideabi-4.8-thumb
    arm-linux-androideabi-4.8-v7a-thumb
    arm-linux-androideabi-4.8-v7a-hard-thumb
    arm-linux-androideabi-clang3.5
    ...

AArch64 has a single CPU variant and no thumb mode.
"""

import logging
from typing import Dict, FrozenSet, Iterable, List, NamedTuple, Tuple

import constants
import hosts
from paths import NdkPaths
from toolchains import CompilationMode, CompilationModeFlags, Tool, ToolPath, ToolchainConfig
import utils


def logger():
    """Returns the module level logger."""
    return logging.getLogger(__name__)


# Strongest stack protector each gcc release supports.
_STACK_PROTECTOR_FLAGS: Dict[str, str] = {
    '4.8': '-fstack-protector',
    '4.9': '-fstack-protector-strong',
}

# Tools a gcc toolchain doesn't ship.
_MISSING_TOOLS: Dict[str, FrozenSet[Tool]] = {
    'arm-linux-androideabi-4.8': frozenset({Tool.GCOVTOOL}),
}

# gcc toolchains whose assembler must be used instead of clang's integrated one.
_NO_INTEGRATED_AS: FrozenSet[str] = frozenset({'arm-linux-androideabi-4.8'})

# -finline-limit for gcc, keyed by thumb.
_INLINE_LIMITS: Dict[bool, int] = {False: 300, True: 64}

# clang warns about gcc arguments that it passes through to the backend.
_CLANG_WARNING_FLAGS: Tuple[str, ...] = (
    '-Wno-invalid-command-line-argument',
    '-Wno-unused-command-line-argument',
)

_ARMV5TE_TRIPLE: str = 'armv5te-none-linux-androideabi'
_ARMV7_TRIPLE: str = 'armv7-none-linux-androideabi'
_AARCH64_TRIPLE: str = 'aarch64-none-linux-android'


def _target(llvm_triple: str) -> Tuple[str, ...]:
    return ('-target', llvm_triple)


class _Backend(NamedTuple):
    """A gcc toolchain from ndk/toolchains."""
    arch: hosts.Arch
    gcc_version: str

    @property
    def name(self) -> str:
        return f'{self.arch.target_platform}-{self.gcc_version}'

    @property
    def target_platform(self) -> str:
        return self.arch.target_platform

    @property
    def excluded_tools(self) -> FrozenSet[Tool]:
        return _MISSING_TOOLS.get(self.name, frozenset())


# Both clang front ends assemble and link with these.
_AARCH64_BACKEND = _Backend(hosts.Arch.AARCH64, '4.9')
_ARMEABI_CLANG_BACKEND = _Backend(hosts.Arch.ARM, '4.8')


class _CpuVariant(NamedTuple):
    """Flags added for one ARM CPU/ABI combination."""
    target_cpu: str
    suffix: str
    compiler_flags: Tuple[str, ...]
    linker_flags: Tuple[str, ...]


_ARMEABI_VARIANTS: Tuple[_CpuVariant, ...] = (
    _CpuVariant(
        'armeabi', '',
        ('-march=armv5te', '-mtune=xscale', '-msoft-float'),
        ()),
    _CpuVariant(
        'armeabi-v7a', '-v7a',
        ('-march=armv7-a', '-mfpu=vfpv3-d16', '-mfloat-abi=softfp'),
        ('-march=armv7-a', '-Wl,--fix-cortex-a8')),
    _CpuVariant(
        'armeabi-v7a-hard', '-v7a-hard',
        ('-march=armv7-a', '-mfpu=vfpv3-d16', '-mhard-float', '-D_NDK_MATH_NO_SOFTFP=1'),
        ('-march=armv7-a', '-Wl,--fix-cortex-a8', '-Wl,--no-warn-mismatch', '-lm_hard')),
)

# clang takes the target triple instead of -march at link time.
_ARMEABI_CLANG_VARIANTS: Tuple[_CpuVariant, ...] = (
    _CpuVariant(
        'armeabi', '',
        _target(_ARMV5TE_TRIPLE) + ('-march=armv5te', '-mtune=xscale', '-msoft-float'),
        _target(_ARMV5TE_TRIPLE)),
    _CpuVariant(
        'armeabi-v7a', '-v7a',
        _target(_ARMV7_TRIPLE) + ('-march=armv7-a', '-mfloat-abi=softfp', '-mfpu=vfpv3-d16'),
        _target(_ARMV7_TRIPLE) + ('-Wl,--fix-cortex-a8',)),
    _CpuVariant(
        'armeabi-v7a-hard', '-v7a-hard',
        _target(_ARMV7_TRIPLE) + ('-march=armv7-a', '-mfpu=vfpv3-d16', '-mhard-float',
                                  '-D_NDK_MATH_NO_SOFTFP=1'),
        _target(_ARMV7_TRIPLE) + ('-Wl,--fix-cortex-a8', '-Wl,--no-warn-mismatch', '-lm_hard')),
)


def _modes(opt: Iterable[str], dbg: Iterable[str]) -> Tuple[CompilationModeFlags, ...]:
    return (
        CompilationModeFlags(CompilationMode.OPT, tuple(opt)),
        CompilationModeFlags(CompilationMode.DBG, tuple(dbg)),
    )


def _aarch64_mode_flags(gcc: bool) -> Tuple[CompilationModeFlags, ...]:
    opt = ['-O2', '-g', '-DNDEBUG', '-fomit-frame-pointer', '-fstrict-aliasing']
    if gcc:
        opt.extend(['-funswitch-loops', f'-finline-limit={_INLINE_LIMITS[False]}'])
    dbg = ['-O0', '-UNDEBUG', '-fno-omit-frame-pointer', '-fno-strict-aliasing']
    return _modes(opt, dbg)


def _armeabi_mode_flags(thumb: bool, gcc: bool) -> Tuple[CompilationModeFlags, ...]:
    """Release and debug flags for arm-linux-androideabi.

    Thumb code is optimized for size. gcc additionally gets an inline limit
    matching the instruction set.
    """
    inline_limit = f'-finline-limit={_INLINE_LIMITS[thumb]}'
    if thumb:
        opt = ['-mthumb', '-Os', '-g', '-DNDEBUG', '-fomit-frame-pointer', '-fno-strict-aliasing']
        dbg = ['-g', '-fno-strict-aliasing']
        if gcc:
            opt.append(inline_limit)
            dbg.append(inline_limit)
        # Debug builds use arm mode, which debuggers handle better.
        dbg.extend(['-O0', '-UNDEBUG', '-marm', '-fno-omit-frame-pointer'])
    else:
        opt = ['-O2', '-g', '-DNDEBUG', '-fomit-frame-pointer', '-fstrict-aliasing']
        dbg = ['-g']
        if gcc:
            opt.extend(['-funswitch-loops', inline_limit])
            dbg.extend(['-funswitch-loops', inline_limit])
        dbg.extend(['-O0', '-UNDEBUG', '-fno-omit-frame-pointer', '-fno-strict-aliasing'])
    return _modes(opt, dbg)


def _armeabi_name(version: str, variant: _CpuVariant, thumb: bool) -> str:
    thumb_suffix = '-thumb' if thumb else ''
    return f'arm-linux-androideabi-{version}{variant.suffix}{thumb_suffix}'


class ArmCrosstools:
    """Creates the crosstool toolchains for arm-linux-androideabi and aarch64."""

    ndk_paths: NdkPaths

    def __init__(self, ndk_paths: NdkPaths) -> None:
        self.ndk_paths = ndk_paths

    def build(self) -> List[ToolchainConfig]:
        """Returns every ARM toolchain, in NDK release order."""
        toolchains = [self._aarch64_toolchain()]
        # The clang 3.5 and 3.6 toolchains differ only in their clang path.
        toolchains.extend(self._aarch64_clang_toolchain(clang_version)
                          for clang_version in constants.CLANG_VERSIONS)
        for gcc_version in constants.ARM_GCC_VERSIONS:
            for thumb in (False, True):
                toolchains.extend(self._armeabi_toolchains(gcc_version, thumb))
        for clang_version in constants.CLANG_VERSIONS:
            for thumb in (False, True):
                toolchains.extend(self._armeabi_clang_toolchains(clang_version, thumb))

        for toolchain in toolchains:
            logger().debug('%s: %s', toolchain.identifier,
                           utils.list2cmdline(toolchain.compiler_flags))
        return toolchains

    def _toolchain(self, backend: _Backend, identifier: str, target_cpu: str,
                   tool_paths: List[ToolPath], compiler_flags: Iterable[str],
                   linker_flags: Iterable[str],
                   mode_flags: Tuple[CompilationModeFlags, ...]) -> ToolchainConfig:
        """Fills in the fields that come from the gcc backend."""
        include_dirs = self.ndk_paths.create_toolchain_include_paths(
            backend.name, backend.target_platform, backend.gcc_version)
        return ToolchainConfig(
            identifier=identifier,
            target_system_name=backend.target_platform,
            target_cpu=target_cpu,
            compiler=f'gcc-{backend.gcc_version}',
            tool_paths=tuple(tool_paths),
            builtin_include_dirs=tuple(include_dirs),
            builtin_sysroot=self.ndk_paths.create_builtin_sysroot(backend.arch.ndk_arch),
            static_runtimes_group=f'static-runtime-libs-{backend.name}',
            dynamic_runtimes_group=f'dynamic-runtime-libs-{backend.name}',
            compiler_flags=tuple(compiler_flags),
            linker_flags=tuple(linker_flags),
            compilation_mode_flags=mode_flags)

    def _gcc_tool_paths(self, backend: _Backend) -> List[ToolPath]:
        return self.ndk_paths.create_tool_paths(
            backend.name, backend.target_platform, backend.excluded_tools)

    def _clang_tool_paths(self, backend: _Backend, clang_version: str) -> List[ToolPath]:
        return self.ndk_paths.create_clang_tool_paths(
            backend.name, backend.target_platform, clang_version, backend.excluded_tools)

    def _aarch64_toolchain(self) -> ToolchainConfig:
        backend = _AARCH64_BACKEND
        compiler_flags = [
            '-fpic',
            '-ffunction-sections',
            '-funwind-tables',
            _STACK_PROTECTOR_FLAGS[backend.gcc_version],
            '-no-canonical-prefixes',
        ]
        return self._toolchain(
            backend, backend.name, 'arm64-v8a', self._gcc_tool_paths(backend),
            compiler_flags, ['-no-canonical-prefixes'], _aarch64_mode_flags(gcc=True))

    def _aarch64_clang_toolchain(self, clang_version: str) -> ToolchainConfig:
        backend = _AARCH64_BACKEND
        gcc_toolchain = self.ndk_paths.create_gcc_toolchain_path(backend.name)
        compiler_flags = ['-gcc-toolchain', gcc_toolchain]
        compiler_flags.extend(_target(_AARCH64_TRIPLE))
        compiler_flags.extend([
            '-ffunction-sections',
            '-funwind-tables',
            '-fstack-protector-strong',
            '-fpic',
        ])
        compiler_flags.extend(_CLANG_WARNING_FLAGS)
        compiler_flags.append('-no-canonical-prefixes')
        if backend.name in _NO_INTEGRATED_AS:
            compiler_flags.append('-fno-integrated-as')

        linker_flags = ['-gcc-toolchain', gcc_toolchain]
        linker_flags.extend(_target(_AARCH64_TRIPLE))
        linker_flags.append('-no-canonical-prefixes')

        return self._toolchain(
            backend, f'aarch64-linux-android-clang{clang_version}', 'arm64-v8a',
            self._clang_tool_paths(backend, clang_version),
            compiler_flags, linker_flags, _aarch64_mode_flags(gcc=False))

    def _armeabi_toolchains(self, gcc_version: str, thumb: bool) -> List[ToolchainConfig]:
        """Returns the gcc toolchains for each CPU variant."""
        backend = _Backend(hosts.Arch.ARM, gcc_version)
        base_compiler_flags = [
            _STACK_PROTECTOR_FLAGS[gcc_version],
            '-fpic',
            '-ffunction-sections',
            '-funwind-tables',
            '-no-canonical-prefixes',
        ]
        base_linker_flags = ['-no-canonical-prefixes']
        mode_flags = _armeabi_mode_flags(thumb, gcc=True)

        return [
            self._toolchain(
                backend, _armeabi_name(gcc_version, variant, thumb), variant.target_cpu,
                self._gcc_tool_paths(backend),
                base_compiler_flags + list(variant.compiler_flags),
                base_linker_flags + list(variant.linker_flags),
                mode_flags)
            for variant in _ARMEABI_VARIANTS
        ]

    def _armeabi_clang_toolchains(self, clang_version: str,
                                  thumb: bool) -> List[ToolchainConfig]:
        """Returns the clang toolchains for each CPU variant."""
        backend = _ARMEABI_CLANG_BACKEND
        gcc_toolchain = self.ndk_paths.create_gcc_toolchain_path(backend.name)
        base_compiler_flags = [
            '-gcc-toolchain', gcc_toolchain,
            '-fpic',
            '-ffunction-sections',
            '-funwind-tables',
            '-fstack-protector-strong',
        ]
        base_compiler_flags.extend(_CLANG_WARNING_FLAGS)
        base_compiler_flags.append('-no-canonical-prefixes')
        if backend.name in _NO_INTEGRATED_AS:
            base_compiler_flags.append('-fno-integrated-as')
        base_linker_flags = ['-gcc-toolchain', gcc_toolchain, '-no-canonical-prefixes']
        mode_flags = _armeabi_mode_flags(thumb, gcc=False)

        return [
            self._toolchain(
                backend, _armeabi_name(f'clang{clang_version}', variant, thumb),
                variant.target_cpu, self._clang_tool_paths(backend, clang_version),
                base_compiler_flags + list(variant.compiler_flags),
                base_linker_flags + list(variant.linker_flags),
                mode_flags)
            for variant in _ARMEABI_CLANG_VARIANTS
        ]


def create_crosstools(ndk_paths: NdkPaths) -> List[ToolchainConfig]:
    """Returns the ARM toolchains for an NDK repository."""
    return ArmCrosstools(ndk_paths).build()
