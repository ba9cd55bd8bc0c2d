#!/usr/bin/env python3
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
"""Writes the ARM crosstool toolchains of an NDK repository as yaml or json."""

import argparse
import inspect
import json
import logging
import os
from pathlib import Path
import sys
from typing import Any, Dict, List, Optional, TextIO
import yaml

import arm_crosstools
import constants
import hosts
from paths import NdkPaths
from toolchains import ToolchainConfig


def logger():
    """Returns the module level logger."""
    return logging.getLogger(__name__)


class ArgParser(argparse.ArgumentParser):
    def __init__(self) -> None:
        super().__init__(description=inspect.getdoc(sys.modules[__name__]))

        self.add_argument(
            '--repository-name',
            default=os.environ.get('NDK_REPOSITORY_NAME', constants.DEFAULT_REPOSITORY_NAME),
            help='Name of the repository the NDK is mounted as (external/<name>).')

        self.add_argument(
            '--api-level', type=int, default=constants.DEFAULT_API_LEVEL,
            help='Android platform used for the builtin sysroot.')

        self.add_argument(
            '--host', choices=[host.value for host in hosts.Host],
            default=hosts.build_host().value,
            help='Host the NDK prebuilts are for.')

        self.add_argument(
            '--toolchain', action='append', dest='toolchains', metavar='IDENTIFIER',
            help='Only write this toolchain. Can be repeated.')

        self.add_argument(
            '--format', choices=('yaml', 'json'), default='yaml',
            help='Output format.')

        self.add_argument(
            '-o', '--output', type=Path,
            help='File to write to instead of stdout.')

        self.add_argument(
            '-v', '--verbose', action='store_true', default=False,
            help='Log every toolchain created.')


def select_toolchains(toolchains: List[ToolchainConfig],
                      identifiers: Optional[List[str]]) -> List[ToolchainConfig]:
    """Returns toolchains named in identifiers, keeping the crosstool order."""
    if not identifiers:
        return toolchains
    known = {toolchain.identifier for toolchain in toolchains}
    unknown = [identifier for identifier in identifiers if identifier not in known]
    if unknown:
        raise ValueError(f'Unknown toolchains: {", ".join(unknown)}')
    wanted = set(identifiers)
    return [toolchain for toolchain in toolchains if toolchain.identifier in wanted]


def dump(toolchains: List[ToolchainConfig], out: TextIO, output_format: str) -> None:
    """Writes toolchains as a `toolchain` list."""
    document: Dict[str, Any] = {
        'toolchain': [toolchain.as_dict() for toolchain in toolchains],
    }
    if output_format == 'json':
        json.dump(document, out, indent=2)
        out.write('\n')
    else:
        yaml.safe_dump(document, out, default_flow_style=False, sort_keys=False)


def main(argv: Optional[List[str]] = None) -> None:
    parser = ArgParser()
    args = parser.parse_args(argv)

    logging.basicConfig(level=logging.DEBUG if args.verbose else logging.INFO)

    try:
        ndk_paths = NdkPaths(args.repository_name, hosts.Host(args.host), args.api_level)
    except ValueError as error:
        parser.error(str(error))

    toolchains = arm_crosstools.create_crosstools(ndk_paths)
    try:
        toolchains = select_toolchains(toolchains, args.toolchains)
    except ValueError as error:
        parser.error(str(error))

    if args.output:
        args.output.parent.mkdir(parents=True, exist_ok=True)
        with args.output.open('w') as outfile:
            dump(toolchains, outfile, args.format)
        logger().info('Wrote %d toolchains to %s', len(toolchains), args.output)
    else:
        dump(toolchains, sys.stdout, args.format)


if __name__ == '__main__':
    main()
