# SPDX-License-Identifier: Apache-2.0
#
# The OpenSearch Contributors require contributions made to
# this file be licensed under the Apache-2.0 license or a
# compatible open source license.
# Modifications Copyright OpenSearch Contributors. See
# GitHub history for details.
# Licensed to Elasticsearch B.V. under one or more contributor
# license agreements. See the NOTICE file distributed with
# this work for additional information regarding copyright
# ownership. Elasticsearch B.V. licenses this file to you under
# the Apache License, Version 2.0 (the "License"); you may
# not use this file except in compliance with the License.
# You may obtain a copy of the License at
#
#	http://www.apache.org/licenses/LICENSE-2.0
#
# Unless required by applicable law or agreed to in writing,
# software distributed under the License is distributed on an
# "AS IS" BASIS, WITHOUT WARRANTIES OR CONDITIONS OF ANY
# KIND, either express or implied.  See the License for the
# specific language governing permissions and limitations
# under the License.

import platform as platform_module
from dataclasses import dataclass
from enum import Enum


class ArchitectureTypes(Enum):
    """
    Represents a machine's architecture type

    :param hardware_names: The values returned by the machine when querying the architecture, e.g. via `uname -m`
    ;param opensearch_name: The value used by opensearch artifacts to represent the architecture
    """

    def __init__(self, hardware_names, opensearch_name):
        self.hardware_names = hardware_names
        self.opensearch_name = opensearch_name

    ARM = ("aarch64", "arm64"), "arm64"
    x86 = ("x86_64", "amd64"), "x64"

    @staticmethod
    def get_from_hardware_name(hardware_name):
        for arch_type in ArchitectureTypes:
            if hardware_name.lower() in arch_type.hardware_names:
                return arch_type

        raise ValueError("Unsupported architecture [%s]" % hardware_name)


@dataclass(frozen=True)
class Platform:
    """
    The platform an artifact is built for, e.g. ``linux`` on ``x64``.
    """
    os_name: str
    arch: str

    @property
    def moniker(self):
        return "%s-%s" % (self.os_name, self.arch)

    @staticmethod
    def current():
        os_name = platform_module.system().lower()
        arch = ArchitectureTypes.get_from_hardware_name(platform_module.machine()).opensearch_name
        return Platform(os_name, arch)

    def __str__(self):
        return self.moniker
