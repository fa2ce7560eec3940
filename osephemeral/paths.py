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
import os


def ephemeral_confdir():
    default_home = os.path.expanduser("~")
    return os.path.join(os.getenv("OSEPHEMERAL_HOME", default_home), ".osephemeral")


def ephemeral_root():
    return os.path.dirname(os.path.realpath(__file__))


def local_root(cfg=None):
    """
    :return: The directory below which ephemeral installations, downloads and cached homes are kept.
    """
    if cfg:
        root_dir = cfg.opts("cluster", "root.dir", mandatory=False)
        if root_dir:
            return root_dir
    return os.path.join(ephemeral_confdir(), "ephemeral")


def logs():
    """
    :return: The absolute path to the directory that contains the log file.
    """
    return os.path.join(ephemeral_confdir(), "logs")
