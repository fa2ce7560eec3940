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

from osephemeral.cluster.tasks.task import ClusterComposeTask
from osephemeral.utils import io


class CopyCachedHomeInstallation(ClusterComposeTask):
    """
    Restores the node home from the cached home.
    """
    def run(self, cluster):
        if not cluster.caching_and_cached_home_exists():
            return
        fs = cluster.file_system
        if os.path.isdir(fs.home):
            self.diagnostic(cluster, "SKIP copying cached home, [%s] already exists", fs.home)
            return
        self.diagnostic(cluster, "copying cached home [%s] to [%s]", fs.cache_home, fs.home)
        io.copy_tree_if_absent(fs.cache_home, fs.home)
