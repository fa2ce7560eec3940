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
from osephemeral.exceptions import SystemSetupError
from osephemeral.utils import io


class DownloadServerDistribution(ClusterComposeTask):
    def run(self, cluster):
        if cluster.caching_and_cached_home_exists():
            self.diagnostic(cluster, "SKIP cached home [%s] exists", cluster.file_system.cache_home)
            return
        fs = cluster.file_system
        if os.path.isdir(fs.home):
            self.diagnostic(cluster, "SKIP download, [%s] already exists", fs.home)
            return

        artifact = cluster.resolve(cluster.configuration.server_product)
        archive = os.path.join(fs.local_folder, artifact.file_name)
        if os.path.isfile(archive):
            self.diagnostic(cluster, "SKIP download, [%s] already exists", archive)
        else:
            self.download_file(cluster, artifact.download_url, archive)

        io.decompress(archive, fs.local_folder)
        if not os.path.isdir(fs.home):
            raise SystemSetupError("Extracting [%s] did not create the expected home [%s]." % (archive, fs.home))
