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

import logging

from osephemeral.cluster.tasks.installation.cache_home_installation import CacheHomeInstallation
from osephemeral.cluster.tasks.installation.copy_cached_installation import CopyCachedHomeInstallation
from osephemeral.cluster.tasks.installation.download_distribution import DownloadServerDistribution
from osephemeral.cluster.tasks.installation.initial_configuration import InitialConfiguration
from osephemeral.cluster.tasks.installation.install_plugins import InstallPlugins
from osephemeral.cluster.tasks.installation.print_configuration import PrintConfiguration
from osephemeral.cluster.tasks.validation.validate_plugins import ValidatePlugins
from osephemeral.cluster.tasks.validation.validate_running_version import ValidateRunningVersion


def default_installation_tasks():
    return [
        PrintConfiguration(),
        CopyCachedHomeInstallation(),
        DownloadServerDistribution(),
        InitialConfiguration(),
        InstallPlugins(),
        CacheHomeInstallation()
    ]


def default_validation_tasks():
    return [
        ValidateRunningVersion(),
        ValidatePlugins()
    ]


class TaskPipeline:
    """
    Runs installation tasks, then starts the node through an externally provided hook and finally runs validation
    tasks. Tasks run strictly in order and the first error aborts the pipeline.
    """
    def __init__(self, installation_tasks=None, validation_tasks=None):
        self.logger = logging.getLogger(__name__)
        self.installation_tasks = default_installation_tasks() if installation_tasks is None else installation_tasks
        self.validation_tasks = default_validation_tasks() if validation_tasks is None else validation_tasks

    def install(self, cluster):
        cluster.reset_caching_state()
        self._run_all(self.installation_tasks, cluster)

    def validate(self, cluster):
        self._run_all(self.validation_tasks, cluster)

    def run(self, cluster, start):
        """
        Brings up a cluster.

        :param cluster: The ``EphemeralCluster`` to bring up.
        :param start: A callable that starts the node process. It receives the cluster and must return once the node
                      is ready to serve requests.
        """
        self.install(cluster)
        self.logger.info("Starting node in [%s].", cluster.file_system.home)
        start(cluster)
        self.validate(cluster)

    def _run_all(self, tasks, cluster):
        for task in tasks:
            self.logger.info("Running task [%s].", type(task).__name__)
            task.run(cluster)
