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
from abc import ABC, abstractmethod

from osephemeral.utils import net


class ClusterComposeTask(ABC):
    """
    A single step of bringing up an ephemeral cluster. Tasks hold no state of their own; everything they need is
    provided by the cluster they run against.
    """

    def __init__(self):
        self.logger = logging.getLogger(__name__)

    @abstractmethod
    def run(self, cluster):
        """
        Runs this task against a cluster

        ;param cluster: The ``EphemeralCluster`` to operate on
        ;return None
        """
        raise NotImplementedError

    def diagnostic(self, cluster, message, *args):
        line = "{%s} %s" % (type(self).__name__, message % args if args else message)
        self.logger.debug(line)
        cluster.write_diagnostic(line)

    @staticmethod
    def execute_binary(cluster, binary, description, *arguments):
        cluster.executor.execute(cluster.configuration, cluster.writer, binary, description, *arguments)

    def download_file(self, cluster, url, local_path):
        """
        Downloads ``url`` to ``local_path``. Failures are reported to the cluster's diagnostics and re-raised.
        """
        self.diagnostic(cluster, "downloading [%s] to [%s]", url, local_path)
        try:
            net.download(url, local_path)
        except BaseException:
            self.logger.exception("Could not download [%s] to [%s].", url, local_path)
            self.diagnostic(cluster, "download failed! [%s]", url)
            raise
        self.diagnostic(cluster, "downloaded [%s] to [%s]", url, local_path)
