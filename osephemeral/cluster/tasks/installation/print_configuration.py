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

from tabulate import tabulate

from osephemeral.cluster.tasks.task import ClusterComposeTask


class PrintConfiguration(ClusterComposeTask):
    def run(self, cluster):
        c = cluster.configuration
        fs = cluster.file_system
        rows = [
            ["Server type", c.server_type.name],
            ["Version", str(c.version)],
            ["Provenance", c.version.provenance.name],
            ["Build hash", c.version.build_hash or "-"],
            ["Plugins", ", ".join(p.name for p in c.plugins) or "-"],
            ["SSL enabled", c.enable_ssl],
            ["Cache home installation", c.cache_home_installation],
            ["Validate plugins to install", c.validate_plugins_to_install],
            ["Home", fs.home],
            ["Cached home", fs.cache_home],
        ]
        table = tabulate(rows, headers=["Setting", "Value"], tablefmt="simple")
        self.logger.info("Ephemeral cluster configuration:\n%s", table)
        cluster.write_diagnostic(table)
