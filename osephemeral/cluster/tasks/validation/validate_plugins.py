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

from osephemeral.cluster.tasks.task import ClusterComposeTask
from osephemeral.cluster.tasks.validation.validate_running_version import response_lines
from osephemeral.exceptions import ValidationMismatchError


class ValidatePlugins(ClusterComposeTask):
    """
    Checks once that the running cluster reports every requested plugin that had to be installed.
    """
    def run(self, cluster):
        c = cluster.configuration
        expected = [p.name for p in c.plugins if p.is_valid(c.version) and not p.is_included_out_of_the_box(c.version)]
        if not expected:
            return
        self.diagnostic(cluster, "validating the cluster reports plugins: %s", ", ".join(expected))

        response = cluster.get("_cat/plugins", {"h": "component"})
        if response is None or not response.is_success:
            status = "no response" if response is None else "status %s" % response.status
            raise ValidationMismatchError("Could not query the plugins of the running cluster (%s)." % status)

        installed = set(response_lines(response))
        missing = [p for p in expected if p not in installed]
        if missing:
            raise ValidationMismatchError("Requested plugins [%s] are not reported by the cluster, which reports [%s]."
                                          % (", ".join(missing), ", ".join(sorted(installed))))
