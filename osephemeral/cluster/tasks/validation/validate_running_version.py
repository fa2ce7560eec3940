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

from osephemeral.artifacts.products import OPENDISTRO_UPSTREAM_VERSION, ServerType
from osephemeral.cluster.tasks.task import ClusterComposeTask
from osephemeral.exceptions import ValidationMismatchError


def anchor_version(configuration):
    if configuration.server_type == ServerType.OPENDISTRO:
        return OPENDISTRO_UPSTREAM_VERSION
    return configuration.version.anchor


def response_lines(response):
    body = response.body
    if isinstance(body, bytes):
        body = body.decode("utf-8")
    return [line.strip() for line in str(body or "").splitlines() if line.strip()]


class ValidateRunningVersion(ClusterComposeTask):
    """
    Checks once that every node of the running cluster reports the expected version.
    """
    def run(self, cluster):
        requested = anchor_version(cluster.configuration)
        self.diagnostic(cluster, "validating the cluster is running the requested version: %s", requested)

        response = cluster.get("_cat/nodes", {"h": "version"})
        if response is None or not response.is_success:
            status = "no response" if response is None else "status %s" % response.status
            raise ValidationMismatchError("Could not query the version of the running cluster (%s)." % status)

        versions = response_lines(response)
        if any(v != requested for v in versions):
            raise ValidationMismatchError("Requested version [%s] but nodes report [%s]." % (requested, ", ".join(versions)))
        self.logger.info("All nodes run the requested version [%s].", requested)
