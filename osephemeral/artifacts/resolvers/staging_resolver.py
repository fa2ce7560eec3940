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

from osephemeral.artifacts.resolvers.resolver import ProvenanceResolver


class StagingVersionResolver(ProvenanceResolver):
    """
    Resolves build candidates from the staging area. The build hash selects the build. Without one, the latest build
    of the version is used.
    """
    STAGING_ROOT = "https://ci.opensearch.org/ci/dbc/distribution-build-opensearch/{{VERSION}}/{{BUILD}}/{{OSNAME}}/{{ARCH}}/tar"
    DEFAULT_URL_TEMPLATES = {
        "opensearch": STAGING_ROOT + "/dist/opensearch/opensearch-{{VERSION}}-{{OSNAME}}-{{ARCH}}.tar.gz",
        "opensearch.plugin": STAGING_ROOT + "/builds/opensearch/core-plugins/{{PRODUCT}}-{{VERSION}}.zip"
    }

    def resolve(self, product, version, platform):
        build = self.api_resolver.staging_build(str(version), version.build_hash)
        variables = self.artifact_variables(product, version, platform)
        variables["BUILD"] = build
        download_url = self.render_url(product, variables)
        self.logger.info("Resolved build candidate [%s] at version [%s] (build [%s]) to [%s].",
                         product, version, build, download_url)
        return self.descriptor(product, version, platform, download_url)
