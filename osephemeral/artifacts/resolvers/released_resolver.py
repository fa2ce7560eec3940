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

from osephemeral.artifacts.products import OPENDISTRO_UPSTREAM_VERSION
from osephemeral.artifacts.resolvers.resolver import ProvenanceResolver


class ReleasedVersionResolver(ProvenanceResolver):
    DEFAULT_URL_TEMPLATES = {
        "opensearch": "https://artifacts.opensearch.org/releases/bundle/opensearch/{{VERSION}}/"
                      "opensearch-{{VERSION}}-{{OSNAME}}-{{ARCH}}.tar.gz",
        "opensearch.plugin": "https://artifacts.opensearch.org/releases/plugins/{{PRODUCT}}/{{VERSION}}/"
                             "{{PRODUCT}}-{{VERSION}}.zip",
        "opendistroforelasticsearch": "https://d3g5vo6xdbdb9a.cloudfront.net/tarball/opendistro-elasticsearch/"
                                      "opendistroforelasticsearch-{{VERSION}}-{{OSNAME}}-{{ARCH}}.tar.gz",
        "opendistroforelasticsearch.plugin": "https://artifacts.elastic.co/downloads/elasticsearch-plugins/{{PRODUCT}}/"
                                             "{{PRODUCT}}-oss-{{UPSTREAM_VERSION}}.zip",
        "elasticsearch": "https://artifacts.elastic.co/downloads/elasticsearch/"
                         "elasticsearch-oss-{{VERSION}}-{{OSNAME}}-x86_64.tar.gz",
        "elasticsearch.plugin": "https://artifacts.elastic.co/downloads/elasticsearch-plugins/{{PRODUCT}}/"
                                "{{PRODUCT}}-{{VERSION}}.zip"
    }

    def resolve(self, product, version, platform):
        variables = self.artifact_variables(product, version, platform)
        variables["UPSTREAM_VERSION"] = OPENDISTRO_UPSTREAM_VERSION
        download_url = self.render_url(product, variables)
        self.logger.info("Resolved released artifact [%s] at version [%s] to [%s].", product, version, download_url)
        return self.descriptor(product, version, platform, download_url)
