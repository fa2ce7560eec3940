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
from osephemeral.exceptions import UnresolvableArtifactError


class SnapshotVersionResolver(ProvenanceResolver):
    """
    Looks up snapshot packages in the snapshot index. The closest matching package is one built for the target
    platform. Platform-independent packages are used if there is none. Among equally close packages the one with the
    shortest file name wins.
    """

    def resolve(self, product, version, platform):
        packages = self.api_resolver.snapshot_packages(product, version)
        candidates = [(name, package) for name, package in packages.items()
                      if name.startswith("%s-" % product.name) and isinstance(package, dict) and package.get("url")]
        exact = [c for c in candidates if c[1].get("platform") == platform.moniker]
        independent = [c for c in candidates if not c[1].get("platform")]
        matches = exact or independent
        if not matches:
            raise UnresolvableArtifactError("No snapshot package of [%s] at version [%s] matches platform [%s]."
                                            % (product, version, platform))
        name, package = min(matches, key=lambda c: (len(c[0]), c[0]))
        self.logger.info("Resolved snapshot artifact [%s] at version [%s] to package [%s].", product, version, name)
        return self.descriptor(product, version, platform, package["url"])
