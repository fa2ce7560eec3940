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
import urllib.error

import urllib3

from osephemeral.artifacts.versions import StructuredVersion
from osephemeral.exceptions import MalformedVersionError, UnresolvableArtifactError
from osephemeral.utils import net

RELEASES_INDEX_URL = "index.releases.url"
SNAPSHOTS_INDEX_URL = "index.snapshots.url"
SNAPSHOT_SEARCH_URL = "index.snapshot.search.url"
STAGING_INDEX_URL = "index.staging.url"

DEFAULT_INDEX_URLS = {
    # {"versions": ["1.0.0", "2.4.5", ...]}
    RELEASES_INDEX_URL: "https://artifacts.opensearch.org/releases/core/opensearch/index.json",
    # {"versions": ["2.5.0-SNAPSHOT", "3.0.0-SNAPSHOT", ...]}
    SNAPSHOTS_INDEX_URL: "https://artifacts.opensearch.org/snapshots/core/opensearch/index.json",
    # {"packages": {"<file name>": {"url": "...", "platform": "linux-x64"}, ...}}
    SNAPSHOT_SEARCH_URL: "https://artifacts.opensearch.org/snapshots/{{DISTRIBUTION}}/{{PRODUCT}}/{{VERSION}}/index.json",
    # {"latest": "<build id>", "builds": ["<build id>", ...]}
    STAGING_INDEX_URL: "https://ci.opensearch.org/ci/dbc/distribution-build-opensearch/{{VERSION}}/index.json",
}


class ApiResolver:
    """
    Client for the version and artifact indices. Every index is a JSON document; any failure to retrieve or
    interpret one is raised as ``UnresolvableArtifactError``.
    """

    def __init__(self, template_renderer, url_templates=None, retrieve_json=net.retrieve_content_as_json):
        self.logger = logging.getLogger(__name__)
        self.template_renderer = template_renderer
        self.url_templates = dict(DEFAULT_INDEX_URLS)
        self.url_templates.update(url_templates or {})
        self.retrieve_json = retrieve_json
        self._released_versions = None

    def is_released_version(self, version):
        return version in self.released_versions()

    def released_versions(self):
        if self._released_versions is None:
            self._released_versions = self._versions(RELEASES_INDEX_URL)
        return self._released_versions

    def latest_release_or_snapshot(self, major=None):
        """
        :param major: An optional major version to restrict the search to.
        :return: The version string of the newest released or snapshot version.
        """
        candidates = []
        for v in self.released_versions() + self._versions(SNAPSHOTS_INDEX_URL):
            try:
                parsed = StructuredVersion.parse(v)
            except MalformedVersionError:
                self.logger.warning("Ignoring malformed version [%s] in version index.", v)
                continue
            if major is None or parsed.major == major:
                candidates.append((parsed, v))
        if not candidates:
            if major is None:
                raise UnresolvableArtifactError("Could not find any released or snapshot version.")
            raise UnresolvableArtifactError("Could not find any released or snapshot version for major version [%s]." % major)
        # a release wins over the snapshot of the same version
        _, latest = max(candidates, key=lambda c: (c[0], c[1] in self.released_versions()))
        return latest

    def latest_build_hash(self, version):
        return self.staging_build(version)

    def staging_build(self, version, build_hash=None):
        """
        :param version: The version string of a build candidate.
        :param build_hash: An optional build hash. If given, it must be known to the staging index.
        :return: ``build_hash`` if it is known to the staging index, otherwise the latest build for ``version``.
        """
        index = self._fetch(STAGING_INDEX_URL, {"VERSION": version})
        if build_hash:
            builds = index.get("builds")
            if builds is not None and build_hash not in builds:
                raise UnresolvableArtifactError("Build [%s] is not a known build candidate for version [%s]." % (build_hash, version))
            return build_hash
        latest = index.get("latest")
        if not latest:
            raise UnresolvableArtifactError("The staging index does not list a latest build for version [%s]." % version)
        return str(latest)

    def snapshot_packages(self, product, version):
        """
        :return: A dict of file names to package descriptions (``url`` and an optional ``platform``).
        """
        index = self._fetch(SNAPSHOT_SEARCH_URL, {
            "DISTRIBUTION": product.server_type.distribution_name,
            "PRODUCT": product.name,
            "VERSION": str(version)
        })
        packages = index.get("packages")
        if not isinstance(packages, dict):
            raise UnresolvableArtifactError("No snapshot packages found for [%s] at version [%s]." % (product, version))
        return packages

    def _versions(self, key):
        versions = self._fetch(key).get("versions")
        if not isinstance(versions, list):
            raise UnresolvableArtifactError("Version index [%s] does not contain a list of versions." % key)
        return versions

    def _fetch(self, key, variables=None):
        url = self.template_renderer.render_template_string(self.url_templates[key], variables or {})
        self.logger.debug("Querying [%s].", url)
        try:
            content = self.retrieve_json(url)
        except (urllib.error.URLError, urllib3.exceptions.HTTPError, ValueError) as e:
            self.logger.exception("Could not retrieve index [%s].", url)
            raise UnresolvableArtifactError("Could not retrieve index [%s]." % url, e)
        if not isinstance(content, dict):
            raise UnresolvableArtifactError("Index [%s] is not a JSON object." % url)
        return content
