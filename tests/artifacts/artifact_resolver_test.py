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

from unittest import TestCase, mock
from unittest.mock import Mock

from osephemeral import config
from osephemeral.artifacts import artifact_resolver
from osephemeral.artifacts.artifact_resolver import ArtifactResolver
from osephemeral.artifacts.platform import Platform
from osephemeral.artifacts.products import Product, ServerType
from osephemeral.artifacts.resolvers.released_resolver import ReleasedVersionResolver
from osephemeral.artifacts.resolvers.snapshot_resolver import SnapshotVersionResolver
from osephemeral.artifacts.resolvers.staging_resolver import StagingVersionResolver
from osephemeral.artifacts.versions import Provenance, StructuredVersion
from osephemeral.exceptions import UnresolvableArtifactError

LINUX_X64 = Platform("linux", "x64")
OPENSEARCH = Product.server(ServerType.OPENSEARCH)


class InMemoryConfigFile:
    def __init__(self, config_name=None):
        self.config_name = config_name
        self.present = False
        self.location = "in-memory"


class ArtifactResolverTests(TestCase):
    def setUp(self):
        self.strategies = {p: Mock(name=p.name) for p in Provenance}
        self.resolver = ArtifactResolver(self.strategies)

    def test_dispatches_on_provenance(self):
        for provenance in Provenance:
            build_hash = "abc" if provenance == Provenance.BUILD_CANDIDATE else None
            version = StructuredVersion.parse("2.6.0", provenance, build_hash)
            self.strategies[provenance].resolve.return_value = "resolved-%s" % provenance.name
            self.assertEqual("resolved-%s" % provenance.name, self.resolver.resolve(OPENSEARCH, version, LINUX_X64))
            self.strategies[provenance].resolve.assert_called_once_with(OPENSEARCH, version, LINUX_X64)

    @mock.patch("osephemeral.artifacts.platform.Platform.current")
    def test_defaults_to_current_platform(self, current):
        current.return_value = Platform("darwin", "arm64")
        version = StructuredVersion.parse("2.4.5")
        self.resolver.resolve(OPENSEARCH, version)
        self.strategies[Provenance.RELEASED].resolve.assert_called_once_with(OPENSEARCH, version, Platform("darwin", "arm64"))

    @mock.patch("platform.machine", return_value="ppc64le")
    def test_unsupported_host_architecture(self, machine):
        with self.assertRaises(UnresolvableArtifactError) as ctx:
            self.resolver.resolve(OPENSEARCH, StructuredVersion.parse("2.4.5"))
        self.assertIsInstance(ctx.exception.cause, ValueError)
        self.strategies[Provenance.RELEASED].resolve.assert_not_called()

    def test_missing_strategy(self):
        resolver = ArtifactResolver({Provenance.RELEASED: Mock()})
        with self.assertRaises(UnresolvableArtifactError):
            resolver.resolve(OPENSEARCH, StructuredVersion.parse("2.6.0-SNAPSHOT", Provenance.SNAPSHOT), LINUX_X64)


class CreateArtifactResolverTests(TestCase):
    def test_creates_one_strategy_per_provenance(self):
        resolver = artifact_resolver.create()
        self.assertIsInstance(resolver.resolvers[Provenance.RELEASED], ReleasedVersionResolver)
        self.assertIsInstance(resolver.resolvers[Provenance.SNAPSHOT], SnapshotVersionResolver)
        self.assertIsInstance(resolver.resolvers[Provenance.BUILD_CANDIDATE], StagingVersionResolver)

    def test_url_templates_from_config(self):
        cfg = config.Config(config_file_class=InMemoryConfigFile)
        cfg.add("artifacts", "released.opensearch.url", "https://mirror/{{VERSION}}.tar.gz")
        cfg.add("artifacts", "staging.opensearch.plugin.url", "https://staging/{{BUILD}}/{{PRODUCT}}.zip")
        cfg.add("artifacts", "index.releases.url", "https://mirror/releases.json")

        resolver = artifact_resolver.create(cfg)

        self.assertEqual("https://mirror/{{VERSION}}.tar.gz",
                         resolver.resolvers[Provenance.RELEASED].url_templates["opensearch"])
        self.assertEqual("https://staging/{{BUILD}}/{{PRODUCT}}.zip",
                         resolver.resolvers[Provenance.BUILD_CANDIDATE].url_templates["opensearch.plugin"])
        api = resolver.resolvers[Provenance.SNAPSHOT].api_resolver
        self.assertEqual("https://mirror/releases.json", api.url_templates["index.releases.url"])

        artifact = resolver.resolve(OPENSEARCH, StructuredVersion.parse("2.4.5"), LINUX_X64)
        self.assertEqual("https://mirror/2.4.5.tar.gz", artifact.download_url)
