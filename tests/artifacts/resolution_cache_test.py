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

import threading
from unittest import TestCase
from unittest.mock import Mock

from osephemeral.artifacts import products
from osephemeral.artifacts.artifact import ArtifactDescriptor
from osephemeral.artifacts.platform import Platform
from osephemeral.artifacts.products import Product, ServerType
from osephemeral.artifacts.resolution_cache import NoResolutionCache, ResolutionCache
from osephemeral.artifacts.versions import Provenance, StructuredVersion

LINUX_X64 = Platform("linux", "x64")


def descriptor(product, version, url):
    return ArtifactDescriptor(product, version, LINUX_X64, url)


class ResolutionCacheTests(TestCase):
    def test_resolves_once_per_key(self):
        cache = ResolutionCache()
        resolve = Mock(side_effect=[object(), object()])

        first = cache.get_or_resolve("opensearch", resolve)
        second = cache.get_or_resolve("opensearch", resolve)

        self.assertIs(first, second)
        self.assertEqual(1, resolve.call_count)
        self.assertIn("opensearch", cache)
        self.assertEqual(1, len(cache))

    def test_keys_are_independent(self):
        cache = ResolutionCache()
        a = cache.get_or_resolve("a", lambda: "resolved-a")
        b = cache.get_or_resolve("b", lambda: "resolved-b")
        self.assertEqual("resolved-a", a)
        self.assertEqual("resolved-b", b)
        self.assertEqual(2, len(cache))

    def test_racing_callers_observe_the_same_value(self):
        cache = ResolutionCache()
        # both callers miss the cache before either one stores its value
        both_resolving = threading.Barrier(2, timeout=10)
        results = [None, None]

        def resolve():
            both_resolving.wait()
            return object()

        def caller(i):
            results[i] = cache.get_or_resolve("opensearch", resolve)

        threads = [threading.Thread(target=caller, args=(i,)) for i in range(2)]
        for t in threads:
            t.start()
        for t in threads:
            t.join(timeout=10)

        self.assertIsNotNone(results[0])
        self.assertIs(results[0], results[1])
        self.assertIs(results[0], cache.get_or_resolve("opensearch", resolve))

    def test_errors_are_not_cached(self):
        cache = ResolutionCache()
        resolve = Mock(side_effect=[RuntimeError("unavailable"), "resolved"])
        with self.assertRaises(RuntimeError):
            cache.get_or_resolve("opensearch", resolve)
        self.assertEqual("resolved", cache.get_or_resolve("opensearch", resolve))

    def test_no_resolution_cache_always_resolves(self):
        cache = NoResolutionCache()
        resolve = Mock(side_effect=["first", "second"])
        self.assertEqual("first", cache.get_or_resolve("opensearch", resolve))
        self.assertEqual("second", cache.get_or_resolve("opensearch", resolve))
        self.assertNotIn("opensearch", cache)
        self.assertEqual(0, len(cache))


class VersionArtifactTests(TestCase):
    def test_artifact_is_resolved_once_per_version_instance(self):
        version = StructuredVersion.parse("2.4.5")
        product = Product.server(ServerType.OPENSEARCH)
        artifact_resolver = Mock()
        artifact_resolver.resolve.side_effect = lambda p, v, platform: descriptor(p, v, "https://example.org/%s" % id(object()))

        first = version.artifact(product, artifact_resolver, LINUX_X64)
        second = version.artifact(product, artifact_resolver, LINUX_X64)

        self.assertIs(first, second)
        artifact_resolver.resolve.assert_called_once_with(product, version, LINUX_X64)

    def test_plugin_and_server_are_cached_separately(self):
        version = StructuredVersion.parse("2.4.5")
        server = Product.server(ServerType.OPENSEARCH)
        plugin = Product.opensearch_plugin(products.ANALYSIS_ICU)
        artifact_resolver = Mock()
        artifact_resolver.resolve.side_effect = lambda p, v, platform: descriptor(p, v, "https://example.org/%s" % p.name)

        self.assertEqual("https://example.org/opensearch", version.artifact(server, artifact_resolver).download_url)
        self.assertEqual("https://example.org/analysis-icu", version.artifact(plugin, artifact_resolver).download_url)
        self.assertEqual(2, artifact_resolver.resolve.call_count)

    def test_equal_versions_do_not_share_a_cache(self):
        product = Product.server(ServerType.OPENSEARCH)
        artifact_resolver = Mock()
        artifact_resolver.resolve.side_effect = lambda p, v, platform: descriptor(p, v, "https://example.org/x")

        StructuredVersion.parse("2.4.5").artifact(product, artifact_resolver, LINUX_X64)
        StructuredVersion.parse("2.4.5").artifact(product, artifact_resolver, LINUX_X64)

        self.assertEqual(2, artifact_resolver.resolve.call_count)

    def test_injected_cache_can_be_bypassed(self):
        version = StructuredVersion(2, 4, 5, provenance=Provenance.RELEASED, resolution_cache=NoResolutionCache())
        product = Product.server(ServerType.OPENSEARCH)
        artifact_resolver = Mock()
        artifact_resolver.resolve.side_effect = lambda p, v, platform: descriptor(p, v, "https://example.org/x")

        version.artifact(product, artifact_resolver, LINUX_X64)
        version.artifact(product, artifact_resolver, LINUX_X64)

        self.assertEqual(2, artifact_resolver.resolve.call_count)
