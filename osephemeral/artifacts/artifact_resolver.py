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

from osephemeral.artifacts.platform import Platform
from osephemeral.artifacts.resolvers.api_resolver import ApiResolver, DEFAULT_INDEX_URLS
from osephemeral.artifacts.resolvers.released_resolver import ReleasedVersionResolver
from osephemeral.artifacts.resolvers.snapshot_resolver import SnapshotVersionResolver
from osephemeral.artifacts.resolvers.staging_resolver import StagingVersionResolver
from osephemeral.artifacts.versions import Provenance
from osephemeral.exceptions import UnresolvableArtifactError
from osephemeral.utils.template_renderer import TemplateRenderer

ARTIFACTS_SECTION = "artifacts"


class ArtifactResolver:
    """
    Dispatches artifact resolution to the strategy that is responsible for a version's provenance.
    """

    def __init__(self, resolvers):
        self.logger = logging.getLogger(__name__)
        self.resolvers = resolvers

    def resolve(self, product, version, platform=None):
        if platform is None:
            try:
                platform = Platform.current()
            except ValueError as e:
                raise UnresolvableArtifactError("Cannot resolve [%s] at version [%s] for this host." % (product, version), e)
        resolver = self.resolvers.get(version.provenance)
        if resolver is None:
            raise UnresolvableArtifactError("Cannot resolve artifacts of provenance [%s]." % version.provenance.name)
        self.logger.info("Resolving [%s] at version [%s] of provenance [%s] for platform [%s].",
                         product, version, version.provenance.name, platform)
        return resolver.resolve(product, version, platform)


def _url_templates(opts, prefix):
    """
    Picks all keys of the form ``<prefix>.<key>.url`` and returns them as ``<key>``.
    """
    templates = {}
    for k, v in opts.items():
        if k.startswith(prefix + ".") and k.endswith(".url"):
            templates[k[len(prefix) + 1:-len(".url")]] = v
    return templates


def _artifact_opts(cfg):
    if cfg is None:
        return {}
    return cfg.all_opts(ARTIFACTS_SECTION)


def create_api_resolver(cfg=None, template_renderer=None):
    opts = _artifact_opts(cfg)
    index_urls = {k: v for k, v in opts.items() if k in DEFAULT_INDEX_URLS}
    return ApiResolver(template_renderer or TemplateRenderer(), index_urls)


def create(cfg=None, api_resolver=None):
    """
    Creates an artifact resolver for all provenances. Download URL templates can be overridden in the ``artifacts``
    section, e.g. ``released.opensearch.plugin.url``.
    """
    opts = _artifact_opts(cfg)
    template_renderer = TemplateRenderer()
    if api_resolver is None:
        api_resolver = create_api_resolver(cfg, template_renderer)
    return ArtifactResolver({
        Provenance.RELEASED: ReleasedVersionResolver(api_resolver, template_renderer, _url_templates(opts, "released")),
        Provenance.SNAPSHOT: SnapshotVersionResolver(api_resolver, template_renderer, _url_templates(opts, "snapshot")),
        Provenance.BUILD_CANDIDATE: StagingVersionResolver(api_resolver, template_renderer, _url_templates(opts, "staging"))
    })
