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
from abc import ABC, abstractmethod

from osephemeral.artifacts.artifact import ArtifactDescriptor
from osephemeral.exceptions import UnresolvableArtifactError


class ProvenanceResolver(ABC):
    """
    Resolves a product at a version of one specific provenance to an ``ArtifactDescriptor``.

    Download URL templates are keyed by ``<distribution name>`` for servers and ``<distribution name>.plugin`` for
    plugins and are rendered with the variables ``VERSION``, ``PRODUCT``, ``OSNAME`` and ``ARCH``.
    """
    DEFAULT_URL_TEMPLATES = {}

    def __init__(self, api_resolver, template_renderer, url_templates=None):
        self.logger = logging.getLogger(__name__)
        self.api_resolver = api_resolver
        self.template_renderer = template_renderer
        self.url_templates = dict(self.DEFAULT_URL_TEMPLATES)
        self.url_templates.update(url_templates or {})

    @abstractmethod
    def resolve(self, product, version, platform):
        """
        Resolves a downloadable artifact.

        ;param product: The server or plugin to resolve.
        ;param version: A ``StructuredVersion``.
        ;param platform: The target ``Platform``.
        ;return: An ``ArtifactDescriptor``.
        """
        raise NotImplementedError("abstract method")

    @staticmethod
    def url_template_key(product):
        if product.is_plugin:
            return "%s.plugin" % product.server_type.distribution_name
        return product.server_type.distribution_name

    @staticmethod
    def artifact_variables(product, version, platform):
        return {
            "VERSION": str(version),
            "PRODUCT": product.name,
            "OSNAME": platform.os_name,
            "ARCH": platform.arch
        }

    def render_url(self, product, variables):
        template = self.url_templates.get(self.url_template_key(product))
        if not template:
            raise UnresolvableArtifactError("No download location is known for [%s]." % product)
        return self.template_renderer.render_template_string(template, variables)

    @staticmethod
    def descriptor(product, version, platform, download_url):
        p = product.plugin
        return ArtifactDescriptor(product=product,
                                  version=version,
                                  platform=platform,
                                  download_url=download_url,
                                  included_out_of_the_box=p is not None and p.is_included_out_of_the_box(version),
                                  shipped_as_of=p.shipped_by_default_as_of if p else None)
