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

from dataclasses import dataclass
from enum import Enum
from typing import Optional

from osephemeral.artifacts.versions import StructuredVersion


class ServerType(Enum):
    """
    The product family of a node.

    :param distribution_name: The name that distribution archives and their top-level directory start with.
    :param plugin_binary: The name of the plugin installer binary below ``bin``.
    :param main_config_file: The name of the main configuration file below ``config``.
    :param security_disabled_setting: The setting that disables the security plugin. ``None`` if there is none.
    """

    def __init__(self, distribution_name, plugin_binary, main_config_file, security_disabled_setting):
        self.distribution_name = distribution_name
        self.plugin_binary = plugin_binary
        self.main_config_file = main_config_file
        self.security_disabled_setting = security_disabled_setting

    OPENSEARCH = "opensearch", "opensearch-plugin", "opensearch.yml", "plugins.security.disabled"
    OPENDISTRO = "opendistroforelasticsearch", "elasticsearch-plugin", "elasticsearch.yml", "opendistro_security.disabled"
    ELASTICSEARCH = "elasticsearch", "elasticsearch-plugin", "elasticsearch.yml", None

    @staticmethod
    def from_name(name):
        for server_type in ServerType:
            if server_type.name.lower() == name.lower() or server_type.distribution_name == name.lower():
                return server_type
        raise ValueError("Unknown server type [%s]" % name)


# OpenDistro bundles Elasticsearch at this version, which is what its nodes report.
OPENDISTRO_UPSTREAM_VERSION = "7.10.2"


@dataclass(frozen=True)
class OpenSearchPlugin:
    """
    A plugin that can be installed into a node.

    :param name: The plugin name, which is also the name of its directory below ``plugins`` and ``config``.
    :param valid_range: A version range expression the plugin is available for. ``None`` means all versions.
    :param shipped_by_default_as_of: The version as of which the plugin is bundled with the distribution.
    """
    name: str
    valid_range: Optional[str] = None
    shipped_by_default_as_of: Optional[str] = None

    def is_valid(self, version):
        if not self.valid_range:
            return True
        return version.in_range(self.valid_range)

    def is_included_out_of_the_box(self, version):
        if not self.shipped_by_default_as_of:
            return False
        return version >= StructuredVersion.parse(self.shipped_by_default_as_of)

    def __str__(self):
        return self.name


ANALYSIS_ICU = OpenSearchPlugin("analysis-icu")
ANALYSIS_KUROMOJI = OpenSearchPlugin("analysis-kuromoji")
ANALYSIS_NORI = OpenSearchPlugin("analysis-nori")
ANALYSIS_PHONETIC = OpenSearchPlugin("analysis-phonetic")
ANALYSIS_SMARTCN = OpenSearchPlugin("analysis-smartcn")
ANALYSIS_STEMPEL = OpenSearchPlugin("analysis-stempel")
ANALYSIS_UKRAINIAN = OpenSearchPlugin("analysis-ukrainian")
INGEST_ATTACHMENT = OpenSearchPlugin("ingest-attachment")
MAPPER_MURMUR3 = OpenSearchPlugin("mapper-murmur3")
MAPPER_SIZE = OpenSearchPlugin("mapper-size")
REPOSITORY_AZURE = OpenSearchPlugin("repository-azure")
REPOSITORY_GCS = OpenSearchPlugin("repository-gcs")
REPOSITORY_HDFS = OpenSearchPlugin("repository-hdfs")
REPOSITORY_S3 = OpenSearchPlugin("repository-s3")
TRANSPORT_NIO = OpenSearchPlugin("transport-nio", valid_range="<3.0.0")
IDENTITY_SHIRO = OpenSearchPlugin("identity-shiro", valid_range=">=2.9.0")
# bundled with the full distribution artifacts
SECURITY = OpenSearchPlugin("opensearch-security", shipped_by_default_as_of="1.0.0")
KNN = OpenSearchPlugin("opensearch-knn", shipped_by_default_as_of="1.0.0")

KNOWN_PLUGINS = [
    ANALYSIS_ICU, ANALYSIS_KUROMOJI, ANALYSIS_NORI, ANALYSIS_PHONETIC, ANALYSIS_SMARTCN, ANALYSIS_STEMPEL,
    ANALYSIS_UKRAINIAN, INGEST_ATTACHMENT, MAPPER_MURMUR3, MAPPER_SIZE, REPOSITORY_AZURE, REPOSITORY_GCS,
    REPOSITORY_HDFS, REPOSITORY_S3, TRANSPORT_NIO, IDENTITY_SHIRO, SECURITY, KNN
]


def plugin(name):
    """
    :param name: A plugin name.
    :return: The known plugin with this name or a new plugin that is valid for all versions.
    """
    for p in KNOWN_PLUGINS:
        if p.name == name:
            return p
    return OpenSearchPlugin(name)


@dataclass(frozen=True)
class Product:
    """
    Something that can be downloaded: either a server distribution or a plugin for a server type.
    """
    name: str
    server_type: ServerType
    plugin: Optional[OpenSearchPlugin] = None

    @staticmethod
    def server(server_type):
        return Product(server_type.distribution_name, server_type)

    @staticmethod
    def opensearch_plugin(p, server_type=ServerType.OPENSEARCH):
        return Product(p.name, server_type, p)

    @property
    def is_plugin(self):
        return self.plugin is not None

    @property
    def cache_key(self):
        if self.is_plugin:
            return "%s/plugin/%s" % (self.server_type.distribution_name, self.name)
        return self.name

    def __str__(self):
        return self.cache_key
