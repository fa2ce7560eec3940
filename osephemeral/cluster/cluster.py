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

import hashlib
import logging
import os
from dataclasses import dataclass
from typing import Optional, Tuple

from osephemeral import client, paths
from osephemeral.artifacts import artifact_resolver as artifact_resolver_module
from osephemeral.artifacts import products
from osephemeral.artifacts.products import OpenSearchPlugin, Product, ServerType
from osephemeral.artifacts.versions import StructuredVersion
from osephemeral.cluster.executors.executor import Executor
from osephemeral.cluster.executors.local_shell_executor import LocalShellExecutor
from osephemeral.cluster.writers import ConsoleLineWriter
from osephemeral.exceptions import ConfigError
from osephemeral.utils import convert

CLUSTER_SECTION = "cluster"


@dataclass(frozen=True)
class ClusterConfiguration:
    """
    Everything that determines how an ephemeral node is installed and validated.
    """
    version: StructuredVersion
    server_type: ServerType = ServerType.OPENSEARCH
    plugins: Tuple[OpenSearchPlugin, ...] = ()
    enable_ssl: bool = False
    cache_home_installation: bool = False
    validate_plugins_to_install: bool = False
    host: str = "127.0.0.1"
    http_port: int = 9200
    basic_auth_user: Optional[str] = None
    basic_auth_password: Optional[str] = None
    environment: Optional[dict] = None

    @property
    def server_product(self):
        return Product.server(self.server_type)

    @staticmethod
    def from_config(cfg, api_resolver):
        raw_version = cfg.opts(CLUSTER_SECTION, "version")
        version = StructuredVersion.from_string(raw_version, api_resolver)
        if version is None:
            raise ConfigError("No version configured in section [%s]." % CLUSTER_SECTION)
        server_type_name = cfg.opts(CLUSTER_SECTION, "server.type", default_value="opensearch", mandatory=False)
        try:
            server_type = ServerType.from_name(server_type_name)
        except ValueError as e:
            raise ConfigError("Unknown server type [%s] in section [%s]." % (server_type_name, CLUSTER_SECTION), e)
        plugin_names = convert.csv_to_list(cfg.opts(CLUSTER_SECTION, "plugins", default_value="", mandatory=False))
        http_port = cfg.opts(CLUSTER_SECTION, "http.port", default_value=9200, mandatory=False)
        try:
            http_port = int(http_port)
        except ValueError as e:
            raise ConfigError("Invalid http.port [%s] in section [%s]." % (http_port, CLUSTER_SECTION), e)

        def flag(key):
            value = cfg.opts(CLUSTER_SECTION, key, default_value=False, mandatory=False)
            try:
                return convert.to_bool(value)
            except ValueError as e:
                raise ConfigError("Invalid %s [%s] in section [%s]." % (key, value, CLUSTER_SECTION), e)

        return ClusterConfiguration(
            version=version,
            server_type=server_type,
            plugins=tuple(products.plugin(name) for name in plugin_names),
            enable_ssl=flag("enable.ssl"),
            cache_home_installation=flag("cache.home"),
            validate_plugins_to_install=flag("validate.plugins"),
            host=cfg.opts(CLUSTER_SECTION, "host", default_value="127.0.0.1", mandatory=False),
            http_port=http_port,
            basic_auth_user=cfg.opts(CLUSTER_SECTION, "basic.auth.user", mandatory=False),
            basic_auth_password=cfg.opts(CLUSTER_SECTION, "basic.auth.password", mandatory=False)
        )


class NodeFileSystem:
    """
    The on-disk layout of an ephemeral node below a local folder:

    * ``<local_folder>/<distribution>-<version>``: the node home
    * ``<local_folder>/<cache folder name>``: the cached home, a copy of a fully set up node home
    """
    def __init__(self, local_folder, server_type, version, cache_folder_name):
        self.local_folder = local_folder
        self.home = os.path.join(local_folder, "%s-%s" % (server_type.distribution_name, version))
        self.config_path = os.path.join(self.home, "config")
        self.plugins_path = os.path.join(self.home, "plugins")
        self.plugin_binary = os.path.join(self.home, "bin", server_type.plugin_binary)
        self.cache_home = os.path.join(local_folder, cache_folder_name)

    def plugin_folder(self, plugin_name):
        return os.path.join(self.plugins_path, plugin_name)


class EphemeralCluster:
    """
    The context all cluster tasks operate on.
    """
    def __init__(self, configuration, local_folder, writer=None, executor=None, http_client=None,
                 artifact_resolver=None):
        self.logger = logging.getLogger(__name__)
        self.configuration = configuration
        self.file_system = NodeFileSystem(local_folder, configuration.server_type, configuration.version,
                                          self.cache_folder_name())
        self.writer = writer
        self.executor = executor or Executor(LocalShellExecutor())
        self.http_client = http_client
        self.artifact_resolver = artifact_resolver
        self._cached_home_exists = None

    def cache_folder_name(self):
        """
        :return: A folder name that is identical for all clusters with the same version, server type, SSL setting and
                 plugins.
        """
        c = self.configuration
        fingerprint = "|".join([
            c.server_type.distribution_name,
            str(c.version),
            str(c.enable_ssl).lower(),
            ",".join(sorted(p.name for p in c.plugins))
        ])
        digest = hashlib.sha256(fingerprint.encode("utf-8")).hexdigest()[:12]
        return "%s-%s-%s" % (c.server_type.distribution_name, c.version, digest)

    def caching_and_cached_home_exists(self):
        """
        :return: True iff home caching is enabled and a cached home already exists. This is evaluated once per
                 bring-up so that all tasks see the same answer.
        """
        if self._cached_home_exists is None:
            self._cached_home_exists = self.configuration.cache_home_installation and \
                                       os.path.isdir(self.file_system.cache_home)
            self.logger.info("Cached home [%s] is used: [%s].", self.file_system.cache_home, self._cached_home_exists)
        return self._cached_home_exists

    def reset_caching_state(self):
        self._cached_home_exists = None

    def write_diagnostic(self, line):
        if self.writer:
            self.writer.write(line)

    def resolve(self, product):
        return self.configuration.version.artifact(product, self.artifact_resolver)

    def get(self, path, params=None):
        if self.http_client is None:
            return None
        return self.http_client.get(path, params)


def create(cfg, api_resolver=None, verbose=False):
    """
    Creates an ephemeral cluster with all collaborators wired up from configuration.
    """
    if api_resolver is None:
        api_resolver = artifact_resolver_module.create_api_resolver(cfg)
    configuration = ClusterConfiguration.from_config(cfg, api_resolver)
    http_client = client.create(configuration.host, configuration.http_port,
                                use_ssl=configuration.enable_ssl,
                                basic_auth_user=configuration.basic_auth_user,
                                basic_auth_password=configuration.basic_auth_password)
    return EphemeralCluster(configuration,
                            local_folder=paths.local_root(cfg),
                            writer=ConsoleLineWriter(verbose),
                            http_client=http_client,
                            artifact_resolver=artifact_resolver_module.create(cfg, api_resolver))
