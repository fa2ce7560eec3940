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

import os

from osephemeral.artifacts.products import Product
from osephemeral.cluster.tasks.task import ClusterComposeTask
from osephemeral.exceptions import PluginRejectedError
from osephemeral.utils import io


class InstallPlugins(ClusterComposeTask):
    """
    Installs all requested plugins that are neither shipped with the distribution nor already installed.
    """
    def run(self, cluster):
        if cluster.caching_and_cached_home_exists():
            self.diagnostic(cluster, "SKIP cached home [%s] exists", cluster.file_system.cache_home)
            return

        c = cluster.configuration
        v = c.version
        fs = cluster.file_system

        if c.validate_plugins_to_install:
            invalid_plugins = [p.name for p in c.plugins if not p.is_valid(v)]
            if invalid_plugins:
                raise PluginRejectedError("Cannot install the following plugins for version %s: %s"
                                          % (v, ", ".join(invalid_plugins)), plugins=invalid_plugins)

        for plugin in c.plugins:
            if plugin.is_included_out_of_the_box(v):
                self.diagnostic(cluster, "SKIP plugin [%s] shipped OOTB as of: {%s}", plugin.name,
                                plugin.shipped_by_default_as_of)
                continue
            if not plugin.is_valid(v):
                self.diagnostic(cluster, "SKIP plugin [%s] not valid for version: {%s}", plugin.name, v)
                continue
            if os.path.isdir(fs.plugin_folder(plugin.name)):
                self.diagnostic(cluster, "SKIP plugin [%s] already installed", plugin.name)
                continue

            self.diagnostic(cluster, "attempting install [%s] as it's not OOTB: {%s} and valid for %s", plugin.name,
                            plugin.shipped_by_default_as_of, v)
            install_location = self.local_plugin_location(cluster, plugin)
            io.ensure_dir(fs.config_path)
            self.logger.info("Installing [%s] into [%s] from [%s]", plugin.name, fs.home, install_location)
            self.execute_binary(cluster, fs.plugin_binary, "install opensearch plugin: %s" % plugin.name,
                                "install", "--batch", install_location)

            self.copy_config_directory_to_cache_home(cluster, plugin)

    def local_plugin_location(self, cluster, plugin):
        """
        Downloads the plugin unless it has been downloaded before.

        :return: A ``file://`` URI of the downloaded plugin.
        """
        v = cluster.configuration.version
        download_location = os.path.join(cluster.file_system.local_folder, "%s-%s.zip" % (plugin.name, v))
        if os.path.isfile(download_location):
            self.diagnostic(cluster, "SKIP download of [%s], [%s] already exists", plugin.name, download_location)
        else:
            artifact = cluster.resolve(Product.opensearch_plugin(plugin, cluster.configuration.server_type))
            self.download_file(cluster, artifact.download_url, download_location)
        return io.file_uri(download_location)

    def copy_config_directory_to_cache_home(self, cluster, plugin):
        if not cluster.configuration.cache_home_installation:
            return
        fs = cluster.file_system
        config_plugin_path = os.path.join(fs.config_path, plugin.name)
        config_plugin_path_cached = os.path.join(fs.cache_home, "config", plugin.name)
        if not os.path.isdir(config_plugin_path) or os.path.isdir(config_plugin_path_cached):
            return
        self.diagnostic(cluster, "copying config of [%s] to [%s]", plugin.name, config_plugin_path_cached)
        io.copy_tree_if_absent(config_plugin_path, config_plugin_path_cached)
