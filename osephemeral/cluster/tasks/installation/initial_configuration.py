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

from osephemeral import paths
from osephemeral.artifacts.products import ServerType
from osephemeral.artifacts.versions import StructuredVersion
from osephemeral.cluster.tasks.task import ClusterComposeTask
from osephemeral.exceptions import UnsupportedCombinationError
from osephemeral.utils.template_renderer import TemplateRenderer

SCRIPT_NAME = "server-initial-config.sh"

# the demo security configuration refuses to run without an initial admin password as of this version
INITIAL_ADMIN_PASSWORD_AS_OF = "2.12.0"
DEMO_ADMIN_PASSWORD = "myStrongPassword123!"

SCRIPT_TEMPLATES = {
    ServerType.OPENSEARCH: "opensearch.sh.j2",
    ServerType.OPENDISTRO: "opendistro.sh.j2",
}


class InitialConfiguration(ClusterComposeTask):
    """
    Writes and runs the initial configuration script of a node and disables the security plugin unless SSL is enabled.
    """
    def __init__(self, template_renderer=None):
        super().__init__()
        self.template_renderer = template_renderer or TemplateRenderer()

    def run(self, cluster):
        c = cluster.configuration
        if c.server_type == ServerType.ELASTICSEARCH and c.enable_ssl:
            raise UnsupportedCombinationError("%s with SSL is not supported." % c.server_type.name)
        if cluster.caching_and_cached_home_exists():
            self.diagnostic(cluster, "SKIP cached home [%s] exists", cluster.file_system.cache_home)
            return
        if c.server_type not in SCRIPT_TEMPLATES:
            self.diagnostic(cluster, "skipping for %s", c.server_type.name)
            return

        fs = cluster.file_system
        script = os.path.join(fs.home, SCRIPT_NAME)
        with open(script, "wt", encoding="utf-8") as f:
            f.write(self.configuration_script(c, fs.home))

        self.diagnostic(cluster, "going to run [%s]", SCRIPT_NAME)
        self.execute_binary(cluster, "/bin/bash", "run initial cluster configuration", script)

        if not c.enable_ssl:
            self.disable_security(cluster)

    def configuration_script(self, configuration, home):
        version = configuration.version
        variables = {
            "VERSION": str(version),
            "HOME": home,
            "INITIAL_ADMIN_PASSWORD": None
        }
        if configuration.server_type == ServerType.OPENSEARCH and \
                StructuredVersion.parse(version.anchor) >= StructuredVersion.parse(INITIAL_ADMIN_PASSWORD_AS_OF):
            variables["INITIAL_ADMIN_PASSWORD"] = DEMO_ADMIN_PASSWORD
        return self.template_renderer.render_template_file(os.path.join(paths.ephemeral_root(), "resources", "initial_config"),
                                                           variables,
                                                           SCRIPT_TEMPLATES[configuration.server_type])

    def disable_security(self, cluster):
        server_type = cluster.configuration.server_type
        config_file = os.path.join(cluster.file_system.config_path, server_type.main_config_file)
        directive = "%s: true" % server_type.security_disabled_setting
        prefix = ""
        if os.path.isfile(config_file) and os.path.getsize(config_file) > 0:
            with open(config_file, "rt", encoding="utf-8") as f:
                if any(line.strip().startswith("%s:" % server_type.security_disabled_setting) for line in f):
                    self.logger.info("Security is already disabled in [%s].", config_file)
                    return
            with open(config_file, "rb") as f:
                f.seek(-1, os.SEEK_END)
                if f.read(1) != b"\n":
                    prefix = "\n"
        self.logger.info("Disabling security in [%s].", config_file)
        with open(config_file, "at", encoding="utf-8") as f:
            f.write("%s%s\n" % (prefix, directive))
