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
import tempfile
from unittest import TestCase, mock

from osephemeral import config, paths
from osephemeral.exceptions import ConfigError, InvalidSyntax
from osephemeral.utils.template_renderer import TemplateRenderer


class ConfigTests(TestCase):
    def test_load_config_file(self):
        with tempfile.TemporaryDirectory() as tmp, mock.patch.dict(os.environ, {"OSEPHEMERAL_HOME": tmp}):
            os.makedirs(paths.ephemeral_confdir())
            with open(config.ConfigFile().location, "wt") as f:
                f.write("[cluster]\nversion = 2.4.5\nplugins = analysis-icu\n")

            cfg = config.Config()
            cfg.add("cluster", "version", "latest-2")
            self.assertTrue(cfg.config_present())
            cfg.load_config()

            self.assertEqual("latest-2", cfg.opts("cluster", "version"))
            self.assertEqual("analysis-icu", cfg.opts("cluster", "plugins"))
            self.assertEqual({"version": "latest-2", "plugins": "analysis-icu"}, cfg.all_opts("cluster"))

    def test_missing_config_file(self):
        with tempfile.TemporaryDirectory() as tmp, mock.patch.dict(os.environ, {"OSEPHEMERAL_HOME": tmp}):
            cfg = config.Config("other")
            self.assertTrue(cfg.config_file.location.endswith("ephemeral-other.ini"))
            cfg.load_config()
            self.assertFalse(cfg.exists("cluster", "version"))

    def test_mandatory_and_optional_values(self):
        cfg = config.Config()
        with self.assertRaises(ConfigError):
            cfg.opts("cluster", "version")
        self.assertEqual("opensearch", cfg.opts("cluster", "server.type", default_value="opensearch", mandatory=False))

    def test_local_root(self):
        cfg = config.Config()
        self.assertTrue(paths.local_root(cfg).endswith(os.path.join(".osephemeral", "ephemeral")))
        cfg.add("cluster", "root.dir", "/data/ephemeral")
        self.assertEqual("/data/ephemeral", paths.local_root(cfg))


class TemplateRendererTests(TestCase):
    def test_render_template_string(self):
        self.assertEqual("https://host/2.4.5/linux", TemplateRenderer().render_template_string(
            "https://host/{{VERSION}}/{{OSNAME}}", {"VERSION": "2.4.5", "OSNAME": "linux"}))

    def test_invalid_syntax(self):
        with self.assertRaises(InvalidSyntax):
            TemplateRenderer().render_template_string("https://host/{{VERSION", {"VERSION": "2.4.5"})
