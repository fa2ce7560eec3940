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

import json
import logging
import os
import tempfile
from unittest import TestCase, mock

from osephemeral import log


class LogTests(TestCase):
    def test_install_default_log_config(self):
        with tempfile.TemporaryDirectory() as tmp, mock.patch.dict(os.environ, {"OSEPHEMERAL_HOME": tmp}):
            log.install_default_log_config()

            config = log.load_configuration()
            log_file = config["handlers"]["ephemeral_log_handler"]["filename"]
            self.assertEqual(os.path.join(tmp, ".osephemeral", "logs", "ephemeral.log"), log_file)
            self.assertTrue(os.path.isdir(os.path.join(tmp, ".osephemeral", "logs")))

    def test_existing_log_config_is_kept(self):
        with tempfile.TemporaryDirectory() as tmp, mock.patch.dict(os.environ, {"OSEPHEMERAL_HOME": tmp}):
            os.makedirs(os.path.join(tmp, ".osephemeral"))
            with open(log.log_config_path(), "wt") as f:
                json.dump({"version": 1}, f)

            log.install_default_log_config()

            self.assertEqual({"version": 1}, log.load_configuration())

    def test_process_filter(self):
        record = logging.LogRecord("osephemeral", logging.INFO, __file__, 1, "message", None, None)
        self.assertTrue(log.ProcessFilter().filter(record))
        self.assertEqual("opensearch-ephemeral", record.program)
