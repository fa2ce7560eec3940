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

from osephemeral import ephemeral
from osephemeral.exceptions import UnresolvableArtifactError, ValidationMismatchError


class ErrorMessageTests(TestCase):
    def test_nested_causes(self):
        e = UnresolvableArtifactError("Could not retrieve index.", OSError("connection refused"))
        self.assertEqual("Could not retrieve index.\n\tconnection refused", ephemeral.error_message(e))


@mock.patch("osephemeral.utils.net.init")
@mock.patch("osephemeral.log.configure_logging")
class BringUpTests(TestCase):
    @mock.patch("osephemeral.cluster.cluster.create")
    def test_bring_up(self, create, configure_logging, net_init):
        pipeline = Mock()
        start = Mock()

        cluster = ephemeral.bring_up(start, settings={("cluster", "version"): "2.4.5"}, quiet=True, pipeline=pipeline)

        self.assertIs(create.return_value, cluster)
        cfg = create.call_args[0][0]
        self.assertEqual("2.4.5", cfg.opts("cluster", "version"))
        pipeline.run.assert_called_once_with(cluster, start)
        configure_logging.assert_called_once_with()
        net_init.assert_called_once_with()

    @mock.patch("osephemeral.cluster.cluster.create")
    def test_errors_propagate(self, create, configure_logging, net_init):
        pipeline = Mock()
        pipeline.run.side_effect = ValidationMismatchError("Requested version [2.4.5] but nodes report [2.4.6].")

        with self.assertRaises(ValidationMismatchError):
            ephemeral.bring_up(Mock(), settings={("cluster", "version"): "2.4.5"}, quiet=True, pipeline=pipeline)
