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

from unittest import TestCase
from unittest.mock import Mock

from osephemeral.artifacts.versions import StructuredVersion
from osephemeral.cluster.cluster import ClusterConfiguration
from osephemeral.cluster.executors.executor import Executor
from osephemeral.exceptions import ExecutorError


class ExecutorTests(TestCase):
    def setUp(self):
        self.shell_executor = Mock()
        self.executor = Executor(self.shell_executor)
        self.writer = Mock()
        self.configuration = ClusterConfiguration(version=StructuredVersion.parse("2.4.5"))

    def test_execute(self):
        self.shell_executor.execute.return_value = 0

        self.executor.execute(self.configuration, self.writer, "/bin/bash", "run a script", "/tmp/script.sh")

        self.shell_executor.execute.assert_called_once_with(["/bin/bash", "/tmp/script.sh"], env=None)
        self.writer.write.assert_called_once_with("{execute} run a script: [/bin/bash /tmp/script.sh]")

    def test_environment_is_added(self):
        self.shell_executor.execute.return_value = 0
        configuration = ClusterConfiguration(version=StructuredVersion.parse("2.4.5"), environment={"JAVA_HOME": "/jdk"})

        self.executor.execute(configuration, None, "/bin/true", "succeed")

        env = self.shell_executor.execute.call_args[1]["env"]
        self.assertEqual("/jdk", env["JAVA_HOME"])

    def test_non_zero_exit_code(self):
        self.shell_executor.execute.return_value = 1

        with self.assertRaises(ExecutorError) as ctx:
            self.executor.execute(self.configuration, self.writer, "/bin/false", "fail")
        self.assertIn("exit code [1]", ctx.exception.message)

    def test_launch_failure(self):
        cause = FileNotFoundError("/no/such/binary")
        self.shell_executor.execute.side_effect = cause

        with self.assertRaises(ExecutorError) as ctx:
            self.executor.execute(self.configuration, None, "/no/such/binary", "fail")
        self.assertIs(cause, ctx.exception.cause)
