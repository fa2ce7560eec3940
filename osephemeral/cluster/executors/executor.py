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
import os

from osephemeral.exceptions import ExecutorError


class Executor:
    """
    Runs binaries on behalf of cluster tasks. A failure to launch and a non-zero exit code are both raised as
    ``ExecutorError``.
    """
    def __init__(self, shell_executor):
        self.logger = logging.getLogger(__name__)
        self.shell_executor = shell_executor

    def execute(self, configuration, writer, binary, description, *arguments):
        """
        Executes a binary and waits for it to exit

        ;param configuration: The ``ClusterConfiguration``, which provides additional environment variables
        ;param writer: An optional diagnostics writer
        ;param binary: The path to the binary
        ;param description: What the invocation is meant to achieve
        ;param arguments: Command line arguments
        ;return None
        """
        command = [binary] + list(arguments)
        env = None
        if configuration.environment:
            env = dict(os.environ)
            env.update(configuration.environment)
        if writer:
            writer.write("{execute} %s: [%s]" % (description, " ".join(command)))
        self.logger.info("Executing [%s] to %s.", " ".join(command), description)
        try:
            exit_code = self.shell_executor.execute(command, env=env)
        except Exception as e:
            raise ExecutorError("Failed to %s: command \"%s\" could not be executed" % (description, " ".join(command)), e)
        if exit_code != 0:
            raise ExecutorError("Failed to %s: command \"%s\" returned exit code [%s]" % (description, " ".join(command), exit_code))
