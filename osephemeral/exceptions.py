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


class EphemeralError(Exception):
    """
    Base class for all exceptions raised while provisioning an ephemeral cluster
    """

    def __init__(self, message, cause=None):
        super().__init__(message, cause)
        self.message = message
        self.cause = cause

    def __repr__(self):
        return self.message

    def __str__(self):
        return self.message


class MalformedVersionError(EphemeralError):
    """
    Thrown when a version string cannot be parsed into a structured version.
    """


class UnresolvableArtifactError(EphemeralError):
    """
    Thrown when no download location could be resolved for a product at a given version.
    """


class UnsupportedCombinationError(EphemeralError):
    """
    Thrown for a configuration that is structurally valid but not implemented, e.g. Elasticsearch with SSL enabled.
    """


class ValidationMismatchError(EphemeralError):
    """
    Thrown when the running cluster does not match what was requested.
    """


class PluginRejectedError(EphemeralError):
    """
    Thrown when requested plugins are not valid for the requested version and plugin validation is enabled.
    """

    def __init__(self, message, plugins=None, cause=None):
        super().__init__(message, cause)
        self.plugins = plugins or []


class SystemSetupError(EphemeralError):
    """
    Thrown when a user did something wrong, e.g. required software is not installed
    """


class ExecutorError(EphemeralError):
    pass


class ConfigError(EphemeralError):
    pass


class InvalidSyntax(EphemeralError):
    pass
