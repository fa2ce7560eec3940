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
import ssl
from collections import namedtuple

import certifi
import opensearchpy
import urllib3
from opensearchpy import OpenSearch


class OsClientFactory:
    """
    Abstracts how the OpenSearch client is created. Intended for testing.
    """
    def __init__(self, hosts, client_options):
        self.hosts = hosts
        self.client_options = dict(client_options)
        self.ssl_context = None
        self.logger = logging.getLogger(__name__)

        masked_client_options = dict(client_options)
        if "basic_auth_password" in masked_client_options:
            masked_client_options["basic_auth_password"] = "*****"
        self.logger.info("Creating OpenSearch client connected to %s with options [%s]", hosts, masked_client_options)

        if self.client_options.pop("use_ssl", False):
            self.logger.info("SSL support: on")
            self.client_options["scheme"] = "https"

            self.ssl_context = ssl.create_default_context(ssl.Purpose.SERVER_AUTH,
                                                          cafile=self.client_options.pop("ca_certs", certifi.where()))

            if not self.client_options.pop("verify_certs", True):
                self.ssl_context.check_hostname = False
                self.ssl_context.verify_mode = ssl.CERT_NONE
                urllib3.disable_warnings()
            else:
                self.ssl_context.check_hostname = True
                self.ssl_context.verify_mode = ssl.CERT_REQUIRED
        else:
            self.logger.info("SSL support: off")
            self.client_options["scheme"] = "http"
            self.client_options.pop("verify_certs", None)

        if self._is_set(self.client_options, "basic_auth_user") and self._is_set(self.client_options, "basic_auth_password"):
            self.logger.info("HTTP basic authentication: on")
            self.client_options["http_auth"] = (self.client_options.pop("basic_auth_user"), self.client_options.pop("basic_auth_password"))
        else:
            self.logger.info("HTTP basic authentication: off")
            self.client_options.pop("basic_auth_user", None)
            self.client_options.pop("basic_auth_password", None)

    def create(self):
        return OpenSearch(hosts=self.hosts, ssl_context=self.ssl_context, **self.client_options)

    @staticmethod
    def _is_set(client_opts, k):
        try:
            return client_opts[k]
        except KeyError:
            return False


class HttpResponse(namedtuple("HttpResponse", ["status", "body"])):
    @property
    def is_success(self):
        return isinstance(self.status, int) and 200 <= self.status < 300


class ClusterHttpClient:
    """
    Issues single requests against a running node. Connection problems are reported as a missing response, HTTP error
    status codes as a response with that status.
    """
    def __init__(self, opensearch):
        self.logger = logging.getLogger(__name__)
        self.opensearch = opensearch

    def get(self, path, params=None):
        """
        :param path: A path relative to the node's root, e.g. ``_cat/nodes``.
        :param params: Optional query parameters.
        :return: An ``HttpResponse`` or ``None`` if the node could not be reached.
        """
        url = "/%s" % path.lstrip("/")
        try:
            body = self.opensearch.transport.perform_request("GET", url, params=params)
            return HttpResponse(200, body)
        except opensearchpy.ConnectionError:
            self.logger.exception("Could not connect to node when requesting [%s].", url)
            return None
        except opensearchpy.TransportError as e:
            self.logger.warning("Request to [%s] failed with status [%s].", url, e.status_code)
            return HttpResponse(e.status_code, e.info)


def create(host, port, use_ssl=False, verify_certs=False, basic_auth_user=None, basic_auth_password=None):
    client_options = {"use_ssl": use_ssl, "verify_certs": verify_certs}
    if basic_auth_user:
        client_options["basic_auth_user"] = basic_auth_user
        client_options["basic_auth_password"] = basic_auth_password
    return ClusterHttpClient(OsClientFactory([{"host": host, "port": port}], client_options).create())
