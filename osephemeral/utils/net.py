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
import urllib.error

import certifi
import urllib3

from osephemeral.utils import io

__HTTP = None


def init():
    logger = logging.getLogger(__name__)
    # pylint: disable=global-statement
    global __HTTP
    proxy_url = os.getenv("http_proxy")
    if proxy_url and len(proxy_url) > 0:
        logger.info("Connecting via proxy URL [%s] to the Internet (picked up from the env variable [http_proxy]).",
                    proxy_url)
        __HTTP = urllib3.ProxyManager(proxy_url, cert_reqs="CERT_REQUIRED", ca_certs=certifi.where())
    else:
        logger.info("Connecting directly to the Internet (no proxy support).")
        __HTTP = urllib3.PoolManager(cert_reqs="CERT_REQUIRED", ca_certs=certifi.where())


def _http():
    if __HTTP is None:
        init()
    return __HTTP


def download(url, local_path):
    """
    Downloads a single file from a URL to the provided local path. The file is first written to a temporary location
    and only moved into place once the download has finished so that an existing ``local_path`` is always complete.

    :param url: The remote URL. Only ``http`` and ``https`` are supported.
    :param local_path: The local file name of the file that should be downloaded.
    :return: The number of bytes that have been written.
    """
    logger = logging.getLogger(__name__)
    tmp_path = "%s.tmp" % local_path
    io.ensure_dir(io.dirname(local_path))
    logger.info("Downloading from [%s] to [%s].", url, local_path)
    written = 0
    try:
        with _http().request("GET", url, preload_content=False, retries=10,
                             timeout=urllib3.Timeout(connect=45, read=240)) as r, open(tmp_path, "wb") as out_file:
            if r.status > 299:
                raise urllib.error.HTTPError(url, r.status, "", None, None)
            for chunk in r.stream(2 ** 16):
                out_file.write(chunk)
                written += len(chunk)
    except BaseException:
        if os.path.isfile(tmp_path):
            os.remove(tmp_path)
        raise
    os.rename(tmp_path, local_path)
    logger.info("Downloaded [%d] bytes from [%s].", written, url)
    return written


def retrieve_content_as_string(url):
    with _http().request("GET", url, timeout=urllib3.Timeout(connect=45, read=240)) as response:
        if response.status > 299:
            raise urllib.error.HTTPError(url, response.status, "", None, None)
        return response.data.decode("utf-8")


def retrieve_content_as_json(url):
    return json.loads(retrieve_content_as_string(url))
