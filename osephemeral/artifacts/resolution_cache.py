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
import threading


class ResolutionCache:
    """
    Memoizes resolved artifacts per product key. Resolution itself happens outside of the lock, so concurrent callers
    may resolve the same key more than once, but insertion is an atomic test-and-set: the first stored descriptor is
    kept and returned to every caller.
    """

    def __init__(self):
        self.logger = logging.getLogger(__name__)
        self._lock = threading.Lock()
        self._resolved = {}

    def get_or_resolve(self, key, resolve):
        """
        :param key: The cache key, e.g. the product identifier.
        :param resolve: A zero-argument callable that resolves the value on a cache miss.
        :return: The cached value for ``key``.
        """
        with self._lock:
            if key in self._resolved:
                return self._resolved[key]

        resolved = resolve()

        with self._lock:
            stored = self._resolved.setdefault(key, resolved)
        if stored is not resolved:
            self.logger.debug("Discarding concurrently resolved value for [%s].", key)
        return stored

    def __contains__(self, key):
        with self._lock:
            return key in self._resolved

    def __len__(self):
        with self._lock:
            return len(self._resolved)


class NoResolutionCache:
    """
    A cache that never stores anything. Every lookup resolves again.
    """

    def get_or_resolve(self, key, resolve):
        return resolve()

    def __contains__(self, key):
        return False

    def __len__(self):
        return 0
