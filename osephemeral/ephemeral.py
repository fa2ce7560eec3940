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
import platform
import sys
import time

from osephemeral import __version__, config, exceptions, log
from osephemeral.cluster import cluster as cluster_module
from osephemeral.cluster.pipeline import TaskPipeline
from osephemeral.utils import console, net


def error_message(e):
    msg = str(e.message) if hasattr(e, "message") else str(e)
    nesting = 0
    while hasattr(e, "cause") and e.cause:
        nesting += 1
        e = e.cause
        if hasattr(e, "message"):
            msg += "\n%s%s" % ("\t" * nesting, e.message)
        else:
            msg += "\n%s%s" % ("\t" * nesting, str(e))
    return msg


def bring_up(start, config_name=None, settings=None, quiet=False, verbose=False, pipeline=None):
    """
    Installs an ephemeral cluster, starts it and validates that it runs as configured.

    :param start: A callable that starts the node process of the cluster it is given.
    :param config_name: The name of the config file to load. Default: ``ephemeral.ini``.
    :param settings: A dict of ``(section, key)`` tuples to values. These take precedence over the config file.
    :param quiet: Suppress console output.
    :param verbose: Print the diagnostics of every task on the console.
    :param pipeline: The ``TaskPipeline`` to run. Default: all installation and validation tasks.
    :return: The ``EphemeralCluster`` that has been brought up.
    """
    log.configure_logging()
    logger = logging.getLogger(__name__)
    console.init(quiet=quiet)

    cfg = config.Config(config_name=config_name)
    for (section, key), value in (settings or {}).items():
        cfg.add(section, key, value)
    cfg.load_config()

    logger.info("OS [%s]", str(platform.uname()))
    logger.info("Python [%s]", str(sys.implementation))
    logger.info("opensearch-ephemeral version [%s]", __version__)
    net.init()

    start_time = time.time()
    try:
        cluster = cluster_module.create(cfg, verbose=verbose)
        (pipeline or TaskPipeline()).run(cluster, start)
    except exceptions.EphemeralError as e:
        logger.exception("Cannot bring up ephemeral cluster.")
        console.error("Cannot bring up ephemeral cluster. %s" % error_message(e))
        raise
    console.info("Ephemeral cluster [%s] is up (took %d seconds)." % (cluster.configuration.version,
                                                                     time.time() - start_time), logger=logger)
    return cluster
