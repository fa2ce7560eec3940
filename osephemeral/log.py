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
import logging.config
import os
import time

from osephemeral import PROGRAM_NAME, paths
from osephemeral.utils import io


def configure_utc_formatter(*args, **kwargs):
    """
    Logging formatter that renders timestamps in UTC to ensure consistent
    timestamps across all deployments regardless of machine settings.
    """
    formatter = logging.Formatter(fmt=kwargs["format"], datefmt=kwargs["datefmt"])
    formatter.converter = time.gmtime
    return formatter


def configure_file_handler(*args, **kwargs):
    """
    Configures the file handler, creating the log directory if needed.
    """
    io.ensure_dir(io.dirname(kwargs["filename"]))
    return logging.FileHandler(filename=kwargs["filename"], encoding=kwargs["encoding"])


class ProcessFilter(logging.Filter):
    """
    Attaches the name of the program to every record so log lines of concurrent ephemeral runs can be told apart.
    """

    def filter(self, record):
        record.program = PROGRAM_NAME
        return True


def log_config_path():
    """
    :return: The absolute path to the logging configuration file.
    """
    return os.path.join(paths.ephemeral_confdir(), "logging.json")


def default_log_path():
    """
    :return: The absolute path to the directory that contains the log file.
    """
    return paths.logs()


def install_default_log_config():
    """
    Ensures a log configuration file is present on this machine. The default
    log configuration is based on the template in resources/logging.json.

    It also ensures that the default log path has been created so log files
    can be successfully opened in that directory.
    """
    log_config = log_config_path()
    if not os.path.exists(log_config):
        io.ensure_dir(io.dirname(log_config))
        source_path = io.normalize_path(os.path.join(os.path.dirname(__file__), "resources", "logging.json"))
        with open(log_config, "w", encoding="UTF-8") as target:
            with open(source_path, "r", encoding="UTF-8") as src:
                contents = src.read().replace("${LOG_PATH}", default_log_path())
                target.write(contents)
    io.ensure_dir(default_log_path())


def load_configuration():
    """
    Loads the logging configuration. This is a low-level method and usually
    `configure_logging()` should be used instead.

    :return: The logging configuration as `dict` instance.
    """
    with open(log_config_path()) as f:
        return json.load(f)


def post_configure_logging():
    """
    Modifies the logging configuration after it has been applied.
    """
    root_logger = logging.getLogger()
    for handler in root_logger.handlers:
        if isinstance(handler, logging.FileHandler):
            logging.getLogger(__name__).info("Writing logs to [%s].", handler.baseFilename)


def configure_logging():
    """
    Configures logging for the current process.
    """
    install_default_log_config()
    logging.config.dictConfig(load_configuration())

    logging.captureWarnings(True)
    post_configure_logging()
