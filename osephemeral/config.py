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

import configparser
import logging
import os

from osephemeral import exceptions, paths


class ConfigFile:
    def __init__(self, config_name=None):
        self.config_name = config_name

    @property
    def present(self):
        """
        :return: true iff a config file already exists.
        """
        return os.path.isfile(self.location)

    def load(self):
        config = configparser.ConfigParser()
        config.read(self.location, encoding="utf-8")
        return config

    @property
    def config_dir(self):
        return paths.ephemeral_confdir()

    @property
    def location(self):
        if self.config_name:
            config_name_suffix = "-%s" % self.config_name
        else:
            config_name_suffix = ""
        return os.path.join(self.config_dir, "ephemeral%s.ini" % config_name_suffix)


class Config:
    """
    Holds the configuration of an ephemeral cluster run. Values are looked up by section and key; values added at
    runtime take precedence over values loaded from the config file.
    """

    def __init__(self, config_name=None, config_file_class=ConfigFile):
        self.name = config_name
        self.config_file = config_file_class(config_name)
        self._opts = {}
        self._clear_config()
        self.logger = logging.getLogger(__name__)

    def add(self, section, key, value):
        self._opts[self._k(section, key)] = value

    def opts(self, section, key, default_value=None, mandatory=True):
        """
        Resolves a configuration property.

        :param section: The configuration section.
        :param key: The configuration key.
        :param default_value: The default value to use for optional properties as a fallback. Default: None
        :param mandatory: True iff a value is required. If no value is found a ``ConfigError`` is raised. Default: True
        :return: The configuration property.
        """
        try:
            return self._opts[self._k(section, key)]
        except KeyError:
            if not mandatory:
                return default_value
            else:
                raise exceptions.ConfigError("No value for mandatory configuration: section=%s, key=%s" % (section, key))

    def all_opts(self, section):
        """
        Finds all config items within the given `section`.

        :param section: A section in the config object.
        :return: A dict of all config keys within the given section.
        """
        opts_in_section = {}
        for k, v in self._opts.items():
            scope_section, key = k
            if scope_section == section:
                opts_in_section[key] = v
        return opts_in_section

    def exists(self, section, key):
        return self._k(section, key) in self._opts

    def config_present(self):
        return self.config_file.present

    def load_config(self):
        """
        Loads the config file if it exists. A missing config file is not an error; all values have defaults.
        """
        if not self.config_present():
            self.logger.info("No config file found at [%s]. Using defaults.", self.config_file.location)
            return
        self.logger.info("Loading config file [%s].", self.config_file.location)
        config = self.config_file.load()
        for section in config.sections():
            for key, value in config.items(section):
                # values added at runtime (e.g. from command line arguments) win over the config file
                if not self.exists(section, key):
                    self.add(section, key, value)

    def _clear_config(self):
        self._opts = {}

    def _k(self, section, key):
        return section, key
