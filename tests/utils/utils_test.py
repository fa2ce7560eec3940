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

import os
import tempfile
import urllib.error
import zipfile
from unittest import TestCase, mock
from unittest.mock import MagicMock

from osephemeral.cluster.executors.local_shell_executor import LocalShellExecutor
from osephemeral.utils import convert, io, net, process


class ConvertTests(TestCase):
    def test_to_bool(self):
        for truthy in ["True", "true", "yes", "1", True]:
            self.assertTrue(convert.to_bool(truthy))
        for falsy in ["False", "no", "0", False]:
            self.assertFalse(convert.to_bool(falsy))
        with self.assertRaises(ValueError):
            convert.to_bool("maybe")

    def test_csv_to_list(self):
        self.assertIsNone(convert.csv_to_list(None))
        self.assertEqual([], convert.csv_to_list("  "))
        self.assertEqual(["a", "b"], convert.csv_to_list("a, b"))
        self.assertEqual(["a"], convert.csv_to_list(["a"]))


class IoTests(TestCase):
    def test_splitext(self):
        self.assertEqual(("opensearch-2.4.5", ".tar.gz"), io.splitext("opensearch-2.4.5.tar.gz"))
        self.assertEqual(("analysis-icu-2.4.5", ".zip"), io.splitext("analysis-icu-2.4.5.zip"))

    def test_file_uri(self):
        self.assertEqual("file:///tmp/analysis-icu-2.4.5.zip", io.file_uri("/tmp/analysis-icu-2.4.5.zip"))

    def test_copy_tree_if_absent_never_overwrites(self):
        with tempfile.TemporaryDirectory() as tmp:
            source = os.path.join(tmp, "source")
            target = os.path.join(tmp, "target")
            os.makedirs(os.path.join(source, "nested"))
            os.makedirs(target)
            for path, content in [(os.path.join(source, "a.yml"), "new"), (os.path.join(source, "nested", "b.yml"), "new"),
                                  (os.path.join(target, "a.yml"), "old")]:
                with open(path, "wt") as f:
                    f.write(content)

            io.copy_tree_if_absent(source, target)

            with open(os.path.join(target, "a.yml")) as f:
                self.assertEqual("old", f.read())
            with open(os.path.join(target, "nested", "b.yml")) as f:
                self.assertEqual("new", f.read())

    def test_decompress_zip(self):
        with tempfile.TemporaryDirectory() as tmp:
            archive = os.path.join(tmp, "plugin.zip")
            with zipfile.ZipFile(archive, "w") as z:
                z.writestr("plugin/plugin-descriptor.properties", "name=plugin")
            io.decompress(archive, os.path.join(tmp, "out"))
            self.assertTrue(os.path.isfile(os.path.join(tmp, "out", "plugin", "plugin-descriptor.properties")))

    def test_decompress_unsupported(self):
        with self.assertRaises(RuntimeError):
            io.decompress("/tmp/plugin.rar", "/tmp/out")


def response(status, chunks=(), data=b""):
    r = MagicMock()
    r.status = status
    r.stream.return_value = list(chunks)
    r.data = data
    r.__enter__.return_value = r
    return r


class NetTests(TestCase):
    @mock.patch("osephemeral.utils.net._http")
    def test_download(self, http):
        http.return_value.request.return_value = response(200, chunks=[b"abc", b"de"])
        with tempfile.TemporaryDirectory() as tmp:
            target = os.path.join(tmp, "downloads", "plugin.zip")

            self.assertEqual(5, net.download("https://artifacts/plugin.zip", target))

            with open(target, "rb") as f:
                self.assertEqual(b"abcde", f.read())
            self.assertFalse(os.path.exists(target + ".tmp"))

    @mock.patch("osephemeral.utils.net._http")
    def test_download_failure_leaves_nothing_behind(self, http):
        http.return_value.request.return_value = response(404)
        with tempfile.TemporaryDirectory() as tmp:
            target = os.path.join(tmp, "plugin.zip")

            with self.assertRaises(urllib.error.HTTPError):
                net.download("https://artifacts/plugin.zip", target)

            self.assertEqual([], os.listdir(tmp))

    @mock.patch("osephemeral.utils.net._http")
    def test_retrieve_content_as_json(self, http):
        http.return_value.request.return_value = response(200, data=b'{"versions": ["2.4.5"]}')
        self.assertEqual({"versions": ["2.4.5"]}, net.retrieve_content_as_json("https://index/releases.json"))


class ProcessTests(TestCase):
    def test_exit_code_is_returned(self):
        self.assertEqual(0, process.run_subprocess_with_logging(["/bin/sh", "-c", "echo installed"]))
        self.assertEqual(3, process.run_subprocess_with_logging(["/bin/sh", "-c", "echo failed; exit 3"]))

    def test_environment_is_passed(self):
        with tempfile.TemporaryDirectory() as tmp:
            target = os.path.join(tmp, "env.txt")
            env = {"EPHEMERAL_MARKER": "marker", "PATH": os.environ.get("PATH", "/usr/bin:/bin")}
            exit_code = LocalShellExecutor().execute(["/bin/sh", "-c", "echo $EPHEMERAL_MARKER > %s" % target], env=env)
            self.assertEqual(0, exit_code)
            with open(target) as f:
                self.assertEqual("marker\n", f.read())
