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
import shutil
import tarfile
import zipfile


def ensure_dir(directory, mode=0o777):
    """
    Ensure that the provided directory and all of its parent directories exist.
    This function is safe to execute on existing directories (no op).

    :param directory: The directory to create (if it does not exist).
    :param mode: The permission flags to use (if it does not exist).
    """
    if directory:
        os.makedirs(directory, mode, exist_ok=True)


def normalize_path(path, cwd="."):
    """
    Normalizes a path by removing redundant "../" and also expanding the "~" character to the user home directory.
    :param path: A possibly non-normalized path.
    :param cwd: The current working directory. "." by default.
    :return: A normalized path.
    """
    normalized = os.path.normpath(os.path.expanduser(path))
    # user specified only a file name? -> treat as relative to the current directory
    if normalized == os.path.basename(normalized):
        return os.path.join(cwd, normalized)
    else:
        return normalized


def basename(path):
    return os.path.basename(path)


def dirname(path):
    return os.path.dirname(path)


def file_uri(path):
    """
    :param path: A local file path.
    :return: A ``file://`` URI for the absolute version of ``path``.
    """
    return "file://" + os.path.abspath(path).replace(os.sep, "/")


def copy_tree_if_absent(source, target):
    """
    Copies the directory tree at ``source`` into ``target`` but never overwrites files that already exist in ``target``.

    :param source: An existing directory.
    :param target: The target directory. Will be created if it does not exist.
    """
    def copy_if_absent(src, dst):
        if not os.path.exists(dst):
            shutil.copy2(src, dst)
        return dst

    shutil.copytree(source, target, dirs_exist_ok=True, copy_function=copy_if_absent)


def decompress(zip_name, target_directory):
    """
    Decompresses the provided archive to the target directory. The following file extensions are supported:

    * zip
    * tar.gz
    * tgz
    * tar

    :param zip_name: The full path name to the file that should be decompressed.
    :param target_directory: The directory to which files should be decompressed. May or may not exist prior to calling
    this function.
    """
    logger = logging.getLogger(__name__)
    path_without_extension, extension = splitext(zip_name)
    filename = basename(path_without_extension)
    logger.info("Decompressing [%s] to [%s].", zip_name, target_directory)
    if extension == ".zip":
        with zipfile.ZipFile(zip_name) as archive:
            archive.extractall(target_directory)
    elif extension in [".tar.gz", ".tgz", ".tar"]:
        with tarfile.open(zip_name) as archive:
            archive.extractall(target_directory)
    else:
        raise RuntimeError("Unsupported file extension [%s]. Cannot decompress [%s]" % (extension, filename))


def splitext(file_name):
    if file_name.endswith(".tar.gz"):
        return file_name[0:-7], file_name[-7:]
    else:
        return os.path.splitext(file_name)
