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

from dataclasses import dataclass
from typing import Optional

from osephemeral.artifacts.platform import Platform
from osephemeral.artifacts.products import Product
from osephemeral.artifacts.versions import StructuredVersion


@dataclass(frozen=True)
class ArtifactDescriptor:
    """
    A resolved, directly downloadable artifact.

    :param product: The product this artifact belongs to.
    :param version: The version the artifact was resolved for.
    :param platform: The platform the artifact was resolved for.
    :param download_url: A fully expanded download URL.
    :param included_out_of_the_box: True iff the product is a plugin that is bundled with the distribution.
    :param shipped_as_of: The version as of which a plugin is bundled with the distribution, if any.
    """
    product: Product
    version: StructuredVersion
    platform: Platform
    download_url: str
    included_out_of_the_box: bool = False
    shipped_as_of: Optional[str] = None

    @property
    def file_name(self):
        return self.download_url[self.download_url.rfind("/") + 1:]
