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

import functools
import logging
import re
from collections import namedtuple
from enum import Enum

from osephemeral.artifacts.resolution_cache import NoResolutionCache, ResolutionCache
from osephemeral.exceptions import MalformedVersionError

VERSIONS = re.compile(r"^v?(\d+)\.(\d+)\.(\d+)(?:-([0-9A-Za-z.-]+))?(?:\+[0-9A-Za-z.-]+)?$")

PARTIAL_VERSION = re.compile(r"^v?(\d+|[xX*])(?:\.(\d+|[xX*]))?(?:\.(\d+|[xX*]))?(?:-([0-9A-Za-z.-]+))?(?:\+[0-9A-Za-z.-]+)?$")

COMPARATOR = re.compile(r"^(<=|>=|<|>|=|~>|~|\^)?(.*)$")

SNAPSHOT_SUFFIX = "-SNAPSHOT"

LATEST = "latest"

LATEST_FOR_MAJOR_PREFIX = "latest-"


class Provenance(Enum):
    """
    The publishing pipeline that produced an artifact. It determines how an artifact is resolved but is not part of
    the identity of a version.
    """
    RELEASED = "released"
    SNAPSHOT = "snapshot"
    BUILD_CANDIDATE = "build-candidate"


def _pre_release_key(pre_release):
    # a version without pre-release label has a higher precedence than any pre-release of the same version
    if pre_release is None:
        return (1,)
    identifiers = []
    for identifier in pre_release.split("."):
        if identifier.isdigit():
            identifiers.append((0, int(identifier), ""))
        else:
            identifiers.append((1, 0, identifier))
    return 0, tuple(identifiers)


def _precedence(major, minor, patch, pre_release):
    return major, minor, patch, _pre_release_key(pre_release)


@functools.total_ordering
class StructuredVersion:
    """
    An immutable semantic version together with the provenance of the artifacts that it refers to.

    Two versions are equal iff their semantic version fields are equal; provenance and build hash only matter for
    artifact resolution. Each instance owns a resolution cache so that an artifact is resolved at most once per
    product for the lifetime of the instance.
    """

    __slots__ = ("_major", "_minor", "_patch", "_pre_release", "_provenance", "_build_hash", "_resolution_cache")

    def __init__(self, major, minor, patch, pre_release=None, provenance=Provenance.RELEASED, build_hash=None,
                 resolution_cache=None):
        if build_hash and provenance != Provenance.BUILD_CANDIDATE:
            raise MalformedVersionError("A build hash [%s] is only allowed for build candidates but provenance is [%s]."
                                        % (build_hash, provenance.value))
        self._major = int(major)
        self._minor = int(minor)
        self._patch = int(patch)
        self._pre_release = pre_release or None
        self._provenance = provenance
        self._build_hash = build_hash or None
        self._resolution_cache = resolution_cache if resolution_cache is not None else ResolutionCache()

    @property
    def major(self):
        return self._major

    @property
    def minor(self):
        return self._minor

    @property
    def patch(self):
        return self._patch

    @property
    def pre_release(self):
        return self._pre_release

    @property
    def provenance(self):
        return self._provenance

    @property
    def build_hash(self):
        return self._build_hash

    @property
    def resolution_cache(self):
        return self._resolution_cache

    @property
    def anchor(self):
        """
        :return: The ``major.minor.patch`` string of this version without any pre-release or build label.
        """
        return "%d.%d.%d" % (self._major, self._minor, self._patch)

    @property
    def is_pre_release(self):
        return self._pre_release is not None

    def without_pre_release(self):
        return StructuredVersion(self._major, self._minor, self._patch, resolution_cache=NoResolutionCache())

    @classmethod
    def parse(cls, version, provenance=Provenance.RELEASED, build_hash=None):
        """
        Parses a plain semantic version string without consulting any index.

        :param version: A version string like ``2.4.5`` or ``2.5.0-SNAPSHOT``.
        :param provenance: The provenance to attach. Default: ``Provenance.RELEASED``.
        :param build_hash: An optional build hash (build candidates only).
        :return: A ``StructuredVersion``. Raises ``MalformedVersionError`` if ``version`` is not a semantic version.
        """
        if version is None:
            raise MalformedVersionError("Version must not be None.")
        matches = VERSIONS.match(version.strip())
        if not matches:
            raise MalformedVersionError("[%s] is not a valid version." % version)
        return cls(matches.group(1), matches.group(2), matches.group(3), matches.group(4), provenance, build_hash)

    @classmethod
    def from_string(cls, managed_version_string, api_resolver):
        """
        Resolves a version using either ``version``, ``version-SNAPSHOT``, ``hash:version``, ``latest`` or
        ``latest-MAJOR``.

        :param managed_version_string: The version string as supplied by the user. May be ``None``.
        :param api_resolver: Answers questions about released versions, latest versions and build hashes.
        :return: A ``StructuredVersion`` or ``None`` if no version was supplied.
        """
        if managed_version_string is None or not managed_version_string.strip():
            return None

        logger = logging.getLogger(__name__)
        raw = managed_version_string.strip()

        if raw.upper().endswith(SNAPSHOT_SUFFIX):
            _, version = split_build_candidate(raw)
            return cls.parse(version or raw, Provenance.SNAPSHOT)

        build_hash, version = split_build_candidate(raw)
        if version is not None:
            return cls.parse(version, Provenance.BUILD_CANDIDATE, build_hash)

        if raw.lower() == LATEST:
            version = api_resolver.latest_release_or_snapshot()
            logger.info("Resolved [%s] to version [%s].", raw, version)
            return cls.parse(version, cls._provenance_of(version, api_resolver))

        if raw.lower().startswith(LATEST_FOR_MAJOR_PREFIX):
            major = raw[len(LATEST_FOR_MAJOR_PREFIX):]
            try:
                major = int(major)
            except ValueError:
                raise MalformedVersionError("[%s] is not a valid major version in [%s]." % (major, raw))
            version = api_resolver.latest_release_or_snapshot(major)
            provenance = cls._provenance_of(version, api_resolver)
            build_hash = api_resolver.latest_build_hash(version) if provenance == Provenance.BUILD_CANDIDATE else None
            logger.info("Resolved [%s] to version [%s] (%s).", raw, version, provenance.value)
            return cls.parse(version, provenance, build_hash)

        return cls.parse(raw, cls._provenance_of(raw, api_resolver))

    @staticmethod
    def _provenance_of(version, api_resolver):
        if version.upper().endswith(SNAPSHOT_SUFFIX):
            return Provenance.SNAPSHOT
        if api_resolver.is_released_version(version):
            return Provenance.RELEASED
        # not yet released alpha versions are published like snapshots
        if "-alpha" in version.lower():
            return Provenance.SNAPSHOT
        return Provenance.BUILD_CANDIDATE

    def in_range(self, version_range):
        """
        Checks whether this version satisfies a semantic version range expression.

        Pre-release versions only match ranges that explicitly mention a pre-release of the same ``major.minor.patch``.
        If that rule rejects this version, the bare ``major.minor.patch`` is matched instead so e.g. ``2.4.5-SNAPSHOT``
        satisfies ``<5.0.0``.

        :param version_range: A range expression or a ``VersionRange``.
        """
        if not isinstance(version_range, VersionRange):
            version_range = VersionRange.parse(version_range)
        if version_range.is_satisfied_by(self):
            return True
        return version_range.is_satisfied_by(self.without_pre_release())

    def artifact(self, product, artifact_resolver, platform=None):
        """
        Resolves the artifact for ``product`` at this version. The result is cached per product for the lifetime of
        this instance.

        :param product: A ``Product``.
        :param artifact_resolver: The ``ArtifactResolver`` to use on a cache miss.
        :param platform: The target ``Platform``. Defaults to the current platform.
        :return: An ``ArtifactDescriptor``.
        """
        return self._resolution_cache.get_or_resolve(
            product.cache_key, lambda: artifact_resolver.resolve(product, self, platform))

    def _key(self):
        return _precedence(self._major, self._minor, self._patch, self._pre_release)

    def __eq__(self, other):
        if not isinstance(other, StructuredVersion):
            return NotImplemented
        return self._key() == other._key()

    def __lt__(self, other):
        if not isinstance(other, StructuredVersion):
            return NotImplemented
        return self._key() < other._key()

    def __hash__(self):
        return hash((self._major, self._minor, self._patch, self._pre_release))

    def __str__(self):
        if self._pre_release:
            return "%s-%s" % (self.anchor, self._pre_release)
        return self.anchor

    def __repr__(self):
        r = "StructuredVersion(%s, %s" % (str(self), self._provenance.value)
        if self._build_hash:
            r += ", %s" % self._build_hash
        return r + ")"


def split_build_candidate(version):
    """
    Splits a ``hash:version`` string.

    :return: A tuple ``(hash, version)``. Both elements are ``None`` if ``version`` does not contain a colon.
    """
    tokens = version.split(":", 1)
    if len(tokens) < 2:
        return None, None
    return tokens[0].strip(), tokens[1].strip()


Comparator = namedtuple("Comparator", ["operator", "version"])


class VersionRange:
    """
    A semantic version range expression, e.g. ``>=1.0.0 <3.0.0 || ^5.1``.

    Supported are the comparison operators ``<``, ``<=``, ``>``, ``>=`` and ``=``, tilde and caret ranges, X-ranges
    (``1.x``, ``1.2.*``), partial versions, hyphen ranges (``1.0.0 - 2.0.0``) and ``||`` alternatives.
    """

    def __init__(self, expression, comparator_sets):
        self.expression = expression
        self.comparator_sets = comparator_sets

    @classmethod
    def parse(cls, expression):
        if expression is None:
            raise MalformedVersionError("Version range must not be None.")
        comparator_sets = []
        for alternative in expression.split("||"):
            comparator_sets.append(cls._parse_comparator_set(alternative.strip(), expression))
        return cls(expression, comparator_sets)

    @classmethod
    def _parse_comparator_set(cls, expression, full_expression):
        hyphen_range = re.match(r"^(\S+)\s+-\s+(\S+)$", expression)
        if hyphen_range:
            return cls._lower_bound(">=", hyphen_range.group(1), full_expression) + \
                   cls._upper_bound("<=", hyphen_range.group(2), full_expression)
        # allow whitespace between an operator and its version
        expression = re.sub(r"(<=|>=|<|>|=|~>|~|\^)\s+", r"\1", expression)
        comparators = []
        for token in expression.split():
            comparators.extend(cls._parse_comparator(token, full_expression))
        return comparators

    @classmethod
    def _parse_comparator(cls, token, full_expression):
        operator, version = COMPARATOR.match(token).groups()
        if operator in ("~", "~>"):
            return cls._tilde(version, full_expression)
        if operator == "^":
            return cls._caret(version, full_expression)
        if operator in (">", ">="):
            return cls._lower_bound(operator, version, full_expression)
        if operator in ("<", "<="):
            return cls._upper_bound(operator, version, full_expression)
        return cls._x_range(version, full_expression)

    @staticmethod
    def _partial(version, full_expression):
        matches = PARTIAL_VERSION.match(version)
        if not matches:
            raise MalformedVersionError("[%s] in range [%s] is not a valid version." % (version, full_expression))
        parts = []
        for group in matches.groups()[:3]:
            if group is None or group in ("x", "X", "*"):
                break
            parts.append(int(group))
        return parts, matches.group(4)

    @staticmethod
    def _version(major, minor, patch, pre_release=None):
        return major, minor, patch, pre_release

    @classmethod
    def _x_range(cls, version, full_expression):
        parts, pre_release = cls._partial(version, full_expression)
        if len(parts) == 3:
            return [Comparator("=", cls._version(*parts, pre_release))]
        return cls._lower_bound(">=", version, full_expression) + cls._upper_bound("<=", version, full_expression)

    @classmethod
    def _lower_bound(cls, operator, version, full_expression):
        parts, pre_release = cls._partial(version, full_expression)
        if not parts:
            # "*" or ">x" matches everything that is not a pre-release
            return [Comparator(">=", cls._version(0, 0, 0))] if operator == ">=" else [Comparator("<", cls._version(0, 0, 0, "0"))]
        if len(parts) == 3:
            return [Comparator(operator, cls._version(*parts, pre_release))]
        if operator == ">":
            # >1 is >=2.0.0, >1.2 is >=1.3.0
            parts[-1] += 1
        parts.extend([0] * (3 - len(parts)))
        return [Comparator(">=", cls._version(*parts))]

    @classmethod
    def _upper_bound(cls, operator, version, full_expression):
        parts, pre_release = cls._partial(version, full_expression)
        if not parts:
            return [] if operator == "<=" else [Comparator("<", cls._version(0, 0, 0, "0"))]
        if len(parts) == 3:
            return [Comparator(operator, cls._version(*parts, pre_release))]
        if operator == "<=":
            # <=1.2 is <1.3.0-0, <=1 is <2.0.0-0
            parts[-1] += 1
        parts.extend([0] * (3 - len(parts)))
        return [Comparator("<", cls._version(*parts, "0"))]

    @classmethod
    def _tilde(cls, version, full_expression):
        parts, pre_release = cls._partial(version, full_expression)
        if not parts:
            return cls._lower_bound(">=", "*", full_expression)
        lower = parts + [0] * (3 - len(parts))
        if len(parts) == 1:
            upper = [parts[0] + 1, 0, 0]
        else:
            upper = [parts[0], parts[1] + 1, 0]
        return [Comparator(">=", cls._version(*lower, pre_release if len(parts) == 3 else None)),
                Comparator("<", cls._version(*upper, "0"))]

    @classmethod
    def _caret(cls, version, full_expression):
        parts, pre_release = cls._partial(version, full_expression)
        if not parts:
            return cls._lower_bound(">=", "*", full_expression)
        lower = parts + [0] * (3 - len(parts))
        if parts[0] != 0 or len(parts) == 1:
            upper = [parts[0] + 1, 0, 0]
        elif len(parts) == 2 or parts[1] != 0:
            upper = [0, parts[1] + 1, 0]
        else:
            upper = [0, 0, parts[2] + 1]
        return [Comparator(">=", cls._version(*lower, pre_release if len(parts) == 3 else None)),
                Comparator("<", cls._version(*upper, "0"))]

    def is_satisfied_by(self, version):
        """
        :param version: A ``StructuredVersion``.
        :return: True iff ``version`` satisfies at least one of the comparator sets of this range.
        """
        return any(self._set_satisfied_by(comparators, version) for comparators in self.comparator_sets)

    @staticmethod
    def _set_satisfied_by(comparators, version):
        key = _precedence(version.major, version.minor, version.patch, version.pre_release)
        for operator, (major, minor, patch, pre_release) in comparators:
            other = _precedence(major, minor, patch, pre_release)
            if operator == "=" and not key == other:
                return False
            if operator == "<" and not key < other:
                return False
            if operator == "<=" and not key <= other:
                return False
            if operator == ">" and not key > other:
                return False
            if operator == ">=" and not key >= other:
                return False
        if version.is_pre_release:
            # a pre-release only satisfies a range that explicitly allows pre-releases of the same major.minor.patch
            for _, (major, minor, patch, pre_release) in comparators:
                if pre_release is not None and (major, minor, patch) == (version.major, version.minor, version.patch):
                    return True
            return False
        return True

    def __str__(self):
        return self.expression
