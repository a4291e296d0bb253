# Copyright 2026 Google LLC
#
# Licensed under the Apache License, Version 2.0 (the "License");
# you may not use this file except in compliance with the License.
# You may obtain a copy of the License at
#
#     http://www.apache.org/licenses/LICENSE-2.0
#
# Unless required by applicable law or agreed to in writing, software
# distributed under the License is distributed on an "AS IS" BASIS,
# WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied.
# See the License for the specific language governing permissions and
# limitations under the License.
#
# SPDX-License-Identifier: Apache-2.0

"""Shared leaf-level types used across glicense.

This module must have **zero** imports from other ``glicense``
modules to avoid circular-import chains.  It is safe to import
from any module in the project.
"""

from __future__ import annotations

import enum
from dataclasses import dataclass

__all__ = [
    'FAIL_TO_CHECK',
    'DiscoveryConfig',
    'DiscoveryResult',
    'HostClass',
    'License',
    'LicenseContent',
    'LicenseInfo',
]

#: License name reported when no candidate URL could be fetched.
FAIL_TO_CHECK = 'FAIL TO CHECK'


@dataclass(frozen=True)
class LicenseInfo:
    """Identity and metadata of one catalog entry.

    Equality compares every field, so two records are equal only when
    their ``references`` hold the same URLs in the same order.

    Attributes:
        id: License or exception identifier (e.g. ``"0BSD"``).
        name: Human-readable display name.
        references: Reference URLs, in catalog order.
        is_deprecated: Whether the identifier is deprecated upstream.
    """

    id: str = ''
    name: str = ''
    references: tuple[str, ...] = ()
    is_deprecated: bool = False


@dataclass(frozen=True)
class LicenseContent:
    """Body of a license as stored in the asset store.

    Attributes:
        id: Identifier of the owning :class:`LicenseInfo`.
        content: Raw bytes exactly as stored.
        raw_content: ``content`` with every ``\\r?\\n`` collapsed to a
            single space.
    """

    id: str
    content: bytes
    raw_content: bytes

    @property
    def text(self) -> str:
        """``content`` decoded as UTF-8 (undecodable bytes replaced)."""
        return self.content.decode('utf-8', errors='replace')


@dataclass(frozen=True)
class License:
    """A catalog entry joined with its loaded body."""

    info: LicenseInfo
    content: LicenseContent


class HostClass(str, enum.Enum):
    """How a discovery config treats the URLs it matches."""

    CODE_HOST = 'code-host'
    UNKNOWN = 'unknown'


@dataclass(frozen=True)
class DiscoveryConfig:
    """A hostname pattern paired with the license file locations to probe.

    Attributes:
        pattern: Regular expression searched in the input URL. The empty
            pattern matches every URL.
        host_class: Whether the host is a recognized code host whose URLs
            are rewritten to the raw-content host.
        candidate_paths: URL templates tried in order. Each contains a
            ``{{URL}}`` placeholder replaced by the input URL.
    """

    pattern: str
    host_class: HostClass
    candidate_paths: tuple[str, ...]


@dataclass(frozen=True)
class DiscoveryResult:
    """Outcome of probing one input URL.

    Attributes:
        source: Display name derived from the input URL (``owner/repo``
            for code hosts, the URL itself otherwise).
        license_name: Detected license name, or :data:`FAIL_TO_CHECK`.
        matched_url: The URL that answered 200, empty on failure.
    """

    source: str
    license_name: str
    matched_url: str = ''

    @property
    def ok(self) -> bool:
        """``True`` if a candidate URL answered with a license file."""
        return bool(self.matched_url)
