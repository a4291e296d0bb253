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

"""Exception hierarchy for glicense.

Every error raised on purpose by the library derives from
:class:`GlicenseError`, so callers (and the CLI) can catch one type.
Discovery probe failures are never raised; they end up as a
``FAIL TO CHECK`` result instead.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from glicense._types import LicenseInfo

__all__ = [
    'AssetMissingError',
    'CatalogParseError',
    'ConfigError',
    'GlicenseError',
    'LicenseNotFoundError',
    'UninitializedContainerError',
]


class GlicenseError(Exception):
    """Base class for all glicense errors."""


class AssetMissingError(GlicenseError):
    """Raised when the asset store has no entry for a file name.

    Attributes:
        name: The requested asset file name.
    """

    def __init__(self, name: str, message: str = '') -> None:
        self.name = name
        super().__init__(message or f'Asset not found: {name!r}')


class CatalogParseError(GlicenseError):
    """Raised when a catalog JSON document is malformed.

    Attributes:
        errors: List of human-readable error strings.
    """

    def __init__(self, errors: list[str]) -> None:
        self.errors = errors
        bullet_list = '\n'.join(f'  - {e}' for e in errors)
        super().__init__(f'License catalog has {len(errors)} error(s):\n{bullet_list}')


class LicenseNotFoundError(GlicenseError):
    """Raised when a :class:`LicenseInfo` does not exactly match any catalog entry."""

    def __init__(self, info: LicenseInfo) -> None:
        self.info = info
        super().__init__(f'No catalog entry matches license info {info.id!r} ({info.name!r})')


class UninitializedContainerError(GlicenseError):
    """Raised when a catalog merge step receives no destination mapping."""

    def __init__(self) -> None:
        super().__init__("Can't compose licenses into an uninitialized container")


class ConfigError(GlicenseError):
    """Raised for invalid configuration files, keys, or values."""
