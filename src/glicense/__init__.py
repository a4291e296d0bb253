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

"""Identify open-source licenses from text or from a repository URL.

Usage::

    from glicense import Catalog, discover, identify

    Catalog().search_by_name('general public license')
    identify(open('LICENSE').read())
    discover(['https://github.com/org/repo'])
"""

__version__ = '0.1.0'

# Submodules read __version__ at import time.
from glicense._types import (  # noqa: E402
    FAIL_TO_CHECK,
    DiscoveryConfig,
    DiscoveryResult,
    HostClass,
    License,
    LicenseContent,
    LicenseInfo,
)
from glicense.catalog import Catalog  # noqa: E402
from glicense.content import load_content, resolve_content_path  # noqa: E402
from glicense.discovery import Prober, discover, iter_discover  # noqa: E402
from glicense.identify import Identification, Identifier, identify, identify_with_details  # noqa: E402

__all__ = [
    'FAIL_TO_CHECK',
    'Catalog',
    'DiscoveryConfig',
    'DiscoveryResult',
    'HostClass',
    'Identification',
    'Identifier',
    'License',
    'LicenseContent',
    'LicenseInfo',
    'Prober',
    '__version__',
    'discover',
    'identify',
    'identify_with_details',
    'iter_discover',
    'load_content',
    'resolve_content_path',
]
