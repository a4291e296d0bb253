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

"""Integration tests that check the bundled catalog against upstream SPDX data.

These tests require internet access and are **deselected by default**.
Run them explicitly with::

    pytest -m network tests/gl_license_data_integ_test.py
"""

from __future__ import annotations

import json
from typing import Any

import httpx
import pytest
from glicense.catalog import load_documents

# ── Markers ─────────────────────────────────────────────────────────────

pytestmark = pytest.mark.network

# ── Constants ───────────────────────────────────────────────────────────

SPDX_LICENSES_URL = 'https://raw.githubusercontent.com/spdx/license-list-data/main/json/licenses.json'
SPDX_EXCEPTIONS_URL = 'https://raw.githubusercontent.com/spdx/license-list-data/main/json/exceptions.json'

# ── Helpers ─────────────────────────────────────────────────────────────


def _fetch_json(url: str) -> Any:  # noqa: ANN401
    try:
        resp = httpx.get(url, timeout=30, follow_redirects=True)
    except httpx.HTTPError as exc:
        pytest.skip(f'No internet access: {exc}')
    resp.raise_for_status()
    return json.loads(resp.content)


# ── Fixtures ────────────────────────────────────────────────────────────


@pytest.fixture(scope='module')
def upstream_license_ids() -> set[str]:
    """Fetch the SPDX license list and return its ids."""
    return {lic['licenseId'] for lic in _fetch_json(SPDX_LICENSES_URL)['licenses']}


@pytest.fixture(scope='module')
def upstream_exception_ids() -> set[str]:
    """Fetch the SPDX exception list and return its ids."""
    return {exc['licenseExceptionId'] for exc in _fetch_json(SPDX_EXCEPTIONS_URL)['exceptions']}


# ── Tests ───────────────────────────────────────────────────────────────


class TestUpstreamIds:
    """Every bundled identifier still exists upstream."""

    def test_license_ids(self, upstream_license_ids: set[str]) -> None:
        """Test license ids."""
        licenses, _ = load_documents()
        missing = [lic.license_id for lic in licenses.licenses if lic.license_id not in upstream_license_ids]
        assert not missing, f'License ids not found upstream: {missing}'

    def test_exception_ids(self, upstream_exception_ids: set[str]) -> None:
        """Test exception ids."""
        _, exceptions = load_documents()
        missing = [
            exc.license_exception_id
            for exc in exceptions.exceptions
            if exc.license_exception_id not in upstream_exception_ids
        ]
        assert not missing, f'Exception ids not found upstream: {missing}'
