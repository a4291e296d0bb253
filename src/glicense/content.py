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

"""Map catalog entries to license body files and load them.

File naming::

    ""                       -> ""
    Nokia-Qt-exception-1.1   -> Nokia-Qt-exception-1.1.txt   (fixed)
    GPL-2.0 (deprecated)     -> deprecated_GPL-2.0.txt
    MIT                      -> MIT.txt
"""

from __future__ import annotations

import re
from typing import Final

from glicense._types import LicenseContent, LicenseInfo
from glicense.assets import AssetStore, default_store
from glicense.errors import AssetMissingError
from glicense.logging import get_logger

__all__ = [
    'DEPRECATED_PREFIX',
    'load_content',
    'normalize',
    'normalize_text',
    'resolve_content_path',
]

log = get_logger('glicense.content')

#: Prefix applied to the body file of deprecated identifiers.
DEPRECATED_PREFIX: Final[str] = 'deprecated_'

# Legacy file names that predate the naming rule. They win over the
# deprecated prefix.
_PATH_OVERRIDES: Final[dict[str, str]] = {
    'Nokia-Qt-exception-1.1': 'Nokia-Qt-exception-1.1.txt',
}

_LINE_BREAK_RE: Final[re.Pattern[bytes]] = re.compile(rb'\r?\n')
_LINE_BREAK_STR_RE: Final[re.Pattern[str]] = re.compile(r'\r?\n')


def normalize(data: bytes) -> bytes:
    """Collapse every ``\\r?\\n`` in *data* to one space."""
    return _LINE_BREAK_RE.sub(b' ', data)


def normalize_text(text: str) -> str:
    """:func:`normalize` for ``str``."""
    return _LINE_BREAK_STR_RE.sub(' ', text)


def resolve_content_path(info: LicenseInfo) -> str:
    """Return the asset file name holding the body of *info*."""
    if not info.id:
        return ''
    if info.id in _PATH_OVERRIDES:
        return _PATH_OVERRIDES[info.id]
    prefix = DEPRECATED_PREFIX if info.is_deprecated else ''
    return f'{prefix}{info.id}.txt'


def load_content(info: LicenseInfo, store: AssetStore | None = None) -> LicenseContent:
    """Load and normalize the body of *info*.

    Args:
        info: The catalog entry.
        store: Asset store to read from (bundled data by default).

    Returns:
        The body with both the stored bytes and the collapsed form.

    Raises:
        AssetMissingError: If the body file is not in the store. The
            message names the attempted path.
    """
    store = store or default_store()
    path = resolve_content_path(info)
    try:
        data = store.get(path)
    except AssetMissingError as exc:
        log.warning('content_missing', license_id=info.id, path=path)
        raise AssetMissingError(path, f"Error to load data from assets '{path}'") from exc
    return LicenseContent(id=info.id, content=data, raw_content=normalize(data))
