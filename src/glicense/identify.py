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

"""Guess the license of free-form text.

Strategies, tried in order (first match wins):

1. **Fast path**: case-insensitive substring checks for the MIT,
   Mozilla and Apache 2.0 licenses.
2. **Template**: Levenshtein distance between the line-collapsed text
   and every template of the corpus. The closest template wins if its
   distance is below the match threshold (500 by default).
3. **Copyright**: the first ``Copyright ...`` line of the text.
4. **None**: the empty string.

Distances are computed with `rapidfuzz
<https://github.com/rapidfuzz/RapidFuzz>`_. Each comparison after the
first is bounded by the best distance seen so far, so most templates
are rejected early.

Usage::

    from glicense.identify import identify

    identify(Path('LICENSE').read_text())  # 'MIT license'
"""

from __future__ import annotations

import functools
import re
from dataclasses import dataclass
from typing import Final, Literal

from rapidfuzz.distance import Levenshtein

from glicense.assets import AssetStore, default_store
from glicense.content import normalize_text
from glicense.logging import get_logger

__all__ = [
    'DEFAULT_MATCH_THRESHOLD',
    'TEMPLATE_CORPUS',
    'Identification',
    'Identifier',
    'identify',
    'identify_with_details',
]

log = get_logger('glicense.identify')

# ── Constants ────────────────────────────────────────────────────────

#: Template matches must be strictly closer than this edit distance.
DEFAULT_MATCH_THRESHOLD: Final[int] = 500

#: Template display name -> asset file holding its canonical text.
#: Iteration order is the tie-break order.
TEMPLATE_CORPUS: Final[tuple[tuple[str, str], ...]] = (
    ('Apache License 1.0', 'Apache-1.0.txt'),
    ('Apache License 1.1', 'Apache-1.1.txt'),
    ('Apache License 2.0', 'Apache-2.0.txt'),
    ("BSD 2-Clause 'Simplified' License", 'BSD-2-Clause.txt'),
    ("BSD 3-Clause 'New' or 'Revised' License", 'BSD-3-Clause.txt'),
    ('BSD 3-Clause Clear License', 'BSD-3-Clause-Clear.txt'),
    ('Creative Commons Attribution 4.0', 'CC-BY-4.0.txt'),
    ('GNU General Public License v2.0', 'GPL-2.0-only.txt'),
    ('GNU General Public License v3.0', 'GPL-3.0-only.txt'),
    ('GNU Lesser General Public License v2.0', 'LGPL-2.0-only.txt'),
    ('GNU Lesser General Public License v2.1', 'LGPL-2.1-only.txt'),
    ('GNU Lesser General Public License v3.0', 'LGPL-3.0-only.txt'),
    ('MIT License', 'MIT.txt'),
    ('ISC License', 'ISC.txt'),
)

_COPYRIGHT_RE: Final[re.Pattern[str]] = re.compile(r'Copyright.+', re.IGNORECASE)

Method = Literal['fast-path', 'template', 'copyright', 'none']


@dataclass(frozen=True)
class Identification:
    """How a piece of text was identified.

    Attributes:
        name: The license name, copyright line, or ``''``.
        method: Which strategy produced ``name``.
        distance: Edit distance to the closest template, or ``None``
            when the fast path answered without comparing.
    """

    name: str
    method: Method
    distance: int | None = None


def _fast_path(text: str) -> str:
    lowered = text.lower()
    if 'mit license' in lowered:
        return 'MIT license'
    if 'mozilla public license' in lowered:
        return 'Mozilla Public License'
    if 'apache license' in lowered and 'version 2.0' in lowered:
        return 'Apache License 2.0'
    return ''


class Identifier:
    """Nearest-template license identifier.

    The template corpus is read from *store* once, at construction, and
    never changes afterwards. Instances are safe to share.

    Args:
        store: Asset store holding the template texts.
        threshold: Template matches must be strictly below this distance.
    """

    def __init__(self, store: AssetStore | None = None, threshold: int = DEFAULT_MATCH_THRESHOLD) -> None:
        store = store or default_store()
        self.threshold = threshold
        self.templates: tuple[tuple[str, str], ...] = tuple(
            (name, normalize_text(store.get(filename).decode('utf-8'))) for name, filename in TEMPLATE_CORPUS
        )

    def closest(self, text: str) -> tuple[str, int]:
        """Return the closest template name and its distance to *text*.

        Ties go to the template listed first.
        """
        normalized = normalize_text(text)
        best_name = ''
        best: int | None = None
        for name, template in self.templates:
            if best is None:
                d = Levenshtein.distance(normalized, template)
            else:
                # Returns best when the real distance is >= best.
                d = Levenshtein.distance(normalized, template, score_cutoff=best - 1)
            if best is None or d < best:
                best_name, best = name, d
            if best == 0:
                break
        return best_name, best if best is not None else 0

    def identify_with_details(self, text: str) -> Identification:
        """Identify *text* and report which strategy answered."""
        name = _fast_path(text)
        if name:
            return Identification(name=name, method='fast-path')

        name, distance = self.closest(text)
        if name and distance < self.threshold:
            log.debug('identify_template_match', template=name, distance=distance)
            return Identification(name=name, method='template', distance=distance)

        m = _COPYRIGHT_RE.search(text)
        if m:
            return Identification(name=m.group(0).rstrip(), method='copyright', distance=distance)
        return Identification(name='', method='none', distance=distance)

    def identify(self, text: str) -> str:
        """Return the best-guess license name of *text*; never raises."""
        return self.identify_with_details(text).name


@functools.cache
def _default_identifier() -> Identifier:
    return Identifier()


def identify_with_details(text: str) -> Identification:
    """:meth:`Identifier.identify_with_details` against the bundled templates."""
    return _default_identifier().identify_with_details(text)


def identify(text: str) -> str:
    """:meth:`Identifier.identify` against the bundled templates."""
    return _default_identifier().identify(text)
