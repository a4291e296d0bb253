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

"""Find and identify the license file of a repository URL.

For every distinct input URL the prober picks the first
:class:`~glicense._types.DiscoveryConfig` whose pattern matches, then
tries that config's candidate URLs one at a time until one answers
``200``. The body is handed to the identifier.

Data Flow::

    https://github.com/org/repo
        │  config: github.com (code host)
        ▼
    https://raw.githubusercontent.com/org/repo/master/LICENSE      404
    https://raw.githubusercontent.com/org/repo/master/LICENSE.md   200
        │
        ▼
    DiscoveryResult('org/repo', 'MIT license', '.../master/LICENSE.md')

Probe failures (unreachable host, non-200 status, invalid URL) are never
raised. When every candidate fails the result carries the
``FAIL TO CHECK`` marker and an empty matched URL.

Usage::

    from glicense.discovery import discover

    for result in discover(['https://github.com/pallets/click']):
        print(result.source, result.license_name, result.matched_url)
"""

from __future__ import annotations

import re
from collections.abc import Iterable, Iterator
from types import TracebackType
from typing import Final

import httpx

from glicense._types import FAIL_TO_CHECK, DiscoveryConfig, DiscoveryResult, HostClass
from glicense.assets import default_store
from glicense.config import GlicenseConfig
from glicense.identify import Identifier
from glicense.logging import get_logger

__all__ = [
    'DEFAULT_CONFIGS',
    'RAW_CONTENT_HOST',
    'Prober',
    'discover',
    'expand_candidate',
    'iter_discover',
    'rewrite_host',
    'select_config',
    'source_name',
]

log = get_logger('glicense.discovery')

# ── Constants ────────────────────────────────────────────────────────

#: Host serving plain-text file contents of GitHub repositories.
RAW_CONTENT_HOST: Final[str] = 'raw.githubusercontent.com'

#: Placeholder replaced by the input URL in candidate templates.
URL_PLACEHOLDER: Final[str] = '{{URL}}'

_PLACEHOLDER_RE: Final[re.Pattern[str]] = re.compile(re.escape(URL_PLACEHOLDER), re.IGNORECASE)

_SCHEME_RE: Final[re.Pattern[str]] = re.compile(r'^[A-Za-z][A-Za-z0-9+.-]*://')

# Web UI host -> raw-content host. Unmatched groups substitute as ''.
_HOST_REWRITES: Final[tuple[tuple[re.Pattern[str], str], ...]] = (
    (
        re.compile(r'^(?P<scheme>[A-Za-z][A-Za-z0-9+.-]*://)?(?:www\.)?github\.com(?=/|$)', re.IGNORECASE),
        rf'\g<scheme>{RAW_CONTENT_HOST}',
    ),
    (
        re.compile(r'^(?P<scheme>[A-Za-z][A-Za-z0-9+.-]*://)?(?:www\.)?golang\.org/x(?=/|$)', re.IGNORECASE),
        rf'\g<scheme>{RAW_CONTENT_HOST}/golang',
    ),
)

_REPO_RE: Final[re.Pattern[str]] = re.compile(
    r'(?:github\.com|githubusercontent\.com|golang\.org)/(?P<owner>[^/?#]+)/(?P<repo>[^/?#]+)',
    re.IGNORECASE,
)


def _code_host_candidates() -> tuple[str, ...]:
    """``{{URL}}/master/<name><ext>`` for LICENSE then README, each in three casings."""
    candidates: list[str] = []
    for stem in ('LICENSE', 'License', 'license', 'README', 'Readme', 'readme'):
        for ext in ('', '.md', '.txt'):
            candidates.append(f'{URL_PLACEHOLDER}/master/{stem}{ext}')
    return tuple(candidates)


_CODE_HOST_CANDIDATES: Final[tuple[str, ...]] = _code_host_candidates()

#: Configs tried in order; the empty pattern last catches everything.
DEFAULT_CONFIGS: Final[tuple[DiscoveryConfig, ...]] = (
    DiscoveryConfig(pattern=r'github\.com', host_class=HostClass.CODE_HOST, candidate_paths=_CODE_HOST_CANDIDATES),
    DiscoveryConfig(
        pattern=r'githubusercontent\.com', host_class=HostClass.CODE_HOST, candidate_paths=_CODE_HOST_CANDIDATES
    ),
    DiscoveryConfig(pattern=r'golang\.org', host_class=HostClass.CODE_HOST, candidate_paths=_CODE_HOST_CANDIDATES),
    DiscoveryConfig(pattern='', host_class=HostClass.UNKNOWN, candidate_paths=(URL_PLACEHOLDER,)),
)


# ── URL helpers ──────────────────────────────────────────────────────


def select_config(url: str, configs: Iterable[DiscoveryConfig] = DEFAULT_CONFIGS) -> DiscoveryConfig | None:
    """Return the first config whose pattern is found in *url*."""
    for config in configs:
        if re.search(config.pattern, url):
            return config
    return None


def rewrite_host(url: str) -> str:
    """Point a code-host web URL at the raw-content host."""
    for pattern, replacement in _HOST_REWRITES:
        new, n = pattern.subn(replacement, url, count=1)
        if n:
            return new
    return url


def expand_candidate(config: DiscoveryConfig, template: str, url: str) -> str:
    """Build the concrete URL to fetch for one candidate template.

    Args:
        config: The config *template* belongs to.
        template: Candidate template holding a ``{{URL}}`` placeholder
            (any letter case).
        url: The input URL.

    Returns:
        The candidate with the placeholder replaced, rewritten to the
        raw-content host for code hosts, and prefixed with ``http://``
        when it has no scheme.
    """
    base = url.rstrip('/') if config.host_class is HostClass.CODE_HOST else url
    candidate = _PLACEHOLDER_RE.sub(lambda _m: base, template)
    if config.host_class is HostClass.CODE_HOST:
        candidate = rewrite_host(candidate)
    if not _SCHEME_RE.match(candidate):
        candidate = f'http://{candidate}'
    return candidate


def source_name(config: DiscoveryConfig, url: str) -> str:
    """Display name of *url*: ``owner/repo`` on code hosts, else the URL itself."""
    if config.host_class is HostClass.CODE_HOST:
        m = _REPO_RE.search(rewrite_host(url))
        if m:
            return f'{m.group("owner")}/{m.group("repo")}'
    return url


def _dedupe(urls: Iterable[str]) -> list[str]:
    """Drop repeated URLs, keeping first-occurrence order."""
    return list(dict.fromkeys(urls))


# ── Prober ───────────────────────────────────────────────────────────


class Prober:
    """Sequential license discovery over one HTTP client.

    Use as a context manager, or call :meth:`close`, to release a client
    the prober created itself. An injected client is left open.

    Args:
        config: Runtime settings (timeout, redirects, user agent, token,
            match threshold).
        client: HTTP client to use instead of creating one.
        identifier: Identifier for fetched bodies. Defaults to one over
            the templates in ``config.data_dir`` (bundled when unset)
            with ``config.match_threshold``.
        configs: Discovery configs, in priority order.
    """

    def __init__(
        self,
        config: GlicenseConfig | None = None,
        *,
        client: httpx.Client | None = None,
        identifier: Identifier | None = None,
        configs: tuple[DiscoveryConfig, ...] = DEFAULT_CONFIGS,
    ) -> None:
        self.config = config or GlicenseConfig()
        self.configs = configs
        self.identifier = identifier or Identifier(
            default_store(self.config.data_dir), threshold=self.config.match_threshold
        )
        self._owns_client = client is None
        self.client = client or httpx.Client(
            timeout=self.config.timeout,
            follow_redirects=self.config.follow_redirects,
            headers={'User-Agent': self.config.user_agent},
        )

    def __enter__(self) -> Prober:
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        self.close()

    def close(self) -> None:
        """Close the HTTP client if this prober created it."""
        if self._owns_client:
            self.client.close()

    def _headers(self, url: str) -> dict[str, str]:
        if self.config.github_token and httpx.URL(url).host == RAW_CONTENT_HOST:
            return {'Authorization': f'Bearer {self.config.github_token}'}
        return {}

    def _fetch(self, url: str) -> str | None:
        """GET *url*; return the body on ``200`` and ``None`` otherwise."""
        try:
            resp = self.client.get(url, headers=self._headers(url))
        except (httpx.HTTPError, httpx.InvalidURL, ValueError) as exc:
            # ValueError covers IDNA failures on malformed hosts.
            log.debug('probe_candidate_failed', url=url, error=str(exc))
            return None
        if resp.status_code != 200:
            log.debug('probe_candidate_failed', url=url, status=resp.status_code)
            return None
        return resp.text

    def probe(self, url: str) -> DiscoveryResult:
        """Discover and identify the license of one input URL."""
        config = select_config(url, self.configs)
        if config is not None:
            for template in config.candidate_paths:
                candidate = expand_candidate(config, template, url)
                body = self._fetch(candidate)
                if body is None:
                    continue
                name = self.identifier.identify(body)
                source = source_name(config, url)
                log.info('probe_matched', source=source, license=name, url=candidate)
                return DiscoveryResult(source=source, license_name=name, matched_url=candidate)
        log.warning('probe_exhausted', url=url)
        return DiscoveryResult(source=url, license_name=FAIL_TO_CHECK, matched_url='')

    def iter_discover(self, urls: Iterable[str]) -> Iterator[DiscoveryResult]:
        """Yield one result per distinct URL, as each finishes."""
        for url in _dedupe(urls):
            yield self.probe(url)

    def discover(self, urls: Iterable[str]) -> list[DiscoveryResult]:
        """Return one result per distinct URL, in first-occurrence order."""
        return list(self.iter_discover(urls))


def iter_discover(
    urls: Iterable[str],
    config: GlicenseConfig | None = None,
    *,
    client: httpx.Client | None = None,
) -> Iterator[DiscoveryResult]:
    """Stream discovery results with a temporary :class:`Prober`."""
    with Prober(config, client=client) as prober:
        yield from prober.iter_discover(urls)


def discover(
    urls: Iterable[str],
    config: GlicenseConfig | None = None,
    *,
    client: httpx.Client | None = None,
) -> list[DiscoveryResult]:
    """Discover the license of every distinct URL in *urls*.

    Args:
        urls: Repository or file URLs. Exact duplicates are probed once.
        config: Runtime settings; defaults apply when ``None``.
        client: HTTP client to use instead of creating one.

    Returns:
        One :class:`DiscoveryResult` per distinct input URL.
    """
    return list(iter_discover(urls, config, client=client))
