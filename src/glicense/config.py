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

"""Layered configuration for glicense.

Values are resolved from four sources, lowest precedence first:

1. Built-in defaults (:class:`GlicenseConfig` field defaults).
2. A TOML file: ``glicense.toml`` in the working directory, or an
   explicit path. Keys live under a ``[glicense]`` table or at the
   top level.
3. Environment variables (``GLICENSE_DATA_DIR``, ``GLICENSE_TIMEOUT``,
   ``GLICENSE_MATCH_THRESHOLD`` and a GitHub token).
4. Explicit overrides (the CLI flags).

Example ``glicense.toml``::

    [glicense]
    timeout = 5.0
    match_threshold = 400
    data_dir = "vendor/spdx"
"""

from __future__ import annotations

import dataclasses
import os
import sys
from collections.abc import Mapping
from dataclasses import dataclass
from pathlib import Path
from typing import Any

if sys.version_info >= (3, 11):
    import tomllib
else:
    import tomli as tomllib

from glicense import __version__
from glicense.errors import ConfigError

__all__ = [
    'CONFIG_FILENAME',
    'GlicenseConfig',
    'load_config',
]

CONFIG_FILENAME = 'glicense.toml'

# Token env vars, first non-empty wins.
_TOKEN_ENV_VARS: tuple[str, ...] = ('GLICENSE_GITHUB_TOKEN', 'GITHUB_TOKEN', 'GH_TOKEN')


@dataclass(frozen=True)
class GlicenseConfig:
    """Resolved runtime settings.

    Attributes:
        data_dir: Directory holding the catalog JSON files and license
            bodies. ``None`` means the data bundled with the package.
        timeout: Per-request HTTP timeout in seconds.
        match_threshold: Template matches at or above this edit distance
            are rejected.
        follow_redirects: Whether discovery follows HTTP redirects.
        user_agent: ``User-Agent`` header sent with every probe.
        github_token: Bearer token for the raw-content host, or ``''``.
    """

    data_dir: Path | None = None
    timeout: float = 10.0
    match_threshold: int = 500
    follow_redirects: bool = True
    user_agent: str = f'glicense/{__version__}'
    github_token: str = ''


# Key -> accepted Python types for values read from TOML.
_FIELD_TYPES: dict[str, tuple[type, ...]] = {
    'data_dir': (str,),
    'timeout': (int, float),
    'match_threshold': (int,),
    'follow_redirects': (bool,),
    'user_agent': (str,),
    'github_token': (str,),
}


def _check_value(key: str, value: Any, source: str) -> Any:  # noqa: ANN401
    """Validate one TOML value and convert it to the field's type."""
    if key not in _FIELD_TYPES:
        raise ConfigError(f'{source}: unknown key {key!r}. Valid keys: {", ".join(sorted(_FIELD_TYPES))}')
    expected = _FIELD_TYPES[key]
    # bool is a subclass of int; reject it for numeric fields.
    if not isinstance(value, expected) or (isinstance(value, bool) and bool not in expected):
        names = ' or '.join(t.__name__ for t in expected)
        raise ConfigError(f'{source}: {key!r} must be {names}, got {type(value).__name__}')
    if key == 'data_dir':
        return Path(value)
    if key == 'timeout':
        return float(value)
    return value


def _read_toml(path: Path) -> dict[str, Any]:
    """Read settings from *path*, accepting a ``[glicense]`` table or top-level keys."""
    try:
        with path.open('rb') as f:
            data = tomllib.load(f)
    except tomllib.TOMLDecodeError as exc:
        raise ConfigError(f'{path}: invalid TOML: {exc}') from exc
    except OSError as exc:
        raise ConfigError(f'{path}: cannot read config file: {exc}') from exc

    section = data.get('glicense', data)
    if not isinstance(section, dict):
        raise ConfigError(f'{path}: [glicense] must be a table')
    return {key: _check_value(key, value, str(path)) for key, value in section.items()}


def _read_env(env: Mapping[str, str]) -> dict[str, Any]:
    """Read settings from environment variables."""
    values: dict[str, Any] = {}
    if env.get('GLICENSE_DATA_DIR'):
        values['data_dir'] = Path(env['GLICENSE_DATA_DIR'])
    if env.get('GLICENSE_TIMEOUT'):
        try:
            values['timeout'] = float(env['GLICENSE_TIMEOUT'])
        except ValueError as exc:
            raise ConfigError(f'GLICENSE_TIMEOUT: expected a number, got {env["GLICENSE_TIMEOUT"]!r}') from exc
    if env.get('GLICENSE_MATCH_THRESHOLD'):
        try:
            values['match_threshold'] = int(env['GLICENSE_MATCH_THRESHOLD'])
        except ValueError as exc:
            raise ConfigError(
                f'GLICENSE_MATCH_THRESHOLD: expected an integer, got {env["GLICENSE_MATCH_THRESHOLD"]!r}'
            ) from exc
    for name in _TOKEN_ENV_VARS:
        if env.get(name):
            values['github_token'] = env[name]
            break
    return values


def load_config(
    path: Path | None = None,
    *,
    env: Mapping[str, str] | None = None,
    overrides: Mapping[str, Any] | None = None,
) -> GlicenseConfig:
    """Build a :class:`GlicenseConfig` from every configuration source.

    Args:
        path: Explicit TOML file. Must exist when given. When ``None``,
            ``glicense.toml`` in the working directory is used if present.
        env: Environment mapping (defaults to :data:`os.environ`).
        overrides: Highest-precedence values, e.g. from CLI flags.
            ``None`` values are ignored.

    Returns:
        The merged, validated configuration.

    Raises:
        ConfigError: On unreadable files, unknown keys, or bad values.
    """
    values: dict[str, Any] = {}

    if path is not None:
        if not path.is_file():
            raise ConfigError(f'Config file not found: {path}')
        values.update(_read_toml(path))
    elif Path(CONFIG_FILENAME).is_file():
        values.update(_read_toml(Path(CONFIG_FILENAME)))

    values.update(_read_env(os.environ if env is None else env))

    valid = {f.name for f in dataclasses.fields(GlicenseConfig)}
    for key, value in (overrides or {}).items():
        if key not in valid:
            raise ConfigError(f'Unknown config override {key!r}')
        if value is not None:
            values[key] = value

    cfg = GlicenseConfig(**values)
    if cfg.timeout <= 0:
        raise ConfigError(f'timeout must be positive, got {cfg.timeout}')
    if cfg.match_threshold < 0:
        raise ConfigError(f'match_threshold must not be negative, got {cfg.match_threshold}')
    return cfg
