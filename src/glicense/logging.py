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

"""Structured logging for glicense.

Log events are snake_case names with key/value context, rendered by
`structlog <https://www.structlog.org/>`_ either as colored console lines
or as one JSON object per line (``--json-log``). Output goes to stderr;
stdout carries only command results.

Values of the GitHub token variables never reach the output: a
:class:`SecretRedactor` processor replaces them with ``[REDACTED]`` in
every string field. Set ``GLICENSE_REDACT_SECRETS=0`` to turn that off.

Usage::

    from glicense.logging import configure_logging, get_logger

    configure_logging(verbose=True)
    log = get_logger('glicense.discovery')
    log.debug('probe_candidate_failed', url=url, status=404)
"""

from __future__ import annotations

import logging
import os
import sys
from collections.abc import Iterable, Mapping
from typing import Any, Final

import structlog

__all__ = [
    'SENSITIVE_ENV_VARS',
    'SecretRedactor',
    'configure_logging',
    'get_logger',
    'redact_sensitive_values',
]

#: Environment variables whose values are scrubbed from log output.
SENSITIVE_ENV_VARS: Final[tuple[str, ...]] = ('GLICENSE_GITHUB_TOKEN', 'GITHUB_TOKEN', 'GH_TOKEN')

REDACTED: Final[str] = '[REDACTED]'

# Shorter values would blank out ordinary words.
_MIN_SECRET_LENGTH: Final[int] = 8


class SecretRedactor:
    """structlog processor replacing known secret strings in event fields.

    Args:
        secrets: Values to hide. Empty strings and values shorter than
            eight characters are ignored.
    """

    def __init__(self, secrets: Iterable[str] = ()) -> None:
        self.secrets: frozenset[str] = frozenset(s for s in secrets if len(s) >= _MIN_SECRET_LENGTH)

    @classmethod
    def from_env(cls, env: Mapping[str, str] | None = None) -> SecretRedactor:
        """Build a redactor over the current values of :data:`SENSITIVE_ENV_VARS`."""
        env = os.environ if env is None else env
        return cls(env.get(name, '') for name in SENSITIVE_ENV_VARS)

    def scrub(self, value: object) -> object:
        """Return *value* with every secret substring replaced; non-strings pass through."""
        if not isinstance(value, str):
            return value
        for secret in self.secrets:
            value = value.replace(secret, REDACTED)
        return value

    def __call__(self, logger: Any, method_name: str, event_dict: dict[str, Any]) -> dict[str, Any]:  # noqa: ANN401
        if not self.secrets:
            return event_dict
        return {key: self.scrub(val) for key, val in event_dict.items()}


# Replaced by configure_logging().
_redactor = SecretRedactor()


def redact_sensitive_values(logger: Any, method_name: str, event_dict: dict[str, Any]) -> dict[str, Any]:  # noqa: ANN401
    """Processor delegating to the redactor installed by :func:`configure_logging`."""
    return _redactor(logger, method_name, event_dict)


def _level(*, verbose: bool, quiet: bool) -> int:
    if quiet:
        return logging.WARNING
    return logging.DEBUG if verbose else logging.INFO


def configure_logging(
    *,
    verbose: bool = False,
    quiet: bool = False,
    json_log: bool = False,
    redact_secrets: bool = True,
) -> None:
    """Route structlog through the stdlib root logger on stderr.

    Args:
        verbose: Debug output, including every probed URL.
        quiet: Warnings and errors only. Wins over *verbose*.
        json_log: JSON lines instead of console output.
        redact_secrets: Scrub GitHub token values. ``GLICENSE_REDACT_SECRETS=0``
            also disables it.
    """
    global _redactor  # noqa: PLW0603
    enabled = redact_secrets and os.environ.get('GLICENSE_REDACT_SECRETS', '1') != '0'
    _redactor = SecretRedactor.from_env() if enabled else SecretRedactor()

    logging.basicConfig(format='%(message)s', stream=sys.stderr, level=_level(verbose=verbose, quiet=quiet), force=True)

    renderer: structlog.types.Processor
    if json_log:
        renderer = structlog.processors.JSONRenderer()
    else:
        renderer = structlog.dev.ConsoleRenderer(colors=sys.stderr.isatty())

    structlog.configure(
        processors=[
            structlog.contextvars.merge_contextvars,
            structlog.stdlib.add_log_level,
            structlog.stdlib.add_logger_name,
            structlog.processors.TimeStamper(fmt='iso'),
            redact_sensitive_values,
            structlog.stdlib.ProcessorFormatter.wrap_for_formatter,
        ],
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=True,
    )
    formatter = structlog.stdlib.ProcessorFormatter(
        processors=[structlog.stdlib.ProcessorFormatter.remove_processors_meta, renderer],
    )
    for handler in logging.root.handlers:
        handler.setFormatter(formatter)


def get_logger(name: str = 'glicense') -> structlog.stdlib.BoundLogger:
    """Return the structlog logger called *name*."""
    return structlog.get_logger(name)
