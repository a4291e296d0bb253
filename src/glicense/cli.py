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

"""Command-line interface for glicense.

Commands::

    glicense list [--json]
    glicense search NAME [--case-sensitive] [--json]
    glicense show ID
    glicense detect [TEXT] [-p PATH] [-u URL ...] [--json]
    glicense version

Results go to stdout, logs and errors to stderr. Every
:class:`~glicense.errors.GlicenseError` becomes a one-line red message
and exit status 1.
"""

from __future__ import annotations

import argparse
import json
import sys
from collections.abc import Sequence
from pathlib import Path

from rich.console import Console
from rich.table import Table
from rich.text import Text

from glicense import __version__
from glicense._types import License, LicenseInfo
from glicense.assets import default_store
from glicense.catalog import Catalog
from glicense.config import GlicenseConfig, load_config
from glicense.discovery import Prober
from glicense.errors import GlicenseError, LicenseNotFoundError
from glicense.identify import Identifier
from glicense.logging import configure_logging, get_logger

__all__ = ['build_parser', 'main']

log = get_logger('glicense.cli')


def build_parser() -> argparse.ArgumentParser:
    """Return the argument parser for the ``glicense`` command."""
    parser = argparse.ArgumentParser(
        prog='glicense',
        description='Identify open-source licenses from text or repository URLs.',
    )
    parser.add_argument('-v', '--verbose', action='store_true', help='Log every probed URL.')
    parser.add_argument('-q', '--quiet', action='store_true', help='Only log warnings and errors.')
    parser.add_argument('--json-log', action='store_true', help='Emit logs as JSON lines.')
    parser.add_argument('--config', type=Path, default=None, help='Path to a glicense.toml file.')
    parser.add_argument('--data-dir', type=Path, default=None, help='Directory with catalog and license files.')
    parser.add_argument('--timeout', type=float, default=None, help='HTTP timeout in seconds.')

    sub = parser.add_subparsers(dest='command', required=True)

    p_list = sub.add_parser('list', help='List every catalog entry.')
    p_list.add_argument('--json', action='store_true', help='Print JSON.')

    p_search = sub.add_parser('search', help='Find catalog entries by name.')
    p_search.add_argument('name', help='Substring of the license name.')
    p_search.add_argument('--case-sensitive', action='store_true', help='Match letter case exactly.')
    p_search.add_argument('--json', action='store_true', help='Print JSON.')

    p_show = sub.add_parser('show', help='Print the text of a catalog entry.')
    p_show.add_argument('id', help='License or exception identifier.')

    p_detect = sub.add_parser('detect', help='Identify a license from text, a file, stdin, or URLs.')
    p_detect.add_argument('text', nargs='?', default=None, help='License text.')
    p_detect.add_argument('-p', '--path', type=Path, default=None, help='Read the license text from a file.')
    p_detect.add_argument(
        '-u',
        '--url',
        action='append',
        default=[],
        dest='urls',
        help='Repository URL to probe. Repeatable.',
    )
    p_detect.add_argument('--json', action='store_true', help='Print JSON.')

    sub.add_parser('version', help='Print the version.')
    return parser


# ── Rendering ────────────────────────────────────────────────────────


def _info_dict(info: LicenseInfo) -> dict[str, object]:
    return {
        'id': info.id,
        'name': info.name,
        'references': list(info.references),
        'deprecated': info.is_deprecated,
    }


def _print_infos(infos: Sequence[LicenseInfo], console: Console, *, as_json: bool) -> None:
    if as_json:
        print(json.dumps([_info_dict(i) for i in infos], indent=2))  # noqa: T201
        return
    table = Table(show_header=True, header_style='bold', show_edge=False, pad_edge=False)
    table.add_column('ID', style='bold')
    table.add_column('Name')
    table.add_column('Deprecated', justify='center')
    for info in infos:
        table.add_row(info.id, info.name, Text('yes', style='yellow') if info.is_deprecated else '')
    console.print(table)
    console.print(f'\n{len(infos)} license(s).')


# ── Commands ─────────────────────────────────────────────────────────


def _cmd_list(args: argparse.Namespace, cfg: GlicenseConfig, console: Console) -> int:
    _print_infos(Catalog(default_store(cfg.data_dir)).all_info(), console, as_json=args.json)
    return 0


def _cmd_search(args: argparse.Namespace, cfg: GlicenseConfig, console: Console) -> int:
    found: list[License] = Catalog(default_store(cfg.data_dir)).search_by_name(
        args.name, case_sensitive=args.case_sensitive
    )
    _print_infos([lic.info for lic in found], console, as_json=args.json)
    return 0


def _cmd_show(args: argparse.Namespace, cfg: GlicenseConfig, console: Console) -> int:
    catalog = Catalog(default_store(cfg.data_dir))
    for info in catalog.all_info():
        if info.id == args.id:
            sys.stdout.write(catalog.get_by_info(info).content.text)
            return 0
    raise LicenseNotFoundError(LicenseInfo(id=args.id))


def _read_detect_text(args: argparse.Namespace) -> str | None:
    """Text to identify: argument, then ``-p`` file, then piped stdin."""
    if args.text is not None:
        return args.text
    if args.path is not None:
        try:
            return args.path.read_text(encoding='utf-8', errors='replace')
        except OSError as exc:
            raise GlicenseError(f'Cannot read {args.path}: {exc}') from exc
    if args.urls:
        return None
    if not sys.stdin.isatty():
        return sys.stdin.read()
    raise GlicenseError('Nothing to detect: pass TEXT, -p PATH, -u URL, or pipe text on stdin.')


def _cmd_detect(args: argparse.Namespace, cfg: GlicenseConfig, console: Console) -> int:
    text = _read_detect_text(args)
    if text is not None:
        identifier = Identifier(default_store(cfg.data_dir), threshold=cfg.match_threshold)
        result = identifier.identify_with_details(text)
        if args.json:
            print(json.dumps({'name': result.name, 'method': result.method, 'distance': result.distance}))  # noqa: T201
        else:
            print(result.name)  # noqa: T201
        return 0

    rows: list[dict[str, str]] = []
    with Prober(cfg) as prober:
        for res in prober.iter_discover(args.urls):
            if args.json:
                rows.append({'source': res.source, 'license_name': res.license_name, 'license_url': res.matched_url})
            else:
                # Quoted CSV: "source","license name","matched url"
                print(','.join(json.dumps(f) for f in (res.source, res.license_name, res.matched_url)))  # noqa: T201
    if args.json:
        print(json.dumps(rows, indent=2))  # noqa: T201
    return 0


def _cmd_version(args: argparse.Namespace, cfg: GlicenseConfig, console: Console) -> int:
    print(f'glicense {__version__}')  # noqa: T201
    return 0


_COMMANDS = {
    'list': _cmd_list,
    'search': _cmd_search,
    'show': _cmd_show,
    'detect': _cmd_detect,
    'version': _cmd_version,
}


def main(argv: Sequence[str] | None = None) -> int:
    """Run the ``glicense`` command and return its exit status."""
    args = build_parser().parse_args(argv)
    configure_logging(verbose=args.verbose, quiet=args.quiet, json_log=args.json_log)
    err_console = Console(stderr=True)
    try:
        cfg = load_config(args.config, overrides={'data_dir': args.data_dir, 'timeout': args.timeout})
        return _COMMANDS[args.command](args, cfg, Console())
    except GlicenseError as exc:
        log.debug('command_failed', command=args.command, error=str(exc))
        err_console.print(Text(f'error: {exc}', style='bold red'))
        return 1


if __name__ == '__main__':
    sys.exit(main())
