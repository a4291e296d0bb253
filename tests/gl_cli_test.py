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

"""Tests for glicense.cli."""

from __future__ import annotations

import io
import json
import shutil
from pathlib import Path

import httpx
import pytest
from glicense import __version__, cli
from glicense.assets import BUNDLED_DATA_DIR
from glicense.cli import build_parser, main
from glicense.config import GlicenseConfig
from glicense.discovery import Prober

_MIT = (BUNDLED_DATA_DIR / 'MIT.txt').read_text(encoding='utf-8')


class _Tty(io.StringIO):
    def isatty(self) -> bool:
        return True


@pytest.fixture(autouse=True)
def _isolated_config(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    """Run every command away from any real glicense.toml or token."""
    monkeypatch.chdir(tmp_path)
    for name in ('GLICENSE_DATA_DIR', 'GLICENSE_TIMEOUT', 'GLICENSE_MATCH_THRESHOLD'):
        monkeypatch.delenv(name, raising=False)


class TestParser:
    """Tests for build_parser()."""

    def test_command_required(self) -> None:
        """Test command required."""
        with pytest.raises(SystemExit):
            build_parser().parse_args([])

    def test_global_flags(self) -> None:
        """Test global flags."""
        args = build_parser().parse_args(['-v', '--timeout', '3', '--data-dir', 'd', 'list'])
        assert args.verbose is True
        assert args.timeout == 3.0
        assert args.data_dir == Path('d')
        assert args.command == 'list'

    def test_detect_repeatable_url(self) -> None:
        """Test detect repeatable url."""
        args = build_parser().parse_args(['detect', '-u', 'a', '--url', 'b'])
        assert args.urls == ['a', 'b']
        assert args.text is None


class TestVersion:
    """Tests for the version command."""

    def test_version(self, capsys: pytest.CaptureFixture[str]) -> None:
        """Test version."""
        assert main(['version']) == 0
        assert capsys.readouterr().out == f'glicense {__version__}\n'


class TestCatalogCommands:
    """Tests for list, search and show."""

    def test_list_json(self, capsys: pytest.CaptureFixture[str]) -> None:
        """Test list json."""
        assert main(['list', '--json']) == 0
        entries = json.loads(capsys.readouterr().out)
        assert len(entries) == 24
        assert entries[0] == {
            'id': '0BSD',
            'name': 'BSD Zero Clause License',
            'references': ['http://landley.net/toybox/license.html'],
            'deprecated': False,
        }

    def test_list_table(self, capsys: pytest.CaptureFixture[str]) -> None:
        """Test list table."""
        assert main(['list']) == 0
        out = capsys.readouterr().out
        assert '0BSD' in out
        assert '24 license(s).' in out

    def test_search_json(self, capsys: pytest.CaptureFixture[str]) -> None:
        """Test search json."""
        assert main(['search', 'exception', '--json']) == 0
        assert len(json.loads(capsys.readouterr().out)) == 5

    def test_search_case_sensitive(self, capsys: pytest.CaptureFixture[str]) -> None:
        """Test search case sensitive."""
        assert main(['search', 'Exception', '--case-sensitive', '--json']) == 0
        ids = {e['id'] for e in json.loads(capsys.readouterr().out)}
        assert ids == {'LLVM-exception', 'Libtool-exception'}

    def test_show(self, capsys: pytest.CaptureFixture[str]) -> None:
        """Test show."""
        assert main(['show', '0BSD']) == 0
        assert capsys.readouterr().out == (BUNDLED_DATA_DIR / '0BSD.txt').read_text(encoding='utf-8')

    def test_show_unknown(self, capsys: pytest.CaptureFixture[str]) -> None:
        """Test show unknown."""
        assert main(['show', 'No-Such-License']) == 1
        captured = capsys.readouterr()
        assert captured.out == ''
        assert 'error:' in captured.err

    def test_bad_data_dir(self, tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
        """Test bad data dir."""
        assert main(['--data-dir', str(tmp_path), 'list']) == 1
        assert 'error:' in capsys.readouterr().err

    def test_missing_config(self, tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
        """Test missing config."""
        assert main(['--config', str(tmp_path / 'nope.toml'), 'version']) == 1
        assert 'error:' in capsys.readouterr().err


class TestDetect:
    """Tests for the detect command."""

    def test_text(self, capsys: pytest.CaptureFixture[str]) -> None:
        """Test text."""
        assert main(['detect', _MIT]) == 0
        assert capsys.readouterr().out == 'MIT license\n'

    def test_text_json(self, capsys: pytest.CaptureFixture[str]) -> None:
        """Test text json."""
        assert main(['detect', 'nothing to see', '--json']) == 0
        result = json.loads(capsys.readouterr().out)
        assert result['name'] == ''
        assert result['method'] == 'none'

    def test_path(self, tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
        """Test path."""
        path = tmp_path / 'LICENSE'
        path.write_bytes((BUNDLED_DATA_DIR / 'ISC.txt').read_bytes())
        assert main(['detect', '-p', str(path)]) == 0
        assert capsys.readouterr().out == 'ISC License\n'

    def test_data_dir_templates(self, tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
        """--data-dir also supplies the identification templates."""
        data_dir = tmp_path / 'data'
        shutil.copytree(BUNDLED_DATA_DIR, data_dir)
        custom = 'Zebra Public Terms: anyone may use this work for any purpose.'
        (data_dir / 'ISC.txt').write_text(custom, encoding='utf-8')
        assert main(['--data-dir', str(data_dir), 'detect', custom]) == 0
        assert capsys.readouterr().out == 'ISC License\n'

    def test_text_beats_path(self, tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
        """Test text beats path."""
        assert main(['detect', 'Copyright 2020 X', '-p', str(tmp_path / 'missing')]) == 0
        assert capsys.readouterr().out == 'Copyright 2020 X\n'

    def test_missing_path(self, tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
        """Test missing path."""
        assert main(['detect', '-p', str(tmp_path / 'missing')]) == 1
        assert 'error:' in capsys.readouterr().err

    def test_stdin(self, monkeypatch: pytest.MonkeyPatch, capsys: pytest.CaptureFixture[str]) -> None:
        """Test stdin."""
        monkeypatch.setattr('sys.stdin', io.StringIO(_MIT))
        assert main(['detect']) == 0
        assert capsys.readouterr().out == 'MIT license\n'

    def test_nothing_to_detect(self, monkeypatch: pytest.MonkeyPatch, capsys: pytest.CaptureFixture[str]) -> None:
        """Test nothing to detect."""
        monkeypatch.setattr('sys.stdin', _Tty())
        assert main(['detect']) == 1
        assert 'Nothing to detect' in capsys.readouterr().err

    def _patch_prober(self, monkeypatch: pytest.MonkeyPatch, pages: dict[str, str]) -> None:
        def handler(request: httpx.Request) -> httpx.Response:
            body = pages.get(str(request.url))
            return httpx.Response(404) if body is None else httpx.Response(200, text=body)

        client = httpx.Client(transport=httpx.MockTransport(handler))
        monkeypatch.setattr(cli, 'Prober', lambda cfg: Prober(cfg, client=client))

    def test_urls(self, monkeypatch: pytest.MonkeyPatch, capsys: pytest.CaptureFixture[str]) -> None:
        """Test urls."""
        matched = 'https://raw.githubusercontent.com/org/repo/master/LICENSE'
        self._patch_prober(monkeypatch, {matched: _MIT})
        assert main(['detect', '-u', 'https://github.com/org/repo', '-u', 'https://example.com/x']) == 0
        lines = capsys.readouterr().out.splitlines()
        assert lines == [
            f'"org/repo","MIT license","{matched}"',
            '"https://example.com/x","FAIL TO CHECK",""',
        ]

    def test_urls_json(self, monkeypatch: pytest.MonkeyPatch, capsys: pytest.CaptureFixture[str]) -> None:
        """Test urls json."""
        self._patch_prober(monkeypatch, {})
        assert main(['detect', '-u', 'https://example.com/x', '--json']) == 0
        assert json.loads(capsys.readouterr().out) == [
            {'source': 'https://example.com/x', 'license_name': 'FAIL TO CHECK', 'license_url': ''},
        ]

    def test_threshold_from_env(self, monkeypatch: pytest.MonkeyPatch, capsys: pytest.CaptureFixture[str]) -> None:
        """Test threshold from env."""
        monkeypatch.setenv('GLICENSE_MATCH_THRESHOLD', '0')
        text = (BUNDLED_DATA_DIR / 'BSD-2-Clause.txt').read_text(encoding='utf-8')
        assert main(['detect', text]) == 0
        assert capsys.readouterr().out == 'Copyright (c) <year> <owner>\n'


def test_default_config_used_for_prober(monkeypatch: pytest.MonkeyPatch, capsys: pytest.CaptureFixture[str]) -> None:
    """The --timeout flag reaches the prober config."""
    seen: list[GlicenseConfig] = []

    class _Recorder:
        def __init__(self, cfg: GlicenseConfig) -> None:
            seen.append(cfg)

        def __enter__(self) -> _Recorder:
            return self

        def __exit__(self, *exc: object) -> None:
            return None

        def iter_discover(self, urls: list[str]) -> list:
            return []

    monkeypatch.setattr(cli, 'Prober', _Recorder)
    assert main(['--timeout', '2.5', 'detect', '-u', 'https://example.com']) == 0
    assert seen[0].timeout == 2.5
