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

"""Asset stores: named byte blobs backing the catalog and license bodies.

The catalog loader and the content resolver only ever ask for a file
name and get bytes back. Two stores are provided:

- :class:`DirectoryAssetStore` reads files from a directory (the data
  bundled in ``glicense/data`` by default).
- :class:`MemoryAssetStore` serves an in-memory mapping, mostly for
  tests and embedding.
"""

from __future__ import annotations

from collections.abc import Mapping
from pathlib import Path
from typing import Protocol, runtime_checkable

from glicense.errors import AssetMissingError

__all__ = [
    'BUNDLED_DATA_DIR',
    'AssetStore',
    'DirectoryAssetStore',
    'MemoryAssetStore',
    'default_store',
]

BUNDLED_DATA_DIR = Path(__file__).resolve().parent / 'data'


@runtime_checkable
class AssetStore(Protocol):
    """Anything that returns the bytes stored under a file name."""

    def get(self, name: str) -> bytes:
        """Return the bytes of *name*.

        Raises:
            AssetMissingError: If the store has no such file.
        """
        ...


class DirectoryAssetStore:
    """Asset store over the flat contents of one directory."""

    def __init__(self, root: Path | None = None) -> None:
        self.root = root or BUNDLED_DATA_DIR

    def get(self, name: str) -> bytes:
        """Read ``root / name``; names with path separators are rejected."""
        if not name or '/' in name or '\\' in name or name in ('.', '..'):
            raise AssetMissingError(name)
        path = self.root / name
        try:
            return path.read_bytes()
        except (FileNotFoundError, IsADirectoryError, NotADirectoryError) as exc:
            raise AssetMissingError(name) from exc

    def __repr__(self) -> str:
        return f'DirectoryAssetStore({str(self.root)!r})'


class MemoryAssetStore:
    """Asset store over a ``name -> bytes`` mapping."""

    def __init__(self, files: Mapping[str, bytes]) -> None:
        self._files = dict(files)

    def get(self, name: str) -> bytes:
        try:
            return self._files[name]
        except KeyError:
            raise AssetMissingError(name) from None


def default_store(data_dir: Path | None = None) -> DirectoryAssetStore:
    """Return a store over *data_dir*, or over the bundled data when ``None``."""
    return DirectoryAssetStore(data_dir)
