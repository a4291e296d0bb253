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

"""License catalog: the SPDX license and exception lists as one mapping.

Two JSON documents are read from the asset store:

- ``licenses.json``: standard licenses, keyed by ``licenseId``.
- ``exceptions.json``: license exceptions, keyed by
  ``licenseExceptionId``.

Both are folded into a single ``{id: LicenseInfo}`` mapping. When an
identifier appears in both lists, the exception entry replaces the
standard one and a ``catalog_id_collision`` warning is logged.

The catalog is re-read on every query; nothing is cached between calls.

Usage::

    from glicense.catalog import Catalog

    catalog = Catalog()
    for lic in catalog.search_by_name('general public license'):
        print(lic.info.id)
"""

from __future__ import annotations

import json
from dataclasses import dataclass, field
from typing import Any, Final

import jsonschema

from glicense._types import License, LicenseInfo
from glicense.assets import AssetStore, default_store
from glicense.content import load_content
from glicense.errors import CatalogParseError, LicenseNotFoundError, UninitializedContainerError
from glicense.logging import get_logger

__all__ = [
    'EXCEPTIONS_FILE',
    'EXCEPTIONS_SCHEMA',
    'LICENSES_FILE',
    'LICENSES_SCHEMA',
    'Catalog',
    'ExceptionList',
    'LicenseException',
    'StandardLicense',
    'StandardLicenseList',
    'load_catalog',
    'load_documents',
    'merge_exceptions',
    'merge_standard_licenses',
]

log = get_logger('glicense.catalog')

# ── Constants ────────────────────────────────────────────────────────

#: Asset holding the standard license list.
LICENSES_FILE: Final[str] = 'licenses.json'

#: Asset holding the license exception list.
EXCEPTIONS_FILE: Final[str] = 'exceptions.json'

# ── Schemas ──────────────────────────────────────────────────────────

_STR: Final[dict[str, Any]] = {'type': 'string'}
_BOOL: Final[dict[str, Any]] = {'type': 'boolean'}

_ENTRY_PROPERTIES: Final[dict[str, Any]] = {
    'reference': _STR,
    'isDeprecatedLicenseId': _BOOL,
    'detailsUrl': _STR,
    'referenceNumber': _STR,
    'name': _STR,
    'seeAlso': {'type': 'array', 'items': _STR},
}

_ENTRY_REQUIRED: Final[list[str]] = list(_ENTRY_PROPERTIES)


def _list_schema(key: str, properties: dict[str, Any], required: list[str]) -> dict[str, Any]:
    return {
        '$schema': 'https://json-schema.org/draft/2020-12/schema',
        'type': 'object',
        'required': ['licenseListVersion', 'releaseDate', key],
        'properties': {
            'licenseListVersion': _STR,
            'releaseDate': _STR,
            key: {
                'type': 'array',
                'items': {
                    'type': 'object',
                    'required': _ENTRY_REQUIRED + required,
                    'properties': {**_ENTRY_PROPERTIES, **properties},
                },
            },
        },
    }


#: JSON Schema of ``licenses.json``. ``isFsfLibre`` is optional.
LICENSES_SCHEMA: Final[dict[str, Any]] = _list_schema(
    'licenses',
    {'licenseId': _STR, 'isOsiApproved': _BOOL, 'isFsfLibre': _BOOL},
    ['licenseId', 'isOsiApproved'],
)

#: JSON Schema of ``exceptions.json``.
EXCEPTIONS_SCHEMA: Final[dict[str, Any]] = _list_schema(
    'exceptions',
    {'licenseExceptionId': _STR},
    ['licenseExceptionId'],
)


def _validate(data: Any, schema: dict[str, Any]) -> None:  # noqa: ANN401
    """Raise :class:`CatalogParseError` listing every schema violation in *data*."""
    validator = jsonschema.Draft202012Validator(schema)
    errors = sorted(validator.iter_errors(data), key=lambda e: [str(p) for p in e.absolute_path])
    if errors:
        raise CatalogParseError([
            f'{".".join(str(p) for p in e.absolute_path) or "(root)"}: {e.message}' for e in errors
        ])


# ── Wire records ─────────────────────────────────────────────────────


@dataclass(frozen=True)
class StandardLicense:
    """One entry of ``licenses.json``."""

    reference: str
    is_deprecated_license_id: bool
    details_url: str
    reference_number: str
    name: str
    license_id: str
    see_also: tuple[str, ...]
    is_osi_approved: bool
    is_fsf_libre: bool | None = None

    @classmethod
    def from_dict(cls, obj: dict[str, Any]) -> StandardLicense:
        """Build from a schema-valid JSON object."""
        return cls(
            reference=obj['reference'],
            is_deprecated_license_id=obj['isDeprecatedLicenseId'],
            details_url=obj['detailsUrl'],
            reference_number=obj['referenceNumber'],
            name=obj['name'],
            license_id=obj['licenseId'],
            see_also=tuple(obj['seeAlso']),
            is_osi_approved=obj['isOsiApproved'],
            is_fsf_libre=obj.get('isFsfLibre'),
        )

    def to_dict(self) -> dict[str, Any]:
        """Return the JSON object this entry was parsed from."""
        out: dict[str, Any] = {
            'reference': self.reference,
            'isDeprecatedLicenseId': self.is_deprecated_license_id,
            'detailsUrl': self.details_url,
            'referenceNumber': self.reference_number,
            'name': self.name,
            'licenseId': self.license_id,
            'seeAlso': list(self.see_also),
            'isOsiApproved': self.is_osi_approved,
        }
        if self.is_fsf_libre is not None:
            out['isFsfLibre'] = self.is_fsf_libre
        return out

    def to_info(self) -> LicenseInfo:
        """Project onto the common :class:`LicenseInfo` shape."""
        return LicenseInfo(
            id=self.license_id,
            name=self.name,
            references=self.see_also,
            is_deprecated=self.is_deprecated_license_id,
        )


@dataclass(frozen=True)
class LicenseException:
    """One entry of ``exceptions.json``."""

    reference: str
    is_deprecated_license_id: bool
    details_url: str
    reference_number: str
    name: str
    see_also: tuple[str, ...]
    license_exception_id: str

    @classmethod
    def from_dict(cls, obj: dict[str, Any]) -> LicenseException:
        """Build from a schema-valid JSON object."""
        return cls(
            reference=obj['reference'],
            is_deprecated_license_id=obj['isDeprecatedLicenseId'],
            details_url=obj['detailsUrl'],
            reference_number=obj['referenceNumber'],
            name=obj['name'],
            see_also=tuple(obj['seeAlso']),
            license_exception_id=obj['licenseExceptionId'],
        )

    def to_dict(self) -> dict[str, Any]:
        """Return the JSON object this entry was parsed from."""
        return {
            'reference': self.reference,
            'isDeprecatedLicenseId': self.is_deprecated_license_id,
            'detailsUrl': self.details_url,
            'referenceNumber': self.reference_number,
            'name': self.name,
            'seeAlso': list(self.see_also),
            'licenseExceptionId': self.license_exception_id,
        }

    def to_info(self) -> LicenseInfo:
        """Project onto the common :class:`LicenseInfo` shape."""
        return LicenseInfo(
            id=self.license_exception_id,
            name=self.name,
            references=self.see_also,
            is_deprecated=self.is_deprecated_license_id,
        )


@dataclass(frozen=True)
class StandardLicenseList:
    """The parsed ``licenses.json`` document."""

    license_list_version: str
    release_date: str
    licenses: tuple[StandardLicense, ...] = field(default_factory=tuple)

    @classmethod
    def from_dict(cls, data: Any) -> StandardLicenseList:  # noqa: ANN401
        """Validate and parse a decoded document.

        Raises:
            CatalogParseError: Listing every schema violation found.
        """
        _validate(data, LICENSES_SCHEMA)
        return cls(
            license_list_version=data['licenseListVersion'],
            release_date=data['releaseDate'],
            licenses=tuple(StandardLicense.from_dict(e) for e in data['licenses']),
        )

    def to_dict(self) -> dict[str, Any]:
        """Return the JSON document this list was parsed from."""
        return {
            'licenseListVersion': self.license_list_version,
            'licenses': [lic.to_dict() for lic in self.licenses],
            'releaseDate': self.release_date,
        }

    def contains(self, info: LicenseInfo) -> bool:
        """Whether some entry projects exactly onto *info*."""
        return any(lic.to_info() == info for lic in self.licenses)


@dataclass(frozen=True)
class ExceptionList:
    """The parsed ``exceptions.json`` document."""

    license_list_version: str
    release_date: str
    exceptions: tuple[LicenseException, ...] = field(default_factory=tuple)

    @classmethod
    def from_dict(cls, data: Any) -> ExceptionList:  # noqa: ANN401
        """Validate and parse a decoded document.

        Raises:
            CatalogParseError: Listing every schema violation found.
        """
        _validate(data, EXCEPTIONS_SCHEMA)
        return cls(
            license_list_version=data['licenseListVersion'],
            release_date=data['releaseDate'],
            exceptions=tuple(LicenseException.from_dict(e) for e in data['exceptions']),
        )

    def to_dict(self) -> dict[str, Any]:
        """Return the JSON document this list was parsed from."""
        return {
            'licenseListVersion': self.license_list_version,
            'releaseDate': self.release_date,
            'exceptions': [exc.to_dict() for exc in self.exceptions],
        }

    def contains(self, info: LicenseInfo) -> bool:
        """Whether some entry projects exactly onto *info*."""
        return any(exc.to_info() == info for exc in self.exceptions)


# ── Loading and merging ──────────────────────────────────────────────


def _read_json(store: AssetStore, name: str) -> Any:  # noqa: ANN401
    raw = store.get(name)
    try:
        return json.loads(raw)
    except (json.JSONDecodeError, UnicodeDecodeError) as exc:
        raise CatalogParseError([f'{name}: invalid JSON: {exc}']) from exc


def load_documents(store: AssetStore | None = None) -> tuple[StandardLicenseList, ExceptionList]:
    """Read and parse both catalog documents.

    Raises:
        AssetMissingError: If either JSON file is absent.
        CatalogParseError: If either document is malformed.
    """
    store = store or default_store()
    licenses = StandardLicenseList.from_dict(_read_json(store, LICENSES_FILE))
    exceptions = ExceptionList.from_dict(_read_json(store, EXCEPTIONS_FILE))
    return licenses, exceptions


def merge_standard_licenses(dest: dict[str, LicenseInfo] | None, doc: StandardLicenseList) -> None:
    """Fold every standard license of *doc* into *dest*, keyed by id."""
    if dest is None:
        raise UninitializedContainerError
    for lic in doc.licenses:
        dest[lic.license_id] = lic.to_info()


def merge_exceptions(dest: dict[str, LicenseInfo] | None, doc: ExceptionList) -> None:
    """Fold every exception of *doc* into *dest*, replacing same-id entries."""
    if dest is None:
        raise UninitializedContainerError
    for exc in doc.exceptions:
        if exc.license_exception_id in dest:
            log.warning('catalog_id_collision', license_id=exc.license_exception_id)
        dest[exc.license_exception_id] = exc.to_info()


def load_catalog(store: AssetStore | None = None) -> dict[str, LicenseInfo]:
    """Return the merged ``{id: LicenseInfo}`` catalog.

    Raises:
        AssetMissingError: If either JSON file is absent.
        CatalogParseError: If either document is malformed.
    """
    licenses, exceptions = load_documents(store)
    catalog: dict[str, LicenseInfo] = {}
    merge_standard_licenses(catalog, licenses)
    merge_exceptions(catalog, exceptions)
    log.debug(
        'catalog_loaded',
        licenses=len(licenses.licenses),
        exceptions=len(exceptions.exceptions),
        total=len(catalog),
    )
    return catalog


# ── Query facade ─────────────────────────────────────────────────────


class Catalog:
    """Queries over the merged catalog of one asset store.

    Every method reloads the catalog from the store. Results are
    ordered by identifier.
    """

    def __init__(self, store: AssetStore | None = None) -> None:
        self.store = store or default_store()

    def all_info(self) -> list[LicenseInfo]:
        """Every catalog entry, sorted by id."""
        catalog = load_catalog(self.store)
        return [catalog[key] for key in sorted(catalog)]

    def all(self) -> list[License]:
        """Every catalog entry joined with its body.

        Raises:
            AssetMissingError: If any single body file is missing.
        """
        return [License(info=info, content=load_content(info, self.store)) for info in self.all_info()]

    def search_by_name(self, name: str, case_sensitive: bool = False) -> list[License]:
        """Entries whose display name contains *name*.

        Args:
            name: Substring to look for. The empty string matches all.
            case_sensitive: Compare exactly instead of lower-cased.

        Returns:
            Matching licenses, sorted by id. Empty when nothing matches.
        """
        if case_sensitive:
            return [lic for lic in self.all() if name in lic.info.name]
        needle = name.lower()
        return [lic for lic in self.all() if needle in lic.info.name.lower()]

    def get_by_info(self, info: LicenseInfo) -> License:
        """Return the license whose catalog entry equals *info* in every field.

        Raises:
            LicenseNotFoundError: If no entry matches exactly, including
                for the empty ``LicenseInfo()``.
        """
        if not info.id or load_catalog(self.store).get(info.id) != info:
            raise LicenseNotFoundError(info)
        return License(info=info, content=load_content(info, self.store))
