"""Core entities for the run audit."""

import csv
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Mapping

from .errors import AuditError, ManifestParseError, NotFoundError

MANIFEST_DELIMITER = '\t'
MANIFEST_FIELDS = ('container_path', 'logical_path', 'checksum')


@dataclass(frozen=True)
class ManifestEntry:
    """An item written into a container (tar) file, as recorded at archive time."""

    logical_path: str
    checksum: str
    container_path: str
    position: int = 0


class Manifest:
    """
    Index of the items written into a set of container files.

    A Manifest is constructed empty and populated once by load(); it is
    read-only afterwards. Lookup is by exact logical path.
    """

    def __init__(self, manifest_path: str):
        self.manifest_path = manifest_path
        self._entries: dict[str, ManifestEntry] = {}
        self._loaded = False

    @classmethod
    def from_file(cls, manifest_path: str) -> 'Manifest':
        """Create a manifest and load it from its file."""
        manifest = cls(manifest_path)
        manifest.load()
        return manifest

    def load(self) -> 'Manifest':
        """
        Parse the manifest file. Each record is a tab-separated
        container path, logical path and checksum.

        Raises:
            ManifestParseError: if the file is missing, unreadable or malformed
        """
        if self._loaded:
            return self

        entries: dict[str, ManifestEntry] = {}
        try:
            with open(self.manifest_path, encoding='utf-8', newline='') as f:
                reader = csv.reader(
                    f, delimiter=MANIFEST_DELIMITER, quoting=csv.QUOTE_NONE
                )
                for row in reader:
                    if not row or row[0].startswith('#'):
                        continue
                    entry = self._parse_row(row, len(entries), reader.line_num)
                    if entry.logical_path in entries:
                        raise ManifestParseError(
                            f'Duplicate item {entry.logical_path!r} at line '
                            f'{reader.line_num} of manifest {self.manifest_path!r}'
                        )
                    entries[entry.logical_path] = entry
        except (OSError, UnicodeDecodeError, csv.Error) as e:
            raise ManifestParseError(
                f'Failed to read manifest {self.manifest_path!r}: {e}'
            ) from e

        self._entries = entries
        self._loaded = True
        return self

    def _parse_row(self, row: list[str], position: int, line_num: int) -> ManifestEntry:
        if len(row) != len(MANIFEST_FIELDS) or not all(v.strip() for v in row):
            raise ManifestParseError(
                f'Malformed record at line {line_num} of manifest '
                f'{self.manifest_path!r}: expected {len(MANIFEST_FIELDS)} '
                f'non-empty fields {MANIFEST_FIELDS}, got {row!r}'
            )
        container_path, logical_path, checksum = (v.strip() for v in row)
        return ManifestEntry(
            logical_path=logical_path,
            checksum=checksum,
            container_path=container_path,
            position=position,
        )

    @property
    def entries(self) -> Mapping[str, ManifestEntry]:
        """Read-only view of the entries, keyed by logical path."""
        return MappingProxyType(self._entries)

    def contains_item(self, logical_path: str) -> bool:
        """Check whether an item was recorded under this logical path."""
        return logical_path in self._entries

    def get_item(self, logical_path: str) -> ManifestEntry:
        """
        Get the entry for a logical path.

        Raises:
            NotFoundError: if the manifest has no such item
        """
        try:
            return self._entries[logical_path]
        except KeyError as e:
            raise NotFoundError(
                f'Item {logical_path!r} not found in manifest {self.manifest_path!r}'
            ) from e

    def container_paths(self) -> list[str]:
        """Unique container paths, in the order first seen in the manifest."""
        return list(dict.fromkeys(e.container_path for e in self._entries.values()))

    def __len__(self) -> int:
        return len(self._entries)

    def __repr__(self) -> str:
        return f'Manifest({self.manifest_path!r}, {len(self)} items)'


@dataclass
class ItemResult:
    """Result of verifying one local file or one remote object."""

    local_path: str
    remote_path: str | None = None
    present: bool = False
    failures: list[AuditError] = field(default_factory=list)

    @property
    def ok(self) -> bool:
        """True if the item was verified without any failure."""
        return not self.failures

    def add_failure(self, failure: AuditError):
        """Record a failed verification of this item."""
        self.failures.append(failure)
