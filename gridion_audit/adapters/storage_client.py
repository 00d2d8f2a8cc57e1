"""Remote repository adapters: the object capability and its GCS implementation."""

import base64
import binascii
from abc import ABC, abstractmethod

import requests
from google.api_core.exceptions import GoogleAPIError
from google.auth.exceptions import GoogleAuthError
from google.cloud import storage

from gridion_audit.models import RemoteRepositoryError

GCS_PREFIX = 'gs://'

# Custom metadata key under which the uploader records the object's md5
CHECKSUM_METADATA_KEY = 'md5'

# Copies kept by GCS for buckets with no explicit data locations
LOCATION_TYPE_REPLICAS = {
    'multi-region': 2,
    'dual-region': 2,
    'region': 1,
}

# Failures talking to GCS, including credential refresh and unretried transport errors
GCS_ERRORS = (GoogleAPIError, GoogleAuthError, requests.exceptions.RequestException)


class RemoteObject(ABC):
    """The view of a stored object that the audit needs."""

    @property
    @abstractmethod
    def path(self) -> str:
        """Full remote path of the object."""

    @abstractmethod
    def exists(self) -> bool:
        """Check whether the object is present."""

    @abstractmethod
    def checksum(self) -> str | None:
        """The checksum the repository holds for the object's content."""

    @abstractmethod
    def checksum_metadata_valid(self) -> bool:
        """Check the object's checksum metadata agrees with its checksum."""

    @abstractmethod
    def valid_replica_count(self) -> int:
        """Number of replicas the repository considers valid."""

    @abstractmethod
    def tags(self) -> dict[str, list[str]]:
        """Descriptive tags of the object, each key mapped to its values."""

    def __str__(self) -> str:
        return self.path


class GCSObject(RemoteObject):
    """A Google Cloud Storage blob seen as a remote repository object."""

    def __init__(self, blob: storage.Blob):
        self._blob = blob
        self._exists: bool | None = None

    @property
    def path(self) -> str:
        return f'{GCS_PREFIX}{self._blob.bucket.name}/{self._blob.name}'

    def exists(self) -> bool:
        if self._exists is None:
            try:
                self._exists = self._blob.exists()
                if self._exists:
                    # Blob metadata is only populated after a reload
                    self._blob.reload()
            except GCS_ERRORS as e:
                raise RemoteRepositoryError(
                    f'Failed to query {self.path!r} in GCS: {e}'
                ) from e
        return self._exists

    def checksum(self) -> str | None:
        if not self.exists() or not self._blob.md5_hash:
            # Composite objects have no md5
            return None
        try:
            return base64.b64decode(self._blob.md5_hash).hex()
        except binascii.Error as e:
            raise RemoteRepositoryError(
                f'{self.path!r} has an undecodable md5 {self._blob.md5_hash!r}'
            ) from e

    def checksum_metadata_valid(self) -> bool:
        checksum = self.checksum()
        if not checksum:
            return False
        metadata = self._blob.metadata or {}
        return metadata.get(CHECKSUM_METADATA_KEY, '').lower() == checksum

    def valid_replica_count(self) -> int:
        if not self.exists():
            return 0
        bucket = self._blob.bucket
        if bucket.data_locations:
            return len(bucket.data_locations)
        return LOCATION_TYPE_REPLICAS.get(bucket.location_type, 1)

    def tags(self) -> dict[str, list[str]]:
        if not self.exists():
            return {}
        metadata = self._blob.metadata or {}
        return {key: [value] for key, value in metadata.items()}


class StorageClient:
    """Adapter for Google Cloud Storage lookups."""

    def __init__(self, project: str | None = None):
        """
        Initialize the storage client.

        Args:
            project: GCP project ID
        """
        self.client = storage.Client(project=project)
        self.project = project
        self.bucket_refs: dict[str, storage.Bucket] = {}

    def get_bucket(self, bucket_name: str) -> storage.Bucket:
        """Get cached bucket by name"""
        if bucket_name not in self.bucket_refs:
            try:
                self.bucket_refs[bucket_name] = self.client.get_bucket(bucket_name)
            except GCS_ERRORS as e:
                raise RemoteRepositoryError(
                    f'Failed to get bucket {bucket_name!r}: {e}'
                ) from e
        return self.bucket_refs[bucket_name]

    def get_object(self, path: str) -> GCSObject:
        """
        Get the object at a fully qualified GCS path.

        Args:
            path: gs://<bucket>/<blob name>
        """
        if not path.startswith(GCS_PREFIX):
            raise RemoteRepositoryError(f'Expected a GCS path, got: {path!r}')

        bucket_name, _, blob_name = path.removeprefix(GCS_PREFIX).partition('/')
        if not bucket_name or not blob_name:
            raise RemoteRepositoryError(
                f'Expected a GCS object path, got: {path!r}'
            )

        return GCSObject(self.get_bucket(bucket_name).blob(blob_name))
