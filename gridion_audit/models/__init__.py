"""Data models for the run audit."""

from .entities import (
    ItemResult,
    Manifest,
    ManifestEntry,
)
from .errors import (
    AuditError,
    ChecksumComputeError,
    ChecksumMetadataInvalid,
    ChecksumMismatch,
    InsufficientReplicas,
    ManifestEntryMissing,
    ManifestParseError,
    NotFoundError,
    ObjectMissing,
    RemoteRepositoryError,
    RunDirectoryError,
    TagError,
    TagMismatch,
    TagMissing,
)
from .value_objects import (
    AuditConfig,
    CheckCounts,
    FileCategory,
    RunIdentity,
)

__all__ = [
    # Entities
    'ItemResult',
    'Manifest',
    'ManifestEntry',
    # Value Objects
    'AuditConfig',
    'CheckCounts',
    'FileCategory',
    'RunIdentity',
    # Errors
    'AuditError',
    'ChecksumComputeError',
    'ChecksumMetadataInvalid',
    'ChecksumMismatch',
    'InsufficientReplicas',
    'ManifestEntryMissing',
    'ManifestParseError',
    'NotFoundError',
    'ObjectMissing',
    'RemoteRepositoryError',
    'RunDirectoryError',
    'TagError',
    'TagMismatch',
    'TagMissing',
]
