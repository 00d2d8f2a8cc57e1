"""
GridION Run Audit

Tools for checking that the output of a GridION run (one flowcell) has been
completely and correctly archived to a remote repository:
- configuration, sequencing summary and manifest files are stored in the run
  collection, with matching checksums and enough valid replicas
- tar files listed in the run's manifests are stored and tagged with the
  run's experiment name and device ID
- every local fast5 and fastq file is recorded, with its checksum, in a
  manifest

Architecture:
- models/: Data models, value objects and errors
- adapters/: External interface adapters (GCS, local directories)
- data_access/: Data access layer
- services/: Business logic
- cli/: Command-line interface

Usage:
    from gridion_audit import GridIONRun, GridIONRunAuditor, RemoteRepositoryAccess, StorageClient

    run = GridIONRun('GXB01', '/data/expt1/GA10000')
    repository = RemoteRepositoryAccess('gs://archive/gridion', StorageClient())
    num_files, num_present, num_errors = GridIONRunAuditor(run, repository).check_all_files()
"""

from .models import (
    # Entities
    ItemResult,
    Manifest,
    ManifestEntry,
    # Value objects
    AuditConfig,
    CheckCounts,
    FileCategory,
    RunIdentity,
    # Errors
    AuditError,
    ManifestParseError,
    RunDirectoryError,
)

from .adapters import RemoteObject, StorageClient

from .data_access import GridIONRun, RemoteRepositoryAccess

from .services import (
    GridIONRunAuditor,
    MD5ChecksumCalculator,
    PathReconciler,
    RemoteObjectValidator,
    RunAuditLogger,
)

from .cli import audit_gridion_run

__version__ = '1.0.0'

__all__ = [
    # Core functions
    'audit_gridion_run',
    'GridIONRunAuditor',
    # Configuration
    'AuditConfig',
    # Run model and repository
    'GridIONRun',
    'RemoteRepositoryAccess',
    'RemoteObject',
    'StorageClient',
    # Services
    'MD5ChecksumCalculator',
    'PathReconciler',
    'RemoteObjectValidator',
    'RunAuditLogger',
    # Models
    'ItemResult',
    'Manifest',
    'ManifestEntry',
    'CheckCounts',
    'FileCategory',
    'RunIdentity',
    # Errors
    'AuditError',
    'ManifestParseError',
    'RunDirectoryError',
]
