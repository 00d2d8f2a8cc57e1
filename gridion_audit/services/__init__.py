"""Business logic services."""

from .audit_logging import RunAuditLogger, setup_logger
from .checksum import ChecksumCalculator, MD5ChecksumCalculator
from .path_reconciler import ManifestMatch, PathReconciler
from .object_validator import RemoteObjectValidator
from .run_auditor import GridIONRunAuditor

__all__ = [
    # Capabilities
    'ChecksumCalculator',
    'MD5ChecksumCalculator',
    'RunAuditLogger',
    'setup_logger',
    # Manifest reconciliation
    'ManifestMatch',
    'PathReconciler',
    # Core services
    'RemoteObjectValidator',
    'GridIONRunAuditor',
]
