"""Error taxonomy for the run audit.

``AuditError`` and its subclasses are item failures: they are caught at the
item boundary, logged and counted. ``ManifestParseError`` and
``RunDirectoryError`` are fatal to the audit and are propagated.
"""


class AuditError(Exception):
    """A single file or object failed verification"""


class ObjectMissing(AuditError):
    """Expected object is not present in the remote repository"""


class ChecksumMetadataInvalid(AuditError):
    """Remote repository reports its stored checksum metadata as invalid"""


class ChecksumMismatch(AuditError):
    """Local checksum differs from the checksum held by the remote repository"""


class InsufficientReplicas(AuditError):
    """Object has fewer valid replicas than required"""


class ManifestEntryMissing(AuditError):
    """Local file is not recorded, with a matching checksum, in any manifest"""


class TagError(AuditError):
    """Object is missing a required descriptive tag"""


class TagMissing(TagError):
    """Object has no value for a required tag key"""


class TagMismatch(TagError):
    """Object has the required tag key, but not with the expected value"""


class ChecksumComputeError(AuditError):
    """Local file could not be read to compute its checksum"""


class RemoteRepositoryError(AuditError):
    """Remote repository query failed for a single object"""


class NotFoundError(Exception):
    """Custom error when you can't find something in a manifest"""


class ManifestParseError(Exception):
    """Manifest file is missing, unreadable or malformed"""


class RunDirectoryError(Exception):
    """Run source directory is missing or is not a directory"""
