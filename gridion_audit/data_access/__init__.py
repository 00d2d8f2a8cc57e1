"""Data access repositories."""

from .repository_data_access import RemoteRepositoryAccess
from .run_directory import GridIONRun

__all__ = [
    'RemoteRepositoryAccess',
    'GridIONRun',
]
