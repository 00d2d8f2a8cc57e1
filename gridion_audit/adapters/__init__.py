"""External interface adapters."""

from .path_lister import find_files, list_directory
from .storage_client import GCSObject, RemoteObject, StorageClient

__all__ = [
    'GCSObject',
    'RemoteObject',
    'StorageClient',
    'find_files',
    'list_directory',
]
