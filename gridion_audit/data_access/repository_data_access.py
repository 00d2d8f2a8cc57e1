"""Repository for locating run objects in the remote repository."""

from ..adapters import RemoteObject
from ..models import RunIdentity


class RemoteRepositoryAccess:
    """Layer for accessing the objects of a run in the remote repository."""

    def __init__(self, dest_collection: str, storage):
        """
        Initialize the data access layer.

        Args:
            dest_collection: Root collection under which runs are stored
            storage: Client with a get_object(path) -> RemoteObject method
        """
        self.dest_collection = dest_collection
        self.storage = storage

    def run_collection(self, identity: RunIdentity) -> str:
        """Collection holding the ancillary files of a run."""
        return identity.run_collection(self.dest_collection)

    def get_object(self, path: str) -> RemoteObject:
        """Get the object at a full remote path."""
        return self.storage.get_object(path)

    def get_run_object(self, identity: RunIdentity, filename: str) -> RemoteObject:
        """Get the object for a file stored directly in the run's collection."""
        return self.get_object(f'{self.run_collection(identity)}/{filename}')
