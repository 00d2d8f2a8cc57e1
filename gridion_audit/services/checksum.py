"""Checksum calculation for local files."""

import hashlib
from abc import ABC, abstractmethod

from gridion_audit.models import ChecksumComputeError

READ_BLOCK_SIZE = 1024 * 1024


class ChecksumCalculator(ABC):
    """Abstract base class for checksum strategies."""

    @abstractmethod
    def calculate_checksum(self, path: str) -> str:
        """
        Calculate the checksum of a local file.

        Args:
            path: Local file path

        Returns:
            Digest string

        Raises:
            ChecksumComputeError: if the file cannot be read
        """


class MD5ChecksumCalculator(ChecksumCalculator):
    """Hex md5 of the file content, read in blocks."""

    def __init__(self, block_size: int = READ_BLOCK_SIZE):
        self.block_size = block_size

    def calculate_checksum(self, path: str) -> str:
        md5 = hashlib.md5()
        try:
            with open(path, 'rb') as f:
                for block in iter(lambda: f.read(self.block_size), b''):
                    md5.update(block)
        except OSError as e:
            raise ChecksumComputeError(
                f'Failed to calculate checksum of {path!r}: {e}'
            ) from e

        return md5.hexdigest()
