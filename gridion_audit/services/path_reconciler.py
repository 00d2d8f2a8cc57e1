"""Mapping of local run files to the items recorded in tar manifests."""

import os
from dataclasses import dataclass

from gridion_audit.models import (
    Manifest,
    ManifestEntry,
    NotFoundError,
    RunIdentity,
)
from gridion_audit.models.value_objects import DEFAULT_COMPRESSED_SUFFIX


@dataclass(frozen=True)
class ManifestMatch:
    """A local file found in a manifest."""

    manifest: Manifest
    entry: ManifestEntry
    item_path: str


class PathReconciler:
    """
    Computes the logical paths under which a local file may have been
    recorded in a manifest.

    In earlier runs, tar files were created relative to the device directory
    containing the run output, i.e. the directory containing the
    sequencing_summary_*.txt and fastq files (the short form). In later runs
    they were created relative to the parent of the experiment directory, two
    levels up, so that the experiment name and device ID are captured in the
    path of the tarred files (the long form). Items may also have been
    compressed before they were tarred, in which case the recorded path has
    the compressed suffix.
    """

    def __init__(
        self,
        source_dir: str,
        identity: RunIdentity,
        compressed_suffix: str = DEFAULT_COMPRESSED_SUFFIX,
    ):
        self.source_dir = source_dir
        self.identity = identity
        self.compressed_suffix = compressed_suffix

    def short_item_path(self, local_path: str) -> str:
        """Path relative to the device directory."""
        return os.path.relpath(local_path, self.source_dir)

    def long_item_path(self, local_path: str) -> str:
        """Path relative to the parent of the experiment directory."""
        return '/'.join(
            [
                self.identity.experiment_name,
                self.identity.device_id,
                self.short_item_path(local_path),
            ]
        )

    def candidate_paths(self, local_path: str) -> list[str]:
        """
        Logical paths to probe, in order: long form compressed, long form,
        short form compressed, short form.
        """
        candidates = []
        for item_path in (
            self.long_item_path(local_path),
            self.short_item_path(local_path),
        ):
            candidates.append(f'{item_path}{self.compressed_suffix}')
            candidates.append(item_path)
        return candidates

    def find_in_manifests(
        self,
        local_path: str,
        checksum: str,
        manifests: list[Manifest],
    ) -> ManifestMatch | None:
        """
        Find the first manifest item for a local file with a matching checksum.

        Manifests are searched in the order given and, within each manifest,
        candidate paths in the order of candidate_paths(). The first match is
        accepted. This is a tie-break by iteration order only: if the same
        content is recorded in more than one manifest, which one is reported
        depends on manifest order.
        """
        candidates = self.candidate_paths(local_path)
        for manifest in manifests:
            for item_path in candidates:
                try:
                    entry = manifest.get_item(item_path)
                except NotFoundError:
                    continue

                if entry.checksum == checksum:
                    return ManifestMatch(manifest, entry, item_path)
        return None
