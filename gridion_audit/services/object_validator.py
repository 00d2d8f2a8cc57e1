"""Validation of run files against the remote repository."""

import os

from gridion_audit.adapters import RemoteObject
from gridion_audit.data_access import RemoteRepositoryAccess
from gridion_audit.models import (
    AuditError,
    ChecksumMetadataInvalid,
    ChecksumMismatch,
    InsufficientReplicas,
    ItemResult,
    Manifest,
    ManifestEntryMissing,
    ObjectMissing,
    RunIdentity,
    TagMismatch,
    TagMissing,
)
from gridion_audit.models.value_objects import DEFAULT_NUM_REPLICAS

from .audit_logging import RunAuditLogger
from .checksum import ChecksumCalculator
from .path_reconciler import PathReconciler

EXPERIMENT_NAME = 'experiment_name'
GRIDION_DEVICE_ID = 'device_id'


class RemoteObjectValidator:
    """
    Verifies that run files have been archived in the remote repository.

    Every validate_* method returns an ItemResult rather than raising; a
    failed verification is recorded as a typed failure on the result.
    """

    def __init__(  # pylint: disable=too-many-arguments
        self,
        repository: RemoteRepositoryAccess,
        identity: RunIdentity,
        checksum_calculator: ChecksumCalculator,
        reconciler: PathReconciler,
        num_replicas: int = DEFAULT_NUM_REPLICAS,
        audit_logs: RunAuditLogger | None = None,
    ):
        self.repository = repository
        self.identity = identity
        self.checksum_calculator = checksum_calculator
        self.reconciler = reconciler
        self.num_replicas = num_replicas
        self.audit_logs = audit_logs or RunAuditLogger(identity.name)

    def validate_ancillary_file(self, local_path: str) -> ItemResult:
        """
        Check that a file stored directly in the run collection (configuration,
        sequencing summary or manifest) is present, has the same checksum as
        the local file and has enough valid replicas.
        """
        result = ItemResult(local_path)
        try:
            collection = self.repository.run_collection(self.identity)
            self.audit_logs.debug(f'Checking for {local_path!r} in {collection!r}')

            obj = self.repository.get_run_object(
                self.identity, os.path.basename(local_path)
            )
            result.remote_path = obj.path
            if not obj.exists():
                raise ObjectMissing(f'{local_path!r} missing from {obj.path!r}')

            result.present = True
            self.audit_logs.info(f'{local_path!r} is present at {obj.path!r}')

            self._check_checksum(local_path, obj)
            self._check_replicas(obj)
        except AuditError as e:
            result.add_failure(e)

        return result

    def validate_container_file(self, container_path: str) -> ItemResult:
        """
        Check that a tar file recorded in a manifest is present and carries
        the run's experiment name and device ID tags. Each missing tag is a
        separate failure.
        """
        result = ItemResult(container_path, remote_path=container_path)
        try:
            self.audit_logs.debug(f'Checking for {container_path!r}')
            obj = self.repository.get_object(container_path)
            if not obj.exists():
                raise ObjectMissing(f'{container_path!r} missing at {obj.path!r}')
        except AuditError as e:
            result.add_failure(e)
            return result

        result.present = True
        self.audit_logs.info(f'{container_path!r} is present at {obj.path!r}')

        for key, expected in (
            (EXPERIMENT_NAME, self.identity.experiment_name),
            (GRIDION_DEVICE_ID, self.identity.device_id),
        ):
            try:
                self._check_tag(obj, key, expected)
            except AuditError as e:
                result.add_failure(e)

        return result

    def validate_manifest_membership(
        self, local_path: str, manifests: list[Manifest]
    ) -> ItemResult:
        """Check that a local file is recorded, with its checksum, in a manifest."""
        result = ItemResult(local_path)
        try:
            checksum = self.checksum_calculator.calculate_checksum(local_path)
            match = self.reconciler.find_in_manifests(local_path, checksum, manifests)
            if match is None:
                raise ManifestEntryMissing(
                    f'{self.reconciler.long_item_path(local_path)} with checksum '
                    f'{checksum!r} is missing from the manifests '
                    f'{[m.manifest_path for m in manifests]}'
                )

            result.present = True
            result.remote_path = match.entry.container_path
            self.audit_logs.debug(
                f'{match.item_path} with checksum {checksum!r} is present in '
                f'manifest {match.manifest.manifest_path!r}'
            )
        except AuditError as e:
            result.add_failure(e)

        return result

    def _check_checksum(self, local_path: str, obj: RemoteObject):
        # The repository's own validation and an independent comparison with
        # the local file must both pass
        if not obj.checksum_metadata_valid():
            raise ChecksumMetadataInvalid(
                f'{obj.path!r} has invalid checksum metadata'
            )
        self.audit_logs.info(f'{obj.path!r} has valid checksum metadata')

        obj_checksum = obj.checksum()
        checksum = self.checksum_calculator.calculate_checksum(local_path)
        if obj_checksum != checksum:
            raise ChecksumMismatch(
                f'Checksum {checksum!r} of {local_path!r} does not match '
                f'checksum of {obj.path!r} {obj_checksum!r}'
            )
        self.audit_logs.info(
            f'Checksum {checksum!r} of {local_path!r} matches checksum of {obj.path!r}'
        )

    def _check_replicas(self, obj: RemoteObject):
        num_replicas = obj.valid_replica_count()
        if num_replicas < self.num_replicas:
            raise InsufficientReplicas(
                f'{obj.path!r} has only {num_replicas} valid replicas, '
                f'expected at least {self.num_replicas}'
            )
        self.audit_logs.info(f'{obj.path!r} has {num_replicas} valid replicas')

    def _check_tag(self, obj: RemoteObject, key: str, expected: str):
        values = obj.tags().get(key)
        if not values:
            raise TagMissing(f'{obj.path!r} is missing {key} metadata {expected!r}')
        if expected not in values:
            raise TagMismatch(
                f'{obj.path!r} has {key} metadata {values!r}, expected {expected!r}'
            )
        self.audit_logs.info(f'{obj.path!r} has {key} metadata {expected!r}')
