"""Audit of a single GridION run against the remote repository."""

import os
from typing import Callable, Iterable

from gridion_audit.data_access import GridIONRun, RemoteRepositoryAccess
from gridion_audit.models import (
    CheckCounts,
    FileCategory,
    ItemResult,
    Manifest,
    RunDirectoryError,
    RunIdentity,
)
from gridion_audit.models.value_objects import (
    DEFAULT_COMPRESSED_SUFFIX,
    DEFAULT_INFO_COUNT_INTERVAL,
    DEFAULT_NUM_REPLICAS,
)

from .audit_logging import RunAuditLogger
from .checksum import ChecksumCalculator, MD5ChecksumCalculator
from .object_validator import RemoteObjectValidator
from .path_reconciler import PathReconciler


class GridIONRunAuditor:
    """
    Checks that the files of a single GridION run (the results of a single
    flowcell) are in the remote repository, by comparing the contents of the
    local run directory with the collection into which the data were
    published.

    The following are checked:
     - Local configuration.cfg files are in the repository.
     - Local sequencing_summary_n.txt files are in the repository.
     - Local tar manifest files are in the repository.
     - Tar files described in tar manifests are in the repository.
     - Local fast5 and fastq files are mapped to tar files by a tar manifest.

    A failure of any single file is logged and counted; it never stops the
    audit. A manifest that cannot be read stops it.
    """

    def __init__(  # pylint: disable=too-many-arguments
        self,
        gridion_run: GridIONRun,
        repository: RemoteRepositoryAccess,
        checksum_calculator: ChecksumCalculator | None = None,
        audit_logs: RunAuditLogger | None = None,
        num_replicas: int = DEFAULT_NUM_REPLICAS,
        info_count_interval: int = DEFAULT_INFO_COUNT_INTERVAL,
        compressed_suffix: str = DEFAULT_COMPRESSED_SUFFIX,
    ):
        source_dir = gridion_run.source_dir
        if not os.path.exists(source_dir):
            raise RunDirectoryError(f'Data directory {source_dir!r} does not exist')
        if not os.path.isdir(source_dir):
            raise RunDirectoryError(
                f'Data directory {source_dir!r} is not a directory'
            )

        self.gridion_run = gridion_run
        self.repository = repository
        self.identity = RunIdentity.from_source_dir(
            gridion_run.gridion_name, source_dir
        )
        self.audit_logs = audit_logs or RunAuditLogger(self.identity.name)
        self.checksum_calculator = checksum_calculator or MD5ChecksumCalculator()
        self.info_count_interval = info_count_interval

        self.reconciler = PathReconciler(
            source_dir, self.identity, compressed_suffix=compressed_suffix
        )
        self.validator = RemoteObjectValidator(
            repository,
            self.identity,
            self.checksum_calculator,
            self.reconciler,
            num_replicas=num_replicas,
            audit_logs=self.audit_logs,
        )

        self._f5_manifests: list[Manifest] | None = None
        self._fq_manifests: list[Manifest] | None = None

        self.audit_logs.debug(
            f'Using experiment name {self.experiment_name!r} and '
            f'device ID {self.device_id!r}'
        )

    # Run accessors #
    @property
    def gridion_name(self) -> str:
        """Name of the GridION instrument."""
        return self.identity.gridion_name

    @property
    def experiment_name(self) -> str:
        """Experiment name, from the run's source directory."""
        return self.identity.experiment_name

    @property
    def device_id(self) -> str:
        """Device ID, from the run's source directory."""
        return self.identity.device_id

    @property
    def source_dir(self) -> str:
        """The run's device directory."""
        return self.gridion_run.source_dir

    @property
    def output_dir(self) -> str | None:
        """The directory holding the run's tar manifests."""
        return self.gridion_run.output_dir

    @property
    def num_replicas(self) -> int:
        """Minimum number of valid replicas expected for an ancillary file."""
        return self.validator.num_replicas

    def run_collection(self) -> str:
        """The remote collection holding the run's ancillary files."""
        return self.repository.run_collection(self.identity)

    # Manifests #
    def read_manifest(self, manifest_path: str) -> Manifest:
        """Load a tar manifest."""
        manifest = Manifest.from_file(manifest_path)
        self.audit_logs.debug(f'Read {len(manifest)} items from {manifest_path!r}')
        return manifest

    @property
    def f5_manifests(self) -> list[Manifest]:
        """The manifests describing fast5 tar files, loaded once."""
        if self._f5_manifests is None:
            self._f5_manifests = [
                self.read_manifest(p) for p in self.gridion_run.list_f5_manifest_files()
            ]
        return self._f5_manifests

    @property
    def fq_manifests(self) -> list[Manifest]:
        """The manifests describing fastq tar files, loaded once."""
        if self._fq_manifests is None:
            self._fq_manifests = [
                self.read_manifest(p) for p in self.gridion_run.list_fq_manifest_files()
            ]
        return self._fq_manifests

    # Checks #
    def check_all_files(self) -> CheckCounts:
        """
        Check the run directory against the run data stored in the remote
        repository.

        Returns:
            Total (num_files, num_present, num_errors) over all checks
        """
        total = CheckCounts()
        for category, check in (
            (FileCategory.SEQ_CFG, self.check_seq_cfg_files),
            (FileCategory.SEQ_SUMMARY, self.check_seq_summary_files),
            (FileCategory.MANIFEST, self.check_manifest_files),
            (FileCategory.F5_TAR, self.check_f5_tar_files),
            (FileCategory.FQ_TAR, self.check_fq_tar_files),
            (FileCategory.F5, self.check_f5_files),
            (FileCategory.FQ, self.check_fq_files),
        ):
            counts = check()
            self.audit_logs.log_counts(f'{category.value} files', counts)
            total += counts

        return total

    def check_seq_cfg_files(self) -> CheckCounts:
        """Check the configuration files."""
        return self._check_ancillary_files(self.gridion_run.list_seq_cfg_files())

    def check_seq_summary_files(self) -> CheckCounts:
        """Check the sequencing summary files."""
        return self._check_ancillary_files(self.gridion_run.list_seq_summary_files())

    def check_manifest_files(self) -> CheckCounts:
        """Check the tar manifest files."""
        return self._check_ancillary_files(self.gridion_run.list_manifest_files())

    def check_f5_tar_files(self) -> CheckCounts:
        """Check the tar files holding fast5 files."""
        return self._check_tar_files(self.f5_manifests)

    def check_fq_tar_files(self) -> CheckCounts:
        """Check the tar files holding fastq files."""
        return self._check_tar_files(self.fq_manifests)

    def check_f5_files(self) -> CheckCounts:
        """Check every local fast5 file is recorded in a fast5 manifest."""
        return self._check_manifest_entries(
            self.f5_manifests, self.gridion_run.list_f5_files()
        )

    def check_fq_files(self) -> CheckCounts:
        """Check every local fastq file is recorded in a fastq manifest."""
        return self._check_manifest_entries(
            self.fq_manifests, self.gridion_run.list_fq_files()
        )

    def _check_ancillary_files(self, local_paths: list[str]) -> CheckCounts:
        return self._tally(local_paths, self.validator.validate_ancillary_file)

    def _check_tar_files(self, manifests: list[Manifest]) -> CheckCounts:
        total = CheckCounts()
        for manifest in manifests:
            counts = self._tally(
                manifest.container_paths(), self.validator.validate_container_file
            )
            num_files, num_present, num_errors = counts
            self.audit_logs.info(
                f'Checked [ {num_present} / {num_files} ] files with {num_errors} errors'
            )
            total += counts

        return total

    def _check_manifest_entries(
        self, manifests: list[Manifest], local_paths: list[str]
    ) -> CheckCounts:
        self.audit_logs.debug(
            f'Checking content of manifests {[m.manifest_path for m in manifests]}'
        )
        num_files = len(local_paths)
        if local_paths and not manifests:
            self.audit_logs.warning(
                f'No manifests in {self.gridion_run.manifest_dir!r} '
                f'for {num_files} local files'
            )

        def log_progress(i: int):
            if i % self.info_count_interval == 0:
                self.audit_logs.info(f'Checked [ {i} / {num_files} ] manifest entries')

        counts = self._tally(
            local_paths,
            lambda p: self.validator.validate_manifest_membership(p, manifests),
            on_item=log_progress,
        )
        self.audit_logs.info(f'Checked [ {num_files} / {num_files} ] manifest entries')

        return counts

    def _tally(
        self,
        items: Iterable[str],
        validate: Callable[[str], ItemResult],
        on_item: Callable[[int], None] | None = None,
    ) -> CheckCounts:
        """Validate each item in turn, logging its failures and counting it."""
        num_files, num_present, num_errors = 0, 0, 0
        for item in items:
            result = validate(item)
            num_files += 1
            if result.present:
                num_present += 1
            for failure in result.failures:
                self.audit_logs.error(str(failure))
                num_errors += 1

            if on_item:
                on_item(num_files)

        return CheckCounts(num_files, num_present, num_errors)
