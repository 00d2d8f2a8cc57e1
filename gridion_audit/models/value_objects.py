"""Value objects for the run audit - immutable data structures."""

import os
from dataclasses import astuple, dataclass
from enum import Enum

from cpg_utils.config import config_retrieve

DEFAULT_NUM_REPLICAS = 2
DEFAULT_INFO_COUNT_INTERVAL = 10_000
DEFAULT_COMPRESSED_SUFFIX = '.bz2'


class FileCategory(Enum):
    """Categories of run file, in the order they are audited."""

    SEQ_CFG = 'configuration'
    SEQ_SUMMARY = 'sequencing summary'
    MANIFEST = 'manifest'
    F5_TAR = 'fast5 tar'
    FQ_TAR = 'fastq tar'
    F5 = 'fast5'
    FQ = 'fastq'


@dataclass(frozen=True)
class RunIdentity:
    """Identity of a single GridION run (one flowcell)."""

    gridion_name: str
    experiment_name: str
    device_id: str

    @classmethod
    def from_source_dir(cls, gridion_name: str, source_dir: str) -> 'RunIdentity':
        """
        The device ID and experiment name are the last two segments of the
        run's source directory, i.e. <experiment_name>/<device_id>
        """
        parts = [part for part in str(source_dir).split(os.sep) if part]
        if len(parts) < 2:
            raise ValueError(
                f'Cannot derive experiment name and device ID from {source_dir!r}'
            )

        device_id, experiment_name = parts[-1], parts[-2]
        return cls(
            gridion_name=gridion_name,
            experiment_name=experiment_name,
            device_id=device_id,
        )

    @property
    def name(self) -> str:
        """Short name of the run, used in log records."""
        return f'{self.experiment_name}/{self.device_id}'

    def run_collection(self, dest_collection: str) -> str:
        """The remote collection holding this run's ancillary files."""
        return '/'.join(
            [
                dest_collection.rstrip('/'),
                self.gridion_name,
                self.experiment_name,
                self.device_id,
            ]
        )


@dataclass(frozen=True)
class CheckCounts:
    """Counts returned by a check; unpacks as (num_files, num_present, num_errors)."""

    num_files: int = 0
    num_present: int = 0
    num_errors: int = 0

    def __add__(self, other: 'CheckCounts') -> 'CheckCounts':
        return CheckCounts(
            self.num_files + other.num_files,
            self.num_present + other.num_present,
            self.num_errors + other.num_errors,
        )

    def __iter__(self):
        return iter(astuple(self))


@dataclass(frozen=True)
class AuditConfig:  # pylint: disable=too-many-instance-attributes
    """Immutable configuration for a run audit."""

    gridion_name: str
    source_dir: str
    dest_collection: str
    output_dir: str | None = None
    num_replicas: int = DEFAULT_NUM_REPLICAS
    info_count_interval: int = DEFAULT_INFO_COUNT_INTERVAL
    compressed_suffix: str = DEFAULT_COMPRESSED_SUFFIX
    gcp_project: str | None = None
    log_file: str | None = None
    log_level: str = 'INFO'

    def __post_init__(self):
        if not self.dest_collection:
            raise ValueError('A destination collection is required')
        if self.num_replicas < 1:
            raise ValueError(
                f'The number of replicas must be at least 1, got {self.num_replicas}'
            )
        if self.info_count_interval < 1:
            raise ValueError(
                f'The info count interval must be at least 1, got {self.info_count_interval}'
            )

    @classmethod
    def from_cli_args(cls, args) -> 'AuditConfig':
        """
        Factory method from CLI arguments. Values not given on the command
        line are taken from the [gridion_audit] section of the config.
        """
        dest_collection = args.dest_collection or config_retrieve(
            ['gridion_audit', 'dest_collection'], default=None
        )
        num_replicas = args.num_replicas
        if num_replicas is None:
            num_replicas = config_retrieve(
                ['gridion_audit', 'num_replicas'], default=DEFAULT_NUM_REPLICAS
            )
        gcp_project = args.gcp_project or config_retrieve(
            ['gridion_audit', 'gcp_project'], default=None
        )

        return cls(
            gridion_name=args.gridion_name,
            source_dir=os.path.abspath(args.source_dir),
            output_dir=os.path.abspath(args.output_dir) if args.output_dir else None,
            dest_collection=dest_collection,
            num_replicas=int(num_replicas),
            gcp_project=gcp_project,
            log_file=args.log_file,
            log_level='DEBUG' if args.debug else 'INFO',
        )
