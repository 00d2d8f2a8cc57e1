"""The local GridION run directory, with its files classified by category."""

import os

from ..adapters import find_files, list_directory

SEQ_CFG_PATTERN = r'^configuration\.cfg$'
SEQ_SUMMARY_PATTERN = r'^sequencing_summary.*\.txt$'
F5_PATTERN = r'\.fast5$'
FQ_PATTERN = r'\.(fastq|fq)$'
MANIFEST_PATTERN = r'manifest\.txt$'
F5_MANIFEST_PATTERN = r'fast5.*manifest\.txt$'
FQ_MANIFEST_PATTERN = r'fastq.*manifest\.txt$'


class GridIONRun:
    """
    The output of a single GridION run (one flowcell).

    The source directory is the device directory, <experiment_name>/<device_id>,
    containing the configuration, sequencing summaries, fast5 and fastq files.
    The output directory holds the tar manifests written when the run was
    archived; it defaults to the source directory.
    """

    def __init__(
        self,
        gridion_name: str,
        source_dir: str,
        output_dir: str | None = None,
    ):
        self.gridion_name = gridion_name
        self.source_dir = os.path.abspath(source_dir)
        self.output_dir = os.path.abspath(output_dir) if output_dir else None

    @property
    def manifest_dir(self) -> str:
        """Directory searched for tar manifests."""
        return self.output_dir or self.source_dir

    def _list_files(self, path: str, pattern: str) -> list[str]:
        return [p for p in list_directory(path, pattern) if os.path.isfile(p)]

    def list_seq_cfg_files(self) -> list[str]:
        """Run configuration files."""
        return self._list_files(self.source_dir, SEQ_CFG_PATTERN)

    def list_seq_summary_files(self) -> list[str]:
        """Sequencing summary files."""
        return self._list_files(self.source_dir, SEQ_SUMMARY_PATTERN)

    def list_manifest_files(self) -> list[str]:
        """All tar manifests."""
        return self._list_files(self.manifest_dir, MANIFEST_PATTERN)

    def list_f5_manifest_files(self) -> list[str]:
        """Manifests of the tar files holding fast5 files."""
        return self._list_files(self.manifest_dir, F5_MANIFEST_PATTERN)

    def list_fq_manifest_files(self) -> list[str]:
        """Manifests of the tar files holding fastq files."""
        return self._list_files(self.manifest_dir, FQ_MANIFEST_PATTERN)

    def list_f5_files(self) -> list[str]:
        """Raw signal files, anywhere below the source directory."""
        return find_files(self.source_dir, F5_PATTERN)

    def list_fq_files(self) -> list[str]:
        """Basecalled read files, anywhere below the source directory."""
        return find_files(self.source_dir, FQ_PATTERN)
