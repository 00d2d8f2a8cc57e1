import os
import tempfile
import unittest

from gridion_audit.models import Manifest, RunIdentity
from gridion_audit.services import PathReconciler
from test.data.audit_fixtures.run_fixtures import write_manifest

TAR_PATH = 'gs://archive/gridion/GXB01/exp1/dev1/dev1_fastq_0.tar'
OTHER_TAR_PATH = 'gs://archive/gridion/GXB01/exp1/dev1/dev1_fastq_1.tar'


class TestPathReconciler(unittest.TestCase):
    """Test mapping local files to manifest items"""

    def setUp(self):
        self.tmpdir = tempfile.TemporaryDirectory()  # pylint: disable=consider-using-with
        self.source_dir = os.path.join(self.tmpdir.name, 'exp1', 'dev1')
        self.local_path = os.path.join(self.source_dir, 'sub', 'file.fastq')
        self.identity = RunIdentity('GXB01', 'exp1', 'dev1')
        self.reconciler = PathReconciler(self.source_dir, self.identity)

    def tearDown(self):
        self.tmpdir.cleanup()

    def manifest(self, name: str, rows: list[tuple[str, str, str]]) -> Manifest:
        """Write and load a manifest"""
        return Manifest.from_file(
            write_manifest(os.path.join(self.tmpdir.name, name), rows)
        )

    def test_item_paths(self):
        """Short form is relative to the device directory, long form adds the run"""
        self.assertEqual(
            self.reconciler.short_item_path(self.local_path), 'sub/file.fastq'
        )
        self.assertEqual(
            self.reconciler.long_item_path(self.local_path),
            'exp1/dev1/sub/file.fastq',
        )

    def test_candidate_order(self):
        """Long form before short form, compressed before uncompressed"""
        self.assertListEqual(
            self.reconciler.candidate_paths(self.local_path),
            [
                'exp1/dev1/sub/file.fastq.bz2',
                'exp1/dev1/sub/file.fastq',
                'sub/file.fastq.bz2',
                'sub/file.fastq',
            ],
        )

    def test_custom_compressed_suffix(self):
        """The compressed suffix is configurable"""
        reconciler = PathReconciler(
            self.source_dir, self.identity, compressed_suffix='.gz'
        )
        self.assertIn(
            'sub/file.fastq.gz', reconciler.candidate_paths(self.local_path)
        )

    def test_long_form_compressed(self):
        """A compressed item recorded in the long form is found"""
        manifest = self.manifest(
            'a_manifest.txt', [(TAR_PATH, 'exp1/dev1/sub/file.fastq.bz2', 'abc123')]
        )
        match = self.reconciler.find_in_manifests(
            self.local_path, 'abc123', [manifest]
        )
        self.assertIsNotNone(match)
        self.assertEqual(match.item_path, 'exp1/dev1/sub/file.fastq.bz2')
        self.assertEqual(match.entry.container_path, TAR_PATH)
        self.assertIs(match.manifest, manifest)

    def test_short_form_fallback(self):
        """A compressed item recorded in the short form is found"""
        manifest = self.manifest(
            'a_manifest.txt', [(TAR_PATH, 'sub/file.fastq.bz2', 'abc123')]
        )
        match = self.reconciler.find_in_manifests(
            self.local_path, 'abc123', [manifest]
        )
        self.assertEqual(match.item_path, 'sub/file.fastq.bz2')

    def test_uncompressed_item(self):
        """An item that was tarred without compression is found"""
        manifest = self.manifest(
            'a_manifest.txt', [(TAR_PATH, 'sub/file.fastq', 'abc123')]
        )
        match = self.reconciler.find_in_manifests(
            self.local_path, 'abc123', [manifest]
        )
        self.assertEqual(match.item_path, 'sub/file.fastq')

    def test_checksum_mismatch(self):
        """An item with the right path but another checksum is not a match"""
        manifest = self.manifest(
            'a_manifest.txt', [(TAR_PATH, 'exp1/dev1/sub/file.fastq.bz2', 'fff000')]
        )
        self.assertIsNone(
            self.reconciler.find_in_manifests(self.local_path, 'abc123', [manifest])
        )

    def test_no_manifests(self):
        """Nothing is found without manifests"""
        self.assertIsNone(
            self.reconciler.find_in_manifests(self.local_path, 'abc123', [])
        )

    def test_mismatched_long_form_falls_back_to_short_form(self):
        """Candidates are tried until one has a matching checksum"""
        manifest = self.manifest(
            'a_manifest.txt',
            [
                (TAR_PATH, 'exp1/dev1/sub/file.fastq.bz2', 'fff000'),
                (TAR_PATH, 'sub/file.fastq.bz2', 'abc123'),
            ],
        )
        match = self.reconciler.find_in_manifests(
            self.local_path, 'abc123', [manifest]
        )
        self.assertEqual(match.item_path, 'sub/file.fastq.bz2')

    def test_first_manifest_wins(self):
        """
        When the same content is recorded in two manifests, the first manifest
        in the order given is reported, even if a later one has the long form
        """
        first = self.manifest(
            'a_manifest.txt', [(TAR_PATH, 'sub/file.fastq.bz2', 'abc123')]
        )
        second = self.manifest(
            'b_manifest.txt',
            [(OTHER_TAR_PATH, 'exp1/dev1/sub/file.fastq.bz2', 'abc123')],
        )

        match = self.reconciler.find_in_manifests(
            self.local_path, 'abc123', [first, second]
        )
        self.assertIs(match.manifest, first)
        self.assertEqual(match.entry.container_path, TAR_PATH)

        match = self.reconciler.find_in_manifests(
            self.local_path, 'abc123', [second, first]
        )
        self.assertIs(match.manifest, second)
        self.assertEqual(match.entry.container_path, OTHER_TAR_PATH)
