import os
import tempfile
import unittest
import unittest.mock

from gridion_audit.data_access import RemoteRepositoryAccess
from gridion_audit.models import (
    ChecksumComputeError,
    ChecksumMetadataInvalid,
    ChecksumMismatch,
    InsufficientReplicas,
    Manifest,
    ManifestEntryMissing,
    ObjectMissing,
    RemoteRepositoryError,
    RunIdentity,
    TagMismatch,
    TagMissing,
)
from gridion_audit.services import (
    MD5ChecksumCalculator,
    PathReconciler,
    RemoteObjectValidator,
)
from test.data.audit_fixtures.run_fixtures import (
    DEST_COLLECTION,
    DEVICE_ID,
    EXPERIMENT_NAME,
    F5_TAR_PATH,
    GRIDION_NAME,
    RUN_COLLECTION,
    SEQ_CFG_CONTENT,
    FakeRemoteObject,
    FakeStorage,
    md5,
    run_tags,
    write_file,
    write_manifest,
)


class TestRemoteObjectValidator(unittest.TestCase):  # pylint: disable=too-many-public-methods
    """Test the checks of individual files and objects"""

    def setUp(self):
        self.tmpdir = tempfile.TemporaryDirectory()  # pylint: disable=consider-using-with
        self.source_dir = os.path.join(self.tmpdir.name, EXPERIMENT_NAME, DEVICE_ID)
        self.cfg_path = write_file(
            os.path.join(self.source_dir, 'configuration.cfg'), SEQ_CFG_CONTENT
        )
        self.cfg_object_path = f'{RUN_COLLECTION}/configuration.cfg'

        self.identity = RunIdentity(GRIDION_NAME, EXPERIMENT_NAME, DEVICE_ID)
        self.storage = FakeStorage()
        self.audit_logs = unittest.mock.MagicMock()
        self.validator = RemoteObjectValidator(
            RemoteRepositoryAccess(DEST_COLLECTION, self.storage),
            self.identity,
            MD5ChecksumCalculator(),
            PathReconciler(self.source_dir, self.identity),
            num_replicas=2,
            audit_logs=self.audit_logs,
        )

    def tearDown(self):
        self.tmpdir.cleanup()

    def store_cfg(self, **kwargs) -> FakeRemoteObject:
        """Store the configuration file, correctly unless overridden"""
        kwargs.setdefault('checksum', md5(SEQ_CFG_CONTENT))
        return self.storage.add(FakeRemoteObject(self.cfg_object_path, **kwargs))

    # ===== ANCILLARY FILES =====
    def test_ancillary_file_ok(self):
        """A stored file with matching checksum and enough replicas passes"""
        self.store_cfg()
        result = self.validator.validate_ancillary_file(self.cfg_path)

        self.assertTrue(result.present)
        self.assertTrue(result.ok)
        self.assertEqual(result.remote_path, self.cfg_object_path)
        self.assertListEqual(self.storage.requested, [self.cfg_object_path])

    def test_ancillary_file_missing(self):
        """A file not in the run collection is missing, and not present"""
        result = self.validator.validate_ancillary_file(self.cfg_path)

        self.assertFalse(result.present)
        self.assertEqual(len(result.failures), 1)
        self.assertIsInstance(result.failures[0], ObjectMissing)
        self.assertIn(self.cfg_path, str(result.failures[0]))

    def test_ancillary_file_invalid_checksum_metadata(self):
        """The repository's own checksum validation must pass"""
        self.store_cfg(checksum_valid=False)
        result = self.validator.validate_ancillary_file(self.cfg_path)

        self.assertTrue(result.present)
        self.assertEqual(len(result.failures), 1)
        self.assertIsInstance(result.failures[0], ChecksumMetadataInvalid)

    def test_ancillary_file_checksum_mismatch_despite_valid_metadata(self):
        """The local checksum is compared even when the repository says it is valid"""
        self.store_cfg(checksum='0' * 32, checksum_valid=True)
        result = self.validator.validate_ancillary_file(self.cfg_path)

        self.assertTrue(result.present)
        self.assertEqual(len(result.failures), 1)
        failure = result.failures[0]
        self.assertIsInstance(failure, ChecksumMismatch)
        self.assertIn(md5(SEQ_CFG_CONTENT), str(failure))
        self.assertIn('0' * 32, str(failure))

    def test_ancillary_file_replicas_below_threshold(self):
        """One replica fewer than required is an error"""
        self.store_cfg(replicas=1)
        result = self.validator.validate_ancillary_file(self.cfg_path)

        self.assertTrue(result.present)
        self.assertEqual(len(result.failures), 1)
        self.assertIsInstance(result.failures[0], InsufficientReplicas)

    def test_ancillary_file_replicas_at_threshold(self):
        """Exactly the required number of replicas passes"""
        self.store_cfg(replicas=2)
        self.assertTrue(self.validator.validate_ancillary_file(self.cfg_path).ok)

    def test_ancillary_file_unreadable(self):
        """A local file that cannot be read is an error, not an abort"""
        missing_path = os.path.join(self.source_dir, 'sequencing_summary_0.txt')
        self.storage.add(
            FakeRemoteObject(
                f'{RUN_COLLECTION}/sequencing_summary_0.txt', checksum='abc'
            )
        )
        result = self.validator.validate_ancillary_file(missing_path)

        self.assertTrue(result.present)
        self.assertIsInstance(result.failures[0], ChecksumComputeError)

    def test_ancillary_file_repository_error(self):
        """A failed repository query is an error for that file only"""
        obj = self.store_cfg()
        obj.exists = unittest.mock.MagicMock(
            side_effect=RemoteRepositoryError('timed out')
        )
        result = self.validator.validate_ancillary_file(self.cfg_path)

        self.assertFalse(result.present)
        self.assertIsInstance(result.failures[0], RemoteRepositoryError)

    # ===== TAR FILES =====
    def test_container_file_ok(self):
        """A stored tar file with both run tags passes"""
        self.storage.add(FakeRemoteObject(F5_TAR_PATH, tags=run_tags()))
        result = self.validator.validate_container_file(F5_TAR_PATH)

        self.assertTrue(result.present)
        self.assertTrue(result.ok)
        self.assertListEqual(self.storage.requested, [F5_TAR_PATH])

    def test_container_file_missing(self):
        """A missing tar file is one error; its tags are not checked"""
        result = self.validator.validate_container_file(F5_TAR_PATH)

        self.assertFalse(result.present)
        self.assertEqual(len(result.failures), 1)
        self.assertIsInstance(result.failures[0], ObjectMissing)

    def test_container_file_missing_device_id(self):
        """A missing device ID tag is exactly one error"""
        self.storage.add(
            FakeRemoteObject(
                F5_TAR_PATH, tags={'experiment_name': [EXPERIMENT_NAME]}
            )
        )
        result = self.validator.validate_container_file(F5_TAR_PATH)

        self.assertTrue(result.present)
        self.assertEqual(len(result.failures), 1)
        self.assertIsInstance(result.failures[0], TagMissing)
        self.assertIn('device_id', str(result.failures[0]))

    def test_container_file_both_tags_checked(self):
        """A failed first tag does not stop the second being checked"""
        self.storage.add(
            FakeRemoteObject(
                F5_TAR_PATH,
                tags={'experiment_name': ['another_expt'], 'other': ['x']},
            )
        )
        result = self.validator.validate_container_file(F5_TAR_PATH)

        self.assertTrue(result.present)
        self.assertEqual(len(result.failures), 2)
        self.assertIsInstance(result.failures[0], TagMismatch)
        self.assertIsInstance(result.failures[1], TagMissing)

    def test_container_file_multivalued_tag(self):
        """The expected value may be one of several for a tag key"""
        self.storage.add(
            FakeRemoteObject(
                F5_TAR_PATH,
                tags={
                    'experiment_name': ['old_expt', EXPERIMENT_NAME],
                    'device_id': [DEVICE_ID],
                },
            )
        )
        self.assertTrue(self.validator.validate_container_file(F5_TAR_PATH).ok)

    # ===== MANIFEST MEMBERSHIP =====
    def test_membership_found(self):
        """A local file recorded in a manifest is present in its tar file"""
        content = b'@r0\nACGT\n+\n!!!!\n'
        local_path = write_file(os.path.join(self.source_dir, 'f.fastq'), content)
        item_path = f'{EXPERIMENT_NAME}/{DEVICE_ID}/f.fastq.bz2'
        manifest = Manifest.from_file(
            write_manifest(
                os.path.join(self.tmpdir.name, 'fastq_manifest.txt'),
                [(F5_TAR_PATH, item_path, md5(content))],
            )
        )
        result = self.validator.validate_manifest_membership(local_path, [manifest])

        self.assertTrue(result.present)
        self.assertTrue(result.ok)
        self.assertEqual(result.remote_path, F5_TAR_PATH)

    def test_membership_missing(self):
        """A local file in no manifest is missing"""
        local_path = write_file(os.path.join(self.source_dir, 'f.fastq'), b'@r0\n')
        result = self.validator.validate_manifest_membership(local_path, [])

        self.assertFalse(result.present)
        self.assertEqual(len(result.failures), 1)
        self.assertIsInstance(result.failures[0], ManifestEntryMissing)
        self.assertIn(f'{EXPERIMENT_NAME}/{DEVICE_ID}/f.fastq', str(result.failures[0]))

    def test_membership_unreadable(self):
        """A local file that cannot be checksummed is an error"""
        result = self.validator.validate_manifest_membership(
            os.path.join(self.source_dir, 'gone.fastq'), []
        )
        self.assertFalse(result.present)
        self.assertIsInstance(result.failures[0], ChecksumComputeError)
