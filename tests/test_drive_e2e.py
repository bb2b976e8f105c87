"""
End to end tests against a real Drive account

These are skipped unless DRIVEBLOB_E2E=1 is set along with
DRIVEBLOB_ACCESS_TOKEN and DRIVEBLOB_REFRESH_TOKEN. DRIVEBLOB_EXPIRY
defaults to a timestamp in the past, which forces a token refresh, so
DRIVEBLOB_CLIENT_ID and DRIVEBLOB_CLIENT_SECRET will usually be needed too.

Every file created is named test-file-* and removed afterwards.
"""
import os
import time
import unittest

from driveblob.exceptions import NotExist
from driveblob.storage import open_storage


class TestDriveE2E(unittest.TestCase):

    @classmethod
    def setUpClass(cls):
        if os.environ.get("DRIVEBLOB_E2E") != "1":
            raise unittest.SkipTest(
                "Requires Drive access. Set DRIVEBLOB_E2E=1 to enable")
        access_token = os.environ.get("DRIVEBLOB_ACCESS_TOKEN")
        refresh_token = os.environ.get("DRIVEBLOB_REFRESH_TOKEN")
        if not access_token or not refresh_token:
            raise unittest.SkipTest(
                "Set DRIVEBLOB_ACCESS_TOKEN and DRIVEBLOB_REFRESH_TOKEN to "
                "run the end to end tests")

        cls.storage = open_storage("drive", {
            "accessToken": access_token,
            "refreshToken": refresh_token,
            "tokenType": "Bearer",
            "expiry": os.environ.get("DRIVEBLOB_EXPIRY",
                                     "2017-10-12T09:45:38+02:00"),
        })
        cls.file_name = "test-file-{}".format(int(time.time()))
        cls.test_data = "This is test at {}".format(time.ctime()).encode(
            "utf-8")

    @classmethod
    def tearDownClass(cls):
        files = cls.storage.files
        for f in files.list("name contains 'test-file-'",
                            fields="files(id, name)"):
            files.delete(f['id'])
            cls.storage.cache.remove(f['name'])

    def test_put_and_download(self):
        self.storage.put(self.file_name, self.test_data)
        self.assertEqual(self.test_data, self.storage.download(self.file_name))

    def test_put_twice(self):
        name = self.file_name + "-twice"
        self.storage.put(name, b"one")
        self.storage.put(name, b"two")
        self.assertEqual(b"two", self.storage.download(name))

    def test_delete(self):
        name = self.file_name + "-delete"
        self.storage.put(name, self.test_data)
        self.storage.delete(name)
        self.storage.delete(name)
        with self.assertRaises(NotExist):
            self.storage.download(name)
