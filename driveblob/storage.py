"""
Name-keyed blob storage on top of Google Drive

Callers store and fetch blobs by a ref, an opaque name they pick so that no
two different blobs ever share one (a content hash, usually). Drive only
knows files by the ID it assigns when the file is created, and happily lets
any number of files share a name. So every operation first resolves the ref
to a file ID: from an in-memory LRU cache if possible, otherwise with a
files.list query on the name.

When a name query matches several files, the first one listed wins. That is
only correct as long as callers keep refs unique; duplicates are logged but
otherwise left alone.

put() replaces an existing file by deleting it and then creating a new one.
The two steps are not atomic: two concurrent puts of the same ref can both
find nothing and both create a file, or leave a stale ID in another
process's cache. With content-derived refs both writers upload the same
bytes and the outcome is harmless.
"""
from logging import getLogger

from django.conf import settings

from .config import DriveConfig
from .drive import APP_DATA_FOLDER, DriveFileNotFound, DriveFiles, name_query
from .exceptions import NotExist, NotSupported, StorageIOError
from .lru import LRUCache

logger = getLogger("driveblob.storage")


class StorageBase:
    """Base class defining the storage interface"""
    def get_params(self):
        """Returns the parameters to initialize this class

        This is essentially used to serialize the instance
        """
        raise NotImplementedError()

    def link_base(self):
        """Returns a base URL that, followed by a ref, links directly to the
        blob

        Raises NotSupported if the backend has no such links.
        """
        raise NotImplementedError()

    def download(self, ref):
        """Returns the contents stored under ref as bytes

        Raises NotExist if there's nothing stored under ref
        """
        raise NotImplementedError()

    def put(self, ref, contents):
        """Stores contents under ref, replacing anything already there

        :param ref: The name to store the blob under
        :param contents: A bytes-like object
        """
        raise NotImplementedError()

    def delete(self, ref):
        """Deletes the blob stored under ref. Deleting a missing ref is not an
        error.
        """
        raise NotImplementedError()


class DriveStorage(StorageBase):
    """Stores blobs as files in the application's Drive data folder

    :param config: A DriveConfig holding the OAuth token
    :param files: The DriveFiles client to use. One is built from the
        config's credentials if not given.
    :param cache_size: Number of ref to file ID mappings to keep. Defaults
        to the DRIVEBLOB_LRU_SIZE setting.
    """

    def __init__(self, config, files=None, cache_size=None):
        self.config = config
        if files is None:
            files = DriveFiles(config.get_credentials())
        self.files = files
        if cache_size is None:
            cache_size = settings.DRIVEBLOB_LRU_SIZE
        # Maps refs to file IDs. Holds no file contents.
        self.cache = LRUCache(cache_size)

    @classmethod
    def from_opts(cls, opts):
        return cls(DriveConfig.from_opts(opts))

    def get_params(self):
        return self.config.get_params()

    def link_base(self):
        # Drive links are keyed by file ID, not by name, so a ref can't
        # simply be appended to a base URL
        raise NotSupported("driveblob.storage.LinkBase",
                           "Drive links need a file ID, not a ref")

    def download(self, ref):
        op = "driveblob.storage.Download"
        try:
            file_id = self._file_id(ref)
        except FileNotFoundError as e:
            raise NotExist(op, e) from e
        except IOError as e:
            raise StorageIOError(op, e) from e

        try:
            return self.files.download(file_id)
        except DriveFileNotFound as e:
            # The file went away behind our back. Forget the ID so the next
            # call looks the name up again.
            self.cache.remove(ref)
            raise StorageIOError(op, e) from e
        except IOError as e:
            raise StorageIOError(op, e) from e

    def put(self, ref, contents):
        op = "driveblob.storage.Put"
        try:
            self._file_id(ref)
        except FileNotFoundError:
            pass
        except IOError as e:
            raise StorageIOError(op, e) from e
        else:
            # Drive allows several files with the same name in a folder, so
            # the old file has to go first to keep one file per ref
            logger.debug("Replacing existing file {!r}".format(ref))
            # A failure here propagates tagged as Delete, the step that failed
            self.delete(ref)

        try:
            self.files.create(
                ref,
                contents,
                parents=(APP_DATA_FOLDER,),
                mime_type="application/octet-stream",
            )
        except IOError as e:
            raise StorageIOError(op, e) from e

    def delete(self, ref):
        op = "driveblob.storage.Delete"
        try:
            file_id = self._file_id(ref)
        except FileNotFoundError:
            # Nothing to delete
            return
        except IOError as e:
            raise StorageIOError(op, e) from e

        try:
            self.files.delete(file_id)
        except DriveFileNotFound as e:
            self.cache.remove(ref)
            raise StorageIOError(op, e) from e
        except IOError as e:
            raise StorageIOError(op, e) from e
        self.cache.remove(ref)

    def _file_id(self, ref):
        """Returns the file ID of the first file found under the given name

        Raises FileNotFoundError if no file has that name. Other failures
        propagate as IOErrors from the Drive client.
        """
        file_id = self.cache.get(ref)
        if file_id is not None:
            return file_id

        found = self.files.list(
            name_query(ref),
            spaces=APP_DATA_FOLDER,
            fields="files(id)",
        )
        if not found:
            raise FileNotFoundError("No file named {!r}".format(ref))
        if len(found) > 1:
            logger.warning("{} files are named {!r}. Using the first "
                           "one".format(len(found), ref))

        file_id = found[0]['id']
        self.cache.add(ref, file_id)
        return file_id


storage_classes = {
    "drive": DriveStorage,
}


def open_storage(kind, opts):
    """Builds a storage instance of the given kind from its option map

    Raises KeyError for an unknown kind and ConfigurationError for bad
    options.
    """
    try:
        cls = storage_classes[kind]
    except KeyError:
        raise KeyError("Unknown storage class {}".format(kind))
    return cls.from_opts(opts)
