from django.core.exceptions import ImproperlyConfigured


class StorageError(Exception):
    """Base class for errors raised by storage operations

    Each error records the operation that failed and a kind describing the
    failure. The underlying exception, if any, is chained as __cause__.
    """
    kind = "Other"

    def __init__(self, op, err):
        # A single message argument keeps OSError subclasses from
        # interpreting (op, err) as (errno, strerror)
        super().__init__("{}: {}: {}".format(op, self.kind, err))
        self.op = op
        self.err = err

    def __str__(self):
        return "{}: {}: {}".format(self.op, self.kind, self.err)


class ConfigurationError(StorageError, ImproperlyConfigured):
    """Storage options are missing or malformed. Not retryable."""
    kind = "Configuration"


class NotExist(StorageError, FileNotFoundError):
    """No object is stored under the requested ref"""
    kind = "NotExist"


class StorageIOError(StorageError, IOError):
    """A remote call failed in transport or was rejected by the backend"""
    kind = "IO"


class NotSupported(StorageError):
    kind = "NotSupported"
