import collections
import threading


class LRUCache:
    """A bounded mapping that evicts the least recently used entry

    All operations take a single lock, so one instance may be shared by any
    number of threads. Entries are never expired in the background; they
    leave the cache only when evicted to make room or explicitly removed.
    """

    def __init__(self, max_entries):
        if not isinstance(max_entries, int) or max_entries < 1:
            raise ValueError(
                "max_entries must be a positive integer, got {!r}".format(
                    max_entries
                ))
        self.max_entries = max_entries
        self._lock = threading.Lock()
        # Ordered from least to most recently used
        self._entries = collections.OrderedDict()

    def get(self, key, default=None):
        """Returns the value for key, or default if it's not cached

        A hit makes the entry the most recently used one.
        """
        with self._lock:
            try:
                self._entries.move_to_end(key)
            except KeyError:
                return default
            return self._entries[key]

    def add(self, key, value):
        """Inserts or overwrites an entry

        If this pushes the cache over its size, the least recently used
        entry is evicted.
        """
        with self._lock:
            self._entries[key] = value
            self._entries.move_to_end(key)
            if len(self._entries) > self.max_entries:
                self._entries.popitem(last=False)

    def remove(self, key):
        with self._lock:
            self._entries.pop(key, None)

    def __contains__(self, key):
        # Does not count as a use
        with self._lock:
            return key in self._entries

    def __len__(self):
        with self._lock:
            return len(self._entries)
