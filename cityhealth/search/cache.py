import time
from collections import OrderedDict


class TTLCache:
    """Insertion-ordered cache whose entries expire after ``ttl`` seconds."""

    def __init__(self, ttl: float, max_entries: int, clock=time.monotonic):
        self.ttl = ttl
        self.max_entries = max_entries
        self.clock = clock
        self._entries = OrderedDict()

    def get(self, key):
        entry = self._entries.get(key)
        if entry is None:
            return None
        stored_at, value = entry
        if self.clock() - stored_at < self.ttl:
            return value
        del self._entries[key]
        return None

    def set(self, key, value):
        self._entries.pop(key, None)
        self._entries[key] = (self.clock(), value)
        # Evict oldest insertion first
        while len(self._entries) > self.max_entries:
            self._entries.popitem(last=False)

    def clear(self):
        self._entries.clear()

    def __len__(self):
        return len(self._entries)
