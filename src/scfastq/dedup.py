from typing import Protocol, Set


class KeyFilter(Protocol):
    """Decides whether a record with the given barcode+UMI key is written"""
    def should_keep(self, key: str) -> bool:
        ...


class PassthroughFilter:
    """Keeps every record and remembers nothing"""
    def should_keep(self, key: str) -> bool:
        return True

    def __len__(self):
        return 0


class DedupFilter:
    """Exact-match deduplication on barcode+UMI keys.

    The first record carrying a key is kept and every later record with the
    same key is dropped. Keys are held in a hash set for the whole run:
    lookups and inserts are O(1) amortized, and memory grows with the number
    of distinct molecules, O(distinct keys). Nothing is ever evicted, since
    forgetting a key would let a later duplicate through.
    """

    def __init__(self):
        self._seen: Set[str] = set()

    def should_keep(self, key: str) -> bool:
        if key in self._seen:
            return False
        self._seen.add(key)
        return True

    def __len__(self):
        return len(self._seen)

    def __contains__(self, key: str) -> bool:
        return key in self._seen


def make_filter(enabled: bool) -> KeyFilter:
    if enabled:
        return DedupFilter()
    return PassthroughFilter()
