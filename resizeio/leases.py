import contextlib
import threading
from typing import Dict, List


class LeaseRegistry:
    """
    In-process mutual exclusion per derivative path.  Entries are dropped as
    soon as nobody holds or waits on them.
    """

    def __init__(self):
        self._lock = threading.Lock()
        self._leases: Dict[str, List] = {}

    @contextlib.contextmanager
    def hold(self, key: str):
        with self._lock:
            lease = self._leases.setdefault(key, [threading.Lock(), 0])
            lease[1] += 1
        try:
            with lease[0]:
                yield
        finally:
            with self._lock:
                lease[1] -= 1
                if lease[1] == 0:
                    del self._leases[key]

    def __len__(self):
        with self._lock:
            return len(self._leases)
