"""
Time-bounded cache of last-modified timestamps, keyed by storage path
"""
import logging
import threading
import time
from typing import Any, Callable, Dict, Mapping, Optional, Tuple

from . import schemas
from .backends.base import Backend

logger = logging.getLogger("resizeio")


def extract_timestamp(fields: Mapping[str, Any]) -> Optional[int]:
    """
    Pull a timestamp out of backend metadata.  Both the flat shape
    {"timestamp": ts} and the legacy {"info": {"filetime": ts}} are accepted.
    """
    value = None
    if "timestamp" in fields:
        value = fields["timestamp"]
    elif isinstance(fields.get("info"), Mapping):
        value = fields["info"].get("filetime")
    if value is None or value == "":
        return None
    try:
        return int(value)
    except (TypeError, ValueError):
        logger.warning("unusable timestamp %r", value)
        return None


class MetadataCache:
    def __init__(self, ttl: int, clock: Callable[[], float] = time.monotonic):
        self.ttl = ttl
        self.clock = clock
        self._lock = threading.Lock()
        self._entries: Dict[str, Tuple[int, float]] = {}

    def get(self, key: str) -> Optional[int]:
        with self._lock:
            entry = self._entries.get(key)
            if entry is None:
                return None
            value, expires_at = entry
            if expires_at <= self.clock():
                del self._entries[key]
                return None
            return value

    def put(self, key: str, value: int, ttl: Optional[int] = None):
        ttl = self.ttl if ttl is None else ttl
        with self._lock:
            self._entries[key] = (value, self.clock() + ttl)

    def forget(self, key: str):
        with self._lock:
            self._entries.pop(key, None)

    def fetch(self, backend: Backend, path: str) -> Tuple[schemas.Metadata, Optional[int]]:
        """Query the backend directly, refreshing the entry when a timestamp comes back"""
        metadata = backend.get_metadata(path)
        if not metadata.found:
            return metadata, None
        value = extract_timestamp(metadata.fields)
        if value is not None:
            self.put(path, value)
        return metadata, value

    def timestamp(self, backend: Backend, path: str, refresh: bool = False) -> Optional[int]:
        if not refresh:
            value = self.get(path)
            if value is not None:
                logger.debug("timestamp cache hit for %s", path)
                return value
        _, value = self.fetch(backend, path)
        return value
