"""
Single-writer wrapper for incident stores.

Every IncidentStore append is read-modify-write from the caller's
perspective, so two overlapping appends can lose one record. Wrapping the
store here removes that race within one process. It does not coordinate
multiple processes sharing one file.
"""

import threading

from incidents.base import IncidentStore
from incidents.types import IncidentCollection, IncidentRecord


class SerializedIncidentStore(IncidentStore):
    """Serializes load() and append() of the wrapped store behind one lock."""

    def __init__(self, inner: IncidentStore):
        self.inner = inner
        self._lock = threading.Lock()

    def load(self) -> IncidentCollection:
        with self._lock:
            return self.inner.load()

    def append(self, record: IncidentRecord) -> None:
        with self._lock:
            self.inner.append(record)
