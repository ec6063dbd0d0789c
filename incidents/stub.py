"""
In-memory incident stores for testing and local runs.

Deterministic, no filesystem access.
"""

from typing import List, Optional

from incidents.base import IncidentStore, StorageWriteError
from incidents.types import IncidentCollection, IncidentRecord


class InMemoryIncidentStore(IncidentStore):
    """
    Incident store holding records in a list.

    load() returns a copy so callers can never edit stored state.
    """

    def __init__(self, records: Optional[List[IncidentRecord]] = None):
        self._records: List[IncidentRecord] = list(records or [])

    def load(self) -> IncidentCollection:
        return list(self._records)

    def append(self, record: IncidentRecord) -> None:
        self._records.append(record)


class FailingIncidentStore(IncidentStore):
    """Store whose appends always fail. Used to exercise error paths."""

    def __init__(self, error: Optional[Exception] = None):
        self.error = error or StorageWriteError("Incident storage unavailable")

    def load(self) -> IncidentCollection:
        return []

    def append(self, record: IncidentRecord) -> None:
        raise self.error
