"""
Abstract incident store interface.

The handler depends only on this interface, not on specific backends.

Key properties:
- Append-only: records are never edited or deleted
- Insertion order is arrival order, preserved across load/append cycles
- No cache: every operation materializes the collection from storage
- Failures raise; they are never swallowed or turned into an empty result
"""

from abc import ABC, abstractmethod

from incidents.types import IncidentCollection, IncidentRecord


class StorageReadError(Exception):
    """Persisted incident state exists but cannot be read or parsed."""
    pass


class StorageWriteError(Exception):
    """An append could not be durably committed."""
    pass


class IncidentStore(ABC):
    """
    Abstract incident storage boundary.

    Concurrent appends are NOT serialized by default: two overlapping
    appends may each read the same prior state and the later write wins.
    Wrap a store in SerializedIncidentStore to get a single writer.
    """

    @abstractmethod
    def load(self) -> IncidentCollection:
        """
        Return the persisted collection in insertion order.

        Returns:
            Empty list if nothing has been persisted yet

        Raises:
            StorageReadError: Persisted state is unreadable or malformed
        """
        raise NotImplementedError

    @abstractmethod
    def append(self, record: IncidentRecord) -> None:
        """
        Append a record to the end of the collection.

        Either the new collection is fully visible to the next load() or
        the old one is; never a partial write.

        Raises:
            StorageReadError: Current state could not be loaded
            StorageWriteError: New state could not be committed
        """
        raise NotImplementedError
