"""Abstract base class for history storage data access objects (DAOs).

This class establishes a consistent contract for every durable storage backend
holding the local history cache (e.g. a JSON file, Redis, process memory).

The history lives in a single named slot. The DAO only moves opaque payload
strings in and out of that slot; encoding and the cache invariants belong to
HistoryStore.

Responsibilities:
    - Read, overwrite and delete the history slot.
    - Standardize error handling across storage implementations.

Example:
    Typical usage with a datastore-specific implementation:

        >>> from shortclient.dao import FileStorageDAO

        >>> dao = FileStorageDAO(data_dir='/tmp/shortclient')
        >>> dao.read() is None
        True
        >>> dao.write('[]')
        <FileStorageDAO>
        >>> dao.read()
        '[]'
        >>> dao.delete()
        <FileStorageDAO>
"""

from abc import ABC, abstractmethod

from shortclient.constants import History


class HistoryStorageBaseDAO(ABC):
    """Interface for history storage data access objects (DAOs).

    Attributes:
        slot (str):
            Name of the slot holding the encoded history collection.

    Methods:
        read(**kwargs) -> str | None:
            Return the stored payload, or None if the slot is empty.
            Raises DataStoreError on connection or read failure.

        write(payload: str, **kwargs) -> HistoryStorageBaseDAO:
            Overwrite the slot with a new payload.
            Raises DataStoreError on connection or write failure.

        delete(**kwargs) -> HistoryStorageBaseDAO:
            Remove the slot. Deleting an empty slot is not an error.
            Raises DataStoreError on connection or write failure.

    Subclassing:
        Datastore-specific implementations (e.g. FileStorageDAO or
        RedisStorageDAO) must extend this class and implement all
        abstract methods.
    """

    def __init__(self, slot: str = History.SLOT):
        if not isinstance(slot, str) or not slot:
            raise ValueError(f'Slot must be a non-empty string (given value: {slot!r}).')

        self.slot = slot

    @abstractmethod
    def read(self, **kwargs) -> str | None:
        """Read the encoded history collection from the slot.

        Returns:
            str | None: The stored payload, None if nothing was stored yet.

        Raises:
            DataStoreError:
                If there is an error in the data store.
        """
        pass

    @abstractmethod
    def write(self, payload: str, **kwargs) -> 'HistoryStorageBaseDAO':
        """Overwrite the slot with an encoded history collection.

        Args:
            payload (str):
                Encoded history collection.

        Returns:
            HistoryStorageBaseDAO: self (for method chaining)

        Raises:
            DataStoreError:
                If there is an error in the data store.
        """
        pass

    @abstractmethod
    def delete(self, **kwargs) -> 'HistoryStorageBaseDAO':
        """Delete the slot.

        Returns:
            HistoryStorageBaseDAO: self (for method chaining)

        Raises:
            DataStoreError:
                If there is an error in the data store.
        """
        pass

    def __repr__(self) -> str:
        return f'<{type(self).__name__}>'
