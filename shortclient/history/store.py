"""Bounded, deduplicated, self-expiring history of shortened URLs

HistoryStore exclusively owns the local history collection and its durable
representation (one slot in a HistoryStorageBaseDAO).

Invariants of the collection (most recent first):
    1. No two records share an `original_url`.
    2. At most `capacity` records (5 by default).
    3. Insertion order, never re-sorted by timestamp.
    4. After load/prune, every record is younger than `retention_ms` (7 days by default).

Every state-changing operation is persisted right away. Storage failures are
logged and swallowed, so a broken disk or an unreachable Redis degrades to an
in-memory-only cache.

Example:
    >>> from shortclient.dao import MemoryStorageDAO
    >>> from shortclient.models import ShortenedRecord

    >>> store = HistoryStore(MemoryStorageDAO(), clock=lambda: 1_000)
    >>> store.load()
    ()
    >>> store.insert(ShortenedRecord('https://example.com', 'abc123', 1_000))
    (ShortenedRecord(original_url='https://example.com', short_url='abc123', timestamp=1000),)
    >>> store.storage.read()
    '[{"original_url": "https://example.com", "short_url": "abc123", "timestamp": 1000}]'
    >>> store.clear()
    ()
"""

import logging

from beartype import beartype

from shortclient.constants import History
from shortclient.dao.base import HistoryStorageBaseDAO
from shortclient.exceptions import PersistenceFailure
from shortclient.history import codec
from shortclient.models import HistoryCollection, ShortenedRecord
from shortclient.types import Clock
from shortclient.utils.helpers import now_ms


logger = logging.getLogger(__name__)


class HistoryStore:
    """Owner of the local history collection

    Attributes:
        storage (HistoryStorageBaseDAO):
            Durable slot backing the collection.
        clock (Clock):
            Returns the current time in milliseconds since epoch.
        capacity (int):
            Maximum number of records kept.
        retention_ms (int):
            Records at least this old are dropped on load/prune.

    Methods:
        load() -> HistoryCollection:
            Read, normalize and prune the stored collection. Never raises.
        prune(now: int | None = None) -> HistoryCollection:
            Drop expired records from the current collection.
        insert(record: ShortenedRecord, current: HistoryCollection | None = None) -> HistoryCollection:
            Prepend a record unless its original URL is already present.
        clear() -> HistoryCollection:
            Empty the collection and delete the durable slot.
    """

    def __init__(
        self,
        storage: HistoryStorageBaseDAO,
        clock: Clock = now_ms,
        capacity: int = History.CAPACITY,
        retention_ms: int = History.RETENTION_MS,
    ):
        if capacity < 1:
            raise ValueError(f'Capacity must be a positive integer (given value: {capacity}).')
        if retention_ms <= 0:
            raise ValueError(f'Retention must be a positive duration (given value: {retention_ms}).')

        self.storage = storage
        self.clock = clock
        self.capacity = capacity
        self.retention_ms = retention_ms
        self._records: HistoryCollection = ()

    @property
    def records(self) -> HistoryCollection:
        return self._records

    def load(self) -> HistoryCollection:
        """Load the collection from durable storage

        Absent, corrupt or unreadable slots load as an empty collection.
        The decoded collection is normalized (first occurrence of each original
        URL wins, extra records beyond capacity are dropped) and pruned. When
        that changes anything, the result is written back right away.

        Returns:
            HistoryCollection: The loaded collection, also available as `records`.
        """
        stored = self._read()
        loaded = self._expire(self._normalize(stored), self.clock())

        if loaded != stored:
            logger.info('Dropped stale history entries on load.', extra={'stored': len(stored), 'kept': len(loaded)})
            self._persist(loaded)

        self._records = loaded
        logger.debug('Loaded history.', extra={'slot': self.storage.slot, 'records': len(loaded)})
        return loaded

    def prune(self, now: int | None = None) -> HistoryCollection:
        """Drop records older than the retention window

        Args:
            now (int | None):
                Reference time in milliseconds. Defaults to `clock()`.

        Returns:
            HistoryCollection: The pruned collection. Persisted only if something was dropped.
        """
        now = self.clock() if now is None else now
        pruned = self._expire(self._records, now)

        if len(pruned) != len(self._records):
            logger.info('Pruned expired history entries.', extra={'dropped': len(self._records) - len(pruned)})
            self._records = pruned
            self._persist(pruned)

        return self._records

    @beartype
    def insert(self, record: ShortenedRecord, current: HistoryCollection | None = None) -> HistoryCollection:
        """Insert a record at the head of the collection

        Rules:
            1. If `current` already holds `record.original_url`, it is returned
               unchanged (no reordering, no timestamp refresh, nothing persisted).
            2. Otherwise the record is prepended.
            3. If that exceeds capacity, exactly one record (the last) is evicted.

        Args:
            record (ShortenedRecord):
                The new conversion.
            current (HistoryCollection | None):
                Collection to insert into. Defaults to `records`.

        Returns:
            HistoryCollection: The resulting collection, also available as `records`.
        """
        current = self._records if current is None else current

        if any(existing.original_url == record.original_url for existing in current):
            logger.debug('Skipped duplicate history entry.', extra={'originalUrl': record.original_url})
            return current

        updated = (record, *current)
        if len(updated) > self.capacity:
            evicted = updated[-1]
            updated = updated[:-1]
            logger.debug('Evicted oldest history entry.', extra={'originalUrl': evicted.original_url})

        self._records = updated
        self._persist(updated)
        return updated

    def clear(self) -> HistoryCollection:
        """Empty the collection and erase the durable slot"""
        self._records = ()
        self._persist(())
        return self._records

    def _read(self) -> HistoryCollection:
        try:
            payload = self.storage.read()
            return () if payload is None else codec.decode(payload)
        except PersistenceFailure as e:
            logger.warning('Failed to read history, starting empty.', extra={'slot': self.storage.slot, 'error': str(e)})
            return ()

    def _persist(self, collection: HistoryCollection) -> None:
        try:
            if collection:
                self.storage.write(codec.encode(collection))
            else:
                self.storage.delete()
        except PersistenceFailure as e:
            logger.warning('Failed to persist history.', extra={'slot': self.storage.slot, 'error': str(e)})

    def _normalize(self, collection: HistoryCollection) -> HistoryCollection:
        seen = set()
        unique = []
        for record in collection:
            if record.original_url in seen:
                continue
            seen.add(record.original_url)
            unique.append(record)
        return tuple(unique[: self.capacity])

    def _expire(self, collection: HistoryCollection, now: int) -> HistoryCollection:
        return tuple(record for record in collection if now - record.timestamp < self.retention_ms)
