import pytest

from shortclient.constants import Duration
from shortclient.dao import MemoryStorageDAO
from shortclient.history import HistoryStore
from shortclient.models import ShortenedRecord


# 2026-10-18T12:00:00Z
NOW_MS = 1_792_324_800_000


class FakeClock:
    """Deterministic millisecond clock."""

    def __init__(self, now: int = NOW_MS):
        self.now = now

    def __call__(self) -> int:
        return self.now

    def advance(self, ms: int) -> None:
        self.now += ms


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def storage() -> MemoryStorageDAO:
    return MemoryStorageDAO()


@pytest.fixture
def store(storage, clock) -> HistoryStore:
    return HistoryStore(storage, clock=clock)


@pytest.fixture
def make_record(clock):
    """Build records n minutes older than the fake clock."""

    def _make(n: int, minutes_ago: int = 0) -> ShortenedRecord:
        return ShortenedRecord(
            original_url=f'https://example.com/page/{n}',
            short_url=f'code{n}',
            timestamp=clock.now - minutes_ago * Duration.MINUTE_MS,
        )

    return _make
