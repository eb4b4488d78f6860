"""Value objects shared across the client.

Classes:
    ShortenedRecord:
        One past conversion kept in the local history cache.
    Shortened / Failed:
        Outcome of a single shorten request.
    Notification:
        User-facing success/error message (replaces the page toasts).

Example:
    >>> record = ShortenedRecord(
    ...     original_url='https://example.com/article/123',
    ...     short_url='abc123',
    ...     timestamp=1_760_745_600_000,
    ... )
    >>> record.short_url
    'abc123'
    >>> history: HistoryCollection = (record,)
    >>> len(history)
    1
"""

from dataclasses import dataclass
from enum import StrEnum
from typing import TypeAlias


# fmt: off
@dataclass(frozen=True)
class ShortenedRecord:
    original_url: str  # User-submitted URL, deduplication key
    short_url: str     # Opaque token returned by the shortening service
    timestamp: int     # Creation time in milliseconds since epoch
# fmt: on


# Most-recent-first, immutable
HistoryCollection = tuple[ShortenedRecord, ...]


@dataclass(frozen=True)
class Shortened:
    """Successful response from the remote shorten endpoint."""

    original_url: str
    short_url: str


@dataclass(frozen=True)
class Failed:
    """Failed shorten request.

    Attributes:
        reason (str):
            Human readable cause, e.g. 'Failed to shorten URL'.
        status (int | None):
            HTTP status code when the service answered with an error status.
            None for transport and decoding failures.
    """

    reason: str
    status: int | None = None


Outcome: TypeAlias = Shortened | Failed


class NotificationLevel(StrEnum):
    SUCCESS = 'success'
    ERROR = 'error'


@dataclass(frozen=True)
class Notification:
    level: NotificationLevel
    message: str
