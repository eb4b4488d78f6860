"""Time helpers shared by the history cache and its renderers.

Functions:
    now_ms() -> int
        Current wall-clock time in milliseconds since the Unix epoch
    from_ms(timestamp: int) -> datetime
        Convert a millisecond timestamp into an aware UTC datetime

Example:
    >>> from shortclient.utils.helpers import now_ms, from_ms
    >>> from_ms(0)
    datetime.datetime(1970, 1, 1, 0, 0, tzinfo=datetime.timezone.utc)
"""

from datetime import datetime, UTC


def now_ms() -> int:
    """Return the current time in milliseconds since the Unix epoch.

    This is the default Clock of HistoryStore and ShortenerController.

    Example:
        >>> now_ms()
        1760745600000
    """
    return int(datetime.now(UTC).timestamp() * 1000)


def from_ms(timestamp: int) -> datetime:
    """Convert a millisecond timestamp into an aware UTC datetime."""
    return datetime.fromtimestamp(timestamp / 1000, tz=UTC)
