"""Presentation helpers for history records.

Functions:
    format_age(timestamp, now) -> str
        Coarse relative age label ('3 hours ago').
    display_url(base_url, short_url) -> str
        Public link of a shortened URL.

Example:
    >>> format_age(0, 90_000)
    '1 minute ago'
    >>> display_url('https://sho.rt/', 'abc123')
    'https://sho.rt/abc123'
"""

from shortclient.constants import Duration


def _label(count: int, unit: str) -> str:
    return f'{count} {unit}{"" if count == 1 else "s"} ago'


def format_age(timestamp: int, now: int) -> str:
    """Map a millisecond timestamp to a relative age label.

    The largest non-zero unit wins (days, then hours, then minutes). Counts are
    floored, zero or negative elapsed time reads as '0 minutes ago'.

    Args:
        timestamp (int): Creation time in milliseconds since epoch.
        now (int): Reference time in milliseconds since epoch.

    Returns:
        str: e.g. '1 day ago', '5 hours ago', '0 minutes ago'.
    """
    elapsed = max(now - timestamp, 0)

    days = elapsed // Duration.DAY_MS
    if days > 0:
        return _label(days, 'day')

    hours = elapsed // Duration.HOUR_MS
    if hours > 0:
        return _label(hours, 'hour')

    return _label(elapsed // Duration.MINUTE_MS, 'minute')


def display_url(base_url: str, short_url: str) -> str:
    """Return the public link `{base_url}/{short_url}`."""
    return f'{base_url.rstrip("/")}/{short_url}'
